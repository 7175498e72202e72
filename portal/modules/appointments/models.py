from datetime import date, time
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Date, Time, ForeignKey, Index, text
from portal.core.base import Base, TimestampedMixin

# statuses that hold a slot; cancelled/completed/no_show free it
BLOCKING_STATUSES = ("pending", "confirmed")

class Appointment(Base, TimestampedMixin):
    patient_id: Mapped[int] = mapped_column(ForeignKey("patient.id"), index=True)
    staff_id: Mapped[int] = mapped_column(ForeignKey("staff.id"), index=True)

    appointment_date: Mapped[date] = mapped_column(Date)
    start_time: Mapped[time] = mapped_column(Time)
    end_time: Mapped[time] = mapped_column(Time)

    status: Mapped[str] = mapped_column(String(24), default="pending")  # pending, confirmed, completed, cancelled, no_show
    consultation_type: Mapped[str | None] = mapped_column(String(120), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        # one live booking per staff/date/start; cancelled rows do not count
        Index(
            "uq_appointment_live_slot",
            "staff_id", "appointment_date", "start_time",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
    )
