from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Boolean, ForeignKey
from portal.core.base import Base, TimestampedMixin

class ConsultationRoom(Base, TimestampedMixin):
    name: Mapped[str] = mapped_column(String(120))
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)

# Counseling staff (psychologists) students can book with
class Staff(Base, TimestampedMixin):
    first_name: Mapped[str] = mapped_column(String(120))
    last_name: Mapped[str] = mapped_column(String(120))
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    consultation_room_id: Mapped[int | None] = mapped_column(ForeignKey("consultationroom.id"), nullable=True)
