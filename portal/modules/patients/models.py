from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey
from portal.core.base import Base, TimestampedMixin

class Patient(Base, TimestampedMixin):
    first_name: Mapped[str] = mapped_column(String(120))
    last_name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    # institutional control number, the student's key in the upstream API
    nu_control: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    assigned_psychologist: Mapped[int | None] = mapped_column(ForeignKey("staff.id"), nullable=True)
