from datetime import time
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, Time, Boolean, ForeignKey
from portal.core.base import Base, TimestampedMixin

# Recurring weekly window: day_of_week 0=Sun..6=Sat, local wall-clock times
class StaffSchedule(Base, TimestampedMixin):
    staff_id: Mapped[int] = mapped_column(ForeignKey("staff.id"), index=True)
    day_of_week: Mapped[int] = mapped_column(Integer)  # 0..6
    start_time: Mapped[time] = mapped_column(Time)     # e.g., 07:00
    end_time: Mapped[time] = mapped_column(Time)       # e.g., 13:00
    available: Mapped[bool] = mapped_column(Boolean, default=True)
