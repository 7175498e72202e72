from datetime import date
from typing import Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from portal.modules.availability.models import StaffSchedule
from portal.modules.appointments.models import Appointment, BLOCKING_STATUSES

class AvailabilityRepository:
    def __init__(self, s: AsyncSession): self.s = s

    async def list_windows(self, staff_id: int, day_of_week: int) -> Sequence[StaffSchedule]:
        res = await self.s.execute(select(StaffSchedule).where(
            StaffSchedule.staff_id==staff_id,
            StaffSchedule.day_of_week==day_of_week,
            StaffSchedule.available.is_(True),
        ).order_by(StaffSchedule.start_time.asc()))
        return res.scalars().all()

    async def list_booked(self, staff_id: int, day: date) -> Sequence[Appointment]:
        res = await self.s.execute(select(Appointment).where(
            Appointment.staff_id==staff_id,
            Appointment.appointment_date==day,
            Appointment.status.in_(BLOCKING_STATUSES),
        ).order_by(Appointment.start_time.asc()))
        return res.scalars().all()
