import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.config import settings
from portal.modules.availability.engine import (
    BookedInterval, CONFLICT_POLICIES, compute_free_slots, weekday_index,
)
from portal.modules.availability.repository import AvailabilityRepository
from portal.modules.availability.schemas import SlotsOut

logger = logging.getLogger(__name__)

class AvailabilityService:
    def __init__(self, s: AsyncSession):
        self.s = s
        self.repo = AvailabilityRepository(s)

    async def list_windows(self, staff_id: int, day_of_week: int):
        return await self.repo.list_windows(staff_id, day_of_week)

    async def list_booked(self, staff_id: int, day: date) -> list[BookedInterval]:
        appts = await self.repo.list_booked(staff_id, day)
        return [BookedInterval(start_time=a.start_time, end_time=a.end_time) for a in appts]

    async def free_slots(self, staff_id: int, day: date) -> SlotsOut:
        dow = weekday_index(day)
        windows = await self.repo.list_windows(staff_id, dow)
        booked = await self.list_booked(staff_id, day)
        slots = compute_free_slots(
            windows,
            booked,
            slot_minutes=settings.SLOT_MINUTES,
            conflict=CONFLICT_POLICIES[settings.SLOT_CONFLICT_POLICY],
            dedupe=settings.DEDUPE_SLOTS,
        )
        logger.debug(f"staff={staff_id} date={day} windows={len(windows)} booked={len(booked)} free={len(slots)}")
        return SlotsOut(staff_id=staff_id, date=day, day_of_week=dow, slot_minutes=settings.SLOT_MINUTES, slots=slots)
