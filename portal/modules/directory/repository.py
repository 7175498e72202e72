from typing import Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from portal.modules.directory.models import Staff, ConsultationRoom

class StaffRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, staff_id: int) -> Staff | None:
        res = await self.session.execute(select(Staff).where(Staff.id == staff_id))
        return res.scalar_one_or_none()

    async def list_active(self) -> Sequence[tuple[Staff, ConsultationRoom | None]]:
        q = (
            select(Staff, ConsultationRoom)
            .outerjoin(ConsultationRoom, Staff.consultation_room_id == ConsultationRoom.id)
            .where(Staff.active.is_(True))
            .order_by(Staff.first_name.asc())
        )
        res = await self.session.execute(q)
        return res.all()
