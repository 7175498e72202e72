from sqlalchemy.ext.asyncio import AsyncSession
from portal.modules.directory.repository import StaffRepository
from portal.modules.directory.schemas import StaffOut

class DirectoryService:
    def __init__(self, session: AsyncSession):
        self.repo = StaffRepository(session)

    async def list_available_staff(self) -> list[StaffOut]:
        rows = await self.repo.list_active()
        return [
            StaffOut(
                id=staff.id,
                first_name=staff.first_name,
                last_name=staff.last_name,
                email=staff.email,
                consultation_room_id=staff.consultation_room_id,
                room_name=room.name if room else None,
                room_location=room.location if room else None,
            )
            for staff, room in rows
        ]
