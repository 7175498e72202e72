from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from portal.modules.patients.models import Patient

class PatientRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **data) -> Patient:
        obj = Patient(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def get_by_control(self, nu_control: str) -> Patient | None:
        res = await self.session.execute(select(Patient).where(Patient.nu_control == nu_control))
        return res.scalar_one_or_none()

    async def update(self, obj: Patient, **data) -> Patient:
        for k, v in data.items():
            if v is not None:
                setattr(obj, k, v)
        await self.session.flush()
        return obj
