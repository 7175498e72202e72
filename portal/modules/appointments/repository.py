from typing import Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from portal.modules.appointments.models import Appointment
from portal.modules.directory.models import Staff, ConsultationRoom

class AppointmentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _detail_query(self):
        return (
            select(Appointment, Staff, ConsultationRoom)
            .join(Staff, Appointment.staff_id == Staff.id)
            .outerjoin(ConsultationRoom, Staff.consultation_room_id == ConsultationRoom.id)
        )

    async def create(self, **data) -> Appointment:
        obj = Appointment(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def get(self, appt_id: int) -> Appointment | None:
        res = await self.session.execute(select(Appointment).where(Appointment.id == appt_id))
        return res.scalar_one_or_none()

    async def get_detail(self, appt_id: int) -> tuple[Appointment, Staff, ConsultationRoom | None] | None:
        res = await self.session.execute(self._detail_query().where(Appointment.id == appt_id))
        return res.one_or_none()

    async def list_for_patient(self, patient_id: int) -> Sequence[tuple[Appointment, Staff, ConsultationRoom | None]]:
        q = self._detail_query().where(Appointment.patient_id == patient_id).order_by(
            Appointment.appointment_date.desc(), Appointment.start_time.desc()
        )
        res = await self.session.execute(q)
        return res.all()
