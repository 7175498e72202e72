import logging
from datetime import datetime, time, timedelta
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.config import settings
from portal.core.security import StudentSession
from portal.core.upstream import UpstreamClient
from portal.modules.appointments.models import Appointment
from portal.modules.appointments.repository import AppointmentRepository
from portal.modules.appointments.schemas import AppointmentCreate, AppointmentOut
from portal.modules.directory.repository import StaffRepository
from portal.modules.normalizer.results import ErrorKind, Failure
from portal.modules.patients.service import PatientService
from portal.modules.student.schemas import StudentInfo
from portal.modules.student.service import StudentService

logger = logging.getLogger(__name__)

STUDENT_UNAVAILABLE = "No se pudo obtener la información del estudiante"

def to_out(appt: Appointment, staff, room) -> AppointmentOut:
    return AppointmentOut(
        id=appt.id,
        patient_id=appt.patient_id,
        staff_id=appt.staff_id,
        appointment_date=appt.appointment_date,
        start_time=appt.start_time,
        end_time=appt.end_time,
        status=appt.status,
        consultation_type=appt.consultation_type,
        notes=appt.notes,
        created_at=appt.created_at,
        staff_first_name=staff.first_name if staff else None,
        staff_last_name=staff.last_name if staff else None,
        room_name=room.name if room else None,
        room_location=room.location if room else None,
    )

def slot_end(day, start, minutes: int):
    """End of the slot starting at ``start``; None when it would run past midnight."""
    end = datetime.combine(day, start) + timedelta(minutes=minutes)
    if end.date() == day:
        return end.time()
    # a slot ending exactly at midnight is stored as 23:59 to keep end after start
    if end == datetime.combine(day + timedelta(days=1), time(0, 0)):
        return time(23, 59)
    return None

class AppointmentService:
    def __init__(self, session: AsyncSession, upstream: UpstreamClient):
        self.session = session
        self.upstream = upstream
        self.appts = AppointmentRepository(session)
        self.staff = StaffRepository(session)
        self.patients = PatientService(session)

    async def _student(self, student_session: StudentSession) -> tuple[StudentInfo | None, Failure | None]:
        profile = await StudentService(self.upstream).get_profile(student_session)
        if not profile.ok:
            return None, profile
        student = profile.value
        # best-effort profiles may lack the fields a booking cannot do without
        if not student.numero_control or not student.persona:
            logger.warning("Student profile has no control number or name; cannot book")
            return None, Failure(ErrorKind.NO_PAYLOAD, STUDENT_UNAVAILABLE)
        return student, None

    async def create(self, student_session: StudentSession, payload: AppointmentCreate):
        start = payload.start_time.replace(second=0, microsecond=0, tzinfo=None)
        end = slot_end(payload.appointment_date, start, settings.SLOT_MINUTES)
        if end is None:
            return None, "past_midnight"

        student, failure = await self._student(student_session)
        if failure:
            return None, failure

        staff = await self.staff.get(payload.staff_id)
        if staff is None or not staff.active:
            return None, "staff_not_found"

        patient = await self.patients.upsert_from_student(student, payload.staff_id)
        await self.session.commit()

        try:
            appt = await self.appts.create(
                patient_id=patient.id,
                staff_id=payload.staff_id,
                appointment_date=payload.appointment_date,
                start_time=start,
                end_time=end,
                status="pending",
                consultation_type=payload.consultation_type or settings.DEFAULT_CONSULTATION_TYPE,
                notes=payload.notes,
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.info(f"Slot taken: staff={payload.staff_id} {payload.appointment_date} {start}")
            return None, "slot_taken"

        logger.info(f"Appointment {appt.id} booked for patient {patient.id} with staff {payload.staff_id}")
        detail = await self.appts.get_detail(appt.id)
        return to_out(*detail), None

    async def list_mine(self, student_session: StudentSession):
        student, failure = await self._student(student_session)
        if failure:
            return None, failure
        patient = await self.patients.get_by_control(student.numero_control)
        if patient is None:
            return [], None
        rows = await self.appts.list_for_patient(patient.id)
        return [to_out(*row) for row in rows], None

    async def cancel(self, student_session: StudentSession, appointment_id: int):
        student, failure = await self._student(student_session)
        if failure:
            return None, failure
        patient = await self.patients.get_by_control(student.numero_control)
        appt = await self.appts.get(appointment_id)
        if appt is None or patient is None or appt.patient_id != patient.id:
            return None, "not_found"
        appt.status = "cancelled"
        await self.session.commit()
        logger.info(f"Appointment {appt.id} cancelled by patient {patient.id}")
        detail = await self.appts.get_detail(appt.id)
        return to_out(*detail), None
