from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from portal.core.db import get_session
from portal.core.errors import http_error
from portal.core.security import StudentSession, get_student_session
from portal.core.upstream import UpstreamClient, get_upstream
from portal.modules.appointments.schemas import AppointmentCreate, AppointmentOut, BookingOut
from portal.modules.appointments.service import AppointmentService
from portal.modules.availability.schemas import ScheduleWindowOut, BookedIntervalOut, SlotsOut
from portal.modules.availability.service import AvailabilityService
from portal.modules.directory.schemas import StaffOut
from portal.modules.directory.service import DirectoryService
from portal.modules.normalizer.results import Failure

router = APIRouter()

def svc(s: AsyncSession = Depends(get_session), upstream: UpstreamClient = Depends(get_upstream)) -> AppointmentService:
    return AppointmentService(s, upstream)

def availability_svc(s: AsyncSession = Depends(get_session)) -> AvailabilityService:
    return AvailabilityService(s)

def directory_svc(s: AsyncSession = Depends(get_session)) -> DirectoryService:
    return DirectoryService(s)

def _raise_for(err):
    if isinstance(err, Failure): raise http_error(err)
    if err == "staff_not_found": raise HTTPException(404, "El psicólogo seleccionado no está disponible")
    if err == "not_found": raise HTTPException(404, "Cita no encontrada")
    if err == "slot_taken": raise HTTPException(409, "Ya existe una cita en este horario")
    if err == "past_midnight": raise HTTPException(422, "La cita debe terminar el mismo día")
    raise HTTPException(400, str(err))

# Staff & availability (read-only)
@router.get("/staff", response_model=list[StaffOut])
async def list_staff(service: DirectoryService = Depends(directory_svc)):
    return await service.list_available_staff()

@router.get("/staff/{staff_id}/schedule", response_model=list[ScheduleWindowOut])
async def staff_schedule(staff_id: int, day_of_week: int = Query(ge=0, le=6), service: AvailabilityService = Depends(availability_svc)):
    return await service.list_windows(staff_id, day_of_week)

@router.get("/staff/{staff_id}/booked", response_model=list[BookedIntervalOut])
async def staff_booked(staff_id: int, date: date, service: AvailabilityService = Depends(availability_svc)):
    return await service.list_booked(staff_id, date)

@router.get("/staff/{staff_id}/slots", response_model=SlotsOut)
async def staff_slots(staff_id: int, date: date, service: AvailabilityService = Depends(availability_svc)):
    return await service.free_slots(staff_id, date)

# Booking
@router.post("", response_model=BookingOut, status_code=201)
async def create_appointment(payload: AppointmentCreate, session: StudentSession = Depends(get_student_session), service: AppointmentService = Depends(svc)):
    appt, err = await service.create(session, payload)
    if err: _raise_for(err)
    return BookingOut(data=appt, message="Cita agendada exitosamente")

@router.get("/me", response_model=list[AppointmentOut])
async def my_appointments(session: StudentSession = Depends(get_student_session), service: AppointmentService = Depends(svc)):
    appts, err = await service.list_mine(session)
    if err: _raise_for(err)
    return appts

@router.post("/{appointment_id}/cancel", response_model=BookingOut)
async def cancel_appointment(appointment_id: int, session: StudentSession = Depends(get_student_session), service: AppointmentService = Depends(svc)):
    appt, err = await service.cancel(session, appointment_id)
    if err: _raise_for(err)
    return BookingOut(data=appt, message="Cita cancelada exitosamente")
