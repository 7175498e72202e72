"""Tests for the booking flow: patient upsert, slot uniqueness and cancellation."""

from datetime import date, time

import pytest
from sqlalchemy import select

from portal.modules.appointments.schemas import AppointmentCreate
from portal.modules.appointments.service import AppointmentService, slot_end
from portal.modules.availability.engine import BookedInterval, ScheduleWindow, compute_free_slots, interval_overlap
from portal.modules.normalizer.results import ErrorKind, Failure
from portal.modules.patients.models import Patient
from portal.modules.patients.service import split_persona
from conftest import STUDENT_PROFILE

MONDAY = date(2025, 3, 3)


@pytest.fixture
def profile_ok(upstream_api):
    return upstream_api.get("/movil/estudiante").respond(200, json={"status": 200, "data": STUDENT_PROFILE})


def _request(staff_id, start=time(7, 0), **kw):
    return AppointmentCreate(staff_id=staff_id, appointment_date=MONDAY, start_time=start, **kw)


def test_split_persona():
    assert split_persona("ANA MARIA LOPEZ PEREZ") == ("ANA", "MARIA LOPEZ PEREZ")
    assert split_persona("CHER") == ("CHER", "CHER")
    assert split_persona("  ") == ("", "")


@pytest.mark.asyncio
async def test_booking_creates_patient_and_pending_appointment(db, directory, upstream, student_session, profile_ok):
    laura_id, room_name = directory["laura"].id, directory["room"].name
    service = AppointmentService(db, upstream)

    appt, err = await service.create(student_session, _request(laura_id, notes="Primera vez"))

    assert err is None
    assert appt.status == "pending"
    assert appt.start_time == time(7, 0)
    assert appt.end_time == time(8, 0)
    assert appt.consultation_type == "Consulta general"
    assert appt.notes == "Primera vez"
    assert appt.staff_first_name == "Laura"
    assert appt.room_name == room_name

    patient = (await db.execute(select(Patient).where(Patient.nu_control == "20030123"))).scalar_one()
    assert (patient.first_name, patient.last_name) == ("ANA", "MARIA LOPEZ PEREZ")
    assert patient.email == "20030123@celaya.tecnm.mx"
    assert patient.assigned_psychologist == laura_id
    assert profile_ok.called


@pytest.mark.asyncio
async def test_existing_patient_is_refreshed_not_duplicated(db, directory, upstream, student_session, profile_ok):
    laura_id = directory["laura"].id
    db.add(Patient(first_name="Ana", last_name="Vieja", email="old@mail.com", nu_control="20030123"))
    await db.commit()

    service = AppointmentService(db, upstream)
    _, err = await service.create(student_session, _request(laura_id))
    assert err is None

    patients = (await db.execute(select(Patient).where(Patient.nu_control == "20030123"))).scalars().all()
    assert len(patients) == 1
    assert patients[0].last_name == "MARIA LOPEZ PEREZ"
    assert patients[0].email == "20030123@celaya.tecnm.mx"


@pytest.mark.asyncio
async def test_same_slot_cannot_be_booked_twice(db, directory, upstream, student_session, profile_ok):
    laura_id = directory["laura"].id
    service = AppointmentService(db, upstream)

    first, err = await service.create(student_session, _request(laura_id))
    assert err is None
    first_id = first.id

    again, err = await service.create(student_session, _request(laura_id))
    assert again is None
    assert err == "slot_taken"

    cancelled, err = await service.cancel(student_session, first_id)
    assert err is None
    assert cancelled.status == "cancelled"

    rebooked, err = await service.create(student_session, _request(laura_id))
    assert err is None
    assert rebooked.id != first_id


@pytest.mark.asyncio
async def test_inactive_staff_cannot_be_booked(db, directory, upstream, student_session, profile_ok):
    service = AppointmentService(db, upstream)
    appt, err = await service.create(student_session, _request(directory["retired"].id))
    assert appt is None
    assert err == "staff_not_found"


@pytest.mark.asyncio
async def test_expired_upstream_session_is_reported(db, directory, upstream, upstream_api, student_session):
    upstream_api.get("/movil/estudiante").respond(200, json={"status": 401, "message": "Token expirado"})
    service = AppointmentService(db, upstream)
    appt, err = await service.create(student_session, _request(directory["laura"].id))
    assert appt is None
    assert isinstance(err, Failure)
    assert err.reason is ErrorKind.AUTH_EXPIRED


@pytest.mark.asyncio
async def test_profile_without_control_number_cannot_book(db, directory, upstream, upstream_api, student_session):
    upstream_api.get("/movil/estudiante").respond(200, json={"data": {"persona": "ANA", "email": "x"}})
    service = AppointmentService(db, upstream)
    _, err = await service.create(student_session, _request(directory["laura"].id))
    assert isinstance(err, Failure)
    assert err.reason is ErrorKind.NO_PAYLOAD


@pytest.mark.asyncio
async def test_list_mine_newest_first(db, directory, upstream, student_session, profile_ok):
    laura_id, carlos_id = directory["laura"].id, directory["carlos"].id
    service = AppointmentService(db, upstream)

    assert await service.list_mine(student_session) == ([], None)

    await service.create(student_session, _request(laura_id, start=time(7, 0)))
    await service.create(student_session, AppointmentCreate(
        staff_id=carlos_id, appointment_date=date(2025, 3, 10), start_time=time(10, 0), consultation_type="Seguimiento",
    ))

    appts, err = await service.list_mine(student_session)
    assert err is None
    assert [a.appointment_date for a in appts] == [date(2025, 3, 10), MONDAY]
    assert appts[0].consultation_type == "Seguimiento"
    assert appts[0].room_name is None


@pytest.mark.asyncio
async def test_cannot_cancel_someone_elses_appointment(db, directory, upstream, student_session, profile_ok):
    from portal.modules.appointments.models import Appointment

    other = Patient(first_name="Luis", last_name="Gómez", nu_control="19030999")
    db.add(other)
    await db.flush()
    appt = Appointment(
        patient_id=other.id, staff_id=directory["laura"].id, appointment_date=MONDAY,
        start_time=time(12, 0), end_time=time(13, 0), status="pending",
    )
    db.add(appt)
    await db.commit()

    service = AppointmentService(db, upstream)
    result, err = await service.cancel(student_session, appt.id)
    assert result is None
    assert err == "not_found"


def test_slot_end_stays_on_the_same_day():
    assert slot_end(MONDAY, time(7, 0), 60) == time(8, 0)
    assert slot_end(MONDAY, time(23, 0), 60) == time(23, 59)
    assert slot_end(MONDAY, time(23, 30), 60) is None


def test_last_slot_of_the_day_still_blocks_under_overlap():
    end = slot_end(MONDAY, time(23, 0), 60)
    slots = compute_free_slots(
        [ScheduleWindow(start_time="22:00", end_time="23:59")],
        [BookedInterval(start_time=time(23, 0), end_time=end)],
        conflict=interval_overlap,
    )
    assert slots == ["22:00"]


@pytest.mark.asyncio
async def test_booking_that_would_cross_midnight_is_refused(db, directory, upstream, student_session, profile_ok):
    service = AppointmentService(db, upstream)
    appt, err = await service.create(student_session, _request(directory["laura"].id, start=time(23, 30)))
    assert appt is None
    assert err == "past_midnight"
    assert not profile_ok.called
