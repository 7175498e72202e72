from datetime import date, datetime, time
from pydantic import BaseModel, Field

# ---- Booking ----

class AppointmentCreate(BaseModel):
    staff_id: int = Field(gt=0)
    appointment_date: date
    start_time: time  # "HH:MM"
    consultation_type: str | None = None
    notes: str | None = None

class AppointmentOut(BaseModel):
    id: int
    patient_id: int
    staff_id: int
    appointment_date: date
    start_time: time
    end_time: time
    status: str
    consultation_type: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    staff_first_name: str | None = None
    staff_last_name: str | None = None
    room_name: str | None = None
    room_location: str | None = None

class BookingOut(BaseModel):
    data: AppointmentOut
    message: str
