from datetime import date, time
from pydantic import BaseModel, Field

class ScheduleWindowOut(BaseModel):
    id: int
    staff_id: int
    day_of_week: int = Field(ge=0, le=6)
    start_time: time
    end_time: time
    available: bool
    class Config: from_attributes = True

class BookedIntervalOut(BaseModel):
    start_time: time
    end_time: time
    class Config: from_attributes = True

class SlotsOut(BaseModel):
    staff_id: int
    date: date
    day_of_week: int
    slot_minutes: int
    slots: list[str]
