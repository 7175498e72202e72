from pydantic import BaseModel

class StaffOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str | None = None
    consultation_room_id: int | None = None
    room_name: str | None = None
    room_location: str | None = None
