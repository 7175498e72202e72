from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=3)

class LoginOut(BaseModel):
    token: str
    user: dict | None = None
    expires_at: datetime | None = None

class SessionOut(BaseModel):
    authenticated: bool
    expires_at: datetime | None = None
    expired: bool = False
