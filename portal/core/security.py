from datetime import datetime, timezone
from fastapi import HTTPException, Request, Response, status
from jose import jwt, JWTError
from pydantic import BaseModel
from portal.core.config import settings

NO_SESSION_MESSAGE = "No hay sesión activa. Por favor, inicia sesión nuevamente."
EXPIRED_SESSION_MESSAGE = "Tu sesión ha expirado. Por favor, inicia sesión nuevamente."

class StudentSession(BaseModel):
    """Upstream bearer token plus whatever its (unverified) claims tell us.

    Created at login, read on every request, destroyed at logout. Services
    receive it explicitly instead of reaching for the cookie themselves.
    """
    token: str
    claims: dict = {}
    expires_at: datetime | None = None

    @classmethod
    def from_token(cls, token: str) -> "StudentSession":
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            # opaque token; upstream is the only judge of its validity
            claims = {}
        exp = claims.get("exp")
        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc) if isinstance(exp, (int, float)) else None
        return cls(token=token, claims=claims, expires_at=expires_at)

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(timezone.utc)) >= self.expires_at

def open_session(response: Response, token: str) -> StudentSession:
    session = StudentSession.from_token(token)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return session

def close_session(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")

def read_session(request: Request) -> StudentSession | None:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    return StudentSession.from_token(token)

async def get_student_session(request: Request) -> StudentSession:
    session = read_session(request)
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NO_SESSION_MESSAGE)
    if session.is_expired():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=EXPIRED_SESSION_MESSAGE)
    return session
