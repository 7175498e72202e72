from fastapi import APIRouter, Depends, Request, Response
from portal.core.errors import http_error
from portal.core.security import open_session, close_session, read_session
from portal.core.upstream import UpstreamClient, get_upstream
from portal.modules.auth.schemas import LoginRequest, LoginOut, SessionOut
from portal.modules.auth.service import AuthService

router = APIRouter()

def svc(upstream: UpstreamClient = Depends(get_upstream)) -> AuthService:
    return AuthService(upstream)

@router.post("/login", response_model=LoginOut)
async def login(payload: LoginRequest, response: Response, service: AuthService = Depends(svc)):
    result, user = await service.login(payload)
    if not result.ok:
        raise http_error(result)
    session = open_session(response, result.value)
    return LoginOut(token=session.token, user=user, expires_at=session.expires_at)

@router.post("/logout")
async def logout(response: Response):
    close_session(response)
    return {"success": True}

@router.get("/session", response_model=SessionOut)
async def current_session(request: Request):
    session = read_session(request)
    if session is None:
        return SessionOut(authenticated=False)
    expired = session.is_expired()
    return SessionOut(authenticated=not expired, expires_at=session.expires_at, expired=expired)
