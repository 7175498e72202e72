from fastapi import APIRouter, Depends
from portal.core.errors import http_error
from portal.core.security import StudentSession, get_student_session
from portal.core.upstream import UpstreamClient, get_upstream
from portal.modules.normalizer.schemas import result_meta
from portal.modules.normalizer.validation import dump
from portal.modules.student.schemas import StudentOut
from portal.modules.student.service import StudentService

router = APIRouter()

def svc(upstream: UpstreamClient = Depends(get_upstream)) -> StudentService:
    return StudentService(upstream)

@router.get("/me", response_model=StudentOut)
async def get_profile(session: StudentSession = Depends(get_student_session), service: StudentService = Depends(svc)):
    result = await service.get_profile(session)
    if not result.ok:
        raise http_error(result)
    return StudentOut(data=dump(result.value), meta=result_meta(result))
