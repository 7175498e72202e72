from fastapi import APIRouter, Depends
from portal.core.errors import http_error
from portal.core.security import StudentSession, get_student_session
from portal.core.upstream import UpstreamClient, get_upstream
from portal.modules.grades.schemas import GradesOut
from portal.modules.grades.service import GradesService
from portal.modules.normalizer.schemas import result_meta

router = APIRouter()

def svc(upstream: UpstreamClient = Depends(get_upstream)) -> GradesService:
    return GradesService(upstream)

@router.get("/grades", response_model=GradesOut)
async def get_grades(session: StudentSession = Depends(get_student_session), service: GradesService = Depends(svc)):
    result = await service.get_grades(session)
    if not result.ok:
        raise http_error(result)
    return GradesOut(data=result.value, meta=result_meta(result))
