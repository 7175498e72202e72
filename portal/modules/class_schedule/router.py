from fastapi import APIRouter, Depends
from portal.core.errors import http_error
from portal.core.security import StudentSession, get_student_session
from portal.core.upstream import UpstreamClient, get_upstream
from portal.modules.class_schedule.schemas import ScheduleOut
from portal.modules.class_schedule.service import ClassScheduleService
from portal.modules.normalizer.schemas import result_meta

router = APIRouter()

def svc(upstream: UpstreamClient = Depends(get_upstream)) -> ClassScheduleService:
    return ClassScheduleService(upstream)

@router.get("/schedule", response_model=ScheduleOut)
async def get_schedule(session: StudentSession = Depends(get_student_session), service: ClassScheduleService = Depends(svc)):
    result, metadata = await service.get_schedule(session)
    if not result.ok:
        raise http_error(result)
    return ScheduleOut(data=result.value, metadata=metadata, meta=result_meta(result))
