from fastapi import APIRouter, Depends
from portal.core.errors import http_error
from portal.core.security import StudentSession, get_student_session
from portal.core.upstream import UpstreamClient, get_upstream
from portal.modules.kardex.schemas import KardexOut
from portal.modules.kardex.service import KardexService
from portal.modules.normalizer.schemas import result_meta
from portal.modules.normalizer.validation import dump

router = APIRouter()

def svc(upstream: UpstreamClient = Depends(get_upstream)) -> KardexService:
    return KardexService(upstream)

@router.get("/kardex", response_model=KardexOut)
async def get_kardex(session: StudentSession = Depends(get_student_session), service: KardexService = Depends(svc)):
    result = await service.get_kardex(session)
    if not result.ok:
        raise http_error(result)
    return KardexOut(
        data=dump(result.value.kardex),
        porcentaje_avance=result.value.porcentaje_avance,
        meta=result_meta(result),
    )
