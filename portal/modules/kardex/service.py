import logging
from portal.core.config import settings
from portal.core.security import StudentSession
from portal.core.upstream import UpstreamClient
from portal.modules.kardex.schemas import KardexResponse
from portal.modules.normalizer.candidates import Candidate
from portal.modules.normalizer.gateway import fetch_normalized
from portal.modules.normalizer.messages import DEFAULT_MESSAGES
from portal.modules.normalizer.results import ErrorKind, Failure, NormalizedResponse

logger = logging.getLogger(__name__)

KARDEX_CANDIDATES = (
    Candidate.at("data"),
    Candidate.at("message.kardex"),
)

KARDEX_MESSAGES = DEFAULT_MESSAGES.override(
    not_found="No se encontró el kardex del estudiante.",
    request_failed="Error {code}: No se pudo obtener el kardex.",
    no_payload="Formato de respuesta inválido",
)

KARDEX_UNREADABLE = "Error al procesar el kardex"

class KardexService:
    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    async def get_kardex(self, session: StudentSession) -> NormalizedResponse:
        result = await fetch_normalized(
            self.upstream, settings.UPSTREAM_KARDEX_PATH, session,
            KARDEX_CANDIDATES, KardexResponse, messages=KARDEX_MESSAGES,
        )
        if not result.ok:
            return result
        # a salvaged object without the subject list is not a kardex
        if not isinstance(result.value.kardex, list):
            logger.warning(f"Kardex payload at '{result.source}' has no subject list")
            return Failure(ErrorKind.NO_PAYLOAD, KARDEX_UNREADABLE)
        logger.info(f"Kardex with {len(result.value.kardex)} subjects, progress {result.value.porcentaje_avance}%")
        return result
