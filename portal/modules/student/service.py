from portal.core.config import settings
from portal.core.security import StudentSession
from portal.core.upstream import UpstreamClient
from portal.modules.normalizer.candidates import Candidate, SELF
from portal.modules.normalizer.gateway import fetch_normalized
from portal.modules.normalizer.messages import DEFAULT_MESSAGES
from portal.modules.normalizer.results import NormalizedResponse
from portal.modules.student.schemas import StudentInfo

STUDENT_CANDIDATES = (
    Candidate.at("data"),
    Candidate.at("message.student"),
    Candidate.at("message.estudiante"),
    SELF,
)

STUDENT_MESSAGES = DEFAULT_MESSAGES.override(
    not_found="No se encontró información del estudiante.",
    request_failed="Error {code}: No se pudo obtener la información.",
    no_payload="No se recibió información válida del estudiante",
)

class StudentService:
    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    async def get_profile(self, session: StudentSession) -> NormalizedResponse:
        return await fetch_normalized(
            self.upstream, settings.UPSTREAM_STUDENT_PATH, session,
            STUDENT_CANDIDATES, StudentInfo, messages=STUDENT_MESSAGES,
        )
