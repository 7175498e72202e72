import logging
from typing import Any
from portal.core.config import settings
from portal.core.upstream import UpstreamClient, UpstreamTransportError
from portal.modules.auth.schemas import LoginRequest
from portal.modules.normalizer.candidates import Candidate
from portal.modules.normalizer.messages import DEFAULT_MESSAGES
from portal.modules.normalizer.normalizer import normalize
from portal.modules.normalizer.results import ErrorKind, Failure, NormalizedResponse

logger = logging.getLogger(__name__)

# upstream nests the token in message.login.token; older builds used flat keys
TOKEN_CANDIDATES = (
    Candidate.at("message.login.token"),
    Candidate.at("token"),
    Candidate.at("access_token"),
    Candidate.at("data.token"),
)
USER_CANDIDATES = (
    Candidate.at("user"),
    Candidate.at("message.user"),
    Candidate.at("data.user"),
)

LOGIN_MESSAGES = DEFAULT_MESSAGES.override(
    auth_expired=(
        "Las credenciales ingresadas son incorrectas. Por favor, verifica que tu correo "
        "electrónico institucional y contraseña sean correctos."
    ),
    forbidden="No tienes permiso para acceder al sistema. Contacta al administrador.",
    not_found="Usuario no encontrado en el sistema.",
    request_failed="Error {code}: No se pudo completar el inicio de sesión.",
    no_payload="No se recibió un token de autenticación válido",
    transport_error="Error al conectar con el servidor. Por favor, intenta de nuevo.",
)

def _user_from(raw: Any) -> dict | None:
    for candidate in USER_CANDIDATES:
        value = candidate.resolve(raw)
        if isinstance(value, dict):
            return value
    return None

class AuthService:
    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    async def login(self, payload: LoginRequest) -> tuple[NormalizedResponse, dict | None]:
        """Exchange institutional credentials for the upstream bearer token."""
        try:
            reply = await self.upstream.post_json(settings.UPSTREAM_LOGIN_PATH, payload.model_dump())
        except UpstreamTransportError:
            return Failure(ErrorKind.TRANSPORT_ERROR, LOGIN_MESSAGES.transport_error), None
        result = normalize(reply.payload, TOKEN_CANDIDATES, None, http_status=reply.status_code, messages=LOGIN_MESSAGES)
        if result.ok:
            logger.info(f"Login succeeded for {payload.email}")
            return result, _user_from(reply.payload)
        logger.info(f"Login rejected for {payload.email}: {result.reason.value}")
        return result, None
