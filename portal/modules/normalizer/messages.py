from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Messages:
    """Localized, user-facing text for every failure the normalizer can report."""
    auth_expired: str = "Tu sesión ha expirado. Por favor, inicia sesión nuevamente."
    forbidden: str = "No tienes permiso para acceder a esta información."
    not_found: str = "No se encontró la información solicitada."
    upstream_error: str = "El servidor está experimentando problemas. Por favor, intenta más tarde."
    request_failed: str = "Error {code}: No se pudo completar la solicitud."
    no_payload: str = "No se recibió información válida del servidor."
    transport_error: str = "Error al conectar con el servidor. Por favor, verifica tu conexión."

    def override(self, **changes) -> "Messages":
        return replace(self, **changes)


DEFAULT_MESSAGES = Messages()
