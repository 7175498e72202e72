import logging
from typing import Any, Iterable
from pydantic import BaseModel
from portal.modules.normalizer.candidates import Candidate, PayloadKind, select_payload
from portal.modules.normalizer.messages import DEFAULT_MESSAGES, Messages
from portal.modules.normalizer.results import ErrorKind, Failure, NormalizedResponse, RawFallback, Validated
from portal.modules.normalizer.validation import best_effort, validate_many

logger = logging.getLogger(__name__)

SUCCESS_CODE = 200


def _body_status(raw: Any) -> int | None:
    if not isinstance(raw, dict):
        return None
    code = raw.get("status")
    if isinstance(code, bool):
        return None
    if isinstance(code, str) and code.strip().isdigit():
        code = int(code)
    if not isinstance(code, int) or code == 0:
        return None
    return code


def _text(raw: Any, key: str) -> str | None:
    if isinstance(raw, dict):
        val = raw.get(key)
        if isinstance(val, str) and val.strip():
            return val
    return None


def interpret_status(raw: Any, messages: Messages = DEFAULT_MESSAGES) -> Failure | None:
    """Map an in-body status code to a failure.

    Upstream answers HTTP 200 even for errors, so the body is checked before
    the transport status.
    """
    code = _body_status(raw)
    if code is None or code == SUCCESS_CODE:
        return None
    if code == 401:
        return Failure(ErrorKind.AUTH_EXPIRED, messages.auth_expired)
    if code == 403:
        return Failure(ErrorKind.FORBIDDEN, messages.forbidden)
    if code == 404:
        return Failure(ErrorKind.NOT_FOUND, messages.not_found)
    if code >= 500:
        return Failure(ErrorKind.UPSTREAM_ERROR, messages.upstream_error)
    message = _text(raw, "message") or _text(raw, "responseCodeTxt") or messages.request_failed.format(code=code)
    return Failure(ErrorKind.UPSTREAM_ERROR, message)


def normalize(
    raw: Any,
    candidates: Iterable[Candidate],
    schema: type[BaseModel] | None,
    *,
    many: bool = False,
    http_status: int = 200,
    messages: Messages = DEFAULT_MESSAGES,
) -> NormalizedResponse:
    """Turn an upstream envelope into a validated value, a best-effort value or a typed failure.

    ``schema`` describes one object; ``many=True`` expects an array of them.
    ``schema=None`` expects a bare string (e.g. a token).
    """
    failure = interpret_status(raw, messages)
    if failure is not None:
        logger.warning(f"Upstream body status {_body_status(raw)} -> {failure.reason.value}")
        return failure

    if not 200 <= http_status < 300:
        logger.warning(f"Upstream HTTP {http_status}")
        return Failure(ErrorKind.TRANSPORT_ERROR, _text(raw, "message") or messages.transport_error)

    kind = PayloadKind.STRING if schema is None else PayloadKind.ARRAY if many else PayloadKind.OBJECT
    candidates = list(candidates)
    selected = select_payload(raw, candidates, kind)
    if selected is None:
        tried = ", ".join(c.name for c in candidates)
        logger.warning(f"No {kind.value} payload found (tried: {tried})")
        return Failure(ErrorKind.NO_PAYLOAD, messages.no_payload)
    candidate, payload = selected
    logger.debug(f"Payload extracted from '{candidate.name}'")

    if schema is None:
        return Validated(payload, source=candidate.name)

    if many:
        value, errors = validate_many(schema, payload)
    else:
        value, errors = best_effort(schema, payload)

    if errors:
        logger.warning(
            f"{schema.__name__} validation failed at '{candidate.name}' ({len(errors)} errors); "
            f"returning best-effort data: {errors[:5]}"
        )
        return RawFallback(value=value, raw=payload, errors=errors, source=candidate.name)
    return Validated(value, source=candidate.name)
