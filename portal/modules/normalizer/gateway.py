from typing import Iterable
from pydantic import BaseModel
from portal.core.security import StudentSession
from portal.core.upstream import UpstreamClient, UpstreamTransportError
from portal.modules.normalizer.candidates import Candidate
from portal.modules.normalizer.messages import DEFAULT_MESSAGES, Messages
from portal.modules.normalizer.normalizer import normalize
from portal.modules.normalizer.results import ErrorKind, Failure, NormalizedResponse


async def fetch_normalized(
    client: UpstreamClient,
    path: str,
    session: StudentSession,
    candidates: Iterable[Candidate],
    schema: type[BaseModel] | None,
    *,
    many: bool = False,
    messages: Messages = DEFAULT_MESSAGES,
) -> NormalizedResponse:
    try:
        reply = await client.get_json(path, session.token)
    except UpstreamTransportError:
        return Failure(ErrorKind.TRANSPORT_ERROR, messages.transport_error)
    return normalize(reply.payload, candidates, schema, many=many, http_status=reply.status_code, messages=messages)
