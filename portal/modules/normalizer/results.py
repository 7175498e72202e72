from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    AUTH_EXPIRED = "AUTH_EXPIRED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    NO_PAYLOAD = "NO_PAYLOAD"
    VALIDATION_FALLBACK = "VALIDATION_FALLBACK"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


@dataclass(frozen=True)
class Validated(Generic[T]):
    """Payload that passed schema validation."""
    value: T
    source: str = ""

    ok: ClassVar[bool] = True
    validated: ClassVar[bool] = True


@dataclass(frozen=True)
class RawFallback:
    """Best-effort payload: schema validation failed but the data is still handed out.

    ``value`` holds the salvaged shape (unparseable fields nulled, good rows kept),
    ``raw`` the candidate payload exactly as upstream sent it.
    """
    value: Any
    raw: Any
    errors: list[str] = field(default_factory=list)
    source: str = ""

    ok: ClassVar[bool] = True
    validated: ClassVar[bool] = False
    reason: ClassVar[ErrorKind] = ErrorKind.VALIDATION_FALLBACK


@dataclass(frozen=True)
class Failure:
    reason: ErrorKind
    message: str

    ok: ClassVar[bool] = False
    validated: ClassVar[bool] = False


NormalizedResponse = Union[Validated[T], RawFallback, Failure]
