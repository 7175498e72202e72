from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class PayloadKind(str, Enum):
    ARRAY = "array"
    OBJECT = "object"
    STRING = "string"


@dataclass(frozen=True)
class Candidate:
    """A tagged place where an envelope may carry its payload.

    The empty path is the envelope itself.
    """
    name: str
    path: tuple[str, ...] = ()

    @classmethod
    def at(cls, dotted: str) -> "Candidate":
        return cls(dotted, tuple(dotted.split(".")))

    def resolve(self, raw: Any) -> Any:
        node = raw
        for key in self.path:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node


SELF = Candidate("self")


def matches(value: Any, kind: PayloadKind) -> bool:
    if value is None:
        return False
    if kind is PayloadKind.ARRAY:
        return isinstance(value, list)
    if kind is PayloadKind.OBJECT:
        return isinstance(value, dict)
    return isinstance(value, str) and value != ""


def select_payload(raw: Any, candidates: Iterable[Candidate], kind: PayloadKind) -> tuple[Candidate, Any] | None:
    """First candidate whose value has the expected kind, in priority order."""
    for candidate in candidates:
        value = candidate.resolve(raw)
        if matches(value, kind):
            return candidate, value
    return None
