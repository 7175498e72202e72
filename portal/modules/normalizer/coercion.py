import math
from typing import Annotated, Any
from pydantic import BeforeValidator


def _to_float(val: Any) -> float | None:
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        num = float(val)
    elif isinstance(val, str):
        try:
            num = float(val.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(num) or math.isinf(num):
        return None
    return num


def coerce_grade(val: Any) -> str | None:
    """``"85"`` and ``85`` both become ``"85.00"``; anything unparseable becomes None."""
    num = _to_float(val)
    return None if num is None else f"{num:.2f}"


def coerce_kardex_grade(val: Any) -> str | None:
    # "AC" (acreditada) and other non-numeric marks are kept as-is
    if isinstance(val, str) and _to_float(val) is None:
        return val
    return coerce_grade(val)


def coerce_int(val: Any) -> int | None:
    num = _to_float(val)
    return None if num is None else int(num)


def coerce_str(val: Any) -> Any:
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return str(val)
    return val


Grade = Annotated[str | None, BeforeValidator(coerce_grade)]
KardexGrade = Annotated[str | None, BeforeValidator(coerce_kardex_grade)]
LenientInt = Annotated[int | None, BeforeValidator(coerce_int)]
Text = Annotated[str, BeforeValidator(coerce_str)]
OptionalText = Annotated[str | None, BeforeValidator(coerce_str)]
