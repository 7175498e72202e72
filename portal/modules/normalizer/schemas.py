from pydantic import BaseModel
from portal.modules.normalizer.results import RawFallback, Validated

class ResultMeta(BaseModel):
    """Tells the UI whether the data passed validation or is best effort."""
    validated: bool = True
    source: str = ""
    warnings: list[str] = []

def result_meta(result: Validated | RawFallback) -> ResultMeta:
    warnings = list(result.errors) if isinstance(result, RawFallback) else []
    return ResultMeta(validated=result.validated, source=result.source, warnings=warnings)
