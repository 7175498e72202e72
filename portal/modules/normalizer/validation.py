import types
from typing import Annotated, Any, Union, get_args, get_origin
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo


def _format_errors(exc: ValidationError, prefix: str = "") -> list[str]:
    out = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        out.append(f"{prefix}{loc}: {err['msg']}")
    return out


def _nested_model(annotation: Any) -> tuple[type[BaseModel], bool] | None:
    """(model, is_list) when the annotation is a model or a list of models, optionally Optional."""
    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        return _nested_model(args[0]) if len(args) == 1 else None
    if origin is list:
        args = get_args(annotation)
        if args and isinstance(args[0], type) and issubclass(args[0], BaseModel):
            return args[0], True
        return None
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation, False
    return None


def _field_adapter(field: FieldInfo) -> TypeAdapter:
    if field.metadata:
        return TypeAdapter(Annotated[(field.annotation, *field.metadata)])
    return TypeAdapter(field.annotation)


def _salvage_value(field: FieldInfo, value: Any) -> Any:
    nested = _nested_model(field.annotation)
    if nested is not None:
        model, is_list = nested
        if is_list:
            if not isinstance(value, list):
                return None
            return [best_effort(model, item)[0] for item in value]
        if not isinstance(value, dict):
            return None
        return best_effort(model, value)[0]
    try:
        return _field_adapter(field).validate_python(value)
    except ValidationError:
        return None


def salvage(model: type[BaseModel], raw: Any) -> BaseModel:
    """Build ``model`` field by field; a field that will not validate is set to None."""
    data = raw if isinstance(raw, dict) else {}
    values = {}
    for name, field in model.model_fields.items():
        key = field.alias or name
        if key not in data:
            values[name] = None if field.is_required() else field.get_default(call_default_factory=True)
            continue
        values[name] = _salvage_value(field, data[key])
    return model.model_construct(**values)


def best_effort(model: type[BaseModel], raw: Any, prefix: str = "") -> tuple[BaseModel, list[str]]:
    try:
        return model.model_validate(raw), []
    except ValidationError as e:
        return salvage(model, raw), _format_errors(e, prefix)


def validate_many(model: type[BaseModel], items: list) -> tuple[list[BaseModel], list[str]]:
    # every row is validated on its own; a bad row never costs the others
    out, errors = [], []
    for i, item in enumerate(items):
        obj, errs = best_effort(model, item, prefix=f"[{i}].")
        out.append(obj)
        errors.extend(errs)
    return out, errors


def dump(value: Any) -> Any:
    """JSON-ready form of a validated or salvaged value (salvaged models may hold None in typed fields)."""
    if isinstance(value, BaseModel):
        return value.model_dump(warnings=False)
    if isinstance(value, list):
        return [dump(v) for v in value]
    return value
