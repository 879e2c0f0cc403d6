"""
Helpers for turning pydantic validation failures into service errors.
"""

from typing import Any, Iterable, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.exceptions import ServiceValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# pydantic error type -> constraint family reported to callers
_CONSTRAINTS = {
    "string_pattern_mismatch": "pattern",
    "enum": "enum",
    "literal_error": "enum",
    "greater_than": "range",
    "greater_than_equal": "range",
    "less_than": "range",
    "less_than_equal": "range",
    "too_short": "length",
    "too_long": "length",
    "string_too_short": "length",
    "string_too_long": "length",
    "missing": "required",
    "value_error": "value",
}


def constraint_for(error_type: str) -> str:
    return _CONSTRAINTS.get(error_type, "type")


def to_field_errors(errors: Iterable[Mapping[str, Any]]) -> list[dict]:
    """Flatten pydantic ``errors()`` into ``{field, constraint, message}`` records."""
    field_errors = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field_errors.append(
            {
                "field": ".".join(loc) or "__root__",
                "constraint": constraint_for(err.get("type", "")),
                "message": err.get("msg", "Invalid value"),
            }
        )
    return field_errors


def parse_or_raise(
    model: Type[ModelT], payload: Any, message: str = "Validation failed"
) -> ModelT:
    """Validate ``payload`` against ``model``; every violated field is reported."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ServiceValidationError(message, details=to_field_errors(exc.errors()))
