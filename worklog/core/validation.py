"""
Input validation as plain functions: raw request data in, ValidationResult out.
Only the first failing field is reported.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from pydantic import BaseModel, ValidationError

from ..api.schemas import WorkLogCreate, WorkLogUpdate, ComponentCreate
from .errors import SchemaValidationError


@dataclass
class ValidationFailure:
    message: str
    field: Optional[str] = None


@dataclass
class ValidationResult:
    value: Optional[Dict[str, Any]] = None
    error: Optional[ValidationFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Dict[str, Any]:
        """Return the validated payload or raise SchemaValidationError for the failure."""
        if self.error is not None:
            raise SchemaValidationError(self.error.message, self.error.field)
        return self.value


def first_failure(exc: ValidationError) -> ValidationFailure:
    """Reduce a pydantic ValidationError to its first error, with a dotted field path."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or None
    if error["type"] == "value_error":
        # Custom validator messages come through without pydantic's "Value error, " prefix
        message = str(error["ctx"]["error"])
    else:
        message = error["msg"]
    return ValidationFailure(message=message, field=field)


def _validate(model: type, raw: Any, exclude_unset: bool = False) -> ValidationResult:
    if not isinstance(raw, dict):
        return ValidationResult(error=ValidationFailure(message="Expected a JSON object"))
    try:
        parsed: BaseModel = model.model_validate(raw)
    except ValidationError as e:
        return ValidationResult(error=first_failure(e))
    return ValidationResult(value=parsed.model_dump(exclude_unset=exclude_unset))


def validate_work_log_input(raw: Any) -> ValidationResult:
    """Validate a create body; defaults are applied to the returned payload."""
    return _validate(WorkLogCreate, raw)


def validate_work_log_update(raw: Any) -> ValidationResult:
    """Validate a partial update body; only fields present in the input are returned."""
    return _validate(WorkLogUpdate, raw, exclude_unset=True)


def validate_component_input(raw: Any) -> ValidationResult:
    return _validate(ComponentCreate, raw)
