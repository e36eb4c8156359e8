from serpstat_mcp.validation.engine import (
    ParamsValidationError,
    ValidationResult,
    Violation,
    validate,
    validate_or_raise,
)
from serpstat_mcp.validation.schema import FieldSpec, ObjectConstraint, Refinement, Schema

__all__ = [
    "FieldSpec",
    "ObjectConstraint",
    "ParamsValidationError",
    "Refinement",
    "Schema",
    "ValidationResult",
    "Violation",
    "validate",
    "validate_or_raise",
]
