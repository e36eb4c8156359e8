"""Validation engine – runs a :class:`Schema` against untrusted input.

``validate`` walks the whole input in one pass and collects every
violation instead of stopping at the first one, so a tool caller gets a
complete report.  On success it returns a normalised copy holding only
declared fields with defaults filled in; the raw input is never handed on.

No coercion is attempted: ``"10"`` for an integer field is a violation.
"""

from __future__ import annotations

import copy
from typing import Any

from pydantic import BaseModel, ConfigDict

from serpstat_mcp.validation.constraints import (
    ArrayConstraint,
    Constraint,
    MappingConstraint,
    UnionConstraint,
    type_name,
)
from serpstat_mcp.validation.schema import ObjectConstraint, Schema

Path = tuple[str | int, ...]


class Violation(BaseModel):
    """A single failed check, located by a path into the input."""

    model_config = ConfigDict(frozen=True)

    path: tuple[str | int, ...] = ()
    message: str

    @property
    def location(self) -> str:
        return ".".join(str(part) for part in self.path)

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class ValidationResult(BaseModel):
    """Either normalised ``params`` or the collected ``violations``."""

    model_config = ConfigDict(frozen=True)

    params: dict[str, Any] | None = None
    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations

    def message(self) -> str:
        return ", ".join(str(violation) for violation in self.violations)


class ParamsValidationError(ValueError):
    """Raised by :func:`validate_or_raise`; never reaches the network layer."""

    def __init__(self, violations: tuple[Violation, ...]) -> None:
        self.violations = violations
        joined = ", ".join(str(violation) for violation in violations)
        super().__init__(f"Invalid parameters: {joined}")


def validate(schema: Schema, value: Any) -> ValidationResult:
    normalized, violations = _check_object(schema, value, ())
    if violations:
        return ValidationResult(violations=tuple(violations))
    return ValidationResult(params=normalized)


def validate_or_raise(schema: Schema, value: Any) -> dict[str, Any]:
    result = validate(schema, value)
    if not result.ok:
        raise ParamsValidationError(result.violations)
    return result.params or {}


# ---------------------------------------------------------------------------
# Walkers
# ---------------------------------------------------------------------------


def _check(constraint: Constraint, value: Any, path: Path) -> tuple[Any, list[Violation]]:
    if isinstance(constraint, UnionConstraint):
        return _check_union(constraint, value, path)

    reason = constraint.reason(value)
    if reason is not None:
        return value, [Violation(path=path, message=reason)]

    if isinstance(constraint, ObjectConstraint):
        return _check_object(constraint.shape, value, path)

    if isinstance(constraint, ArrayConstraint) and constraint.items is not None:
        items: list[Any] = []
        violations: list[Violation] = []
        for index, item in enumerate(value):
            normalized, item_violations = _check(constraint.items, item, (*path, index))
            items.append(normalized)
            violations.extend(item_violations)
        return items, violations

    if isinstance(constraint, MappingConstraint):
        entries: dict[str, Any] = {}
        violations = []
        for key, item in value.items():
            normalized, item_violations = _check(constraint.values, item, (*path, key))
            entries[key] = normalized
            violations.extend(item_violations)
        return entries, violations

    if isinstance(value, (list, dict)):
        return copy.deepcopy(value), []
    return value, []


def _check_object(schema: Schema, value: Any, path: Path) -> tuple[Any, list[Violation]]:
    if not isinstance(value, dict):
        return value, [Violation(path=path, message=f"Expected object, received {type_name(value)}")]

    normalized: dict[str, Any] = {}
    violations: list[Violation] = []

    for spec in schema.field_specs:
        field_path = (*path, spec.name)
        if spec.name in value:
            candidate = value[spec.name]
        elif spec.has_default:
            candidate = copy.deepcopy(spec.default)
        elif spec.required:
            violations.append(Violation(path=field_path, message="Required"))
            continue
        else:
            continue

        checked, field_violations = _check(spec.constraint, candidate, field_path)
        if field_violations:
            violations.extend(field_violations)
        else:
            normalized[spec.name] = checked

    # Cross-field rules only make sense once every field is individually valid.
    if not violations:
        for refinement in schema.refinements:
            if not refinement.check(normalized):
                violations.append(Violation(path=(*path, *refinement.path), message=refinement.message))

    if schema.strict:
        unknown = [key for key in value if key not in schema.names]
        if unknown:
            keys = ", ".join(f"'{key}'" for key in unknown)
            violations.append(Violation(path=path, message=f"Unrecognized key(s) in object: {keys}"))

    return normalized, violations


def _check_union(constraint: UnionConstraint, value: Any, path: Path) -> tuple[Any, list[Violation]]:
    attempts: list[list[Violation]] = []
    for alternative in constraint.alternatives:
        normalized, violations = _check(alternative, value, path)
        if not violations:
            return normalized, []
        attempts.append(violations)

    # Every alternative rejected the value's type outright: report one message.
    if all(len(found) == 1 and found[0].path == path for found in attempts):
        messages = {found[0].message for found in attempts}
        message = messages.pop() if len(messages) == 1 else "Invalid input"
        return value, [Violation(path=path, message=message)]

    def closeness(index: int) -> tuple[int, int, int]:
        found = attempts[index]
        structural = sum(1 for violation in found if violation.path == path)
        return structural, len(found), index

    best = min(range(len(attempts)), key=closeness)
    return value, attempts[best]
