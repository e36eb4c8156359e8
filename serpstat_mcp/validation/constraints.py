"""Atomic parameter constraints.

Every constraint is an immutable value object that judges a single value
and reports at most one reason for rejecting it.  Container constraints
(arrays, mappings, unions) only judge the container itself; walking into
the children is left to :mod:`serpstat_mcp.validation.engine`.

Constraints also render themselves as JSON Schema fragments so the same
definition drives both validation and the advertised tool ``inputSchema``.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict


def type_name(value: Any) -> str:
    """JSON-flavoured name of *value*'s type, used in violation messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _canonical(value: Any) -> Any:
    """JSON value with integral floats folded into ints, so 1 and 1.0 compare equal."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, list):
        return [_canonical(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _canonical(item) for key, item in value.items()}
    return value


def _is_http_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.hostname) and " " not in value


class Constraint(BaseModel):
    """Base class for all constraints."""

    model_config = ConfigDict(frozen=True)

    def reason(self, value: Any) -> str | None:
        """Return ``None`` when *value* is acceptable, otherwise why it is not."""
        raise NotImplementedError

    def json_schema(self) -> dict[str, Any]:
        raise NotImplementedError


class StringConstraint(Constraint):
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    """Regular expression the *whole* value must match."""

    choices: tuple[str, ...] | None = None
    format: Literal["uri"] | None = None
    message: str | None = None
    """Replaces the generic message when the pattern does not match."""

    def reason(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return f"Expected string, received {type_name(value)}"
        if self.choices is not None and value not in self.choices:
            expected = " | ".join(f"'{choice}'" for choice in self.choices)
            return f"Invalid enum value. Expected {expected}, received '{value}'"
        if self.min_length is not None and len(value) < self.min_length:
            return f"String must contain at least {self.min_length} character(s)"
        if self.max_length is not None and len(value) > self.max_length:
            return f"String must contain at most {self.max_length} character(s)"
        if self.pattern is not None and re.fullmatch(self.pattern, value) is None:
            return self.message or "Invalid format"
        if self.format == "uri" and not _is_http_url(value):
            return "Invalid url"
        return None

    def json_schema(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"type": "string"}
        if self.choices is not None:
            doc["enum"] = list(self.choices)
        if self.min_length is not None:
            doc["minLength"] = self.min_length
        if self.max_length is not None:
            doc["maxLength"] = self.max_length
        if self.pattern is not None:
            doc["pattern"] = self.pattern
        if self.format is not None:
            doc["format"] = self.format
        return doc


class NumberConstraint(Constraint):
    """Numeric range check; both bounds are inclusive.

    Booleans are never accepted as numbers and nothing is coerced: a
    numeric string is a type violation.
    """

    minimum: int | float | None = None
    maximum: int | float | None = None
    integer: bool = False
    choices: tuple[int, ...] | None = None

    def reason(self, value: Any) -> str | None:
        expected = "integer" if self.integer else "number"
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return f"Expected {expected}, received {type_name(value)}"
        if isinstance(value, float):
            if not math.isfinite(value):
                return "Number must be finite"
            if self.integer and not value.is_integer():
                return "Expected integer, received float"
        if self.choices is not None and value not in self.choices:
            allowed = " | ".join(str(choice) for choice in self.choices)
            return f"Invalid value. Expected {allowed}, received {value}"
        if self.minimum is not None and value < self.minimum:
            return f"Number must be greater than or equal to {self.minimum}"
        if self.maximum is not None and value > self.maximum:
            return f"Number must be less than or equal to {self.maximum}"
        return None

    def json_schema(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"type": "integer" if self.integer else "number"}
        if self.choices is not None:
            doc["enum"] = list(self.choices)
        if self.minimum is not None:
            doc["minimum"] = self.minimum
        if self.maximum is not None:
            doc["maximum"] = self.maximum
        return doc


class BooleanConstraint(Constraint):
    def reason(self, value: Any) -> str | None:
        if not isinstance(value, bool):
            return f"Expected boolean, received {type_name(value)}"
        return None

    def json_schema(self) -> dict[str, Any]:
        return {"type": "boolean"}


class AnyConstraint(Constraint):
    """Accepts any JSON value; reserved for opaque pass-through payloads."""

    def reason(self, value: Any) -> str | None:
        return None

    def json_schema(self) -> dict[str, Any]:
        return {}


class ArrayConstraint(Constraint):
    items: Constraint | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool = False
    unique_message: str = "Array items must be unique"

    def reason(self, value: Any) -> str | None:
        if not isinstance(value, list):
            return f"Expected array, received {type_name(value)}"
        if self.min_items is not None and len(value) < self.min_items:
            return f"Array must contain at least {self.min_items} element(s)"
        if self.max_items is not None and len(value) > self.max_items:
            return f"Array must contain at most {self.max_items} element(s)"
        if self.unique_items:
            seen = {json.dumps(_canonical(item), sort_keys=True, default=str) for item in value}
            if len(seen) != len(value):
                return self.unique_message
        return None

    def json_schema(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"type": "array"}
        if self.items is not None:
            doc["items"] = self.items.json_schema()
        if self.min_items is not None:
            doc["minItems"] = self.min_items
        if self.max_items is not None:
            doc["maxItems"] = self.max_items
        if self.unique_items:
            doc["uniqueItems"] = True
        return doc


class MappingConstraint(Constraint):
    """Object with free-form keys whose values all share one constraint."""

    values: Constraint

    def reason(self, value: Any) -> str | None:
        if not isinstance(value, dict):
            return f"Expected object, received {type_name(value)}"
        return None

    def json_schema(self) -> dict[str, Any]:
        return {"type": "object", "additionalProperties": self.values.json_schema()}


class UnionConstraint(Constraint):
    """Ordered alternatives; the first one that accepts the value wins."""

    alternatives: tuple[Constraint, ...]

    def reason(self, value: Any) -> str | None:
        return None

    def json_schema(self) -> dict[str, Any]:
        return {"anyOf": [alternative.json_schema() for alternative in self.alternatives]}
