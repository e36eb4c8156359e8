"""Schema composer – builds immutable object schemas out of constraints.

A :class:`Schema` is plain data: an ordered tuple of :class:`FieldSpec`
entries, a ``strict`` flag and optional cross-field :class:`Refinement`
rules.  Tool catalogues declare their parameters with the small builder
functions at the bottom of this module, e.g.::

    schema(
        required("query", DOMAIN, "Domain to analyze"),
        optional("searchType", enum("domain", "domain_with_subdomains"), default="domain"),
    )
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, model_validator

from serpstat_mcp.validation.constraints import (
    AnyConstraint,
    ArrayConstraint,
    BooleanConstraint,
    Constraint,
    MappingConstraint,
    NumberConstraint,
    StringConstraint,
    UnionConstraint,
    type_name,
)

_MISSING: Any = object()


class FieldSpec(BaseModel):
    """One declared parameter of a schema."""

    model_config = ConfigDict(frozen=True)

    name: str
    constraint: Constraint
    required: bool = True
    has_default: bool = False
    default: Any = None
    description: str | None = None


class Refinement(BaseModel):
    """Cross-field rule evaluated once every field of its object is valid."""

    model_config = ConfigDict(frozen=True)

    check: Callable[[dict[str, Any]], bool]
    message: str
    path: tuple[str, ...] = ()


class Schema(BaseModel):
    """Ordered field declarations plus strictness and refinements."""

    model_config = ConfigDict(frozen=True)

    field_specs: tuple[FieldSpec, ...] = ()
    strict: bool = True
    refinements: tuple[Refinement, ...] = ()

    @model_validator(mode="after")
    def _names_are_unique(self) -> "Schema":
        names = [spec.name for spec in self.field_specs]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate field names: {duplicates}")
        return self

    @property
    def names(self) -> frozenset[str]:
        return frozenset(spec.name for spec in self.field_specs)

    def get(self, name: str) -> FieldSpec | None:
        for spec in self.field_specs:
            if spec.name == name:
                return spec
        return None

    def extend(self, *field_specs: FieldSpec, refinements: tuple[Refinement, ...] = ()) -> "Schema":
        """Return a new schema with extra fields (and refinements) appended."""
        return Schema(
            field_specs=self.field_specs + field_specs,
            strict=self.strict,
            refinements=self.refinements + refinements,
        )

    def json_schema(self) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        for spec in self.field_specs:
            prop = spec.constraint.json_schema()
            if spec.description:
                prop["description"] = spec.description
            if spec.has_default:
                prop["default"] = spec.default
            properties[spec.name] = prop

        doc: dict[str, Any] = {"type": "object", "properties": properties}
        required_names = [spec.name for spec in self.field_specs if spec.required]
        if required_names:
            doc["required"] = required_names
        if self.strict:
            doc["additionalProperties"] = False
        return doc


class ObjectConstraint(Constraint):
    """Nested object validated against its own :class:`Schema`."""

    shape: Schema

    def reason(self, value: Any) -> str | None:
        if not isinstance(value, dict):
            return f"Expected object, received {type_name(value)}"
        return None

    def json_schema(self) -> dict[str, Any]:
        return self.shape.json_schema()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def required(name: str, constraint: Constraint, description: str | None = None) -> FieldSpec:
    return FieldSpec(name=name, constraint=constraint, required=True, description=description)


def optional(
    name: str,
    constraint: Constraint,
    description: str | None = None,
    *,
    default: Any = _MISSING,
) -> FieldSpec:
    """Optional field; with *default* the value is injected when absent."""
    if default is _MISSING:
        return FieldSpec(name=name, constraint=constraint, required=False, description=description)
    return FieldSpec(
        name=name,
        constraint=constraint,
        required=False,
        has_default=True,
        default=default,
        description=description,
    )


def schema(
    *field_specs: FieldSpec,
    strict: bool = True,
    refinements: tuple[Refinement, ...] = (),
) -> Schema:
    return Schema(field_specs=field_specs, strict=strict, refinements=refinements)


def refine(check: Callable[[dict[str, Any]], bool], message: str, *path: str) -> Refinement:
    return Refinement(check=check, message=message, path=path)


def obj(*field_specs: FieldSpec, strict: bool = True, refinements: tuple[Refinement, ...] = ()) -> ObjectConstraint:
    return ObjectConstraint(shape=schema(*field_specs, strict=strict, refinements=refinements))


def string(
    min_length: int | None = None,
    max_length: int | None = None,
    *,
    pattern: str | None = None,
    message: str | None = None,
) -> StringConstraint:
    return StringConstraint(min_length=min_length, max_length=max_length, pattern=pattern, message=message)


def url() -> StringConstraint:
    return StringConstraint(format="uri")


def enum(*choices: str) -> StringConstraint:
    return StringConstraint(choices=choices)


def integer(
    minimum: int | None = None,
    maximum: int | None = None,
    *,
    choices: tuple[int, ...] | None = None,
) -> NumberConstraint:
    return NumberConstraint(minimum=minimum, maximum=maximum, integer=True, choices=choices)


def number(minimum: int | float | None = None, maximum: int | float | None = None) -> NumberConstraint:
    return NumberConstraint(minimum=minimum, maximum=maximum)


def boolean() -> BooleanConstraint:
    return BooleanConstraint()


def anything() -> AnyConstraint:
    return AnyConstraint()


def array(
    items: Constraint | None = None,
    min_items: int | None = None,
    max_items: int | None = None,
    *,
    unique: bool = False,
    unique_message: str | None = None,
) -> ArrayConstraint:
    extra = {"unique_message": unique_message} if unique_message else {}
    return ArrayConstraint(items=items, min_items=min_items, max_items=max_items, unique_items=unique, **extra)


def mapping(values: Constraint) -> MappingConstraint:
    return MappingConstraint(values=values)


def one_of(*alternatives: Constraint) -> UnionConstraint:
    return UnionConstraint(alternatives=alternatives)
