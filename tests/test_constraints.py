"""Tests for the atomic parameter constraints."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from serpstat_mcp.tools.common import DOMAIN
from serpstat_mcp.validation.schema import array, boolean, enum, integer, number, one_of, string, url


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("value", ["example.com", "sub.example.co.uk", "my-site.io", "xn--80ak6aa92e.com"])
def test_domain_accepts_valid_names(value):
    assert DOMAIN.reason(value) is None


def test_domain_rejects_underscore_name():
    assert DOMAIN.reason("bad_domain") == "Invalid domain name format"


def test_domain_rejects_too_short_name():
    """a.b is domain-shaped but below the minimum length."""
    assert DOMAIN.reason("a.b") == "String must contain at least 4 character(s)"


def test_domain_pattern_is_anchored():
    assert DOMAIN.reason("example.com/path") == "Invalid domain name format"
    assert DOMAIN.reason(" example.com") == "Invalid domain name format"


def test_empty_string_is_a_length_violation():
    assert string(min_length=1).reason("") == "String must contain at least 1 character(s)"
    assert string().reason("") is None


def test_string_max_length():
    assert string(max_length=3).reason("abcd") == "String must contain at most 3 character(s)"


def test_string_rejects_non_string():
    assert string().reason(10) == "Expected string, received integer"
    assert string().reason(None) == "Expected string, received null"


def test_enum_message_lists_choices():
    assert enum("asc", "desc").reason("up") == "Invalid enum value. Expected 'asc' | 'desc', received 'up'"


def test_url_requires_http_scheme_and_host():
    constraint = url()
    assert constraint.reason("https://example.com/page?x=1") is None
    assert constraint.reason("ftp://example.com") == "Invalid url"
    assert constraint.reason("example.com/page") == "Invalid url"
    assert constraint.reason("https://") == "Invalid url"


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def test_number_bounds_are_inclusive():
    constraint = integer(1, 1000)
    assert constraint.reason(1) is None
    assert constraint.reason(1000) is None
    assert constraint.reason(0) == "Number must be greater than or equal to 1"
    assert constraint.reason(1001) == "Number must be less than or equal to 1000"


def test_integer_rejects_fraction_and_strings():
    constraint = integer()
    assert constraint.reason(1.5) == "Expected integer, received float"
    assert constraint.reason("10") == "Expected integer, received string"


def test_booleans_are_not_numbers():
    assert integer().reason(True) == "Expected integer, received boolean"
    assert number().reason(False) == "Expected number, received boolean"


def test_non_finite_numbers_rejected():
    assert number().reason(math.inf) == "Number must be finite"
    assert number().reason(math.nan) == "Number must be finite"


def test_integer_choices():
    constraint = integer(choices=(20, 50, 100))
    assert constraint.reason(50) is None
    assert constraint.reason(30) == "Invalid value. Expected 20 | 50 | 100, received 30"


# ---------------------------------------------------------------------------
# Booleans and arrays
# ---------------------------------------------------------------------------


def test_boolean_type_check():
    assert boolean().reason(False) is None
    assert boolean().reason(0) == "Expected boolean, received integer"


def test_array_size_bounds():
    constraint = array(string(), 1, 2)
    assert constraint.reason([]) == "Array must contain at least 1 element(s)"
    assert constraint.reason(["a", "b", "c"]) == "Array must contain at most 2 element(s)"
    assert constraint.reason("a") == "Expected array, received string"


def test_array_uniqueness():
    constraint = array(string(), unique=True, unique_message="domains must be unique")
    assert constraint.reason(["a.com", "b.com"]) is None
    assert constraint.reason(["a.com", "a.com"]) == "domains must be unique"


def test_array_uniqueness_compares_objects_by_value():
    constraint = array(unique=True)
    assert constraint.reason([{"a": 1, "b": 2}, {"b": 2, "a": 1}]) == "Array items must be unique"


def test_array_uniqueness_treats_integral_floats_as_equal():
    constraint = array(unique=True)
    assert constraint.reason([1, 1.0]) == "Array items must be unique"
    assert constraint.reason([{"id": 2}, {"id": 2.0}]) == "Array items must be unique"
    assert constraint.reason([1, 1.5]) is None
    assert constraint.reason([1, True]) is None


# ---------------------------------------------------------------------------
# JSON Schema rendering
# ---------------------------------------------------------------------------


def test_json_schema_fragments():
    assert integer(1, 10).json_schema() == {"type": "integer", "minimum": 1, "maximum": 10}
    assert enum("a", "b").json_schema() == {"type": "string", "enum": ["a", "b"]}
    assert array(string(), max_items=5, unique=True).json_schema() == {
        "type": "array",
        "items": {"type": "string"},
        "maxItems": 5,
        "uniqueItems": True,
    }
    assert url().json_schema() == {"type": "string", "format": "uri"}


def test_union_renders_any_of():
    assert one_of(string(), integer()).json_schema() == {
        "anyOf": [{"type": "string"}, {"type": "integer"}],
    }


def test_constraints_are_immutable():
    constraint = integer(1, 10)
    with pytest.raises(ValidationError):
        constraint.minimum = 5
