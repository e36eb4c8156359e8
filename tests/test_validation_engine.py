"""Tests for the validation engine: defaults, required fields, strict mode,
unions, refinements and normalisation."""

from __future__ import annotations

import pytest

from serpstat_mcp.tools import ALL_TOOLS
from serpstat_mcp.tools.backlinks import BACKLINKS_SUMMARY
from serpstat_mcp.tools.domain import DOMAIN_KEYWORDS, DOMAIN_UNIQ_KEYWORDS, DOMAINS_INFO
from serpstat_mcp.tools.rank_tracking import RT_KEYWORD_SERP_HISTORY, RT_URL_SERP_HISTORY
from serpstat_mcp.validation import ParamsValidationError, Violation, validate, validate_or_raise
from serpstat_mcp.validation.schema import (
    anything,
    array,
    enum,
    integer,
    mapping,
    obj,
    one_of,
    optional,
    required,
    schema,
    string,
)

COMPLEX_FILTER_ITEM = one_of(
    obj(
        required("field", enum("url_from", "anchor", "links_count")),
        required("compareType", enum("gt", "lt", "eq", "contains")),
        required("value", array(anything())),
    ),
    obj(required("additional_filters", enum("no_subdomains", "only_main_page", "last_week"))),
)

FILTERED = schema(
    required("query", string(min_length=1)),
    optional("complexFilter", array(array(COMPLEX_FILTER_ITEM))),
)


def _paths(result) -> list[str]:
    return [violation.location for violation in result.violations]


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


def test_defaults_injected_when_absent():
    result = validate(BACKLINKS_SUMMARY.input_schema, {"query": "example.com"})
    assert result.ok
    assert result.params == {"query": "example.com", "searchType": "domain"}


def test_pagination_defaults():
    result = validate(DOMAIN_KEYWORDS.input_schema, {"domain": "example.com", "se": "g_us"})
    assert result.ok
    assert result.params["page"] == 1
    assert result.params["size"] == 100


def test_explicit_value_overrides_default():
    result = validate(DOMAIN_KEYWORDS.input_schema, {"domain": "example.com", "se": "g_us", "size": 5})
    assert result.params["size"] == 5


def test_optional_without_default_stays_absent():
    result = validate(DOMAIN_KEYWORDS.input_schema, {"domain": "example.com", "se": "g_us"})
    assert "withSubdomains" not in result.params
    assert "filters" not in result.params


def test_mutable_defaults_are_not_shared():
    shape = schema(optional("tags", array(string()), default=[]))
    first = validate(shape, {}).params
    first["tags"].append("mutated")
    assert validate(shape, {}).params == {"tags": []}


# ---------------------------------------------------------------------------
# Required fields and paths
# ---------------------------------------------------------------------------


def test_missing_required_fields_reported_at_their_paths():
    result = validate(DOMAIN_KEYWORDS.input_schema, {})
    assert not result.ok
    assert _paths(result) == ["domain", "se"]
    assert all(violation.message == "Required" for violation in result.violations)


def test_nested_required_field_path():
    shape = schema(required("filters", obj(required("traff", integer()))))
    result = validate(shape, {"filters": {}})
    assert result.violations == (Violation(path=("filters", "traff"), message="Required"),)
    assert result.message() == "filters.traff: Required"


def test_all_violations_collected_in_one_pass():
    result = validate(BACKLINKS_SUMMARY.input_schema, {"query": "bad_domain", "searchType": "everything"})
    assert _paths(result) == ["query", "searchType"]


def test_array_item_paths_use_indices():
    shape = schema(required("ids", array(integer(minimum=1))))
    result = validate(shape, {"ids": [1, 0, 3, -1]})
    assert _paths(result) == ["ids.1", "ids.3"]


def test_non_object_input():
    result = validate(BACKLINKS_SUMMARY.input_schema, None)
    assert result.violations == (Violation(path=(), message="Expected object, received null"),)


# ---------------------------------------------------------------------------
# Strict mode
# ---------------------------------------------------------------------------


def test_undeclared_key_rejected_even_when_everything_else_is_valid():
    result = validate(BACKLINKS_SUMMARY.input_schema, {"query": "example.com", "serchType": "domain"})
    assert not result.ok
    assert result.message() == ": Unrecognized key(s) in object: 'serchType'"


def test_undeclared_keys_listed_together():
    result = validate(BACKLINKS_SUMMARY.input_schema, {"query": "example.com", "a": 1, "b": 2})
    assert len(result.violations) == 1
    assert result.violations[0].message == "Unrecognized key(s) in object: 'a', 'b'"


def test_nested_undeclared_key_reported_at_object_path():
    params = {"domain": "example.com", "se": "g_us", "filters": {"traff": 10, "traffic": 5}}
    result = validate(DOMAIN_KEYWORDS.input_schema, params)
    assert result.message() == "filters: Unrecognized key(s) in object: 'traffic'"


def test_non_strict_schema_drops_unknown_keys():
    shape = schema(required("a", integer()), strict=False)
    result = validate(shape, {"a": 1, "b": 2})
    assert result.ok
    assert result.params == {"a": 1}


def test_mapping_values_validated():
    shape = schema(required("sort", mapping(enum("asc", "desc"))))
    assert validate(shape, {"sort": {"cost": "asc"}}).ok
    assert _paths(validate(shape, {"sort": {"cost": "up"}})) == ["sort.cost"]


# ---------------------------------------------------------------------------
# No coercion
# ---------------------------------------------------------------------------


def test_numeric_string_is_not_coerced():
    result = validate(DOMAIN_KEYWORDS.input_schema, {"domain": "example.com", "se": "g_us", "size": "10"})
    assert result.message() == "size: Expected integer, received string"


def test_boolean_string_is_not_coerced():
    result = validate(DOMAIN_KEYWORDS.input_schema, {"domain": "example.com", "se": "g_us", "withSubdomains": "true"})
    assert result.message() == "withSubdomains: Expected boolean, received string"


# ---------------------------------------------------------------------------
# Unions
# ---------------------------------------------------------------------------


def test_union_first_matching_alternative_wins():
    params = {
        "query": "example.com",
        "complexFilter": [
            [{"field": "anchor", "compareType": "contains", "value": ["seo"]}],
            [{"additional_filters": "last_week"}],
        ],
    }
    result = validate(FILTERED, params)
    assert result.ok
    assert result.params == params


def test_union_reports_closest_alternative():
    params = {
        "query": "example.com",
        "complexFilter": [[{"field": "anchor", "compareType": "gte", "value": ["seo"]}]],
    }
    result = validate(FILTERED, params)
    assert result.violations == (
        Violation(
            path=("complexFilter", 0, 0, "compareType"),
            message="Invalid enum value. Expected 'gt' | 'lt' | 'eq' | 'contains', received 'gte'",
        ),
    )
    assert result.violations[0].location == "complexFilter.0.0.compareType"


def test_union_prefers_alternative_without_structural_mismatch():
    params = {"query": "x", "complexFilter": [[{}, {"additional_filters": "yesterday"}]]}
    result = validate(FILTERED, params)
    # Empty object: both alternatives only miss required fields; the second misses fewer.
    assert _paths(result) == ["complexFilter.0.0.additional_filters", "complexFilter.0.1.additional_filters"]


def test_union_type_mismatch_on_every_alternative():
    result = validate(FILTERED, {"query": "x", "complexFilter": [["anchor"]]})
    assert result.violations == (
        Violation(path=("complexFilter", 0, 0), message="Expected object, received string"),
    )

    mixed = schema(required("value", one_of(string(), integer())))
    assert validate(mixed, {"value": True}).message() == "value: Invalid input"


# ---------------------------------------------------------------------------
# Refinements
# ---------------------------------------------------------------------------


def test_refinement_rejects_minus_domain_among_domains():
    params = {"se": "g_us", "domains": ["a-site.com", "b-site.com"], "minusDomain": "a-site.com"}
    result = validate(DOMAIN_UNIQ_KEYWORDS.input_schema, params)
    assert result.message() == "minusDomain: minusDomain must not be one of domains"


def test_refinement_skipped_while_fields_are_invalid():
    params = {"se": "g_us", "domains": ["a-site.com", "a-site.com"], "minusDomain": "a-site.com"}
    result = validate(DOMAIN_UNIQ_KEYWORDS.input_schema, params)
    assert result.message() == "domains: domains must be unique"


def test_duplicate_domains_rejected():
    result = validate(DOMAINS_INFO.input_schema, {"domains": ["a.com", "a.com"], "se": "g_us"})
    assert result.message() == "domains: domains must be unique"


def test_date_range_must_be_ordered():
    params = {"projectId": 1, "projectRegionId": 2, "dateFrom": "2025-03-01", "dateTo": "2025-01-31"}
    result = validate(RT_KEYWORD_SERP_HISTORY.input_schema, params)
    assert result.message() == "dateTo: dateFrom must not be later than dateTo"

    params["dateTo"] = "2025-03-31"
    assert validate(RT_KEYWORD_SERP_HISTORY.input_schema, params).ok


def test_date_format():
    params = {"projectId": 1, "projectRegionId": 2, "dateFrom": "01.03.2025"}
    result = validate(RT_KEYWORD_SERP_HISTORY.input_schema, params)
    assert result.message() == "dateFrom: Date must be in YYYY-MM-DD format"


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------


def test_normalized_params_are_a_copy():
    keywords = ["seo", "ppc"]
    raw = {"domain": "example.com", "se": "g_us", "keywords": keywords}
    params = validate(DOMAIN_KEYWORDS.input_schema, raw).params
    params["keywords"].append("smm")
    assert keywords == ["seo", "ppc"]


@pytest.mark.parametrize(
    "spec, raw",
    [
        (BACKLINKS_SUMMARY, {"query": "example.com"}),
        (DOMAIN_KEYWORDS, {"domain": "example.com", "se": "g_uk", "filters": {"position_from": 1}}),
        (DOMAINS_INFO, {"domains": ["example.com"], "se": "g_us"}),
        (RT_KEYWORD_SERP_HISTORY, {"projectId": 1, "projectRegionId": 2}),
        (FILTERED, {"query": "q", "complexFilter": [[{"additional_filters": "no_subdomains"}]]}),
    ],
)
def test_normalization_is_idempotent(spec, raw):
    shape = getattr(spec, "input_schema", spec)
    first = validate(shape, raw)
    assert first.ok
    second = validate(shape, first.params)
    assert second.ok
    assert second.params == first.params


def test_every_catalogue_default_satisfies_its_constraint():
    for spec in ALL_TOOLS:
        for field in spec.input_schema.field_specs:
            if field.has_default:
                assert field.constraint.reason(field.default) is None, (spec.name, field.name)


# ---------------------------------------------------------------------------
# validate_or_raise
# ---------------------------------------------------------------------------


def test_validate_or_raise_message():
    with pytest.raises(ParamsValidationError) as excinfo:
        validate_or_raise(BACKLINKS_SUMMARY.input_schema, {"query": "bad_domain", "extra": True})
    assert str(excinfo.value) == (
        "Invalid parameters: query: Invalid domain name format, "
        ": Unrecognized key(s) in object: 'extra'"
    )
    assert len(excinfo.value.violations) == 2


def test_validate_or_raise_returns_params():
    assert validate_or_raise(BACKLINKS_SUMMARY.input_schema, {"query": "example.com"}) == {
        "query": "example.com",
        "searchType": "domain",
    }


# ---------------------------------------------------------------------------
# Schema composition
# ---------------------------------------------------------------------------


def test_extend_appends_fields_and_keeps_refinements():
    base = RT_KEYWORD_SERP_HISTORY.input_schema
    extended = RT_URL_SERP_HISTORY.input_schema
    assert extended.names == base.names | {"domain"}
    assert extended.get("domain").required is False
    assert base.get("domain") is None
    assert extended.refinements == base.refinements

    params = {"projectId": 1, "projectRegionId": 2, "dateFrom": "2025-02-01", "dateTo": "2025-01-01"}
    assert validate(extended, params).message() == "dateTo: dateFrom must not be later than dateTo"


def test_duplicate_field_names_rejected():
    with pytest.raises(ValueError, match="duplicate field names"):
        schema(required("a", integer()), optional("a", string()))


def test_unique_ids_compare_numerically():
    shape = schema(required("ids", array(integer(), unique=True)))
    assert validate(shape, {"ids": [1, 1.0]}).message() == "ids: Array items must be unique"
