"""Keyword research tools (SerpstatKeywordProcedure)."""

from __future__ import annotations

from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.tools.common import (
    CONCURRENCY_FILTER,
    COST_FILTER_WITH_MAX,
    DIFFICULTY_FILTER,
    INTENTS_FILTER,
    KEYWORD,
    KEYWORD_LENGTH_FILTER,
    REGION_QUERIES_FILTER_WITH_MAX,
    pagination,
    se_field,
    sort_by,
)
from serpstat_mcp.validation.schema import array, boolean, obj, optional, required, schema, string

CATEGORY = "keywords"

MAX_MINUS_KEYWORDS_ITEMS = 50

_TEXT_LIST = array(string())

KEYWORDS = ToolSpec(
    name="get_keywords",
    description=(
        "Get organic keywords related to the given keyword that domains rank for in the "
        "Google top-100, with search volume, CPC and competition for each keyword."
    ),
    method="SerpstatKeywordProcedure.getKeywords",
    category=CATEGORY,
    input_schema=schema(
        required("keyword", KEYWORD, "Seed keyword"),
        se_field(),
        optional(
            "minusKeywords",
            array(KEYWORD, max_items=MAX_MINUS_KEYWORDS_ITEMS),
            "Keywords to exclude from results",
        ),
        optional("withIntents", boolean(), "Include keyword intents (g_ua and g_us only)"),
        *pagination(),
        optional(
            "sort",
            sort_by(
                "region_queries_count",
                "cost",
                "difficulty",
                "concurrency",
                "found_results",
                "keyword_length",
            ),
        ),
        optional(
            "filters",
            obj(
                *COST_FILTER_WITH_MAX,
                *REGION_QUERIES_FILTER_WITH_MAX,
                *KEYWORD_LENGTH_FILTER,
                *DIFFICULTY_FILTER,
                *CONCURRENCY_FILTER,
                optional("right_spelling", boolean()),
                optional("keyword_contain", _TEXT_LIST),
                optional("keyword_not_contain", _TEXT_LIST),
                optional("keyword_contain_one_of", _TEXT_LIST),
                optional("keyword_not_contain_one_of", _TEXT_LIST),
                optional("keyword_contain_broad_match", _TEXT_LIST),
                optional("keyword_not_contain_broad_match", _TEXT_LIST),
                optional("lang", string()),
                *INTENTS_FILTER,
            ),
        ),
    ),
)

TOOLS = (KEYWORDS,)
