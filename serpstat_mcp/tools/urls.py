"""URL analysis tools (SerpstatUrlProcedure)."""

from __future__ import annotations

from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.tools.common import (
    CONCURRENCY_FILTER,
    COST_FILTER,
    COST_FILTER_WITH_MAX,
    DIFFICULTY_FILTER,
    DOMAIN,
    INTENTS_FILTER,
    KEYWORD,
    MAX_URL_CONTAIN_LENGTH,
    POSITION_FILTER,
    REGION_QUERIES_FILTER,
    REGION_QUERIES_WIDE_FILTER,
    pagination,
    range_filter,
    se_field,
    sort_by,
)
from serpstat_mcp.validation.schema import (
    array,
    boolean,
    enum,
    integer,
    number,
    obj,
    optional,
    required,
    schema,
    string,
    url,
)

CATEGORY = "url"

URL_OUTPUT_DATA_TYPES = ("traffic", "keywords")

URL_SUMMARY_TRAFFIC = ToolSpec(
    name="get_url_summary_traff",
    description=(
        "Return traffic and keyword statistics for the pages of a domain whose URL "
        "contains the given mask."
    ),
    method="SerpstatUrlProcedure.getSummaryTraffic",
    category=CATEGORY,
    input_schema=schema(
        se_field(),
        required("domain", DOMAIN, "Domain to analyze"),
        required(
            "urlContains",
            string(1, MAX_URL_CONTAIN_LENGTH),
            "URL mask the analyzed pages must contain, e.g. /blog/",
        ),
        optional("output_data", enum(*URL_OUTPUT_DATA_TYPES), "Which statistics to return"),
    ),
)

URL_COMPETITORS = ToolSpec(
    name="get_url_competitors",
    description=(
        "Return competitor URLs that rank for the same keywords in the Google top-10. "
        "The URL must include its protocol and rank for 10+ top-10 keywords. "
        "API cost: 1 credit per result row."
    ),
    method="SerpstatUrlProcedure.getUrlCompetitors",
    category=CATEGORY,
    input_schema=schema(
        se_field(),
        required("url", url(), "Page URL including protocol"),
        optional("sort", sort_by("cnt")),
        *pagination(),
    ),
)

URL_KEYWORDS = ToolSpec(
    name="get_url_keywords",
    description=(
        "Return keywords for which the URL ranks in the Google top-100 with positions, "
        "traffic, difficulty and search volume. API cost: 1 credit per result row."
    ),
    method="SerpstatUrlProcedure.getUrlKeywords",
    category=CATEGORY,
    input_schema=schema(
        se_field(),
        required("url", url(), "Page URL including protocol"),
        optional("withIntents", boolean()),
        optional("sort", sort_by("position", "difficulty", "cost", "traff")),
        optional(
            "filters",
            obj(
                *COST_FILTER_WITH_MAX,
                *POSITION_FILTER,
                *CONCURRENCY_FILTER,
                optional("keyword_length", integer(minimum=1)),
                *DIFFICULTY_FILTER,
                optional("traff", integer(minimum=0)),
                *REGION_QUERIES_FILTER,
                *REGION_QUERIES_WIDE_FILTER,
                optional("url_contains", string()),
                optional("right_spelling", boolean()),
                optional("keyword_contain", string()),
                optional("keyword_not_contain", string()),
                optional("keyword_contain_one_of", string()),
                optional("keyword_not_contain_one_of", string()),
                *INTENTS_FILTER,
            ),
        ),
        *pagination(),
    ),
)

URL_MISSING_KEYWORDS = ToolSpec(
    name="get_url_missing_keywords",
    description=(
        "Find keywords where competitors rank in the top-20 but the URL does not. "
        "The returned weight is the number of competitor URLs ranking for the keyword. "
        "API cost: 1 credit per result row."
    ),
    method="SerpstatUrlProcedure.getUrlMissingKeywords",
    category=CATEGORY,
    input_schema=schema(
        required("url", url(), "Page URL including protocol"),
        se_field(),
        optional("sort", sort_by("weight")),
        optional(
            "filters",
            obj(
                *REGION_QUERIES_FILTER,
                *REGION_QUERIES_WIDE_FILTER,
                *COST_FILTER,
                optional("keyword", string()),
                optional("minus_keywords", array(KEYWORD)),
                *range_filter("concurrency", number(minimum=0)),
                *range_filter("weight", integer(minimum=0)),
                optional("right_spelling", boolean()),
            ),
        ),
        *pagination(),
    ),
)

TOOLS = (
    URL_SUMMARY_TRAFFIC,
    URL_COMPETITORS,
    URL_KEYWORDS,
    URL_MISSING_KEYWORDS,
)
