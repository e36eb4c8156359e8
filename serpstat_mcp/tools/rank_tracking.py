"""Rank tracker tools (RtApi*Procedure); none of them consume API credits."""

from __future__ import annotations

from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.tools.common import DATE_PATTERN, DEFAULT_PAGE, POSITIVE_ID, SORT_DIRECTION
from serpstat_mcp.validation.schema import (
    FieldSpec,
    array,
    boolean,
    enum,
    integer,
    optional,
    refine,
    required,
    schema,
    string,
)

CATEGORY = "rank_tracking"

RT_ALLOWED_PAGE_SIZES = (20, 50, 100, 500)
DEFAULT_RT_PAGE_SIZE = 100
RT_SERP_HISTORY_SORT_TYPES = ("keyword", "date")
MAX_RT_KEYWORDS_FILTER = 100

_DATE = string(pattern=DATE_PATTERN, message="Date must be in YYYY-MM-DD format")


def _rt_pagination() -> tuple[FieldSpec, FieldSpec]:
    return (
        optional("page", integer(minimum=1), "Page number", default=DEFAULT_PAGE),
        optional(
            "pageSize",
            integer(choices=RT_ALLOWED_PAGE_SIZES),
            "Results per page; 20-50 recommended for SERP history",
            default=DEFAULT_RT_PAGE_SIZE,
        ),
    )


def _dates_in_order(params: dict) -> bool:
    if "dateFrom" not in params or "dateTo" not in params:
        return True
    return params["dateFrom"] <= params["dateTo"]


_HISTORY_FIELDS = (
    required("projectId", POSITIVE_ID, "Rank tracker project ID"),
    required("projectRegionId", POSITIVE_ID, "Project region ID"),
    *_rt_pagination(),
    optional("dateFrom", _DATE, "Start date (YYYY-MM-DD)"),
    optional("dateTo", _DATE, "End date (YYYY-MM-DD)"),
    optional("sort", enum(*RT_SERP_HISTORY_SORT_TYPES), "Sort by keyword or date"),
    optional("order", SORT_DIRECTION, "Sort direction"),
    optional(
        "keywords",
        array(string(), max_items=MAX_RT_KEYWORDS_FILTER),
        "Only return history for these keywords",
    ),
    optional("withTags", boolean(), "Include keyword tags", default=False),
)

_HISTORY_SCHEMA = schema(
    *_HISTORY_FIELDS,
    refinements=(refine(_dates_in_order, "dateFrom must not be later than dateTo", "dateTo"),),
)

RT_PROJECTS_LIST = ToolSpec(
    name="get_rt_projects_list",
    description=(
        "List rank tracker projects with ID, name, domain, creation date and tracking "
        "status. Does not consume API credits."
    ),
    method="RtApiProjectProcedure.getProjects",
    category=CATEGORY,
    input_schema=schema(*_rt_pagination()),
)

RT_PROJECT_STATUS = ToolSpec(
    name="get_rt_project_status",
    description=(
        "Get the position update (parsing) status of a rank tracker project region. "
        "Check this before requesting results. Does not consume API credits."
    ),
    method="RtApiProjectProcedure.getProjectStatus",
    category=CATEGORY,
    input_schema=schema(
        required("projectId", POSITIVE_ID, "Rank tracker project ID"),
        required("regionId", POSITIVE_ID, "Project region ID"),
    ),
)

RT_PROJECT_REGIONS = ToolSpec(
    name="get_rt_project_regions_list",
    description=(
        "List the regions configured for a rank tracker project: status, SERP type, "
        "device, search engine and location. Does not consume API credits."
    ),
    method="RtApiSearchEngineProcedure.getProjectRegions",
    category=CATEGORY,
    input_schema=schema(required("projectId", POSITIVE_ID, "Rank tracker project ID")),
)

RT_KEYWORD_SERP_HISTORY = ToolSpec(
    name="get_rt_project_keyword_serp_history",
    description=(
        "Get the full Google top-100 SERP history for tracked keywords of a rank tracker "
        "project. Returns large datasets: use date and keyword filters and a small "
        "pageSize. Does not consume API credits."
    ),
    method="RtApiSerpResultsProcedure.getKeywordsSerpResultsHistory",
    category=CATEGORY,
    input_schema=_HISTORY_SCHEMA,
)

RT_URL_SERP_HISTORY = ToolSpec(
    name="get_rt_project_url_serp_history",
    description=(
        "Get the ranking history of your own domain across all tracked keywords, without "
        "competitor results. Does not consume API credits."
    ),
    method="RtApiSerpResultsProcedure.getUrlsSerpResultsHistory",
    category=CATEGORY,
    input_schema=_HISTORY_SCHEMA.extend(
        optional("domain", string(), "Domain or URL whose positions are returned"),
    ),
)

TOOLS = (
    RT_PROJECTS_LIST,
    RT_PROJECT_STATUS,
    RT_PROJECT_REGIONS,
    RT_KEYWORD_SERP_HISTORY,
    RT_URL_SERP_HISTORY,
)
