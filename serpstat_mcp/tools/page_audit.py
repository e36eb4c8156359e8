"""One-page audit tools (AuditOnePage)."""

from __future__ import annotations

from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.tools.common import POSITIVE_ID
from serpstat_mcp.tools.site_audit import DEFAULT_AUDIT_LIMIT, MIN_AUDIT_OFFSET
from serpstat_mcp.validation.schema import integer, optional, required, schema, string, url

CATEGORY = "page_audit"

USER_AGENT_IDS = (0, 1, 2, 3, 4, 5)

START_SCAN = ToolSpec(
    name="page_audit_start_scan",
    description=(
        "Scan a single web page with JavaScript rendering and return pageId and reportId. "
        "Costs 10 credits per scan. Poll page_audit_get_reports_for_page until "
        "progress=100, then read page_audit_get_results_report."
    ),
    method="AuditOnePage.scan",
    category=CATEGORY,
    input_schema=schema(
        required("name", string(min_length=1), "Name of the audit project"),
        required("url", url(), "Page URL to scan"),
        required(
            "userAgent",
            integer(choices=USER_AGENT_IDS),
            "User agent ID (0=Chrome, 1=Serpstat, 2=Google, 3=Yandex, 4=Firefox, 5=IE)",
        ),
        optional("httpAuthLogin", string(), "Login for Basic HTTP authentication"),
        optional("httpAuthPass", string(), "Password for Basic HTTP authentication"),
    ),
)

PAGES_LIST = ToolSpec(
    name="page_audit_get_last_scans",
    description=(
        "List all one-page audit projects with pageId, URL, status and the latest report "
        "summary. Does not consume API credits."
    ),
    method="AuditOnePage.getPagesList",
    category=CATEGORY,
    input_schema=schema(
        optional("limit", integer(minimum=1), "Number of items to return", default=DEFAULT_AUDIT_LIMIT),
        optional("offset", integer(minimum=MIN_AUDIT_OFFSET), "Offset for pagination", default=MIN_AUDIT_OFFSET),
        optional("teamMemberId", integer(), "Filter by team member ID"),
    ),
)

REPORTS_FOR_PAGE = ToolSpec(
    name="page_audit_get_reports_for_page",
    description=(
        "Get the history of audit reports for a page with SDO score, error counts and "
        "progress. Does not consume API credits."
    ),
    method="AuditOnePage.getReportsListByPage",
    category=CATEGORY,
    input_schema=schema(
        required("pageId", POSITIVE_ID, "Page ID to get reports for"),
        optional("limit", integer(minimum=1), "Number of reports to return"),
        optional("offset", integer(minimum=MIN_AUDIT_OFFSET), "Offset for pagination"),
    ),
)

PAGE_AUDIT = ToolSpec(
    name="page_audit_get_results_report",
    description=(
        "Get detailed audit results for a page: errors grouped by category with priority "
        "and counts, page details and the report summary. Does not consume API credits."
    ),
    method="AuditOnePage.getPageAudit",
    category=CATEGORY,
    input_schema=schema(required("pageId", POSITIVE_ID, "Page ID to get audit results for")),
)

TOOLS = (START_SCAN, PAGES_LIST, REPORTS_FOR_PAGE, PAGE_AUDIT)
