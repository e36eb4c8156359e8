"""Site audit tools (AuditSite); none of them consume API credits except ``start``."""

from __future__ import annotations

from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.tools.common import MAX_DOMAIN_LENGTH, MIN_DOMAIN_LENGTH, POSITIVE_ID
from serpstat_mcp.validation.schema import (
    array,
    boolean,
    enum,
    integer,
    obj,
    optional,
    required,
    schema,
    string,
)

CATEGORY = "site_audit"

DEFAULT_AUDIT_LIMIT = 30
DEFAULT_ERROR_ELEMENTS_LIMIT = 10
MIN_AUDIT_OFFSET = 0
ERROR_DISPLAY_MODES = ("all", "new", "solved")
MIN_SCAN_SPEED = 1
MAX_SCAN_SPEED = 30

_USER_AGENT = integer(0, 5)
_PERIOD_OPTION = integer(0, 5)
_SCAN_TYPE = integer(1, 3)
_THRESHOLD = integer(minimum=0)

_MAIN_SETTINGS = obj(
    required("domain", string(MIN_DOMAIN_LENGTH, MAX_DOMAIN_LENGTH)),
    required("name", string(min_length=MIN_DOMAIN_LENGTH)),
    required("subdomainsCheck", boolean()),
    required("pagesLimit", integer(minimum=1)),
    required("scanSpeed", integer(MIN_SCAN_SPEED, MAX_SCAN_SPEED)),
    required("autoSpeed", boolean()),
    required("scanNoIndex", boolean()),
    required("autoUserAgent", boolean()),
    required("scanWrongCanonical", boolean()),
    required("scanDuration", integer(minimum=0)),
    required("folderDepth", integer(minimum=0)),
    required("urlDepth", integer(minimum=0)),
    required("userAgent", _USER_AGENT, "0=Chrome, 1=Serpstat, 2=Google, 3=Yandex, 4=Firefox, 5=IE"),
    required("robotsTxt", boolean()),
    required("withImages", boolean()),
)

_KEYWORDS_BLOCK = obj(
    required("checked", boolean()),
    required("keywords", string(), "Comma-separated keywords"),
)

_ERRORS_SETTINGS = obj(
    *(
        required(name, _THRESHOLD)
        for name in (
            "tiny_title",
            "long_title",
            "tiny_desc",
            "long_desc",
            "long_url",
            "large_image_size",
            "large_page_size",
            "many_external_links",
        )
    )
)


def _project_only() -> tuple:
    return (required("projectId", POSITIVE_ID, "Audit project ID"),)


def _paging(default_limit: int = DEFAULT_AUDIT_LIMIT) -> tuple:
    return (
        optional("limit", integer(minimum=1), "Number of items to return", default=default_limit),
        optional("offset", integer(minimum=MIN_AUDIT_OFFSET), "Offset for pagination", default=MIN_AUDIT_OFFSET),
    )


GET_SETTINGS = ToolSpec(
    name="get_site_audit_settings",
    description=(
        "Get the current configuration of an existing audit project: main settings, "
        "scan filters, authentication, notifications, schedule and error thresholds."
    ),
    method="AuditSite.getSettings",
    category=CATEGORY,
    input_schema=schema(*_project_only()),
)

SET_SETTINGS = ToolSpec(
    name="set_site_audit_settings",
    description=(
        "Update the configuration of an audit project. Start from "
        "get_site_audit_project_default_settings, modify it and save it with this tool. "
        "scanSetting.type: 1=whole site, 2=URL list, 3=sitemap."
    ),
    method="AuditSite.setSettings",
    category=CATEGORY,
    input_schema=schema(
        *_project_only(),
        required("mainSettings", _MAIN_SETTINGS),
        required("dontScanKeywordsBlock", _KEYWORDS_BLOCK),
        required("onlyScanKeywordsBlock", _KEYWORDS_BLOCK),
        required("baseAuthBlock", obj(required("login", string()), required("password", string()))),
        required(
            "mailTriggerSettings",
            obj(
                required("emails", array(string())),
                required("interval", _PERIOD_OPTION),
                required("enabled", boolean()),
            ),
        ),
        required("scheduleSettings", obj(required("scheduleRepeatOption", _PERIOD_OPTION))),
        required(
            "scanSetting",
            obj(
                required("type", _SCAN_TYPE),
                required("list", array(string())),
                optional("importedFilename", string()),
            ),
        ),
        optional("errorsSettings", _ERRORS_SETTINGS),
    ),
)

START_AUDIT = ToolSpec(
    name="start_site_audit",
    description=(
        "Launch an audit scan for a project and return its reportId. Costs 1 credit per "
        "page, 10 per page with JavaScript rendering. Track progress with get_site_audits_list."
    ),
    method="AuditSite.start",
    category=CATEGORY,
    input_schema=schema(*_project_only()),
)

STOP_AUDIT = ToolSpec(
    name="stop_site_audit",
    description="Stop the active audit scan of a project. Partial results may remain available.",
    method="AuditSite.stop",
    category=CATEGORY,
    input_schema=schema(*_project_only()),
)

CATEGORIES_STATISTIC = ToolSpec(
    name="get_site_audit_results_by_categories",
    description=(
        "Get aggregated error counts per category and priority for an audit report. "
        "For the per-error breakdown use get_site_audit_deteailed_report."
    ),
    method="AuditSite.getCategoriesStatistic",
    category=CATEGORY,
    input_schema=schema(required("reportId", POSITIVE_ID, "Audit report ID")),
)

HISTORY_BY_ERROR = ToolSpec(
    name="get_site_audit_history",
    description=(
        "Track how one error type (e.g. no_desc) changed across all audits of a project."
    ),
    method="AuditSite.getHistoryByCountError",
    category=CATEGORY,
    input_schema=schema(
        *_project_only(),
        required("errorName", string(), "Error key as returned by get_site_audit_deteailed_report"),
        *_paging(),
    ),
)

AUDITS_LIST = ToolSpec(
    name="get_site_audits_list",
    description=(
        "List all audit reports of a project with date, SDO score, scanned pages, issue "
        "counts and progress. The starting point for audit analysis."
    ),
    method="AuditSite.getList",
    category=CATEGORY,
    input_schema=schema(*_project_only(), *_paging()),
)

SCAN_USER_URL_LIST = ToolSpec(
    name="get_site_audit_scanned_urls_list",
    description=(
        "Get the configured URL list for scanning. Only available when scanSetting.type "
        "is 2 (URL list) or 3 (sitemap)."
    ),
    method="AuditSite.getScanUserUrlList",
    category=CATEGORY,
    input_schema=schema(*_project_only()),
)

DEFAULT_SETTINGS = ToolSpec(
    name="get_site_audit_project_default_settings",
    description=(
        "Get the default settings template for a new audit project. Modify it and save "
        "it with set_site_audit_settings."
    ),
    method="AuditSite.getDefaultSettings",
    category=CATEGORY,
    input_schema=schema(),
)

BASIC_INFO = ToolSpec(
    name="get_site_audit_bref_info",
    description=(
        "Get a quick summary of one audit: SDO score, error counts by priority, checked "
        "pages and progress."
    ),
    method="AuditSite.getBasicInfo",
    category=CATEGORY,
    input_schema=schema(required("reportId", POSITIVE_ID, "Audit report ID")),
)

REPORT_WITHOUT_DETAILS = ToolSpec(
    name="get_site_audit_deteailed_report",
    description=(
        "Get the complete error breakdown of an audit grouped by category. Pass "
        "compareReportId to get new and fixed counts against an earlier audit."
    ),
    method="AuditSite.getReportWithoutDetails",
    category=CATEGORY,
    input_schema=schema(
        required("reportId", POSITIVE_ID, "Audit report ID"),
        optional("compareReportId", POSITIVE_ID, "Earlier report to compare with"),
    ),
)

ERROR_ELEMENTS = ToolSpec(
    name="get_site_audit_pages_spec_errors",
    description=(
        "List the pages or images affected by one error type, with the CRC needed by "
        "get_site_audit_elements_with_issues."
    ),
    method="AuditSite.getErrorElements",
    category=CATEGORY,
    input_schema=schema(
        required("reportId", POSITIVE_ID, "Audit report ID"),
        required("compareReportId", POSITIVE_ID, "Report to compare with"),
        *_project_only(),
        required("errorName", string(), "Error key, e.g. image_no_alt"),
        optional("mode", enum(*ERROR_DISPLAY_MODES), "all, new or solved errors", default="all"),
        *_paging(DEFAULT_ERROR_ELEMENTS_LIMIT),
    ),
)

SUB_ELEMENTS_BY_CRC = ToolSpec(
    name="get_site_audit_elements_with_issues",
    description=(
        "Show where a problematic element (image, script, link) is used, by the CRC from "
        "get_site_audit_pages_spec_errors. Page-level errors have no sub elements."
    ),
    method="AuditSite.getSubElementsByCrc",
    category=CATEGORY,
    input_schema=schema(
        required("reportId", POSITIVE_ID, "Audit report ID"),
        optional("compareReportId", POSITIVE_ID, "Report to compare with"),
        *_project_only(),
        required("errorName", string(), "Error key"),
        optional("mode", enum(*ERROR_DISPLAY_MODES), "all, new or solved errors", default="all"),
        *_paging(),
        required("crc", integer(), "urlCrc or imageCrc of the element"),
    ),
)

TOOLS = (
    GET_SETTINGS,
    SET_SETTINGS,
    START_AUDIT,
    STOP_AUDIT,
    CATEGORIES_STATISTIC,
    HISTORY_BY_ERROR,
    AUDITS_LIST,
    SCAN_USER_URL_LIST,
    DEFAULT_SETTINGS,
    BASIC_INFO,
    REPORT_WITHOUT_DETAILS,
    ERROR_ELEMENTS,
    SUB_ELEMENTS_BY_CRC,
)
