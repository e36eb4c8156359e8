"""Account limits tools (SerpstatLimitsProcedure); neither consumes API credits."""

from __future__ import annotations

from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.validation.schema import schema

CATEGORY = "credits"

AUDIT_STATS = ToolSpec(
    name="get_credits_for_audit_stats",
    description=(
        "Check available audit credits: one-page audit, JavaScript scanning and page "
        "crawl limits. Use before running site audits. Does not consume API credits."
    ),
    method="SerpstatLimitsProcedure.getAuditStats",
    category=CATEGORY,
    input_schema=schema(),
)

CREDITS_STATS = ToolSpec(
    name="get_credits_stats",
    description=(
        "Check available API credits, usage statistics, account information and browser "
        "plugin limits. Does not consume API credits."
    ),
    method="SerpstatLimitsProcedure.getStats",
    category=CATEGORY,
    input_schema=schema(),
)

TOOLS = (AUDIT_STATS, CREDITS_STATS)
