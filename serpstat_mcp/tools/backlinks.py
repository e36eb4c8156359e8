"""Backlinks tools (SerpstatBacklinksProcedure)."""

from __future__ import annotations

from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.tools.common import DOMAIN, SEARCH_TYPES
from serpstat_mcp.validation.schema import enum, optional, required, schema

CATEGORY = "backlinks"

BACKLINKS_SUMMARY = ToolSpec(
    name="get_backlinks_summary",
    description=(
        "Get a backlinks summary for a domain or subdomain: referring domains, backlinks "
        "count, link types, quality metrics and recent changes."
    ),
    method="SerpstatBacklinksProcedure.getSummaryV2",
    category=CATEGORY,
    input_schema=schema(
        required("query", DOMAIN, "Domain to analyze, e.g. example.com"),
        optional(
            "searchType",
            enum(*SEARCH_TYPES),
            "Analyze the domain alone or together with its subdomains",
            default="domain",
        ),
    ),
)

TOOLS = (BACKLINKS_SUMMARY,)
