"""Tool catalogue: one ToolSpec per exposed Serpstat method, grouped by category."""

from __future__ import annotations

from serpstat_mcp.tools import (
    backlinks,
    credits,
    domain,
    keywords,
    page_audit,
    projects,
    rank_tracking,
    site_audit,
    urls,
)
from serpstat_mcp.tools.base import ToolSpec

_MODULES = (domain, backlinks, keywords, urls, projects, credits, rank_tracking, site_audit, page_audit)

CATEGORIES: dict[str, tuple[ToolSpec, ...]] = {module.CATEGORY: module.TOOLS for module in _MODULES}

ALL_TOOLS: tuple[ToolSpec, ...] = tuple(spec for module in _MODULES for spec in module.TOOLS)

__all__ = ["ALL_TOOLS", "CATEGORIES", "ToolSpec"]
