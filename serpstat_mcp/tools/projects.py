"""Project management tools (ProjectProcedure)."""

from __future__ import annotations

from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.tools.common import DEFAULT_PAGE, DOMAIN, POSITIVE_ID
from serpstat_mcp.validation.schema import array, integer, obj, optional, required, schema, string

CATEGORY = "projects"

PROJECT_ALLOWED_PAGE_SIZES = (20, 50, 100, 500, 1000)
DEFAULT_PROJECT_PAGE_SIZE = 100
MAX_PROJECT_NAME_LENGTH = 100
MAX_PROJECT_GROUP_NAME_LENGTH = 100

CREATE_PROJECT = ToolSpec(
    name="create_project",
    description="Create a new project in Serpstat for tracking SEO metrics and site audits.",
    method="ProjectProcedure.createProject",
    category=CATEGORY,
    input_schema=schema(
        required("domain", DOMAIN, "Project domain, e.g. example.com"),
        required("name", string(1, MAX_PROJECT_NAME_LENGTH), "Project name"),
        optional(
            "groups",
            array(obj(required("name", string(1, MAX_PROJECT_GROUP_NAME_LENGTH)))),
            "Project groups to attach the project to",
        ),
    ),
)

DELETE_PROJECT = ToolSpec(
    name="delete_project",
    description=(
        "Permanently delete a Serpstat project by ID. This cannot be undone: always ask "
        "the user for explicit confirmation first."
    ),
    method="ProjectProcedure.deleteProject",
    category=CATEGORY,
    input_schema=schema(required("project_id", POSITIVE_ID, "Project ID to delete")),
)

LIST_PROJECTS = ToolSpec(
    name="list_projects",
    description="Retrieve the projects associated with the account, with pagination support.",
    method="ProjectProcedure.getProjects",
    category=CATEGORY,
    input_schema=schema(
        optional("page", integer(minimum=1), "Page number", default=DEFAULT_PAGE),
        optional(
            "size",
            integer(choices=PROJECT_ALLOWED_PAGE_SIZES),
            "Projects per page",
            default=DEFAULT_PROJECT_PAGE_SIZE,
        ),
    ),
)

TOOLS = (CREATE_PROJECT, DELETE_PROJECT, LIST_PROJECTS)
