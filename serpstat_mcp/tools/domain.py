"""Domain analysis tools (SerpstatDomainProcedure)."""

from __future__ import annotations

from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.tools.common import (
    CONCURRENCY_FILTER,
    COST_FILTER,
    DIFFICULTY_FILTER,
    DOMAIN,
    INTENTS_FILTER,
    KEYWORD,
    KEYWORD_LENGTH_FILTER,
    MAX_URL_CONTAIN_LENGTH,
    POSITION_FILTER,
    REGION_QUERIES_FILTER,
    SORT_DIRECTION,
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
    refine,
    required,
    schema,
    string,
    url,
)

CATEGORY = "domain"

DOMAIN_REGIONS_SORT_FIELDS = ("keywords_count", "country_name_en", "db_name")
MAX_DOMAINS_INFO_ITEMS = 10
DEFAULT_COMPETITORS_SIZE = 10
MAX_COMPETITORS_SIZE = 100
MAX_MINUS_DOMAINS_ITEMS = 50
MAX_KEYWORDS_ITEMS = 50
MAX_UNIQ_DOMAINS = 2
MAX_UNIQ_KEYWORDS_ITEMS = 100
MAX_URL_PREFIX_LENGTH = 500

DOMAINS_INFO = ToolSpec(
    name="get_domains_info",
    description=(
        "Get comprehensive SEO information for multiple domains including visibility, "
        "keywords, traffic, and dynamics."
    ),
    method="SerpstatDomainProcedure.getDomainsInfo",
    category=CATEGORY,
    input_schema=schema(
        required(
            "domains",
            array(
                string(min_length=1),
                1,
                MAX_DOMAINS_INFO_ITEMS,
                unique=True,
                unique_message="domains must be unique",
            ),
            f"Domains to analyze (1-{MAX_DOMAINS_INFO_ITEMS})",
        ),
        se_field(),
        optional(
            "filters",
            obj(
                *range_filter("traff", integer(minimum=1)),
                *range_filter("visible", number(minimum=0)),
            ),
            "Traffic and visibility filters",
        ),
    ),
)

DOMAIN_COMPETITORS = ToolSpec(
    name="get_domain_competitors",
    description=(
        "Get a list of competitor domains for a given domain, including visibility, "
        "traffic, and relevance."
    ),
    method="SerpstatDomainProcedure.getCompetitors",
    category=CATEGORY,
    input_schema=schema(
        required("domain", DOMAIN, "Domain to find competitors for"),
        se_field(),
        optional(
            "size",
            integer(1, MAX_COMPETITORS_SIZE),
            "Number of competitors to return",
            default=DEFAULT_COMPETITORS_SIZE,
        ),
        optional(
            "filters",
            obj(
                optional("visible", number(minimum=0)),
                optional("traff", integer(minimum=0)),
                optional("minus_domains", array(DOMAIN, 1, MAX_MINUS_DOMAINS_ITEMS)),
            ),
        ),
    ),
)

DOMAIN_KEYWORDS = ToolSpec(
    name="get_domain_keywords",
    description=(
        "Get keywords that a domain ranks for in Google search results, with position, "
        "traffic and difficulty for each keyword."
    ),
    method="SerpstatDomainProcedure.getDomainKeywords",
    category=CATEGORY,
    input_schema=schema(
        required("domain", DOMAIN, "Domain to analyze"),
        se_field(),
        optional("withSubdomains", boolean(), "Include subdomains in analysis"),
        optional("withIntents", boolean(), "Include keyword intents (g_ua and g_us only)"),
        optional("url", url(), "Restrict results to a single URL of the domain"),
        optional("keywords", array(KEYWORD, max_items=MAX_KEYWORDS_ITEMS), "Keywords to include"),
        optional("minusKeywords", array(KEYWORD, max_items=MAX_KEYWORDS_ITEMS), "Keywords to exclude"),
        *pagination(),
        optional(
            "sort",
            sort_by(
                "position",
                "region_queries_count",
                "cost",
                "traff",
                "difficulty",
                "keyword_length",
                "concurrency",
            ),
        ),
        optional(
            "filters",
            obj(
                *POSITION_FILTER,
                *COST_FILTER,
                *REGION_QUERIES_FILTER,
                optional("traff", integer(minimum=0)),
                *DIFFICULTY_FILTER,
                optional("keyword_length", integer(minimum=1)),
                *CONCURRENCY_FILTER,
                optional("right_spelling", boolean()),
                optional("keyword_contain", string()),
                optional("keyword_not_contain", string()),
                *INTENTS_FILTER,
            ),
        ),
    ),
)

DOMAIN_URLS = ToolSpec(
    name="get_domain_urls",
    description=(
        "Get URLs within a domain and the keyword count for each URL. "
        "Each URL costs 1 API credit, minimum 1 credit per request."
    ),
    method="SerpstatDomainProcedure.getDomainUrls",
    category=CATEGORY,
    input_schema=schema(
        required("domain", DOMAIN, "Domain to analyze"),
        se_field(),
        optional(
            "filters",
            obj(
                optional("url_prefix", string(max_length=MAX_URL_PREFIX_LENGTH)),
                optional("url_contain", string(max_length=MAX_URL_CONTAIN_LENGTH)),
                optional("url_not_contain", string(max_length=MAX_URL_CONTAIN_LENGTH)),
            ),
        ),
        optional("sort", sort_by("keywords")),
        *pagination(),
    ),
)

DOMAIN_REGIONS_COUNT = ToolSpec(
    name="get_domain_regions_count",
    description=(
        "Show how many keywords a domain has in every Google regional database. "
        "A good first step for any multi-region domain analysis."
    ),
    method="SerpstatDomainProcedure.getRegionsCount",
    category=CATEGORY,
    input_schema=schema(
        required("domain", DOMAIN, "Domain to analyze"),
        optional("sort", enum(*DOMAIN_REGIONS_SORT_FIELDS), "Field to sort by"),
        optional("order", SORT_DIRECTION, "Sort direction"),
    ),
)

DOMAIN_UNIQ_KEYWORDS = ToolSpec(
    name="get_domain_uniq_keywords",
    description=(
        "Find keywords that the given domains rank for but minusDomain does not. "
        "Useful for keyword gap analysis between competitors."
    ),
    method="SerpstatDomainProcedure.getDomainsUniqKeywords",
    category=CATEGORY,
    input_schema=schema(
        se_field(),
        required(
            "domains",
            array(DOMAIN, 1, MAX_UNIQ_DOMAINS, unique=True, unique_message="domains must be unique"),
            f"Domains to compare (1-{MAX_UNIQ_DOMAINS})",
        ),
        required("minusDomain", DOMAIN, "Domain whose keywords are excluded"),
        *pagination(),
        optional(
            "filters",
            obj(
                optional("right_spelling", boolean()),
                optional("misspelled", boolean()),
                optional("keywords", array(KEYWORD, max_items=MAX_UNIQ_KEYWORDS_ITEMS)),
                optional("minus_keywords", array(KEYWORD, max_items=MAX_UNIQ_KEYWORDS_ITEMS)),
                *range_filter("queries", integer(minimum=0)),
                *REGION_QUERIES_FILTER,
                *range_filter("region_queries_count_wide", integer(minimum=0)),
                *COST_FILTER,
                *CONCURRENCY_FILTER,
                *range_filter("difficulty", integer(0, 100)),
                *KEYWORD_LENGTH_FILTER,
                *range_filter("traff", integer(minimum=0)),
                *POSITION_FILTER,
            ),
        ),
        refinements=(
            refine(
                lambda params: params["minusDomain"] not in params["domains"],
                "minusDomain must not be one of domains",
                "minusDomain",
            ),
        ),
    ),
)

TOOLS = (
    DOMAINS_INFO,
    DOMAIN_COMPETITORS,
    DOMAIN_KEYWORDS,
    DOMAIN_URLS,
    DOMAIN_REGIONS_COUNT,
    DOMAIN_UNIQ_KEYWORDS,
)
