from serpstat_mcp.services.errors import (
    ApplicationError,
    ProtocolError,
    SerpstatError,
    TransientError,
)
from serpstat_mcp.services.serpstat_client import SerpstatClient

__all__ = ["ApplicationError", "ProtocolError", "SerpstatClient", "SerpstatError", "TransientError"]
