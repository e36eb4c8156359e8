"""Serpstat API exceptions."""

from __future__ import annotations

from typing import Any

NO_RESULT_MESSAGE = "No result data received from Serpstat API"


class SerpstatError(RuntimeError):
    """Base class for every failure surfaced by the request client."""


class ApplicationError(SerpstatError):
    """The remote method ran and reported a domain failure (bad domain, quota, ...)."""

    def __init__(
        self,
        message: str,
        *,
        code: int | str | None = None,
        data: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        self.code = code
        self.data = data
        self.status_code = status_code
        super().__init__(message)


class TransientError(SerpstatError):
    """Connection reset, timeout or 5xx; safe to retry."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ProtocolError(SerpstatError):
    """The response carried neither ``result`` nor ``error`` or was not JSON."""

    def __init__(self, message: str = NO_RESULT_MESSAGE, *, payload: Any | None = None) -> None:
        self.payload = payload
        super().__init__(message)
