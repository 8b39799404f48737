"""Errors raised by the HTTP layer.

Rate-limit and transport failures are retried by the executor; the rest
surface to the caller immediately.
"""

from __future__ import annotations

from typing import Optional


class RequestError(RuntimeError):
    """Base class for request failures."""


class NetworkError(RequestError):
    """The transport failed (connection refused, DNS, timeout, ...)."""


class HttpError(RequestError):
    """Server answered with a non-success status."""

    def __init__(self, status_code: int, body: str = "", message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"HTTP error! status: {status_code}")


class RateLimitedError(HttpError):
    """Server answered 429 Too Many Requests."""

    def __init__(self, body: str = ""):
        super().__init__(429, body, "HTTP error! status: 429 (rate limited)")


class ParseError(RequestError):
    """Response body could not be decoded."""
