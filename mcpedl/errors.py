"""
Error types raised by the MCPEDL client.

Every error carries a stable ``code`` string so callers (and the REST
layer) can branch on the cause without matching messages.
"""

from __future__ import annotations

from typing import Optional


class McpedlError(Exception):
    """Base class for every error raised by this package."""

    default_code: Optional[str] = None

    def __init__(self, message: str, code: Optional[str] = None,
                 status: Optional[int] = None,
                 original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status = status
        self.original_error = original_error

    def to_dict(self) -> dict:
        return {
            'error': self.message,
            'code': self.code,
            'status': self.status,
        }


# ---------------------------------------------------------------------------
# Caller input
# ---------------------------------------------------------------------------

class ValidationError(McpedlError):
    """Invalid caller input, raised before any network call."""
    default_code = 'INVALID_INPUT'


# ---------------------------------------------------------------------------
# HTTP layer
# ---------------------------------------------------------------------------

class NotFoundError(McpedlError):
    default_code = 'NOT_FOUND'


class RateLimitError(McpedlError):
    default_code = 'RATE_LIMIT'


class ServerError(McpedlError):
    default_code = 'SERVER_ERROR'


class RequestTimeoutError(McpedlError):
    default_code = 'TIMEOUT'


class RequestFailedError(McpedlError):
    default_code = 'REQUEST_FAILED'


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

class ExtractionError(McpedlError):
    """A value was found on the page but could not be parsed (e.g. a numeric
    ID inside a malformed URL)."""
    default_code = 'EXTRACTION_ERROR'


class MissingFieldError(ExtractionError):
    """A field the caller cannot work without was absent from the page."""
    default_code = 'MISSING_FIELD'
