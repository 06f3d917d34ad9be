"""
Request Handler for the MCPEDL client

This module provides a unified HTTP request handler that supports:
- Direct requests with browser-like headers
- Minimum-interval / bounded-concurrency rate limiting
- Retry with exponential backoff
- Classification of HTTP failures into typed errors

Usage:
    from utils.request_handler import RequestHandler, RequestConfig

    handler = RequestHandler(config=RequestConfig(timeout=5))
    html = handler.get_page('/page/1/', params={'s': 'shaders'})
"""

import requests
import time
import logging
from dataclasses import dataclass, fields, replace
from typing import Optional, Dict, Any
from urllib.parse import urljoin

from mcpedl.errors import (
    McpedlError,
    NotFoundError,
    RateLimitError,
    RequestFailedError,
    RequestTimeoutError,
    ServerError,
)
from utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = 'https://mcpedl.org'
DEFAULT_USER_AGENT = 'Mozilla/5.0 (compatible; McpedlAPI/2.0; +https://github.com/terastudio-org/mcpedl)'


@dataclass
class RequestConfig:
    """Configuration for request handler.

    ``None`` for any field means "use the default", so partially-filled
    configs (e.g. from ``config.py`` or CLI flags) can be passed as-is.
    Times are in seconds.
    """
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    max_retries: int = 3
    retry_delay: float = 1.0
    rate_limit_min_time: float = 1.0
    rate_limit_max_concurrent: int = 2
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        for f in fields(self):
            if getattr(self, f.name) is None:
                setattr(self, f.name, f.default)
        self.validate()

    def validate(self):
        """Raise ``ValueError`` for values the handler or limiter cannot use."""
        if self.timeout <= 0:
            raise ValueError('timeout must be > 0')
        if self.max_retries < 0:
            raise ValueError('max_retries must be >= 0')
        if self.retry_delay < 0:
            raise ValueError('retry_delay must be >= 0')
        if self.rate_limit_min_time < 0:
            raise ValueError('rate_limit_min_time must be >= 0')
        if self.rate_limit_max_concurrent < 1:
            raise ValueError('rate_limit_max_concurrent must be >= 1')

    def merged(self, **overrides) -> 'RequestConfig':
        """Return a copy with *overrides* applied (``None`` values ignored)."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class RequestHandler:
    """
    HTTP GET handler for a single site.

    Features:
    - Browser-like headers
    - Rate limiting shared across every request made by this handler
    - Retry with exponential backoff for transient failures
    - Status-code classification into ``McpedlError`` subclasses
    """

    BROWSER_HEADERS = {
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'en-US,en;q=0.5',
        'Accept-Encoding': 'gzip, deflate',
        'Connection': 'keep-alive',
        'Upgrade-Insecure-Requests': '1',
    }

    def __init__(self, config: Optional[RequestConfig] = None,
                 rate_limiter: Optional[RateLimiter] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize request handler.

        Args:
            config: RequestConfig instance with configuration settings
            rate_limiter: Optional shared RateLimiter (one is built from the
                config otherwise)
            session: Optional custom session to use
        """
        self.config = config or RequestConfig()
        self.session = session or requests.Session()
        self.rate_limiter = rate_limiter or RateLimiter(
            min_interval=self.config.rate_limit_min_time,
            max_concurrent=self.config.rate_limit_max_concurrent,
        )
        self._apply_headers()

    def _apply_headers(self):
        self.session.headers.update(self.BROWSER_HEADERS)
        self.session.headers['User-Agent'] = self.config.user_agent

    def apply_config(self, config: RequestConfig):
        """Swap in a new configuration, refreshing headers and limiter.

        The limiter is updated first so a rejected value leaves the current
        configuration in place.
        """
        self.rate_limiter.update_settings(
            min_interval=config.rate_limit_min_time,
            max_concurrent=config.rate_limit_max_concurrent,
        )
        self.config = config
        self._apply_headers()

    def build_url(self, path: str) -> str:
        base = self.config.base_url.rstrip('/') + '/'
        return urljoin(base, path.lstrip('/'))

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    @staticmethod
    def classify_status(status_code: int, url: str = '') -> Optional[McpedlError]:
        """
        Map an HTTP status code to an error.

        Returns:
            None for 2xx/3xx, otherwise the matching McpedlError
        """
        if status_code < 400:
            return None
        if status_code == 404:
            return NotFoundError('Page Not Found', status=status_code)
        if status_code == 429:
            return RateLimitError('Rate Limit Exceeded', status=status_code)
        if status_code >= 500:
            return ServerError('Server Error', status=status_code)
        return RequestFailedError(f'Request failed: HTTP {status_code} for {url}', status=status_code)

    @staticmethod
    def classify_exception(exc: requests.RequestException) -> McpedlError:
        """Map a transport-level exception to an error."""
        if isinstance(exc, requests.Timeout):
            return RequestTimeoutError('Request Timeout', original_error=exc)
        status = exc.response.status_code if exc.response is not None else None
        return RequestFailedError(f'Request failed: {exc}', status=status, original_error=exc)

    @staticmethod
    def is_retryable(error: McpedlError) -> bool:
        """429, 5xx, timeouts and connection failures may succeed on retry.
        Other 4xx responses and malformed requests (bad scheme or URL) are
        final."""
        if isinstance(error, (RateLimitError, ServerError, RequestTimeoutError)):
            return True
        if isinstance(error, RequestFailedError):
            return isinstance(error.original_error, requests.ConnectionError)
        return False

    def get_backoff_delay(self, retry_number: int) -> float:
        """Delay before retry *retry_number* (0-based): doubles each time,
        capped at four times the base delay."""
        base = self.config.retry_delay
        return min(base * (2 ** retry_number), base * 4)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def _do_request(self, url: str, params: Optional[Dict[str, Any]], context_msg: str) -> str:
        """Execute a single HTTP GET; raises McpedlError on failure."""
        logger.debug(f"[{context_msg}] Requesting: {url} params={params}")
        try:
            with self.rate_limiter.slot():
                response = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise self.classify_exception(e) from e

        error = self.classify_status(response.status_code, url)
        if error is not None:
            raise error

        logger.debug(f"[{context_msg}] Response: HTTP {response.status_code}, "
                     f"Text-Length: {len(response.text)} chars")
        return response.text

    def get_page(self, path: str, params: Optional[Dict[str, Any]] = None,
                 context_msg: str = 'GET') -> str:
        """
        Fetch *path* (relative to ``base_url``) and return the response body.

        Transient failures are retried up to ``max_retries`` times with
        exponential backoff.

        Raises:
            McpedlError subclass describing the final failure
        """
        url = self.build_url(path)
        max_attempts = self.config.max_retries + 1

        for attempt in range(max_attempts):
            try:
                return self._do_request(url, params, context_msg)
            except McpedlError as e:
                if not self.is_retryable(e) or attempt == max_attempts - 1:
                    logger.error(f"[{context_msg}] {e.code}: {e} ({url})")
                    raise
                delay = self.get_backoff_delay(attempt)
                logger.warning(f"[{context_msg}] {e.code} on attempt {attempt + 1}/{max_attempts}, "
                               f"retrying in {delay:.1f}s...")
                time.sleep(delay)

        # Unreachable: RequestConfig rejects a negative max_retries
        raise RequestFailedError(f'Request failed: {url}')

    def close(self):
        self.session.close()


def create_request_handler_from_config(**config_kwargs) -> RequestHandler:
    """
    Create a RequestHandler instance from configuration values.

    Args:
        **config_kwargs: Configuration parameters for RequestConfig

    Returns:
        Configured RequestHandler instance
    """
    config = RequestConfig(**config_kwargs)
    return RequestHandler(config=config)
