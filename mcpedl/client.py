"""
High-level MCPEDL client.

Each operation validates its input, fetches one page through
:class:`utils.request_handler.RequestHandler` and hands the HTML to the
matching parser::

    from mcpedl.client import McpedlClient

    client = McpedlClient()
    result = client.search('shaders', page=2)
    detail = client.detail(result.list[0].id)
    url = client.download(detail.list[0].files[0].id).url

``McpedlError``s propagate unchanged; anything else raised while parsing
is wrapped in an ``McpedlError`` carrying an operation-specific code.
"""

from __future__ import annotations

import re
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from mcpedl.errors import McpedlError, ValidationError
from mcpedl.models import DownloadResult, LatestResult, PostDetail, SearchResult
from mcpedl.parsers import (
    parse_detail_page,
    parse_download_page,
    parse_latest_page,
    parse_search_page,
)
from utils.request_handler import RequestConfig, RequestHandler

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Path, query and fragment separators, backslashes and whitespace
_UNSAFE_POST_ID_RE = re.compile(r'[/\\?#%\s]')


# ---------------------------------------------------------------------------
# Input validation (always runs before any network call)
# ---------------------------------------------------------------------------

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_query(query: Any) -> str:
    if not isinstance(query, str) or not query.strip():
        raise ValidationError('Search query must be a non-empty string', code='INVALID_QUERY')
    return query.strip()


def validate_page(page: Any) -> int:
    if not _is_int(page) or page < 1:
        raise ValidationError('Page must be a positive integer', code='INVALID_PAGE')
    return page


def validate_post_id(post_id: Any) -> str:
    """Post ids are single path segments (slugs); anything that would
    change the path or add a query/fragment is rejected."""
    if not isinstance(post_id, str) or not post_id.strip():
        raise ValidationError('Detail ID must be a non-empty string', code='INVALID_ID')
    post_id = post_id.strip()
    if _UNSAFE_POST_ID_RE.search(post_id) or '..' in post_id:
        raise ValidationError(f'Detail ID is not a valid post slug: {post_id!r}', code='INVALID_ID')
    return post_id


def validate_file_id(file_id: Any) -> int:
    if not _is_int(file_id) or file_id <= 0:
        raise ValidationError('Download ID must be a positive integer', code='INVALID_DOWNLOAD_ID')
    return file_id


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class McpedlClient:
    """Unofficial client for mcpedl.org."""

    def __init__(self, config: Optional[RequestConfig] = None,
                 request_handler: Optional[RequestHandler] = None):
        if request_handler is not None:
            self.request_handler = request_handler
        else:
            self.request_handler = RequestHandler(config=config or RequestConfig())

    # -- configuration ------------------------------------------------------

    @property
    def config(self) -> RequestConfig:
        return self.request_handler.config

    def get_config(self) -> RequestConfig:
        """Return a copy of the current configuration."""
        return self.config.merged()

    def update_config(self, **changes) -> RequestConfig:
        """Merge *changes* into the configuration at runtime.

        Raises:
            ValidationError: for unknown configuration keys
        """
        try:
            new_config = self.config.merged(**changes)
            self.request_handler.apply_config(new_config)
        except ValueError as exc:
            raise ValidationError(str(exc), code='CONFIG_ERROR', original_error=exc) from exc
        logger.info('Configuration updated: %s', ', '.join(sorted(changes)))
        return self.get_config()

    # -- plumbing -----------------------------------------------------------

    def _fetch_and_parse(self, path: str, params: Optional[Dict[str, Any]],
                         parser: Callable[[str], T], failure_message: str,
                         failure_code: str) -> T:
        try:
            html = self.request_handler.get_page(path, params=params, context_msg=failure_code)
            return parser(html)
        except McpedlError:
            raise
        except Exception as exc:
            logger.exception('%s (%s)', failure_message, path)
            raise McpedlError(failure_message, code=failure_code, original_error=exc) from exc

    # -- operations ---------------------------------------------------------

    def search(self, query: str, page: int = 1) -> SearchResult:
        """Search posts.  ``GET /page/{page}/?s={query}``"""
        query = validate_query(query)
        page = validate_page(page)
        logger.debug('Searching %r (page %d)', query, page)
        return self._fetch_and_parse(
            f'/page/{page}/', {'s': query}, parse_search_page,
            'Failed to search content', 'SEARCH_FAILED',
        )

    def detail(self, post_id: str) -> PostDetail:
        """Full post detail.  ``GET /{post_id}``"""
        post_id = validate_post_id(post_id)
        logger.debug('Fetching detail for %r', post_id)
        return self._fetch_and_parse(
            f'/{post_id}', None, parse_detail_page,
            'Failed to get post details', 'DETAIL_FAILED',
        )

    def download(self, file_id: int) -> DownloadResult:
        """Resolve a file id to its download URL.  ``GET /dw_file.php?id={file_id}``"""
        file_id = validate_file_id(file_id)
        logger.debug('Resolving download for file %d', file_id)
        return self._fetch_and_parse(
            '/dw_file.php', {'id': file_id}, parse_download_page,
            'Failed to get download URL', 'DOWNLOAD_FAILED',
        )

    def latest(self, page: int = 1) -> LatestResult:
        """Latest uploads with quick downloads.  ``GET /downloading/page/{page}/``"""
        page = validate_page(page)
        logger.debug('Fetching latest page %d', page)
        return self._fetch_and_parse(
            f'/downloading/page/{page}/', None, parse_latest_page,
            'Failed to get latest content', 'LATEST_FAILED',
        )

    def close(self):
        self.request_handler.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def create_client_from_config(**overrides) -> McpedlClient:
    """
    Build a client from ``config.py`` (when present), with *overrides*
    taking precedence.  Missing config values fall back to the defaults.
    """
    try:
        from config import (
            MCPEDL_BASE_URL, MCPEDL_TIMEOUT, MCPEDL_MAX_RETRIES, MCPEDL_RETRY_DELAY,
            MCPEDL_RATE_LIMIT_MIN_TIME, MCPEDL_RATE_LIMIT_MAX_CONCURRENT, MCPEDL_USER_AGENT,
        )
        values = {
            'base_url': MCPEDL_BASE_URL,
            'timeout': MCPEDL_TIMEOUT,
            'max_retries': MCPEDL_MAX_RETRIES,
            'retry_delay': MCPEDL_RETRY_DELAY,
            'rate_limit_min_time': MCPEDL_RATE_LIMIT_MIN_TIME,
            'rate_limit_max_concurrent': MCPEDL_RATE_LIMIT_MAX_CONCURRENT,
            'user_agent': MCPEDL_USER_AGENT,
        }
    except ImportError:
        logger.debug('config.py not found, using default client configuration')
        values = {}

    try:
        config = RequestConfig(**values).merged(**overrides)
        return McpedlClient(config=config)
    except ValueError as exc:
        raise ValidationError(str(exc), code='CONFIG_ERROR', original_error=exc) from exc
