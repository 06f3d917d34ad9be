"""
MCPEDL Client – unofficial scraping API for mcpedl.org.

This package fetches mcpedl.org pages, parses them into structured records
and exposes a thin FastAPI REST interface for use by front-end applications.

Quick start (Python)::

    from mcpedl.client import McpedlClient

    client = McpedlClient()
    client.search('furniture').list

Offline parsing::

    from mcpedl.parsers import parse_search_page, parse_detail_page

Quick start (REST)::

    uvicorn mcpedl.server:app --reload
"""

from mcpedl.models import (
    SearchItem,
    SearchResult,
    Rating,
    GalleryItem,
    FAQItem,
    DownloadFile,
    DownloadItem,
    PostDetail,
    DownloadResult,
    QuickDownload,
    LatestResult,
)
from mcpedl.errors import (
    McpedlError,
    ValidationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    RequestTimeoutError,
    RequestFailedError,
    ExtractionError,
    MissingFieldError,
)
from mcpedl.parsers import (
    parse_search_page,
    parse_detail_page,
    parse_download_table,
    parse_download_page,
    parse_latest_page,
)

__all__ = [
    # Models
    'SearchItem',
    'SearchResult',
    'Rating',
    'GalleryItem',
    'FAQItem',
    'DownloadFile',
    'DownloadItem',
    'PostDetail',
    'DownloadResult',
    'QuickDownload',
    'LatestResult',
    # Errors
    'McpedlError',
    'ValidationError',
    'NotFoundError',
    'RateLimitError',
    'ServerError',
    'RequestTimeoutError',
    'RequestFailedError',
    'ExtractionError',
    'MissingFieldError',
    # Parsers
    'parse_search_page',
    'parse_detail_page',
    'parse_download_table',
    'parse_download_page',
    'parse_latest_page',
]
