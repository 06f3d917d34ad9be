"""
MCPEDL HTML parsers – public API.

Usage::

    from mcpedl.parsers import parse_search_page, parse_detail_page
    from mcpedl.parsers import parse_latest_page, parse_download_page

Every parser takes the raw HTML (or an already-built ``BeautifulSoup``) and
returns a record from ``mcpedl.models``.
"""

from mcpedl.parsers.search_parser import parse_search_page
from mcpedl.parsers.detail_parser import parse_detail_page
from mcpedl.parsers.download_parser import parse_download_table, parse_download_page
from mcpedl.parsers.latest_parser import parse_latest_page

__all__ = [
    'parse_search_page',
    'parse_detail_page',
    'parse_download_table',
    'parse_download_page',
    'parse_latest_page',
]
