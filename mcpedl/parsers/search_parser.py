"""
Search-page parser.

Extracts **all** post cards from a ``/page/{n}/?s=...`` result page plus
the pagination link.  No filtering is applied; that is the responsibility of
the caller.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from bs4 import BeautifulSoup

from mcpedl.models import SearchResult
from mcpedl.parsers.common import (
    make_soup,
    parse_numeric_segment,
    parse_search_items,
)

logger = logging.getLogger(__name__)


def _parse_next_page(soup: BeautifulSoup) -> Optional[int]:
    """Page number behind the ``a.next`` link, or *None* on the last page."""
    next_link = soup.select_one('a.next')
    if next_link is None:
        return None
    href = next_link.get('href')
    if not href:
        return None
    return parse_numeric_segment(href, field_name='next page')


def parse_search_page(html_content: Union[str, BeautifulSoup]) -> SearchResult:
    """Parse a search result page.

    Entries without a link are skipped.  A present but malformed "next"
    link raises ``ExtractionError`` instead of returning a bogus page number.
    """
    soup = make_soup(html_content)

    items = parse_search_items(soup)
    next_page = _parse_next_page(soup)

    logger.debug('Parsed %d search entries (next page: %s)', len(items), next_page)
    return SearchResult(
        list=items,
        has_next_page=next_page is not None,
        next_page=next_page,
    )
