"""
"Latest downloads" page parser (``/downloading/page/{n}/``).

The page has two parts:

1. A quick-download strip (``.archive .dwbuttonslist``) where each entry
   links straight to a file id through a ``<form action=".../{id}/">``.
2. The standard post grid, identical to a search page.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from mcpedl.models import LatestResult, QuickDownload
from mcpedl.parsers.common import (
    make_soup,
    parse_numeric_segment,
    parse_search_items,
    select_attr,
    select_text,
)

logger = logging.getLogger(__name__)

QUICK_SELECTOR = '.archive .dwbuttonslist div[style*="solid"]'


def _parse_quick_entry(entry: Tag) -> Optional[QuickDownload]:
    """Parse one bordered quick-download ``<div>``.

    Returns *None* when the entry has no post link.  An entry whose form
    action carries no numeric file id raises ``ExtractionError``.
    """
    href = select_attr(entry, 'a', 'href')
    if not href:
        return None

    return QuickDownload(
        name=select_text(entry, 'span[style*="font-weight: 900"]'),
        id=href.replace('/', ''),
        file=parse_numeric_segment(select_attr(entry, 'form', 'action'), field_name='file id'),
    )


def parse_latest_page(html_content: Union[str, BeautifulSoup]) -> LatestResult:
    """Parse the "latest downloads" page into quick entries and post list."""
    soup = make_soup(html_content)

    quick = []
    for entry in soup.select(QUICK_SELECTOR):
        parsed = _parse_quick_entry(entry)
        if parsed is not None:
            quick.append(parsed)

    items = parse_search_items(soup)

    logger.debug('Parsed latest page: %d quick downloads, %d entries', len(quick), len(items))
    return LatestResult(quick=quick, list=items)
