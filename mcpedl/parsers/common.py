"""
Shared parsing utilities used by the search, latest and detail parsers.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from mcpedl.errors import ExtractionError
from mcpedl.models import SearchItem

logger = logging.getLogger(__name__)

# Post cards on search, archive and "latest" pages
ENTRY_SELECTOR = '.entries .g-grid .g-block article section'


def make_soup(html: Union[str, BeautifulSoup]) -> BeautifulSoup:
    """Return *html* as a soup, parsing it first when given a string."""
    if isinstance(html, BeautifulSoup):
        return html
    return BeautifulSoup(html or '', 'html.parser')


# ---------------------------------------------------------------------------
# Text / attribute helpers
# ---------------------------------------------------------------------------

def select_text(node: Tag, selector: str, strip: bool = True) -> str:
    """Concatenated text of every element matching *selector*, like a
    jQuery ``.text()`` call.  Empty string when nothing matches."""
    text = ''.join(el.get_text() for el in node.select(selector))
    return text.strip() if strip else text


def select_attr(node: Tag, selector: str, attr: str) -> Optional[str]:
    """Attribute of the first element matching *selector*, or *None*."""
    el = node.select_one(selector)
    if el is None:
        return None
    value = el.get(attr)
    if isinstance(value, list):
        value = ' '.join(value)
    return value


# ---------------------------------------------------------------------------
# URL segment helpers
# ---------------------------------------------------------------------------

def path_segment(path: str, offset: int = -2) -> str:
    """Return the ``/``-separated segment of *path* at *offset*.

    ``https://mcpedl.org/some-addon/`` -> ``some-addon`` (the trailing slash
    leaves an empty last segment, hence the default of ``-2``).
    Returns an empty string when the path is too short.
    """
    parts = (path or '').split('/')
    try:
        return parts[offset]
    except IndexError:
        return ''


def parse_numeric_segment(path: Optional[str], offset: int = -2, field_name: str = 'id') -> int:
    """Parse the integer at *offset* of a ``/``-separated URL or form action.

    Raises:
        ExtractionError: when the path is missing or the segment is not an
            integer.
    """
    if not path:
        raise ExtractionError(f'Missing URL for numeric {field_name}')
    segment = path_segment(path, offset)
    try:
        return int(segment)
    except ValueError as exc:
        raise ExtractionError(
            f'Cannot parse numeric {field_name} from {path!r}',
            original_error=exc,
        ) from exc


# ---------------------------------------------------------------------------
# Search-item helpers
# ---------------------------------------------------------------------------

def parse_search_item(section: Tag) -> Optional[SearchItem]:
    """Build a ``SearchItem`` from a post ``<section>``.  Returns *None* when
    the section has no link."""
    link = section.select_one('a[href]')
    if link is None:
        return None
    href = link.get('href', '')
    if not href:
        return None

    return SearchItem(
        name=select_text(section, 'h2 a'),
        id=path_segment(href),
        img=select_attr(section, 'img', 'src') or '',
        rating=select_text(section, '.rating-wrapper span'),
    )


def parse_search_items(soup: BeautifulSoup) -> List[SearchItem]:
    """Return a ``SearchItem`` for every linked entry in the post grid."""
    items = []
    for section in soup.select(ENTRY_SELECTOR):
        item = parse_search_item(section)
        if item is not None:
            items.append(item)
        else:
            logger.debug('Skipping entry without link')
    return items
