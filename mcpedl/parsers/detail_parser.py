"""
Detail-page parser.

Extracts the full set of metadata from a single post page: title, thumbnail,
rating, comment count, body text, the info map (header meta plus footer
key/value pairs), gallery, FAQ and the download table.

No ``time.sleep`` calls are made – the caller controls request pacing.
"""

from __future__ import annotations

import re
import logging
from typing import Dict, Optional, Tuple, Union

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

from mcpedl.models import FAQItem, GalleryItem, PostDetail, Rating
from mcpedl.parsers.common import make_soup, select_attr, select_text
from mcpedl.parsers.download_parser import parse_download_table

logger = logging.getLogger(__name__)

# Footer keys already covered by the page header
_HEADER_KEYS = ('categories', 'publication_date', 'author')

_EMBED_SRC_RE = re.compile(r"src: '(.*?)'")
_WHITESPACE_RE = re.compile(r'\s+')


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse_header_info(soup: BeautifulSoup) -> Dict[str, str]:
    post_date = select_attr(soup, '.date', 'content') or select_text(soup, '.date')
    return {
        'category': select_text(soup, '.categories .single-cat'),
        'postDate': post_date,
        'author': select_text(soup, '.meta-author-link .author'),
    }


def _footer_label_and_value(content: Tag) -> Tuple[str, str]:
    """Read one ``.entry-footer-content`` block.

    The label is either the first ``<div>`` or, on some posts, a bare text
    node directly inside the block.  The value is always the last ``<span>``.
    """
    label_div = content.find('div')
    label = label_div.get_text().strip() if label_div else ''
    if not label:
        # Plain text nodes only; Comment and CData subclass NavigableString
        label = ''.join(
            str(child) for child in content.children
            if type(child) is NavigableString
        ).strip()
    label = label.replace(':', '', 1)

    spans = content.find_all('span')
    value = spans[-1].get_text().strip() if spans else ''
    return label, value


def _footer_key(label: str) -> str:
    return _WHITESPACE_RE.sub('_', label.lower())


def _merge_footer_info(soup: BeautifulSoup, info: Dict[str, str]) -> None:
    for column in soup.select('.entry-footer-column'):
        content = column.select_one('.entry-footer-content')
        if content is None:
            continue

        label, value = _footer_label_and_value(content)
        if not label or not value:
            continue

        key = _footer_key(label)
        if key not in _HEADER_KEYS:
            info[key] = value

        # The footer "Author" is the game's author; keep it when it differs
        # from the post author shown in the header.
        if label == 'Author' and info.get('author') and value != info['author']:
            info['game_author'] = value


def _parse_gallery_entry(entry: Tag) -> GalleryItem:
    img = select_attr(entry, 'img', 'src') or ''
    if 'Video' not in (entry.get('itemtype') or ''):
        return GalleryItem(type='image', img=img)

    video = None
    onclick = select_attr(entry, 'a[itemprop="embedUrl"]', 'onclick')
    if onclick:
        match = _EMBED_SRC_RE.search(onclick)
        if match:
            video = match.group(1) or None

    return GalleryItem(
        type='video',
        img=img,
        name=select_attr(entry, '[itemprop="name"]', 'content') or '',
        post_time=select_attr(entry, '[itemprop="uploadDate"]', 'content') or '',
        duration=select_attr(entry, '[itemprop="duration"]', 'content') or None,
        video=video,
    )


def _parse_faq_entry(details: Tag) -> FAQItem:
    return FAQItem(
        question=select_text(details, 'summary h3'),
        answer=select_text(details, 'div p'),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_detail_page(html_content: Union[str, BeautifulSoup]) -> PostDetail:
    """Parse a post detail page and return a fully-populated *PostDetail*.

    Optional fields that are not present on the page are left at their
    default values (empty string / empty list / None).  A download form
    whose action carries no numeric file id raises ``ExtractionError``.
    """
    soup = make_soup(html_content)

    info = _parse_header_info(soup)
    _merge_footer_info(soup, info)

    detail = PostDetail(
        title=select_text(soup, '.entry-title'),
        img=select_attr(soup, '.post-thumbnail img', 'src') or '',
        rating=Rating(
            count=select_text(soup, 'span[itemprop="ratingCount"]'),
            value=select_text(soup, 'span[itemprop="ratingValue"]'),
        ),
        comment=select_text(soup, 'span.comment-count'),
        content=select_text(soup, 'section.entry-content div'),
        info=info,
        gallery=[_parse_gallery_entry(el) for el in soup.select('.entry-gallery div div div')],
        faq=[_parse_faq_entry(el) for el in soup.select('#faqs div details')],
        list=parse_download_table(soup),
    )

    logger.debug(
        'Parsed detail: title=%s, gallery=%d, faq=%d, downloads=%d',
        detail.title[:40],
        len(detail.gallery),
        len(detail.faq),
        len(detail.list),
    )
    return detail
