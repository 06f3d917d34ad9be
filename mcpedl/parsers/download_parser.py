"""
Download-table and download-redirect parsers.

The download table on a detail page (``#download-link``) comes in two row
shapes, told apart by cell count alone:

* 3 cells: name | version | forms
* 2 cells: name | forms            (version defaults to ``'N/A'``)

Each ``<form>`` in the last cell is one downloadable file; its ``action``
ends with ``/{file_id}/``.
"""

from __future__ import annotations

import re
import logging
from typing import List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from mcpedl.errors import MissingFieldError
from mcpedl.models import DownloadFile, DownloadItem, DownloadResult
from mcpedl.parsers.common import make_soup, parse_numeric_segment, select_attr

logger = logging.getLogger(__name__)

ROW_SELECTOR = '#download-link table tbody tr'
DEFAULT_VERSION = 'N/A'

_WHITESPACE_RE = re.compile(r'\s+')


def _parse_form(form: Tag, index: int) -> DownloadFile:
    button = form.find('button')
    button_text = button.get_text() if button else ''
    meta_title = select_attr(form, 'input[name="post_title"]', 'value')
    return DownloadFile(
        index=index,
        type=_WHITESPACE_RE.sub(' ', button_text).strip(),
        id=parse_numeric_segment(form.get('action'), field_name='file id'),
        meta_title=meta_title or None,
    )


def _parse_row(row: Tag, index: int) -> Optional[DownloadItem]:
    """Parse one ``<tr>``.  Rows with an unexpected cell count or an empty
    name are skipped."""
    cells = row.find_all('td')
    if len(cells) == 3:
        name_cell, version_cell, files_cell = cells
        version = version_cell.get_text().strip()
    elif len(cells) == 2:
        name_cell, files_cell = cells
        version = DEFAULT_VERSION
    else:
        logger.debug('Skipping download row %d with %d cells', index, len(cells))
        return None

    name = name_cell.get_text().strip()
    if not name:
        return None

    files = [
        _parse_form(form, i)
        for i, form in enumerate(files_cell.find_all('form'), start=1)
    ]
    return DownloadItem(index=index, name=name, version=version, files=files)


def parse_download_table(html_content: Union[str, BeautifulSoup]) -> List[DownloadItem]:
    """Parse the download table of a detail page.

    Row indexes are 1-based positions in the table, so skipped rows leave
    gaps.  A form whose action has no numeric id raises ``ExtractionError``.
    """
    soup = make_soup(html_content)

    results = []
    for index, row in enumerate(soup.select(ROW_SELECTOR), start=1):
        item = _parse_row(row, index)
        if item is not None:
            results.append(item)
    return results


def parse_download_page(html_content: Union[str, BeautifulSoup]) -> DownloadResult:
    """Parse the ``/dw_file.php`` redirect page and return the file URL.

    Raises:
        MissingFieldError: when the page has no link.
    """
    soup = make_soup(html_content)
    url = select_attr(soup, 'a', 'href')
    if not url:
        raise MissingFieldError('Download URL not found', code='DOWNLOAD_URL_NOT_FOUND')
    return DownloadResult(url=url)
