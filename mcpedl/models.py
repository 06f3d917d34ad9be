"""
Data models for the MCPEDL scraping client.

All models use dataclasses for lightweight internal usage and easy
serialisation to dicts / JSON (for the FastAPI REST layer).  Every record is
a snapshot of a single fetch.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional


# ---------------------------------------------------------------------------
# Listing entries (search page, "latest" page)
# ---------------------------------------------------------------------------

@dataclass
class SearchItem:
    """One post card as it appears on a search or listing page."""
    name: str
    id: str
    img: str = ''
    rating: str = ''

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SearchResult:
    """Result of parsing a search page."""
    list: List[SearchItem] = field(default_factory=list)
    has_next_page: bool = False
    next_page: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            'list': [item.to_dict() for item in self.list],
            'hasNextPage': self.has_next_page,
            'nextPage': self.next_page,
        }


@dataclass
class QuickDownload:
    """A download shortcut from the "latest" page, pointing straight at a
    file id rather than the full download table."""
    name: str
    id: str
    file: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class LatestResult:
    """Result of parsing a ``/downloading/`` page."""
    quick: List[QuickDownload] = field(default_factory=list)
    list: List[SearchItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'quick': [q.to_dict() for q in self.quick],
            'list': [item.to_dict() for item in self.list],
        }


# ---------------------------------------------------------------------------
# Detail page pieces
# ---------------------------------------------------------------------------

@dataclass
class Rating:
    count: str = ''
    value: str = ''

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GalleryItem:
    """A gallery entry.  Video entries always carry ``name``, ``post_time``,
    ``duration`` and ``video`` (the last two may be ``None``); image entries
    carry none of them."""
    type: str
    img: str = ''
    name: Optional[str] = None
    post_time: Optional[str] = None
    duration: Optional[str] = None
    video: Optional[str] = None

    @property
    def is_video(self) -> bool:
        return self.type == 'video'

    def to_dict(self) -> dict:
        d = {'type': self.type, 'img': self.img}
        if self.is_video:
            d.update({
                'name': self.name,
                'postTime': self.post_time,
                'duration': self.duration,
                'video': self.video,
            })
        return d


@dataclass
class FAQItem:
    question: str = ''
    answer: str = ''

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DownloadFile:
    """One ``<form>`` button inside a download-table row."""
    index: int
    type: str
    id: int
    meta_title: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DownloadItem:
    """One row of the download table."""
    index: int
    name: str
    version: str = 'N/A'
    files: List[DownloadFile] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'name': self.name,
            'version': self.version,
            'files': [f.to_dict() for f in self.files],
        }


# ---------------------------------------------------------------------------
# Detail-page full post info
# ---------------------------------------------------------------------------

@dataclass
class PostDetail:
    """All metadata extracted from a single post's detail page."""
    title: str = ''
    img: str = ''
    rating: Rating = field(default_factory=Rating)
    comment: str = ''
    content: str = ''
    info: Dict[str, str] = field(default_factory=dict)
    gallery: List[GalleryItem] = field(default_factory=list)
    faq: List[FAQItem] = field(default_factory=list)
    list: List[DownloadItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'img': self.img,
            'rating': self.rating.to_dict(),
            'comment': self.comment,
            'content': self.content,
            'info': dict(self.info),
            'gallery': [g.to_dict() for g in self.gallery],
            'faq': [q.to_dict() for q in self.faq],
            'list': [d.to_dict() for d in self.list],
        }

    # Convenience helpers ---------------------------------------------------

    def get_file_ids(self) -> List[int]:
        """Return every downloadable file id in table order."""
        return [f.id for item in self.list for f in item.files]

    def get_videos(self) -> List[GalleryItem]:
        return [g for g in self.gallery if g.is_video]


@dataclass
class DownloadResult:
    url: str

    def to_dict(self) -> dict:
        return asdict(self)
