from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterator, Mapping, Optional, Sequence, Union


# -------------------------
# Core content objects
# -------------------------

@dataclass(frozen=True, slots=True)
class Post:
    """
    One validated content entry.

    id is unique across every content group (not just its own).
    """
    id: str
    title: str
    description: str
    date: date
    tags: tuple[str, ...]
    space: str
    body: str = ""
    group: str = ""
    source: str = ""  # file path or memory:// uri, used in error messages


@dataclass(frozen=True, slots=True)
class Space:
    """
    A topical grouping. Spaces come from a static catalog, never from posts.
    """
    id: str
    title: str
    description: str
    banner: str
    icon: str


@dataclass(frozen=True, slots=True)
class SpaceCatalog:
    """
    Ordered, read-only set of spaces with lookup by id.
    """
    spaces: tuple[Space, ...] = ()

    def __iter__(self) -> Iterator[Space]:
        return iter(self.spaces)

    def __len__(self) -> int:
        return len(self.spaces)

    def __contains__(self, space_id: object) -> bool:
        return any(s.id == space_id for s in self.spaces)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(s.id for s in self.spaces)

    def get(self, space_id: str) -> Optional[Space]:
        for s in self.spaces:
            if s.id == space_id:
                return s
        return None


# -------------------------
# Load boundary
# -------------------------

@dataclass(frozen=True, slots=True)
class RawEntry:
    """
    A (frontmatter, body) pair as read from a content source, before validation.
    """
    group: str
    name: str     # file stem, used as the default post id
    source: str   # path or uri
    frontmatter: Mapping[str, Any] = field(default_factory=dict)
    body: str = ""
    parse_error: Optional[str] = None  # set when the frontmatter block itself is unreadable


@dataclass(frozen=True, slots=True)
class PostLoaded:
    post: Post


@dataclass(frozen=True, slots=True)
class PostRejected:
    source: str
    error: Exception  # always a ContentLoadError subclass


@dataclass(frozen=True, slots=True)
class PostSkipped:
    """
    A well-formed entry intentionally left out of the corpus (drafts).
    """
    source: str
    reason: str


LoadResult = Union[PostLoaded, PostRejected, PostSkipped]


# -------------------------
# Output objects
# -------------------------

@dataclass(frozen=True, slots=True)
class Breadcrumb:
    label: str
    href: str


@dataclass(frozen=True, slots=True)
class Route:
    """
    One generated page: the URL path, what kind of page it is, and the data
    handed to the renderer.
    """
    path: str
    kind: str  # index | spaces | space | tags | tag | post | rss | sitemap
    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FeedItem:
    title: str
    pub_date: str  # RFC-822
    description: str
    link: str      # absolute


@dataclass(frozen=True, slots=True)
class SitemapEntry:
    loc: str  # absolute
    lastmod: Optional[date] = None


@dataclass(frozen=True, slots=True)
class BuildReport:
    post_count: int
    space_count: int
    tag_count: int
    routes: Sequence[str] = field(default_factory=tuple)
    skipped: Sequence[str] = field(default_factory=tuple)
