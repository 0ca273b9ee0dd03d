from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

from confero.domain.errors import ContentLoadError, ContentValidationFailed
from confero.domain.models import Post, PostLoaded, PostRejected, Space, SpaceCatalog
from confero.domain.schema import DEFAULT_LATEST_LIMIT, MAX_TAGS
from confero.ports import ContentSource
from confero.validation import find_duplicate_ids, parse_post

logger = logging.getLogger(__name__)


# -------------------------
# Pure queries over a post sequence
# -------------------------

def sort_posts(posts: Sequence[Post]) -> tuple[Post, ...]:
    """Newest first; equal dates fall back to id ascending."""
    by_id = sorted(posts, key=lambda p: p.id)
    return tuple(sorted(by_id, key=lambda p: p.date, reverse=True))


def filter_by_space(posts: Sequence[Post], space_id: str) -> tuple[Post, ...]:
    return tuple(p for p in posts if p.space == space_id)


def filter_by_tag(posts: Sequence[Post], tag: str) -> tuple[Post, ...]:
    return tuple(p for p in posts if tag in p.tags)


def collect_tags(posts: Sequence[Post]) -> list[str]:
    return sorted({t for p in posts for t in p.tags})


def tag_counts(posts: Sequence[Post]) -> dict[str, int]:
    counts = Counter(t for p in posts for t in p.tags)
    return {t: counts[t] for t in sorted(counts)}


def latest(posts: Sequence[Post], limit: int = DEFAULT_LATEST_LIMIT) -> tuple[Post, ...]:
    """
    First `limit` posts of an already-sorted sequence. Does not re-sort.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    return tuple(posts[:limit])


# -------------------------
# Aggregator
# -------------------------

@dataclass(slots=True)
class ContentAggregator:
    """
    Loads every post of every content group once and answers queries over
    the resulting snapshot.

    Built once per build by the app container and passed to whoever needs
    it; there is no module-level registry.
    """
    source: ContentSource
    catalog: SpaceCatalog
    max_tags: int = MAX_TAGS
    include_drafts: bool = False

    _snapshot: Optional[tuple[Post, ...]] = None
    _skipped: list[str] = field(default_factory=list)

    def load_all(self) -> tuple[Post, ...]:
        """
        Read, validate and sort the whole corpus.

        Every invalid entry is collected first; if any exist the build is
        aborted with ContentValidationFailed carrying all of them.
        """
        entries = self.source.read_all()
        logger.debug("Read %d entries from groups %s", len(entries), ", ".join(self.source.groups()))

        posts: list[Post] = []
        errors: list[ContentLoadError] = []
        skipped: list[str] = []
        for entry in entries:
            result = parse_post(
                entry, self.catalog, max_tags=self.max_tags, include_drafts=self.include_drafts
            )
            if isinstance(result, PostLoaded):
                posts.append(result.post)
            elif isinstance(result, PostRejected):
                errors.append(result.error)  # type: ignore[arg-type]
            else:
                skipped.append(result.source)

        errors.extend(find_duplicate_ids(posts))

        if errors:
            for e in errors:
                logger.error("%s", e)
            raise ContentValidationFailed(errors)

        self._snapshot = sort_posts(posts)
        self._skipped = skipped
        logger.info("Loaded %d posts (%d skipped)", len(self._snapshot), len(skipped))
        return self._snapshot

    @property
    def posts(self) -> tuple[Post, ...]:
        if self._snapshot is None:
            return self.load_all()
        return self._snapshot

    @property
    def skipped(self) -> tuple[str, ...]:
        return tuple(self._skipped)

    @property
    def spaces(self) -> tuple[Space, ...]:
        return self.catalog.spaces

    def post(self, post_id: str) -> Optional[Post]:
        for p in self.posts:
            if p.id == post_id:
                return p
        return None

    def posts_by_space(self, space_id: str) -> tuple[Post, ...]:
        return filter_by_space(self.posts, space_id)

    def posts_by_tag(self, tag: str) -> tuple[Post, ...]:
        return filter_by_tag(self.posts, tag)

    def tags(self) -> list[str]:
        return collect_tags(self.posts)

    def tag_counts(self) -> dict[str, int]:
        return tag_counts(self.posts)

    def latest_posts(self, limit: int = DEFAULT_LATEST_LIMIT) -> tuple[Post, ...]:
        return latest(self.posts, limit)

    def space_counts(self) -> dict[str, int]:
        """Post count per catalog space, catalog order, zero for empty spaces."""
        counts = Counter(p.space for p in self.posts)
        return {s.id: counts.get(s.id, 0) for s in self.catalog}
