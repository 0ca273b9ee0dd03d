from __future__ import annotations

import logging
from typing import Iterable

from pydantic import ValidationError

from confero.domain.errors import (
    ContentLoadError,
    DuplicateSlugError,
    InvalidSpaceReferenceError,
    InvalidTagFormatError,
)
from confero.domain.models import LoadResult, Post, PostLoaded, PostRejected, PostSkipped, RawEntry, SpaceCatalog
from confero.domain.schema import MAX_TAGS, PostFrontmatter, is_url_safe

logger = logging.getLogger(__name__)


def _first_error(exc: ValidationError) -> tuple[str, str]:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ())) or "frontmatter"
    if err.get("type") == "missing":
        return loc, "required field is missing"
    # strip pydantic's "Value error, " prefix from our own validators
    msg = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
    return loc, msg


def _check_tags(source: str, tags: list[str], *, max_tags: int) -> tuple[str, ...]:
    if not tags:
        raise InvalidTagFormatError(source, "at least one tag is required", field="tags")
    if len(tags) > max_tags:
        raise InvalidTagFormatError(source, f"{len(tags)} tags exceeds the limit of {max_tags}", field="tags")

    seen: set[str] = set()
    for tag in tags:
        if not tag:
            raise InvalidTagFormatError(source, "empty tag", field="tags")
        if not is_url_safe(tag):
            raise InvalidTagFormatError(
                source,
                f"tag {tag!r} must be lowercase alphanumerics separated by single hyphens",
                field="tags",
            )
        if tag in seen:
            raise InvalidTagFormatError(source, f"duplicate tag {tag!r}", field="tags")
        seen.add(tag)
    return tuple(tags)


def parse_post(
    entry: RawEntry,
    catalog: SpaceCatalog,
    *,
    max_tags: int = MAX_TAGS,
    include_drafts: bool = False,
) -> LoadResult:
    """
    Validate one raw entry.

    Never raises for content defects: the error travels inside PostRejected
    so the caller can report every bad entry of a build at once.
    """
    if entry.parse_error is not None:
        return PostRejected(entry.source, ContentLoadError(entry.source, entry.parse_error, field="frontmatter"))

    try:
        fm = PostFrontmatter.model_validate(dict(entry.frontmatter))
    except ValidationError as e:
        field, msg = _first_error(e)
        return PostRejected(entry.source, ContentLoadError(entry.source, msg, field=field))

    if fm.draft and not include_drafts:
        logger.debug("Skipping draft %s", entry.source)
        return PostSkipped(entry.source, "draft")

    post_id = fm.slug if fm.slug is not None else entry.name.lower()
    if not is_url_safe(post_id):
        return PostRejected(
            entry.source,
            ContentLoadError(entry.source, f"post id {post_id!r} is not URL-safe", field="slug"),
        )

    try:
        tags = _check_tags(entry.source, fm.tags, max_tags=max_tags)
    except InvalidTagFormatError as e:
        return PostRejected(entry.source, e)

    if fm.space not in catalog:
        known = ", ".join(catalog.ids) or "<empty catalog>"
        return PostRejected(
            entry.source,
            InvalidSpaceReferenceError(
                entry.source, f"space {fm.space!r} is not in the space catalog (known: {known})", field="space"
            ),
        )

    return PostLoaded(
        Post(
            id=post_id,
            title=fm.title,
            description=fm.description,
            date=fm.date,
            tags=tags,
            space=fm.space,
            body=entry.body,
            group=entry.group,
            source=entry.source,
        )
    )


def find_duplicate_ids(posts: Iterable[Post]) -> list[DuplicateSlugError]:
    seen: dict[str, Post] = {}
    dupes: list[DuplicateSlugError] = []
    for p in posts:
        first = seen.get(p.id)
        if first is None:
            seen[p.id] = p
            continue
        dupes.append(
            DuplicateSlugError(p.source, f"id {p.id!r} is already used by {first.source}", field="id")
        )
    return dupes
