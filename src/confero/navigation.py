from __future__ import annotations

import math
import re
from typing import Optional

from confero.domain.models import Breadcrumb, SpaceCatalog

_WORD_RE = re.compile(r"\S+")


def space_title(space_id: str, catalog: Optional[SpaceCatalog] = None) -> str:
    """Display title for a space; falls back to the id itself."""
    if catalog is not None:
        space = catalog.get(space_id)
        if space is not None:
            return space.title
    return space_id


def breadcrumbs(
    space: Optional[str] = None,
    post_title: Optional[str] = None,
    *,
    catalog: Optional[SpaceCatalog] = None,
) -> list[Breadcrumb]:
    crumbs = [Breadcrumb(label="Home", href="/")]

    if space:
        crumbs.append(Breadcrumb(label="Spaces", href="/spaces/"))
        crumbs.append(Breadcrumb(label=space_title(space, catalog), href=f"/spaces/{space}/"))

    if post_title:
        crumbs.append(Breadcrumb(label=post_title, href="#"))

    return crumbs


def reading_time(body: str, *, words_per_minute: int = 200) -> str:
    """
    Rough reading time, e.g. "3 min read". Never less than one minute.
    """
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive")
    words = len(_WORD_RE.findall(body or ""))
    minutes = max(1, math.ceil(words / words_per_minute))
    return f"{minutes} min read"
