from __future__ import annotations

from typing import Protocol, Sequence

from confero.domain.models import RawEntry


class ContentSource(Protocol):
    """
    Provides, per content group, the raw (frontmatter, body) entries.
    """

    def groups(self) -> Sequence[str]:
        ...

    def read_all(self) -> list[RawEntry]:
        """
        Every entry of every group, in group order then name order.
        """
        ...
