from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from confero.domain.models import RawEntry


@dataclass(slots=True)
class InMemoryContentSource:
    """
    Content held in memory, keyed by group. Entries keep insertion order.

    Useful for programmatic builds and tests; uris look like memory://<group>/<name>.
    """
    _groups: dict[str, list[RawEntry]] = field(default_factory=dict)

    def add(self, group: str, name: str, frontmatter: Mapping[str, Any], body: str = "") -> RawEntry:
        entry = RawEntry(
            group=group,
            name=name,
            source=f"memory://{group}/{name}",
            frontmatter=dict(frontmatter),
            body=body,
        )
        self._groups.setdefault(group, []).append(entry)
        return entry

    def groups(self) -> Sequence[str]:
        return tuple(self._groups)

    def read_all(self) -> list[RawEntry]:
        return [e for entries in self._groups.values() for e in entries]
