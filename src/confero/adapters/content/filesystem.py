from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from confero.adapters.content.frontmatter import FrontmatterError, split_frontmatter
from confero.adapters.content.text_loader import TextLoader, UnreadableContent
from confero.domain.models import RawEntry
from confero.domain.schema import DEFAULT_GROUPS

logger = logging.getLogger(__name__)


def _is_hidden(rel: Path) -> bool:
    # _drafts/, _partial.mdx and dotfiles are never posts
    return any(part.startswith((".", "_")) for part in rel.parts)


def _iter_group_files(group_dir: Path, extensions: set[str]) -> list[Path]:
    if not group_dir.is_dir():
        return []
    files = [
        p for p in group_dir.rglob("*")
        if p.is_file() and p.suffix.lower() in extensions and not _is_hidden(p.relative_to(group_dir))
    ]
    # Stable, deterministic ordering
    return sorted(files, key=lambda p: p.relative_to(group_dir).as_posix())


@dataclass(frozen=True, slots=True)
class FilesystemContentSource:
    """
    Reads content_dir/<group>/**/*.md|*.mdx.

    Groups are read concurrently (independent, I/O bound); the result is
    always assembled in configured group order, then file order.
    """
    content_dir: Path
    group_names: Sequence[str] = DEFAULT_GROUPS
    extensions: set[str] = field(default_factory=lambda: {".md", ".mdx"})
    max_workers: int = 4
    text_loader: TextLoader = field(default_factory=TextLoader)

    def groups(self) -> Sequence[str]:
        return tuple(self.group_names)

    def read_group(self, group: str) -> list[RawEntry]:
        group_dir = self.content_dir / group
        if not group_dir.is_dir():
            logger.warning("Content group %r has no directory at %s", group, group_dir)
            return []

        entries: list[RawEntry] = []
        for path in _iter_group_files(group_dir, self.extensions):
            entries.append(self._read_file(group, path))
        logger.debug("Group %r: %d entries", group, len(entries))
        return entries

    def read_all(self) -> list[RawEntry]:
        groups = self.groups()
        if not groups:
            return []

        workers = max(1, min(self.max_workers, len(groups)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields in submission order, whatever order the reads finish in
            per_group = list(pool.map(self.read_group, groups))

        return [e for entries in per_group for e in entries]

    def _read_file(self, group: str, path: Path) -> RawEntry:
        source = str(path)
        name = path.stem
        try:
            text = self.text_loader.load(path)
            frontmatter, body = split_frontmatter(text)
        except (UnreadableContent, FrontmatterError) as e:
            return RawEntry(group=group, name=name, source=source, parse_error=str(e))

        return RawEntry(group=group, name=name, source=source, frontmatter=frontmatter, body=body)
