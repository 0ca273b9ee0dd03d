from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from confero.domain.errors import SpaceCatalogError
from confero.domain.models import Space, SpaceCatalog
from confero.domain.schema import SpaceRecord

logger = logging.getLogger(__name__)


def catalog_from_records(records: Iterable[Mapping[str, Any]], *, origin: str = "<memory>") -> SpaceCatalog:
    """
    Build a SpaceCatalog from plain dicts, checking every record and id uniqueness.
    """
    spaces: list[Space] = []
    seen: set[str] = set()
    for i, raw in enumerate(records):
        if not isinstance(raw, Mapping):
            raise SpaceCatalogError(f"{origin}: entry {i} must be an object, got {type(raw).__name__}")
        try:
            rec = SpaceRecord.model_validate(dict(raw))
        except ValidationError as e:
            err = e.errors()[0]
            loc = ".".join(str(p) for p in err.get("loc", ()))
            raise SpaceCatalogError(f"{origin}: entry {i} [{loc}]: {err.get('msg')}") from e

        if rec.id in seen:
            raise SpaceCatalogError(f"{origin}: duplicate space id {rec.id!r}")
        seen.add(rec.id)
        spaces.append(
            Space(id=rec.id, title=rec.title, description=rec.description, banner=rec.banner, icon=rec.icon)
        )

    return SpaceCatalog(spaces=tuple(spaces))


@dataclass(frozen=True, slots=True)
class JsonSpaceSource:
    """
    spaces.json: a JSON list of {id, title, description, banner, icon}.
    """
    path: Path

    def load(self) -> SpaceCatalog:
        if not self.path.exists():
            raise SpaceCatalogError(f"Missing space catalog: {self.path}")

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SpaceCatalogError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise SpaceCatalogError(f"{self.path}: expected a list of spaces, got {type(raw).__name__}")

        catalog = catalog_from_records(raw, origin=str(self.path))
        logger.debug("Loaded %d spaces from %s", len(catalog), self.path)
        return catalog
