from __future__ import annotations

from typing import Protocol

from confero.domain.models import SpaceCatalog


class SpaceSource(Protocol):
    """
    Reads the static space catalog once per build.
    """

    def load(self) -> SpaceCatalog:
        ...
