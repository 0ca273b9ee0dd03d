from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from confero.domain.models import Route


class Renderer(Protocol):
    """
    Turns enumerated routes into files under an output directory.
    Returns the paths written.
    """

    def render(self, routes: Sequence[Route], out_dir: Path) -> list[Path]:
        ...
