from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from confero.domain.errors import RenderError
from confero.domain.models import Route
from confero.utils.json_sanitize import json_sanitize

logger = logging.getLogger(__name__)

FEED_KINDS = frozenset({"rss", "sitemap"})


def route_file(route: Route, out_dir: Path) -> Path:
    """
    /             -> out/index.json
    /posts/a/     -> out/posts/a/index.json
    /rss.xml      -> out/rss.xml
    """
    rel = route.path.strip("/")
    if route.kind in FEED_KINDS:
        return out_dir / rel
    return (out_dir / rel / "index.json") if rel else out_dir / "index.json"


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(path)


@dataclass(frozen=True, slots=True)
class JsonRenderer:
    """
    Writes each page route's data as JSON and feed routes as their XML.

    Stands in for an HTML templating layer: anything that consumes the
    JSON (a template engine, a JS front-end) sees exactly what a template
    would have been given.
    """
    indent: int = 2

    def render(self, routes: Sequence[Route], out_dir: Path) -> list[Path]:
        written: list[Path] = []
        for route in routes:
            target = route_file(route, out_dir)
            if route.kind in FEED_KINDS:
                xml = route.data.get("xml")
                if not isinstance(xml, str):
                    raise RenderError(f"{route.path}: feed route has no rendered xml")
                payload = xml
            else:
                doc = {"path": route.path, "kind": route.kind, "data": json_sanitize(route.data)}
                payload = json.dumps(doc, indent=self.indent, ensure_ascii=False) + "\n"

            try:
                _write_atomic(target, payload)
            except OSError as e:
                raise RenderError(f"Failed to write {target}: {e}") from e

            written.append(target)
            logger.debug("Wrote %s", target)

        return written
