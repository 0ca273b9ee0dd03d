"""Shared fixtures."""

from pathlib import Path
from typing import Any, Callable

import pytest

from confero.adapters.catalog.json_catalog import catalog_from_records
from confero.adapters.content.in_memory import InMemoryContentSource
from confero.aggregator import ContentAggregator
from confero.domain.models import SpaceCatalog
from confero.settings import Content, Paths, Settings, Site

SPACE_RECORDS = [
    {
        "id": sid,
        "title": title,
        "description": f"All about {title.lower()}.",
        "banner": f"/assets/banners/{sid}.svg",
        "icon": sid,
    }
    for sid, title in [
        ("blog", "Blog"),
        ("ml", "Machine Learning"),
        ("web", "Web Development"),
        ("notes", "General Notes"),
    ]
]


@pytest.fixture
def space_records() -> list[dict[str, str]]:
    return [dict(r) for r in SPACE_RECORDS]


@pytest.fixture
def catalog(space_records) -> SpaceCatalog:
    return catalog_from_records(space_records)


@pytest.fixture
def frontmatter() -> Callable[..., dict[str, Any]]:
    """Factory for a valid frontmatter dict; keyword args override fields."""

    def make(**overrides: Any) -> dict[str, Any]:
        fm: dict[str, Any] = {
            "title": "A Post",
            "date": "2024-01-01",
            "description": "Something worth reading.",
            "tags": ["x"],
            "space": "ml",
        }
        fm.update(overrides)
        return fm

    return make


@pytest.fixture
def two_post_source(frontmatter) -> InMemoryContentSource:
    """The Jan/Feb corpus: one ml post tagged x, one web post tagged x and y."""
    src = InMemoryContentSource()
    src.add("ml", "jan-post", frontmatter(title="Jan", date="2024-01-01", space="ml", tags=["x"]))
    src.add("web", "feb-post", frontmatter(title="Feb", date="2024-02-01", space="web", tags=["x", "y"]))
    return src


@pytest.fixture
def two_post_aggregator(two_post_source, catalog) -> ContentAggregator:
    return ContentAggregator(source=two_post_source, catalog=catalog)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        paths=Paths(
            content_dir=tmp_path / "content",
            spaces_file=tmp_path / "spaces.json",
            out_dir=tmp_path / "dist",
        ),
        site=Site(url="https://example.org/blog", title="Test Site", description="A test site."),
        content=Content(groups=("blog", "ml", "web", "notes")),
    )
