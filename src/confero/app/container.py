from __future__ import annotations

from dataclasses import dataclass

from confero.adapters.catalog.json_catalog import JsonSpaceSource
from confero.adapters.content.filesystem import FilesystemContentSource
from confero.adapters.rendering.json_renderer import JsonRenderer
from confero.aggregator import ContentAggregator
from confero.ports import ContentSource, Renderer, SpaceSource
from confero.settings import Settings


@dataclass(frozen=True, slots=True)
class Container:
    """
    Everything one build needs, wired from settings.
    The aggregator is created here and handed to every consumer.
    """
    settings: Settings
    content_source: ContentSource
    space_source: SpaceSource
    aggregator: ContentAggregator
    renderer: Renderer


def build_container(settings: Settings) -> Container:
    content_source = FilesystemContentSource(
        content_dir=settings.paths.content_dir,
        group_names=settings.content.groups,
        max_workers=settings.content.read_workers,
    )
    space_source = JsonSpaceSource(path=settings.paths.spaces_file)

    # The catalog is read eagerly: a broken spaces.json should fail before any post is touched
    catalog = space_source.load()

    aggregator = ContentAggregator(
        source=content_source,
        catalog=catalog,
        max_tags=settings.content.max_tags,
        include_drafts=settings.content.include_drafts,
    )
    return Container(
        settings=settings,
        content_source=content_source,
        space_source=space_source,
        aggregator=aggregator,
        renderer=JsonRenderer(),
    )
