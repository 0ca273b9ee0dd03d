from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from confero.aggregator import ContentAggregator
from confero.domain.models import BuildReport, Route
from confero.feeds import render_rss, render_sitemap, rss_items, sitemap_entries
from confero.ports import Renderer
from confero.routes import enumerate_routes
from confero.settings import Settings

logger = logging.getLogger(__name__)


def attach_feeds(
    routes: list[Route],
    aggregator: ContentAggregator,
    settings: Settings,
    *,
    now: Optional[datetime] = None,
) -> list[Route]:
    """
    Replace the placeholder rss/sitemap routes with ones carrying their XML.
    """
    site = settings.site
    last_build = now or datetime.now(timezone.utc)

    rss_xml = render_rss(
        rss_items(aggregator.posts, site.url),
        title=site.title,
        description=site.description,
        site_url=site.url,
        language=site.language,
        last_build=last_build,
    )
    sitemap_xml = render_sitemap(sitemap_entries(routes, site.url))

    out: list[Route] = []
    for r in routes:
        if r.kind == "rss":
            out.append(Route(path=r.path, kind=r.kind, data={"xml": rss_xml}))
        elif r.kind == "sitemap":
            out.append(Route(path=r.path, kind=r.kind, data={"xml": sitemap_xml}))
        else:
            out.append(r)
    return out


def plan_site(aggregator: ContentAggregator, settings: Settings, *, now: Optional[datetime] = None) -> list[Route]:
    """
    Load, validate and enumerate every route. Raises before anything is written.
    """
    aggregator.load_all()
    routes = enumerate_routes(aggregator, latest_limit=settings.content.latest_limit)
    return attach_feeds(routes, aggregator, settings, now=now)


def build_site(
    aggregator: ContentAggregator,
    renderer: Renderer,
    settings: Settings,
    *,
    out_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> BuildReport:
    routes = plan_site(aggregator, settings, now=now)
    target = out_dir or settings.paths.out_dir

    written = renderer.render(routes, target)
    logger.info("Wrote %d files to %s", len(written), target)

    return BuildReport(
        post_count=len(aggregator.posts),
        space_count=len(aggregator.catalog),
        tag_count=len(aggregator.tags()),
        routes=tuple(r.path for r in routes),
        skipped=aggregator.skipped,
    )
