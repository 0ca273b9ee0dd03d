from __future__ import annotations

from confero.aggregator import ContentAggregator
from confero.domain.models import Route
from confero.domain.schema import DEFAULT_LATEST_LIMIT
from confero.feeds import post_path
from confero.navigation import breadcrumbs, reading_time, space_title


def enumerate_routes(aggregator: ContentAggregator, *, latest_limit: int = DEFAULT_LATEST_LIMIT) -> list[Route]:
    """
    Every page of the site as (path, kind, data), ready for a renderer.

    Order: index, spaces listing, one page per catalog space, tags listing,
    one page per tag, one page per post, then the rss and sitemap feeds.
    """
    catalog = aggregator.catalog
    posts = aggregator.posts
    space_counts = aggregator.space_counts()

    routes: list[Route] = [
        Route(
            path="/",
            kind="index",
            data={"posts": aggregator.latest_posts(latest_limit), "spaces": catalog.spaces},
        ),
        Route(
            path="/spaces/",
            kind="spaces",
            data={
                "spaces": catalog.spaces,
                "counts": space_counts,
                "breadcrumbs": breadcrumbs(),
            },
        ),
    ]

    # Empty spaces still get a page; the catalog, not the posts, decides what exists
    for space in catalog:
        routes.append(
            Route(
                path=f"/spaces/{space.id}/",
                kind="space",
                data={
                    "space": space,
                    "posts": aggregator.posts_by_space(space.id),
                    "breadcrumbs": breadcrumbs(space.id, catalog=catalog),
                },
            )
        )

    routes.append(Route(path="/tags/", kind="tags", data={"counts": aggregator.tag_counts()}))
    for tag in aggregator.tags():
        routes.append(
            Route(path=f"/tags/{tag}/", kind="tag", data={"tag": tag, "posts": aggregator.posts_by_tag(tag)})
        )

    for post in posts:
        routes.append(
            Route(
                path=post_path(post.id),
                kind="post",
                data={
                    "post": post,
                    "space_title": space_title(post.space, catalog),
                    "reading_time": reading_time(post.body),
                    "breadcrumbs": breadcrumbs(post.space, post.title, catalog=catalog),
                },
            )
        )

    routes.append(Route(path="/rss.xml", kind="rss"))
    routes.append(Route(path="/sitemap.xml", kind="sitemap"))
    return routes
