"""RSS and sitemap output.

Field mapping lives here; the XML itself is produced with ElementTree so
escaping is never done by hand.
"""

from __future__ import annotations

import datetime as dt
import xml.etree.ElementTree as ET
from email.utils import format_datetime
from typing import Iterable, Optional, Sequence
from urllib.parse import urlsplit

from confero.domain.models import FeedItem, Post, Route, SitemapEntry

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# Route kinds that are pages (and so belong in the sitemap)
PAGE_KINDS = frozenset({"index", "spaces", "space", "tags", "tag", "post"})


def absolute_url(site_url: str, path: str) -> str:
    parts = urlsplit(site_url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"site url must be absolute (scheme://host), got {site_url!r}")
    base = site_url.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return base + path


def post_path(post_id: str) -> str:
    return f"/posts/{post_id}/"


def rfc822_date(value: dt.date) -> str:
    if not isinstance(value, dt.datetime):
        value = dt.datetime(value.year, value.month, value.day, tzinfo=dt.timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return format_datetime(value)


def rss_items(posts: Sequence[Post], site_url: str) -> list[FeedItem]:
    return [
        FeedItem(
            title=p.title,
            pub_date=rfc822_date(p.date),
            description=p.description,
            link=absolute_url(site_url, f"/posts/{p.id}"),
        )
        for p in posts
    ]


def render_rss(
    items: Sequence[FeedItem],
    *,
    title: str,
    description: str,
    site_url: str,
    language: str = "en-us",
    last_build: Optional[dt.datetime] = None,
) -> str:
    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = title
    ET.SubElement(channel, "link").text = absolute_url(site_url, "/")
    ET.SubElement(channel, "description").text = description
    ET.SubElement(channel, "language").text = language
    if last_build is not None:
        ET.SubElement(channel, "lastBuildDate").text = rfc822_date(last_build)

    for it in items:
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = it.title
        ET.SubElement(item, "link").text = it.link
        ET.SubElement(item, "guid", {"isPermaLink": "true"}).text = it.link
        ET.SubElement(item, "description").text = it.description
        ET.SubElement(item, "pubDate").text = it.pub_date

    ET.indent(rss)
    return ET.tostring(rss, encoding="utf-8", xml_declaration=True).decode("utf-8") + "\n"


def sitemap_entries(routes: Iterable[Route], site_url: str) -> list[SitemapEntry]:
    entries: list[SitemapEntry] = []
    for r in routes:
        if r.kind not in PAGE_KINDS:
            continue
        lastmod = None
        if r.kind == "post":
            lastmod = r.data["post"].date
        entries.append(SitemapEntry(loc=absolute_url(site_url, r.path), lastmod=lastmod))
    return entries


def render_sitemap(entries: Sequence[SitemapEntry]) -> str:
    urlset = ET.Element("urlset", {"xmlns": SITEMAP_NS})
    for e in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = e.loc
        if e.lastmod is not None:
            ET.SubElement(url, "lastmod").text = e.lastmod.isoformat()

    ET.indent(urlset)
    return ET.tostring(urlset, encoding="utf-8", xml_declaration=True).decode("utf-8") + "\n"
