"""Unit tests for RSS and sitemap output."""

import xml.etree.ElementTree as ET
from datetime import date, datetime, timezone

import pytest

from confero.domain.models import Route, SitemapEntry
from confero.feeds import (
    SITEMAP_NS,
    absolute_url,
    render_rss,
    render_sitemap,
    rfc822_date,
    rss_items,
    sitemap_entries,
)
from confero.routes import enumerate_routes


class TestAbsoluteUrl:
    def test_joins_site_with_subpath(self):
        assert absolute_url("https://example.org/blog/", "/posts/a/") == "https://example.org/blog/posts/a/"

    def test_adds_missing_leading_slash(self):
        assert absolute_url("https://example.org", "rss.xml") == "https://example.org/rss.xml"

    @pytest.mark.parametrize("site", ["example.org", "/blog", ""])
    def test_rejects_relative_site_url(self, site):
        with pytest.raises(ValueError, match="must be absolute"):
            absolute_url(site, "/")


class TestRss:
    def test_rfc822_date(self):
        assert rfc822_date(date(2024, 2, 1)) == "Thu, 01 Feb 2024 00:00:00 +0000"

    def test_items_follow_feed_order_with_absolute_links(self, two_post_aggregator):
        items = rss_items(two_post_aggregator.load_all(), "https://example.org/blog")

        assert [i.title for i in items] == ["Feb", "Jan"]
        assert items[0].link == "https://example.org/blog/posts/feb-post"
        assert items[0].pub_date == "Thu, 01 Feb 2024 00:00:00 +0000"
        assert items[1].description == "Something worth reading."

    def test_render_rss_is_valid_xml_and_escapes_text(self, two_post_aggregator):
        items = rss_items(two_post_aggregator.load_all(), "https://example.org")
        xml = render_rss(
            items,
            title="Notes & <Things>",
            description="d",
            site_url="https://example.org",
            last_build=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )

        root = ET.fromstring(xml.split("?>", 1)[1])
        channel = root.find("channel")
        assert root.tag == "rss"
        assert channel.findtext("title") == "Notes & <Things>"
        assert channel.findtext("language") == "en-us"
        assert channel.findtext("link") == "https://example.org/"
        assert [i.findtext("link") for i in channel.findall("item")] == [
            "https://example.org/posts/feb-post",
            "https://example.org/posts/jan-post",
        ]
        assert channel.findtext("lastBuildDate") == "Fri, 01 Mar 2024 00:00:00 +0000"


class TestSitemap:
    def test_one_absolute_entry_per_page_route(self, two_post_aggregator):
        routes = enumerate_routes(two_post_aggregator)

        entries = sitemap_entries(routes, "https://example.org/blog")

        page_routes = [r for r in routes if r.kind not in ("rss", "sitemap")]
        assert len(entries) == len(page_routes)
        assert all(e.loc.startswith("https://example.org/blog/") for e in entries)
        assert "https://example.org/blog/rss.xml" not in {e.loc for e in entries}

    def test_post_entries_carry_lastmod(self, two_post_aggregator):
        entries = sitemap_entries(enumerate_routes(two_post_aggregator), "https://example.org")
        by_loc = {e.loc: e for e in entries}

        assert by_loc["https://example.org/posts/jan-post/"].lastmod == date(2024, 1, 1)
        assert by_loc["https://example.org/"].lastmod is None

    def test_render_sitemap(self):
        xml = render_sitemap(
            [SitemapEntry(loc="https://example.org/"), SitemapEntry(loc="https://example.org/posts/a/", lastmod=date(2024, 1, 2))]
        )

        root = ET.fromstring(xml.split("?>", 1)[1])
        ns = {"sm": SITEMAP_NS}
        locs = [u.findtext("sm:loc", namespaces=ns) for u in root.findall("sm:url", ns)]
        assert locs == ["https://example.org/", "https://example.org/posts/a/"]
        assert root.findall("sm:url", ns)[1].findtext("sm:lastmod", namespaces=ns) == "2024-01-02"

    def test_feed_routes_are_ignored(self):
        routes = [Route(path="/rss.xml", kind="rss"), Route(path="/", kind="index")]
        assert [e.loc for e in sitemap_entries(routes, "https://example.org")] == ["https://example.org/"]
