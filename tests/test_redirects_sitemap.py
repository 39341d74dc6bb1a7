"""Tests for the redirect stubs and the sitemap written after a build."""

from __future__ import annotations

import typing as typ
import xml.etree.ElementTree as ET

import pytest
from bs4 import BeautifulSoup

from sst_pages.config import load_site_config
from sst_pages.content import load_collection
from sst_pages.generator import ContentRenderError
from sst_pages.redirects import RedirectPagesBuilder
from sst_pages.sitemap import SitemapBuilder

if typ.TYPE_CHECKING:
    from pathlib import Path

    from sst_pages.config import SiteConfig
    from sst_pages.content import ContentItem

    from conftest import SiteFactory

SITEMAP_NS = "{http://www.sitemaps.org/schemas/sitemap/0.9}"


def _load(
    site_factory: SiteFactory,
) -> tuple[SiteConfig, dict[str, list[ContentItem]]]:
    site = load_site_config(site_factory.config_path)
    items = {
        name: load_collection(site_factory.root, site, name)
        for name in site.collections
    }
    return site, items


def test_redirect_from_writes_stub_to_new_url(
    site_factory: SiteFactory, tmp_path: Path
) -> None:
    site_factory.add_example(
        "react-app",
        redirect_from=["/examples/old-react.html", "/examples/older-react/"],
    )
    site, items = _load(site_factory)
    destination = tmp_path / "_site"

    written = RedirectPagesBuilder(site, items, destination).run()

    assert written == [
        destination / "examples" / "old-react.html",
        destination / "examples" / "older-react" / "index.html",
    ]
    soup = BeautifulSoup(written[0].read_text(encoding="utf-8"), "html.parser")
    refresh = soup.find("meta", attrs={"http-equiv": "refresh"})["content"]
    assert refresh == "0; url=https://sst.dev/examples/react-app.html"
    assert soup.find("link", rel="canonical")["href"] == (
        "https://sst.dev/examples/react-app.html"
    )


def test_redirect_to_replaces_the_page(site_factory: SiteFactory) -> None:
    site_factory.add_chapter("moved", redirect_to="https://docs.sst.dev/start")
    site, items = _load(site_factory)

    pairs = RedirectPagesBuilder(site, items, site_factory.root / "_site").redirects()

    assert pairs == [("/chapters/moved.html", "https://docs.sst.dev/start")]


def test_duplicate_redirect_sources_raise(
    site_factory: SiteFactory, tmp_path: Path
) -> None:
    site_factory.add_chapter("one", redirect_from="/old.html")
    site_factory.add_chapter("two", redirect_from="/old.html")
    site, items = _load(site_factory)

    with pytest.raises(ContentRenderError, match="more than once"):
        RedirectPagesBuilder(site, items, tmp_path / "_site").run()


def test_redirect_source_never_replaces_a_rendered_page(
    site_factory: SiteFactory, tmp_path: Path
) -> None:
    site_factory.add_chapter("keep")
    site_factory.add_example("rest-api", redirect_from=["/chapters/keep.html"])
    site, items = _load(site_factory)
    destination = tmp_path / "_site"
    page = destination / "chapters" / "keep.html"
    page.parent.mkdir(parents=True)
    page.write_text("chapter\n", encoding="utf-8")

    with pytest.raises(ContentRenderError, match="would overwrite a rendered page"):
        RedirectPagesBuilder(site, items, destination).run(reserved={page})

    assert page.read_text(encoding="utf-8") == "chapter\n"


def test_sitemap_lists_rendered_pages(
    site_factory: SiteFactory, tmp_path: Path
) -> None:
    site_factory.add_example("rest-api", date="2021-01-27 00:00:00")
    site_factory.add_chapter("hidden", sitemap=False)
    site_factory.add_chapter("draft", published=False)
    site_factory.add_chapter("moved", redirect_to="/chapters/new.html")
    site_factory.add_chapter("intro")
    site, items = _load(site_factory)
    destination = tmp_path / "_site"

    sitemap, robots = SitemapBuilder(
        site, items, destination, extra_urls=["/examples/"]
    ).run()

    root = ET.fromstring(sitemap.read_bytes())
    locations = [node.text for node in root.iter(f"{SITEMAP_NS}loc")]
    assert locations == [
        "https://sst.dev/examples/",
        "https://sst.dev/chapters/intro.html",
        "https://sst.dev/examples/rest-api.html",
    ]
    lastmods = [node.text for node in root.iter(f"{SITEMAP_NS}lastmod")]
    assert lastmods == ["2021-01-27T00:00:00+00:00"]
    assert robots.read_text(encoding="utf-8") == (
        "Sitemap: https://sst.dev/sitemap.xml\n"
    )
