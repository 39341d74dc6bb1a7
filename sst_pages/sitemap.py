"""Sitemap generation for the ``jekyll-sitemap`` plugin."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .permalinks import item_url

if typ.TYPE_CHECKING:
    import datetime as dt

    from .config import SiteConfig
    from .content import ContentItem

SITEMAP_FILENAME = "sitemap.xml"
ROBOTS_FILENAME = "robots.txt"


@dc.dataclass(slots=True)
class SitemapEntry:
    """One ``<url>`` element of the sitemap."""

    loc: str
    lastmod: dt.datetime | None = None


class SitemapBuilder:
    """Write ``sitemap.xml`` and ``robots.txt`` for every rendered page."""

    def __init__(
        self,
        site: SiteConfig,
        items_by_collection: typ.Mapping[str, list[ContentItem]],
        destination: Path,
        *,
        extra_urls: typ.Sequence[str] = (),
        templates_dir: Path | None = None,
    ) -> None:
        self.site = site
        self.items_by_collection = items_by_collection
        self.destination = destination
        self.extra_urls = list(extra_urls)
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def entries(self) -> list[SitemapEntry]:
        """Return sitemap entries for extra URLs and published items."""
        entries = [
            SitemapEntry(loc=self.site.absolute_url(url)) for url in self.extra_urls
        ]
        for name, items in self.items_by_collection.items():
            collection = self.site.collections.get(name)
            if collection is None or not collection.output:
                continue
            for item in items:
                if not item.published or item.front_matter.get("sitemap") is False:
                    continue
                if item.front_matter.get("redirect_to"):
                    continue
                url = item_url(item, collection)
                entries.append(
                    SitemapEntry(loc=self.site.absolute_url(url), lastmod=item.date)
                )
        return entries

    def run(self) -> list[Path]:
        """Render the sitemap and robots file, returning their paths."""
        self.destination.mkdir(parents=True, exist_ok=True)
        sitemap_url = self.site.absolute_url(f"/{SITEMAP_FILENAME}")
        written: list[Path] = []
        for filename, template_name, context in (
            (SITEMAP_FILENAME, "sitemap.xml.jinja", {"entries": self.entries()}),
            (ROBOTS_FILENAME, "robots.txt.jinja", {"sitemap_url": sitemap_url}),
        ):
            template = self.env.get_template(template_name)
            text = template.render(site=self.site, **context)
            if not text.endswith("\n"):
                text += "\n"
            path = self.destination / filename
            path.write_text(text, encoding="utf-8")
            written.append(path)
        return written


__all__ = ["SitemapBuilder", "SitemapEntry"]
