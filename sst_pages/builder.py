"""Render a validated site: collections, examples index and plugin output."""

from __future__ import annotations

import typing as typ

from ._constants import (
    EXAMPLES_COLLECTION,
    EXAMPLES_INDEX_URL,
    REDIRECT_PLUGIN,
    SITEMAP_PLUGIN,
)
from .examples_index import ExamplesIndexBuilder
from .generator import CollectionPageGenerator, site_variables
from .redirects import RedirectPagesBuilder
from .sitemap import SitemapBuilder

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig
    from .content import ContentItem


def build_site(
    site: SiteConfig,
    items_by_collection: typ.Mapping[str, list[ContentItem]],
    destination: Path,
    *,
    templates_dir: Path | None = None,
) -> list[Path]:
    """Write every page of the site below ``destination``.

    Parameters
    ----------
    site : SiteConfig
        Loaded configuration.
    items_by_collection : Mapping[str, list[ContentItem]]
        Loaded items keyed by collection name, usually
        ``ValidationReport.items``.
    destination : Path
        Build output root.
    templates_dir : Path, optional
        Alternative Jinja template directory.

    Returns
    -------
    list[Path]
        Every file written, in build order: collection pages, the examples
        index, redirect stubs, then ``sitemap.xml`` and ``robots.txt``.
    """
    site_vars = site_variables(site, items_by_collection)
    written: list[Path] = []
    for collection in site.output_collections:
        generator = CollectionPageGenerator(
            site,
            collection,
            list(items_by_collection.get(collection.name, [])),
            destination,
            templates_dir=templates_dir,
            site_vars=site_vars,
        )
        written.extend(generator.run())

    extra_urls: list[str] = []
    examples = site.collections.get(EXAMPLES_COLLECTION)
    if examples is not None and examples.output:
        builder = ExamplesIndexBuilder(
            site,
            list(items_by_collection.get(EXAMPLES_COLLECTION, [])),
            destination,
            templates_dir=templates_dir,
        )
        written.append(builder.run())
        extra_urls.append(EXAMPLES_INDEX_URL)

    if site.has_plugin(REDIRECT_PLUGIN):
        redirects = RedirectPagesBuilder(
            site, items_by_collection, destination, templates_dir=templates_dir
        )
        written.extend(redirects.run(reserved=set(written)))

    if site.has_plugin(SITEMAP_PLUGIN):
        sitemap = SitemapBuilder(
            site,
            items_by_collection,
            destination,
            extra_urls=extra_urls,
            templates_dir=templates_dir,
        )
        written.extend(sitemap.run())
    return written


__all__ = ["build_site"]
