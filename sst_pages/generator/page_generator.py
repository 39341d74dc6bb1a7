"""High-level orchestration for collection page generation.

This module turns the items of one output collection into HTML files. Each
item's body has its Liquid references expanded, is rendered from Markdown
with ``HtmlContentRenderer``, and is wrapped in the template that matches its
``layout``. Files land at the path derived from the collection permalink.

Example
-------
>>> from pathlib import Path
>>> from sst_pages.config import load_site_config
>>> from sst_pages.content import load_collection
>>> from sst_pages.generator import CollectionPageGenerator
>>> site = load_site_config(Path("site/_config.yml"))  # doctest: +SKIP
>>> items = load_collection(Path("site"), site, "examples")  # doctest: +SKIP
>>> generator = CollectionPageGenerator(
...     site, site.get_collection("examples"), items, Path("site/_site")
... )  # doctest: +SKIP
>>> generator.run()  # doctest: +SKIP
[PosixPath('site/_site/examples/how-to-create-a-rest-api-with-serverless.html'), ...]
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from sst_pages._constants import (
    EXAMPLE_LAYOUT,
    EXAMPLES_COLLECTION,
    MARKDOWN_EXTENSIONS,
    REDIRECT_PLUGIN,
)
from sst_pages.content import parse_example_front_matter
from sst_pages.generator.link_rewriter import _build_link_rewriter
from sst_pages.generator.liquid import (
    ContentRenderError,
    LiquidExpander,
    page_variables,
)
from sst_pages.generator.models import PageModel
from sst_pages.generator.renderer import HtmlContentRenderer, RenderedMarkdown
from sst_pages.permalinks import item_url, output_path

if typ.TYPE_CHECKING:
    from sst_pages.config import CollectionConfig, SiteConfig
    from sst_pages.content import ContentItem

LAYOUT_TEMPLATES = {EXAMPLE_LAYOUT: "example_page.jinja"}
DEFAULT_TEMPLATE = "content_page.jinja"
TOC_LEVELS = (2, 3)


class CollectionPageGenerator:
    """Render every item of a collection into themed HTML pages."""

    def __init__(
        self,
        site: SiteConfig,
        collection: CollectionConfig,
        items: list[ContentItem],
        destination: Path,
        *,
        templates_dir: Path | None = None,
        site_vars: typ.Mapping[str, typ.Any] | None = None,
        pygments_style: str = "monokai",
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        site : SiteConfig
            Loaded site configuration.
        collection : CollectionConfig
            Collection whose items are rendered; supplies the permalink.
        items : list[ContentItem]
            Items loaded from the collection directory.
        destination : Path
            Build output root (``_site``).
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        site_vars : Mapping, optional
            Precomputed ``site`` object for Liquid expansion, usually built
            with :func:`~sst_pages.generator.liquid.site_variables` so bodies
            can list other collections.
        pygments_style : str, optional
            Pygments style for highlighted code blocks.
        """
        self.site = site
        self.collection = collection
        self.items = items
        self.destination = destination
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = HtmlContentRenderer(
            pygments_style, link_extension=_build_link_rewriter(site.baseurl)
        )
        self.expander = LiquidExpander(site, site_vars)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def run(self) -> list[Path]:
        """Render each published item and write it to its permalink path.

        Returns
        -------
        list[Path]
            Paths of the written HTML files, in item order.

        Raises
        ------
        ContentRenderError
            If two items resolve to the same output file or a body cannot be
            rendered.
        FrontMatterError
            If an example article lacks required front matter.
        """
        generated_at = dt.datetime.now(dt.UTC)
        claimed: dict[Path, str] = {}
        written: list[Path] = []
        for item in self.items:
            if not item.published or self._is_redirect_stub(item):
                continue
            page = self.build_page_model(item)
            target = output_path(page.url, self.destination)
            if target in claimed:
                msg = (
                    f"{item.relative_path} and {claimed[target]} both render to "
                    f"'{page.url}'."
                )
                raise ContentRenderError(msg)
            claimed[target] = item.relative_path

            template = self.env.get_template(
                LAYOUT_TEMPLATES.get(page.layout or "", DEFAULT_TEMPLATE)
            )
            html = template.render(
                site=self.site,
                page=page,
                page_lang=page.front_matter.get("lang") or "en",
                canonical_url=page.canonical_url,
                html_title=f"{page.title} | {self.site.title}",
                pygments_css=self.renderer.stylesheet,
                generated_at=generated_at,
            )
            if not html.endswith("\n"):
                html += "\n"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            written.append(target)
        return written

    def build_page_model(self, item: ContentItem) -> PageModel:
        """Expand, render and describe ``item`` for the page template."""
        url = item_url(item, self.collection)
        rendered = self._render_body(item, url)
        page = PageModel(
            title=item.title,
            url=url,
            href=self.site.relative_url(url),
            canonical_url=self.site.absolute_url(url),
            collection=item.collection,
            relative_path=item.relative_path,
            layout=item.layout,
            description=item.front_matter.get("description"),
            date=item.date,
            content_html=rendered.html,
            toc=[entry for entry in rendered.headings if entry.level in TOC_LEVELS],
            edit_url=self.site.github.edit_url(item.relative_path),
            history_url=self.site.github.history_url(item.relative_path),
            front_matter=dict(item.front_matter),
        )
        if item.collection == EXAMPLES_COLLECTION or item.layout == EXAMPLE_LAYOUT:
            example = parse_example_front_matter(item)
            page.example = example
            page.repo_url = self.site.sst.example_url(example.repo)
            page.discuss_url = self.site.forum.thread_url(example.comments_id)
        return page

    def _render_body(self, item: ContentItem, url: str) -> RenderedMarkdown:
        variables = page_variables(item, self.site, url)
        expanded = self.expander.expand(
            item.body, variables, source=item.relative_path
        )
        if item.extension in MARKDOWN_EXTENSIONS:
            return self.renderer.render(expanded)
        return RenderedMarkdown(html=expanded)

    def _is_redirect_stub(self, item: ContentItem) -> bool:
        return bool(
            self.site.has_plugin(REDIRECT_PLUGIN)
            and item.front_matter.get("redirect_to")
        )


__all__ = ["CollectionPageGenerator"]
