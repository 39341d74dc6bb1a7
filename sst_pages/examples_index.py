"""Build and render the examples landing page.

This module takes the loaded ``examples`` collection and produces
``examples/index.html`` listing every tutorial as a card. Cards are grouped
by the article ``type`` (``api``, ``web-app``, ``database`` and so on);
groups appear in the order of their lowest ``index`` and cards within a
group are ordered by ``index`` then title. Each card links to the rendered
article, the runnable project in the framework repository, and the forum
thread for discussion.

>>> from pathlib import Path
>>> from sst_pages.config import load_site_config
>>> from sst_pages.content import load_collection
>>> site = load_site_config(Path("site/_config.yml"))  # doctest: +SKIP
>>> items = load_collection(Path("site"), site, "examples")  # doctest: +SKIP
>>> ExamplesIndexBuilder(site, items, Path("site/_site")).run()  # doctest: +SKIP
PosixPath('site/_site/examples/index.html')
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import EXAMPLES_COLLECTION, EXAMPLES_INDEX_URL
from .content import parse_example_front_matter
from .generator.models import ExampleCard, ExampleGroup
from .permalinks import item_url, output_path

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .content import ContentItem

TYPE_WORDS = {
    "api": "API",
    "cdk": "CDK",
    "graphql": "GraphQL",
    "iot": "IoT",
    "jwt": "JWT",
}


class ExamplesIndexBuilder:
    """Render a landing page enumerating the example articles."""

    def __init__(
        self,
        site: SiteConfig,
        items: list[ContentItem],
        destination: Path,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the examples index builder.

        Parameters
        ----------
        site : SiteConfig
            Parsed site configuration.
        items : list[ContentItem]
            Items of the ``examples`` collection.
        destination : Path
            Build output root; the index is written to
            ``<destination>/examples/index.html``.
        templates_dir : Path, optional
            Directory containing the Jinja templates. Defaults to the
            ``sst_pages/templates`` directory when ``None``.
        """
        self.site = site
        self.items = items
        self.destination = destination
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("examples_index.jinja")

    def run(self) -> Path:
        """Render the examples index HTML file and return its path."""
        groups = self.gather_groups()
        output = output_path(EXAMPLES_INDEX_URL, self.destination)
        output.parent.mkdir(parents=True, exist_ok=True)
        html = self.template.render(
            site=self.site,
            groups=groups,
            html_title=f"Examples | {self.site.title}",
            canonical_url=self.site.absolute_url(EXAMPLES_INDEX_URL),
            generated_at=dt.datetime.now(dt.UTC),
        )
        if not html.endswith("\n"):
            html += "\n"
        output.write_text(html, encoding="utf-8")
        return output

    def gather_groups(self) -> list[ExampleGroup]:
        """Return example cards grouped by type in display order."""
        collection = self.site.collections.get(EXAMPLES_COLLECTION)
        by_type: dict[str, list[ExampleCard]] = {}
        for item in self.items:
            if not item.published:
                continue
            example = parse_example_front_matter(item)
            url = item_url(item, collection)
            by_type.setdefault(example.type, []).append(
                ExampleCard(
                    title=example.title,
                    short_title=example.short_title or example.title,
                    href=self.site.relative_url(url),
                    short_desc=example.short_desc,
                    type=example.type,
                    index=example.index,
                    repo_url=self.site.sst.example_url(example.repo),
                    discuss_url=self.site.forum.thread_url(example.comments_id),
                )
            )

        groups = [
            ExampleGroup(
                type=kind,
                label=_type_label(kind),
                cards=sorted(cards, key=lambda card: (card.index, card.title)),
            )
            for kind, cards in by_type.items()
        ]
        groups.sort(key=lambda group: (group.cards[0].index, group.type))
        return groups


def _type_label(kind: str) -> str:
    """Return a heading for an example type such as ``web-app``."""
    words = kind.replace("_", "-").split("-")
    return " ".join(TYPE_WORDS.get(word, word.capitalize()) for word in words if word)


__all__ = ["ExamplesIndexBuilder"]
