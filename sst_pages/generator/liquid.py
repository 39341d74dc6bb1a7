"""Expand Liquid-style ``{{ site.* }}`` references inside content bodies.

Articles reference configuration values the way Jekyll templates do, for
example ``{{ site.sst_github_repo }}{{ site.sst_github_examples_prefix }}``.
The output and tag syntax they use is a subset of what Jinja2 accepts, so
bodies are rendered through a Jinja2 environment configured with Liquid's
forgiving undefined handling and the URL filters Jekyll provides.
"""

from __future__ import annotations

import datetime as dt
import re
import typing as typ

from jinja2 import ChainableUndefined, Environment, TemplateError

from sst_pages.config.helpers import _parse_timestamp
from sst_pages.permalinks import item_url, slugify

if typ.TYPE_CHECKING:
    from sst_pages.config import SiteConfig
    from sst_pages.content import ContentItem

LIQUID_BLOCK_PATTERN = re.compile(r"\{\{(.*?)\}\}|\{%(.*?)%\}", re.DOTALL)
RAW_BLOCK_PATTERN = re.compile(
    r"\{%-?\s*raw\s*-?%\}.*?\{%-?\s*endraw\s*-?%\}", re.DOTALL
)
SITE_REFERENCE_PATTERN = re.compile(r"(?<![\w.])site\.([A-Za-z_][A-Za-z0-9_]*)")


class ContentRenderError(RuntimeError):
    """Raised when a content item cannot be rendered to HTML."""


def site_references(text: str) -> set[str]:
    """Return the top-level ``site`` keys referenced by Liquid blocks in ``text``.

    Examples
    --------
    >>> sorted(site_references("See {{ site.forum_url }}{{ site.forum_thread_prefix }}"))
    ['forum_thread_prefix', 'forum_url']
    >>> site_references("{% raw %}{{ site.ignored }}{% endraw %}")
    set()
    """
    stripped = RAW_BLOCK_PATTERN.sub("", text)
    names: set[str] = set()
    for match in LIQUID_BLOCK_PATTERN.finditer(stripped):
        expression = match.group(1) or match.group(2) or ""
        names.update(SITE_REFERENCE_PATTERN.findall(expression))
    return names


def _size(value: object) -> int:
    return len(value) if isinstance(value, typ.Sized) else 0


def date_to_xmlschema(value: object) -> str:
    parsed = _parse_timestamp(value)  # type: ignore[arg-type]
    return parsed.isoformat() if parsed else ""


def page_variables(
    item: ContentItem, site: SiteConfig, url: str | None = None
) -> dict[str, typ.Any]:
    """Return the ``page`` object templates see for ``item``."""
    resolved_url = url or item_url(item, site.collections.get(item.collection))
    variables = dict(item.front_matter)
    variables |= {
        "url": resolved_url,
        "collection": item.collection,
        "path": item.relative_path,
        "title": item.title,
        "date": item.date,
    }
    return variables


def site_variables(
    site: SiteConfig,
    items_by_collection: typ.Mapping[str, list[ContentItem]] | None = None,
    *,
    generated_at: dt.datetime | None = None,
) -> dict[str, typ.Any]:
    """Return the ``site`` object: config keys plus collection documents."""
    variables = dict(site.raw)
    variables["time"] = generated_at or dt.datetime.now(dt.UTC)
    documents: list[dict[str, typ.Any]] = []
    for name, items in (items_by_collection or {}).items():
        pages = [page_variables(item, site) for item in items if item.published]
        variables[name] = pages
        documents.extend(pages)
    variables["documents"] = documents
    variables["collections"] = [
        {"label": name, "output": collection.output}
        for name, collection in site.collections.items()
    ]
    return variables


class LiquidExpander:
    """Render Liquid output/tag syntax in content bodies via Jinja2."""

    def __init__(
        self, site: SiteConfig, site_vars: typ.Mapping[str, typ.Any] | None = None
    ) -> None:
        self.site = site
        self.site_vars = dict(site_vars) if site_vars is not None else site_variables(site)
        # Liquid has no {# #} comments; keep Jinja's out of the way of code samples.
        self.env = Environment(
            autoescape=False,
            undefined=ChainableUndefined,
            keep_trailing_newline=True,
            comment_start_string="{##{",
            comment_end_string="}##}",
        )
        self.env.filters.update(
            {
                "relative_url": site.relative_url,
                "absolute_url": site.absolute_url,
                "slugify": lambda value: slugify(str(value)),
                "date_to_xmlschema": date_to_xmlschema,
                "size": _size,
            }
        )

    def check_syntax(self, text: str) -> None:
        """Compile ``text`` without rendering it.

        Raises
        ------
        TemplateSyntaxError
            If the body cannot be parsed or uses a filter that is not
            registered.
        """
        if "{{" in text or "{%" in text:
            self.env.compile(text)

    def expand(
        self,
        text: str,
        page: typ.Mapping[str, typ.Any] | None = None,
        *,
        source: str | None = None,
    ) -> str:
        """Return ``text`` with every Liquid block evaluated.

        Raises
        ------
        ContentRenderError
            If the body is not valid template syntax.
        """
        if "{{" not in text and "{%" not in text:
            return text
        try:
            template = self.env.from_string(text)
            return template.render(site=self.site_vars, page=dict(page or {}))
        except TemplateError as exc:
            location = f"{source}: " if source else ""
            msg = f"{location}cannot expand template syntax: {exc}"
            raise ContentRenderError(msg) from exc


__all__ = [
    "ContentRenderError",
    "LiquidExpander",
    "date_to_xmlschema",
    "page_variables",
    "site_references",
    "site_variables",
]
