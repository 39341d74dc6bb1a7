"""Redirect stubs for the ``jekyll-redirect-from`` plugin.

Articles that moved keep their old addresses alive by listing them under
``redirect_from``; an article can also point elsewhere entirely with
``redirect_to``. Both produce a tiny HTML page with a meta refresh and a
canonical link to the destination.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .content import redirect_sources
from .generator.liquid import ContentRenderError
from .permalinks import item_url, output_path

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .content import ContentItem


class RedirectPagesBuilder:
    """Write redirect stubs declared in item front matter."""

    def __init__(
        self,
        site: SiteConfig,
        items_by_collection: typ.Mapping[str, list[ContentItem]],
        destination: Path,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        self.site = site
        self.items_by_collection = items_by_collection
        self.destination = destination
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("redirect.jinja")

    def redirects(self) -> list[tuple[str, str]]:
        """Return ``(source_url, target_url)`` pairs for every redirect."""
        pairs: list[tuple[str, str]] = []
        for name, items in self.items_by_collection.items():
            collection = self.site.collections.get(name)
            if collection is None or not collection.output:
                continue
            for item in items:
                if not item.published:
                    continue
                url = item_url(item, collection)
                redirect_to = item.front_matter.get("redirect_to")
                if redirect_to:
                    pairs.append((url, self.site.absolute_url(str(redirect_to))))
                    continue
                target = self.site.absolute_url(url)
                pairs.extend(
                    (source, target)
                    for source in redirect_sources(item.front_matter)
                )
        return pairs

    def run(self, reserved: typ.Collection[Path] = ()) -> list[Path]:
        """Write every redirect stub and return the written paths.

        Parameters
        ----------
        reserved : Collection[Path], optional
            Files already written by the build. A redirect may not replace
            them.

        Raises
        ------
        ContentRenderError
            If two redirects claim the same source address, or a source
            address belongs to a reserved file.
        """
        written: list[Path] = []
        claimed: set[Path] = set()
        for source, target in self.redirects():
            path = output_path(source, self.destination)
            if path in claimed:
                msg = f"Redirect source '{source}' is declared more than once."
                raise ContentRenderError(msg)
            if path in reserved:
                msg = f"Redirect source '{source}' would overwrite a rendered page."
                raise ContentRenderError(msg)
            claimed.add(path)
            html = self.template.render(target=target, site=self.site)
            if not html.endswith("\n"):
                html += "\n"
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(html, encoding="utf-8")
            written.append(path)
        return written


__all__ = ["RedirectPagesBuilder"]
