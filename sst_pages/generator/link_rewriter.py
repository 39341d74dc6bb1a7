"""Markdown tree processors for site-relative links and heading anchors."""

from __future__ import annotations

import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from sst_pages.markdown_parser import Heading, kramdown_slug, unique_anchor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
LINK_ATTRIBUTES = {"a": "href", "img": "src"}


def _build_link_rewriter(baseurl: str) -> Extension | None:
    """Return a BaseUrlLinkExtension when the site is served from a subpath."""
    if not baseurl:
        return None
    return BaseUrlLinkExtension(baseurl)


class BaseUrlLinkExtension(Extension):
    """Prefix root-relative links and images with the site ``baseurl``.

    Articles link to other pages as ``/examples/foo.html``; when the site is
    published under a subpath those links need the subpath in front so they
    keep resolving.
    """

    def __init__(self, baseurl: str) -> None:
        super().__init__()
        self.baseurl = baseurl.rstrip("/")

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        processor = BaseUrlTreeprocessor(md, self.baseurl)
        md.treeprocessors.register(processor, "sst_baseurl_links", 15)


class BaseUrlTreeprocessor(Treeprocessor):
    """Rewrite ``/path`` targets to ``<baseurl>/path``."""

    def __init__(self, md: Markdown, baseurl: str) -> None:
        super().__init__(md)
        self.baseurl = baseurl

    def run(self, root: Element) -> Element:
        for element in root.iter():
            attribute = LINK_ATTRIBUTES.get(element.tag)
            if attribute is None:
                continue
            rewritten = self._rewrite(element.get(attribute))
            if rewritten:
                element.set(attribute, rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        if not target or not target.startswith("/") or target.startswith("//"):
            return None
        if target == self.baseurl or target.startswith(f"{self.baseurl}/"):
            return None
        return f"{self.baseurl}{target}"


class HeadingAnchorExtension(Extension):
    """Assign kramdown-style ids to headings and record them for a TOC.

    Ids set explicitly with an attribute list (``## Setup {#setup}``) are
    kept. The collected :class:`Heading` entries are available on
    ``headings`` after conversion.
    """

    def __init__(self) -> None:
        super().__init__()
        self.headings: list[Heading] = []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        processor = HeadingAnchorTreeprocessor(md, self.headings)
        # After attr_list (priority 8) so explicit ids are visible.
        md.treeprocessors.register(processor, "sst_heading_anchors", 6)


class HeadingAnchorTreeprocessor(Treeprocessor):
    def __init__(self, md: Markdown, headings: list[Heading]) -> None:
        super().__init__(md)
        self.headings = headings

    def run(self, root: Element) -> Element:
        used: set[str] = set()
        for element in root.iter():
            level = HEADING_TAGS.get(element.tag)
            if level is None:
                continue
            title = "".join(element.itertext()).strip()
            anchor = element.get("id")
            if anchor:
                used.add(anchor)
            else:
                anchor = unique_anchor(kramdown_slug(title), used)
                element.set("id", anchor)
            self.headings.append(Heading(level=level, title=title, anchor=anchor))
        return root


__all__ = [
    "BaseUrlLinkExtension",
    "BaseUrlTreeprocessor",
    "HeadingAnchorExtension",
    "HeadingAnchorTreeprocessor",
    "_build_link_rewriter",
]
