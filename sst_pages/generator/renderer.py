"""Utilities for rendering markdown and syntax-highlighted code snippets."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from .link_rewriter import HeadingAnchorExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from sst_pages.markdown_parser import Heading
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_BLOCK_PATTERN = re.compile(
    r"(?:```|~~~)([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)(?:```|~~~)", re.DOTALL
)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


@dc.dataclass(slots=True)
class RenderedMarkdown:
    """HTML produced from a Markdown body and the headings it contains."""

    html: str
    headings: list[Heading] = dc.field(default_factory=list)


class HtmlContentRenderer:
    """Render markdown and code snippets with consistent styling."""

    def __init__(
        self, pygments_style: str = "monokai", link_extension: Extension | None = None
    ) -> None:
        """Initialize a renderer with optional pygments style and link extension.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        link_extension : Extension, optional
            Markdown extension used when rewriting links; pass ``None`` to skip
            link rewriting.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self._link_extension = link_extension

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        return self.render(text).html

    def render(self, text: str) -> RenderedMarkdown:
        """Render markdown and collect the anchors assigned to its headings."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return RenderedMarkdown(html="")
        anchors = HeadingAnchorExtension()
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "footnotes",
            "attr_list",
            anchors,
        ]
        if self._link_extension:
            extensions.append(self._link_extension)
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        html = md.convert(normalized)
        return RenderedMarkdown(
            html=self._annotate_codehilite(html, normalized),
            headings=list(anchors.headings),
        )

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer", "RenderedMarkdown"]
