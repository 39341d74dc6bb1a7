r"""Split content files into front matter and Markdown body.

Every page in a collection starts with a YAML front-matter block delimited
by ``---`` lines. This module separates that block from the body, parses it
with ruamel.yaml, and provides the kramdown-compatible heading slugs the
renderer uses for anchors.

Example
-------
>>> from sst_pages.markdown_parser import split_front_matter
>>> doc = split_front_matter("---\ntitle: Hello\n---\n## Intro\nBody\n")
>>> doc.front_matter["title"]
'Hello'
>>> doc.body
'## Intro\nBody\n'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

if typ.TYPE_CHECKING:
    from pathlib import Path

FRONT_MATTER_OPEN = re.compile(r"\A---[ \t]*\r?\n")
FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
SLUG_STRIP_PATTERN = re.compile(r"[^a-z0-9 -]")
SLUG_LEADING_PATTERN = re.compile(r"^[^a-z]+")


class FrontMatterError(ValueError):
    """Raised when a content file has malformed or incomplete front matter."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = None if path is None else str(path)
        prefix = f"{self.path}: " if self.path else ""
        super().__init__(f"{prefix}{message}")
        self.message = message


@dc.dataclass(slots=True)
class Document:
    """Front matter and body of a single content file.

    Attributes
    ----------
    front_matter : dict[str, Any]
        Parsed YAML mapping; empty when the file has no front matter.
    body : str
        Everything after the closing delimiter.
    has_front_matter : bool
        Whether the file opened with a front-matter block at all.
    """

    front_matter: dict[str, typ.Any]
    body: str
    has_front_matter: bool


@dc.dataclass(slots=True)
class Heading:
    """A rendered heading and the anchor assigned to it."""

    level: int
    title: str
    anchor: str


def split_front_matter(text: str, source: str | Path | None = None) -> Document:
    """Separate the leading YAML block from the Markdown body.

    Parameters
    ----------
    text : str
        Full file contents.
    source : str or Path, optional
        Path reported in error messages.

    Returns
    -------
    Document
        Parsed front matter and remaining body. Text that does not open with
        ``---`` is returned whole as the body with empty front matter.

    Raises
    ------
    FrontMatterError
        When the block is never closed, is not valid YAML, or does not hold
        a mapping.
    """
    text = text.removeprefix("\ufeff")
    if not FRONT_MATTER_OPEN.match(text):
        return Document(front_matter={}, body=text, has_front_matter=False)

    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        msg = "Front matter block is not closed with '---'."
        raise FrontMatterError(msg, source)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(match.group(1)) if match.group(1).strip() else None
    except YAMLError as exc:
        msg = f"Invalid YAML front matter: {exc}"
        raise FrontMatterError(msg, source) from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping of field names to values."
        raise FrontMatterError(msg, source)
    return Document(
        front_matter=dict(loaded), body=text[match.end() :], has_front_matter=True
    )


def kramdown_slug(title: str) -> str:
    """Return the header id kramdown's ``auto_ids`` would assign to ``title``."""
    stripped = SLUG_STRIP_PATTERN.sub("", title.strip().lower())
    slug = SLUG_LEADING_PATTERN.sub("", stripped.replace(" ", "-"))
    return slug or "section"


def unique_anchor(base: str, used: set[str]) -> str:
    """Return ``base`` or ``base-N`` so anchors stay unique within a page."""
    candidate = base
    suffix = 1
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


__all__ = [
    "Document",
    "FrontMatterError",
    "Heading",
    "kramdown_slug",
    "split_front_matter",
    "unique_anchor",
]
