"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ

if typ.TYPE_CHECKING:
    from sst_pages.content import ExampleFrontMatter
    from sst_pages.markdown_parser import Heading


@dc.dataclass(slots=True)
class PageModel:
    """Structured data passed to the page templates.

    Attributes
    ----------
    title : str
        Page title from front matter (or derived from the filename).
    url : str
        Site URL without ``baseurl``, as produced by the permalink.
    href : str
        URL with ``baseurl`` applied, for links inside the site.
    canonical_url : str
        Fully qualified URL used for ``<link rel="canonical">``.
    collection : str
        Owning collection name.
    relative_path : str
        Source path relative to the site root.
    layout : str | None
        Layout requested in front matter.
    description : str | None
        Summary used for the meta description.
    date : datetime | None
        Publication date in UTC.
    content_html : str
        Rendered article body.
    toc : list[Heading]
        Second- and third-level headings for the sidebar.
    edit_url : str | None
        Link to edit the source file on GitHub.
    history_url : str | None
        Link to the source file's commit history.
    example : ExampleFrontMatter | None
        Typed example metadata for ``example`` layouts.
    repo_url : str | None
        Browsable example project URL.
    discuss_url : str | None
        Forum thread URL for comments.
    front_matter : dict[str, Any]
        The full front matter, for templates needing custom keys.
    """

    title: str
    url: str
    href: str
    canonical_url: str
    collection: str
    relative_path: str
    layout: str | None
    description: str | None
    date: dt.datetime | None
    content_html: str
    toc: list[Heading]
    edit_url: str | None = None
    history_url: str | None = None
    example: ExampleFrontMatter | None = None
    repo_url: str | None = None
    discuss_url: str | None = None
    front_matter: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class ExampleCard:
    """An entry on the examples index page."""

    title: str
    short_title: str
    href: str
    short_desc: str
    type: str
    index: int
    repo_url: str | None
    discuss_url: str | None


@dc.dataclass(slots=True)
class ExampleGroup:
    """Examples sharing a ``type``, ordered by their index."""

    type: str
    label: str
    cards: list[ExampleCard]


__all__ = ["ExampleCard", "ExampleGroup", "PageModel"]
