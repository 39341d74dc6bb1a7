"""Load collection items and check their front matter.

A collection named ``examples`` lives in ``site/_examples/``; every Markdown
or HTML file with a front-matter block becomes a :class:`ContentItem`.
Front-matter defaults declared in ``_config.yml`` are merged underneath each
item's own keys. Example articles additionally carry a fixed schema that
:func:`parse_example_front_matter` enforces.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path, PurePosixPath

from ._constants import (
    COLLECTION_DIR_TEMPLATE,
    CONTENT_EXTENSIONS,
    DEFAULT_REQUIRED_FIELDS,
    EXAMPLE_REQUIRED_FIELDS,
    EXAMPLES_COLLECTION,
)
from .config.helpers import _optional_str, _parse_timestamp
from .markdown_parser import FrontMatterError, split_front_matter

if typ.TYPE_CHECKING:
    from .config import SiteConfig


@dc.dataclass(slots=True)
class ContentItem:
    """A single document inside a collection.

    Attributes
    ----------
    collection : str
        Name of the owning collection.
    relative_path : str
        Site-relative POSIX path, for example ``_examples/rest-api.md``.
    front_matter : dict[str, Any]
        Front matter with config defaults applied underneath.
    body : str
        Raw content after the front-matter block.
    """

    collection: str
    relative_path: str
    front_matter: dict[str, typ.Any]
    body: str

    @property
    def path_in_collection(self) -> str:
        """Return the path below the collection directory without extension."""
        parts = PurePosixPath(self.relative_path).parts[1:]
        return str(PurePosixPath(*parts).with_suffix("")) if parts else ""

    @property
    def stem(self) -> str:
        return PurePosixPath(self.relative_path).stem

    @property
    def extension(self) -> str:
        return PurePosixPath(self.relative_path).suffix.lower()

    @property
    def title(self) -> str:
        title = _optional_str(self.front_matter.get("title"))
        return title or self.stem.replace("-", " ").capitalize()

    @property
    def layout(self) -> str | None:
        return _optional_str(self.front_matter.get("layout"))

    @property
    def date(self) -> dt.datetime | None:
        return _parse_timestamp(self.front_matter.get("date"))

    @property
    def published(self) -> bool:
        return self.front_matter.get("published", True) is not False


@dc.dataclass(slots=True)
class ExampleFrontMatter:
    """Typed front matter of an example article."""

    layout: str
    title: str
    date: dt.datetime
    lang: str
    index: int
    type: str
    description: str
    short_desc: str
    repo: str
    ref: str
    comments_id: str
    short_title: str | None = None
    redirect_from: list[str] = dc.field(default_factory=list)


def required_fields(collection: str) -> tuple[str, ...]:
    """Return the front-matter keys every item in ``collection`` must set."""
    if collection == EXAMPLES_COLLECTION:
        return EXAMPLE_REQUIRED_FIELDS
    return DEFAULT_REQUIRED_FIELDS


def missing_fields(item: ContentItem) -> list[str]:
    """Return required keys that are absent or blank on ``item``."""
    return _blank_keys(item.front_matter, required_fields(item.collection))


def _blank_keys(
    front_matter: typ.Mapping[str, typ.Any], keys: typ.Iterable[str]
) -> list[str]:
    missing: list[str] = []
    for key in keys:
        value = front_matter.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(key)
    return missing


def load_collection(
    site_root: Path, site: SiteConfig, name: str
) -> list[ContentItem]:
    """Read every content file of collection ``name``.

    Parameters
    ----------
    site_root : Path
        Directory holding ``_config.yml`` and the ``_<name>`` folders.
    site : SiteConfig
        Loaded configuration; supplies front-matter defaults.
    name : str
        Collection name as declared under ``collections``.

    Returns
    -------
    list[ContentItem]
        Items sorted by path. Files without front matter are skipped.

    Raises
    ------
    FrontMatterError
        If any file holds malformed front matter.
    """
    items: list[ContentItem] = []
    for path in collection_files(site_root, name):
        item = load_item(site_root, site, name, path)
        if item is not None:
            items.append(item)
    return items


def collection_files(site_root: Path, name: str) -> list[Path]:
    """Return the content files of collection ``name`` sorted by path."""
    directory = site_root / COLLECTION_DIR_TEMPLATE.format(name=name)
    if not directory.is_dir():
        return []
    return [
        path
        for path in sorted(directory.rglob("*"))
        if path.is_file() and path.suffix.lower() in CONTENT_EXTENSIONS
    ]


def load_item(
    site_root: Path, site: SiteConfig, collection: str, path: Path
) -> ContentItem | None:
    """Load one file as a ContentItem, or None when it has no front matter.

    Raises
    ------
    FrontMatterError
        If the file is not UTF-8 text or its front matter is malformed.
    """
    relative_path = path.relative_to(site_root).as_posix()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"File is not valid UTF-8 text ({exc.reason} at byte {exc.start})."
        raise FrontMatterError(msg, relative_path) from exc
    document = split_front_matter(text, relative_path)
    if not document.has_front_matter:
        return None
    front_matter = site.defaults_for(relative_path, collection)
    front_matter.update(document.front_matter)
    return ContentItem(
        collection=collection,
        relative_path=relative_path,
        front_matter=front_matter,
        body=document.body,
    )


def parse_example_front_matter(item: ContentItem) -> ExampleFrontMatter:
    """Validate and convert an example article's front matter.

    Raises
    ------
    FrontMatterError
        Listing every missing field at once, or describing the first field
        with an unusable value.
    """
    missing = _blank_keys(item.front_matter, EXAMPLE_REQUIRED_FIELDS)
    if missing:
        msg = f"Missing required front matter: {', '.join(missing)}."
        raise FrontMatterError(msg, item.relative_path)

    data = item.front_matter
    date = _parse_timestamp(data["date"])
    if date is None:
        msg = f"Front matter 'date' is not a valid date: {data['date']!r}."
        raise FrontMatterError(msg, item.relative_path)

    return ExampleFrontMatter(
        layout=str(data["layout"]).strip(),
        title=str(data["title"]).strip(),
        date=date,
        lang=str(data["lang"]).strip(),
        index=_coerce_index(data["index"], item.relative_path),
        type=str(data["type"]).strip(),
        description=str(data["description"]).strip(),
        short_desc=str(data["short_desc"]).strip(),
        repo=str(data["repo"]).strip(),
        ref=str(data["ref"]).strip(),
        comments_id=str(data["comments_id"]).strip(),
        short_title=_optional_str(data.get("short_title")),
        redirect_from=redirect_sources(data),
    )


def redirect_sources(front_matter: typ.Mapping[str, typ.Any]) -> list[str]:
    """Return ``redirect_from`` as a list of paths."""
    match front_matter.get("redirect_from"):
        case str() as single:
            return [single.strip()] if single.strip() else []
        case list() as many:
            return [str(entry).strip() for entry in many if str(entry).strip()]
        case _:
            return []


def _coerce_index(value: object, path: str) -> int:
    """Return ``value`` as an integer ordering index."""
    match value:
        case bool():
            pass
        case int():
            return value
        case str() if value.strip().lstrip("-").isdigit():
            return int(value.strip())
    msg = f"Front matter 'index' must be an integer, got {value!r}."
    raise FrontMatterError(msg, path)


__all__ = [
    "ContentItem",
    "ExampleFrontMatter",
    "collection_files",
    "load_collection",
    "load_item",
    "missing_fields",
    "parse_example_front_matter",
    "redirect_sources",
    "required_fields",
]
