"""Resolve Jekyll-style permalinks for collection items.

Collections declare a permalink template such as
``/:collection/:path:output_ext``; items may override it with their own
``permalink`` front matter. :func:`item_url` expands the template and
:func:`output_path` maps the resulting URL onto the build destination.

Examples
--------
>>> from sst_pages.content import ContentItem
>>> item = ContentItem("examples", "_examples/rest-api.md", {}, "")
>>> expand_permalink("/:collection/:path:output_ext", item)
'/examples/rest-api.html'
>>> from pathlib import Path
>>> output_path("/examples/", Path("_site")).as_posix()
'_site/examples/index.html'
"""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path, PurePosixPath

from ._constants import DEFAULT_COLLECTION_PERMALINK, OUTPUT_EXT

if typ.TYPE_CHECKING:
    from .config import CollectionConfig
    from .content import ContentItem

BUILTIN_STYLES = {
    "date": "/:categories/:year/:month/:day/:title:output_ext",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "ordinal": "/:categories/:year/:y_day/:title:output_ext",
    "none": "/:categories/:title:output_ext",
}
PLACEHOLDER_PATTERN = re.compile(r":([a-z_]+)")
SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase ``text`` and collapse non-alphanumerics into hyphens."""
    return SLUG_PATTERN.sub("-", text.lower()).strip("-")


def _categories(item: ContentItem) -> str:
    match item.front_matter.get("categories", item.front_matter.get("category")):
        case str() as text:
            values = text.split()
        case list() as many:
            values = [str(entry) for entry in many]
        case _:
            values = []
    return "/".join(slugify(value) for value in values if value)


def _placeholders(item: ContentItem) -> dict[str, str]:
    """Return the value of every supported placeholder for ``item``."""
    slug = item.front_matter.get("slug")
    title = slugify(str(slug)) if slug else item.stem
    values = {
        "collection": item.collection,
        "path": item.path_in_collection,
        "name": item.stem,
        "title": title,
        "slug": slugify(str(slug)) if slug else slugify(item.stem),
        "output_ext": OUTPUT_EXT,
        "categories": _categories(item),
    }
    date = item.date
    if date is not None:
        values |= {
            "year": f"{date.year:04d}",
            "month": f"{date.month:02d}",
            "day": f"{date.day:02d}",
            "i_month": str(date.month),
            "i_day": str(date.day),
            "short_year": f"{date.year % 100:02d}",
            "y_day": f"{date.timetuple().tm_yday:03d}",
        }
    return values


def expand_permalink(template: str, item: ContentItem) -> str:
    """Substitute placeholders in ``template`` for ``item``.

    Unknown placeholders are left untouched. Built-in style names
    (``date``, ``pretty``, ``ordinal``, ``none``) expand to their templates.
    """
    pattern = BUILTIN_STYLES.get(template, template)
    values = _placeholders(item)

    def _replace(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    expanded = PLACEHOLDER_PATTERN.sub(_replace, pattern)
    expanded = re.sub(r"/{2,}", "/", expanded)
    if not expanded.startswith("/"):
        expanded = f"/{expanded}"
    return expanded


def item_url(item: ContentItem, collection: CollectionConfig | None = None) -> str:
    """Return the URL of ``item``; its own ``permalink`` wins."""
    own = item.front_matter.get("permalink")
    if own:
        return expand_permalink(str(own), item)
    template = collection.permalink if collection else DEFAULT_COLLECTION_PERMALINK
    return expand_permalink(template, item)


def output_path(url: str, destination: Path) -> Path:
    """Map a site URL onto a file below ``destination``.

    Raises
    ------
    ValueError
        If the URL would resolve outside ``destination``.
    """
    relative = url.split("#", 1)[0].split("?", 1)[0].lstrip("/")
    if not relative or relative.endswith("/"):
        relative = f"{relative}index.html"
    elif not PurePosixPath(relative).suffix:
        relative = f"{relative}{OUTPUT_EXT}"
    parts = PurePosixPath(relative).parts
    if ".." in parts:
        msg = f"URL '{url}' escapes the build destination."
        raise ValueError(msg)
    return destination.joinpath(*parts)


__all__ = ["expand_permalink", "item_url", "output_path", "slugify"]
