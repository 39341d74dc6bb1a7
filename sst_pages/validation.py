"""Check a site's configuration and content before building it.

:func:`validate_site` loads ``_config.yml`` and every collection item and
collects problems instead of stopping at the first one, so authors see the
whole list in one run. Errors block a build; warnings are informational.

Examples
--------
>>> from pathlib import Path
>>> from sst_pages.validation import validate_site
>>> report = validate_site(Path("site"))  # doctest: +SKIP
>>> report.ok  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import TemplateSyntaxError
from ruamel.yaml.error import YAMLError

from ._constants import (
    CONFIG_FILENAME,
    DEFAULT_DESTINATION,
    EXAMPLES_COLLECTION,
    EXAMPLES_INDEX_URL,
    JEKYLL_SITE_BUILTINS,
    REDIRECT_PLUGIN,
)
from .config import SiteConfig, SiteConfigError, load_site_config
from .content import (
    ContentItem,
    collection_files,
    load_item,
    missing_fields,
    parse_example_front_matter,
    redirect_sources,
)
from .generator.liquid import LiquidExpander, site_references
from .markdown_parser import FrontMatterError
from .permalinks import item_url, output_path

ERROR = "error"
WARNING = "warning"
BUILD_ROOT = Path(DEFAULT_DESTINATION)


@dc.dataclass(slots=True)
class ValidationIssue:
    """A single problem found in the configuration or a content file."""

    severity: str
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.severity}: {self.path}: {self.message}"


@dc.dataclass(slots=True)
class ValidationReport:
    """Issues found by :func:`validate_site` plus what was loaded."""

    issues: list[ValidationIssue] = dc.field(default_factory=list)
    site: SiteConfig | None = None
    items: dict[str, list[ContentItem]] = dc.field(default_factory=dict)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == WARNING]

    @property
    def ok(self) -> bool:
        """Return True when no errors were recorded."""
        return not self.errors

    def error(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue(ERROR, path, message))

    def warning(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue(WARNING, path, message))


def validate_site(site_root: Path, config_path: Path | None = None) -> ValidationReport:
    """Validate the configuration and every collection item under ``site_root``.

    Parameters
    ----------
    site_root : Path
        Directory holding ``_config.yml`` and the ``_<collection>`` folders.
    config_path : Path, optional
        Alternative configuration file; defaults to
        ``<site_root>/_config.yml``.

    Returns
    -------
    ValidationReport
        All issues found. When the configuration itself cannot be loaded the
        report holds that single error and no content checks run.
    """
    report = ValidationReport()
    config_file = config_path or site_root / CONFIG_FILENAME
    try:
        site = load_site_config(config_file)
    except (FileNotFoundError, TypeError, SiteConfigError, YAMLError) as exc:
        report.error(str(config_file), str(exc))
        return report
    report.site = site

    known_keys = set(site.raw) | set(site.collections) | JEKYLL_SITE_BUILTINS
    expander = LiquidExpander(site)
    claimed: dict[Path, str] = {}
    redirects: list[tuple[str, str]] = []
    examples = site.collections.get(EXAMPLES_COLLECTION)
    if examples is not None and examples.output:
        claimed[output_path(EXAMPLES_INDEX_URL, BUILD_ROOT)] = "the examples index"
    for name, collection in site.collections.items():
        files = collection_files(site_root, name)
        if not (site_root / collection.directory).is_dir():
            report.warning(
                collection.directory, f"Collection '{name}' has no directory."
            )
        items: list[ContentItem] = []
        for path in files:
            relative = path.relative_to(site_root).as_posix()
            try:
                item = load_item(site_root, site, name, path)
            except FrontMatterError as exc:
                report.error(relative, exc.message)
                continue
            if item is None:
                continue
            items.append(item)
            _check_item(report, item, known_keys, expander)
            if not (collection.output and item.published):
                continue
            url = item_url(item, collection)
            if _claim(report, claimed, url, relative, f"Renders to '{url}'"):
                redirects.extend(
                    (source, relative) for source in _redirect_sources(site, item)
                )
        report.items[name] = items
        if name == EXAMPLES_COLLECTION:
            _check_example_ordering(report, items)

    for source, relative in redirects:
        _claim(report, claimed, source, relative, f"Redirects from '{source}'")
    return report


def _claim(
    report: ValidationReport,
    claimed: dict[Path, str],
    url: str,
    relative: str,
    label: str,
) -> bool:
    """Reserve the output file for ``url``; record an error when it is taken."""
    try:
        target = output_path(url, BUILD_ROOT)
    except ValueError as exc:
        report.error(relative, str(exc))
        return False
    if target in claimed:
        report.error(relative, f"{label}, already used by {claimed[target]}.")
        return False
    claimed[target] = relative
    return True


def _redirect_sources(site: SiteConfig, item: ContentItem) -> list[str]:
    if not site.has_plugin(REDIRECT_PLUGIN) or item.front_matter.get("redirect_to"):
        return []
    return redirect_sources(item.front_matter)


def _check_item(
    report: ValidationReport,
    item: ContentItem,
    known_keys: set[str],
    expander: LiquidExpander,
) -> None:
    """Record front-matter and template problems for one item."""
    missing = missing_fields(item)
    if missing:
        report.error(
            item.relative_path,
            f"Missing required front matter: {', '.join(missing)}.",
        )
    elif item.collection == EXAMPLES_COLLECTION:
        try:
            example = parse_example_front_matter(item)
        except FrontMatterError as exc:
            report.error(item.relative_path, exc.message)
        else:
            if example.ref != item.stem:
                report.warning(
                    item.relative_path,
                    f"Front matter 'ref' ({example.ref}) differs from the file "
                    f"name ({item.stem}).",
                )

    try:
        expander.check_syntax(item.body)
    except TemplateSyntaxError as exc:
        report.error(
            item.relative_path,
            f"Invalid template syntax on line {exc.lineno}: {exc.message}",
        )
    for key in sorted(site_references(item.body) - known_keys):
        report.error(
            item.relative_path,
            f"References 'site.{key}', which is not defined in the configuration.",
        )


def _check_example_ordering(
    report: ValidationReport, items: list[ContentItem]
) -> None:
    """Warn when two examples of the same type share an index."""
    seen: dict[tuple[str, int], str] = {}
    for item in items:
        try:
            example = parse_example_front_matter(item)
        except FrontMatterError:
            continue
        key = (example.type, example.index)
        if key in seen:
            report.warning(
                item.relative_path,
                f"Index {example.index} for type '{example.type}' is also used "
                f"by {seen[key]}.",
            )
        else:
            seen[key] = item.relative_path


__all__ = ["ValidationIssue", "ValidationReport", "validate_site"]
