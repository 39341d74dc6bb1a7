"""Load ``_config.yml`` into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    REPO_SUFFIX,
    URL_SUFFIX,
    _build_collections,
    _build_defaults,
    _build_plugins,
    _normalize_baseurl,
    _normalize_url,
    _optional_str,
    _require_str,
    _stringify_stats,
    _suffixed_keys,
)
from .models import ForumConfig, GitHubConfig, SiteConfig, SstConfig, StatsConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration consumed by the site generator.

    Parameters
    ----------
    path : Path
        Filesystem path to the site configuration (usually
        ``site/_config.yml``).

    Returns
    -------
    SiteConfig
        Parsed configuration including URL settings, repository links,
        stats counters, collection declarations, plugins and front-matter
        defaults. The untouched mapping is kept on ``SiteConfig.raw`` so
        templates can read arbitrary ``site.*`` keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required keys are missing or a section has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sst_pages.config import load_site_config
    >>> site = load_site_config(Path("site/_config.yml"))  # doctest: +SKIP
    >>> site.title  # doctest: +SKIP
    'SST'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    url = _normalize_url(_require_str(raw, "url"))
    baseurl = _normalize_baseurl(raw.get("baseurl"))
    raw["url"] = url
    raw["baseurl"] = baseurl

    stats = StatsConfig(**_known_stats(_stringify_stats(raw.get("stats"))))

    return SiteConfig(
        title=_require_str(raw, "title"),
        url=url,
        baseurl=baseurl,
        email=_optional_str(raw.get("email")),
        jobs_email=_optional_str(raw.get("jobs_email")),
        description=_optional_str(raw.get("description")),
        description_full=_optional_str(raw.get("description_full")),
        permalink=_optional_str(raw.get("permalink")),
        markdown=_optional_str(raw.get("markdown")) or "kramdown",
        google_analytics=_optional_str(raw.get("google_analytics")),
        twitter=_optional_str(raw.get("twitter")),
        github=_build_github(raw),
        sst=_build_sst(raw),
        forum=_build_forum(raw),
        links=_suffixed_keys(raw, URL_SUFFIX),
        repos=_suffixed_keys(raw, REPO_SUFFIX),
        stats=stats,
        collections=_build_collections(raw.get("collections")),
        plugins=_build_plugins(raw.get("plugins")),
        defaults=_build_defaults(raw.get("defaults")),
        raw=raw,
    )


def _known_stats(values: dict[str, str | None]) -> dict[str, str | None]:
    """Keep only the counters StatsConfig models."""
    fields = StatsConfig.__dataclass_fields__
    return {key: value for key, value in values.items() if key in fields}


def _build_github(raw: typ.Mapping[str, typ.Any]) -> GitHubConfig:
    base = GitHubConfig()
    return GitHubConfig(
        repo=_optional_str(raw.get("github_repo")),
        edit_prefix=_optional_str(raw.get("github_edit_prefix")) or base.edit_prefix,
        history_prefix=_optional_str(raw.get("github_history_prefix"))
        or base.history_prefix,
        issues_prefix=_optional_str(raw.get("github_issues_prefix"))
        or base.issues_prefix,
    )


def _build_sst(raw: typ.Mapping[str, typ.Any]) -> SstConfig:
    base = SstConfig()
    return SstConfig(
        repo=_optional_str(raw.get("sst_github_repo")),
        examples_prefix=_optional_str(raw.get("sst_github_examples_prefix"))
        or base.examples_prefix,
        demo_repo=_optional_str(raw.get("sst_demo_repo")),
    )


def _build_forum(raw: typ.Mapping[str, typ.Any]) -> ForumConfig:
    base = ForumConfig()
    return ForumConfig(
        url=_optional_str(raw.get("forum_url")),
        thread_prefix=_optional_str(raw.get("forum_thread_prefix"))
        or base.thread_prefix,
    )


__all__ = ["load_site_config"]
