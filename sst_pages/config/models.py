"""Typed dataclasses describing the site configuration in ``_config.yml``."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from sst_pages._constants import DEFAULT_COLLECTION_PERMALINK


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


def _join(prefix: str, path: str) -> str:
    """Join a URL prefix and a path with exactly one slash between them."""
    if not prefix:
        return path
    if not path:
        return prefix
    return f"{prefix.rstrip('/')}/{path.lstrip('/')}"


@dc.dataclass(slots=True)
class GitHubConfig:
    """Source repository of the site itself and its URL prefixes."""

    repo: str | None = None
    edit_prefix: str = "/edit/master/"
    history_prefix: str = "/commits/master/"
    issues_prefix: str = "/issues/"

    def edit_url(self, path: str) -> str | None:
        """Return the "edit this page" URL for a site-relative ``path``."""
        if not self.repo:
            return None
        return _join(_join(self.repo, self.edit_prefix), path)

    def history_url(self, path: str) -> str | None:
        """Return the commit history URL for a site-relative ``path``."""
        if not self.repo:
            return None
        return _join(_join(self.repo, self.history_prefix), path)

    def issues_url(self) -> str | None:
        """Return the issue tracker URL."""
        if not self.repo:
            return None
        return _join(self.repo, self.issues_prefix)


@dc.dataclass(slots=True)
class SstConfig:
    """Framework repository that hosts the runnable examples."""

    repo: str | None = None
    examples_prefix: str = "/tree/master/examples/"
    demo_repo: str | None = None

    def example_url(self, slug: str | None) -> str | None:
        """Return the browsable URL of the example project ``slug``."""
        if not self.repo or not slug:
            return None
        return _join(_join(self.repo, self.examples_prefix), slug)


@dc.dataclass(slots=True)
class ForumConfig:
    """Community forum used for per-article discussion threads."""

    url: str | None = None
    thread_prefix: str = "/t/"

    def thread_url(self, comments_id: str | int | None) -> str | None:
        """Return the discussion thread URL for ``comments_id``."""
        if not self.url or comments_id in (None, ""):
            return None
        return _join(_join(self.url, self.thread_prefix), str(comments_id))


@dc.dataclass(slots=True)
class StatsConfig:
    """Display counters shown on the site; every value is a string."""

    newsletter: str | None = None
    newsletter_short: str | None = None
    discord: str | None = None
    github: str | None = None
    github_short: str | None = None


@dc.dataclass(slots=True)
class CollectionConfig:
    """A named group of content items processed uniformly."""

    name: str
    output: bool = False
    permalink: str = DEFAULT_COLLECTION_PERMALINK
    extra: dict[str, typ.Any] = dc.field(default_factory=dict)

    @property
    def directory(self) -> str:
        """Return the site-relative directory holding this collection."""
        return f"_{self.name}"


@dc.dataclass(slots=True)
class FrontMatterDefault:
    """Front-matter values applied to every item inside ``scope``."""

    values: dict[str, typ.Any]
    path: str = ""
    type: str | None = None

    def matches(self, relative_path: str, collection: str | None) -> bool:
        """Return True when an item at ``relative_path`` falls in scope."""
        if self.type and self.type != collection:
            return False
        if not self.path:
            return True
        scope = self.path.strip("/")
        normalized = relative_path.strip("/")
        return normalized == scope or normalized.startswith(f"{scope}/")


@dc.dataclass(slots=True)
class SiteConfig:
    """Fully parsed site configuration alongside the raw mapping."""

    title: str
    url: str
    baseurl: str = ""
    email: str | None = None
    jobs_email: str | None = None
    description: str | None = None
    description_full: str | None = None
    permalink: str | None = None
    markdown: str = "kramdown"
    google_analytics: str | None = None
    twitter: str | None = None
    github: GitHubConfig = dc.field(default_factory=GitHubConfig)
    sst: SstConfig = dc.field(default_factory=SstConfig)
    forum: ForumConfig = dc.field(default_factory=ForumConfig)
    links: dict[str, str] = dc.field(default_factory=dict)
    repos: dict[str, str] = dc.field(default_factory=dict)
    stats: StatsConfig = dc.field(default_factory=StatsConfig)
    collections: dict[str, CollectionConfig] = dc.field(default_factory=dict)
    plugins: list[str] = dc.field(default_factory=list)
    defaults: list[FrontMatterDefault] = dc.field(default_factory=list)
    raw: dict[str, typ.Any] = dc.field(default_factory=dict)

    def get_collection(self, name: str) -> CollectionConfig:
        """Return the declared collection ``name``."""
        try:
            return self.collections[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.collections)) or "none"
            msg = f"Unknown collection '{name}'. Known collections: {available}"
            raise KeyError(msg) from exc

    def has_plugin(self, name: str) -> bool:
        """Return True when ``name`` appears in the plugin list."""
        return name in self.plugins

    def relative_url(self, path: str | None) -> str:
        """Prefix ``path`` with ``baseurl`` like Jekyll's ``relative_url``."""
        text = "" if path is None else str(path)
        if "://" in text or text.startswith(("//", "mailto:", "#")):
            return text
        if not text.startswith("/"):
            text = f"/{text}"
        return f"{self.baseurl}{text}"

    def absolute_url(self, path: str | None) -> str:
        """Return the fully qualified URL like Jekyll's ``absolute_url``."""
        text = "" if path is None else str(path)
        if "://" in text or text.startswith("//"):
            return text
        return f"{self.url}{self.relative_url(text)}"

    def defaults_for(
        self, relative_path: str, collection: str | None
    ) -> dict[str, typ.Any]:
        """Merge every matching front-matter default, later entries winning."""
        merged: dict[str, typ.Any] = {}
        for default in self.defaults:
            if default.matches(relative_path, collection):
                merged.update(default.values)
        return merged

    @property
    def output_collections(self) -> list[CollectionConfig]:
        """Return the collections that render pages, in declaration order."""
        return [item for item in self.collections.values() if item.output]


__all__ = [
    "CollectionConfig",
    "ForumConfig",
    "FrontMatterDefault",
    "GitHubConfig",
    "SiteConfig",
    "SiteConfigError",
    "SstConfig",
    "StatsConfig",
]
