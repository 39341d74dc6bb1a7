"""Helpers for refreshing the ``stats`` counters in ``_config.yml``.

The site shows the framework's GitHub star count in two forms: the full
number (``stats.github``) and a short label (``stats.github_short``).
``bump_github_stats`` looks up the repository named by ``sst_github_repo``
and writes both values back into the configuration, keeping comments,
quoting and key order intact.

Example
-------
.. code-block:: python

    from pathlib import Path
    from sst_pages.github import GitHubRepositoryClient
    from sst_pages.stats import bump_github_stats

    info = bump_github_stats(
        config_path=Path("site/_config.yml"),
        client=GitHubRepositoryClient(token="ghp_exampletoken"),
    )
    if info:
        print(info.stargazers_count)
"""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from .github import parse_repo_slug

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .github import GitHubRepositoryClient, RepositoryInfo

REPO_KEY = "sst_github_repo"
SHORT_COUNT_UNITS = ((1_000, "k"), (1_000_000, "m"))


class StatsConfigError(ValueError):
    """Raised when the configuration cannot be updated."""


def format_short_count(count: int) -> str:
    """Return a compact label such as ``14k`` or ``1.2m``.

    >>> format_short_count(950)
    '950'
    >>> format_short_count(14500)
    '14.5k'
    >>> format_short_count(1_200_000)
    '1.2m'
    >>> format_short_count(999_999)
    '1m'
    """
    if count < SHORT_COUNT_UNITS[0][0]:
        return str(count)
    last = len(SHORT_COUNT_UNITS) - 1
    for position, (threshold, suffix) in enumerate(SHORT_COUNT_UNITS):
        value = f"{count / threshold:.1f}"
        # A value that rounds up to 1000 belongs to the next unit.
        if position == last or float(value) < 1000:
            return f"{value.removesuffix('.0')}{suffix}"
    return str(count)


def bump_github_stats(
    *, config_path: Path, client: GitHubRepositoryClient
) -> RepositoryInfo | None:
    """Fetch the framework repository and record its star count.

    Returns the fetched :class:`RepositoryInfo`, or ``None`` when the
    repository no longer exists (the file is left untouched in that case).

    Raises
    ------
    StatsConfigError
        If the file has no usable ``sst_github_repo`` or ``stats`` is not a
        mapping.
    """
    yaml = _build_roundtrip_yaml()
    with config_path.open("r", encoding="utf-8") as handle:
        document = yaml.load(handle) or CommentedMap()
    if not isinstance(document, CommentedMap):
        msg = "Top-level configuration must be a mapping"
        raise StatsConfigError(msg)

    repo = parse_repo_slug(str(document.get(REPO_KEY) or ""))
    if not repo:
        msg = f"Configuration key '{REPO_KEY}' must name a GitHub repository"
        raise StatsConfigError(msg)

    stats = document.get("stats")
    if stats is None:
        stats = CommentedMap()
        document["stats"] = stats
    if not isinstance(stats, CommentedMap):
        msg = "Configuration key 'stats' must be a mapping"
        raise StatsConfigError(msg)

    info = client.fetch_repository(repo)
    if info is None:
        return None

    stats["github"] = DoubleQuotedScalarString(str(info.stargazers_count))
    stats["github_short"] = DoubleQuotedScalarString(
        format_short_count(info.stargazers_count)
    )

    with config_path.open("w", encoding="utf-8") as handle:
        yaml.dump(document, handle)
    return info


def _build_roundtrip_yaml() -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


__all__ = ["StatsConfigError", "bump_github_stats", "format_short_count"]
