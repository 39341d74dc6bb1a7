"""Cyclopts CLI entrypoint for checking and building the SST site.

The ``pages`` console script defined here validates ``_config.yml`` and the
content collections, renders the collections to static HTML, and refreshes
the GitHub counters in the configuration by talking to the GitHub API.
Typical usage involves running ``pages check`` in CI on every pull request,
``pages build`` to produce ``site/_site``, and ``pages bump-stats`` on a
schedule.

Examples
--------
Check the default site:

>>> from sst_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from sst_pages.cli import app
>>> app(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import os
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CONFIG_FILENAME, DEFAULT_DESTINATION
from .builder import build_site
from .github import GitHubRepositoryClient
from .stats import bump_github_stats
from .validation import ValidationReport, validate_site

DEFAULT_SITE_ROOT = Path("site")

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _print_report(report: ValidationReport) -> None:
    for issue in report.issues:
        print(issue)
    print(f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)")


@app.command(help="Validate the site configuration and collection front matter.")
def check(
    *,
    site_root: typ.Annotated[
        Path,
        Parameter(help="Directory holding _config.yml", env_var="INPUT_SITE_ROOT"),
    ] = DEFAULT_SITE_ROOT,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Override the configuration file", env_var="INPUT_CONFIG"),
    ] = None,
) -> None:
    """Report configuration and content problems.

    Parameters
    ----------
    site_root : Path, optional
        Site source directory; defaults to ``site``.
    config : Path or None, optional
        Configuration file; defaults to ``<site_root>/_config.yml``.

    Raises
    ------
    SystemExit
        With status 1 when any error is found.
    """
    report = validate_site(site_root, config)
    _print_report(report)
    if not report.ok:
        sys.exit(1)


@app.command(help="Render the content collections into static HTML.")
def build(
    *,
    site_root: typ.Annotated[
        Path,
        Parameter(help="Directory holding _config.yml", env_var="INPUT_SITE_ROOT"),
    ] = DEFAULT_SITE_ROOT,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Override the configuration file", env_var="INPUT_CONFIG"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Validate, then render every output collection and the plugin pages.

    Parameters
    ----------
    site_root : Path, optional
        Site source directory; defaults to ``site``.
    config : Path or None, optional
        Configuration file; defaults to ``<site_root>/_config.yml``.
    output_dir : Path or None, optional
        Build destination; defaults to ``<site_root>/_site``.

    Raises
    ------
    SystemExit
        With status 1 when validation finds errors; nothing is written.
    """
    report = validate_site(site_root, config)
    if not report.ok or report.site is None:
        _print_report(report)
        sys.exit(1)
    for issue in report.warnings:
        print(issue)

    destination = output_dir or site_root / DEFAULT_DESTINATION
    for path in build_site(report.site, report.items, destination):
        print(f"wrote {_format_path(path)}")


@app.command(
    name="bump-stats",
    help="Record the framework repository's GitHub star count in the config.",
)
def bump_stats(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_SITE_ROOT / CONFIG_FILENAME,
    github_token: typ.Annotated[
        str | None,
        Parameter(
            help="Optional GitHub token (falls back to GITHUB_TOKEN)",
            env_var="INPUT_GITHUB_TOKEN",
        ),
    ] = None,
    github_api_url: typ.Annotated[
        str,
        Parameter(
            help="Override the GitHub API base URL", env_var="INPUT_GITHUB_API_URL"
        ),
    ] = GitHubRepositoryClient.default_api_base,
) -> None:
    """Update ``stats.github`` and ``stats.github_short`` in place.

    Parameters
    ----------
    config : Path, optional
        Path to the site configuration file; defaults to
        ``site/_config.yml``.
    github_token : str or None, optional
        GitHub token for authenticated queries. If ``None``, the function
        falls back to ``GITHUB_TOKEN`` or ``GH_TOKEN``.
    github_api_url : str, optional
        Base URL for the GitHub API.
    """
    token = github_token or os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")
    client = GitHubRepositoryClient(token=token, api_base=github_api_url)
    info = bump_github_stats(config_path=config, client=client)
    if info is None:
        print("repository not found; stats unchanged")
    else:
        print(f"{info.full_name}: {info.stargazers_count} stars")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
