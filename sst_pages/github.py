r"""Utilities for interrogating GitHub repositories.

This module wraps the portion of the GitHub REST API needed to refresh the
site's displayed counters. It exposes a client that fetches repository
metadata, surfaces HTTP errors, and normalises the payload into a
project-friendly dataclass.

Example
-------
>>> from sst_pages.github import GitHubRepositoryClient
>>> client = GitHubRepositoryClient(token="ghp_example", timeout=5)  # doctest: +SKIP
>>> info = client.fetch_repository("serverless-stack/sst")  # doctest: +SKIP
>>> info.stargazers_count  # doctest: +SKIP
14000
"""

from __future__ import annotations

import dataclasses as dc
from http import HTTPStatus
from urllib.parse import urlsplit

import requests

DEFAULT_API_BASE = "https://api.github.com"
_ACCEPT_HEADER = "application/vnd.github+json"


class GitHubApiError(RuntimeError):
    """Raised when the GitHub API returns an unexpected error response."""


@dc.dataclass(slots=True)
class RepositoryInfo:
    """Metadata captured from a GitHub repository object.

    Attributes
    ----------
    full_name : str
        ``owner/name`` identifier.
    stargazers_count : int
        Number of stars.
    forks_count : int
        Number of forks.
    html_url : str | None
        URL of the repository page.
    """

    full_name: str
    stargazers_count: int
    forks_count: int = 0
    html_url: str | None = None


def parse_repo_slug(url: str) -> str | None:
    """Return ``owner/name`` from a GitHub URL or slug, or None.

    >>> parse_repo_slug("https://github.com/serverless-stack/sst")
    'serverless-stack/sst'
    >>> parse_repo_slug("serverless-stack/sst.git")
    'serverless-stack/sst'
    """
    text = url.strip()
    if "://" in text:
        parts = urlsplit(text)
        if parts.netloc.lower() not in ("github.com", "www.github.com"):
            return None
        text = parts.path
    segments = [segment for segment in text.strip("/").split("/") if segment]
    if len(segments) < 2:
        return None
    owner, name = segments[0], segments[1].removesuffix(".git")
    return f"{owner}/{name}"


class GitHubRepositoryClient:
    """Thin wrapper around the GitHub repository endpoint.

    This client centralises authentication, timeouts, and error handling when
    querying ``/repos/:owner/:repo`` in the GitHub REST API.
    """

    default_api_base = DEFAULT_API_BASE

    def __init__(
        self,
        *,
        token: str | None = None,
        api_base: str = DEFAULT_API_BASE,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialise the client with optional authentication and transport.

        Parameters
        ----------
        token : str | None, optional
            Personal access token; enables higher rate limits when provided.
        api_base : str, optional
            Base URL for the GitHub API; override for GitHub Enterprise.
        session : requests.Session, optional
            Preconfigured session to reuse connections.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``10.0``.
        """
        self._api_base = api_base.rstrip("/") or DEFAULT_API_BASE
        self._session = session or requests.Session()
        self.timeout = timeout
        self._headers = {
            "Accept": _ACCEPT_HEADER,
            "User-Agent": "sst-pages/0.1",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def fetch_repository(self, repo: str) -> RepositoryInfo | None:
        """Return metadata for ``owner/repo``, or None when it does not exist."""
        normalized = repo.strip()
        if not normalized:
            msg = "Repository name cannot be empty"
            raise ValueError(msg)

        url = f"{self._api_base}/repos/{normalized}"
        try:
            response = self._session.get(
                url, headers=self._headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            msg = f"Failed to reach GitHub for '{normalized}': {exc}"
            raise GitHubApiError(msg) from exc

        if response.status_code == HTTPStatus.NOT_FOUND:
            return None
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            snippet = response.text[:200]
            msg = (
                f"GitHub repository lookup for '{normalized}' failed with "
                f"status {response.status_code}: {snippet}"
            )
            raise GitHubApiError(msg)

        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"GitHub response for '{normalized}' was not valid JSON"
            raise GitHubApiError(msg) from exc

        stars = payload.get("stargazers_count")
        if not isinstance(stars, int):
            msg = f"GitHub response for '{normalized}' has no star count"
            raise GitHubApiError(msg)

        forks = payload.get("forks_count")
        return RepositoryInfo(
            full_name=str(payload.get("full_name") or normalized),
            stargazers_count=stars,
            forks_count=forks if isinstance(forks, int) else 0,
            html_url=payload.get("html_url"),
        )


__all__ = [
    "DEFAULT_API_BASE",
    "GitHubApiError",
    "GitHubRepositoryClient",
    "RepositoryInfo",
    "parse_repo_slug",
]
