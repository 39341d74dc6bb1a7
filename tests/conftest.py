"""Shared fixtures that build throwaway site trees for the test suite.

The ``site_factory`` fixture writes a small ``_config.yml`` and collection
articles under ``tmp_path`` so loader, validation and generator tests can run
against real files without touching the repository's own ``site`` folder.
"""

from __future__ import annotations

import json
import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

SITE_CONFIG = dedent(
    """\
    # Site settings
    title: SST
    email: hello@sst.dev
    description: >
      Build modern full-stack applications on AWS.
    baseurl: ""
    url: "https://sst.dev"

    github_repo: "https://github.com/AnomalyInnovations/serverless-stack-com"
    github_edit_prefix: "/edit/master/"
    github_history_prefix: "/commits/master/"

    sst_github_repo: "https://github.com/serverless-stack/sst"
    sst_github_examples_prefix: "/tree/master/examples/"

    forum_url: "https://discourse.sst.dev"
    forum_thread_prefix: "/t/"
    discord_invite_url: "https://discord.gg/sst"

    stats:
      newsletter: "90,000"
      github: "14000" # refreshed by pages bump-stats
      github_short: "14k"

    collections:
      chapters:
        output: true
      examples:
        output: true

    plugins:
      - jekyll-sitemap
      - jekyll-redirect-from
    """
)

EXAMPLE_BODY = dedent(
    """\
    In this example we will build an app with [SST]({{ site.sst_github_repo }}).

    ## Requirements

    - Node.js 16 or later

    ## Create an SST app

    ```bash
    $ npx create-sst@latest
    ```
    """
)


class SiteFactory:
    """Write a minimal site tree below a temporary directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    @property
    def config_path(self) -> Path:
        return self.root / "_config.yml"

    def write_config(self, text: str = SITE_CONFIG) -> Path:
        self.config_path.write_text(text, encoding="utf-8")
        return self.config_path

    @staticmethod
    def example_front_matter(slug: str, **overrides: object) -> dict[str, object]:
        """Return complete example front matter; ``None`` overrides drop a key."""
        fields: dict[str, object] = {
            "layout": "example",
            "title": f"How to create {slug} with serverless",
            "date": "2021-01-27 00:00:00",
            "lang": "en",
            "index": 1,
            "type": "api",
            "description": f"In this example we build {slug} with SST.",
            "short_desc": f"Building {slug}.",
            "repo": slug,
            "ref": slug,
            "comments_id": f"{slug}/2305",
        }
        fields.update(overrides)
        return {key: value for key, value in fields.items() if value is not None}

    def add_example(
        self, slug: str, body: str = EXAMPLE_BODY, **overrides: object
    ) -> Path:
        return self.add_item(
            "examples", slug, self.example_front_matter(slug, **overrides), body
        )

    def add_chapter(
        self, slug: str, body: str = "Chapter body.\n", **front_matter: object
    ) -> Path:
        fields: dict[str, object] = {"title": slug.replace("-", " ").title()}
        fields.update(front_matter)
        return self.add_item("chapters", slug, fields, body)

    def add_item(
        self,
        collection: str,
        slug: str,
        front_matter: typ.Mapping[str, object],
        body: str,
        *,
        suffix: str = ".md",
    ) -> Path:
        """Write ``front_matter`` and ``body`` to ``_<collection>/<slug><suffix>``."""
        path = self.root / f"_{collection}" / f"{slug}{suffix}"
        path.parent.mkdir(parents=True, exist_ok=True)
        # JSON scalars and flow sequences are valid YAML.
        lines = [f"{key}: {json.dumps(value)}" for key, value in front_matter.items()]
        path.write_text("---\n" + "\n".join(lines) + "\n---\n" + body, encoding="utf-8")
        return path


@pytest.fixture
def site_factory(tmp_path: Path) -> SiteFactory:
    """Return a factory rooted at ``tmp_path / "site"`` with a config written."""
    factory = SiteFactory(tmp_path / "site")
    factory.write_config()
    return factory
