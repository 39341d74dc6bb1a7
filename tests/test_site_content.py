"""Checks against the site content shipped in this repository.

The configuration must parse as structured data and every example article
must carry the complete front-matter schema. Running these tests in CI
keeps ``site/`` publishable without invoking the full build.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from sst_pages._constants import EXAMPLE_REQUIRED_FIELDS
from sst_pages.config import load_site_config
from sst_pages.content import load_collection, parse_example_front_matter
from sst_pages.validation import validate_site

SITE_ROOT = Path(__file__).resolve().parents[1] / "site"
EXAMPLE_FILES = sorted((SITE_ROOT / "_examples").glob("*.md"))


def test_config_parses() -> None:
    site = load_site_config(SITE_ROOT / "_config.yml")

    assert site.title == "SST"
    assert site.url.startswith("https://")
    assert site.get_collection("examples").output
    assert site.sst.repo == "https://github.com/serverless-stack/sst"
    assert site.stats.github_short, "the navigation shows the short star count"


@pytest.mark.parametrize("path", EXAMPLE_FILES, ids=lambda path: path.stem)
def test_example_has_required_front_matter(path: Path) -> None:
    site = load_site_config(SITE_ROOT / "_config.yml")
    items = load_collection(SITE_ROOT, site, "examples")
    relative = path.relative_to(SITE_ROOT).as_posix()
    (item,) = [entry for entry in items if entry.relative_path == relative]

    missing = [key for key in EXAMPLE_REQUIRED_FIELDS if key not in item.front_matter]
    assert missing == [], f"{path.name} is missing {missing}"
    example = parse_example_front_matter(item)
    assert example.ref == path.stem, "ref should match the file name"
    assert example.layout == "example"


def test_site_validates_cleanly() -> None:
    report = validate_site(SITE_ROOT)
    assert report.issues == [], "\n".join(str(issue) for issue in report.issues)
