"""Unit tests for the examples landing page.

The index groups example articles by ``type`` and orders them by their
``index`` front matter. These tests cover the grouping helpers directly and
the rendered cards' links.
"""

from __future__ import annotations

import typing as typ

from bs4 import BeautifulSoup

from sst_pages.config import load_site_config
from sst_pages.content import load_collection
from sst_pages.examples_index import ExamplesIndexBuilder, _type_label

if typ.TYPE_CHECKING:
    from pathlib import Path

    from conftest import SiteFactory


def _builder(site_factory: SiteFactory, destination: Path) -> ExamplesIndexBuilder:
    site = load_site_config(site_factory.config_path)
    items = load_collection(site_factory.root, site, "examples")
    return ExamplesIndexBuilder(site, items, destination)


def test_groups_follow_lowest_index_then_type(
    site_factory: SiteFactory, tmp_path: Path
) -> None:
    site_factory.add_example("websocket-api", type="api", index=3)
    site_factory.add_example("rest-api", type="api", index=1)
    site_factory.add_example("crud-dynamodb", type="database", index=1)
    site_factory.add_example("react-app", type="web-app", index=0)
    site_factory.add_example("draft", type="web-app", index=-1, published=False)

    groups = _builder(site_factory, tmp_path / "_site").gather_groups()

    assert [group.type for group in groups] == ["web-app", "api", "database"], (
        "groups should be ordered by their lowest index, ties broken by type"
    )
    api = groups[1]
    assert [card.index for card in api.cards] == [1, 3]
    assert api.cards[0].href == "/examples/rest-api.html"
    assert api.cards[0].repo_url == (
        "https://github.com/serverless-stack/sst/tree/master/examples/rest-api"
    )
    assert [card.short_title for card in groups[0].cards] == [
        "How to create react-app with serverless"
    ], "unpublished examples should not be listed"


def test_cards_with_equal_index_sort_by_title(
    site_factory: SiteFactory, tmp_path: Path
) -> None:
    site_factory.add_example("b-api", title="Beta API")
    site_factory.add_example("a-api", title="Alpha API")

    (group,) = _builder(site_factory, tmp_path / "_site").gather_groups()

    assert [card.title for card in group.cards] == ["Alpha API", "Beta API"]


def test_run_writes_cards(site_factory: SiteFactory, tmp_path: Path) -> None:
    site_factory.add_example("rest-api", short_title="REST API")
    destination = tmp_path / "_site"

    output = _builder(site_factory, destination).run()

    assert output == destination / "examples" / "index.html"
    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    section = soup.select_one("section.examples-group#api")
    assert section is not None, "expected a section for the api type"
    assert section.select_one(".examples-group__title").get_text() == "API"
    card = section.select_one("li.example-card")
    assert card["data-index"] == "1"
    link = card.select_one("a.example-card__link")
    assert link.get_text() == "REST API"
    assert link["href"] == "/examples/rest-api.html"
    assert card.select_one('[data-test="example-card-discuss"]')["href"] == (
        "https://discourse.sst.dev/t/rest-api/2305"
    )
    assert soup.find("link", rel="canonical")["href"] == "https://sst.dev/examples/"


def test_type_labels() -> None:
    assert _type_label("api") == "API"
    assert _type_label("web-app") == "Web App"
    assert _type_label("graphql") == "GraphQL"
    assert _type_label("jwt_auth") == "JWT Auth"
