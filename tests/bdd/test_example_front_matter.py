"""Behaviour tests for the example front-matter check.

These scenarios back ``features/example_front_matter.feature`` and exercise
``validate_site`` the way ``pages check`` does in CI: the report must name
every missing field of an example in a single error and must treat a ``ref``
that differs from the file name as a warning only.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from sst_pages.validation import validate_site

if typ.TYPE_CHECKING:
    from conftest import SiteFactory

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "example_front_matter.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given(parsers.parse('a site with a complete example "{slug}"'))
def given_complete_example(site_factory: SiteFactory, slug: str) -> None:
    site_factory.add_example(slug)
    site_factory.add_chapter("what-is-serverless")


@given(
    parsers.parse('a site with an example "{slug}" missing "{first}" and "{second}"')
)
def given_incomplete_example(
    site_factory: SiteFactory, slug: str, first: str, second: str
) -> None:
    site_factory.add_example(slug, **{first: None, second: None})
    site_factory.add_chapter("what-is-serverless")


@given(parsers.parse('a site with an example "{slug}" whose ref is "{ref}"'))
def given_mismatched_ref(site_factory: SiteFactory, slug: str, ref: str) -> None:
    site_factory.add_example(slug, ref=ref)
    site_factory.add_chapter("what-is-serverless")


@when("I check the site")
def when_check(site_factory: SiteFactory, scenario_state: ScenarioState) -> None:
    scenario_state["report"] = validate_site(site_factory.root)


@then("the check reports no errors")
def then_no_errors(scenario_state: ScenarioState) -> None:
    report = scenario_state["report"]
    assert report.ok, "\n".join(str(issue) for issue in report.errors)


@then(parsers.parse('the check reports "{message}" for "{path}"'))
def then_reports(scenario_state: ScenarioState, message: str, path: str) -> None:
    errors = [(issue.path, issue.message) for issue in scenario_state["report"].errors]
    assert errors == [(path, message)], f"unexpected errors: {errors!r}"


@then(parsers.parse('the check warns about "{path}"'))
def then_warns(scenario_state: ScenarioState, path: str) -> None:
    paths = [issue.path for issue in scenario_state["report"].warnings]
    assert paths == [path], f"unexpected warnings for {paths!r}"
