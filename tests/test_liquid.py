"""Unit tests for Liquid-style reference expansion in content bodies."""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from jinja2 import TemplateSyntaxError

from sst_pages.config import load_site_config
from sst_pages.content import ContentItem
from sst_pages.generator import ContentRenderError, LiquidExpander, site_references
from sst_pages.generator.liquid import page_variables, site_variables

if typ.TYPE_CHECKING:
    from sst_pages.config import SiteConfig

    from conftest import SiteFactory


@pytest.fixture
def site(site_factory: SiteFactory) -> SiteConfig:
    return load_site_config(site_factory.config_path)


def test_expands_site_references(site: SiteConfig) -> None:
    expander = LiquidExpander(site)
    text = (
        "[repo]({{ site.sst_github_repo }}"
        "{{ site.sst_github_examples_prefix }}rest-api)"
    )
    assert expander.expand(text) == (
        "[repo](https://github.com/serverless-stack/sst/tree/master/examples/rest-api)"
    )


def test_undefined_references_render_empty(site: SiteConfig) -> None:
    expander = LiquidExpander(site)
    assert expander.expand("[{{ site.nope.deeper }}]") == "[]", (
        "Liquid renders undefined values as empty strings"
    )


def test_page_variables_and_filters(site: SiteConfig) -> None:
    item = ContentItem(
        "examples",
        "_examples/rest-api.md",
        {"title": "REST API", "repo": "rest-api", "date": dt.datetime(2021, 1, 27)},
        "",
    )
    expander = LiquidExpander(site)
    text = (
        "{{ page.repo }} {{ page.url }} {{ '/examples/' | absolute_url }} "
        "{{ page.title | slugify }} {{ page.date | date_to_xmlschema }}"
    )
    assert expander.expand(text, page_variables(item, site)) == (
        "rest-api /examples/rest-api.html https://sst.dev/examples/ rest-api "
        "2021-01-27T00:00:00+00:00"
    )


def test_raw_blocks_and_hash_braces_survive(site: SiteConfig) -> None:
    """JSX props and Jinja-looking comments in code samples stay verbatim."""
    expander = LiquidExpander(site)
    text = (
        "{% raw %}style={{ textAlign: 'center' }}{% endraw %} {#id} {{ site.title }}"
    )
    assert expander.expand(text) == "style={{ textAlign: 'center' }} {#id} SST"


def test_text_without_markup_is_returned_unchanged(site: SiteConfig) -> None:
    expander = LiquidExpander(site)
    text = "const a = { b: 1 };\n"
    assert expander.expand(text) is text


def test_syntax_errors_name_the_source(site: SiteConfig) -> None:
    expander = LiquidExpander(site)
    with pytest.raises(ContentRenderError, match=r"_examples/bad\.md: cannot expand"):
        expander.expand("{% if %}", source="_examples/bad.md")


def test_site_variables_list_collections(site: SiteConfig) -> None:
    items = {
        "examples": [
            ContentItem("examples", "_examples/a.md", {"title": "A"}, ""),
            ContentItem("examples", "_examples/b.md", {"published": False}, ""),
        ]
    }
    variables = site_variables(site, items)

    assert [page["url"] for page in variables["examples"]] == ["/examples/a.html"]
    assert variables["documents"] == variables["examples"]
    assert {"label": "examples", "output": True} in variables["collections"]
    expander = LiquidExpander(site, variables)
    assert expander.expand("{{ site.examples | length }}") == "1"


def test_site_references_ignore_plain_text() -> None:
    text = (
        "site.plain is prose. {{ site.forum_url }}"
        "{% if site.sst_demo_repo %}x{% endif %}"
        "{% raw %}{{ site.hidden }}{% endraw %}"
    )
    assert site_references(text) == {"forum_url", "sst_demo_repo"}


def test_site_references_skip_nested_site_attributes() -> None:
    text = "{{ page.site.repo }} {{ mysite.title }} {{ site.forum_url }}"
    assert site_references(text) == {"forum_url"}


def test_check_syntax_rejects_liquid_only_filters(site: SiteConfig) -> None:
    expander = LiquidExpander(site)
    with pytest.raises(TemplateSyntaxError, match="end of print statement"):
        expander.check_syntax("{{ site.title | append: '!' }}")


def test_check_syntax_rejects_unknown_filters(site: SiteConfig) -> None:
    expander = LiquidExpander(site)
    with pytest.raises(TemplateSyntaxError, match="upcase"):
        expander.check_syntax("{{ page.title | upcase }}")


def test_check_syntax_accepts_supported_markup(site: SiteConfig) -> None:
    expander = LiquidExpander(site)
    expander.check_syntax("{{ site.examples | size }}")
    expander.check_syntax("{% raw %}{{ x | y: z }}{% endraw %}")
    expander.check_syntax("{{ site.title }} {# not a comment")
