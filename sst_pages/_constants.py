"""Common literal values used across sst_pages.

These constants keep filenames, plugin names and front-matter keys
centralized so the loader, generators, validation and tests can import the
same values without drifting. Intended for internal use within the
sst_pages package.

Examples
--------
>>> from sst_pages import _constants
>>> _constants.COLLECTION_DIR_TEMPLATE.format(name="examples")
'_examples'
>>> "comments_id" in _constants.EXAMPLE_REQUIRED_FIELDS
True
"""

CONFIG_FILENAME = "_config.yml"
DEFAULT_DESTINATION = "_site"
COLLECTION_DIR_TEMPLATE = "_{name}"
CONTENT_EXTENSIONS = (".md", ".markdown", ".html")
MARKDOWN_EXTENSIONS = (".md", ".markdown")
OUTPUT_EXT = ".html"

DEFAULT_COLLECTION_PERMALINK = "/:collection/:path:output_ext"

EXAMPLES_COLLECTION = "examples"
EXAMPLES_INDEX_URL = "/examples/"
EXAMPLE_LAYOUT = "example"

SITEMAP_PLUGIN = "jekyll-sitemap"
REDIRECT_PLUGIN = "jekyll-redirect-from"

EXAMPLE_REQUIRED_FIELDS = (
    "layout",
    "title",
    "date",
    "lang",
    "index",
    "type",
    "description",
    "short_desc",
    "repo",
    "ref",
    "comments_id",
)
DEFAULT_REQUIRED_FIELDS = ("title",)

JEKYLL_SITE_BUILTINS = frozenset(
    {
        "pages",
        "posts",
        "time",
        "collections",
        "data",
        "static_files",
        "html_pages",
        "documents",
        "categories",
        "tags",
        "related_posts",
        "url",
        "baseurl",
    }
)
