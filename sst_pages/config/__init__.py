"""Load and validate the site configuration for SST site builds.

This subpackage parses ``_config.yml``, normalises the URL settings, groups
the repository and community links, and produces typed dataclasses
(:class:`SiteConfig`, :class:`CollectionConfig`, etc.) that the content
loader, generators and validation consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from sst_pages.config import load_site_config
>>> site = load_site_config(Path("site/_config.yml"))  # doctest: +SKIP
>>> site.get_collection("examples").permalink  # doctest: +SKIP
'/:collection/:path:output_ext'
"""

from .loader import load_site_config
from .models import (
    CollectionConfig,
    ForumConfig,
    FrontMatterDefault,
    GitHubConfig,
    SiteConfig,
    SiteConfigError,
    SstConfig,
    StatsConfig,
)

__all__ = [
    "CollectionConfig",
    "ForumConfig",
    "FrontMatterDefault",
    "GitHubConfig",
    "SiteConfig",
    "SiteConfigError",
    "SstConfig",
    "StatsConfig",
    "load_site_config",
]
