"""Utilities for expanding, rendering, and generating site pages."""

from .link_rewriter import BaseUrlLinkExtension, HeadingAnchorExtension
from .liquid import ContentRenderError, LiquidExpander, site_references, site_variables
from .models import ExampleCard, ExampleGroup, PageModel
from .page_generator import CollectionPageGenerator
from .renderer import HtmlContentRenderer, RenderedMarkdown

__all__ = [
    "BaseUrlLinkExtension",
    "CollectionPageGenerator",
    "ContentRenderError",
    "ExampleCard",
    "ExampleGroup",
    "HeadingAnchorExtension",
    "HtmlContentRenderer",
    "LiquidExpander",
    "PageModel",
    "RenderedMarkdown",
    "site_references",
    "site_variables",
]
