"""
Site rendering for Folio using markdown-it-py and Jinja2.

Components:
    - Markup: Markdown body parser and HTML flattener
    - SiteRenderer: Jinja2 page renderer with layout dispatch
    - SitePublisher: Writes rendered pages and listings to disk
"""
from .markup import Markup
from .renderer import SiteRenderer, RenderedPage, ListingPage
from .publisher import SitePublisher

__all__ = ["Markup", "SiteRenderer", "RenderedPage", "ListingPage", "SitePublisher"]
