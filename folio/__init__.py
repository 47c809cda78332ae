"""
Folio
=====

A static-site content pipeline for front matter Markdown blog posts.

Sources are loaded into validated Post records, collected in a PostIndex,
and rendered to HTML pages with markdown-it-py and Jinja2.

Main Components:
    - pipeline: Loader, index and the ``folio`` CLI
    - site: Markdown parsing, page rendering and publishing
    - core: Configuration, exceptions, logging, statistics
    - dataclasses: The Post record
    - utils: Front matter, slug and filesystem helpers

Example Usage:
    >>> from pathlib import Path
    >>> from folio import SiteConfig, load_directory, SitePublisher
    >>> config = SiteConfig(content_dir=Path("_posts"))
    >>> result = load_directory(config=config)
    >>> SitePublisher(config).publish(result.index)
"""

__version__ = "1.0.0"

from folio.core.config import SiteConfig
from folio.dataclasses.post import Layout, Post
from folio.pipeline.index import PostIndex
from folio.pipeline.loader import load_directory, load_file, load_post
from folio.site.renderer import SiteRenderer
from folio.site.publisher import SitePublisher

__all__ = [
    "SiteConfig",
    "Layout",
    "Post",
    "PostIndex",
    "load_directory",
    "load_file",
    "load_post",
    "SiteRenderer",
    "SitePublisher",
]
