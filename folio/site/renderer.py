#!/usr/bin/env python3
"""
renderer.py
-----------
Jinja2 page renderer for posts and listings.

Turns a Post into a finished HTML page: the body goes through the
Markdown parser, then the page shell selected by the post's layout wraps
it. Rendering is a pure function of (post, configuration, templates):
no file or network access happens here, and rendering the same post
twice gives byte-identical output.

Key Features:
    - Layout dispatch over the closed Layout enum
    - Packaged templates, a templates directory, or a dict (tests)
    - Listing pages for the index and per-tag pages

Usage:
    from folio.site.renderer import SiteRenderer

    renderer = SiteRenderer(config)
    page = renderer.render_post(post)
    page.html, page.output_path

    # Testing: supply templates as dict
    renderer = SiteRenderer(config, templates={"post.html.jinja2": "{{ content }}"})

Dependencies:
    - jinja2>=3.1.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

# --- Third-party imports ---
from jinja2 import (
    BaseLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    TemplateNotFound,
)

# --- Local imports ---
from folio.core.config import SiteConfig
from folio.core.exceptions import UnknownLayoutError
from folio.core.paths import TEMPLATES_DIR
from folio.dataclasses.post import Layout, Post
from folio.site import filters as site_filters
from folio.site.markup import Markup
from folio.utils.slugify import slugify

LAYOUT_TEMPLATES: Dict[Layout, str] = {
    Layout.POST: "post.html.jinja2",
    Layout.PAGE: "page.html.jinja2",
}
LISTING_TEMPLATE = "listing.html.jinja2"


@dataclass(frozen=True)
class RenderedPage:
    """
    A rendered post with the metadata its page shell needs.

    Attributes:
        slug: Post slug
        title: Post title
        date: Post timestamp
        tags: Sorted tags
        layout: Layout the page was rendered with
        url: Link to the page (base_url + output_path)
        output_path: Path relative to the output directory
        body_html: The flattened Markdown body
        html: The full page
        post: The source post with rendered_body filled in
        headings: Table of contents entries
    """

    slug: str
    title: str
    date: datetime
    tags: Tuple[str, ...]
    layout: str
    url: str
    output_path: str
    body_html: str
    html: str
    post: Post = field(compare=False)
    headings: Tuple[Dict[str, Any], ...] = field(default=(), compare=False)

    def metadata(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "date": self.date,
            "tags": list(self.tags),
            "layout": self.layout,
            "url": self.url,
        }


@dataclass(frozen=True)
class ListingPage:
    """A rendered listing (index or tag page)."""

    title: str
    output_path: str
    html: str
    slugs: Tuple[str, ...] = ()


class SiteRenderer:
    """
    Jinja2-based page renderer.

    Attributes:
        config: Site configuration
        markup: Markdown parser used for bodies
        env: Configured Jinja2 Environment instance
    """

    def __init__(
        self,
        config: Optional[SiteConfig] = None,
        templates_dir: Optional[Path] = None,
        templates: Optional[Dict[str, str]] = None,
        markup: Optional[Markup] = None,
    ) -> None:
        """
        Initialize the renderer.

        Provide either a filesystem templates directory or a dict of
        template strings. Without either, ``config.templates_dir`` is
        used when set, otherwise the packaged templates.

        Args:
            config: Site configuration (defaults to SiteConfig())
            templates_dir: Path to templates directory (FileSystemLoader)
            templates: Dict of template_name → template_string (DictLoader)
            markup: Markdown parser (defaults to one built from config)

        Raises:
            ValueError: If both templates_dir and templates are provided
        """
        if templates_dir and templates:
            raise ValueError(
                "Provide either templates_dir or templates, not both"
            )

        self.config = config or SiteConfig()
        self.markup = markup or Markup(allow_html=self.config.allow_html)

        loader: BaseLoader
        if templates is not None:
            loader = DictLoader(templates)
        else:
            directory = templates_dir or self.config.templates_dir
            if directory is not None:
                # Packaged templates fill in anything the directory lacks
                loader = FileSystemLoader([str(directory), str(TEMPLATES_DIR)])
            else:
                loader = FileSystemLoader(str(TEMPLATES_DIR))

        self.env = Environment(
            loader=loader,
            autoescape=True,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._register_filters()

    def _register_filters(self) -> None:
        """Register custom filters and the site-aware link helpers."""
        site_filters.register_filters(self.env)
        self.env.filters["tag_url"] = self.tag_url
        self.env.globals["post_url"] = self.post_url
        self.env.globals["site"] = self.config

    # ---- Paths and links ----
    def post_path(self, post: Post) -> str:
        """Output path of a post relative to the output directory."""
        return self.config.permalink_for(post.slug, post.date)

    def post_url(self, post: Post) -> str:
        return self.config.url_for(self.post_path(post))

    def tag_path(self, tag: str) -> str:
        return self.config.tag_path(slugify(tag) or "tag")

    def tag_url(self, tag: str) -> str:
        return self.config.url_for(self.tag_path(tag))

    # ---- Rendering ----
    def layout_for(self, post: Post) -> Layout:
        """
        Resolve a post's layout name.

        Raises:
            UnknownLayoutError: If the name is not a known layout
        """
        try:
            return Layout(post.layout)
        except ValueError:
            raise UnknownLayoutError(post.layout, post.slug) from None

    def render_body(self, post: Post) -> Post:
        """Return a copy of the post carrying its rendered body HTML."""
        return post.with_rendered(self.markup.render(post.body))

    def render_post(self, post: Post) -> RenderedPage:
        """
        Render a post into a complete page.

        Args:
            post: Post to render

        Returns:
            RenderedPage with the page HTML and shell metadata

        Raises:
            UnknownLayoutError: If the layout is unknown or its template
                is missing
        """
        layout = self.layout_for(post)
        template_name = LAYOUT_TEMPLATES[layout]
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound:
            raise UnknownLayoutError(post.layout, post.slug) from None

        post = self.render_body(post)
        body_html = post.rendered_body
        headings = tuple(self.markup.extract_headings(post.body))
        output_path = self.post_path(post)
        url = self.config.url_for(output_path)

        page = {
            "slug": post.slug,
            "title": post.title,
            "date": post.date,
            "tags": post.sorted_tags,
            "layout": layout.value,
            "url": url,
            "reading_time": post.reading_time,
            "excerpt": post.excerpt(self.config.excerpt_length),
            "extra": post.extra,
        }
        html = template.render(
            page=page,
            post=post,
            content=body_html,
            headings=headings,
        )

        return RenderedPage(
            slug=post.slug,
            title=post.title,
            date=post.date,
            tags=tuple(post.sorted_tags),
            layout=layout.value,
            url=url,
            output_path=output_path,
            body_html=body_html,
            html=html,
            post=post,
            headings=headings,
        )

    def render_listing(
        self,
        title: str,
        posts: Iterable[Post],
        output_path: str,
        tag: Optional[str] = None,
    ) -> ListingPage:
        """
        Render a list of posts (site index or one tag).

        Args:
            title: Listing heading
            posts: Posts in display order
            output_path: Path relative to the output directory
            tag: Tag being listed, if this is a tag page

        Returns:
            ListingPage with the page HTML
        """
        template = self.env.get_template(LISTING_TEMPLATE)
        entries: List[Dict[str, Any]] = [
            {
                "slug": post.slug,
                "title": post.title,
                "date": post.date,
                "tags": post.sorted_tags,
                "url": self.post_url(post),
                "excerpt": post.excerpt(self.config.excerpt_length),
            }
            for post in posts
        ]
        html = template.render(title=title, entries=entries, tag=tag)
        return ListingPage(
            title=title,
            output_path=output_path,
            html=html,
            slugs=tuple(entry["slug"] for entry in entries),
        )
