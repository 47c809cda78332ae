#!/usr/bin/env python3
"""
publisher.py
------------
Write a rendered site to the output directory.

Renders every indexed post, then the index listing and one listing per
tag, and writes them under ``config.output_dir``. Files are only
rewritten when their content changed, so unchanged pages keep their
timestamps.

Key Features:
    - Posts may be rendered on a thread pool (rendering is pure and the
      index is read-only while publishing)
    - A post with an unknown layout is reported and skipped; the rest of
      the site is still written
    - Change detection (only writes if content differs)

Usage:
    from folio.site.publisher import SitePublisher

    publisher = SitePublisher(config, logger=logger, jobs=4)
    stats = publisher.publish(index)
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Optional, Tuple, Union

# --- Local imports ---
from folio.core.cli import PublishStats
from folio.core.config import SiteConfig
from folio.core.exceptions import PublishError, RenderError
from folio.core.logging_manager import FolioLogger, safe_logger
from folio.dataclasses.post import Post
from folio.pipeline.index import PostIndex
from folio.site.renderer import ListingPage, RenderedPage, SiteRenderer
from folio.utils.fs import write_if_changed
from folio.utils.slugify import slugify

INDEX_PAGE = "index.html"


@dataclass
class RenderFailure:
    """A post that could not be rendered."""

    slug: str
    error: RenderError


def check_output_paths(outputs: Iterable[Tuple[str, str]]) -> None:
    """
    Reject a site whose pages would overwrite each other.

    With ``permalink: "{slug}.html"`` a post slugged ``index`` lands on
    the index listing; with ``permalink: "tags/{slug}.html"`` a post can
    land on a tag page. A page may also sit where another page needs a
    directory.

    Args:
        outputs: (owner, path) pairs, path relative to the output directory

    Raises:
        PublishError: Naming both owners of the first clash found
    """
    owners: Dict[PurePosixPath, str] = {}
    for owner, rel_path in outputs:
        path = PurePosixPath(rel_path.lstrip("/"))
        if path in owners:
            raise PublishError(f"{owner} and {owners[path]} both write {path}")
        owners[path] = owner

    for path, owner in owners.items():
        for parent in path.parents:
            if parent in owners:
                raise PublishError(
                    f"{owner} needs the directory {parent}, "
                    f"which {owners[parent]} writes as a page"
                )


class SitePublisher:
    """
    Publishes an index of posts as a static site.

    Attributes:
        config: Site configuration
        renderer: Page renderer
        output_dir: Destination directory
        jobs: Number of render workers (1 renders inline)
        failures: Posts skipped during the last publish
        posts: Posts published in the last run, with rendered_body set
    """

    def __init__(
        self,
        config: Optional[SiteConfig] = None,
        renderer: Optional[SiteRenderer] = None,
        logger: Optional[FolioLogger] = None,
        jobs: int = 1,
    ) -> None:
        """
        Initialize the publisher.

        Args:
            config: Site configuration (defaults to the renderer's)
            renderer: Page renderer (defaults to one built from config)
            logger: Optional logger for progress reporting
            jobs: Render worker count; must be at least 1
        """
        if jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {jobs}")
        if config is None:
            config = renderer.config if renderer is not None else SiteConfig()
        self.config = config
        self.renderer = renderer or SiteRenderer(config)
        self.output_dir = Path(config.output_dir)
        self.logger = safe_logger(logger)
        self.jobs = jobs
        self.failures: List[RenderFailure] = []
        self.posts: List[Post] = []

    def publish(self, index: PostIndex) -> PublishStats:
        """
        Render and write the whole site.

        Every page is rendered before anything is written, so a site
        whose pages would overwrite each other is rejected untouched.

        Args:
            index: Loaded posts

        Returns:
            PublishStats for the run

        Raises:
            PublishError: If two pages map to the same output path, or an
                output file cannot be written
        """
        self.logger.log_operation(
            "publish", {"output_dir": self.output_dir, "posts": len(index), "jobs": self.jobs}
        )
        stats = PublishStats()
        self.failures = []
        self.posts = []

        outputs: List[Tuple[str, str, str]] = []
        for post, outcome in self._render_all(list(index.by_date())):
            if isinstance(outcome, RenderError):
                self.failures.append(RenderFailure(post.slug, outcome))
                stats.errors += 1
                self.logger.log_skip("render", outcome, source=post.source, slug=post.slug)
                continue
            self.posts.append(outcome.post)
            outputs.append((f"post '{post.slug}'", outcome.output_path, outcome.html))

        slugs = {post.slug for post in self.posts}
        listing = self.renderer.render_listing(self.config.title, self.posts, INDEX_PAGE)
        outputs.append(("the index listing", listing.output_path, listing.html))
        for page in self.tag_pages(index, slugs):
            outputs.append((f"the listing '{page.title}'", page.output_path, page.html))

        check_output_paths((owner, path) for owner, path, _ in outputs)

        for _, rel_path, html in outputs:
            stats.record(self._write(rel_path, html))
        stats.files_processed = len(self.posts)

        self.logger.log_summary("publish", stats)
        return stats

    def tag_pages(self, index: PostIndex, slugs: set) -> List[ListingPage]:
        """
        Render one listing per tag.

        Tags whose slugs coincide (``C#`` and ``csharp``) share a page.

        Args:
            index: Loaded posts
            slugs: Slugs of the posts that rendered successfully

        Returns:
            Listing pages sorted by output path
        """
        groups: Dict[str, List[str]] = {}
        for tag in index.tags():
            groups.setdefault(slugify(tag) or "tag", []).append(tag)

        pages: List[ListingPage] = []
        for tag_slug, tags in sorted(groups.items()):
            posts = [
                post
                for post in index.by_date()
                if post.slug in slugs and post.tags.intersection(tags)
            ]
            if not posts:
                continue
            if len(tags) > 1:
                self.logger.log_warning(
                    "Tags share one page",
                    {"tags": tags, "page": self.config.tag_path(tag_slug)},
                )
            pages.append(
                self.renderer.render_listing(
                    f"Posts tagged {', '.join(tags)}",
                    posts,
                    self.config.tag_path(tag_slug),
                    tag=tags[0],
                )
            )
        return pages

    def _render_all(
        self, posts: List[Post]
    ) -> List[Tuple[Post, Union[RenderedPage, RenderError]]]:
        """Render posts inline or on a pool, preserving input order."""
        if self.jobs == 1 or len(posts) < 2:
            return [(post, self._render_one(post)) for post in posts]
        with ThreadPoolExecutor(max_workers=self.jobs) as pool:
            return list(zip(posts, pool.map(self._render_one, posts)))

    def _render_one(self, post: Post) -> Union[RenderedPage, RenderError]:
        try:
            return self.renderer.render_post(post)
        except RenderError as e:
            return e

    def _write(self, rel_path: str, content: str) -> str:
        """Write one page below the output directory."""
        path = self.output_dir / rel_path
        try:
            status = write_if_changed(path, content)
        except OSError as e:
            raise PublishError(f"Cannot write {path}: {e}") from e
        self.logger.log_debug(f"{status.title()} {rel_path}")
        return status
