"""
Content Inspection Commands
---------------------------

Commands:
    - check: Validate every source and report failures
    - list: List posts newest first, optionally for one tag
    - tags: Show tag usage counts
    - show: Print the rendered body of one post

None of these write output files.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import sys
from pathlib import Path
from typing import Optional

# --- Third party imports ---
import click

# --- Local imports ---
from folio.core.config import SiteConfig
from folio.core.exceptions import FolioError
from folio.core.logging_manager import handle_cli_error
from folio.site.renderer import SiteRenderer
from .common import content_dir_argument, load_content


@click.command("check")
@content_dir_argument
@click.pass_context
def check(ctx: click.Context, content_dir: Optional[Path]) -> None:
    """Validate front matter of every post."""
    result = load_content(ctx, content_dir)
    renderer = SiteRenderer(ctx.obj["config"])

    layout_errors = 0
    for post in result.index.by_date():
        try:
            renderer.layout_for(post)
        except FolioError as e:
            layout_errors += 1
            click.echo(f"✗ {post.source}: {type(e).__name__}: {e}", err=True)

    click.echo(result.stats.summary())
    if result.failures or layout_errors:
        click.echo(f"{len(result.failures) + layout_errors} problem(s) found")
        sys.exit(1)
    click.echo("All posts valid")


@click.command("list")
@content_dir_argument
@click.option("-t", "--tag", default=None, help="Only posts with this tag")
@click.pass_context
def list_posts(ctx: click.Context, content_dir: Optional[Path], tag: Optional[str]) -> None:
    """List posts newest first."""
    result = load_content(ctx, content_dir)
    posts = result.index.by_tag(tag) if tag else result.index.by_date()

    count = 0
    for post in posts:
        count += 1
        tags = f"  [{', '.join(post.sorted_tags)}]" if post.tags else ""
        click.echo(f"{post.date:%Y-%m-%d}  {post.slug}  {post.title}{tags}")

    if count == 0:
        click.echo("No posts found")


@click.command("tags")
@content_dir_argument
@click.pass_context
def tags(ctx: click.Context, content_dir: Optional[Path]) -> None:
    """Show how many posts use each tag."""
    result = load_content(ctx, content_dir)
    counts = result.index.tags()
    if not counts:
        click.echo("No tags found")
        return
    width = max(len(tag) for tag in counts)
    for tag, count in counts.items():
        click.echo(f"{tag:<{width}}  {count}")


@click.command("show")
@click.argument("slug")
@content_dir_argument
@click.option("--page", is_flag=True, help="Print the full page instead of the body")
@click.pass_context
def show(ctx: click.Context, slug: str, content_dir: Optional[Path], page: bool) -> None:
    """Print the rendered HTML of one post."""
    config: SiteConfig = ctx.obj["config"]
    result = load_content(ctx, content_dir)

    try:
        post = result.index.find(slug)
        rendered = SiteRenderer(config).render_post(post)
    except FolioError as e:
        handle_cli_error(ctx, e, "show", {"slug": slug})
        return

    click.echo(rendered.html if page else rendered.post.rendered_body, nl=False)
