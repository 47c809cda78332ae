"""
Site Build Command
------------------

Commands:
    - build: Load posts and write the rendered site (posts -> HTML)

A source that fails to load, or a post whose layout is unknown, is
reported and left out; everything else is still written. The command
exits non-zero when anything was left out.
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
from folio.core.logging_manager import FolioLogger, handle_cli_error
from folio.site.publisher import SitePublisher
from .common import content_dir_argument, load_content


@click.command("build")
@content_dir_argument
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory (default: config output_dir)",
)
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of posts rendered in parallel",
)
@click.pass_context
def build(
    ctx: click.Context,
    content_dir: Optional[Path],
    output_dir: Optional[Path],
    jobs: int,
) -> None:
    """Build the site from Markdown posts."""
    logger: FolioLogger = ctx.obj["logger"]
    config: SiteConfig = ctx.obj["config"].with_overrides(output_dir=output_dir)
    ctx.obj["config"] = config

    result = load_content(ctx, content_dir)
    click.echo(f"Loaded {len(result.index)} posts ({len(result.failures)} failed)")

    try:
        publisher = SitePublisher(config, logger=logger, jobs=jobs)
        stats = publisher.publish(result.index)
    except FolioError as e:
        handle_cli_error(ctx, e, "build", {"output_dir": config.output_dir})
        return

    for failure in publisher.failures:
        click.echo(f"✗ {failure.slug}: {failure.error}", err=True)

    click.echo(f"\nSite written to {config.output_dir}/")
    click.echo(f"  Created: {stats.pages_created}")
    click.echo(f"  Updated: {stats.pages_updated}")
    click.echo(f"  Unchanged: {stats.pages_unchanged}")

    if result.failures or publisher.failures:
        sys.exit(1)
