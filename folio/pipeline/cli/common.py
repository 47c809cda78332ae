"""
Helpers shared by the Folio CLI commands.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Optional

# --- Third party imports ---
import click

# --- Local imports ---
from folio.core.config import SiteConfig
from folio.core.logging_manager import FolioLogger
from folio.pipeline.loader import LoadResult, load_directory

content_dir_argument = click.argument(
    "content_dir",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)


def load_content(ctx: click.Context, content_dir: Optional[Path]) -> LoadResult:
    """
    Load the content directory named on the command line.

    Falls back to the configured content_dir and echoes one line per
    rejected source to stderr.

    Raises:
        click.UsageError: If the directory does not exist
    """
    config: SiteConfig = ctx.obj["config"]
    logger: FolioLogger = ctx.obj["logger"]

    directory = content_dir if content_dir is not None else config.content_dir
    if not directory.is_dir():
        raise click.UsageError(f"Content directory not found: {directory}")

    result = load_directory(directory, config, logger)
    for failure in result.failures:
        click.echo(f"✗ {failure.source}: {failure.kind}: {failure.message}", err=True)
    return result
