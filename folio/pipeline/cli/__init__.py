#!/usr/bin/env python3
"""
Folio CLI
---------

Command-line interface for loading, checking and building a site.

Commands:
    - build: Load posts and write the rendered site
    - check: Load posts and report every invalid source
    - list: List posts newest first, optionally for one tag
    - tags: Show tag usage counts
    - show: Print the rendered body of one post

Usage:
    folio build _posts -o _site
    folio -c folio.yaml build
    folio check _posts
    folio list _posts --tag specflow
    folio show hello-world _posts
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional

from folio.core.cli import setup_logger
from folio.core.config import SiteConfig
from folio.core.exceptions import ConfigError
from folio.core.logging_manager import handle_cli_error
from folio.core.paths import CONFIG_FILE, LOG_DIR


@click.group()
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Directory for log files",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Site configuration file (default: ./{CONFIG_FILE} when present)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx: click.Context, log_dir: str, config_path: Optional[str], verbose: bool
) -> None:
    """Folio static-site content pipeline"""
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "folio")

    try:
        ctx.obj["config"] = _load_config(config_path)
    except ConfigError as e:
        handle_cli_error(ctx, e, "load_config", {"config": config_path})


def _load_config(config_path: Optional[str]) -> SiteConfig:
    """Explicit config file, else ./folio.yaml if present, else defaults."""
    if config_path is not None:
        return SiteConfig.from_file(Path(config_path))
    if CONFIG_FILE.is_file():
        return SiteConfig.from_file(CONFIG_FILE)
    return SiteConfig()


# Import and register commands from submodules
from .build import build
from .content import check, list_posts, tags, show

cli.add_command(build)
cli.add_command(check)
cli.add_command(list_posts)
cli.add_command(tags)
cli.add_command(show)


if __name__ == "__main__":
    cli(obj={})
