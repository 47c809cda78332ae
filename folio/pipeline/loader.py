#!/usr/bin/env python3
"""
loader.py
---------
Turn raw Markdown sources into validated Post records.

Each source must open with a front matter block:

    ---
    layout: post
    title: "SpecFlow: sharing steps between features"
    date: 2020-01-01 09:30:00 +0100
    tags: [specflow, testing]
    ---
    Body in Markdown...

Recognized fields are ``title`` and ``date`` (required) plus ``tags``,
``layout`` and ``slug``. Anything else is kept on ``Post.extra``.

Loading a directory is all-or-nothing per file: a bad source is recorded
as a LoadFailure and skipped, the rest of the batch still loads.

Usage:
    from folio.pipeline.loader import load_post, load_directory

    post = load_post(text, "2020-01-01-hello.md", config)

    result = load_directory(Path("_posts"), config, logger)
    for failure in result.failures:
        print(failure.source, failure.message)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional

# --- Local imports ---
from folio.core.cli import LoadStats
from folio.core.config import SiteConfig
from folio.core.exceptions import (
    InvalidFieldError,
    MissingFieldError,
    PostLoadError,
    SourceReadError,
)
from folio.core.logging_manager import FolioLogger, safe_logger
from folio.dataclasses.post import Post, normalize_tags
from folio.pipeline.index import PostIndex
from folio.utils.fs import find_sources
from folio.utils.md import parse_frontmatter, split_frontmatter
from folio.utils.slugify import slug_from_filename, slugify

RECOGNIZED_FIELDS = ("layout", "title", "date", "tags", "slug")

# "2020-01-01 10:00:00 +0100" -> offset glued on with a colon
_SPACED_OFFSET_RE = re.compile(r"^(.*\d)\s*([+-])(\d{2}):?(\d{2})$")


@dataclass
class LoadFailure:
    """A source that could not be loaded, with the reason."""

    source: str
    error: PostLoadError

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def kind(self) -> str:
        return type(self.error).__name__


@dataclass
class LoadResult:
    """
    Outcome of loading a content directory.

    Attributes:
        index: Posts that loaded and indexed cleanly
        failures: One entry per rejected source, in file order
        stats: Counters for the run
    """

    index: PostIndex
    failures: List[LoadFailure] = field(default_factory=list)
    stats: LoadStats = field(default_factory=LoadStats)

    @property
    def ok(self) -> bool:
        return not self.failures


# ----- Field parsing -----
def parse_date(value: Any, source: Optional[str] = None) -> datetime:
    """
    Parse a front matter date into a datetime.

    Accepts ISO 8601 dates and timestamps, a trailing ``Z``, and the
    Jekyll form with a space before the UTC offset. Date-only values
    become midnight.

    Raises:
        InvalidFieldError: If the value is not a valid calendar timestamp

    Examples:
        >>> parse_date("2020-01-01")
        datetime.datetime(2020, 1, 1, 0, 0)
        >>> parse_date("2020-01-01 09:30:00 +0100").utcoffset()
        datetime.timedelta(seconds=3600)
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidFieldError(
            "date", f"expected a timestamp, got {type(value).__name__}", source
        )

    text = str(value).strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    match = _SPACED_OFFSET_RE.match(text)
    if match and ("T" in text or " " in text.strip()):
        head, sign, hours, minutes = match.groups()
        if ":" in head:
            text = f"{head.rstrip()}{sign}{hours}:{minutes}"

    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidFieldError(
            "date", f"not a valid ISO 8601 timestamp: {str(value)!r}", source
        ) from e


def parse_title(value: Any, source: Optional[str] = None) -> str:
    """Validate the title field, which must be a non-empty scalar."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingFieldError("title", source)
    if isinstance(value, (list, dict)):
        raise InvalidFieldError("title", "expected text", source)
    return str(value).strip()


def parse_tags(value: Any, source: Optional[str] = None) -> FrozenSet[str]:
    """
    Normalize the tags field.

    A list is taken item by item. A string is split on commas when it
    has any, otherwise on whitespace (the Jekyll convention).

    Raises:
        InvalidFieldError: For mappings or nested lists
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        parts = value.split(",") if "," in value else value.split()
        return normalize_tags(parts)
    if isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, (list, dict)) or item is None:
                raise InvalidFieldError(
                    "tags", f"tags must be plain values, got {item!r}", source
                )
        return normalize_tags(value)
    raise InvalidFieldError(
        "tags", f"expected a list or string, got {type(value).__name__}", source
    )


def parse_layout(value: Any, default: str, source: Optional[str] = None) -> str:
    """Validate the layout field; absent or blank means ``default``."""
    if value is None:
        return default
    if not isinstance(value, str):
        raise InvalidFieldError("layout", "expected a layout name", source)
    return value.strip() or default


def resolve_slug(
    value: Any, source_name: str, config: SiteConfig
) -> str:
    """
    Choose the slug: explicit field when given, else the filename.

    Raises:
        InvalidFieldError: If nothing URL-safe is left after slugifying
    """
    if value is not None:
        if isinstance(value, (list, dict, bool)):
            raise InvalidFieldError("slug", "expected text", source_name)
        slug = slugify(str(value))
        if not slug:
            raise InvalidFieldError(
                "slug", f"{value!r} has no URL-safe characters", source_name
            )
        return slug

    slug = slug_from_filename(source_name, config.strip_date_prefix)
    if not slug:
        raise InvalidFieldError(
            "slug", "cannot derive a slug from the source name", source_name
        )
    return slug


# ----- Loading -----
def load_post(
    text: str, source_name: str, config: Optional[SiteConfig] = None
) -> Post:
    """
    Parse one source into a validated Post.

    Args:
        text: Full source text
        source_name: Identifying name; the slug fallback
        config: Site configuration (defaults to SiteConfig())

    Returns:
        The loaded Post

    Raises:
        MissingFrontMatterError: No front matter block
        MalformedFrontMatterError: Unclosed block or invalid YAML
        MissingFieldError: ``title`` or ``date`` absent
        InvalidFieldError: A field has an unusable value
    """
    config = config or SiteConfig()

    fm_text, body = split_frontmatter(text, config.delimiter, source_name)
    metadata = parse_frontmatter(fm_text, source_name)

    if "title" not in metadata:
        raise MissingFieldError("title", source_name)
    title = parse_title(metadata["title"], source_name)

    raw_date = metadata.get("date")
    if raw_date is None or (isinstance(raw_date, str) and not raw_date.strip()):
        raise MissingFieldError("date", source_name)
    when = parse_date(raw_date, source_name)

    extra: Dict[str, Any] = {
        key: value for key, value in metadata.items() if key not in RECOGNIZED_FIELDS
    }

    return Post(
        slug=resolve_slug(metadata.get("slug"), source_name, config),
        title=title,
        date=when,
        tags=parse_tags(metadata.get("tags"), source_name),
        layout=parse_layout(metadata.get("layout"), config.default_layout, source_name),
        body=body,
        source=source_name,
        extra=extra,
    )


def load_file(path: Path, config: Optional[SiteConfig] = None) -> Post:
    """
    Read and parse one source file; its file name is the source name.

    Raises:
        SourceReadError: If the file cannot be read as UTF-8
        PostLoadError: Any of the load_post errors
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceReadError(f"not valid UTF-8: {e}", path.name) from e
    except OSError as e:
        raise SourceReadError(f"cannot read file: {e}", path.name) from e
    return load_post(text, path.name, config)


def load_directory(
    content_dir: Optional[Path] = None,
    config: Optional[SiteConfig] = None,
    logger: Optional[FolioLogger] = None,
) -> LoadResult:
    """
    Load every source in a directory into a fresh index.

    Files are visited in sorted order, so when two sources share a slug
    the one whose name sorts first wins and the other is reported.

    Args:
        content_dir: Directory to scan (defaults to config.content_dir)
        config: Site configuration (defaults to SiteConfig())
        logger: Optional logger for progress and failures

    Returns:
        LoadResult with the index and the per-source failures
    """
    config = config or SiteConfig()
    content_dir = Path(content_dir) if content_dir is not None else config.content_dir
    log = safe_logger(logger)

    result = LoadResult(index=PostIndex())
    sources = find_sources(content_dir, config.source_glob)
    log.log_operation("load", {"content_dir": content_dir, "sources": len(sources)})

    for path in sources:
        result.stats.files_processed += 1
        try:
            post = load_file(path, config)
            result.index.add(post)
        except PostLoadError as e:
            result.failures.append(LoadFailure(source=path.name, error=e))
            result.stats.errors += 1
            result.stats.files_skipped += 1
            log.log_skip("load", e, source=path.name)
            continue

        result.stats.posts_loaded += 1
        log.log_debug(f"Loaded {path.name}", {"slug": post.slug})

    log.log_summary("load", result.stats)
    return result
