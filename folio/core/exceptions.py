#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Folio project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in the load, query, render and
publish stages.

Exception Hierarchy:
    Exception (built-in)
    └── FolioError - Base for all Folio errors
        ├── ConfigError - Invalid site configuration
        ├── PostLoadError - Base for per-source load failures
        │   ├── SourceReadError - Source file unreadable
        │   ├── MissingFrontMatterError - No front matter block
        │   ├── MalformedFrontMatterError - Unclosed or invalid block
        │   ├── MissingFieldError - Required field absent
        │   ├── InvalidFieldError - Field present but unusable
        │   └── DuplicateSlugError - Slug already in the collection
        ├── NotFoundError - Slug lookup failure
        ├── RenderError - Base for rendering failures
        │   └── UnknownLayoutError - Layout has no template
        └── PublishError - Output writing failures

Usage:
    from folio.core.exceptions import PostLoadError, NotFoundError

    try:
        post = load_post(text, "hello.md", config)
    except PostLoadError as e:
        logger.error(f"Skipping {e.source}: {e}")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional


class FolioError(Exception):
    """
    Base exception for all Folio errors.

    Catch this to handle any error raised by the pipeline, or catch the
    specific subclasses for more granular handling.
    """

    pass


class ConfigError(FolioError):
    """
    Exception for invalid site configuration.

    Raised when a configuration file cannot be read or parsed, or when
    a configuration value has the wrong type.

    Examples:
        >>> raise ConfigError("Unknown configuration key: 'titel'")
        >>> raise ConfigError("permalink must contain {slug}")
    """

    pass


class PostLoadError(FolioError):
    """
    Base exception for failures loading a single source.

    Every load error names the offending source so that a batch load
    can report it and move on to the next file.

    Attributes:
        source: Name of the source that failed (usually a file name)
        message: Error description without the source prefix
    """

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}" if source else message)


class SourceReadError(PostLoadError):
    """
    Exception for sources that cannot be read.

    Raised for permission problems or files that are not valid UTF-8.

    Examples:
        >>> raise SourceReadError("not valid UTF-8", source="broken.md")
    """

    pass


class MissingFrontMatterError(PostLoadError):
    """
    Exception for sources without a front matter block.

    Front matter is mandatory metadata: a document whose first line is
    not the delimiter is rejected rather than treated as body-only.

    Examples:
        >>> raise MissingFrontMatterError("no front matter block", source="notes.md")
    """

    pass


class MalformedFrontMatterError(PostLoadError):
    """
    Exception for front matter that opens but cannot be parsed.

    Raised when:
    - The opening delimiter has no matching closing delimiter
    - The block is not valid YAML
    - The block is valid YAML but not a mapping of keys to values

    Examples:
        >>> raise MalformedFrontMatterError("closing '---' not found", source="a.md")
    """

    pass


class MissingFieldError(PostLoadError):
    """
    Exception for a required front matter field that is absent or empty.

    Attributes:
        field: Name of the missing field (``title`` or ``date``)

    Examples:
        >>> raise MissingFieldError("date", source="draft.md")
    """

    def __init__(self, field: str, source: Optional[str] = None) -> None:
        self.field = field
        super().__init__(f"missing required field '{field}'", source)


class InvalidFieldError(PostLoadError):
    """
    Exception for a front matter field whose value cannot be used.

    Raised for dates that do not parse to a calendar timestamp, tags
    that are not a list or string, and slugs that reduce to nothing.

    Attributes:
        field: Name of the offending field
    """

    def __init__(
        self, field: str, reason: str, source: Optional[str] = None
    ) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"invalid field '{field}': {reason}", source)


class DuplicateSlugError(PostLoadError):
    """
    Exception for adding a post whose slug is already indexed.

    Attributes:
        slug: The colliding slug

    Examples:
        >>> raise DuplicateSlugError("intro", source="intro-again.md")
    """

    def __init__(self, slug: str, source: Optional[str] = None) -> None:
        self.slug = slug
        super().__init__(f"duplicate slug '{slug}'", source)


class NotFoundError(FolioError):
    """
    Exception for looking up a slug that is not in the collection.

    Attributes:
        slug: The slug that was requested
    """

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"no post with slug '{slug}'")


class RenderError(FolioError):
    """
    Base exception for rendering failures.

    Rendering is total over body content, so this is only raised for
    problems with the page shell (layout selection, templates).
    """

    pass


class UnknownLayoutError(RenderError):
    """
    Exception for a post whose layout has no template.

    Attributes:
        layout: The requested layout name
        slug: Slug of the post that requested it, if known
    """

    def __init__(self, layout: str, slug: Optional[str] = None) -> None:
        self.layout = layout
        self.slug = slug
        where = f" (post '{slug}')" if slug else ""
        super().__init__(f"unknown layout '{layout}'{where}")


class PublishError(FolioError):
    """
    Exception for failures writing output pages.

    Examples:
        >>> raise PublishError("Cannot write site/index.html: permission denied")
    """

    pass
