"""
Utilities package for the Folio project.

This package provides commonly-used utilities organized by domain:
- md: Front matter splitting, parsing and writing
- fs: Source discovery and change-detecting writes
- slugify: URL-safe identifiers

Import commonly-used utilities directly from this package:
    from folio.utils import split_frontmatter, slugify
"""

from .md import (
    split_frontmatter,
    parse_frontmatter,
    dump_frontmatter,
)

from .fs import (
    find_sources,
    write_if_changed,
)

from .slugify import (
    slugify,
    slug_from_filename,
)

__all__ = [
    # Markdown/YAML
    "split_frontmatter",
    "parse_frontmatter",
    "dump_frontmatter",
    # Filesystem
    "find_sources",
    "write_if_changed",
    # Slugs
    "slugify",
    "slug_from_filename",
]
