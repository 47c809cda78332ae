#!/usr/bin/env python3
"""
md.py
-------------------
Markdown front matter utilities for the Folio project.

Provides functions for splitting and parsing Markdown sources with YAML
front matter, and for writing front matter back out:
- Front matter extraction and splitting
- YAML parsing that leaves timestamps as strings
- YAML serialization for round-tripping posts

This module handles document structure but leaves field validation to
the loader.
"""
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, Mapping, Optional, Tuple

# --- Third-party imports ---
import yaml

# --- Local imports ---
from folio.core.exceptions import MalformedFrontMatterError, MissingFrontMatterError

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class FrontMatterLoader(yaml.SafeLoader):
    """
    SafeLoader that does not resolve timestamps.

    PyYAML turns ``2020-13-45`` into a constructor error for the whole
    document; keeping dates as strings lets the loader report them as a
    field problem instead.
    """


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


# ----- Front Matter Splitting -----
def split_frontmatter(
    content: str, delimiter: str = "---", source: Optional[str] = None
) -> Tuple[str, str]:
    """
    Split a Markdown source into front matter text and body.

    Expected format:
        ---
        title: Hello
        date: 2020-01-01
        ---
        Body content here...

    The body is everything after the closing delimiter line, kept
    verbatim. Only the first delimiter pair counts, so delimiter-like
    lines further down (horizontal rules, lines inside fenced code)
    belong to the body.

    Args:
        content: Full source text
        delimiter: Marker line opening and closing the block
        source: Source name used in error messages

    Returns:
        Tuple of (frontmatter_text, body)

    Raises:
        MissingFrontMatterError: First line is not the delimiter
        MalformedFrontMatterError: Opening delimiter without a closing one

    Examples:
        >>> split_frontmatter("---\\ntitle: Hi\\n---\\nBody\\n")
        ('title: Hi\\n', 'Body\\n')
    """
    text = content.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)

    if not lines or lines[0].strip() != delimiter:
        raise MissingFrontMatterError(
            f"document does not start with a '{delimiter}' front matter block",
            source,
        )

    for i, line in enumerate(lines[1:], 1):
        if line.strip() == delimiter:
            return "".join(lines[1:i]), "".join(lines[i + 1 :])

    raise MalformedFrontMatterError(
        f"front matter opened but closing '{delimiter}' not found", source
    )


# ----- Front Matter Parsing -----
def parse_frontmatter(text: str, source: Optional[str] = None) -> Dict[str, Any]:
    """
    Parse front matter YAML into a dictionary.

    Args:
        text: YAML text between the delimiters
        source: Source name used in error messages

    Returns:
        Mapping of field name to value (empty for a blank block)

    Raises:
        MalformedFrontMatterError: Invalid YAML or not a key/value mapping
    """
    try:
        data = yaml.load(text, Loader=FrontMatterLoader)
    except yaml.YAMLError as e:
        raise MalformedFrontMatterError(f"invalid YAML: {e}", source) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedFrontMatterError(
            f"front matter must be key/value pairs, got {type(data).__name__}",
            source,
        )
    return {str(key): value for key, value in data.items()}


# ----- Front Matter Writing -----
def dump_frontmatter(data: Mapping[str, Any], delimiter: str = "---") -> str:
    """
    Serialize a mapping as a delimited front matter block.

    Key order is preserved. The result ends with a newline after the
    closing delimiter so a body can be appended directly.

    Examples:
        >>> dump_frontmatter({"title": "Hi"})
        '---\\ntitle: Hi\\n---\\n'
    """
    yaml_str = yaml.safe_dump(
        dict(data),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    return f"{delimiter}\n{yaml_str}{delimiter}\n"
