#!/usr/bin/env python3
"""
slugify.py
----------
String slugification utilities for URL-safe post identifiers.

Key Features:
    - Lowercase transformation
    - Accent/diacritic normalization (Café → cafe)
    - Language-name shorthands kept readable (C# → csharp, F# → fsharp)
    - Space to hyphen conversion
    - Maximum length enforcement
    - Jekyll-style filename handling (2020-01-01-hello.md → hello)

Usage:
    from folio.utils.slugify import slugify, slug_from_filename

    slugify("What's new in C# 9?")              # "whats-new-in-csharp-9"
    slug_from_filename("2021-03-04-intro.md")    # "intro"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
import unicodedata
from pathlib import PurePath

_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}-")
_SHARP_RE = re.compile(r"\b([a-z])#", re.IGNORECASE)


def slugify(text: str, max_length: int = 200) -> str:
    """
    Convert text to a URL-safe slug.

    Applies transformations to make text safe for filenames and URLs:
    - ``X#`` language names spelled out (C# → csharp)
    - Normalize accents (Café → cafe)
    - Lowercase
    - Remove apostrophes (it's → its)
    - Replace ``&`` with ``and``
    - Replace spaces, underscores, dots and slashes with hyphens
    - Strip remaining special characters and collapse hyphens

    Args:
        text: Input text to slugify
        max_length: Maximum slug length (default 200)

    Returns:
        Slugified string (empty if nothing survives)

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'
        >>> slugify("SpecFlow & Gherkin")
        'specflow-and-gherkin'
        >>> slugify("C# records")
        'csharp-records'
        >>> slugify(".NET 5")
        'net-5'
    """
    if not text:
        return ""

    text = _SHARP_RE.sub(lambda m: f"{m.group(1)}sharp", text)

    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()

    text = text.replace("'", "")
    text = text.replace("&", " and ")

    text = re.sub(r"[\s_./\\]+", "-", text)
    text = re.sub(r"[^a-z0-9-]", "", text)
    text = re.sub(r"-+", "-", text)
    text = text.strip("-")

    if len(text) > max_length:
        text = text[:max_length].rstrip("-")

    return text


def slug_from_filename(name: str, strip_date_prefix: bool = True) -> str:
    """
    Derive a slug from a source file name.

    Args:
        name: File name or path (extension is ignored)
        strip_date_prefix: Drop a leading ``YYYY-MM-DD-`` as Jekyll does

    Returns:
        Slug for the file (empty if the stem has no usable characters)

    Examples:
        >>> slug_from_filename("2020-01-01-hello-world.md")
        'hello-world'
        >>> slug_from_filename("2020-01-01-hello-world.md", strip_date_prefix=False)
        '2020-01-01-hello-world'
        >>> slug_from_filename("posts/About Me.markdown")
        'about-me'
    """
    stem = PurePath(name).stem
    if strip_date_prefix:
        stripped = _DATE_PREFIX_RE.sub("", stem)
        # A bare date as the whole name keeps its date
        if stripped:
            stem = stripped
    return slugify(stem)
