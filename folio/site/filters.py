#!/usr/bin/env python3
"""
filters.py
----------
Custom Jinja2 filters for page templates.

Filters:
    - date_display: Human-readable date using a strftime pattern
    - iso_date: ISO 8601 timestamp for <time> and <meta> elements
    - slugify: Convert names to URL-safe slugs
    - pluralize: Generate singular/plural strings
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Optional

# --- Local imports ---
from folio.utils.slugify import slugify


def date_display(d: Optional[datetime], fmt: str = "%B %d, %Y") -> str:
    """
    Format a timestamp for display.

    Args:
        d: Timestamp to format
        fmt: strftime format string

    Returns:
        Formatted date string, or empty string if None
    """
    if d is None:
        return ""
    return d.strftime(fmt)


def iso_date(d: Optional[datetime]) -> str:
    """ISO 8601 form of a timestamp, or empty string if None."""
    if d is None:
        return ""
    return d.isoformat()


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """
    Return singular or plural form based on count.

    Args:
        count: Number to check
        singular: Singular form
        plural: Plural form (defaults to singular + 's')

    Returns:
        Formatted string like "5 posts" or "1 post"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def register_filters(env) -> None:
    """
    Register all custom filters with a Jinja2 environment.

    Args:
        env: Jinja2 Environment instance
    """
    env.filters["date_display"] = date_display
    env.filters["iso_date"] = iso_date
    env.filters["slugify"] = slugify
    env.filters["pluralize"] = pluralize
