#!/usr/bin/env python3
"""
post.py
-------------------
Dataclass representing one blog post loaded from a Markdown source.

A Post is the record that flows from the loader into the index and on to
the renderer. It is immutable once built: changing a post means building
a new one (``with_body``) and re-indexing it, which also drops any
rendered output that no longer matches the body.

Key Design:
- Required metadata: title, date
- Tags are lower-cased and deduplicated into a frozenset
- Unrecognized front matter keys survive in ``extra``
- ``to_markdown`` writes a source that loads back to an equal Post
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

# --- Local imports ---
from folio.utils.md import dump_frontmatter

WORDS_PER_MINUTE = 200

_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_LINK_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_MARKUP_RE = re.compile(r"[*_`>#|]")


class Layout(str, Enum):
    """Closed set of page layouts a post can select."""

    POST = "post"
    PAGE = "page"

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]


def normalize_tag(tag: Any) -> str:
    """Lower-case and trim a tag for storage and comparison."""
    return str(tag).strip().lower()


def normalize_tags(tags: Iterable[Any]) -> FrozenSet[str]:
    """Normalize a collection of tags, dropping empties and duplicates."""
    return frozenset(t for t in (normalize_tag(tag) for tag in tags) if t)


@dataclass(frozen=True)
class Post:
    """
    One article parsed from a front matter Markdown source.

    Attributes:
        slug: Unique, URL-safe identifier
        title: Post title
        date: Publication timestamp (date-only values are midnight)
        tags: Normalized tag set
        layout: Layout name selecting the page template
        body: Raw Markdown after the closing front matter marker
        source: Name of the source the post was loaded from
        extra: Unrecognized front matter keys, preserved as-is
        rendered_body: HTML of the body once rendered, else None

    Examples:
        >>> post = Post(slug="hi", title="Hi", date=datetime(2020, 1, 1))
        >>> post.rendered_body is None
        True
        >>> post.with_rendered("<p>x</p>").with_body("y").rendered_body is None
        True
    """

    slug: str
    title: str
    date: datetime
    tags: FrozenSet[str] = frozenset()
    layout: str = Layout.POST.value
    body: str = ""
    source: str = ""
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)
    rendered_body: Optional[str] = field(default=None, compare=False, hash=False)

    def __post_init__(self) -> None:
        """Normalize tags however the post was constructed."""
        object.__setattr__(self, "tags", normalize_tags(self.tags))

    # ---- Derived properties ----
    @property
    def sort_key(self) -> Tuple[float, str]:
        """
        Key ordering posts newest first, then by slug.

        Aware timestamps compare by their UTC instant; naive ones are
        taken as UTC so both kinds can share one collection.
        """
        when = self.date
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return (-when.timestamp(), self.slug)

    @property
    def sorted_tags(self) -> List[str]:
        return sorted(self.tags)

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def is_rendered(self) -> bool:
        return self.rendered_body is not None

    @property
    def word_count(self) -> int:
        return len(self.body.split())

    @property
    def reading_time(self) -> int:
        """Estimated reading time in minutes (minimum 1)."""
        return max(1, round(self.word_count / WORDS_PER_MINUTE))

    def excerpt(self, max_length: int = 200) -> str:
        """
        First prose paragraph of the body as plain text.

        Headings and fenced code are skipped; inline markup characters
        are dropped.

        Args:
            max_length: Maximum length, truncated with an ellipsis

        Returns:
            Excerpt string (empty when the body has no prose)
        """
        paragraph: List[str] = []
        fence: Optional[str] = None

        for line in self.body.splitlines():
            match = _FENCE_RE.match(line)
            if fence is not None:
                if match and match.group(1)[0] == fence[0] and len(match.group(1)) >= len(fence):
                    fence = None
                continue
            if match:
                if paragraph:
                    break
                fence = match.group(1)
                continue

            stripped = line.strip()
            if not stripped:
                if paragraph:
                    break
                continue
            if stripped.startswith(("#", "|", "<", "---", "***")):
                if paragraph:
                    break
                continue
            paragraph.append(stripped)

        text = _LINK_RE.sub(r"\1", " ".join(paragraph))
        text = _MARKUP_RE.sub("", text)
        text = re.sub(r"\s+", " ", text).strip()
        if len(text) > max_length:
            return text[: max_length - 3].rstrip() + "..."
        return text

    # ---- Copies ----
    def with_rendered(self, html: str) -> Post:
        """Return a copy carrying rendered body HTML."""
        return replace(self, rendered_body=html)

    def with_body(self, body: str) -> Post:
        """Return a copy with a new body; rendered output is discarded."""
        return replace(self, body=body, rendered_body=None)

    # ---- Serialization ----
    def metadata(self) -> Dict[str, Any]:
        """
        Front matter fields for this post, recognized keys first.

        Dates are written in ISO 8601 so they load back unchanged.
        """
        data: Dict[str, Any] = {
            "layout": self.layout,
            "title": self.title,
            "date": self.date.isoformat(),
            "slug": self.slug,
            "tags": self.sorted_tags,
        }
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    def to_markdown(self, delimiter: str = "---") -> str:
        """
        Serialize back to a front matter Markdown source.

        Examples:
            >>> print(Post(slug="hi", title="Hi", date=datetime(2020, 1, 1),
            ...            body="# Hi\\n").to_markdown())
            ---
            layout: post
            title: Hi
            date: '2020-01-01T00:00:00'
            slug: hi
            tags: []
            ---
            # Hi
            <BLANKLINE>
        """
        return dump_frontmatter(self.metadata(), delimiter) + self.body
