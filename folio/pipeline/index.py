#!/usr/bin/env python3
"""
index.py
--------
In-memory collection of loaded posts.

The index enforces the collection-wide invariant (one post per slug) and
answers the queries the renderer and CLI need. Once a build has loaded
it, nothing mutates it, so concurrent renderers may share it freely.

Usage:
    from folio.pipeline.index import PostIndex

    index = PostIndex()
    index.add(post)

    for post in index.by_date():
        ...
    latest_csharp = next(iter(index.by_tag("CSharp")), None)
    post = index.find("intro")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from collections import Counter
from typing import Callable, Dict, Iterable, Iterator, List, Optional

# --- Local imports ---
from folio.core.exceptions import DuplicateSlugError, NotFoundError
from folio.dataclasses.post import Post, normalize_tag


class PostView:
    """
    Lazy, restartable sequence of posts.

    Each iteration pulls the current ordering from the index, so a view
    can be iterated any number of times and reflects later additions.
    """

    def __init__(
        self,
        index: PostIndex,
        predicate: Optional[Callable[[Post], bool]] = None,
    ) -> None:
        self._index = index
        self._predicate = predicate

    def __iter__(self) -> Iterator[Post]:
        for post in self._index._ordered():
            if self._predicate is None or self._predicate(post):
                yield post

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None

    def slugs(self) -> List[str]:
        return [post.slug for post in self]


class PostIndex:
    """
    Ordered aggregate of posts keyed by slug.

    Posts themselves are immutable; replacing one means removing it and
    adding the new version.

    Attributes:
        posts: Read-only mapping of slug to post (insertion order)
    """

    def __init__(self) -> None:
        self._posts: Dict[str, Post] = {}
        self._order: Optional[List[Post]] = None

    @classmethod
    def from_posts(cls, posts: Iterable[Post]) -> PostIndex:
        """Build an index from posts, failing on the first duplicate slug."""
        index = cls()
        for post in posts:
            index.add(post)
        return index

    # ---- Mutation ----
    def add(self, post: Post) -> None:
        """
        Add a post to the collection.

        Raises:
            DuplicateSlugError: If the slug is already present. The
                existing entry is left untouched.
        """
        if post.slug in self._posts:
            raise DuplicateSlugError(post.slug, post.source or None)
        self._posts[post.slug] = post
        self._order = None

    def remove(self, slug: str) -> Post:
        """
        Remove and return the post with this slug.

        Raises:
            NotFoundError: If no post has this slug
        """
        try:
            post = self._posts.pop(slug)
        except KeyError:
            raise NotFoundError(slug) from None
        self._order = None
        return post

    # ---- Queries ----
    def find(self, slug: str) -> Post:
        """
        Look up a post by slug.

        Raises:
            NotFoundError: If no post has this slug
        """
        try:
            return self._posts[slug]
        except KeyError:
            raise NotFoundError(slug) from None

    def by_date(self) -> PostView:
        """Posts newest first; equal dates ordered by slug ascending."""
        return PostView(self)

    def by_tag(self, tag: str) -> PostView:
        """Posts of ``by_date()`` carrying ``tag`` (case-insensitive)."""
        wanted = normalize_tag(tag)
        return PostView(self, lambda post: wanted in post.tags)

    def tags(self) -> Dict[str, int]:
        """Tag usage counts, sorted by tag name."""
        counts = Counter(tag for post in self._posts.values() for tag in post.tags)
        return dict(sorted(counts.items()))

    def years(self) -> Dict[int, List[Post]]:
        """Posts grouped by year, newest year first, each in date order."""
        grouped: Dict[int, List[Post]] = {}
        for post in self._ordered():
            grouped.setdefault(post.year, []).append(post)
        return grouped

    @property
    def posts(self) -> Dict[str, Post]:
        return dict(self._posts)

    def _ordered(self) -> List[Post]:
        if self._order is None:
            self._order = sorted(self._posts.values(), key=lambda p: p.sort_key)
        return self._order

    # ---- Container protocol ----
    def __len__(self) -> int:
        return len(self._posts)

    def __contains__(self, slug: object) -> bool:
        return slug in self._posts

    def __iter__(self) -> Iterator[Post]:
        return iter(self.by_date())

    def __repr__(self) -> str:
        return f"PostIndex({len(self)} posts)"
