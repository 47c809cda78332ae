"""
Content records for the Folio pipeline.

Components:
    - Post: One loaded article
    - Layout: Closed set of page layouts
"""
from .post import Layout, Post, normalize_tag, normalize_tags

__all__ = ["Layout", "Post", "normalize_tag", "normalize_tags"]
