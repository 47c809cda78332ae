"""
Loading and indexing of Markdown posts.

Components:
    - loader: Sources -> validated Post records
    - index: PostIndex collection and queries
    - cli: The ``folio`` command line
"""
from .index import PostIndex, PostView
from .loader import LoadFailure, LoadResult, load_directory, load_file, load_post

__all__ = [
    "PostIndex",
    "PostView",
    "LoadFailure",
    "LoadResult",
    "load_directory",
    "load_file",
    "load_post",
]
