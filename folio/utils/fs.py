#!/usr/bin/env python3
"""
fs.py
-------------------
Filesystem utilities for source discovery and output writing.

Functions:
    find_sources: Discover source files by glob pattern, sorted
    write_if_changed: Write text only when it differs from what is on disk

Usage:
    from folio.utils.fs import find_sources, write_if_changed

    files = find_sources(Path("_posts"), "*.md")
    status = write_if_changed(Path("_site/index.html"), html)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import List


def find_sources(directory: Path, pattern: str = "*.md") -> List[Path]:
    """Find regular files matching pattern, in sorted order."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.glob(pattern) if p.is_file())


def write_if_changed(path: Path, content: str) -> str:
    """
    Write content to path unless the file already holds it.

    Unchanged files keep their timestamps, which keeps incremental
    deploys small. The comparison is on encoded bytes, so an existing
    file that is not UTF-8 is simply replaced.

    Args:
        path: Destination file
        content: Text to write (UTF-8)

    Returns:
        "created", "updated" or "unchanged"
    """
    data = content.encode("utf-8")
    if path.exists():
        if path.read_bytes() == data:
            return "unchanged"
        status = "updated"
    else:
        status = "created"

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return status
