#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for Folio commands.

Functions:
    setup_logger: Initialize FolioLogger for CLI operations

Classes:
    OperationStats: Base class for all statistics
    LoadStats: For loading a content directory
    PublishStats: For writing rendered pages

Usage:
    from folio.core.cli import setup_logger, PublishStats

    logger = setup_logger(log_dir, "build")
    stats = PublishStats()
    stats.pages_created += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional

# --- Local imports ---
from folio.core.logging_manager import FolioLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> FolioLogger:
    """
    Setup logging for CLI operations.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'build')

    Returns:
        Configured FolioLogger writing under ``log_dir/operations``
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return FolioLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS CLASSES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Base class for CLI operation statistics.

    Attributes:
        files_processed: Number of files successfully processed
        errors: Number of errors encountered
        start_time: Operation start timestamp
    """
    files_processed: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        if self.files_processed < 0:
            raise ValueError(f"files_processed must be non-negative, got {self.files_processed}")
        if self.errors < 0:
            raise ValueError(f"errors must be non-negative, got {self.errors}")

    def duration(self) -> float:
        """Get elapsed time in seconds (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        """Get formatted summary string."""
        return (
            f"{self.files_processed} files processed, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "files_processed": self.files_processed,
            "errors": self.errors,
            "duration": self.duration(),
        }


@dataclass
class LoadStats(OperationStats):
    """
    Statistics for loading a content directory.

    Attributes:
        posts_loaded: Number of posts added to the index
        files_skipped: Number of sources rejected with a load error
    """
    posts_loaded: int = 0
    files_skipped: int = 0

    def summary(self) -> str:
        """Get formatted summary with load metrics."""
        return (
            f"{self.files_processed} files processed, "
            f"{self.posts_loaded} posts loaded, "
            f"{self.files_skipped} skipped, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with load metrics."""
        d = super().to_dict()
        d.update({
            "posts_loaded": self.posts_loaded,
            "files_skipped": self.files_skipped,
        })
        return d


@dataclass
class PublishStats(OperationStats):
    """
    Statistics for publishing rendered pages.

    Attributes:
        pages_created: Pages written where no file existed
        pages_updated: Pages rewritten because content changed
        pages_unchanged: Pages left alone because content was identical
    """
    pages_created: int = 0
    pages_updated: int = 0
    pages_unchanged: int = 0

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        super().__post_init__()
        for name in ("pages_created", "pages_updated", "pages_unchanged"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    def record(self, status: str) -> None:
        """Count one written page by its write status."""
        if status == "created":
            self.pages_created += 1
        elif status == "updated":
            self.pages_updated += 1
        elif status == "unchanged":
            self.pages_unchanged += 1
        else:
            raise ValueError(f"Unknown write status: {status}")

    @property
    def pages_total(self) -> int:
        return self.pages_created + self.pages_updated + self.pages_unchanged

    def summary(self) -> str:
        """Get formatted summary with page metrics."""
        return (
            f"{self.pages_created} created, "
            f"{self.pages_updated} updated, "
            f"{self.pages_unchanged} unchanged, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with page metrics."""
        d = super().to_dict()
        d.update({
            "pages_created": self.pages_created,
            "pages_updated": self.pages_updated,
            "pages_unchanged": self.pages_unchanged,
        })
        return d
