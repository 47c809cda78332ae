#!/usr/bin/env python3
"""
config.py
---------
Site configuration for the Folio pipeline.

The configuration is an explicit value passed into the loader, renderer
and publisher rather than module-level state, so several configurations
can coexist in one process (tests build their own).

Usage:
    from folio.core.config import SiteConfig

    config = SiteConfig.from_file(Path("folio.yaml"))
    config = config.with_overrides(output_dir=Path("public"))

Example folio.yaml:
    title: Notes on .NET
    base_url: https://example.org/
    permalink: "{year}/{month}/{slug}.html"
    tags_dir: topics
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Mapping, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from folio.core.exceptions import ConfigError
from folio.core.paths import CONTENT_DIR, OUTPUT_DIR

_PATH_FIELDS = ("content_dir", "output_dir", "templates_dir")
_BOOL_FIELDS = ("allow_html", "strip_date_prefix")
_INT_FIELDS = ("excerpt_length",)


@dataclass(frozen=True)
class SiteConfig:
    """
    Immutable site-wide settings.

    Attributes:
        title: Site title shown in page shells and listings
        description: Short site description for the index page
        author: Default author name for page metadata
        base_url: Prefix prepended to every generated link
        content_dir: Directory holding the Markdown sources
        output_dir: Directory receiving rendered pages
        templates_dir: Optional directory overriding packaged templates
        source_glob: Glob selecting source files inside content_dir
        delimiter: Front matter marker line
        default_layout: Layout used when a post does not name one
        permalink: Output path pattern ({slug}, {year}, {month}, {day})
        tags_dir: Output folder for per-tag listing pages
        date_format: strftime pattern for displayed dates
        allow_html: Pass raw HTML in post bodies through unescaped
        strip_date_prefix: Drop a leading YYYY-MM-DD- from filename slugs
        excerpt_length: Maximum excerpt length in characters
    """

    title: str = "Folio"
    description: str = ""
    author: str = ""
    base_url: str = "/"
    content_dir: Path = CONTENT_DIR
    output_dir: Path = OUTPUT_DIR
    templates_dir: Optional[Path] = None
    source_glob: str = "*.md"
    delimiter: str = "---"
    default_layout: str = "post"
    permalink: str = "posts/{slug}.html"
    tags_dir: str = "tags"
    date_format: str = "%B %d, %Y"
    allow_html: bool = False
    strip_date_prefix: bool = True
    excerpt_length: int = 200
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        """Validate values that would otherwise fail late."""
        if not self.delimiter.strip():
            raise ConfigError("delimiter must not be blank")
        if "{slug}" not in self.permalink:
            raise ConfigError(f"permalink must contain {{slug}}: {self.permalink!r}")
        try:
            sample = self.permalink.format(
                slug="x", year="2000", month="01", day="01"
            )
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigError(f"Invalid permalink pattern {self.permalink!r}: {e}") from e
        if _escapes_root(sample) or _escapes_root(self.tags_dir):
            raise ConfigError("permalink and tags_dir must stay inside output_dir")
        if self.excerpt_length < 1:
            raise ConfigError("excerpt_length must be positive")

    # ---- Construction ----
    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], base_dir: Optional[Path] = None
    ) -> SiteConfig:
        """
        Build a configuration from a plain mapping.

        Keys under ``extra`` are passed to templates untouched. Relative
        paths are resolved against ``base_dir`` when given.

        Args:
            data: Mapping of configuration keys to values
            base_dir: Directory relative paths are anchored to

        Returns:
            Validated SiteConfig

        Raises:
            ConfigError: On unknown keys or wrongly typed values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            if key in _PATH_FIELDS:
                path = Path(str(value)).expanduser()
                if base_dir is not None and not path.is_absolute():
                    path = base_dir / path
                values[key] = path
            elif key in _BOOL_FIELDS:
                if not isinstance(value, bool):
                    raise ConfigError(f"{key} must be true or false, got {value!r}")
                values[key] = value
            elif key in _INT_FIELDS:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigError(f"{key} must be an integer, got {value!r}")
                values[key] = value
            elif key == "extra":
                if not isinstance(value, dict):
                    raise ConfigError("extra must be a mapping")
                values[key] = dict(value)
            else:
                if not isinstance(value, (str, int, float)):
                    raise ConfigError(f"{key} must be a string, got {value!r}")
                values[key] = str(value)

        return cls(**values)

    @classmethod
    def from_file(cls, path: Path) -> SiteConfig:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Validated SiteConfig with paths relative to the file's folder

        Raises:
            ConfigError: If the file is unreadable, not YAML, or invalid
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read configuration {path}: {e}") from e

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration {path} must be a mapping")

        return cls.from_mapping(data, base_dir=path.parent)

    def with_overrides(self, **overrides: Any) -> SiteConfig:
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    # ---- Derived values ----
    def permalink_for(self, slug: str, when: datetime) -> str:
        """
        Output path of a post, relative to output_dir.

        Examples:
            >>> SiteConfig(permalink="{year}/{slug}.html").permalink_for(
            ...     "hello", datetime(2020, 1, 1))
            '2020/hello.html'
        """
        return self.permalink.format(
            slug=slug,
            year=f"{when.year:04d}",
            month=f"{when.month:02d}",
            day=f"{when.day:02d}",
        )

    def tag_path(self, tag_slug: str) -> str:
        """Output path of a tag listing page, relative to output_dir."""
        return f"{self.tags_dir.strip('/')}/{tag_slug}.html"

    def url_for(self, path: str) -> str:
        """Absolute link for an output path."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def _escapes_root(path: str) -> bool:
    """Check whether a relative output path is absolute or climbs out."""
    pure = PurePosixPath(path)
    return pure.is_absolute() or ".." in pure.parts
