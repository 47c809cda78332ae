#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Folio project.

Package-internal paths are resolved from this file's location. Site paths
are relative to the working directory the CLI runs in, mirroring the usual
static-site layout:

    SITE_ROOT/
    ├── _posts/        # Markdown sources with front matter
    ├── _site/         # Rendered output
    ├── folio.yaml     # Optional site configuration
    └── logs/          # Operation logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path

# ----- Package -----
PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = PACKAGE_DIR / "site" / "templates"

# ----- Site (relative to the working directory) -----
CONTENT_DIR = Path("_posts")
OUTPUT_DIR = Path("_site")
CONFIG_FILE = Path("folio.yaml")
LOG_DIR = Path("logs")
