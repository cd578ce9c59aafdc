#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and directory resolution for refdocs.

The plugin structure:
    PLUGIN_ROOT/
    ├── skills/
    │   └── <skill>/
    │       └── references/    # Progressive disclosure reference docs
    └── src/
        └── services/          # Service modules with co-located tests

Nothing here is derived from where the package is installed. The plugin
root defaults to the working directory and logs go to the per-user
application directory, both resolved at call time.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path
from typing import Optional

# --- Third party imports ---
import click


APP_NAME = "refdocs"

# ---- Environment ----
PLUGIN_ROOT_ENV = "PLUGIN_ROOT"
LOG_DIR_ENV = "REFDOCS_LOG_DIR"

# ---- Plugin layout ----
SKILLS_DIRNAME = "skills"
REFERENCES_DIRNAME = "references"
SERVICES_DIR = Path("src") / "services"


def resolve_plugin_root(override: Optional[str] = None) -> Path:
    """
    Resolve the plugin root directory.

    Precedence: explicit override, then the PLUGIN_ROOT environment
    variable, then the current working directory.

    Args:
        override: Path given on the command line, if any

    Returns:
        Plugin root directory
    """
    if override:
        return Path(override)

    env_root = os.environ.get(PLUGIN_ROOT_ENV)
    if env_root:
        return Path(env_root)

    return Path.cwd()


def default_log_dir() -> Path:
    """Per-user log directory, e.g. ~/.config/refdocs/logs on Linux."""
    return Path(click.get_app_dir(APP_NAME)) / "logs"


def resolve_log_dir(override: Optional[str] = None) -> Path:
    """Log directory from --log-dir / $REFDOCS_LOG_DIR, else the user default."""
    return Path(override) if override else default_log_dir()


def skills_dir(plugin_root: Path) -> Path:
    """Directory holding one subdirectory per skill."""
    return plugin_root / SKILLS_DIRNAME


def references_dir(plugin_root: Path, skill: str) -> Path:
    """Reference root for a single skill."""
    return skills_dir(plugin_root) / skill / REFERENCES_DIRNAME
