"""Path resolution for xgit.

Uses environment variables when available, falls back to conventional
defaults.

Environment variables:
    XGIT_CONFIG — config file (default: ~/.config/xgit/config.yaml)
    XGIT_SCRATCH_DIR — root for scratch workspaces (default: system temp dir)
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

_DEFAULT_CONFIG = Path.home() / ".config" / "xgit" / "config.yaml"


def config_path() -> Path:
    """Return the path to the xgit config file."""
    return Path(os.environ.get("XGIT_CONFIG", str(_DEFAULT_CONFIG))).expanduser()


def scratch_root() -> Path:
    """Return the directory scratch workspaces are created under."""
    env = os.environ.get("XGIT_SCRATCH_DIR")
    if env:
        return Path(env).expanduser()
    return Path(tempfile.gettempdir())
