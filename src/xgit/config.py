"""Load xgit settings from config.yaml and the environment."""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from xgit.paths import config_path, scratch_root

DEFAULT_BRANCH = "main"


@dataclass
class XgitConfig:
    """Effective settings for one xgit invocation."""

    default_branch: str = DEFAULT_BRANCH
    scratch_dir: Path | None = None
    keep_scratch: bool = False
    verbose: bool = False

    @property
    def scratch_root(self) -> Path:
        return self.scratch_dir if self.scratch_dir else scratch_root()


def load_config(path: Path | str | None = None) -> XgitConfig:
    """Build the effective config.

    Precedence, lowest first: built-in defaults, the YAML config file,
    then XGIT_DEFAULT_BRANCH / XGIT_SCRATCH_DIR.

    Args:
        path: Config file. Defaults to $XGIT_CONFIG or
            ~/.config/xgit/config.yaml. A missing file is not an error.

    Returns:
        XgitConfig instance.

    Raises:
        ValueError: If the file is not a YAML mapping.
        yaml.YAMLError: If the YAML is malformed.
    """
    cfg_path = Path(path) if path else config_path()
    data: dict = {}
    if cfg_path.is_file():
        with open(cfg_path) as f:
            loaded = yaml.safe_load(f)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"config at {cfg_path} is not a YAML mapping")
        data = loaded or {}

    known = {f.name for f in fields(XgitConfig)}
    for key in sorted(set(data) - known):
        warnings.warn(f"{cfg_path}: ignoring unknown config key '{key}'")

    config = XgitConfig(
        default_branch=str(data.get("default_branch") or DEFAULT_BRANCH),
        scratch_dir=Path(data["scratch_dir"]).expanduser() if data.get("scratch_dir") else None,
        keep_scratch=bool(data.get("keep_scratch", False)),
        verbose=bool(data.get("verbose", False)),
    )

    branch = os.environ.get("XGIT_DEFAULT_BRANCH")
    if branch:
        config.default_branch = branch
    scratch = os.environ.get("XGIT_SCRATCH_DIR")
    if scratch:
        config.scratch_dir = Path(scratch).expanduser()

    return config
