"""Config file discovery and loading.

Walk-up finder locates ``.psuctl.yaml``, similar to how git finds .git/,
falling back to the file in the user's home directory.  Supports the
PSUCTL_CONFIG env var and the --config CLI flag as overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from psuctl.config.models import PsuConfig

CONFIG_FILENAME = ".psuctl.yaml"
CONFIG_ENV_VAR = "PSUCTL_CONFIG"


def find_config(start: Path | None = None) -> Path:
    """Return the config file path to use.

    Checks PSUCTL_CONFIG first, then walks up from *start* (default: cwd),
    and finally falls back to ``~/.psuctl.yaml``.  The returned file may
    not exist yet; ``psuctl config KEY VALUE`` creates it.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return Path.home() / CONFIG_FILENAME


def read_config_data(path: Path) -> dict[str, Any]:
    """Read raw YAML mapping from *path*; missing or empty files yield ``{}``."""
    if not path.is_file():
        return {}
    data = YAML(typ="safe").load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping"
        raise ValueError(msg)
    return data


def load_config(path: Path | None = None, cwd: Path | None = None) -> PsuConfig:
    """Load and validate config from a YAML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default PsuConfig if the file does not exist.
    """
    if path is None:
        path = find_config(cwd)
    return PsuConfig.model_validate(read_config_data(path))
