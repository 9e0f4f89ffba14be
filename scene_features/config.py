"""
Config loader for scene_features.

Settings live in the configs/ directory as YAML files. Neighbor search ranges,
the default roadway length and default vehicle dimensions are read from there
so callers don't hard-code them.

Usage:

    from scene_features.config import load_config

    cfg = load_config("features")
    length = cfg["roadway"]["length"]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

_CONFIGS_DIR = Path(__file__).parent.parent / "configs"


def load_config(name: str) -> dict[str, Any]:
    """
    Load a named YAML config file from the configs/ directory.

    Args:
        name: Config file name without the .yaml extension (e.g. "features").

    Returns:
        The parsed YAML contents as a nested dictionary.

    Raises:
        FileNotFoundError: If configs/<name>.yaml does not exist.
        yaml.YAMLError: If the file contains invalid YAML.
    """
    path = _CONFIGS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            f"Expected one of: {[p.stem for p in _CONFIGS_DIR.glob('*.yaml')]}"
        )
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f)
