"""
YAML defaults for the settings classes.

All defaults live in configs/config.yaml, one top-level key per settings
group (``paths``, ``categorizer``). Point SEMANTIC_CATEGORIZER_CONFIG at
another file to swap the whole set of defaults; environment variables for
individual fields still take precedence.

Usage:
    from semantic_categorizer.config._loader import load_yaml_section

    categorizer = load_yaml_section(section="categorizer")
    everything = load_yaml_section()
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
import yaml

CONFIG_ENV_VAR = "SEMANTIC_CATEGORIZER_CONFIG"
DEFAULT_CONFIG_FILE = Path(__file__).resolve().parents[2] / "configs" / "config.yaml"


def config_path(config_file: Optional[str] = None) -> Path:
    """
    Resolve the YAML file to read.

    Relative names are looked up in configs/. Without a name, the file
    from SEMANTIC_CATEGORIZER_CONFIG is used, else configs/config.yaml.
    """
    if config_file is None:
        return Path(os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE)
    path = Path(config_file)
    return path if path.is_absolute() else DEFAULT_CONFIG_FILE.parent / path


@lru_cache(maxsize=8)
def _read(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def load_yaml_section(config_file: Optional[str] = None, section: Optional[str] = None) -> dict[str, Any]:
    """
    Load one section of the defaults file (cached per file).

    Args:
        config_file: File name relative to configs/, or an absolute path
        section: Top-level key to extract; None returns the whole file

    Returns:
        The section as a dict; empty if the file or the key is missing

    Raises:
        ValueError: If the file or the section is not a mapping
    """
    path = config_path(config_file)
    data = _read(path)
    if section is None:
        return data

    value = data.get(section) or {}
    if not isinstance(value, dict):
        raise ValueError(f"{path}: section '{section}' must be a mapping")
    return value


def clear_config_cache() -> None:
    """Forget cached files so the next load re-reads them."""
    _read.cache_clear()
