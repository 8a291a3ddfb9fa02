"""YAML file helpers."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List

import yaml

YAML_SUFFIXES = (".yaml", ".yml")


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Args:
        path: YAML file path to read
        default: Value to return if file missing, empty or invalid
        raise_on_error: If True, propagate exceptions instead of returning default.

    Returns:
        Parsed YAML data, or default
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def is_yaml_file(path: Path) -> bool:
    return Path(path).suffix.lower() in YAML_SUFFIXES


def iter_yaml_files(dir_path: Path, *, recursive: bool = False) -> List[Path]:
    """Return YAML files under ``dir_path`` in deterministic (lexicographic) order.

    Includes both ``*.yml`` and ``*.yaml``. Missing directories yield ``[]``.
    """
    d = Path(dir_path)
    if not d.is_dir():
        return []
    candidates = d.rglob("*") if recursive else d.iterdir()
    return sorted((p for p in candidates if p.is_file() and is_yaml_file(p)), key=lambda p: p.as_posix())


__all__ = ["YAML_SUFFIXES", "read_yaml", "is_yaml_file", "iter_yaml_files"]
