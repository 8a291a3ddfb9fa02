"""Directory-level ``_config.yaml`` overrides.

A ``_config.yaml`` next to namespace files can override selectors for every
document in that directory, and may ``extends`` other ``_config.yaml`` files
(a path to the parent file or its directory, relative to the child). Parents
apply first; cycles are ignored.

Example::

    # actions/staging/_config.yaml
    extends: ../_config.yaml
    selectors:
      submitButton: "#staging-submit"
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import yaml

from agent_actions.utils.io import read_yaml

from .paths import DIRECTORY_CONFIG_FILENAME

logger = logging.getLogger(__name__)


def load_directory_config(dir_path: Path) -> Optional[Dict[str, Any]]:
    """Return the parsed ``_config.yaml`` of ``dir_path`` or ``None``.

    Unreadable or non-mapping config files are ignored (logged at WARNING).
    """
    path = Path(dir_path) / DIRECTORY_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = read_yaml(path, default={}, raise_on_error=True)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        logger.warning("Ignoring invalid %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a mapping", path)
        return None
    return data


def _parent_dirs(config: Dict[str, Any], dir_path: Path) -> List[Path]:
    raw = config.get("extends")
    refs = raw if isinstance(raw, list) else [raw] if raw else []
    parents: List[Path] = []
    for ref in refs:
        target = (dir_path / str(ref)).resolve()
        parents.append(target.parent if target.name == DIRECTORY_CONFIG_FILENAME else target)
    return parents


def resolve_config_chain(
    dir_path: Path,
    *,
    _visited: Optional[Set[Path]] = None,
) -> List[Dict[str, Any]]:
    """Return the ``_config.yaml`` chain for ``dir_path``, parents first."""
    visited = _visited if _visited is not None else set()
    dir_path = Path(dir_path).resolve()
    if dir_path in visited:
        return []
    visited.add(dir_path)

    config = load_directory_config(dir_path)
    if config is None:
        return []

    chain: List[Dict[str, Any]] = []
    for parent in _parent_dirs(config, dir_path):
        chain.extend(resolve_config_chain(parent, _visited=visited))
    chain.append(config)
    return chain


def apply_directory_config(data: Dict[str, Any], dir_path: Path) -> Dict[str, Any]:
    """Return ``data`` with selector overrides from the directory config chain."""
    chain = resolve_config_chain(dir_path)
    if not chain:
        return data

    result = dict(data)
    selectors = dict(result.get("selectors") or {})
    for config in chain:
        overrides = config.get("selectors")
        if isinstance(overrides, dict):
            selectors.update(overrides)
    result["selectors"] = selectors
    return result


__all__ = ["load_directory_config", "resolve_config_chain", "apply_directory_config"]
