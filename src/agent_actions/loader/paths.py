"""Source tier resolution and YAML file discovery.

Tiers, lowest → highest priority:

1. Built-in:  ``agent_actions/data/actions``
2. User:      ``~/.agent-browser/actions``
3. Project:   ``<base>/.agent-browser/actions``
4. Env:       ``AGENT_BROWSER_ACTIONS_PATH`` (``os.pathsep``-separated)
5. Custom:    ``LoaderConfig.paths``

Within a directory, files are discovered recursively in lexicographic path
order. The position of a file in the flattened list is its rank.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from agent_actions.data import get_data_path
from agent_actions.utils.io import is_yaml_file, iter_yaml_files

from .config import LoaderConfig

logger = logging.getLogger(__name__)

ACTIONS_PATH_ENV = "AGENT_BROWSER_ACTIONS_PATH"
CONFIG_DIR_NAME = ".agent-browser"
ACTIONS_DIR_NAME = "actions"
DIRECTORY_CONFIG_FILENAME = "_config.yaml"


@dataclass(frozen=True)
class SourcePath:
    """A search root together with the tier it came from."""

    tier: str  # "builtin" | "user" | "project" | "env" | "custom"
    path: Path


def builtin_actions_dir() -> Path:
    return get_data_path("actions")


def expand_tilde(raw: str, *, home: Optional[str] = None) -> str:
    """Expand a leading ``~`` using ``home`` (or the process home directory)."""
    if raw != "~" and not raw.startswith("~/"):
        return raw
    home_dir = home or os.path.expanduser("~")
    return os.path.join(home_dir, raw[2:]) if raw.startswith("~/") else home_dir


def resolve_path(raw: str, base_path: Path, *, home: Optional[str] = None) -> Path:
    """Resolve ``raw`` against ``base_path`` after tilde expansion."""
    p = Path(expand_tilde(str(raw).strip(), home=home))
    if not p.is_absolute():
        p = base_path / p
    return p.resolve()


def env_action_paths(base_path: Path, *, home: Optional[str] = None) -> List[Path]:
    raw = os.environ.get(ACTIONS_PATH_ENV, "")
    return [resolve_path(part, base_path, home=home) for part in raw.split(os.pathsep) if part.strip()]


def get_source_paths(config: Optional[LoaderConfig] = None) -> List[SourcePath]:
    """Return search roots in precedence order (later overrides earlier)."""
    cfg = config or LoaderConfig()
    base_path = cfg.resolved_base_path()
    out: List[SourcePath] = []

    if cfg.use_default_paths:
        out.append(SourcePath("builtin", builtin_actions_dir()))

        home = cfg.home or os.environ.get("HOME") or os.environ.get("USERPROFILE")
        if home:
            out.append(SourcePath("user", Path(home).expanduser() / CONFIG_DIR_NAME / ACTIONS_DIR_NAME))

        out.append(SourcePath("project", base_path / CONFIG_DIR_NAME / ACTIONS_DIR_NAME))

        for p in env_action_paths(base_path, home=cfg.home):
            out.append(SourcePath("env", p))

    for raw in cfg.paths:
        out.append(SourcePath("custom", resolve_path(raw, base_path, home=cfg.home)))

    return out


def get_action_paths(config: Optional[LoaderConfig] = None) -> List[Path]:
    return [sp.path for sp in get_source_paths(config)]


def discover_files(paths: Iterable[Path]) -> List[Path]:
    """Expand search roots into YAML files.

    Directories are scanned recursively; plain files are kept when they have
    a YAML extension; missing paths are skipped. ``_config.yaml`` files are
    directory settings, not namespace documents, and are never returned.
    """
    files: List[Path] = []
    for target in paths:
        target = Path(target)
        if target.is_dir():
            found = iter_yaml_files(target, recursive=True)
        elif target.is_file() and is_yaml_file(target):
            found = [target]
        else:
            logger.debug("Skipping missing action path: %s", target)
            continue
        files.extend(f for f in found if f.name != DIRECTORY_CONFIG_FILENAME)
    return files


__all__ = [
    "ACTIONS_PATH_ENV",
    "CONFIG_DIR_NAME",
    "DIRECTORY_CONFIG_FILENAME",
    "SourcePath",
    "builtin_actions_dir",
    "expand_tilde",
    "resolve_path",
    "env_action_paths",
    "get_source_paths",
    "get_action_paths",
    "discover_files",
]
