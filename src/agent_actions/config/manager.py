"""
Action catalog configuration (YAML files + environment overrides).
"""
from __future__ import annotations

import copy
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from agent_actions.data import read_yaml as read_data_yaml
from agent_actions.exceptions import ConfigError
from agent_actions.loader.paths import CONFIG_DIR_NAME, resolve_path
from agent_actions.schemas import validate_payload_safe
from agent_actions.utils.io import read_yaml
from agent_actions.utils.merge import deep_merge

logger = logging.getLogger(__name__)

ENV_PREFIX = "AGENT_BROWSER_ACTIONS_"
CONFIG_FILENAME = "config.yaml"
CONFIG_SCHEMA = "config"

# env suffix -> (config key, kind)
_ENV_KEYS: Dict[str, Tuple[str, str]] = {
    "DEBUG": ("debug", "bool"),
    "TIMEOUT": ("default_timeout", "int"),
    "MAX_DEPTH": ("max_depth", "int"),
    "MAX_STEPS": ("max_steps", "int"),
    "DETECT_VERSION": ("detect_version", "bool"),
}


@dataclass(frozen=True)
class ActionsConfig:
    """Effective configuration after merging every source."""

    paths: Tuple[str, ...] = ()
    debug: bool = False
    default_timeout: int = 30000
    max_depth: int = 10
    max_steps: int = 100
    detect_version: bool = True
    packages: Tuple[str, ...] = ()
    base_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, base_path: Optional[str] = None) -> "ActionsConfig":
        return cls(
            paths=tuple(str(p) for p in data.get("paths") or ()),
            debug=bool(data.get("debug", False)),
            default_timeout=int(data.get("default_timeout", 30000)),
            max_depth=int(data.get("max_depth", 10)),
            max_steps=int(data.get("max_steps", 100)),
            detect_version=bool(data.get("detect_version", True)),
            packages=tuple(str(p) for p in data.get("packages") or ()),
            base_path=base_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "paths": list(self.paths),
            "debug": self.debug,
            "default_timeout": self.default_timeout,
            "max_depth": self.max_depth,
            "max_steps": self.max_steps,
            "detect_version": self.detect_version,
            "packages": list(self.packages),
        }


@dataclass
class ConfigSource:
    """One layer of configuration as it was read (for diagnostics)."""

    name: str
    path: Optional[str]
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "path": self.path, "data": self.data}


def _as_bool(value: str) -> Optional[bool]:
    low = value.strip().lower()
    if low in {"true", "1", "yes"}:
        return True
    if low in {"false", "0", "no"}:
        return False
    return None


def _as_positive_int(value: str) -> Optional[int]:
    if not re.fullmatch(r"\+?\d+", value.strip() or " "):
        return None
    number = int(value)
    return number if number > 0 else None


class ConfigManager:
    """Load, merge, and validate the action catalog configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: AGENT_BROWSER_ACTIONS_*
    2. Project config: <base_path>/.agent-browser/config.yaml
    3. User config: ~/.agent-browser/config.yaml
    4. Bundled defaults: agent_actions.data/config/defaults.yaml

    Mappings merge recursively, lists concatenate without duplicates and
    scalars take the higher-priority value. ``actions.paths`` entries in a
    config file are resolved relative to the directory holding that file.

    ``AGENT_BROWSER_ACTIONS_PATH`` is not merged here: the loader reads it as
    its own source tier.
    """

    def __init__(self, base_path: Optional[Path] = None, *, home: Optional[Path] = None) -> None:
        self.base_path = Path(base_path).expanduser().resolve() if base_path else Path.cwd()
        home_dir = home or os.environ.get("HOME") or os.environ.get("USERPROFILE")
        self.home = Path(home_dir).expanduser() if home_dir else None

        self.user_config_path = self.home / CONFIG_DIR_NAME / CONFIG_FILENAME if self.home else None
        self.project_config_path = self.base_path / CONFIG_DIR_NAME / CONFIG_FILENAME

    # -- files ------------------------------------------------------------

    def load_file(self, path: Path) -> Dict[str, Any]:
        """Read and validate one config file; a missing file yields ``{}``.

        Raises:
            ConfigError: The file exists but is not valid YAML or fails the
                config schema.
        """
        path = Path(path)
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to read config {path}: {exc}", context={"path": str(path)}) from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a YAML mapping", context={"path": str(path)})

        errors = validate_payload_safe(data, CONFIG_SCHEMA)
        if errors:
            raise ConfigError(
                f"Invalid config {path}: {errors[0]}",
                context={"path": str(path), "errors": errors},
            )
        return self._resolve_paths(data, path.parent)

    def _resolve_paths(self, data: Dict[str, Any], config_dir: Path) -> Dict[str, Any]:
        actions = data.get("actions")
        if not isinstance(actions, dict) or not actions.get("paths"):
            return data
        home = str(self.home) if self.home else None
        resolved = [str(resolve_path(p, config_dir, home=home)) for p in actions["paths"]]
        return {**data, "actions": {**actions, "paths": resolved}}

    # -- environment ------------------------------------------------------

    def env_overrides(self) -> Dict[str, Any]:
        """Return the ``actions`` overrides found in ``AGENT_BROWSER_ACTIONS_*``.

        Values that do not parse are ignored with a warning.
        """
        overrides: Dict[str, Any] = {}
        for suffix, (key, kind) in _ENV_KEYS.items():
            raw = os.environ.get(ENV_PREFIX + suffix)
            if raw is None:
                continue
            value = _as_bool(raw) if kind == "bool" else _as_positive_int(raw)
            if value is None:
                logger.warning("Ignoring invalid %s%s=%r", ENV_PREFIX, suffix, raw)
                continue
            overrides[key] = value
        return {"actions": overrides} if overrides else {}

    # -- merged -----------------------------------------------------------

    def sources(self) -> List[ConfigSource]:
        """Return every configuration layer, lowest priority first."""
        layers = [ConfigSource("defaults", None, copy.deepcopy(read_data_yaml("config", "defaults.yaml") or {}))]
        if self.user_config_path is not None:
            layers.append(
                ConfigSource("user", str(self.user_config_path), self.load_file(self.user_config_path))
            )
        layers.append(
            ConfigSource("project", str(self.project_config_path), self.load_file(self.project_config_path))
        )
        layers.append(ConfigSource("env", None, self.env_overrides()))
        return layers

    def load_dict(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for layer in self.sources():
            merged = deep_merge(merged, layer.data)
        return merged

    def load(self) -> ActionsConfig:
        merged = self.load_dict()
        config = ActionsConfig.from_dict(merged.get("actions") or {}, base_path=str(self.base_path))
        logger.debug("Loaded config for %s: %s", self.base_path, config.to_dict())
        return config


def load_config(base_path: Optional[Path] = None) -> ActionsConfig:
    return ConfigManager(base_path).load()


__all__ = [
    "ActionsConfig",
    "ConfigManager",
    "ConfigSource",
    "ENV_PREFIX",
    "load_config",
]
