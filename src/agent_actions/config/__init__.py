"""Configuration for the action catalog."""
from __future__ import annotations

from .manager import ActionsConfig, ConfigManager, ConfigSource, ENV_PREFIX, load_config

__all__ = ["ActionsConfig", "ConfigManager", "ConfigSource", "ENV_PREFIX", "load_config"]
