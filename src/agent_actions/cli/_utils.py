"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Tuple

from agent_actions.config import ConfigManager
from agent_actions.core.store import ActionRegistry, ReloadResult
from agent_actions.loader import LoaderConfig


def get_base_path(args: argparse.Namespace) -> Path:
    """Get the base path from ``--base-path`` or the current directory."""
    if getattr(args, "base_path", None):
        return Path(args.base_path).expanduser().resolve()
    return Path.cwd()


def get_loader_config(args: argparse.Namespace) -> LoaderConfig:
    """Build the loader config from the merged configuration and CLI flags.

    ``--path`` entries are appended after the configured paths so they take
    the highest priority; ``--debug`` forces debug logging on.
    """
    base_path = get_base_path(args)
    config = ConfigManager(base_path).load()
    cli_paths = [str(Path(p).expanduser()) for p in getattr(args, "paths", None) or []]
    return LoaderConfig.from_actions_config(
        config,
        paths=(*config.paths, *cli_paths),
        debug=config.debug or bool(getattr(args, "debug", False)),
    )


def load_registry(args: argparse.Namespace) -> Tuple[ActionRegistry, ReloadResult]:
    registry = ActionRegistry(get_loader_config(args))
    return registry, registry.load()


__all__ = ["get_base_path", "get_loader_config", "load_registry"]
