"""Loader configuration accepted by the registry store."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from agent_actions.config import ActionsConfig


@dataclass(frozen=True)
class LoaderConfig:
    """Where and how to load action definitions.

    Attributes:
        paths: Additional files/directories, highest priority.
        debug: Switch the package logger to DEBUG while loading.
        base_path: Base for relative paths (defaults to the CWD at load time).
        use_default_paths: Include built-in, user, project and env tiers.
        max_workers: Parse files on a thread pool when > 1.
        home: Home directory override for the user tier.
    """

    paths: Tuple[str, ...] = ()
    debug: bool = False
    base_path: Optional[str] = None
    use_default_paths: bool = True
    max_workers: int = 1
    home: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", tuple(str(p) for p in self.paths))

    def resolved_base_path(self) -> Path:
        return Path(self.base_path).expanduser().resolve() if self.base_path else Path.cwd()

    @classmethod
    def from_actions_config(cls, config: "ActionsConfig", **overrides) -> "LoaderConfig":
        """Build a loader config from the merged user/project/env configuration.

        Config-file ``paths`` are already absolute; the built-in, user, project
        and ``AGENT_BROWSER_ACTIONS_PATH`` tiers are still resolved by the loader.
        """
        values = {
            "paths": tuple(config.paths),
            "debug": config.debug,
            "base_path": str(config.base_path) if config.base_path else None,
        }
        values.update(overrides)
        return cls(**values)


__all__ = ["LoaderConfig"]
