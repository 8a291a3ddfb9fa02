"""
agent-actions CLI package.

Commands are auto-discovered from ``cli/commands/``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, format_json
from ._args import (
    add_json_flag,
    add_base_path_flag,
    add_path_flag,
    add_debug_flag,
    add_standard_flags,
)
from ._utils import get_base_path, get_loader_config, load_registry

__all__ = [
    # Output formatting
    "OutputFormatter",
    "format_json",
    # Argument helpers
    "add_json_flag",
    "add_base_path_flag",
    "add_path_flag",
    "add_debug_flag",
    "add_standard_flags",
    # Utilities
    "get_base_path",
    "get_loader_config",
    "load_registry",
]
