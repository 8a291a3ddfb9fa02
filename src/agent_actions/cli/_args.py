"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_base_path_flag(parser: argparse.ArgumentParser) -> None:
    """Add --base-path flag (project root for relative paths and project config)."""
    parser.add_argument(
        "--base-path",
        type=str,
        help="Base directory for relative paths and .agent-browser/ (default: current directory)",
    )


def add_path_flag(parser: argparse.ArgumentParser) -> None:
    """Add repeatable --path flag for extra action files or directories."""
    parser.add_argument(
        "--path",
        dest="paths",
        action="append",
        default=[],
        metavar="PATH",
        help="Additional action file or directory (highest priority, repeatable)",
    )


def add_debug_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log loader activity to stderr",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags shared by every command that loads the catalog."""
    add_json_flag(parser)
    add_base_path_flag(parser)
    add_path_flag(parser)
    add_debug_flag(parser)


__all__ = [
    "add_json_flag",
    "add_base_path_flag",
    "add_path_flag",
    "add_debug_flag",
    "add_standard_flags",
]
