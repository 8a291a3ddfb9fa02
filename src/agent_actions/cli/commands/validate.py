"""
agent-actions validate command.

SUMMARY: Validate action files and report load errors
"""

from __future__ import annotations

import argparse
import sys

from agent_actions.cli import OutputFormatter, add_standard_flags, get_loader_config
from agent_actions.core.store import ActionRegistry
from agent_actions.loader import LoaderConfig

SUMMARY = "Validate action files and report load errors"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "files",
        nargs="*",
        help="Files or directories to validate (default: every configured source)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        if args.files:
            config = LoaderConfig(
                paths=tuple(args.files),
                base_path=getattr(args, "base_path", None),
                debug=bool(getattr(args, "debug", False)),
                use_default_paths=False,
            )
        else:
            config = get_loader_config(args)

        result = ActionRegistry(config).load()
        failed = bool(result.errors) or (args.strict and bool(result.warnings))

        if formatter.json_mode:
            formatter.json_output({**result.to_dict(), "valid": not failed})
            return 1 if failed else 0

        for w in result.warnings:
            formatter.text(f"warning: {w.path}: {w.message}")
        for e in result.errors:
            formatter.text(f"error: {e.path}: {e.message}" if e.path else f"error: {e.message}")
            for detail in e.details or ():
                formatter.text(f"    {detail}")

        stats = result.stats
        summary = f"{stats.namespace_count} namespaces, {stats.action_count} actions"
        if failed:
            formatter.text(f"Validation failed ({len(result.errors)} errors, {len(result.warnings)} warnings); {summary}")
            return 1
        formatter.text(f"OK: {summary}")
        return 0
    except Exception as e:
        formatter.error(e, error_code="validate_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
