"""
agent-actions debug command.

SUMMARY: Dump the loaded catalog with provenance, errors and warnings
"""

from __future__ import annotations

import argparse
import sys

from agent_actions.cli import OutputFormatter, add_standard_flags, get_loader_config
from agent_actions.core.store import ActionRegistry
from agent_actions.loader import get_source_paths

SUMMARY = "Dump the loaded catalog with provenance, errors and warnings"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        config = get_loader_config(args)
        registry = ActionRegistry(config)
        registry.load()
        info = registry.get_debug_info()
        info["searchPaths"] = [
            {"tier": sp.tier, "path": str(sp.path), "exists": sp.path.exists()}
            for sp in get_source_paths(config)
        ]

        if formatter.json_mode:
            formatter.json_output(info)
            return 0

        formatter.text("Search paths:")
        for sp in info["searchPaths"]:
            mark = "" if sp["exists"] else "  (missing)"
            formatter.text(f"  [{sp['tier']}] {sp['path']}{mark}")

        stats = info["stats"]
        formatter.text(
            f"\nNamespaces: {stats['namespaceCount']}  Actions: {stats['actionCount']}  "
            f"Selectors: {stats['selectorCount']}"
        )
        for ns in info["namespaces"]:
            formatter.text(f"\n{ns['name']}: {ns['actionCount']} actions, {ns['selectorCount']} selectors")
            for path in ns["sourcePaths"]:
                formatter.text(f"  from {path}")

        if info["warnings"]:
            formatter.text("\nWarnings:")
            for w in info["warnings"]:
                formatter.text(f"  [{w['kind']}] {w['message']}")
        if info["errors"]:
            formatter.text("\nErrors:")
            for e in info["errors"]:
                formatter.text(f"  [{e['kind']}] {e['path']}: {e['message']}")
        return 0
    except Exception as e:
        formatter.error(e, error_code="debug_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
