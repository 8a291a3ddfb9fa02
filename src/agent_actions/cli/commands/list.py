"""
agent-actions list command.

SUMMARY: List namespaces and their actions
"""

from __future__ import annotations

import argparse
import sys

from agent_actions.cli import OutputFormatter, add_standard_flags, load_registry

SUMMARY = "List namespaces and their actions"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--namespace",
        "-n",
        type=str,
        help="Only list actions of this namespace",
    )
    parser.add_argument(
        "--namespaces-only",
        action="store_true",
        help="List namespace names without their actions",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        registry, result = load_registry(args)
        namespaces = registry.get_namespaces()
        if args.namespace:
            namespaces = [ns for ns in namespaces if ns.name == args.namespace]

        if formatter.json_mode:
            payload = []
            for ns in namespaces:
                entry = {"name": ns.name, "version": ns.version, "description": ns.description}
                if not args.namespaces_only:
                    entry["actions"] = [a.to_dict() for a in registry.get_actions_by_namespace(ns.name)]
                payload.append(entry)
            formatter.json_output({"namespaces": payload, "errors": [e.to_dict() for e in result.errors]})
            return 0

        if not namespaces:
            formatter.text("No actions found.")
        for ns in namespaces:
            header = ns.name if not ns.version else f"{ns.name} (v{ns.version})"
            formatter.text(f"{header} - {ns.description}" if ns.description else header)
            if args.namespaces_only:
                continue
            for action in registry.get_actions_by_namespace(ns.name):
                marker = " [deprecated]" if action.deprecated else ""
                formatter.text(f"  {action.full_name}{marker}  {action.description}".rstrip())
        if result.errors:
            print(f"{len(result.errors)} source(s) failed to load; run `agent-actions validate`.", file=sys.stderr)
        return 0
    except Exception as e:
        formatter.error(e, error_code="list_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
