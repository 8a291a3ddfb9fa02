"""
agent-actions show command.

SUMMARY: Show one action (namespace:name) or one namespace
"""

from __future__ import annotations

import argparse
import sys

from agent_actions.cli import OutputFormatter, add_standard_flags, load_registry
from agent_actions.core.models import Action, Namespace

SUMMARY = "Show one action (namespace:name) or one namespace"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("name", help="Full action name (e.g. common:login) or a namespace name")
    add_standard_flags(parser)


def _print_action(formatter: OutputFormatter, action: Action) -> None:
    formatter.text(action.full_name)
    formatter.text_kv("description", action.description or "-")
    formatter.text_kv("source", action.source_path)
    if action.since:
        formatter.text_kv("since", action.since)
    if action.alias_of:
        formatter.text_kv("alias of", action.alias_of)
    if action.deprecated:
        formatter.text_kv("deprecated", action.deprecated_message or "yes")
    if action.parameters:
        formatter.text("  parameters:")
        for p in action.parameters:
            flag = " (required)" if p.required else ""
            formatter.text(f"    {p.name}: {p.type}{flag}  {p.description}".rstrip())


def _print_namespace(formatter: OutputFormatter, namespace: Namespace, selectors) -> None:
    formatter.text(namespace.name if not namespace.version else f"{namespace.name} (v{namespace.version})")
    if namespace.description:
        formatter.text_kv("description", namespace.description)
    formatter.text_kv("sources", ", ".join(namespace.source_paths))
    formatter.text("  actions:")
    for action in namespace.actions.values():
        formatter.text(f"    {action.full_name}")
    if selectors:
        formatter.text("  selectors:")
        for name, sel in selectors.items():
            formatter.text(f"    {name}: {sel.value}")


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        registry, _ = load_registry(args)

        action = registry.get_action(args.name)
        if action is not None:
            if formatter.json_mode:
                formatter.json_output({"action": action.to_dict()})
            else:
                _print_action(formatter, action)
            return 0

        namespace = registry.get_namespace(args.name)
        if namespace is not None:
            selectors = registry.get_selectors(namespace.name)
            if formatter.json_mode:
                formatter.json_output(
                    {
                        "namespace": {
                            "name": namespace.name,
                            "version": namespace.version,
                            "description": namespace.description,
                            "sourcePaths": list(namespace.source_paths),
                            "actions": [a.to_dict() for a in namespace.actions.values()],
                            "selectors": {name: s.to_dict() for name, s in selectors.items()},
                        }
                    }
                )
            else:
                _print_namespace(formatter, namespace, selectors)
            return 0

        formatter.error(LookupError(f"Unknown action or namespace: {args.name}"), error_code="not_found")
        return 1
    except Exception as e:
        formatter.error(e, error_code="show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
