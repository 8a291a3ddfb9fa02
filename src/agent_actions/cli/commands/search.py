"""
agent-actions search command.

SUMMARY: Search actions by name, description and parameters
"""

from __future__ import annotations

import argparse
import sys

from agent_actions.cli import OutputFormatter, add_standard_flags, load_registry
from agent_actions.core.search import SearchOptions

SUMMARY = "Search actions by name, description and parameters"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("query", help="Text to search for")
    parser.add_argument("--namespace", "-n", type=str, help="Restrict results to one namespace")
    parser.add_argument("--limit", type=int, help="Maximum number of results")
    parser.add_argument("--case-sensitive", action="store_true", help="Match case exactly")
    parser.add_argument("--no-names", action="store_true", help="Do not match action names")
    parser.add_argument("--no-descriptions", action="store_true", help="Do not match descriptions")
    parser.add_argument("--no-params", action="store_true", help="Do not match parameters")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        registry, _ = load_registry(args)
        options = SearchOptions(
            search_names=not args.no_names,
            search_descriptions=not args.no_descriptions,
            search_params=not args.no_params,
            namespace=args.namespace,
            case_sensitive=args.case_sensitive,
            limit=args.limit,
        )
        results = registry.search(args.query, options)

        if formatter.json_mode:
            formatter.json_output({"query": args.query, "results": [r.to_dict() for r in results]})
            return 0

        if not results:
            formatter.text(f"No actions match '{args.query}'.")
            return 0
        width = max(len(r.action.full_name) for r in results)
        for r in results:
            formatter.text(f"{r.score:>4}  {r.action.full_name:<{width}}  {r.action.description}".rstrip())
        return 0
    except Exception as e:
        formatter.error(e, error_code="search_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
