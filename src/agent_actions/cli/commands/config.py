"""
agent-actions config command.

SUMMARY: Show the effective configuration and where it came from
"""

from __future__ import annotations

import argparse
import sys

import yaml

from agent_actions.cli import OutputFormatter, add_base_path_flag, add_json_flag, get_base_path
from agent_actions.config import ConfigManager

SUMMARY = "Show the effective configuration and where it came from"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--sources",
        action="store_true",
        help="Show each configuration layer instead of the merged result",
    )
    add_json_flag(parser)
    add_base_path_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        manager = ConfigManager(get_base_path(args))
        if args.sources:
            layers = [layer.to_dict() for layer in manager.sources()]
            if formatter.json_mode:
                formatter.json_output({"sources": layers})
            else:
                for layer in layers:
                    where = f" ({layer['path']})" if layer["path"] else ""
                    formatter.text(f"# {layer['name']}{where}")
                    formatter.text(yaml.safe_dump(layer["data"] or {}, sort_keys=False).rstrip())
            return 0

        config = manager.load()
        if formatter.json_mode:
            formatter.json_output({"actions": config.to_dict(), "basePath": config.base_path})
        else:
            formatter.text(yaml.safe_dump({"actions": config.to_dict()}, sort_keys=False).rstrip())
        return 0
    except Exception as e:
        formatter.error(e, error_code="config_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
