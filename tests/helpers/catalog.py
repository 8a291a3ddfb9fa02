"""Builders for source documents and action files used across tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from agent_actions.core.models import ActionDef, ParameterDef, SelectorDef, SourceDocument


def make_doc(
    namespace: str,
    actions: Optional[Dict[str, Any]] = None,
    selectors: Optional[Dict[str, str]] = None,
    *,
    rank: int = 0,
    source_path: Optional[str] = None,
    version: Optional[str] = None,
    description: Optional[str] = None,
) -> SourceDocument:
    """Build a ``SourceDocument``.

    ``actions`` maps action name to a description string or to a dict with
    ``description`` and ``parameters`` (list of dicts).
    """
    defs = {}
    for name, raw in (actions or {}).items():
        if isinstance(raw, str):
            raw = {"description": raw}
        params = tuple(ParameterDef(**p) for p in raw.get("parameters", ()))
        defs[name] = ActionDef(
            name=name,
            description=raw.get("description", ""),
            parameters=params,
            deprecated=raw.get("deprecated", False),
        )
    sels = {name: SelectorDef(name=name, value=value) for name, value in (selectors or {}).items()}
    return SourceDocument(
        namespace=namespace,
        actions=defs,
        selectors=sels,
        source_path=source_path or f"src{rank}/{namespace}.yaml",
        rank=rank,
        version=version,
        description=description,
    )


def write_yaml(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


def write_namespace(directory: Path, namespace: str, actions: Dict[str, Any], filename: Optional[str] = None, **extra) -> Path:
    """Write a namespace document to ``directory/<filename or namespace>.yaml``."""
    data: Dict[str, Any] = {"namespace": namespace, **extra, "actions": actions}
    return write_yaml(directory / (filename or f"{namespace}.yaml"), data)
