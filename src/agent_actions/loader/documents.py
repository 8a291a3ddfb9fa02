"""Namespace document parsing.

Turns one YAML file into a typed :class:`SourceDocument`:

1. read + parse YAML              (``SourceReadError`` on failure)
2. validate against the namespace schema (``SchemaError`` on failure)
3. apply directory ``_config.yaml`` selector overrides
4. convert into typed action/selector definitions

Parameters may be written either as an ordered list under ``parameters``
(each item carrying ``name``) or as a mapping under ``params``
(``name -> definition``); both become an ordered tuple of ``ParameterDef``.
"""
from __future__ import annotations

import logging
from collections.abc import Hashable
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from agent_actions.core.models import ActionDef, ParameterDef, SelectorDef, SourceDocument
from agent_actions.exceptions import SchemaError, SourceReadError
from agent_actions.schemas import validate_payload_safe

from .inheritance import apply_directory_config

logger = logging.getLogger(__name__)

NAMESPACE_SCHEMA = "namespace"


class DuplicateKeyError(yaml.constructor.ConstructorError):
    """A mapping in the document repeats a key."""


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects repeated mapping keys instead of keeping the last."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    "found unhashable key",
                    key_node.start_mark,
                )
            if key in seen:
                raise DuplicateKeyError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key '{key}'",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def read_document(path: Path) -> Any:
    """Read and parse one YAML file, raising ``SourceReadError`` on failure.

    Repeated keys raise ``SchemaError``.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.load(f, Loader=_UniqueKeyLoader)
    except DuplicateKeyError as exc:
        raise SchemaError(f"Duplicate key: {exc.problem}", path=str(path)) from exc
    except FileNotFoundError as exc:
        raise SourceReadError(f"File not found: {path}", path=str(path)) from exc
    except yaml.YAMLError as exc:
        raise SourceReadError(f"Failed to parse YAML: {exc}", path=str(path)) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Failed to read file: {exc}", path=str(path)) from exc


def validate_document(data: Any, path: str = "") -> Dict[str, Any]:
    """Check ``data`` against the namespace schema; return it as a dict."""
    if not isinstance(data, dict):
        kind = "empty document" if data is None else type(data).__name__
        raise SchemaError(f"Expected a mapping at top level, got {kind}", path=path)

    errors = validate_payload_safe(data, NAMESPACE_SCHEMA)
    if errors:
        raise SchemaError(errors[0], path=path, details=errors)
    return data


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def _parameter(name: str, raw: Mapping[str, Any]) -> ParameterDef:
    return ParameterDef(
        name=name,
        type=str(raw.get("type") or "string"),
        description=str(raw.get("description") or ""),
        required=bool(raw.get("required", False)),
        default=raw.get("default"),
        values=tuple(str(v) for v in raw.get("values") or ()),
        secret=bool(raw.get("secret", False)),
    )


def _parameters(raw: Mapping[str, Any]) -> Tuple[ParameterDef, ...]:
    params: List[ParameterDef] = [_parameter(str(item["name"]), item) for item in raw.get("parameters") or ()]
    for name, item in (raw.get("params") or {}).items():
        params.append(_parameter(str(name), item or {}))
    return tuple(params)


def _action(name: str, raw: Optional[Mapping[str, Any]]) -> ActionDef:
    raw = raw or {}
    return ActionDef(
        name=name,
        description=str(raw.get("description") or ""),
        parameters=_parameters(raw),
        since=raw.get("since"),
        deprecated=bool(raw.get("deprecated", False)),
        deprecated_message=raw.get("deprecated_message"),
        alias_of=raw.get("alias_of"),
    )


def _selector(name: str, raw: Any, path: str) -> Optional[SelectorDef]:
    if isinstance(raw, str) and raw:
        return SelectorDef(name=name, value=raw)
    if isinstance(raw, dict) and isinstance(raw.get("primary"), str) and raw["primary"]:
        fallback = tuple(str(s) for s in raw.get("fallback") or () if s)
        return SelectorDef(name=name, value=raw["primary"], fallback=fallback)
    # Only reachable through _config.yaml overrides, which are not schema-checked.
    logger.warning("Ignoring invalid selector '%s' for %s", name, path)
    return None


def to_source_document(data: Mapping[str, Any], *, source_path: str, rank: int) -> SourceDocument:
    """Convert a validated namespace mapping into a ``SourceDocument``."""
    actions = {str(name): _action(str(name), raw) for name, raw in (data.get("actions") or {}).items()}
    selectors: Dict[str, SelectorDef] = {}
    for name, raw in (data.get("selectors") or {}).items():
        selector = _selector(str(name), raw, source_path)
        if selector is not None:
            selectors[str(name)] = selector

    return SourceDocument(
        namespace=str(data["namespace"]),
        actions=actions,
        selectors=selectors,
        source_path=source_path,
        rank=rank,
        version=data.get("version"),
        description=data.get("description"),
    )


def parse_document(path: Path, rank: int, *, apply_config: bool = True) -> SourceDocument:
    """Load ``path`` as a namespace document with load-order ``rank``.

    Raises:
        SourceReadError: file missing, unreadable or not valid YAML
        SchemaError: parsed content is not a valid namespace document
    """
    path = Path(path)
    data = validate_document(read_document(path), str(path))
    if apply_config:
        data = apply_directory_config(data, path.parent)
    return to_source_document(data, source_path=str(path), rank=rank)


__all__ = [
    "NAMESPACE_SCHEMA",
    "read_document",
    "validate_document",
    "to_source_document",
    "parse_document",
]
