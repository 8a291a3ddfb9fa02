"""Typed models for the action catalog.

Source documents come out of the loader, namespaces and actions come out of
the merge engine, and a :class:`RegistrySnapshot` bundles one consistent
result of the whole pipeline. Every model is immutable once built.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from agent_actions.exceptions import ActionsError

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def frozen_mapping(data: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    """Return a read-only view over a private copy of ``data``."""
    if not data:
        return _EMPTY
    return MappingProxyType(dict(data))


def full_name(namespace: str, key: str) -> str:
    """Return the index key for ``key`` inside ``namespace``.

    Keys that already contain ``:`` (``component:action``) are kept as one
    opaque segment.
    """
    return f"{namespace}:{key}"


# ---------------------------------------------------------------------------
# Source documents (loader output)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParameterDef:
    name: str
    type: str = "string"
    description: str = ""
    required: bool = False
    default: Any = None
    values: Tuple[str, ...] = ()
    secret: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "required": self.required,
        }
        if self.default is not None:
            data["default"] = self.default
        if self.values:
            data["values"] = list(self.values)
        if self.secret:
            data["secret"] = True
        return data


@dataclass(frozen=True)
class ActionDef:
    name: str
    description: str = ""
    parameters: Tuple[ParameterDef, ...] = ()
    since: Optional[str] = None
    deprecated: bool = False
    deprecated_message: Optional[str] = None
    alias_of: Optional[str] = None


@dataclass(frozen=True)
class SelectorDef:
    """A named locator expression; ``value`` is opaque to the catalog."""

    name: str
    value: str
    fallback: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceDocument:
    """One parsed and validated namespace file.

    ``rank`` is the position of the file in the fully flattened discovery
    order; higher ranks override lower ones.
    """

    namespace: str
    actions: Mapping[str, ActionDef] = field(default_factory=lambda: _EMPTY)
    selectors: Mapping[str, SelectorDef] = field(default_factory=lambda: _EMPTY)
    source_path: str = ""
    rank: int = 0
    version: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", frozen_mapping(self.actions))
        object.__setattr__(self, "selectors", frozen_mapping(self.selectors))


# ---------------------------------------------------------------------------
# Merged / indexed entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Action:
    namespace: str
    name: str
    full_name: str
    description: str = ""
    parameters: Tuple[ParameterDef, ...] = ()
    source_path: str = ""
    since: Optional[str] = None
    deprecated: bool = False
    deprecated_message: Optional[str] = None
    alias_of: Optional[str] = None

    @classmethod
    def from_definition(cls, namespace: str, key: str, definition: ActionDef, source_path: str) -> "Action":
        """Build the merged record stored under ``key``; the key, not ``definition.name``, names it."""
        return cls(
            namespace=namespace,
            name=key,
            full_name=full_name(namespace, key),
            description=definition.description,
            parameters=tuple(definition.parameters),
            source_path=source_path,
            since=definition.since,
            deprecated=definition.deprecated,
            deprecated_message=definition.deprecated_message,
            alias_of=definition.alias_of,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "namespace": self.namespace,
            "name": self.name,
            "fullName": self.full_name,
            "description": self.description,
            "parameters": [p.to_dict() for p in self.parameters],
            "sourcePath": self.source_path,
            "since": self.since,
            "deprecated": self.deprecated,
            "deprecatedMessage": self.deprecated_message,
            "aliasOf": self.alias_of,
        }


@dataclass(frozen=True)
class Selector:
    namespace: str
    name: str
    value: str
    fallback: Tuple[str, ...] = ()
    source_path: str = ""

    @classmethod
    def from_definition(cls, namespace: str, key: str, definition: SelectorDef, source_path: str) -> "Selector":
        return cls(
            namespace=namespace,
            name=key,
            value=definition.value,
            fallback=tuple(definition.fallback),
            source_path=source_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"value": self.value, "sourcePath": self.source_path}
        if self.fallback:
            data["fallback"] = list(self.fallback)
        return data


@dataclass(frozen=True)
class Namespace:
    """A namespace after merging every document that defines it."""

    name: str
    actions: Mapping[str, Action] = field(default_factory=lambda: _EMPTY)
    selectors: Mapping[str, Selector] = field(default_factory=lambda: _EMPTY)
    version: Optional[str] = None
    description: Optional[str] = None
    source_path: str = ""
    source_paths: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", frozen_mapping(self.actions))
        object.__setattr__(self, "selectors", frozen_mapping(self.selectors))


# ---------------------------------------------------------------------------
# Load diagnostics
# ---------------------------------------------------------------------------

ERROR_KINDS = {
    "SourceReadError": "read_error",
    "SchemaError": "schema_error",
    "IndexIntegrityError": "index_error",
    "NoSourcesError": "fatal",
}


@dataclass(frozen=True)
class LoadError:
    kind: str
    path: str
    message: str
    details: Any = None

    @classmethod
    def from_exception(cls, exc: ActionsError) -> "LoadError":
        kind = ERROR_KINDS.get(type(exc).__name__, "error")
        return cls(
            kind=kind,
            path=str(getattr(exc, "path", "") or exc.context.get("path", "")),
            message=str(exc),
            details=getattr(exc, "details", None),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind, "path": self.path, "message": self.message}
        if self.details is not None:
            data["details"] = self.details
        return data


@dataclass(frozen=True)
class LoadWarning:
    kind: str  # "override" | "deprecated_action"
    path: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "path": self.path, "message": self.message}


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegistryStats:
    namespace_count: int = 0
    action_count: int = 0
    selector_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "namespaceCount": self.namespace_count,
            "actionCount": self.action_count,
            "selectorCount": self.selector_count,
        }


@dataclass(frozen=True)
class RegistrySnapshot:
    """One immutable, internally consistent result of a full pipeline run."""

    namespaces: Mapping[str, Namespace] = field(default_factory=lambda: _EMPTY)
    index: Mapping[str, Action] = field(default_factory=lambda: _EMPTY)
    selector_tables: Mapping[str, Mapping[str, Selector]] = field(default_factory=lambda: _EMPTY)
    errors: Tuple[LoadError, ...] = ()
    warnings: Tuple[LoadWarning, ...] = ()
    documents: Tuple[SourceDocument, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "namespaces", frozen_mapping(self.namespaces))
        object.__setattr__(self, "index", frozen_mapping(self.index))
        object.__setattr__(
            self,
            "selector_tables",
            frozen_mapping({ns: frozen_mapping(table) for ns, table in self.selector_tables.items()}),
        )
        object.__setattr__(self, "errors", tuple(self.errors))
        object.__setattr__(self, "warnings", tuple(self.warnings))
        object.__setattr__(self, "documents", tuple(self.documents))

    @property
    def stats(self) -> RegistryStats:
        return RegistryStats(
            namespace_count=len(self.namespaces),
            action_count=len(self.index),
            selector_count=sum(len(t) for t in self.selector_tables.values()),
        )

    @classmethod
    def empty(cls) -> "RegistrySnapshot":
        return cls()


__all__ = [
    "ParameterDef",
    "ActionDef",
    "SelectorDef",
    "SourceDocument",
    "Action",
    "Selector",
    "Namespace",
    "LoadError",
    "LoadWarning",
    "RegistryStats",
    "RegistrySnapshot",
    "frozen_mapping",
    "full_name",
]
