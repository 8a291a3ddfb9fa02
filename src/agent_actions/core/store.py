"""Registry store: owns the current snapshot and orchestrates reloads.

Lifecycle: construct → ``load()`` → (queries | ``reload()``)* → discard.

A reload builds a complete new :class:`RegistrySnapshot` (load → merge →
index) without touching the published one, then publishes it with a single
reference assignment. Readers therefore see either the old or the new
catalog, never a mix. Reloads are serialised by a lock; a failed reload
leaves the previous snapshot in place.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from agent_actions.exceptions import ReloadInProgressError
from agent_actions.loader import LoaderConfig, LoadResult, load_documents

from . import index as index_builder
from .merge import merge
from .models import (
    Action,
    LoadError,
    LoadWarning,
    Namespace,
    RegistrySnapshot,
    RegistryStats,
    Selector,
    SourceDocument,
)
from .query import RegistryQuery
from .search import SearchOptions, SearchResult

logger = logging.getLogger(__name__)

Loader = Callable[[LoaderConfig], LoadResult]


@dataclass(frozen=True)
class ReloadResult:
    errors: Tuple[LoadError, ...]
    warnings: Tuple[LoadWarning, ...]
    stats: RegistryStats

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            **self.stats.to_dict(),
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }


def build_snapshot(
    documents: Iterable[SourceDocument],
    *,
    errors: Iterable[LoadError] = (),
    warnings: Iterable[LoadWarning] = (),
) -> RegistrySnapshot:
    """Run merge + index over ``documents`` and freeze the result."""
    documents = tuple(documents)
    namespaces = merge(documents)
    built = index_builder.build(namespaces)
    return RegistrySnapshot(
        namespaces=namespaces,
        index=built.index,
        selector_tables=built.selector_tables,
        errors=(*errors, *built.errors),
        warnings=tuple(warnings),
        documents=documents,
    )


class ActionRegistry:
    """Holds exactly one current snapshot and swaps it wholesale on reload.

    Example:
        registry = ActionRegistry(LoaderConfig(paths=["./actions"]))
        result = registry.load()
        for err in result.errors:
            print(err.path, err.message)
        registry.search("login", SearchOptions(limit=5))
    """

    def __init__(self, config: Optional[LoaderConfig] = None, *, loader: Loader = load_documents) -> None:
        self.config = config or LoaderConfig()
        self._loader = loader
        self._snapshot = RegistrySnapshot.empty()
        self._reload_lock = threading.Lock()

    # -- lifecycle --------------------------------------------------------

    @property
    def snapshot(self) -> RegistrySnapshot:
        return self._snapshot

    def query(self) -> RegistryQuery:
        """Return a query view pinned to the current snapshot."""
        return RegistryQuery(self._snapshot)

    def load(self) -> ReloadResult:
        return self.reload()

    def reload(self, *, blocking: bool = True) -> ReloadResult:
        """Re-run the whole pipeline and publish the new snapshot.

        Args:
            blocking: Wait for a running reload to finish (``True``) or raise
                ``ReloadInProgressError`` immediately (``False``).
        """
        if not self._reload_lock.acquire(blocking=blocking):
            raise ReloadInProgressError(context={"paths": list(self.config.paths)})
        try:
            loaded = self._loader(self.config)
            snapshot = build_snapshot(loaded.documents, errors=loaded.errors, warnings=loaded.warnings)
            self._publish(snapshot)
        finally:
            self._reload_lock.release()
        return self._result(snapshot)

    def register_documents(self, documents: Iterable[SourceDocument]) -> ReloadResult:
        """Merge in-memory documents on top of the current catalog.

        The current snapshot's documents are replayed first, so the new
        documents win every key they define.
        """
        with self._reload_lock:
            current = self._snapshot
            snapshot = build_snapshot(
                (*current.documents, *documents),
                errors=[e for e in current.errors if e.kind != "index_error"],
                warnings=current.warnings,
            )
            self._publish(snapshot)
        return self._result(snapshot)

    def _publish(self, snapshot: RegistrySnapshot) -> None:
        self._snapshot = snapshot
        stats = snapshot.stats
        logger.debug(
            "Published snapshot: %d namespaces, %d actions, %d errors",
            stats.namespace_count,
            stats.action_count,
            len(snapshot.errors),
        )

    @staticmethod
    def _result(snapshot: RegistrySnapshot) -> ReloadResult:
        return ReloadResult(errors=snapshot.errors, warnings=snapshot.warnings, stats=snapshot.stats)

    # -- queries (each call reads one snapshot) ---------------------------

    def get_namespaces(self) -> List[Namespace]:
        return self.query().get_namespaces()

    def get_namespace(self, name: str) -> Optional[Namespace]:
        return self.query().get_namespace(name)

    def has_namespace(self, name: str) -> bool:
        return self.query().has_namespace(name)

    def get_all_actions(self) -> List[Action]:
        return self.query().get_all_actions()

    def get_actions_by_namespace(self, name: str) -> List[Action]:
        return self.query().get_actions_by_namespace(name)

    def get_action(self, full_name: str) -> Optional[Action]:
        return self.query().get_action(full_name)

    def has_action(self, full_name: str) -> bool:
        return self.query().has_action(full_name)

    def get_selectors(self, namespace: str) -> Mapping[str, Selector]:
        return self.query().get_selectors(namespace)

    def get_selector(self, namespace: str, name: str) -> Optional[Selector]:
        return self.query().get_selector(namespace, name)

    def search(self, query: str, options: Optional[SearchOptions] = None) -> List[SearchResult]:
        return self.query().search(query, options)

    def get_stats(self) -> RegistryStats:
        return self.query().get_stats()

    def get_debug_info(self) -> Dict[str, Any]:
        return self.query().get_debug_info()

    def get_raw_registry(self) -> Mapping[str, Namespace]:
        return self.query().get_raw_registry()

    @property
    def errors(self) -> Tuple[LoadError, ...]:
        return self._snapshot.errors


def create_registry(config: Optional[LoaderConfig] = None) -> ActionRegistry:
    return ActionRegistry(config)


def create_and_load_registry(config: Optional[LoaderConfig] = None) -> Tuple[ActionRegistry, ReloadResult]:
    registry = create_registry(config)
    return registry, registry.load()


__all__ = [
    "ActionRegistry",
    "ReloadResult",
    "build_snapshot",
    "create_registry",
    "create_and_load_registry",
]
