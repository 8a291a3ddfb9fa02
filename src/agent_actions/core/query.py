"""Read-only query layer over one registry snapshot."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .models import Action, Namespace, RegistrySnapshot, RegistryStats, Selector
from .search import SearchOptions, SearchResult, search


class RegistryQuery:
    """Side-effect-free accessors bound to a single :class:`RegistrySnapshot`.

    Every method answers from the same snapshot, so a caller holding a
    ``RegistryQuery`` sees one consistent catalog even while the owning
    registry reloads.
    """

    def __init__(self, snapshot: RegistrySnapshot) -> None:
        self.snapshot = snapshot

    # -- namespaces -------------------------------------------------------

    def get_namespaces(self) -> List[Namespace]:
        return list(self.snapshot.namespaces.values())

    def get_namespace(self, name: str) -> Optional[Namespace]:
        return self.snapshot.namespaces.get(name)

    def has_namespace(self, name: str) -> bool:
        return name in self.snapshot.namespaces

    # -- actions ----------------------------------------------------------

    def get_all_actions(self) -> List[Action]:
        return list(self.snapshot.index.values())

    def get_actions_by_namespace(self, name: str) -> List[Action]:
        return [a for a in self.snapshot.index.values() if a.namespace == name]

    def get_action(self, full_name: str) -> Optional[Action]:
        return self.snapshot.index.get(full_name)

    def has_action(self, full_name: str) -> bool:
        return full_name in self.snapshot.index

    # -- selectors --------------------------------------------------------

    def get_selectors(self, namespace: str) -> Mapping[str, Selector]:
        return self.snapshot.selector_tables.get(namespace, {})

    def get_selector(self, namespace: str, name: str) -> Optional[Selector]:
        return self.get_selectors(namespace).get(name)

    # -- search / diagnostics ---------------------------------------------

    def search(self, query: str, options: Optional[SearchOptions] = None) -> List[SearchResult]:
        return search(self.get_all_actions(), query, options)

    def get_stats(self) -> RegistryStats:
        return self.snapshot.stats

    def get_debug_info(self) -> Dict[str, Any]:
        """Structural dump with provenance. Diagnostics only; shape may change."""
        namespaces = [
            {
                "name": ns.name,
                "version": ns.version,
                "description": ns.description,
                "actionCount": len(ns.actions),
                "selectorCount": len(ns.selectors),
                "sourcePath": ns.source_path,
                "sourcePaths": list(ns.source_paths),
                "selectors": {name: sel.to_dict() for name, sel in ns.selectors.items()},
            }
            for ns in self.snapshot.namespaces.values()
        ]
        actions = [
            {
                "fullName": action.full_name,
                "namespace": action.namespace,
                "sourcePath": action.source_path,
                "deprecated": action.deprecated,
            }
            for action in self.snapshot.index.values()
        ]
        return {
            "namespaces": namespaces,
            "actions": actions,
            "errors": [e.to_dict() for e in self.snapshot.errors],
            "warnings": [w.to_dict() for w in self.snapshot.warnings],
            "stats": self.snapshot.stats.to_dict(),
        }

    def get_raw_registry(self) -> Mapping[str, Namespace]:
        return self.snapshot.namespaces


__all__ = ["RegistryQuery"]
