"""Merge engine: ordered source documents -> merged namespaces.

Merge rules:
- Documents are applied in the order given (callers establish rank order;
  nothing is re-sorted here).
- A namespace exists as soon as any document names it, even when the
  document defines no actions.
- Same action key: the later document replaces the whole record (no
  field-level overlay), including its source path.
- Same selector key: same last-wins rule.
- Namespace version/description: latest non-empty value wins.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .models import Action, Namespace, Selector, SourceDocument


@dataclass
class _NamespaceBuilder:
    name: str
    actions: Dict[str, Action] = field(default_factory=dict)
    selectors: Dict[str, Selector] = field(default_factory=dict)
    version: Optional[str] = None
    description: Optional[str] = None
    source_paths: List[str] = field(default_factory=list)

    def apply(self, document: SourceDocument) -> None:
        for key, definition in document.actions.items():
            self.actions[key] = Action.from_definition(self.name, key, definition, document.source_path)
        for key, definition in document.selectors.items():
            self.selectors[key] = Selector.from_definition(self.name, key, definition, document.source_path)
        if document.version:
            self.version = document.version
        if document.description:
            self.description = document.description
        self.source_paths.append(document.source_path)

    def build(self) -> Namespace:
        return Namespace(
            name=self.name,
            actions=self.actions,
            selectors=self.selectors,
            version=self.version,
            description=self.description,
            source_path=self.source_paths[-1] if self.source_paths else "",
            source_paths=tuple(self.source_paths),
        )


def merge(documents: Iterable[SourceDocument]) -> Dict[str, Namespace]:
    """Merge ``documents`` (ascending rank order) into namespaces.

    Total over well-formed input; returns namespaces in order of first
    appearance.

    Example:
        >>> a = SourceDocument("common", {"login": ActionDef("login", "Default")}, rank=1)
        >>> b = SourceDocument("common", {"login": ActionDef("login", "Custom")}, rank=2)
        >>> merge([a, b])["common"].actions["login"].description
        'Custom'
    """
    builders: Dict[str, _NamespaceBuilder] = {}
    for document in documents:
        builder = builders.get(document.namespace)
        if builder is None:
            builder = builders[document.namespace] = _NamespaceBuilder(document.namespace)
        builder.apply(document)
    return {name: builder.build() for name, builder in builders.items()}


__all__ = ["merge"]
