"""Catalog core: models, merge engine, index builder, query and search.

The registry store lives in :mod:`agent_actions.core.store`; it depends on the
loader and is not imported here.
"""
from __future__ import annotations

from .index import IndexBuild, build
from .merge import merge
from .models import (
    Action,
    ActionDef,
    LoadError,
    LoadWarning,
    Namespace,
    ParameterDef,
    RegistrySnapshot,
    RegistryStats,
    Selector,
    SelectorDef,
    SourceDocument,
    full_name,
)
from .query import RegistryQuery
from .search import SearchOptions, SearchResult, search

__all__ = [
    "Action",
    "ActionDef",
    "IndexBuild",
    "LoadError",
    "LoadWarning",
    "Namespace",
    "ParameterDef",
    "RegistryQuery",
    "RegistrySnapshot",
    "RegistryStats",
    "SearchOptions",
    "SearchResult",
    "Selector",
    "SelectorDef",
    "SourceDocument",
    "build",
    "full_name",
    "merge",
    "search",
]
