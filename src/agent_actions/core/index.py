"""Index builder: merged namespaces -> flat lookup tables.

The index is always rebuilt from the complete namespace set so it can never
drift from the merge result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from agent_actions.exceptions import IndexIntegrityError

from .models import Action, LoadError, Namespace, Selector

logger = logging.getLogger(__name__)


@dataclass
class IndexBuild:
    index: Dict[str, Action] = field(default_factory=dict)
    selector_tables: Dict[str, Dict[str, Selector]] = field(default_factory=dict)
    errors: List[LoadError] = field(default_factory=list)


def build(namespaces: Mapping[str, Namespace]) -> IndexBuild:
    """Build the ``full_name -> Action`` index and per-namespace selector tables.

    Actions whose namespace name is blank, or whose ``full_name`` is already
    taken by a different action in this pass, are left out and reported as
    index errors.
    """
    result = IndexBuild()

    for ns_name, namespace in namespaces.items():
        if not str(ns_name).strip():
            for action in namespace.actions.values():
                _reject(
                    result,
                    IndexIntegrityError(
                        f"Action '{action.name}' has an empty namespace",
                        full_name=action.full_name,
                        path=action.source_path,
                    ),
                )
            continue

        result.selector_tables[ns_name] = dict(namespace.selectors)

        for action in namespace.actions.values():
            existing = result.index.get(action.full_name)
            if existing is not None and existing is not action:
                _reject(
                    result,
                    IndexIntegrityError(
                        f"Duplicate action name '{action.full_name}' "
                        f"(already indexed from '{existing.source_path}')",
                        full_name=action.full_name,
                        path=action.source_path,
                    ),
                )
                continue
            result.index[action.full_name] = action

    logger.debug(
        "Indexed %d actions across %d namespaces (%d rejected)",
        len(result.index),
        len(result.selector_tables),
        len(result.errors),
    )
    return result


def _reject(result: IndexBuild, exc: IndexIntegrityError) -> None:
    logger.warning("%s", exc)
    result.errors.append(LoadError.from_exception(exc))


__all__ = ["IndexBuild", "build"]
