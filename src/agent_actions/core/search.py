"""Relevance-scored free-text search over actions.

Each enabled field contributes at most once to an action's score:

- name: exact match > substring of the name > substring of the full name
- description: substring
- parameters: substring of any parameter name or description

Only the relative order of the weights is meaningful; the numbers are
tuning knobs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .models import Action

EXACT_NAME_WEIGHT = 20
NAME_WEIGHT = 10
FULL_NAME_WEIGHT = 8
DESCRIPTION_WEIGHT = 5
PARAMETER_WEIGHT = 2


@dataclass(frozen=True)
class SearchOptions:
    search_names: bool = True
    search_descriptions: bool = True
    search_params: bool = True
    namespace: Optional[str] = None
    case_sensitive: bool = False
    limit: Optional[int] = None


@dataclass(frozen=True)
class SearchResult:
    action: Action
    score: int
    matches: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "fullName": self.action.full_name,
            "namespace": self.action.namespace,
            "name": self.action.name,
            "description": self.action.description,
            "deprecated": self.action.deprecated,
            "score": self.score,
            "matches": list(self.matches),
        }


def score_action(action: Action, term: str, options: SearchOptions) -> Tuple[int, List[str]]:
    """Return ``(score, matches)`` for one action against a normalised term."""

    def norm(text: Optional[str]) -> str:
        text = text or ""
        return text if options.case_sensitive else text.lower()

    score = 0
    matches: List[str] = []

    if options.search_names:
        name = norm(action.name)
        if name == term:
            score += EXACT_NAME_WEIGHT
            matches.append(f"name: {action.name}")
        elif term in name:
            score += NAME_WEIGHT
            matches.append(f"name: {action.name}")
        elif term in norm(action.full_name):
            score += FULL_NAME_WEIGHT
            matches.append(f"fullName: {action.full_name}")

    if options.search_descriptions and term in norm(action.description):
        score += DESCRIPTION_WEIGHT
        matches.append(f"description: {action.description}")

    if options.search_params:
        param_hits = []
        for param in action.parameters:
            if term in norm(param.name):
                param_hits.append(f"param: {param.name}")
            elif term in norm(param.description):
                param_hits.append(f"param.description: {param.name}")
        if param_hits:
            score += PARAMETER_WEIGHT
            matches.extend(param_hits)

    return score, matches


def search(actions: Iterable[Action], query: str, options: Optional[SearchOptions] = None) -> List[SearchResult]:
    """Score ``actions`` against ``query`` and return ranked results.

    An empty (or whitespace-only) query matches nothing. Results are sorted
    by descending score, then ``full_name`` ascending, then truncated to
    ``options.limit`` when set.
    """
    opts = options or SearchOptions()
    # Whitespace-only queries count as empty.
    if not query or not query.strip():
        return []

    term = query if opts.case_sensitive else query.lower()

    results: List[SearchResult] = []
    for action in actions:
        if opts.namespace is not None and action.namespace != opts.namespace:
            continue
        score, matches = score_action(action, term, opts)
        if score > 0:
            results.append(SearchResult(action=action, score=score, matches=tuple(matches)))

    results.sort(key=lambda r: (-r.score, r.action.full_name))

    if opts.limit is not None:
        results = results[: max(opts.limit, 0)]
    return results


__all__ = [
    "EXACT_NAME_WEIGHT",
    "NAME_WEIGHT",
    "FULL_NAME_WEIGHT",
    "DESCRIPTION_WEIGHT",
    "PARAMETER_WEIGHT",
    "SearchOptions",
    "SearchResult",
    "score_action",
    "search",
]
