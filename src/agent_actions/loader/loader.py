"""Action definition loader.

Resolves the source tiers, discovers YAML files, parses each file into a
:class:`SourceDocument` and hands back the documents in rank order together
with every per-file error. One bad file never aborts the load.
"""
from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from agent_actions.core.models import LoadError, LoadWarning, SourceDocument
from agent_actions.exceptions import NoSourcesError, SourceError
from agent_actions.stdlib_logging import debug_logging

from .config import LoaderConfig
from .documents import parse_document
from .paths import discover_files, get_action_paths

logger = logging.getLogger(__name__)

_ParseOutcome = Union[SourceDocument, LoadError]


@dataclass
class LoadResult:
    """Documents (ascending rank) plus everything that went wrong on the way."""

    documents: List[SourceDocument] = field(default_factory=list)
    errors: List[LoadError] = field(default_factory=list)
    warnings: List[LoadWarning] = field(default_factory=list)
    paths: List[Path] = field(default_factory=list)
    files: List[Path] = field(default_factory=list)


def _parse(path: Path, rank: int) -> _ParseOutcome:
    try:
        return parse_document(path, rank)
    except SourceError as exc:
        logger.warning("Failed to load %s: %s", path, exc)
        return LoadError.from_exception(exc)


def _parse_all(files: Sequence[Path], max_workers: int) -> List[_ParseOutcome]:
    """Parse ``files`` and return outcomes in the same order as ``files``."""
    if max_workers <= 1 or len(files) <= 1:
        return [_parse(path, rank) for rank, path in enumerate(files)]

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        # map() yields in submission order, which restores rank order.
        return list(executor.map(_parse, files, range(len(files))))


def _collect_warnings(documents: Sequence[SourceDocument]) -> List[LoadWarning]:
    warnings: List[LoadWarning] = []
    first_seen: Dict[str, str] = {}
    for doc in documents:
        previous = first_seen.get(doc.namespace)
        if previous is not None:
            warnings.append(
                LoadWarning(
                    kind="override",
                    path=doc.source_path,
                    message=(
                        f"Namespace '{doc.namespace}' was already loaded from '{previous}', "
                        "merging this file on top"
                    ),
                )
            )
        first_seen[doc.namespace] = doc.source_path

        for action in doc.actions.values():
            if action.deprecated:
                suffix = f": {action.deprecated_message}" if action.deprecated_message else ""
                warnings.append(
                    LoadWarning(
                        kind="deprecated_action",
                        path=doc.source_path,
                        message=f"Action '{doc.namespace}:{action.name}' is deprecated{suffix}",
                    )
                )
    return warnings


def load_documents(config: Optional[LoaderConfig] = None) -> LoadResult:
    """Load every namespace document reachable from ``config``.

    When no search path can be resolved at all, the result carries a single
    fatal error and no documents.
    """
    cfg = config or LoaderConfig()
    result = LoadResult()

    with debug_logging(cfg.debug):
        result.paths = get_action_paths(cfg)
        logger.debug("Scanning paths: %s", [str(p) for p in result.paths])

        if not result.paths:
            exc = NoSourcesError("No action sources configured and no built-in directory available")
            logger.error("%s", exc)
            result.errors.append(LoadError.from_exception(exc))
            return result

        result.files = discover_files(result.paths)
        logger.debug("Found %d YAML files", len(result.files))

        for outcome in _parse_all(result.files, cfg.max_workers):
            if isinstance(outcome, LoadError):
                result.errors.append(outcome)
            else:
                logger.debug("Loaded namespace '%s' from %s", outcome.namespace, outcome.source_path)
                result.documents.append(outcome)

        result.warnings = _collect_warnings(result.documents)
        logger.debug(
            "Loaded %d documents with %d errors and %d warnings",
            len(result.documents),
            len(result.errors),
            len(result.warnings),
        )
    return result


def load_action_file(path: Path, rank: int = 0) -> _ParseOutcome:
    """Load a single namespace file; errors are returned, not raised."""
    return _parse(Path(path), rank)


__all__ = ["LoadResult", "load_documents", "load_action_file"]
