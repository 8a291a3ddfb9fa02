"""Source discovery and parsing for action definition files."""
from __future__ import annotations

from .config import LoaderConfig
from .documents import parse_document, to_source_document, validate_document
from .loader import LoadResult, load_action_file, load_documents
from .paths import (
    ACTIONS_PATH_ENV,
    discover_files,
    expand_tilde,
    get_action_paths,
    get_source_paths,
)

__all__ = [
    "ACTIONS_PATH_ENV",
    "LoaderConfig",
    "LoadResult",
    "discover_files",
    "expand_tilde",
    "get_action_paths",
    "get_source_paths",
    "load_action_file",
    "load_documents",
    "parse_document",
    "to_source_document",
    "validate_document",
]
