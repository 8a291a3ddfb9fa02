"""Shared helpers (YAML I/O, dictionary merging)."""
from __future__ import annotations

from .io import iter_yaml_files, read_yaml
from .merge import deep_merge, merge_arrays

__all__ = ["deep_merge", "merge_arrays", "iter_yaml_files", "read_yaml"]
