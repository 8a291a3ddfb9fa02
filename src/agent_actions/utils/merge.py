"""Dictionary merge helpers used for layered configuration.

- Nested mappings merge recursively.
- Lists concatenate with duplicates removed (first occurrence kept).
- Anything else: the override value wins.
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> deep_merge({"actions": {"paths": ["a"], "debug": False}},
        ...            {"actions": {"paths": ["b"], "debug": True}})
        {'actions': {'paths': ['a', 'b'], 'debug': True}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Concatenate ``base`` and ``override`` keeping the first occurrence of each item.

    Example:
        >>> merge_arrays(["a", "b"], ["b", "c"])
        ['a', 'b', 'c']
    """
    merged: List[Any] = []
    for item in [*base, *override]:
        if item not in merged:
            merged.append(item)
    return merged


__all__ = ["deep_merge", "merge_arrays"]
