"""Deep merge used for layering configuration files.

Rule maps are *not* merged here: availability rules use a shallow
last-writer-wins merge (see ``canvas_controls.core.rules.composition``).

Array semantics when both sides hold a list:
  - Default: replace array entirely
  - First element "+": append remaining override items to base
  - First element "=": explicit replace with remaining override items
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"context": {"a": 1}}, {"context": {"b": 2}})
        {'context': {'a': 1, 'b': 2}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = merge_arrays(current, value)
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge two lists honouring the "+" (append) and "=" (replace) markers.

    Example:
        >>> merge_arrays([1, 2], ["+", 3])
        [1, 2, 3]
    """
    if not override:
        return base
    first = override[0]
    if isinstance(first, str):
        if first.startswith("+"):
            return [*base, *override[1:]]
        if first == "=":
            return list(override[1:])
    return list(override)


__all__ = ["deep_merge", "merge_arrays"]
