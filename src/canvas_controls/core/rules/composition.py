"""Composition of rule fragments into one rules map."""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from canvas_controls.core.exceptions import ControlConfigurationError

from .models import EXCLUDE, AvailabilityRule, AvailabilityRulesMap, RuleEntry


def _check_entry(control_id: str, entry: object) -> None:
    if entry != EXCLUDE and not isinstance(entry, AvailabilityRule):
        raise ControlConfigurationError(
            f"Rule for '{control_id}' must be an AvailabilityRule or \"exclude\"",
            context={"control_id": control_id, "type": type(entry).__name__},
        )


def merge_rules(*fragments: Optional[Mapping[str, RuleEntry]]) -> AvailabilityRulesMap:
    """Merge rule fragments left to right.

    A later fragment's entry for a control id replaces the earlier entry
    as a whole; rule objects are never merged field by field.

    Example:
        >>> merged = merge_rules(IMAGE_RULES, {"chooseImage": EXCLUDE})
        >>> merged["chooseImage"]
        'exclude'
    """
    merged: Dict[str, RuleEntry] = {}
    for fragment in fragments:
        for control_id, entry in (fragment or {}).items():
            _check_entry(control_id, entry)
            merged[control_id] = entry
    return MappingProxyType(merged)


__all__ = ["merge_rules"]
