"""Shared CLI helpers: project root, context loading and serialization."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from canvas_controls.core.config.domains import ContextConfig
from canvas_controls.core.context import ControlContext, build_context_for_selection, load_selection
from canvas_controls.core.controls.models import CommandRow, HelpRow, MenuRow
from canvas_controls.core.definitions.models import ElementDefinition
from canvas_controls.core.exceptions import CanvasControlsError
from canvas_controls.core.rules.models import EXCLUDE, AvailabilityRule
from canvas_controls.core.utils.paths import resolve_project_root
from canvas_controls.core.resolution import ResolvedControl, ResolvedPanel, ResolvedSurfaces, is_spacer

logger = logging.getLogger(__name__)


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get the project root from ``--repo-root`` or auto-detect it."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


class InertBackend:
    """Editor back-end for read-only commands.

    The CLI resolves surfaces but never runs actions, so any call here is
    a usage error.
    """

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)

        def _unavailable(*args: Any, **kwargs: Any) -> Any:
            raise CanvasControlsError(
                f"Editor operation '{name}' is not available from the command line",
                context={"operation": name},
            )

        return _unavailable


def load_context(args: argparse.Namespace) -> ControlContext:
    """Load the selection named on the command line and build its context."""
    repo_root = get_repo_root(args)
    selection = load_selection(Path(args.selection))
    logger.debug("Loaded selection %s (selected %s)", args.selection, selection.element.describe())
    return build_context_for_selection(selection, settings=ContextConfig(repo_root))


def row_to_dict(row: MenuRow) -> Dict[str, Any]:
    if isinstance(row, HelpRow):
        return {
            "kind": row.kind,
            "id": row.id,
            "text": row.text,
            "l10nId": row.l10n_id,
            "separatorAbove": row.separator_above,
        }
    data: Dict[str, Any] = {
        "kind": row.kind,
        "id": row.id,
        "label": row.label,
        "l10nId": row.l10n_id,
        "icon": row.icon,
        "disabled": row.disabled,
    }
    if row.checked is not None:
        data["checked"] = row.checked
    if row.shortcut is not None:
        data["shortcut"] = {"id": row.shortcut.id, "display": row.shortcut.display}
    if row.sub_label_l10n_id:
        data["subLabelL10nId"] = row.sub_label_l10n_id
    if row.feature_name:
        data["featureName"] = row.feature_name
    if row.help_row is not None:
        data["helpRow"] = row_to_dict(row.help_row)
    if row.sub_menu_items:
        data["subMenuItems"] = [row_to_dict(child) for child in row.sub_menu_items]
    return data


def _resolved_to_dict(item: ResolvedControl) -> Dict[str, Any]:
    return {"id": item.id, "kind": item.control.kind, "label": item.control.label, "enabled": item.enabled}


def surfaces_to_dict(surfaces: ResolvedSurfaces, surface: str = "all") -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if surface in ("all", "toolbar"):
        data["toolbar"] = [
            {"id": "spacer", "kind": "spacer"} if is_spacer(item) else _resolved_to_dict(item)
            for item in surfaces.toolbar
        ]
    if surface in ("all", "menu"):
        data["menu"] = [
            [{**_resolved_to_dict(item), "row": row_to_dict(item.menu_row)} for item in section]
            for section in surfaces.menu
        ]
    if surface in ("all", "panel"):
        data["panel"] = [_panel_to_dict(panel) for panel in surfaces.panel]
    return data


def _panel_to_dict(panel: ResolvedPanel) -> Dict[str, Any]:
    return {"controlId": panel.control_id}


def describe_rule(entry: object) -> str:
    """Short text form of a rule entry; predicates print as ``<predicate>``."""
    if entry == EXCLUDE:
        return EXCLUDE
    if not isinstance(entry, AvailabilityRule):
        return repr(entry)

    def _value(value: object) -> Optional[str]:
        if value is None:
            return None
        return str(value).lower() if isinstance(value, bool) else "<predicate>"

    parts: List[str] = []
    for name, value in (("visible", entry.visible), ("enabled", entry.enabled)):
        rendered = _value(value)
        if rendered is not None:
            parts.append(f"{name}={rendered}")
    for surface, rule in entry.surface_policy.items():
        inner = [
            f"{name}={_value(value)}"
            for name, value in (("visible", rule.visible), ("enabled", rule.enabled))
            if value is not None
        ]
        parts.append(f"{surface.value}[{', '.join(inner)}]")
    return ", ".join(parts) or "default"


def definition_to_dict(definition: ElementDefinition) -> Dict[str, Any]:
    return {
        "type": definition.type.value,
        "toolbar": list(definition.toolbar),
        "menuSections": list(definition.menu_sections),
        "toolPanel": list(definition.tool_panel),
        "rules": {cid: describe_rule(rule) for cid, rule in sorted(definition.availability_rules.items())},
    }


__all__ = [
    "get_repo_root",
    "InertBackend",
    "load_context",
    "row_to_dict",
    "surfaces_to_dict",
    "describe_rule",
    "definition_to_dict",
]
