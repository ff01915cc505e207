"""Menu resolution and the row availability cascade.

Sections are resolved in definition order. A parent row that is disabled
disables every row beneath it, whatever the child's own rule says; help
rows are only ever shown or hidden.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional

from canvas_controls.core.controls.models import (
    CommandControl,
    CommandRow,
    ControlRuntime,
    HelpRow,
    MenuRow,
    NullRuntime,
    PanelControl,
    Shortcut,
)
from canvas_controls.core.controls.registry import ControlRegistry
from canvas_controls.core.exceptions import ControlConfigurationError
from canvas_controls.core.rules.models import Surface
from canvas_controls.core.utils import span

from .effective import evaluate_availability, get_effective_rule
from .models import ResolvedControl

if TYPE_CHECKING:
    from canvas_controls.core.context.models import ControlContext
    from canvas_controls.core.definitions.models import ElementDefinition

logger = logging.getLogger(__name__)


def _help_row_visible(row: HelpRow, ctx: "ControlContext") -> bool:
    visible = row.availability.visible if row.availability is not None else None
    return evaluate_availability(visible, ctx, True, control_id=row.id, surface=Surface.MENU)


def apply_row_availability(row: MenuRow, ctx: "ControlContext", parent_enabled: bool) -> Optional[MenuRow]:
    """Apply the row's own availability and the inherited enabled state.

    Returns ``None`` when the row is hidden. A command row ends up disabled
    when it was built disabled, when its own ``enabled`` check fails, or
    when ``parent_enabled`` is False; children recurse with the row's
    combined state.
    """
    if isinstance(row, HelpRow):
        return row if _help_row_visible(row, ctx) else None

    availability = row.availability
    visible = availability.visible if availability is not None else None
    if not evaluate_availability(visible, ctx, True, control_id=row.id, surface=Surface.MENU):
        return None
    enabled = availability.enabled if availability is not None else None
    row_enabled = evaluate_availability(enabled, ctx, True, control_id=row.id, surface=Surface.MENU)

    children = []
    for child in row.sub_menu_items:
        resolved = apply_row_availability(child, ctx, parent_enabled and row_enabled)
        if resolved is not None:
            children.append(resolved)

    help_row = row.help_row
    if help_row is not None and not _help_row_visible(help_row, ctx):
        help_row = None

    return replace(
        row,
        disabled=row.disabled or not parent_enabled or not row_enabled,
        sub_menu_items=tuple(children),
        help_row=help_row,
    )


def default_menu_row(control: CommandControl) -> CommandRow:
    """Row built from the control's static metadata."""
    hints = control.menu
    shortcut = None
    if hints is not None and hints.shortcut_display:
        shortcut = Shortcut(f"{control.id}.defaultShortcut", hints.shortcut_display)
    return CommandRow(
        id=control.id,
        label=control.label,
        l10n_id=control.l10n_id,
        icon=control.icon_for(Surface.MENU),
        sub_label_l10n_id=hints.sub_label_l10n_id if hints is not None else None,
        shortcut=shortcut,
        feature_name=control.feature_name,
        help_row=control.help_row,
        on_select=control.action,
    )


def _build_row(control: CommandControl, ctx: "ControlContext", runtime: ControlRuntime) -> CommandRow:
    if control.menu is None or control.menu.build_menu_item is None:
        return default_menu_row(control)
    row = control.menu.build_menu_item(ctx, runtime)
    # Custom rows inherit what they leave out from the control.
    return replace(
        row,
        icon=row.icon if row.icon is not None else control.icon_for(Surface.MENU),
        feature_name=row.feature_name if row.feature_name is not None else control.feature_name,
        help_row=row.help_row if row.help_row is not None else control.help_row,
    )


def resolve_menu(
    definition: "ElementDefinition",
    ctx: "ControlContext",
    registry: ControlRegistry,
    runtime: Optional[ControlRuntime] = None,
) -> List[List[ResolvedControl]]:
    """Resolve the definition's menu sections for ``ctx``.

    Panel controls listed in a menu section are skipped. Sections with no
    visible rows are left out of the result.
    """
    runtime = runtime or NullRuntime()
    sections: List[List[ResolvedControl]] = []
    with span("resolve.menu", element_type=definition.type.value):
        for section_id in definition.menu_sections:
            section = registry.get_section(section_id)
            resolved: List[ResolvedControl] = []
            for control_id in section.controls_for(Surface.MENU):
                control = registry.get(control_id)
                if isinstance(control, PanelControl):
                    continue
                if not isinstance(control, CommandControl):
                    raise ControlConfigurationError(
                        f"Unsupported control kind for '{control_id}'", context={"control_id": control_id}
                    )

                rule = get_effective_rule(definition, control_id, Surface.MENU)
                if not evaluate_availability(rule.visible, ctx, True, control_id=control_id, surface=Surface.MENU):
                    continue
                enabled = evaluate_availability(
                    rule.enabled, ctx, True, control_id=control_id, surface=Surface.MENU
                )

                row = apply_row_availability(_build_row(control, ctx, runtime), ctx, enabled)
                if row is None:
                    continue
                resolved.append(ResolvedControl(control, row.enabled, row))

            if resolved:
                sections.append(resolved)
            else:
                logger.debug("Menu section %s has no visible rows for %s", section_id, definition.type.value)
    return sections


__all__ = ["apply_row_availability", "default_menu_row", "resolve_menu"]
