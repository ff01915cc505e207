from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, TypeVar

from canvas_controls.core.controls.models import CommandControl, CommandRow, ControlRuntime
from canvas_controls.core.controls.registry import ControlRegistry
from canvas_controls.core.definitions.models import SPACER
from canvas_controls.core.exceptions import ControlConfigurationError
from canvas_controls.core.rules.models import Surface
from canvas_controls.core.utils import span

from .effective import evaluate_availability, get_effective_rule
from .models import TOOLBAR_SPACER, ResolvedControl, ToolbarItem, is_spacer

if TYPE_CHECKING:
    from canvas_controls.core.context.models import ControlContext
    from canvas_controls.core.definitions.models import ElementDefinition

logger = logging.getLogger(__name__)

T = TypeVar("T")


def normalize_toolbar(items: Iterable[T]) -> List[T]:
    """Collapse spacer runs and drop leading and trailing spacers.

    Idempotent: normalizing an already normalized list returns it unchanged.
    """
    normalized: List[T] = []
    for item in items:
        if is_spacer(item) and (not normalized or is_spacer(normalized[-1])):
            continue
        normalized.append(item)
    while normalized and is_spacer(normalized[-1]):
        normalized.pop()
    return normalized


def _toolbar_row(control: CommandControl, enabled: bool) -> CommandRow:
    # Lets a toolbar item be reused as a row if it moves to an overflow menu.
    return CommandRow(
        id=control.id,
        label=control.label,
        l10n_id=control.l10n_id,
        icon=control.icon_for(Surface.TOOLBAR),
        disabled=not enabled,
        feature_name=control.feature_name,
        on_select=control.action,
    )


def resolve_toolbar(
    definition: "ElementDefinition",
    ctx: "ControlContext",
    registry: ControlRegistry,
    runtime: Optional[ControlRuntime] = None,
) -> List[ToolbarItem]:
    """Resolve the definition's toolbar layout for ``ctx``.

    Invisible controls are dropped rather than disabled; spacers left
    dangling by dropped controls are removed by ``normalize_toolbar``.
    ``runtime`` is accepted for symmetry with the menu resolver; toolbar
    rows receive their runtime when selected.
    """
    items: List[ToolbarItem] = []
    with span("resolve.toolbar", element_type=definition.type.value):
        for entry in definition.toolbar:
            if entry == SPACER:
                items.append(TOOLBAR_SPACER)
                continue

            control = registry.get(entry)
            if not isinstance(control, CommandControl):
                raise ControlConfigurationError(
                    f"Toolbar entry '{entry}' is not a command",
                    context={"control_id": entry, "element_type": definition.type.value},
                )
            rule = get_effective_rule(definition, entry, Surface.TOOLBAR)
            if not evaluate_availability(rule.visible, ctx, True, control_id=entry, surface=Surface.TOOLBAR):
                continue
            enabled = evaluate_availability(rule.enabled, ctx, True, control_id=entry, surface=Surface.TOOLBAR)

            items.append(ResolvedControl(control, enabled, _toolbar_row(control, enabled)))

    resolved = normalize_toolbar(items)
    logger.debug("Toolbar for %s: %s", definition.type.value, [item.id for item in resolved])
    return resolved


__all__ = ["normalize_toolbar", "resolve_toolbar"]
