from __future__ import annotations

from typing import TYPE_CHECKING, List

from canvas_controls.core.controls.models import CommandControl, PanelControl
from canvas_controls.core.controls.registry import ControlRegistry
from canvas_controls.core.exceptions import ControlConfigurationError
from canvas_controls.core.rules.models import Surface
from canvas_controls.core.utils import span

from .effective import evaluate_availability, get_effective_rule
from .models import ResolvedPanel

if TYPE_CHECKING:
    from canvas_controls.core.context.models import ControlContext
    from canvas_controls.core.definitions.models import ElementDefinition


def resolve_panel(
    definition: "ElementDefinition",
    ctx: "ControlContext",
    registry: ControlRegistry,
) -> List[ResolvedPanel]:
    """Panels to render for ``ctx``, in section order.

    Panels have no enabled state here; field-level enabling belongs to
    each renderer. Command ids in a panel section are ignored.
    """
    panels: List[ResolvedPanel] = []
    with span("resolve.panel", element_type=definition.type.value):
        for section_id in definition.tool_panel:
            section = registry.get_section(section_id)
            for control_id in section.controls_for(Surface.TOOL_PANEL):
                control = registry.get(control_id)
                if isinstance(control, CommandControl):
                    continue
                if not isinstance(control, PanelControl):
                    raise ControlConfigurationError(
                        f"Unsupported control kind for '{control_id}'", context={"control_id": control_id}
                    )
                rule = get_effective_rule(definition, control_id, Surface.TOOL_PANEL)
                if evaluate_availability(rule.visible, ctx, True, control_id=control_id, surface=Surface.TOOL_PANEL):
                    panels.append(ResolvedPanel(control_id, control.renderer, ctx))
    return panels


__all__ = ["resolve_panel"]
