from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from canvas_controls.core.context.models import ElementType
from canvas_controls.core.rules.composition import merge_rules
from canvas_controls.core.rules.models import AvailabilityRulesMap

# Toolbar layout marker between control groups.
SPACER = "spacer"


@dataclass(frozen=True)
class ElementDefinition:
    """Per-type layout of the three surfaces plus the type's rule map.

    ``toolbar`` lists control ids and ``SPACER`` markers in display order;
    ``menu_sections`` and ``tool_panel`` list section ids.
    """

    type: ElementType
    toolbar: Tuple[str, ...] = ()
    menu_sections: Tuple[str, ...] = ()
    tool_panel: Tuple[str, ...] = ()
    availability_rules: AvailabilityRulesMap = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", ElementType(self.type))
        object.__setattr__(self, "toolbar", tuple(self.toolbar))
        object.__setattr__(self, "menu_sections", tuple(self.menu_sections))
        object.__setattr__(self, "tool_panel", tuple(self.tool_panel))
        # Re-wrap (and check) so callers cannot mutate the rules afterwards.
        object.__setattr__(self, "availability_rules", merge_rules(self.availability_rules))

    def toolbar_control_ids(self) -> Tuple[str, ...]:
        return tuple(entry for entry in self.toolbar if entry != SPACER)


__all__ = ["SPACER", "ElementDefinition"]
