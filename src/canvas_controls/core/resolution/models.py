from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, List, Literal, Optional, Union

from canvas_controls.core.controls.models import CommandRow, ControlDefinition, PanelRenderer

if TYPE_CHECKING:
    from canvas_controls.core.context.models import ControlContext
    from canvas_controls.core.controls.panels import CanvasToolsPanelState, PanelView


@dataclass(frozen=True)
class ResolvedControl:
    """A control paired with its computed ``enabled`` flag.

    Command controls also carry a ready-to-render ``menu_row``.
    """

    control: ControlDefinition
    enabled: bool
    menu_row: Optional[CommandRow] = None

    @property
    def id(self) -> str:
        return self.control.id


@dataclass(frozen=True)
class ToolbarSpacer:
    """Visual gap between toolbar groups. All spacers compare equal."""

    id: ClassVar[Literal["spacer"]] = "spacer"


TOOLBAR_SPACER = ToolbarSpacer()

ToolbarItem = Union[ResolvedControl, ToolbarSpacer]


@dataclass(frozen=True)
class ResolvedPanel:
    control_id: str
    renderer: PanelRenderer = field(compare=False)
    ctx: Optional["ControlContext"] = field(default=None, compare=False, repr=False)

    def render(self, state: "CanvasToolsPanelState") -> "PanelView":
        return self.renderer(self.ctx, state)


@dataclass(frozen=True)
class ResolvedSurfaces:
    toolbar: List[ToolbarItem]
    menu: List[List[ResolvedControl]]
    panel: List[ResolvedPanel]


def is_spacer(item: object) -> bool:
    return isinstance(item, ToolbarSpacer)


__all__ = [
    "ResolvedControl",
    "ToolbarSpacer",
    "TOOLBAR_SPACER",
    "ToolbarItem",
    "ResolvedPanel",
    "ResolvedSurfaces",
    "is_spacer",
]
