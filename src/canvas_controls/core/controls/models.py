"""Control definitions and menu rows.

A control is either a *command* (has an async action) or a *panel* (has a
renderer over the shared panel state). The ``kind`` tag is closed: the
resolvers handle exactly these two.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Awaitable,
    Callable,
    ClassVar,
    Literal,
    Optional,
    Protocol,
    Tuple,
    Union,
)

from canvas_controls.core.exceptions import ControlConfigurationError
from canvas_controls.core.rules.models import Availability, Surface

if TYPE_CHECKING:
    from canvas_controls.core.context.models import ControlContext

    from .panels import CanvasToolsPanelState, PanelView


class ControlRuntime(Protocol):
    """Capability handed to actions and row builders by the rendering layer."""

    def close_menu(self, launching_dialog: bool = False) -> None:
        """Close the menu; ``launching_dialog`` keeps focus handling for a modal."""
        ...


class NullRuntime:
    """Runtime that ignores ``close_menu`` (no menu is open)."""

    def close_menu(self, launching_dialog: bool = False) -> None:
        return None


Action = Callable[["ControlContext", ControlRuntime], Awaitable[None]]
PanelRenderer = Callable[["ControlContext", "CanvasToolsPanelState"], "PanelView"]


@dataclass(frozen=True)
class Shortcut:
    id: str
    display: str


@dataclass(frozen=True)
class RowAvailability:
    visible: Optional[Availability] = None
    enabled: Optional[Availability] = None


@dataclass(frozen=True)
class HelpRow:
    """Static informational text shown in a menu. Has no action or children."""

    id: str
    text: str
    l10n_id: Optional[str] = None
    separator_above: bool = False
    availability: Optional[RowAvailability] = None

    kind: ClassVar[Literal["help"]] = "help"


@dataclass(frozen=True)
class CommandRow:
    """A clickable menu row, optionally with a help row and a submenu."""

    id: str
    label: str
    l10n_id: Optional[str] = None
    icon: Optional[str] = None
    sub_label_l10n_id: Optional[str] = None
    shortcut: Optional[Shortcut] = None
    availability: Optional[RowAvailability] = None
    disabled: bool = False
    checked: Optional[bool] = None
    feature_name: Optional[str] = None
    help_row: Optional[HelpRow] = None
    sub_menu_items: Tuple["MenuRow", ...] = ()
    on_select: Optional[Action] = field(default=None, compare=False)

    kind: ClassVar[Literal["command"]] = "command"

    def __post_init__(self) -> None:
        object.__setattr__(self, "sub_menu_items", tuple(self.sub_menu_items))

    @property
    def enabled(self) -> bool:
        return not self.disabled

    async def select(self, ctx: "ControlContext", runtime: ControlRuntime) -> None:
        """Run the row's action, unless the row is disabled."""
        if self.disabled or self.on_select is None:
            return
        await self.on_select(ctx, runtime)


MenuRow = Union[CommandRow, HelpRow]


def menu_depth(row: MenuRow) -> int:
    """Depth of a row tree; a row with no children has depth 1."""
    if isinstance(row, HelpRow):
        return 1
    return 1 + max((menu_depth(child) for child in row.sub_menu_items), default=0)


@dataclass(frozen=True)
class ToolbarHints:
    icon: Optional[str] = None
    relative_size: Optional[float] = None


@dataclass(frozen=True)
class MenuHints:
    icon: Optional[str] = None
    sub_label_l10n_id: Optional[str] = None
    shortcut_display: Optional[str] = None
    # Builds the row from live context (checkmarks, dynamic submenus).
    build_menu_item: Optional[Callable[["ControlContext", ControlRuntime], CommandRow]] = field(
        default=None, compare=False
    )


@dataclass(frozen=True)
class CommandControl:
    id: str
    label: str
    action: Action = field(compare=False)
    l10n_id: Optional[str] = None
    icon: Optional[str] = None
    feature_name: Optional[str] = None
    help_row: Optional[HelpRow] = None
    toolbar: Optional[ToolbarHints] = None
    menu: Optional[MenuHints] = None

    kind: ClassVar[Literal["command"]] = "command"

    def __post_init__(self) -> None:
        if not callable(self.action):
            raise ControlConfigurationError(
                f"Command '{self.id}' action must be callable", context={"control_id": self.id}
            )

    def icon_for(self, surface: Surface) -> Optional[str]:
        """Icon for ``surface``; toolbar and menu hints may override the base icon."""
        if surface is Surface.MENU and self.menu is not None and self.menu.icon:
            return self.menu.icon
        if surface is Surface.TOOLBAR and self.toolbar is not None and self.toolbar.icon:
            return self.toolbar.icon
        return self.icon


@dataclass(frozen=True)
class PanelControl:
    id: str
    label: str
    renderer: PanelRenderer = field(compare=False)
    l10n_id: Optional[str] = None
    icon: Optional[str] = None

    kind: ClassVar[Literal["panel"]] = "panel"

    def __post_init__(self) -> None:
        if not callable(self.renderer):
            raise ControlConfigurationError(
                f"Panel '{self.id}' renderer must be callable", context={"control_id": self.id}
            )

    def render(self, ctx: "ControlContext", state: "CanvasToolsPanelState") -> "PanelView":
        return self.renderer(ctx, state)


ControlDefinition = Union[CommandControl, PanelControl]


__all__ = [
    "ControlRuntime",
    "NullRuntime",
    "Action",
    "PanelRenderer",
    "Shortcut",
    "RowAvailability",
    "HelpRow",
    "CommandRow",
    "MenuRow",
    "menu_depth",
    "ToolbarHints",
    "MenuHints",
    "CommandControl",
    "PanelControl",
    "ControlDefinition",
]
