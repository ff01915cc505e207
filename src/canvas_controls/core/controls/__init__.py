"""Control definitions, menu rows, panel renderers and the registry."""
from .backend import EditorBackend
from .models import (
    CommandControl,
    CommandRow,
    ControlDefinition,
    ControlRuntime,
    HelpRow,
    MenuHints,
    MenuRow,
    NullRuntime,
    PanelControl,
    RowAvailability,
    Shortcut,
    ToolbarHints,
    menu_depth,
)
from .panels import BubbleSpec, CanvasToolsPanelState, PanelField, PanelView
from .commands import build_command_controls
from .registry import (
    DEFAULT_SECTIONS,
    ControlRegistry,
    ControlSection,
    build_default_registry,
    build_panel_controls,
)

__all__ = [
    "EditorBackend",
    "CommandControl",
    "CommandRow",
    "ControlDefinition",
    "ControlRuntime",
    "HelpRow",
    "MenuHints",
    "MenuRow",
    "NullRuntime",
    "PanelControl",
    "RowAvailability",
    "Shortcut",
    "ToolbarHints",
    "menu_depth",
    "BubbleSpec",
    "CanvasToolsPanelState",
    "PanelField",
    "PanelView",
    "build_command_controls",
    "DEFAULT_SECTIONS",
    "ControlRegistry",
    "ControlSection",
    "build_default_registry",
    "build_panel_controls",
]
