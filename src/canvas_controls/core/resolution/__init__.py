"""Resolution engine: turns a definition and a context into surfaces."""
from .effective import evaluate_availability, get_effective_rule
from .models import (
    TOOLBAR_SPACER,
    ResolvedControl,
    ResolvedPanel,
    ResolvedSurfaces,
    ToolbarItem,
    ToolbarSpacer,
    is_spacer,
)
from .toolbar import normalize_toolbar, resolve_toolbar
from .menu import apply_row_availability, default_menu_row, resolve_menu
from .panel import resolve_panel
from .validation import find_composition_problems, validate_definitions
from .engine import ControlResolver, create_default_resolver

__all__ = [
    "evaluate_availability",
    "get_effective_rule",
    "TOOLBAR_SPACER",
    "ResolvedControl",
    "ResolvedPanel",
    "ResolvedSurfaces",
    "ToolbarItem",
    "ToolbarSpacer",
    "is_spacer",
    "normalize_toolbar",
    "resolve_toolbar",
    "apply_row_availability",
    "default_menu_row",
    "resolve_menu",
    "resolve_panel",
    "find_composition_problems",
    "validate_definitions",
    "ControlResolver",
    "create_default_resolver",
]
