"""Context snapshots: element inspection, type inference and the builder."""
from .element import ElementNode, Selection, build_tree, load_selection
from .models import ControlContext, ElementType
from .inference import infer_element_type
from .builder import build_control_context, build_context_for_selection, can_toggle_draggability

__all__ = [
    "ElementNode",
    "Selection",
    "build_tree",
    "load_selection",
    "ControlContext",
    "ElementType",
    "infer_element_type",
    "build_control_context",
    "build_context_for_selection",
    "can_toggle_draggability",
]
