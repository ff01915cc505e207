"""Element definitions: per-type surface layout and rule overrides."""
from .models import SPACER, ElementDefinition
from .table import CANVAS_ELEMENT_DEFINITIONS, get_definition

__all__ = ["SPACER", "ElementDefinition", "CANVAS_ELEMENT_DEFINITIONS", "get_definition"]
