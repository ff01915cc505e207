"""
Canvas controls CLI package.

Commands are auto-discovered from subfolders (context/, controls/,
definitions/). Shared helpers:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Project root, context loading and serialization
"""
from ._output import OutputFormatter
from ._args import add_json_flag, add_repo_root_flag, add_selection_arg, add_element_type_arg
from ._utils import (
    InertBackend,
    definition_to_dict,
    describe_rule,
    get_repo_root,
    load_context,
    row_to_dict,
    surfaces_to_dict,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_selection_arg",
    "add_element_type_arg",
    # Utilities
    "InertBackend",
    "definition_to_dict",
    "describe_rule",
    "get_repo_root",
    "load_context",
    "row_to_dict",
    "surfaces_to_dict",
]
