"""
canvas-controls definitions show command.

SUMMARY: Show element definitions

Lists the toolbar layout, menu sections, tool panel sections and rule
overrides for one element type, or for all of them.
"""

from __future__ import annotations

import argparse

from canvas_controls.cli import OutputFormatter, add_element_type_arg, add_json_flag, definition_to_dict
from canvas_controls.core.definitions import CANVAS_ELEMENT_DEFINITIONS, get_definition
from canvas_controls.core.utils.templates import render_data_template

SUMMARY = "Show element definitions"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_element_type_arg(parser)
    parser.add_argument(
        "--rules",
        action="store_true",
        help="Include the availability rules of each definition",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    element_type = getattr(args, "element_type", None)
    if element_type:
        definitions = [get_definition(element_type)]
    else:
        definitions = list(CANVAS_ELEMENT_DEFINITIONS.values())
    data = [definition_to_dict(d) for d in definitions]

    if formatter.json_mode:
        formatter.json_output(data[0] if element_type else data)
        return 0

    show_rules = bool(getattr(args, "rules", False)) or bool(element_type)
    formatter.text(
        render_data_template("definitions.txt.j2", {"definitions": data, "show_rules": show_rules}).rstrip()
    )
    return 0
