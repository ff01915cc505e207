"""
canvas-controls context build command.

SUMMARY: Build the control context for a selected element

Loads a selection document, classifies the selected element and prints
every fact that availability rules are evaluated against.
"""

from __future__ import annotations

import argparse

from canvas_controls.cli import OutputFormatter, add_json_flag, add_repo_root_flag, add_selection_arg, load_context
from canvas_controls.core.exceptions import CanvasControlsError
from canvas_controls.core.utils.templates import render_data_template

SUMMARY = "Build the control context for a selected element"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_selection_arg(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        ctx = load_context(args)
    except CanvasControlsError as e:
        formatter.error(e, error_code="context_error")
        return 1

    facts = ctx.facts()
    if formatter.json_mode:
        formatter.json_output({"element": ctx.element.describe() if ctx.element else None, "facts": facts})
        return 0

    formatter.text(
        render_data_template(
            "context.txt.j2",
            {
                "element": ctx.element.describe() if ctx.element else "<none>",
                "activity": ctx.activity,
                "facts": facts,
            },
        ).rstrip()
    )
    return 0
