"""
canvas-controls definitions validate command.

SUMMARY: Check definitions and sections against the control registry

Reports every toolbar entry, section and rule key that the registry cannot
satisfy. Exits 1 when any problem is found.
"""

from __future__ import annotations

import argparse

from canvas_controls.cli import InertBackend, OutputFormatter, add_json_flag
from canvas_controls.core.controls import build_default_registry
from canvas_controls.core.definitions import CANVAS_ELEMENT_DEFINITIONS
from canvas_controls.core.resolution import find_composition_problems

SUMMARY = "Check definitions and sections against the control registry"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only output problems, no success message",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    registry = build_default_registry(InertBackend())
    problems = find_composition_problems(CANVAS_ELEMENT_DEFINITIONS, registry)

    if formatter.json_mode:
        formatter.json_output(
            {
                "valid": not problems,
                "definitions": len(CANVAS_ELEMENT_DEFINITIONS),
                "controls": len(registry),
                "problems": problems,
            }
        )
        return 1 if problems else 0

    if problems:
        formatter.text(f"❌ {len(problems)} problem(s):")
        for problem in problems:
            formatter.text(f"   - {problem}")
        return 1

    if not getattr(args, "quiet", False):
        formatter.text(
            f"✅ {len(CANVAS_ELEMENT_DEFINITIONS)} definitions and {len(registry.sections())} sections "
            f"match {len(registry)} registered controls"
        )
    return 0
