"""
canvas-controls controls resolve command.

SUMMARY: Resolve toolbar, menu and tool panel controls for a selection

Builds the context for the selected element and resolves the surfaces of
its element definition. Actions are not run.
"""

from __future__ import annotations

import argparse
from typing import Any, Dict, List, Optional

from canvas_controls.cli import (
    InertBackend,
    OutputFormatter,
    add_json_flag,
    add_repo_root_flag,
    add_selection_arg,
    get_repo_root,
    load_context,
    surfaces_to_dict,
)
from canvas_controls.core.exceptions import CanvasControlsError
from canvas_controls.core.resolution import create_default_resolver
from canvas_controls.core.utils.templates import render_data_template

SUMMARY = "Resolve toolbar, menu and tool panel controls for a selection"

SURFACES = ("toolbar", "menu", "panel", "all")


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_selection_arg(parser)
    parser.add_argument(
        "--surface",
        choices=SURFACES,
        default="all",
        help="Surface to resolve (default: all)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _flatten_rows(rows: List[Dict[str, Any]], depth: int = 0) -> List[Dict[str, Any]]:
    lines: List[Dict[str, Any]] = []
    for row in rows:
        shortcut = row.get("shortcut")
        lines.append(
            {
                "depth": depth,
                "kind": row["kind"],
                "text": row.get("text", ""),
                "label": row.get("label", ""),
                "checked": row.get("checked"),
                "disabled": row.get("disabled", False),
                "shortcut": shortcut["display"] if shortcut else None,
            }
        )
        if row.get("helpRow"):
            lines.extend(_flatten_rows([row["helpRow"]], depth + 1))
        lines.extend(_flatten_rows(row.get("subMenuItems", []), depth + 1))
    return lines


def _text_view(data: Dict[str, Any], element: str, element_type: str) -> str:
    menu: Optional[List[List[Dict[str, Any]]]] = None
    if "menu" in data:
        menu = [_flatten_rows([item["row"] for item in section]) for section in data["menu"]]
    return render_data_template(
        "surfaces.txt.j2",
        {
            "element": element,
            "element_type": element_type,
            "toolbar": data.get("toolbar"),
            "menu": menu,
            "panel": data.get("panel"),
        },
    ).strip()


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    surface = getattr(args, "surface", "all") or "all"

    try:
        ctx = load_context(args)
        resolver = create_default_resolver(InertBackend(), repo_root=get_repo_root(args))
        surfaces = resolver.resolve_all(ctx)
    except CanvasControlsError as e:
        formatter.error(e, error_code="resolve_error")
        return 1

    data = surfaces_to_dict(surfaces, surface)
    element = ctx.element.describe() if ctx.element else "<none>"
    if formatter.json_mode:
        formatter.json_output({"element": element, "elementType": ctx.element_type.value, **data})
    else:
        formatter.text(_text_view(data, element, ctx.element_type.value))
    return 0
