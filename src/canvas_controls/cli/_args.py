"""Common CLI argument registration helpers."""
from __future__ import annotations

import argparse

from canvas_controls.core.context.models import ElementType


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root path (used to find .canvas-controls/config)",
    )


def add_selection_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional selection document argument."""
    parser.add_argument(
        "selection",
        help="YAML file describing the page tree with one element marked 'selected: true'",
    )


def add_element_type_arg(parser: argparse.ArgumentParser, *, required: bool = False) -> None:
    parser.add_argument(
        "element_type",
        nargs=None if required else "?",
        choices=[t.value for t in ElementType],
        metavar="TYPE",
        help="Canvas element type (e.g. image, speech, navigation-label-button)",
    )


__all__ = ["add_json_flag", "add_repo_root_flag", "add_selection_arg", "add_element_type_arg"]
