"""Jinja2 rendering for the plain-text views printed by the CLI."""

from __future__ import annotations

from typing import Any, Dict

from jinja2 import Environment, StrictUndefined

from canvas_controls.data import read_text


def _environment() -> Environment:
    # Templates use control blocks on their own lines; trim them away.
    return Environment(
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        undefined=StrictUndefined,
    )


def render_template_text(text: str, context: Dict[str, Any]) -> str:
    """Render ``text`` as a Jinja2 template with ``context``."""
    return _environment().from_string(text).render(**context)


def render_data_template(name: str, context: Dict[str, Any]) -> str:
    """Render a bundled template from ``canvas_controls/data/templates``."""
    return render_template_text(read_text("templates", name), context)


__all__ = ["render_template_text", "render_data_template"]
