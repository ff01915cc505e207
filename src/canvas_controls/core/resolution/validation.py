"""Static checks that definitions, sections and the registry agree."""
from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Union

from canvas_controls.core.controls.models import CommandControl
from canvas_controls.core.controls.registry import ControlRegistry
from canvas_controls.core.definitions.models import SPACER, ElementDefinition
from canvas_controls.core.exceptions import ControlConfigurationError
from canvas_controls.core.rules.models import Surface

logger = logging.getLogger(__name__)


def find_composition_problems(
    definitions: Union[Mapping[object, ElementDefinition], Iterable[ElementDefinition]],
    registry: ControlRegistry,
) -> List[str]:
    """Return a description of every id the registry cannot satisfy."""
    if isinstance(definitions, Mapping):
        definitions = definitions.values()

    problems: List[str] = []
    for section in registry.sections():
        for control_id in section.all_control_ids():
            if not registry.has(control_id):
                problems.append(f"section '{section.id}': unknown control '{control_id}'")

    for definition in definitions:
        name = definition.type.value
        for entry in definition.toolbar:
            if entry == SPACER:
                continue
            control = registry.find(entry)
            if control is None:
                problems.append(f"{name}: unknown toolbar control '{entry}'")
            elif not isinstance(control, CommandControl):
                problems.append(f"{name}: toolbar entry '{entry}' is not a command")

        for surface, section_ids in ((Surface.MENU, definition.menu_sections), (Surface.TOOL_PANEL, definition.tool_panel)):
            for section_id in section_ids:
                if not registry.has_section(section_id):
                    problems.append(f"{name}: unknown {surface.value} section '{section_id}'")

        for control_id in definition.availability_rules:
            if not registry.has(control_id):
                problems.append(f"{name}: rule for unknown control '{control_id}'")

    for problem in problems:
        logger.debug("Composition problem: %s", problem)
    return problems


def validate_definitions(
    definitions: Union[Mapping[object, ElementDefinition], Iterable[ElementDefinition]],
    registry: ControlRegistry,
) -> None:
    """Raise if any definition refers to something the registry lacks.

    Raises:
        ControlConfigurationError: Listing every problem found.
    """
    problems = find_composition_problems(definitions, registry)
    if problems:
        raise ControlConfigurationError(
            f"{len(problems)} composition problem(s): " + "; ".join(problems),
            context={"problems": problems},
        )


__all__ = ["find_composition_problems", "validate_definitions"]
