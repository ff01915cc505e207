from __future__ import annotations

import asyncio

import pytest

from canvas_controls.core.context import ControlContext, ElementType
from canvas_controls.core.controls import CommandControl, ControlRegistry, PanelControl
from canvas_controls.core.definitions import SPACER, ElementDefinition
from canvas_controls.core.exceptions import ControlConfigurationError, RuleEvaluationError, UnknownControlError
from canvas_controls.core.resolution import (
    TOOLBAR_SPACER,
    ResolvedControl,
    ToolbarSpacer,
    is_spacer,
    normalize_toolbar,
    resolve_toolbar,
)
from canvas_controls.core.rules import EXCLUDE, AvailabilityRule


async def _noop(ctx, runtime) -> None:
    return None


def _cmd(control_id: str) -> CommandControl:
    return CommandControl(control_id, control_id.title(), _noop, icon=f"{control_id}-icon")


def _resolved(control_id: str) -> ResolvedControl:
    return ResolvedControl(_cmd(control_id), True)


S = TOOLBAR_SPACER


def test_normalize_collapses_and_trims_spacers() -> None:
    a, b = _resolved("a"), _resolved("b")
    assert normalize_toolbar([S, S, a, S, S, b, S]) == [a, S, b]


@pytest.mark.parametrize(
    "layout",
    [
        [],
        [S],
        [S, S, S],
        ["a"],
        ["a", S, "b"],
        [S, "a", S, S, "b", S, S, "c", S],
        ["a", "b", S, S],
        [S, S, "a", "b"],
    ],
)
def test_normalize_is_idempotent(layout) -> None:
    items = [item if is_spacer(item) else _resolved(item) for item in layout]
    once = normalize_toolbar(items)
    assert normalize_toolbar(once) == once
    assert not once or (not is_spacer(once[0]) and not is_spacer(once[-1]))
    assert all(not (is_spacer(x) and is_spacer(y)) for x, y in zip(once, once[1:]))


def test_spacers_compare_equal() -> None:
    assert ToolbarSpacer() == TOOLBAR_SPACER
    assert TOOLBAR_SPACER.id == "spacer"


def _registry(*ids: str) -> ControlRegistry:
    return ControlRegistry([_cmd(i) for i in ids])


def test_invisible_controls_are_dropped_and_dangling_spacers_removed() -> None:
    definition = ElementDefinition(
        type=ElementType.NONE,
        toolbar=("a", SPACER, "b", SPACER, "c"),
        availability_rules={"b": AvailabilityRule(visible=False), "c": AvailabilityRule(visible=False)},
    )
    items = resolve_toolbar(definition, ControlContext(), _registry("a", "b", "c"))
    assert [item.id for item in items] == ["a"]


def test_resolved_command_carries_a_synthesized_menu_row() -> None:
    definition = ElementDefinition(
        type=ElementType.NONE,
        toolbar=("a",),
        availability_rules={"a": AvailabilityRule(enabled=lambda ctx: ctx.has_text)},
    )
    (item,) = resolve_toolbar(definition, ControlContext(), _registry("a"))

    assert item.enabled is False
    assert item.menu_row is not None
    assert item.menu_row.id == "a"
    assert item.menu_row.label == "A"
    assert item.menu_row.icon == "a-icon"
    assert item.menu_row.disabled is True
    assert item.menu_row.sub_menu_items == ()


def test_toolbar_row_select_runs_the_action_when_enabled(runtime) -> None:
    calls = []

    async def action(ctx, rt) -> None:
        calls.append(rt)

    registry = ControlRegistry([CommandControl("a", "A", action)])
    definition = ElementDefinition(type=ElementType.NONE, toolbar=("a",))
    (item,) = resolve_toolbar(definition, ControlContext(), registry)

    asyncio.run(item.menu_row.select(ControlContext(), runtime))
    assert calls == [runtime]


def test_panel_control_on_toolbar_is_rejected() -> None:
    panel = PanelControl("p", "Panel", lambda ctx, state: None)
    definition = ElementDefinition(type=ElementType.NONE, toolbar=("p",), availability_rules={"p": EXCLUDE})
    with pytest.raises(ControlConfigurationError) as excinfo:
        resolve_toolbar(definition, ControlContext(), ControlRegistry([panel]))
    assert excinfo.value.context == {"control_id": "p", "element_type": "none"}


def test_unknown_toolbar_control_is_a_hard_failure() -> None:
    definition = ElementDefinition(type=ElementType.NONE, toolbar=("ghost",))
    with pytest.raises(UnknownControlError):
        resolve_toolbar(definition, ControlContext(), _registry("a"))


def test_raising_predicate_propagates() -> None:
    definition = ElementDefinition(
        type=ElementType.NONE,
        toolbar=("a",),
        availability_rules={"a": AvailabilityRule(visible=lambda ctx: 1 / 0)},
    )
    with pytest.raises(RuleEvaluationError) as exc:
        resolve_toolbar(definition, ControlContext(), _registry("a"))
    assert exc.value.context["surface"] == "toolbar"
