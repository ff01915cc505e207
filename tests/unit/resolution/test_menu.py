from __future__ import annotations

import pytest

from canvas_controls.core.context import ControlContext, ElementType
from canvas_controls.core.controls import (
    CommandControl,
    CommandRow,
    ControlRegistry,
    ControlSection,
    HelpRow,
    MenuHints,
    PanelControl,
    RowAvailability,
)
from canvas_controls.core.definitions import ElementDefinition
from canvas_controls.core.exceptions import RuleEvaluationError, UnknownControlError
from canvas_controls.core.resolution import apply_row_availability, default_menu_row, resolve_menu
from canvas_controls.core.rules import AvailabilityRule, Surface


async def _noop(ctx, runtime) -> None:
    return None


def _registry(controls, sections) -> ControlRegistry:
    return ControlRegistry(controls, sections)


def _menu_section(section_id: str, *ids: str) -> ControlSection:
    return ControlSection(section_id, {Surface.MENU: ids})


# ----- cascade -----


def test_disabled_parent_disables_enabled_child() -> None:
    child = CommandRow("child", "Child", availability=RowAvailability(enabled=True))
    parent = CommandRow("parent", "Parent", availability=RowAvailability(enabled=False), sub_menu_items=(child,))

    resolved = apply_row_availability(parent, ControlContext(), True)

    assert resolved.disabled is True
    assert resolved.sub_menu_items[0].disabled is True


def test_parent_enabled_false_from_caller_cascades_to_grandchildren() -> None:
    grandchild = CommandRow("g", "G")
    child = CommandRow("c", "C", sub_menu_items=(grandchild,))
    row = CommandRow("p", "P", sub_menu_items=(child,))

    resolved = apply_row_availability(row, ControlContext(), False)

    assert resolved.disabled
    assert resolved.sub_menu_items[0].disabled
    assert resolved.sub_menu_items[0].sub_menu_items[0].disabled


def test_explicit_disabled_is_kept() -> None:
    row = CommandRow("p", "P", disabled=True)
    assert apply_row_availability(row, ControlContext(), True).disabled


def test_hidden_rows_and_their_children_are_dropped() -> None:
    hidden = CommandRow("h", "H", availability=RowAvailability(visible=False), sub_menu_items=(CommandRow("x", "X"),))
    shown = CommandRow("s", "S")
    row = CommandRow("p", "P", sub_menu_items=(hidden, shown))

    resolved = apply_row_availability(row, ControlContext(), True)

    assert [child.id for child in resolved.sub_menu_items] == ["s"]
    assert apply_row_availability(hidden, ControlContext(), True) is None


def test_help_rows_only_show_or_hide() -> None:
    visible_help = HelpRow("h1", "Some help")
    hidden_help = HelpRow("h2", "Hidden", availability=RowAvailability(visible=lambda ctx: ctx.has_text))
    row = CommandRow(
        "p",
        "P",
        availability=RowAvailability(enabled=False),
        sub_menu_items=(visible_help, hidden_help),
        help_row=hidden_help,
    )

    resolved = apply_row_availability(row, ControlContext(), True)

    assert resolved.sub_menu_items == (visible_help,)
    assert resolved.help_row is None
    assert not hasattr(resolved.sub_menu_items[0], "disabled")


def test_row_predicates_receive_the_context() -> None:
    row = CommandRow("p", "P", availability=RowAvailability(visible=lambda ctx: ctx.has_current_image_sound))
    assert apply_row_availability(row, ControlContext(has_current_image_sound=True), True) is not None
    assert apply_row_availability(row, ControlContext(), True) is None


def test_raising_row_predicate_propagates() -> None:
    row = CommandRow("p", "P", availability=RowAvailability(enabled=lambda ctx: {}["x"]))
    with pytest.raises(RuleEvaluationError):
        apply_row_availability(row, ControlContext(), True)


# ----- sections -----


def test_empty_sections_are_omitted() -> None:
    registry = _registry(
        [CommandControl("a", "A", _noop), CommandControl("b", "B", _noop)],
        [_menu_section("first", "a"), _menu_section("second", "b")],
    )
    definition = ElementDefinition(
        type=ElementType.NONE,
        menu_sections=("first", "second"),
        availability_rules={"a": AvailabilityRule(visible=False)},
    )

    sections = resolve_menu(definition, ControlContext(), registry)

    assert len(sections) == 1
    assert [item.id for item in sections[0]] == ["b"]


def test_panel_ids_in_menu_sections_are_skipped() -> None:
    registry = _registry(
        [CommandControl("a", "A", _noop), PanelControl("p", "P", lambda ctx, state: None)],
        [_menu_section("mixed", "p", "a")],
    )
    definition = ElementDefinition(type=ElementType.NONE, menu_sections=("mixed",))
    sections = resolve_menu(definition, ControlContext(), registry)
    assert [item.id for item in sections[0]] == ["a"]


def test_unknown_section_is_a_hard_failure() -> None:
    registry = _registry([CommandControl("a", "A", _noop)], [])
    definition = ElementDefinition(type=ElementType.NONE, menu_sections=("ghost",))
    with pytest.raises(UnknownControlError):
        resolve_menu(definition, ControlContext(), registry)


# ----- rows -----


def test_default_row_uses_control_metadata() -> None:
    help_row = HelpRow("a.help", "Help text")
    control = CommandControl(
        "a",
        "Alpha",
        _noop,
        l10n_id="Alpha.L10n",
        icon="base",
        feature_name="canvas",
        help_row=help_row,
        menu=MenuHints(icon="menu-icon", sub_label_l10n_id="Alpha.Sub", shortcut_display="Ctrl+A"),
    )

    row = default_menu_row(control)

    assert row.label == "Alpha"
    assert row.icon == "menu-icon"
    assert row.sub_label_l10n_id == "Alpha.Sub"
    assert row.shortcut.id == "a.defaultShortcut"
    assert row.shortcut.display == "Ctrl+A"
    assert row.help_row is help_row
    assert row.feature_name == "canvas"
    assert row.on_select is _noop


def test_rule_enabled_flows_into_row_and_resolved_control() -> None:
    registry = _registry([CommandControl("a", "A", _noop)], [_menu_section("s", "a")])
    definition = ElementDefinition(
        type=ElementType.NONE,
        menu_sections=("s",),
        availability_rules={"a": AvailabilityRule(enabled=False)},
    )
    ((item,),) = resolve_menu(definition, ControlContext(), registry)
    assert item.enabled is False
    assert item.menu_row.disabled is True


def test_custom_row_builder_is_used_and_inherits_missing_fields(runtime) -> None:
    seen = []

    def build(ctx, rt):
        seen.append(rt)
        return CommandRow(
            "a",
            "Live label",
            checked=ctx.has_text,
            sub_menu_items=(CommandRow("a.child", "Child"),),
        )

    control = CommandControl(
        "a",
        "Static",
        _noop,
        icon="base",
        feature_name="canvas",
        help_row=HelpRow("a.help", "Help"),
        menu=MenuHints(build_menu_item=build),
    )
    registry = _registry([control], [_menu_section("s", "a")])
    definition = ElementDefinition(
        type=ElementType.NONE,
        menu_sections=("s",),
        availability_rules={"a": AvailabilityRule(enabled=False)},
    )

    ((item,),) = resolve_menu(definition, ControlContext(has_text=True), registry, runtime)

    assert seen == [runtime]
    assert item.menu_row.label == "Live label"
    assert item.menu_row.checked is True
    assert item.menu_row.icon == "base"
    assert item.menu_row.feature_name == "canvas"
    assert item.menu_row.help_row.id == "a.help"
    assert item.menu_row.sub_menu_items[0].disabled is True
    assert item.enabled is False


def test_custom_row_hidden_by_its_own_availability_is_skipped() -> None:
    control = CommandControl(
        "a",
        "A",
        _noop,
        menu=MenuHints(build_menu_item=lambda ctx, rt: CommandRow("a", "A", availability=RowAvailability(visible=False))),
    )
    registry = _registry([control], [_menu_section("s", "a")])
    definition = ElementDefinition(type=ElementType.NONE, menu_sections=("s",))
    assert resolve_menu(definition, ControlContext(), registry) == []
