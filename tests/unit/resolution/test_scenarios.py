"""End-to-end resolution against the default registry and definitions."""
from __future__ import annotations

from typing import List

import pytest

from canvas_controls.core.context import ControlContext, ElementNode, ElementType, build_control_context
from canvas_controls.core.controls import menu_depth
from canvas_controls.core.definitions import ElementDefinition, get_definition
from canvas_controls.core.resolution import ControlResolver, ResolvedControl, is_spacer
from canvas_controls.core.rules import EXCLUDE, IMAGE_RULES, WHOLE_ELEMENT_RULES, merge_rules
from helpers.elements import (
    canvas_element,
    editable,
    image_container,
    on_page,
    page,
    rectangle,
    video_container,
)

GAME = "drag-word-chooser-slider"


def _toolbar_ids(resolver: ControlResolver, ctx: ControlContext) -> List[str]:
    return [item.id for item in resolver.resolve_all(ctx).toolbar]


def _menu_items(resolver: ControlResolver, ctx: ControlContext) -> List[ResolvedControl]:
    return [item for section in resolver.resolve_all(ctx).menu for item in section]


def _menu_ids(resolver: ControlResolver, ctx: ControlContext) -> List[str]:
    return [item.id for item in _menu_items(resolver, ctx)]


def _item(items, control_id: str):
    return next(item for item in items if not is_spacer(item) and item.id == control_id)


def test_scenario_a_choose_image_visible_but_disabled(resolver: ControlResolver) -> None:
    ctx = ControlContext(element_type=ElementType.IMAGE, has_image=True, can_modify_image=False)
    definition = ElementDefinition(type=ElementType.IMAGE, toolbar=("chooseImage",), menu_sections=("image",), availability_rules=IMAGE_RULES)

    toolbar = resolver.resolve_toolbar(definition, ctx)
    menu = [item for section in resolver.resolve_menu(definition, ctx) for item in section]

    assert _item(toolbar, "chooseImage").enabled is False
    assert _item(menu, "chooseImage").enabled is False
    assert _item(menu, "chooseImage").menu_row.disabled is True


def test_scenario_b_background_image_without_real_image_cannot_be_deleted(resolver: ControlResolver) -> None:
    ctx = ControlContext(is_background_image=True, has_real_image=False)
    definition = ElementDefinition(
        type=ElementType.IMAGE, toolbar=("delete",), menu_sections=("wholeElement",), availability_rules=WHOLE_ELEMENT_RULES
    )

    (delete,) = resolver.resolve_toolbar(definition, ctx)

    assert delete.id == "delete"
    assert delete.enabled is False


def test_scenario_c_exclude_removes_control_from_every_surface(resolver: ControlResolver) -> None:
    ctx = ControlContext(is_link_grid=True)
    base = get_definition(ElementType.BOOK_LINK_GRID)
    shown = resolver.resolve_all(ControlContext(element_type=ElementType.BOOK_LINK_GRID, is_link_grid=True))
    assert "linkGridChooseBooks" in [item.id for item in shown.toolbar]

    definition = ElementDefinition(
        type=base.type,
        toolbar=base.toolbar,
        menu_sections=base.menu_sections,
        tool_panel=base.tool_panel,
        availability_rules=merge_rules(base.availability_rules, {"linkGridChooseBooks": EXCLUDE}),
    )

    assert "linkGridChooseBooks" not in [item.id for item in resolver.resolve_toolbar(definition, ctx)]
    assert "linkGridChooseBooks" not in [i.id for s in resolver.resolve_menu(definition, ctx) for i in s]
    assert "linkGridChooseBooks" not in [p.control_id for p in resolver.resolve_panel(definition, ctx)]


def test_link_grid_text_color_is_excluded(resolver: ControlResolver) -> None:
    ctx = ControlContext(element_type=ElementType.BOOK_LINK_GRID, is_link_grid=True, has_text=True)
    panel_ids = [p.control_id for p in resolver.resolve_all(ctx).panel]
    assert "textColor" not in panel_ids
    assert "backgroundColor" in panel_ids


def test_image_element_surfaces(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element(image_container("cat.png", copyright=None)))

    assert _toolbar_ids(resolver, ctx) == ["missingMetadata", "chooseImage", "pasteImage", "spacer", "duplicate", "delete"]
    assert _menu_ids(resolver, ctx) == [
        "missingMetadata",
        "chooseImage",
        "pasteImage",
        "copyImage",
        "resetImage",
        "duplicate",
        "delete",
    ]
    menu = _menu_items(resolver, ctx)
    assert _item(menu, "resetImage").enabled is False
    assert _item(menu, "missingMetadata").menu_row.icon == "copyright"


def test_missing_metadata_shows_in_menu_even_when_metadata_present(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element(image_container("cat.png")))
    assert "missingMetadata" not in _toolbar_ids(resolver, ctx)
    assert "missingMetadata" in _menu_ids(resolver, ctx)


def test_background_image_fit_space_and_delete(resolver: ControlResolver) -> None:
    element = canvas_element(image_container("placeholder.png"), classes=("bloom-backgroundImage",))
    page(element)
    ctx = build_control_context(element, can_expand_to_fill_space=True)
    toolbar = resolver.resolve_all(ctx).toolbar

    assert "expandToFillSpace" in [item.id for item in toolbar]
    assert _item(toolbar, "expandToFillSpace").enabled is True
    assert "duplicate" not in [item.id for item in toolbar]
    assert _item(toolbar, "delete").enabled is False


def test_video_play_order_controls(resolver: ControlResolver) -> None:
    first = canvas_element(video_container(), id="v1")
    second = canvas_element(video_container(), id="v2")
    page(first, second)
    menu = _menu_items(resolver, build_control_context(first))
    assert _item(menu, "playVideoEarlier").enabled is False
    assert _item(menu, "playVideoLater").enabled is True
    assert _toolbar_ids(resolver, build_control_context(second)) == [
        "chooseVideo",
        "recordVideo",
        "spacer",
        "duplicate",
        "delete",
    ]


def test_speech_bubble_surfaces(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element(editable()))
    surfaces = resolver.resolve_all(ctx)

    assert [item.id for item in surfaces.toolbar] == ["format", "spacer", "duplicate", "delete"]
    assert [[i.id for i in s] for s in surfaces.menu] == [
        ["addChildBubble"],
        ["format", "copyText", "pasteText", "autoHeight"],
        ["duplicate", "delete"],
    ]
    assert [p.control_id for p in surfaces.panel] == [
        "bubbleStyle",
        "showTail",
        "roundedCorners",
        "textColor",
        "backgroundColor",
        "outlineColor",
    ]


def test_auto_height_row_is_checked_from_context(resolver: ControlResolver) -> None:
    on = _item(_menu_items(resolver, on_page(canvas_element(editable()))), "autoHeight")
    off = _item(
        _menu_items(resolver, on_page(canvas_element(editable(), classes=("bloom-noAutoHeight",)))),
        "autoHeight",
    )
    assert on.menu_row.checked is True
    assert off.menu_row.checked is False


def test_fill_background_only_on_rectangles(resolver: ControlResolver) -> None:
    rect = on_page(canvas_element(rectangle(background=True), editable()))
    row = _item(_menu_items(resolver, rect), "fillBackground").menu_row
    assert row.checked is True
    assert "fillBackground" not in _menu_ids(resolver, on_page(canvas_element(editable())))


def test_auto_height_hidden_on_navigation_buttons(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element(editable(), classes=("bloom-canvas-button",)))
    assert ctx.element_type is ElementType.NAVIGATION_LABEL_BUTTON
    ids = _menu_ids(resolver, ctx)
    assert "autoHeight" not in ids
    assert "setDestination" in ids
    assert _toolbar_ids(resolver, ctx) == ["setDestination", "spacer", "duplicate", "delete"]


def test_navigation_image_button_hides_metadata_on_toolbar(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element(image_container("cat.png", copyright=None), classes=("bloom-canvas-button",)))
    assert ctx.element_type is ElementType.NAVIGATION_IMAGE_BUTTON
    assert "missingMetadata" not in _toolbar_ids(resolver, ctx)
    assert "missingMetadata" in _menu_ids(resolver, ctx)
    assert [p.control_id for p in resolver.resolve_all(ctx).panel] == ["backgroundColor", "imageFillMode"]


def test_draggable_rows_in_and_out_of_games(resolver: ControlResolver) -> None:
    outside = on_page(canvas_element(editable()))
    assert "toggleDraggable" not in _menu_ids(resolver, outside)

    element = canvas_element(editable(), attributes={"data-draggable-id": "d1"})
    page(element, _target_of("d1"), activity=GAME)
    menu = _menu_items(resolver, build_control_context(element))
    assert _item(menu, "toggleDraggable").menu_row.checked is True
    assert _item(menu, "togglePartOfRightAnswer").menu_row.checked is True
    assert "addChildBubble" not in [item.id for item in menu]


def test_right_answer_row_needs_a_draggable_id(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element(editable()), activity=GAME)
    ids = _menu_ids(resolver, ctx)
    assert "toggleDraggable" in ids
    assert "togglePartOfRightAnswer" not in ids


@pytest.mark.parametrize(
    "element_type",
    [
        ElementType.NONE,
        ElementType.RECTANGLE,
        ElementType.BOOK_LINK_GRID,
        ElementType.NAVIGATION_IMAGE_BUTTON,
        ElementType.NAVIGATION_IMAGE_WITH_LABEL_BUTTON,
        ElementType.NAVIGATION_LABEL_BUTTON,
    ],
)
def test_draggable_rows_offered_for_every_element_type(resolver: ControlResolver, element_type: ElementType) -> None:
    in_game = ControlContext(
        element_type=element_type,
        is_in_draggable_game=True,
        can_toggle_draggability=True,
        has_draggable_id=True,
    )
    ids = _menu_ids(resolver, in_game)
    assert "toggleDraggable" in ids
    assert "togglePartOfRightAnswer" in ids

    outside = ControlContext(element_type=element_type)
    assert "toggleDraggable" not in _menu_ids(resolver, outside)


def test_special_sentence_element_keeps_delete_in_menu_only(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element(editable(), classes=("drag-item-order-sentence",)), activity="drag-sort-sentence")
    assert ctx.is_special_game_element
    assert "delete" not in _toolbar_ids(resolver, ctx)
    assert "duplicate" not in _toolbar_ids(resolver, ctx)
    delete = _item(_menu_items(resolver, ctx), "delete")
    assert delete.enabled is False
    assert "toggleDraggable" not in _menu_ids(resolver, ctx)


def test_text_audio_row_in_games(resolver: ControlResolver) -> None:
    element = canvas_element(editable())
    page(element, activity=GAME)
    row = _item(_menu_items(resolver, build_control_context(element, text_has_audio=True)), "chooseAudio").menu_row
    assert row.label == "A Recording"
    assert [child.id for child in row.sub_menu_items] == ["useTalkingBookTool"]


def test_image_audio_row_lists_current_sound(resolver: ControlResolver) -> None:
    with_sound = on_page(canvas_element(image_container(), attributes={"data-sound": "ding.mp3"}), activity=GAME)
    row = _item(_menu_items(resolver, with_sound), "chooseAudio").menu_row
    assert row.label == "ding"
    assert [child.id for child in row.sub_menu_items] == ["removeAudio", "playCurrentAudio", "chooseAudio"]
    assert row.sub_menu_items[-1].help_row.separator_above is True

    silent = on_page(canvas_element(image_container(), id="ce2"), activity=GAME)
    row = _item(_menu_items(resolver, silent), "chooseAudio").menu_row
    assert row.label == "None"
    assert [child.id for child in row.sub_menu_items] == ["removeAudio", "chooseAudio"]


def test_unclassified_element_can_still_be_deleted(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element())
    assert ctx.element_type is ElementType.NONE
    assert _toolbar_ids(resolver, ctx) == ["duplicate", "delete"]
    assert _menu_ids(resolver, ctx) == ["duplicate", "delete"]
    assert resolver.resolve_all(ctx).panel == []


@pytest.mark.parametrize("element_type", list(ElementType))
def test_every_definition_resolves_with_an_empty_context(resolver: ControlResolver, element_type: ElementType) -> None:
    surfaces = resolver.resolve_all(ControlContext(element_type=element_type))
    toolbar = surfaces.toolbar
    assert not toolbar or (not is_spacer(toolbar[0]) and not is_spacer(toolbar[-1]))
    assert all(section for section in surfaces.menu)


def test_menu_rows_are_shallow(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element(image_container(), attributes={"data-sound": "a.mp3"}), activity=GAME)
    for section in resolver.resolve_all(ctx).menu:
        for item in section:
            assert menu_depth(item.menu_row) <= 3


def test_resolution_is_repeatable(resolver: ControlResolver) -> None:
    ctx = on_page(canvas_element(editable()))
    first = resolver.resolve_all(ctx)
    second = resolver.resolve_all(ctx)
    assert first.toolbar == second.toolbar
    assert first.menu == second.menu


def _target_of(draggable_id: str) -> ElementNode:
    return ElementNode("div", attributes={"data-target-of": draggable_id})
