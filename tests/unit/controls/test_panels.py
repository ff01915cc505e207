from __future__ import annotations

import pytest

from canvas_controls.core.context import ControlContext
from canvas_controls.core.controls import BubbleSpec, CanvasToolsPanelState
from canvas_controls.core.controls import panels


@pytest.mark.parametrize(
    "bubble, expected",
    [
        (BubbleSpec(style="caption"), True),
        (BubbleSpec(style="caption", background_colors=("transparent",)), False),
        (BubbleSpec(style="none", background_colors=("#fff",)), True),
        (BubbleSpec(style="none"), False),
        (BubbleSpec(style="speech", background_colors=("#fff",)), False),
    ],
)
def test_rounded_corners_support(bubble: BubbleSpec, expected: bool) -> None:
    view = panels.render_rounded_corners(ControlContext(), CanvasToolsPanelState(current_bubble=bubble))
    assert view.field_named("roundedCorners").enabled is expected


def test_rounded_corners_disabled_without_bubble() -> None:
    view = panels.render_rounded_corners(ControlContext(), CanvasToolsPanelState())
    assert view.field_named("roundedCorners").enabled is False


def test_show_tail_disabled_for_child_bubbles_and_buttons() -> None:
    parent = CanvasToolsPanelState(show_tail=True, current_bubble=BubbleSpec(style="speech", order=1))
    child = CanvasToolsPanelState(current_bubble=BubbleSpec(style="speech", order=2))

    assert panels.render_show_tail(ControlContext(), parent).field_named("showTail").enabled is True
    assert panels.render_show_tail(ControlContext(), parent).field_named("showTail").value is True
    assert panels.render_show_tail(ControlContext(), child).field_named("showTail").enabled is False
    assert panels.render_show_tail(ControlContext(is_button=True), parent).field_named("showTail").enabled is False


def test_outline_color_only_for_real_bubbles() -> None:
    speech = CanvasToolsPanelState(outline_color="yellow", current_bubble=BubbleSpec(style="speech"))
    caption = CanvasToolsPanelState(current_bubble=BubbleSpec(style="caption"))

    field = panels.render_outline_color(ControlContext(), speech).field_named("outlineColor")
    assert (field.value, field.enabled, field.options) == ("yellow", True, panels.OUTLINE_COLORS)
    field = panels.render_outline_color(ControlContext(), caption).field_named("outlineColor")
    assert (field.value, field.enabled) == ("none", False)


def test_background_color_hides_transparency_for_captions() -> None:
    caption = CanvasToolsPanelState(current_bubble=BubbleSpec(style="caption"))
    view = panels.render_background_color(ControlContext(), caption)
    assert view.field_named("allowTransparency").value is False
    assert panels.render_background_color(ControlContext(), CanvasToolsPanelState()).field_named(
        "allowTransparency"
    ).value is True


def test_image_fill_mode_needs_an_image() -> None:
    state = CanvasToolsPanelState(image_fill_mode="cover")
    assert panels.render_image_fill_mode(ControlContext(has_image=True), state).field_named("imageFillMode").enabled
    field = panels.render_image_fill_mode(ControlContext(), state).field_named("imageFillMode")
    assert (field.value, field.enabled) == ("cover", False)


def test_bubble_style_lists_all_styles() -> None:
    view = panels.render_bubble_style(ControlContext(), CanvasToolsPanelState(style="thought"))
    assert view.control_id == "bubbleStyle"
    assert view.field_named("style").options == panels.BUBBLE_STYLES
    with pytest.raises(KeyError):
        view.field_named("nope")


def test_text_color_reports_swatch() -> None:
    state = CanvasToolsPanelState(text_color_swatch="#123456", text_color_is_default=False)
    view = panels.render_text_color(ControlContext(), state)
    assert view.field_named("swatch").value == "#123456"
    assert view.field_named("isDefault").value is False
