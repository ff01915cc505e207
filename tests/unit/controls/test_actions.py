"""Command actions run against a recording back end."""
from __future__ import annotations

import asyncio

import pytest

from canvas_controls.core.context import ControlContext, build_control_context
from canvas_controls.core.controls import CommandRow, ControlRegistry, build_default_registry
from canvas_controls.core.controls.commands import CHOOSE_SOUND_HELP
from canvas_controls.core.exceptions import CanvasControlsError
from canvas_controls.core.resolution import ControlResolver
from helpers.backend import FakeBackend
from helpers.elements import canvas_element, editable, image_container, on_page, page, video_container
from helpers.runtime import RecordingRuntime

GAME = "drag-word-chooser-slider"


def _run(registry: ControlRegistry, control_id: str, ctx: ControlContext, runtime: RecordingRuntime) -> None:
    asyncio.run(registry.get(control_id).action(ctx, runtime))


def _menu_row(resolver: ControlResolver, ctx: ControlContext, control_id: str, runtime=None) -> CommandRow:
    for section in resolver.resolve_all(ctx, runtime).menu:
        for item in section:
            if item.id == control_id:
                return item.menu_row
    raise AssertionError(f"{control_id} not in menu")


@pytest.mark.parametrize(
    "control_id, operation, closes",
    [
        ("chooseImage", "choose_image", [True]),
        ("missingMetadata", "edit_image_metadata", [True]),
        ("pasteImage", "paste_image", []),
        ("copyImage", "copy_image", []),
        ("resetImage", "reset_image_cropping", []),
        ("format", "show_format_dialog", [True]),
        ("duplicate", "duplicate_element", []),
        ("delete", "delete_element", []),
        ("autoHeight", "toggle_auto_height", []),
        ("toggleDraggable", "toggle_draggability", []),
    ],
)
def test_simple_actions_forward_the_element(
    registry: ControlRegistry,
    backend: FakeBackend,
    runtime: RecordingRuntime,
    control_id: str,
    operation: str,
    closes,
) -> None:
    ctx = on_page(canvas_element(image_container(), editable(), id="el-7"))

    _run(registry, control_id, ctx, runtime)

    assert backend.calls == [(operation, ("el-7",))]
    assert runtime.close_calls == closes


def test_video_order_actions_pass_offsets(registry: ControlRegistry, backend: FakeBackend, runtime) -> None:
    ctx = on_page(canvas_element(video_container(), id="v1"))

    _run(registry, "playVideoEarlier", ctx, runtime)
    _run(registry, "playVideoLater", ctx, runtime)

    assert backend.calls == [("move_video", ("v1", -1)), ("move_video", ("v1", 1))]


def test_set_destination_awaits_the_chooser(runtime: RecordingRuntime) -> None:
    backend = FakeBackend(chosen_url="bloom://book/42")
    registry = build_default_registry(backend)
    element = canvas_element(editable(), id="btn", classes=("bloom-canvas-button",), attributes={"data-href": "old"})
    ctx = on_page(element)

    _run(registry, "setDestination", ctx, runtime)

    assert runtime.close_calls == [True]
    assert backend.calls == [
        ("choose_link_destination", ("btn", "old")),
        ("set_link_destination", ("btn", "bloom://book/42")),
    ]


def test_set_destination_cleared_when_chooser_cancelled(registry, backend: FakeBackend, runtime) -> None:
    ctx = on_page(canvas_element(editable(), id="btn", classes=("bloom-canvas-button",)))
    _run(registry, "setDestination", ctx, runtime)
    assert backend.calls[-1] == ("set_link_destination", ("btn", None))


def test_action_without_element_raises(registry: ControlRegistry, runtime) -> None:
    with pytest.raises(CanvasControlsError) as excinfo:
        _run(registry, "delete", ControlContext(), runtime)
    assert excinfo.value.context == {"element_type": "none"}


def test_menu_row_select_runs_action(resolver: ControlResolver, backend: FakeBackend, runtime) -> None:
    ctx = on_page(canvas_element(editable(), id="t1"))
    row = _menu_row(resolver, ctx, "copyText")

    asyncio.run(row.select(ctx, runtime))

    assert backend.calls == [("copy_text", ("t1",))]


def test_disabled_row_select_does_nothing(resolver: ControlResolver, backend: FakeBackend, runtime) -> None:
    ctx = on_page(canvas_element(image_container(), id="img"))
    row = _menu_row(resolver, ctx, "resetImage")
    assert row.disabled

    asyncio.run(row.select(ctx, runtime))

    assert backend.calls == []


class TestAudioRows:
    def test_choose_sound_sets_and_plays_new_sound(self, runtime: RecordingRuntime) -> None:
        backend = FakeBackend(chosen_sound="bell.mp3")
        resolver = ControlResolver(build_default_registry(backend))
        ctx = on_page(canvas_element(image_container(), id="img"), activity=GAME)
        choose = _menu_row(resolver, ctx, "chooseAudio", runtime).sub_menu_items[-1]

        asyncio.run(choose.select(ctx, runtime))

        assert runtime.close_calls == [True]
        assert backend.calls == [
            ("choose_sound_file", ()),
            ("set_element_sound", ("img", "bell.mp3")),
            ("play_sound", ("bell.mp3",)),
        ]
        assert choose.help_row.text == CHOOSE_SOUND_HELP

    def test_cancelled_sound_choice_changes_nothing(self, resolver, backend: FakeBackend, runtime) -> None:
        ctx = on_page(canvas_element(image_container(), id="img"), activity=GAME)
        choose = _menu_row(resolver, ctx, "chooseAudio", runtime).sub_menu_items[-1]

        asyncio.run(choose.select(ctx, runtime))

        assert backend.operations() == ["choose_sound_file"]

    def test_remove_and_play_current_sound(self, resolver, backend: FakeBackend, runtime) -> None:
        ctx = on_page(canvas_element(image_container(), id="img", attributes={"data-sound": "ding.mp3"}), activity=GAME)
        remove, play, _ = _menu_row(resolver, ctx, "chooseAudio", runtime).sub_menu_items

        asyncio.run(play.select(ctx, runtime))
        asyncio.run(remove.select(ctx, runtime))

        assert backend.calls == [("play_sound", ("ding.mp3",)), ("set_element_sound", ("img", None))]
        assert runtime.close_calls == [False, False]

    def test_text_audio_opens_talking_book_tool(self, resolver, backend: FakeBackend, runtime) -> None:
        element = canvas_element(editable(), id="t1")
        page(element, activity=GAME)
        ctx = build_control_context(element)
        row = _menu_row(resolver, ctx, "chooseAudio", runtime)
        assert row.label == "None"
        assert row.icon == "volumeUp"

        asyncio.run(row.sub_menu_items[0].select(ctx, runtime))

        assert backend.operations() == ["show_talking_book_tool"]
        assert runtime.close_calls == [False]


def test_checkbox_rows_reflect_context(resolver: ControlResolver) -> None:
    element = canvas_element(editable(), attributes={"data-draggable-id": "d9"})
    page(element, activity=GAME)
    ctx = build_control_context(element)

    draggable = _menu_row(resolver, ctx, "toggleDraggable")
    right_answer = _menu_row(resolver, ctx, "togglePartOfRightAnswer")

    assert draggable.checked is True
    assert draggable.sub_label_l10n_id == "EditTab.Toolbox.DragActivity.DraggabilityMore"
    assert right_answer.checked is False
