"""Command controls and their actions.

Actions are thin: they pick the selected element out of the context and
hand the work to the ``EditorBackend``. Row builders for controls whose
menu row depends on live state (checkmarks, the sound submenu) live here
too.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, List, Tuple

from canvas_controls.core.exceptions import CanvasControlsError

from .backend import EditorBackend
from .models import (
    Action,
    CommandControl,
    CommandRow,
    ControlRuntime,
    HelpRow,
    MenuHints,
    RowAvailability,
    ToolbarHints,
)

if TYPE_CHECKING:
    from canvas_controls.core.context.element import ElementNode
    from canvas_controls.core.context.models import ControlContext

FEATURE_CANVAS = "canvas"
CHOOSE_SOUND_HELP = (
    'You can use elevenlabs.io to create sound effects if your book is non-commercial. '
    'Make sure to give credit to "elevenlabs.io".'
)


def _element(ctx: "ControlContext") -> "ElementNode":
    if ctx.element is None:
        raise CanvasControlsError(
            "Command needs the selected element but the context has none",
            context={"element_type": ctx.element_type.value},
        )
    return ctx.element


def _run(fn: Callable[["ElementNode"], None], *, close_menu: bool = False) -> Action:
    """Wrap a back-end call taking the element into an async action."""

    async def action(ctx: "ControlContext", runtime: ControlRuntime) -> None:
        if close_menu:
            runtime.close_menu(True)
        fn(_element(ctx))

    return action


async def _no_action(ctx: "ControlContext", runtime: ControlRuntime) -> None:
    return None


def _checkbox_row(control_id: str, label: str, l10n_id: str, action: Action, checked: bool, **extra) -> CommandRow:
    return CommandRow(
        id=control_id,
        label=label,
        l10n_id=l10n_id,
        icon="check",
        checked=checked,
        on_select=action,
        **extra,
    )


def _sound_label(sound_id: str) -> str:
    return re.sub(r"\.mp3$", "", sound_id)


def _audio_row_for_text(ctx: "ControlContext", runtime: ControlRuntime, backend: EditorBackend) -> CommandRow:
    async def use_talking_book_tool(row_ctx: "ControlContext", row_runtime: ControlRuntime) -> None:
        runtime.close_menu(False)
        backend.show_talking_book_tool()

    return CommandRow(
        id="chooseAudio",
        label="A Recording" if ctx.text_has_audio else "None",
        l10n_id="EditTab.Toolbox.DragActivity.ChooseSound",
        sub_label_l10n_id="EditTab.Image.PlayWhenTouched",
        feature_name=FEATURE_CANVAS,
        icon="volumeUp",
        on_select=_no_action,
        sub_menu_items=(
            CommandRow(
                id="useTalkingBookTool",
                label="Use Talking Book Tool",
                l10n_id="UseTalkingBookTool",
                feature_name=FEATURE_CANVAS,
                on_select=use_talking_book_tool,
            ),
        ),
    )


def _audio_row_for_image(ctx: "ControlContext", runtime: ControlRuntime, backend: EditorBackend) -> CommandRow:
    sound_id = ctx.current_sound
    label = _sound_label(sound_id)

    async def remove_audio(row_ctx: "ControlContext", row_runtime: ControlRuntime) -> None:
        backend.set_element_sound(_element(ctx), None)
        runtime.close_menu(False)

    async def play_current(row_ctx: "ControlContext", row_runtime: ControlRuntime) -> None:
        if ctx.page is not None and ctx.has_current_image_sound:
            await backend.play_sound(sound_id, ctx.page)
        runtime.close_menu(False)

    async def choose_sound(row_ctx: "ControlContext", row_runtime: ControlRuntime) -> None:
        runtime.close_menu(True)
        new_sound_id = await backend.choose_sound_file()
        if not new_sound_id or ctx.page is None:
            return
        backend.set_element_sound(_element(ctx), new_sound_id)
        await backend.play_sound(new_sound_id, ctx.page)

    return CommandRow(
        id="chooseAudio",
        label="None" if label == "none" else label,
        l10n_id="EditTab.Toolbox.DragActivity.ChooseSound",
        sub_label_l10n_id="EditTab.Image.PlayWhenTouched",
        feature_name=FEATURE_CANVAS,
        icon="volumeUp",
        on_select=_no_action,
        sub_menu_items=(
            CommandRow(
                id="removeAudio",
                label="None",
                l10n_id="EditTab.Toolbox.DragActivity.None",
                feature_name=FEATURE_CANVAS,
                on_select=remove_audio,
            ),
            CommandRow(
                id="playCurrentAudio",
                label=label,
                l10n_id="ARecording",
                feature_name=FEATURE_CANVAS,
                availability=RowAvailability(visible=lambda item_ctx: item_ctx.has_current_image_sound),
                on_select=play_current,
            ),
            CommandRow(
                id="chooseAudio",
                label="Choose...",
                l10n_id="EditTab.Toolbox.DragActivity.ChooseSound",
                feature_name=FEATURE_CANVAS,
                help_row=HelpRow(
                    id="chooseAudio.help",
                    text=CHOOSE_SOUND_HELP,
                    l10n_id="EditTab.Toolbox.DragActivity.ChooseSound.Help",
                    separator_above=True,
                ),
                on_select=choose_sound,
            ),
        ),
    )


def build_command_controls(backend: EditorBackend) -> Tuple[CommandControl, ...]:
    """Create every command control, bound to ``backend``."""

    async def set_destination(ctx: "ControlContext", runtime: ControlRuntime) -> None:
        runtime.close_menu(True)
        element = _element(ctx)
        url = await backend.choose_link_destination(element, element.get("data-href", "") or "")
        backend.set_link_destination(element, url or None)

    def _move_video(offset: int) -> Action:
        async def action(ctx: "ControlContext", runtime: ControlRuntime) -> None:
            backend.move_video(_element(ctx), offset)

        return action

    toggle_auto_height = _run(backend.toggle_auto_height)
    toggle_fill_background = _run(backend.toggle_fill_background)
    toggle_draggability = _run(backend.toggle_draggability)
    toggle_right_answer = _run(backend.toggle_part_of_right_answer)

    controls: List[CommandControl] = [
        CommandControl(
            id="chooseImage",
            label="Choose image from your computer...",
            l10n_id="EditTab.Image.ChooseImage",
            icon="search",
            action=_run(backend.choose_image, close_menu=True),
        ),
        CommandControl(
            id="pasteImage",
            label="Paste image",
            l10n_id="EditTab.Image.PasteImage",
            icon="paste",
            action=_run(backend.paste_image),
        ),
        CommandControl(
            id="copyImage",
            label="Copy image",
            l10n_id="EditTab.Image.CopyImage",
            icon="copy",
            action=_run(backend.copy_image),
        ),
        CommandControl(
            id="missingMetadata",
            label="Set Image Information...",
            l10n_id="EditTab.Image.EditMetadataOverlay",
            icon="missingMetadata",
            help_row=HelpRow(
                id="missingMetadata.help",
                text="Set the copyright and license for this image.",
                l10n_id="EditTab.Image.EditMetadataOverlay.MenuHelp",
            ),
            menu=MenuHints(icon="copyright", sub_label_l10n_id="EditTab.Image.EditMetadataOverlayMore"),
            action=_run(backend.edit_image_metadata, close_menu=True),
        ),
        CommandControl(
            id="resetImage",
            label="Reset Image",
            l10n_id="EditTab.Image.Reset",
            icon="resetImage",
            action=_run(backend.reset_image_cropping),
        ),
        CommandControl(
            id="expandToFillSpace",
            label="Fit Space",
            l10n_id="EditTab.Toolbox.ComicTool.Options.FillSpace",
            icon="fillSpace",
            menu=MenuHints(icon="fillImage"),
            action=_run(backend.expand_image_to_fill_space),
        ),
        CommandControl(
            id="chooseVideo",
            label="Choose Video from your Computer...",
            l10n_id="EditTab.Toolbox.ComicTool.Options.ChooseVideo",
            icon="search",
            action=_run(backend.choose_video, close_menu=True),
        ),
        CommandControl(
            id="recordVideo",
            label="Record yourself...",
            l10n_id="EditTab.Toolbox.ComicTool.Options.RecordYourself",
            icon="circle",
            action=_run(backend.record_video, close_menu=True),
        ),
        CommandControl(
            id="playVideoEarlier",
            label="Play Earlier",
            l10n_id="EditTab.Toolbox.ComicTool.Options.PlayEarlier",
            icon="arrowUpward",
            action=_move_video(-1),
        ),
        CommandControl(
            id="playVideoLater",
            label="Play Later",
            l10n_id="EditTab.Toolbox.ComicTool.Options.PlayLater",
            icon="arrowDownward",
            action=_move_video(1),
        ),
        CommandControl(
            id="format",
            label="Format",
            l10n_id="EditTab.Toolbox.ComicTool.Options.Format",
            icon="cog",
            action=_run(backend.show_format_dialog, close_menu=True),
        ),
        CommandControl(
            id="copyText",
            label="Copy Text",
            l10n_id="EditTab.Toolbox.ComicTool.Options.CopyText",
            icon="copy",
            action=_run(backend.copy_text),
        ),
        CommandControl(
            id="pasteText",
            label="Paste Text",
            l10n_id="EditTab.Toolbox.ComicTool.Options.PasteText",
            icon="paste",
            action=_run(backend.paste_text),
        ),
        CommandControl(
            id="autoHeight",
            label="Auto Height",
            l10n_id="EditTab.Toolbox.ComicTool.Options.AutoHeight",
            icon="check",
            menu=MenuHints(
                build_menu_item=lambda ctx, runtime: _checkbox_row(
                    "autoHeight",
                    "Auto Height",
                    "EditTab.Toolbox.ComicTool.Options.AutoHeight",
                    toggle_auto_height,
                    ctx.has_auto_height,
                ),
            ),
            action=toggle_auto_height,
        ),
        CommandControl(
            id="fillBackground",
            label="Fill Background",
            l10n_id="EditTab.Toolbox.ComicTool.Options.FillBackground",
            icon="check",
            menu=MenuHints(
                build_menu_item=lambda ctx, runtime: _checkbox_row(
                    "fillBackground",
                    "Fill Background",
                    "EditTab.Toolbox.ComicTool.Options.FillBackground",
                    toggle_fill_background,
                    ctx.rectangle_has_background,
                ),
            ),
            action=toggle_fill_background,
        ),
        CommandControl(
            id="addChildBubble",
            label="Add Child Bubble",
            l10n_id="EditTab.Toolbox.ComicTool.Options.AddChildBubble",
            action=_run(backend.add_child_bubble),
        ),
        CommandControl(
            id="setDestination",
            label="Set Destination",
            l10n_id="EditTab.Toolbox.CanvasTool.SetDest",
            icon="link",
            feature_name=FEATURE_CANVAS,
            toolbar=ToolbarHints(relative_size=0.8),
            action=set_destination,
        ),
        CommandControl(
            id="linkGridChooseBooks",
            label="Choose books...",
            l10n_id="EditTab.Toolbox.CanvasTool.LinkGrid.ChooseBooks",
            icon="cog",
            action=_run(backend.choose_link_grid_books, close_menu=True),
        ),
        CommandControl(
            id="duplicate",
            label="Duplicate",
            l10n_id="EditTab.Toolbox.ComicTool.Options.Duplicate",
            icon="duplicate",
            action=_run(backend.duplicate_element),
        ),
        CommandControl(
            id="delete",
            label="Delete",
            l10n_id="Common.Delete",
            icon="delete",
            action=_run(backend.delete_element),
        ),
        CommandControl(
            id="toggleDraggable",
            label="Draggable",
            l10n_id="EditTab.Toolbox.DragActivity.Draggability",
            icon="check",
            menu=MenuHints(
                build_menu_item=lambda ctx, runtime: _checkbox_row(
                    "toggleDraggable",
                    "Draggable",
                    "EditTab.Toolbox.DragActivity.Draggability",
                    toggle_draggability,
                    ctx.has_draggable_id,
                    sub_label_l10n_id="EditTab.Toolbox.DragActivity.DraggabilityMore",
                ),
            ),
            action=toggle_draggability,
        ),
        CommandControl(
            id="togglePartOfRightAnswer",
            label="Part of the right answer",
            l10n_id="EditTab.Toolbox.DragActivity.PartOfRightAnswer",
            icon="check",
            menu=MenuHints(
                build_menu_item=lambda ctx, runtime: _checkbox_row(
                    "togglePartOfRightAnswer",
                    "Part of the right answer",
                    "EditTab.Toolbox.DragActivity.PartOfRightAnswer",
                    toggle_right_answer,
                    ctx.has_draggable_target,
                    sub_label_l10n_id="EditTab.Toolbox.DragActivity.PartOfRightAnswerMore.v2",
                ),
            ),
            action=toggle_right_answer,
        ),
        CommandControl(
            id="chooseAudio",
            label="Choose...",
            l10n_id="EditTab.Toolbox.DragActivity.ChooseSound",
            icon="volumeUp",
            feature_name=FEATURE_CANVAS,
            menu=MenuHints(
                build_menu_item=lambda ctx, runtime: (
                    _audio_row_for_text(ctx, runtime, backend)
                    if ctx.has_text
                    else _audio_row_for_image(ctx, runtime, backend)
                ),
            ),
            action=_no_action,
        ),
    ]
    return tuple(controls)


__all__ = ["build_command_controls", "CHOOSE_SOUND_HELP", "FEATURE_CANVAS"]
