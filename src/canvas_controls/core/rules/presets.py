"""Named rule fragments shared between element definitions.

Each preset covers one concern. Element definitions merge the presets
they need and layer type-specific overrides on top (see ``merge_rules``).
"""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from .models import AvailabilityRule, AvailabilityRulesMap, Surface, SurfaceRule

if TYPE_CHECKING:
    from canvas_controls.core.context.models import ControlContext


def _delete_enabled(ctx: "ControlContext") -> bool:
    if ctx.is_background_image:
        return ctx.has_real_image
    if ctx.is_special_game_element:
        return False
    return True


IMAGE_RULES: AvailabilityRulesMap = MappingProxyType(
    {
        "missingMetadata": AvailabilityRule(
            visible=lambda ctx: ctx.missing_metadata,
            enabled=lambda ctx: ctx.has_real_image,
            surface_policy={
                Surface.MENU: SurfaceRule(visible=lambda ctx: ctx.has_image and ctx.can_modify_image),
            },
        ),
        "chooseImage": AvailabilityRule(
            visible=lambda ctx: ctx.has_image,
            enabled=lambda ctx: ctx.can_modify_image,
        ),
        "pasteImage": AvailabilityRule(
            visible=lambda ctx: ctx.has_image,
            enabled=lambda ctx: ctx.can_modify_image,
        ),
        "copyImage": AvailabilityRule(
            visible=lambda ctx: ctx.has_image,
            enabled=lambda ctx: ctx.has_real_image,
        ),
        "resetImage": AvailabilityRule(
            visible=lambda ctx: ctx.has_image,
            enabled=lambda ctx: ctx.is_cropped,
        ),
        "expandToFillSpace": AvailabilityRule(
            visible=lambda ctx: ctx.is_background_image,
            enabled=lambda ctx: ctx.can_expand_to_fill_space,
        ),
        "imageFillMode": AvailabilityRule(visible=lambda ctx: ctx.has_image),
    }
)

VIDEO_RULES: AvailabilityRulesMap = MappingProxyType(
    {
        "chooseVideo": AvailabilityRule(visible=lambda ctx: ctx.has_video),
        "recordVideo": AvailabilityRule(visible=lambda ctx: ctx.has_video),
        "playVideoEarlier": AvailabilityRule(
            visible=lambda ctx: ctx.has_video,
            enabled=lambda ctx: ctx.can_play_video_earlier,
        ),
        "playVideoLater": AvailabilityRule(
            visible=lambda ctx: ctx.has_video,
            enabled=lambda ctx: ctx.can_play_video_later,
        ),
    }
)

AUDIO_RULES: AvailabilityRulesMap = MappingProxyType(
    {
        "chooseAudio": AvailabilityRule(visible=lambda ctx: ctx.can_choose_audio),
    }
)

TEXT_RULES: AvailabilityRulesMap = MappingProxyType(
    {
        "format": AvailabilityRule(visible=lambda ctx: ctx.has_text),
        "copyText": AvailabilityRule(visible=lambda ctx: ctx.has_text),
        "pasteText": AvailabilityRule(visible=lambda ctx: ctx.has_text),
        # Buttons size themselves.
        "autoHeight": AvailabilityRule(visible=lambda ctx: ctx.has_text and not ctx.is_button),
        "fillBackground": AvailabilityRule(visible=lambda ctx: ctx.is_rectangle),
        "textColor": AvailabilityRule(visible=lambda ctx: ctx.has_text),
        "backgroundColor": AvailabilityRule(visible=lambda ctx: ctx.has_text),
    }
)

BUBBLE_RULES: AvailabilityRulesMap = MappingProxyType(
    {
        "addChildBubble": AvailabilityRule(
            visible=lambda ctx: ctx.has_text and not ctx.is_in_draggable_game,
        ),
        "bubbleStyle": AvailabilityRule(visible=lambda ctx: ctx.has_text),
        "showTail": AvailabilityRule(visible=lambda ctx: ctx.has_text),
        "roundedCorners": AvailabilityRule(visible=lambda ctx: ctx.has_text),
    }
)

WHOLE_ELEMENT_RULES: AvailabilityRulesMap = MappingProxyType(
    {
        "duplicate": AvailabilityRule(
            visible=lambda ctx: (
                not ctx.is_link_grid and not ctx.is_background_image and not ctx.is_special_game_element
            ),
        ),
        "delete": AvailabilityRule(
            enabled=_delete_enabled,
            surface_policy={
                Surface.TOOLBAR: SurfaceRule(
                    visible=lambda ctx: not ctx.is_link_grid and not ctx.is_special_game_element,
                ),
                Surface.MENU: SurfaceRule(visible=lambda ctx: not ctx.is_link_grid),
            },
        ),
        "toggleDraggable": AvailabilityRule(visible=lambda ctx: ctx.can_toggle_draggability),
        "togglePartOfRightAnswer": AvailabilityRule(
            visible=lambda ctx: ctx.can_toggle_draggability and ctx.has_draggable_id,
        ),
        "linkGridChooseBooks": AvailabilityRule(visible=lambda ctx: ctx.is_link_grid),
        "setDestination": AvailabilityRule(visible=lambda ctx: ctx.is_navigation_button),
    }
)

PRESETS = MappingProxyType(
    {
        "image": IMAGE_RULES,
        "video": VIDEO_RULES,
        "audio": AUDIO_RULES,
        "text": TEXT_RULES,
        "bubble": BUBBLE_RULES,
        "wholeElement": WHOLE_ELEMENT_RULES,
    }
)


__all__ = [
    "IMAGE_RULES",
    "VIDEO_RULES",
    "AUDIO_RULES",
    "TEXT_RULES",
    "BUBBLE_RULES",
    "WHOLE_ELEMENT_RULES",
    "PRESETS",
]
