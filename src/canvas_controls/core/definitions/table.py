"""Element definitions for every canvas element type.

Each definition spells out its surfaces explicitly so a reader can see
what an element offers without following indirection. Rules come from
the shared presets, with per-type overrides merged last. Every type lists
the ``gameDraggable`` section; its rules hide the toggles outside drag games.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Union

from canvas_controls.core.context.models import ElementType
from canvas_controls.core.exceptions import UnknownControlError
from canvas_controls.core.rules import (
    AUDIO_RULES,
    BUBBLE_RULES,
    EXCLUDE,
    IMAGE_RULES,
    TEXT_RULES,
    VIDEO_RULES,
    WHOLE_ELEMENT_RULES,
    AvailabilityRule,
    Surface,
    SurfaceRule,
    merge_rules,
)

from .models import SPACER, ElementDefinition

logger = logging.getLogger(__name__)

_TEXT_ELEMENT_RULES = merge_rules(AUDIO_RULES, BUBBLE_RULES, TEXT_RULES, WHOLE_ELEMENT_RULES)

_NAVIGATION_IMAGE_RULES = merge_rules(
    IMAGE_RULES,
    TEXT_RULES,
    WHOLE_ELEMENT_RULES,
    {
        "setDestination": AvailabilityRule(visible=True),
        "imageFillMode": AvailabilityRule(visible=lambda ctx: ctx.has_image),
        "textColor": AvailabilityRule(visible=lambda ctx: ctx.has_text),
        "backgroundColor": AvailabilityRule(visible=True),
        "missingMetadata": AvailabilityRule(
            surface_policy={
                Surface.TOOLBAR: SurfaceRule(visible=False),
                Surface.MENU: SurfaceRule(
                    visible=lambda ctx: ctx.has_image and ctx.can_modify_image,
                    enabled=lambda ctx: ctx.has_real_image,
                ),
            },
        ),
    },
)

_NAVIGATION_IMAGE_TOOLBAR = ("setDestination", "chooseImage", "pasteImage", SPACER, "duplicate", "delete")
_TEXT_TOOLBAR = ("format", SPACER, "duplicate", "delete")

IMAGE = ElementDefinition(
    type=ElementType.IMAGE,
    menu_sections=("image", "audio", "gameDraggable", "wholeElement"),
    toolbar=("missingMetadata", "chooseImage", "pasteImage", "expandToFillSpace", SPACER, "duplicate", "delete"),
    tool_panel=(),
    availability_rules=merge_rules(IMAGE_RULES, AUDIO_RULES, WHOLE_ELEMENT_RULES),
)

VIDEO = ElementDefinition(
    type=ElementType.VIDEO,
    menu_sections=("video", "gameDraggable", "wholeElement"),
    toolbar=("chooseVideo", "recordVideo", SPACER, "duplicate", "delete"),
    tool_panel=(),
    availability_rules=merge_rules(VIDEO_RULES, WHOLE_ELEMENT_RULES),
)

SOUND = ElementDefinition(
    type=ElementType.SOUND,
    menu_sections=("audio", "gameDraggable", "wholeElement"),
    toolbar=("duplicate", "delete"),
    tool_panel=(),
    availability_rules=merge_rules(AUDIO_RULES, WHOLE_ELEMENT_RULES),
)

RECTANGLE = ElementDefinition(
    type=ElementType.RECTANGLE,
    menu_sections=("audio", "bubble", "gameDraggable", "text", "wholeElement"),
    toolbar=_TEXT_TOOLBAR,
    tool_panel=("bubble", "text", "outline"),
    availability_rules=_TEXT_ELEMENT_RULES,
)

SPEECH = ElementDefinition(
    type=ElementType.SPEECH,
    menu_sections=("audio", "bubble", "gameDraggable", "text", "wholeElement"),
    toolbar=_TEXT_TOOLBAR,
    tool_panel=("bubble", "text", "outline"),
    availability_rules=_TEXT_ELEMENT_RULES,
)

CAPTION = ElementDefinition(
    type=ElementType.CAPTION,
    menu_sections=("audio", "bubble", "gameDraggable", "text", "wholeElement"),
    toolbar=_TEXT_TOOLBAR,
    tool_panel=("bubble", "text", "outline"),
    availability_rules=_TEXT_ELEMENT_RULES,
)

BOOK_LINK_GRID = ElementDefinition(
    type=ElementType.BOOK_LINK_GRID,
    menu_sections=("linkGrid", "gameDraggable", "wholeElement"),
    toolbar=("linkGridChooseBooks", SPACER, "duplicate", "delete"),
    tool_panel=("text",),
    availability_rules={
        "textColor": EXCLUDE,
        "toggleDraggable": WHOLE_ELEMENT_RULES["toggleDraggable"],
        "togglePartOfRightAnswer": WHOLE_ELEMENT_RULES["togglePartOfRightAnswer"],
    },
)

NAVIGATION_IMAGE_BUTTON = ElementDefinition(
    type=ElementType.NAVIGATION_IMAGE_BUTTON,
    menu_sections=("url", "image", "gameDraggable", "wholeElement"),
    toolbar=_NAVIGATION_IMAGE_TOOLBAR,
    tool_panel=("text", "imagePanel"),
    availability_rules=_NAVIGATION_IMAGE_RULES,
)

NAVIGATION_IMAGE_WITH_LABEL_BUTTON = ElementDefinition(
    type=ElementType.NAVIGATION_IMAGE_WITH_LABEL_BUTTON,
    menu_sections=("url", "image", "gameDraggable", "text", "wholeElement"),
    toolbar=_NAVIGATION_IMAGE_TOOLBAR,
    tool_panel=("text", "imagePanel"),
    availability_rules=_NAVIGATION_IMAGE_RULES,
)

NAVIGATION_LABEL_BUTTON = ElementDefinition(
    type=ElementType.NAVIGATION_LABEL_BUTTON,
    menu_sections=("url", "gameDraggable", "text", "wholeElement"),
    toolbar=("setDestination", SPACER, "duplicate", "delete"),
    tool_panel=("text",),
    availability_rules=merge_rules(
        TEXT_RULES,
        WHOLE_ELEMENT_RULES,
        {
            "setDestination": AvailabilityRule(visible=True),
            "backgroundColor": AvailabilityRule(visible=True),
        },
    ),
)

NONE = ElementDefinition(
    type=ElementType.NONE,
    menu_sections=("gameDraggable", "wholeElement"),
    toolbar=("duplicate", "delete"),
    tool_panel=(),
    availability_rules=WHOLE_ELEMENT_RULES,
)

CANVAS_ELEMENT_DEFINITIONS: Mapping[ElementType, ElementDefinition] = MappingProxyType(
    {
        definition.type: definition
        for definition in (
            IMAGE,
            VIDEO,
            SOUND,
            RECTANGLE,
            SPEECH,
            CAPTION,
            BOOK_LINK_GRID,
            NAVIGATION_IMAGE_BUTTON,
            NAVIGATION_IMAGE_WITH_LABEL_BUTTON,
            NAVIGATION_LABEL_BUTTON,
            NONE,
        )
    }
)


def get_definition(
    element_type: Union[ElementType, str],
    definitions: Mapping[ElementType, ElementDefinition] = CANVAS_ELEMENT_DEFINITIONS,
) -> ElementDefinition:
    """Definition for ``element_type``; unknown types get the ``none`` definition.

    Raises:
        UnknownControlError: If neither the type nor ``none`` is in ``definitions``.
    """
    parsed = ElementType.parse(element_type)
    if parsed is not None and parsed in definitions:
        return definitions[parsed]
    requested = str(getattr(element_type, "value", element_type))
    fallback = definitions.get(ElementType.NONE)
    if fallback is None:
        raise UnknownControlError(
            f"No element definition for type '{requested}' and no 'none' fallback",
            context={"element_type": requested},
        )
    logger.warning("No element definition for type %r; using 'none'", requested)
    return fallback


__all__ = [
    "CANVAS_ELEMENT_DEFINITIONS",
    "get_definition",
    "IMAGE",
    "VIDEO",
    "SOUND",
    "RECTANGLE",
    "SPEECH",
    "CAPTION",
    "BOOK_LINK_GRID",
    "NAVIGATION_IMAGE_BUTTON",
    "NAVIGATION_IMAGE_WITH_LABEL_BUTTON",
    "NAVIGATION_LABEL_BUTTON",
    "NONE",
]
