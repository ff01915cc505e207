"""Build a ``ControlContext`` snapshot from the selected element.

The builder only reads the element tree. Type inference is pluggable and
may fail; a miss is logged and the fallback type is used instead, so
building a context never raises for an unclassifiable element.
"""
from __future__ import annotations

import logging
from typing import Callable, Collection, Optional, Union

from canvas_controls.core.config.domains.context import ContextConfig
from canvas_controls.core.utils.profiling import span

from . import markers
from .element import ElementNode, Selection
from .inference import infer_element_type
from .models import ControlContext, ElementType

logger = logging.getLogger(__name__)

TypeInference = Callable[[ElementNode], Union[ElementType, str, None]]


def _default_settings() -> ContextConfig:
    return ContextConfig(config={})


def can_toggle_draggability(
    element: ElementNode,
    page: Optional[ElementNode],
    *,
    is_in_draggable_game: bool,
    activity: str,
    settings: ContextConfig,
) -> bool:
    """Whether the draggable flag may be switched on this element.

    The combination below must stay exactly as written: fixed game
    scaffolding (answer markers, sentence-order items, background images,
    audio icons, embedded rectangles, gifs) is never made draggable.
    """
    return (
        page is not None
        and is_in_draggable_game
        and activity != settings.sort_sentence_activity
        and not element.has_class(markers.DRAG_ITEM_WRONG)
        and not element.has_class(markers.DRAG_ITEM_CORRECT)
        and not element.has_class(markers.GIF)
        and element.find(markers.RECTANGLE) is None
        and not element.has_class(markers.DRAG_ITEM_ORDER_SENTENCE)
        and not element.has_class(markers.BACKGROUND_IMAGE)
        and element.query_attribute(markers.ATTR_ICON_TYPE, "audio") is None
    )


def _classify(
    element: ElementNode,
    infer: TypeInference,
    known_types: Collection[ElementType],
    settings: ContextConfig,
) -> ElementType:
    fallback = ElementType.parse(settings.fallback_element_type) or ElementType.NONE
    try:
        inferred = infer(element)
    except Exception:
        logger.warning(
            "Element type inference failed for element id=%s class=%r; using %s",
            element.id,
            element.class_string,
            fallback.value,
            exc_info=True,
        )
        return fallback

    element_type = ElementType.parse(inferred) if inferred is not None else None
    if element_type is None:
        logger.warning(
            "Could not infer canvas element type for element id=%s class=%r; using %s",
            element.id,
            element.class_string,
            fallback.value,
        )
        return fallback
    if element_type not in known_types:
        logger.warning(
            "No definition for canvas element type %s (element id=%s class=%r); using %s",
            element_type.value,
            element.id,
            element.class_string,
            fallback.value,
        )
        return fallback
    return element_type


def _video_order(element: ElementNode, page: Optional[ElementNode]) -> tuple[bool, bool]:
    video = element.find(markers.VIDEO_CONTAINER)
    if video is None or page is None:
        return False, False
    videos = page.find_all(markers.VIDEO_CONTAINER)
    index = next((i for i, node in enumerate(videos) if node is video), None)
    if index is None:
        return False, False
    return index > 0, index < len(videos) - 1


def build_control_context(
    element: ElementNode,
    *,
    infer: TypeInference = infer_element_type,
    known_types: Optional[Collection[ElementType]] = None,
    text_has_audio: bool = False,
    can_expand_to_fill_space: bool = False,
    settings: Optional[ContextConfig] = None,
) -> ControlContext:
    """Snapshot the facts every availability rule is evaluated against.

    Args:
        element: The selected canvas element (attached to its page tree).
        infer: Type inference callable; may return None for "unknown".
        known_types: Types that have an element definition. Defaults to all.
        text_has_audio: Whether the element's text already has a recording
            (looked up by the audio subsystem).
        can_expand_to_fill_space: Whether a background image is smaller than
            its canvas (answered by the canvas layout manager).
        settings: Context settings; bundled defaults when omitted.
    """
    settings = settings or _default_settings()
    known = set(known_types) if known_types is not None else set(ElementType)

    with span("context.build"):
        element_type = _classify(element, infer, known, settings)

        page = element.closest(markers.PAGE)
        activity = (page.get(markers.ATTR_ACTIVITY, "") if page is not None else "") or ""
        is_in_draggable_game = activity.startswith(settings.draggable_activity_prefix)

        container = element.find(markers.IMAGE_CONTAINER)
        img = container.find(tag="img") if container is not None else None
        has_image = container is not None
        src = (img.get("src", "") if img is not None else "") or ""
        is_placeholder = img is not None and settings.placeholder_pattern.search(src) is not None
        load_error = img is not None and (
            img.has_class(markers.IMAGE_LOAD_ERROR)
            or (img.parent is not None and img.parent.has_class(markers.IMAGE_LOAD_ERROR))
        )
        has_real_image = img is not None and not is_placeholder and not load_error

        rectangle = element.find(markers.RECTANGLE)
        has_text = element.find(markers.EDITABLE) is not None

        sound = element.get(markers.ATTR_SOUND) or markers.NO_SOUND
        draggable_id = element.get(markers.ATTR_DRAGGABLE_ID) or ""
        has_draggable_target = bool(
            draggable_id
            and page is not None
            and page.query_attribute(markers.ATTR_TARGET_OF, draggable_id) is not None
        )
        play_earlier, play_later = _video_order(element, page)

        return ControlContext(
            element_type=element_type,
            has_image=has_image,
            has_real_image=has_real_image,
            is_placeholder=is_placeholder,
            missing_metadata=(
                has_image and img is not None and not is_placeholder and not img.get(markers.ATTR_COPYRIGHT)
            ),
            can_modify_image=(
                container is not None and not container.has_class(markers.UNMODIFIABLE_IMAGE) and img is not None
            ),
            is_cropped=bool(img is not None and img.style_value("width")),
            is_background_image=element.has_class(markers.BACKGROUND_IMAGE),
            can_expand_to_fill_space=can_expand_to_fill_space,
            has_video=element.find(markers.VIDEO_CONTAINER) is not None,
            can_play_video_earlier=play_earlier,
            can_play_video_later=play_later,
            has_text=has_text,
            text_has_audio=text_has_audio,
            has_auto_height=not element.has_class(markers.NO_AUTO_HEIGHT),
            is_rectangle=rectangle is not None,
            rectangle_has_background=rectangle is not None and rectangle.has_class(markers.THEME_BACKGROUND),
            is_link_grid=element.find(markers.LINK_GRID) is not None,
            is_button=element.has_class(markers.CANVAS_BUTTON),
            is_navigation_button=element_type.value.startswith("navigation-"),
            activity=activity,
            is_in_draggable_game=is_in_draggable_game,
            is_special_game_element=element.has_class(markers.DRAG_ITEM_ORDER_SENTENCE),
            can_choose_audio=is_in_draggable_game and (has_image or has_text),
            current_sound=sound,
            has_current_image_sound=sound != markers.NO_SOUND,
            can_toggle_draggability=can_toggle_draggability(
                element,
                page,
                is_in_draggable_game=is_in_draggable_game,
                activity=activity,
                settings=settings,
            ),
            has_draggable_id=bool(draggable_id),
            has_draggable_target=has_draggable_target,
            element=element,
            page=page,
        )


def build_context_for_selection(
    selection: Selection,
    *,
    known_types: Optional[Collection[ElementType]] = None,
    settings: Optional[ContextConfig] = None,
) -> ControlContext:
    """Build a context for a loaded selection, taking external facts from its hints."""
    return build_control_context(
        selection.element,
        known_types=known_types,
        text_has_audio=bool(selection.hint("textHasAudio", False)),
        can_expand_to_fill_space=bool(selection.hint("canExpandToFillSpace", False)),
        settings=settings,
    )


__all__ = ["build_control_context", "build_context_for_selection", "can_toggle_draggability", "TypeInference"]
