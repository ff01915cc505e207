from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional

from .element import ElementNode


class ElementType(str, Enum):
    """Semantic kinds of canvas element, each with its own definition."""

    IMAGE = "image"
    VIDEO = "video"
    SOUND = "sound"
    RECTANGLE = "rectangle"
    SPEECH = "speech"
    CAPTION = "caption"
    BOOK_LINK_GRID = "book-link-grid"
    NAVIGATION_IMAGE_BUTTON = "navigation-image-button"
    NAVIGATION_IMAGE_WITH_LABEL_BUTTON = "navigation-image-with-label-button"
    NAVIGATION_LABEL_BUTTON = "navigation-label-button"
    NONE = "none"

    @classmethod
    def parse(cls, value: Any) -> Optional["ElementType"]:
        """Return the member for ``value`` or None when it is not a known type."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


@dataclass(frozen=True)
class ControlContext:
    """Immutable facts about the selected element.

    Every availability predicate is a function of one of these. Build a
    fresh one whenever the selection or the element changes; the element
    and page references are carried for command actions only and take no
    part in equality.
    """

    element_type: ElementType = ElementType.NONE

    # image
    has_image: bool = False
    has_real_image: bool = False
    is_placeholder: bool = False
    missing_metadata: bool = False
    can_modify_image: bool = False
    is_cropped: bool = False
    is_background_image: bool = False
    can_expand_to_fill_space: bool = False

    # video
    has_video: bool = False
    can_play_video_earlier: bool = False
    can_play_video_later: bool = False

    # text and shapes
    has_text: bool = False
    text_has_audio: bool = False
    has_auto_height: bool = True
    is_rectangle: bool = False
    rectangle_has_background: bool = False
    is_link_grid: bool = False

    # buttons
    is_button: bool = False
    is_navigation_button: bool = False

    # games and audio
    activity: str = ""
    is_in_draggable_game: bool = False
    is_special_game_element: bool = False
    can_choose_audio: bool = False
    current_sound: str = "none"
    has_current_image_sound: bool = False
    can_toggle_draggability: bool = False
    has_draggable_id: bool = False
    has_draggable_target: bool = False

    element: Optional[ElementNode] = field(default=None, compare=False, repr=False)
    page: Optional[ElementNode] = field(default=None, compare=False, repr=False)

    def facts(self) -> Dict[str, Any]:
        """Return the plain facts (no element references) as a dict."""
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.compare}
        data["element_type"] = self.element_type.value
        return data


__all__ = ["ElementType", "ControlContext"]
