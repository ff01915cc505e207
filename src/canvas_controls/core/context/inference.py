"""Best-effort classification of a canvas element by its structure."""
from __future__ import annotations

import re
from typing import Optional

from . import markers
from .element import ElementNode
from .models import ElementType

# data-bubble holds a JSON-ish spec with backtick quotes, e.g. {`style`:`caption`}
_BUBBLE_STYLE_RE = re.compile(r"[`\"']style[`\"']\s*:\s*[`\"']([\w-]+)[`\"']")


def bubble_style(element: ElementNode) -> Optional[str]:
    """Return the ``style`` declared in the element's ``data-bubble`` attribute."""
    match = _BUBBLE_STYLE_RE.search(element.get(markers.ATTR_BUBBLE, "") or "")
    return match.group(1) if match else None


def infer_element_type(element: ElementNode) -> Optional[ElementType]:
    """Guess the element type from its child structure and attributes.

    Returns None when nothing matches; callers fall back to ``none``.
    """
    image = element.find(markers.IMAGE_CONTAINER)
    has_text = element.find(markers.EDITABLE) is not None

    if element.find(markers.LINK_GRID) is not None:
        return ElementType.BOOK_LINK_GRID
    if element.has_class(markers.CANVAS_BUTTON):
        if image is not None and has_text:
            return ElementType.NAVIGATION_IMAGE_WITH_LABEL_BUTTON
        if image is not None:
            return ElementType.NAVIGATION_IMAGE_BUTTON
        if has_text:
            return ElementType.NAVIGATION_LABEL_BUTTON
        return None
    if element.find(markers.VIDEO_CONTAINER) is not None:
        return ElementType.VIDEO
    if image is not None:
        if element.get(markers.ATTR_ICON_TYPE) == "audio" or image.get(markers.ATTR_ICON_TYPE) == "audio":
            return ElementType.SOUND
        return ElementType.IMAGE
    if element.find(markers.RECTANGLE) is not None:
        return ElementType.RECTANGLE
    if has_text:
        return ElementType.CAPTION if bubble_style(element) == "caption" else ElementType.SPEECH
    return None


__all__ = ["infer_element_type", "bubble_style"]
