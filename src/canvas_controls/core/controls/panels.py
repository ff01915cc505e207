"""Tool panel state and the renderers for panel-kind controls.

Renderers are pure: they read the context and the caller-owned panel state
and return a declarative ``PanelView``. Which panels appear at all is the
resolver's decision; which fields inside a panel are enabled is decided
here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Tuple

if TYPE_CHECKING:
    from canvas_controls.core.context.models import ControlContext

BUBBLE_STYLES: Tuple[str, ...] = (
    "caption",
    "pointedArcs",
    "none",
    "speech",
    "ellipse",
    "thought",
    "circle",
    "rectangle",
)
OUTLINE_COLORS: Tuple[str, ...] = ("none", "yellow", "crimson")
IMAGE_FILL_MODES: Tuple[str, ...] = ("padded", "contain", "cover")


@dataclass(frozen=True)
class BubbleSpec:
    """The parts of a comic bubble's spec the panel cares about."""

    style: str = "none"
    order: int = 0
    background_colors: Tuple[str, ...] = ()

    @property
    def is_child(self) -> bool:
        return self.order > 1

    @property
    def is_bubble(self) -> bool:
        return self.style not in ("none", "caption")

    @property
    def supports_rounded_corners(self) -> bool:
        if "transparent" in self.background_colors:
            return False
        if self.style == "caption":
            return True
        if self.style == "none":
            return len(self.background_colors) > 0
        return False


@dataclass
class CanvasToolsPanelState:
    """Live panel state; owned and updated by the surrounding UI."""

    style: str = "none"
    show_tail: bool = False
    rounded_corners: bool = False
    outline_color: Optional[str] = None
    text_color_swatch: Optional[str] = None
    text_color_is_default: bool = True
    background_color_swatch: Optional[str] = None
    percent_transparency: Optional[str] = None
    image_fill_mode: str = "contain"
    current_bubble: Optional[BubbleSpec] = None


@dataclass(frozen=True)
class PanelField:
    name: str
    value: Any
    enabled: bool = True
    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PanelView:
    control_id: str
    label: str
    fields: Tuple[PanelField, ...] = field(default_factory=tuple)

    def field_named(self, name: str) -> PanelField:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)


def render_bubble_style(ctx: "ControlContext", state: CanvasToolsPanelState) -> PanelView:
    return PanelView(
        "bubbleStyle",
        "Style",
        (PanelField("style", state.style, options=BUBBLE_STYLES),),
    )


def render_show_tail(ctx: "ControlContext", state: CanvasToolsPanelState) -> PanelView:
    # Child bubbles hang off their parent; buttons never have tails.
    child = state.current_bubble is not None and state.current_bubble.is_child
    return PanelView(
        "showTail",
        "Show Tail",
        (PanelField("showTail", state.show_tail, enabled=not child and not ctx.is_button),),
    )


def render_rounded_corners(ctx: "ControlContext", state: CanvasToolsPanelState) -> PanelView:
    bubble = state.current_bubble
    supported = bubble is not None and bubble.supports_rounded_corners
    return PanelView(
        "roundedCorners",
        "Rounded Corners",
        (PanelField("roundedCorners", state.rounded_corners, enabled=supported),),
    )


def render_outline_color(ctx: "ControlContext", state: CanvasToolsPanelState) -> PanelView:
    bubble = state.current_bubble
    return PanelView(
        "outlineColor",
        "Outer Outline Color",
        (
            PanelField(
                "outlineColor",
                state.outline_color or "none",
                enabled=bubble is not None and bubble.is_bubble,
                options=OUTLINE_COLORS,
            ),
        ),
    )


def render_text_color(ctx: "ControlContext", state: CanvasToolsPanelState) -> PanelView:
    return PanelView(
        "textColor",
        "Text Color",
        (
            PanelField("swatch", state.text_color_swatch),
            PanelField("isDefault", state.text_color_is_default),
        ),
    )


def render_background_color(ctx: "ControlContext", state: CanvasToolsPanelState) -> PanelView:
    is_caption = state.current_bubble is not None and state.current_bubble.style == "caption"
    return PanelView(
        "backgroundColor",
        "Background Color",
        (
            PanelField("swatch", state.background_color_swatch),
            PanelField("transparency", state.percent_transparency),
            # Captions pick a color without the transparency slider.
            PanelField("allowTransparency", not is_caption),
        ),
    )


def render_image_fill_mode(ctx: "ControlContext", state: CanvasToolsPanelState) -> PanelView:
    return PanelView(
        "imageFillMode",
        "Image Fit",
        (PanelField("imageFillMode", state.image_fill_mode, enabled=ctx.has_image, options=IMAGE_FILL_MODES),),
    )


__all__ = [
    "BUBBLE_STYLES",
    "OUTLINE_COLORS",
    "IMAGE_FILL_MODES",
    "BubbleSpec",
    "CanvasToolsPanelState",
    "PanelField",
    "PanelView",
    "render_bubble_style",
    "render_show_tail",
    "render_rounded_corners",
    "render_outline_color",
    "render_text_color",
    "render_background_color",
    "render_image_fill_mode",
]
