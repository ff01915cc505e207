"""Immutable control registry and section table.

The registry is built once (usually by ``build_default_registry``) and
passed to the resolver; there is no module-level registry instance.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from canvas_controls.core.exceptions import ControlConfigurationError, UnknownControlError
from canvas_controls.core.rules.models import Surface

from . import panels
from .backend import EditorBackend
from .commands import build_command_controls
from .models import CommandControl, ControlDefinition, PanelControl


@dataclass(frozen=True)
class ControlSection:
    """Named grouping of control ids, listed per surface."""

    id: str
    controls_by_surface: Mapping[Surface, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {Surface(k): tuple(v) for k, v in dict(self.controls_by_surface).items()}
        if Surface.TOOLBAR in normalized:
            raise ControlConfigurationError(
                f"Section '{self.id}' lists toolbar controls; toolbars are laid out per element",
                context={"section_id": self.id},
            )
        object.__setattr__(self, "controls_by_surface", MappingProxyType(normalized))

    def controls_for(self, surface: Surface) -> Tuple[str, ...]:
        return self.controls_by_surface.get(surface, ())

    def all_control_ids(self) -> Tuple[str, ...]:
        return tuple(cid for ids in self.controls_by_surface.values() for cid in ids)


class ControlRegistry:
    """Read-only lookup of controls and sections by id."""

    def __init__(self, controls: Iterable[ControlDefinition], sections: Iterable[ControlSection] = ()) -> None:
        by_id: Dict[str, ControlDefinition] = {}
        for control in controls:
            if control.kind not in ("command", "panel"):
                raise ControlConfigurationError(
                    f"Unknown control kind: {control.kind!r}", context={"control_id": control.id}
                )
            if control.id in by_id:
                raise ControlConfigurationError(
                    f"Duplicate control id: {control.id}", context={"control_id": control.id}
                )
            by_id[control.id] = control

        by_section: Dict[str, ControlSection] = {}
        for section in sections:
            if section.id in by_section:
                raise ControlConfigurationError(
                    f"Duplicate section id: {section.id}", context={"section_id": section.id}
                )
            by_section[section.id] = section

        self._controls: Mapping[str, ControlDefinition] = MappingProxyType(by_id)
        self._sections: Mapping[str, ControlSection] = MappingProxyType(by_section)

    def __contains__(self, control_id: object) -> bool:
        return control_id in self._controls

    def __len__(self) -> int:
        return len(self._controls)

    def has(self, control_id: str) -> bool:
        return control_id in self._controls

    def get(self, control_id: str) -> ControlDefinition:
        """Return the control for ``control_id``.

        Raises:
            UnknownControlError: If the id is not registered.
        """
        try:
            return self._controls[control_id]
        except KeyError:
            raise UnknownControlError(
                f"Unknown control: {control_id}. Available: {', '.join(self.list_names())}",
                context={"control_id": control_id},
            ) from None

    def find(self, control_id: str) -> Optional[ControlDefinition]:
        return self._controls.get(control_id)

    def list_names(self) -> List[str]:
        return sorted(self._controls)

    def commands(self) -> List[CommandControl]:
        return [c for c in self._controls.values() if isinstance(c, CommandControl)]

    def panels(self) -> List[PanelControl]:
        return [c for c in self._controls.values() if isinstance(c, PanelControl)]

    def has_section(self, section_id: str) -> bool:
        return section_id in self._sections

    def get_section(self, section_id: str) -> ControlSection:
        try:
            return self._sections[section_id]
        except KeyError:
            raise UnknownControlError(
                f"Unknown section: {section_id}. Available: {', '.join(self.list_section_names())}",
                context={"section_id": section_id},
            ) from None

    def list_section_names(self) -> List[str]:
        return sorted(self._sections)

    def sections(self) -> List[ControlSection]:
        return list(self._sections.values())


def _section(section_id: str, *, menu: Tuple[str, ...] = (), tool_panel: Tuple[str, ...] = ()) -> ControlSection:
    by_surface: Dict[Surface, Tuple[str, ...]] = {}
    if menu:
        by_surface[Surface.MENU] = menu
    if tool_panel:
        by_surface[Surface.TOOL_PANEL] = tool_panel
    return ControlSection(section_id, by_surface)


DEFAULT_SECTIONS: Tuple[ControlSection, ...] = (
    _section(
        "image",
        menu=("missingMetadata", "chooseImage", "pasteImage", "copyImage", "resetImage", "expandToFillSpace"),
    ),
    _section("imagePanel", tool_panel=("imageFillMode",)),
    _section("video", menu=("chooseVideo", "recordVideo", "playVideoEarlier", "playVideoLater")),
    _section("audio", menu=("chooseAudio",)),
    _section("gameDraggable", menu=("toggleDraggable", "togglePartOfRightAnswer")),
    _section("linkGrid", menu=("linkGridChooseBooks",)),
    _section("url", menu=("setDestination",)),
    _section("bubble", menu=("addChildBubble",), tool_panel=("bubbleStyle", "showTail", "roundedCorners")),
    _section("outline", tool_panel=("outlineColor",)),
    _section(
        "text",
        menu=("format", "copyText", "pasteText", "autoHeight", "fillBackground"),
        tool_panel=("textColor", "backgroundColor"),
    ),
    _section("wholeElement", menu=("duplicate", "delete")),
)


def build_panel_controls() -> Tuple[PanelControl, ...]:
    return (
        PanelControl(
            "imageFillMode", "Image Fit", panels.render_image_fill_mode,
            l10n_id="EditTab.Toolbox.CanvasTool.ImageFit",
        ),
        PanelControl(
            "bubbleStyle", "Style", panels.render_bubble_style,
            l10n_id="EditTab.Toolbox.ComicTool.Options.Style",
        ),
        PanelControl(
            "showTail", "Show Tail", panels.render_show_tail,
            l10n_id="EditTab.Toolbox.ComicTool.Options.ShowTail",
        ),
        PanelControl(
            "roundedCorners", "Rounded Corners", panels.render_rounded_corners,
            l10n_id="EditTab.Toolbox.ComicTool.Options.RoundedCorners",
        ),
        PanelControl(
            "textColor", "Text Color", panels.render_text_color,
            l10n_id="EditTab.Toolbox.ComicTool.Options.TextColor",
        ),
        PanelControl(
            "backgroundColor", "Background Color", panels.render_background_color,
            l10n_id="EditTab.Toolbox.ComicTool.Options.BackgroundColor",
        ),
        PanelControl(
            "outlineColor", "Outline Color", panels.render_outline_color,
            l10n_id="EditTab.Toolbox.ComicTool.Options.OutlineColor",
        ),
    )


def build_default_registry(backend: EditorBackend) -> ControlRegistry:
    """Registry with every editor control, command actions bound to ``backend``."""
    return ControlRegistry(
        (*build_command_controls(backend), *build_panel_controls()),
        DEFAULT_SECTIONS,
    )


__all__ = [
    "ControlSection",
    "ControlRegistry",
    "DEFAULT_SECTIONS",
    "build_panel_controls",
    "build_default_registry",
]
