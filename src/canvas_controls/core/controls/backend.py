"""Boundary to the editor subsystems that command actions drive.

The engine never mutates the document. Every change a command makes goes
through an ``EditorBackend`` supplied by the host application when the
registry is built.
"""
from __future__ import annotations

from typing import Optional, Protocol

from canvas_controls.core.context.element import ElementNode


class EditorBackend(Protocol):
    # images
    def choose_image(self, element: ElementNode) -> None: ...
    def paste_image(self, element: ElementNode) -> None: ...
    def copy_image(self, element: ElementNode) -> None: ...
    def edit_image_metadata(self, element: ElementNode) -> None: ...
    def reset_image_cropping(self, element: ElementNode) -> None: ...
    def expand_image_to_fill_space(self, element: ElementNode) -> None: ...

    # video
    def choose_video(self, element: ElementNode) -> None: ...
    def record_video(self, element: ElementNode) -> None: ...
    def move_video(self, element: ElementNode, offset: int) -> None: ...

    # text
    def show_format_dialog(self, element: ElementNode) -> None: ...
    def copy_text(self, element: ElementNode) -> None: ...
    def paste_text(self, element: ElementNode) -> None: ...
    def toggle_auto_height(self, element: ElementNode) -> None: ...
    def toggle_fill_background(self, element: ElementNode) -> None: ...
    def add_child_bubble(self, element: ElementNode) -> None: ...

    # links
    async def choose_link_destination(self, element: ElementNode, current_url: str) -> Optional[str]: ...
    def set_link_destination(self, element: ElementNode, url: Optional[str]) -> None: ...
    def choose_link_grid_books(self, element: ElementNode) -> None: ...

    # whole element
    def duplicate_element(self, element: ElementNode) -> None: ...
    def delete_element(self, element: ElementNode) -> None: ...
    def toggle_draggability(self, element: ElementNode) -> None: ...
    def toggle_part_of_right_answer(self, element: ElementNode) -> None: ...

    # audio
    async def choose_sound_file(self) -> Optional[str]: ...
    def set_element_sound(self, element: ElementNode, sound_id: Optional[str]) -> None: ...
    async def play_sound(self, sound_id: str, page: Optional[ElementNode]) -> None: ...
    def show_talking_book_tool(self) -> None: ...


__all__ = ["EditorBackend"]
