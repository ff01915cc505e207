"""Settings consumed by the context builder."""
from __future__ import annotations

import re
from functools import cached_property

from canvas_controls.core.exceptions import ConfigurationError

from ..base import BaseDomainConfig


class ContextConfig(BaseDomainConfig):
    """Accessor for the ``context`` config section."""

    def _config_section(self) -> str:
        return "context"

    @cached_property
    def placeholder_pattern(self) -> re.Pattern[str]:
        pattern = str(self.section.get("placeholderPattern", "placeholder"))
        try:
            return re.compile(pattern, re.IGNORECASE)
        except re.error as exc:
            raise ConfigurationError(
                f"Invalid context.placeholderPattern {pattern!r}: {exc}",
                context={"key": "context.placeholderPattern", "pattern": pattern},
            ) from exc

    @cached_property
    def draggable_activity_prefix(self) -> str:
        return str(self.section.get("draggableActivityPrefix", "drag-"))

    @cached_property
    def sort_sentence_activity(self) -> str:
        return str(self.section.get("sortSentenceActivity", "drag-sort-sentence"))

    @cached_property
    def fallback_element_type(self) -> str:
        return str(self.section.get("fallbackElementType", "none"))


__all__ = ["ContextConfig"]
