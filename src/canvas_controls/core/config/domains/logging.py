from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    """Accessor for the ``logging`` config section."""

    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level", "WARNING")).upper()


__all__ = ["LoggingConfig"]
