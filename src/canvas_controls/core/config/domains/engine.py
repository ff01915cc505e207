from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class EngineConfig(BaseDomainConfig):
    """Accessor for the ``engine`` config section."""

    def _config_section(self) -> str:
        return "engine"

    @cached_property
    def validate_definitions_on_load(self) -> bool:
        return bool(self.section.get("validateDefinitionsOnLoad", True))


__all__ = ["EngineConfig"]
