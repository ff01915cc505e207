"""Errors raised by the canvas controls engine.

Every error carries a ``context`` dict with the ids involved (control,
section, surface, file) so the CLI can report them in JSON mode.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping


class CanvasControlsError(Exception):
    """Base exception for the canvas controls engine."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context else {}

    def to_json_error(self) -> Dict[str, Any]:
        return {"message": str(self), "code": type(self).__name__, "context": self.context}


class ControlConfigurationError(CanvasControlsError, ValueError):
    """Definitions, sections and the registry do not agree."""


class UnknownControlError(ControlConfigurationError, KeyError):
    """A control, section or element definition id is not known."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0]) if self.args else ""


class RuleEvaluationError(ControlConfigurationError):
    """An availability predicate raised while being evaluated."""

    def __init__(
        self,
        message: str,
        *,
        control_id: str | None = None,
        surface: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        merged = dict(context or {})
        if control_id:
            merged["control_id"] = control_id
        if surface:
            merged["surface"] = surface
        super().__init__(message, context=merged)


class ElementLoadError(CanvasControlsError, ValueError):
    """A selection document could not be read or describes no element."""


class ConfigurationError(CanvasControlsError, ValueError):
    """Configuration files or environment overrides are invalid."""


__all__ = [
    "CanvasControlsError",
    "ControlConfigurationError",
    "UnknownControlError",
    "RuleEvaluationError",
    "ElementLoadError",
    "ConfigurationError",
]
