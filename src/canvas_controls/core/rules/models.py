from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Literal, Mapping, Optional, Union

from canvas_controls.core.exceptions import ControlConfigurationError

if TYPE_CHECKING:
    from canvas_controls.core.context.models import ControlContext


class Surface(str, Enum):
    """Presentation channels a control can appear on."""

    TOOLBAR = "toolbar"
    MENU = "menu"
    TOOL_PANEL = "toolPanel"


Predicate = Callable[["ControlContext"], bool]
# A rule value is either a constant or a predicate over the context.
Availability = Union[bool, Predicate]

EXCLUDE: Literal["exclude"] = "exclude"
Exclude = Literal["exclude"]


def _check_availability(value: object, name: str) -> None:
    if value is not None and not isinstance(value, bool) and not callable(value):
        raise ControlConfigurationError(
            f"{name} must be a bool or a predicate, got {type(value).__name__}",
            context={"field": name},
        )


@dataclass(frozen=True)
class SurfaceRule:
    """Visible/enabled override for a single surface."""

    visible: Optional[Availability] = None
    enabled: Optional[Availability] = None

    def __post_init__(self) -> None:
        _check_availability(self.visible, "visible")
        _check_availability(self.enabled, "enabled")


@dataclass(frozen=True)
class AvailabilityRule:
    """Declarative visible/enabled contract for one control.

    ``surface_policy`` entries win over the general ``visible``/``enabled``
    for their surface only; anything left unset defaults to True.
    """

    visible: Optional[Availability] = None
    enabled: Optional[Availability] = None
    surface_policy: Mapping[Surface, SurfaceRule] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_availability(self.visible, "visible")
        _check_availability(self.enabled, "enabled")
        policy = {}
        for key, rule in dict(self.surface_policy).items():
            try:
                surface = Surface(key)
            except ValueError as exc:
                raise ControlConfigurationError(
                    f"Unknown surface in surface policy: {key!r}", context={"surface": str(key)}
                ) from exc
            if not isinstance(rule, SurfaceRule):
                raise ControlConfigurationError(
                    f"Surface policy for {surface.value} must be a SurfaceRule",
                    context={"surface": surface.value},
                )
            policy[surface] = rule
        object.__setattr__(self, "surface_policy", MappingProxyType(policy))

    def for_surface(self, surface: Surface) -> Optional[SurfaceRule]:
        return self.surface_policy.get(surface)


RuleEntry = Union[AvailabilityRule, Exclude]
AvailabilityRulesMap = Mapping[str, RuleEntry]


@dataclass(frozen=True)
class EffectiveRule:
    """Resolved visible/enabled pair for one control on one surface."""

    visible: Availability = True
    enabled: Availability = True


__all__ = [
    "Surface",
    "Predicate",
    "Availability",
    "EXCLUDE",
    "Exclude",
    "SurfaceRule",
    "AvailabilityRule",
    "RuleEntry",
    "AvailabilityRulesMap",
    "EffectiveRule",
]
