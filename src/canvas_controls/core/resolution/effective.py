"""Effective rule lookup and availability evaluation.

Precedence, highest first: ``exclude``, the surface policy entry, the
rule's general value, then True.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from canvas_controls.core.exceptions import RuleEvaluationError
from canvas_controls.core.rules.models import EXCLUDE, Availability, EffectiveRule, Surface

if TYPE_CHECKING:
    from canvas_controls.core.context.models import ControlContext
    from canvas_controls.core.definitions.models import ElementDefinition

_EXCLUDED = EffectiveRule(visible=False, enabled=False)
_DEFAULT = EffectiveRule()


def get_effective_rule(
    definition: "ElementDefinition",
    control_id: str,
    surface: Union[Surface, str],
) -> EffectiveRule:
    """Return the visible/enabled pair that applies to ``control_id`` on ``surface``.

    Values are returned unevaluated (bool or predicate); use
    ``evaluate_availability`` to apply them to a context.
    """
    surface = Surface(surface)
    rule = definition.availability_rules.get(control_id)
    if rule is None:
        return _DEFAULT
    if rule == EXCLUDE:
        return _EXCLUDED

    surface_rule = rule.for_surface(surface)
    visible = surface_rule.visible if surface_rule is not None else None
    enabled = surface_rule.enabled if surface_rule is not None else None
    if visible is None:
        visible = rule.visible
    if enabled is None:
        enabled = rule.enabled
    return EffectiveRule(
        visible=True if visible is None else visible,
        enabled=True if enabled is None else enabled,
    )


def evaluate_availability(
    value: Optional[Availability],
    ctx: "ControlContext",
    fallback: bool = True,
    *,
    control_id: Optional[str] = None,
    surface: Optional[Union[Surface, str]] = None,
) -> bool:
    """Evaluate a constant or predicate against ``ctx``.

    Raises:
        RuleEvaluationError: If the predicate raises. The original error is chained.
    """
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    try:
        return bool(value(ctx))
    except Exception as exc:
        surface_name = Surface(surface).value if surface is not None else None
        raise RuleEvaluationError(
            f"Availability predicate for '{control_id}' failed: {exc}",
            control_id=control_id,
            surface=surface_name,
        ) from exc


__all__ = ["get_effective_rule", "evaluate_availability"]
