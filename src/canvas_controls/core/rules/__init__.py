"""Availability rule vocabulary, composition and named presets."""
from .models import (
    EXCLUDE,
    Availability,
    AvailabilityRule,
    AvailabilityRulesMap,
    EffectiveRule,
    Predicate,
    RuleEntry,
    Surface,
    SurfaceRule,
)
from .composition import merge_rules
from .presets import (
    AUDIO_RULES,
    BUBBLE_RULES,
    IMAGE_RULES,
    PRESETS,
    TEXT_RULES,
    VIDEO_RULES,
    WHOLE_ELEMENT_RULES,
)

__all__ = [
    "EXCLUDE",
    "Availability",
    "AvailabilityRule",
    "AvailabilityRulesMap",
    "EffectiveRule",
    "Predicate",
    "RuleEntry",
    "Surface",
    "SurfaceRule",
    "merge_rules",
    "AUDIO_RULES",
    "BUBBLE_RULES",
    "IMAGE_RULES",
    "PRESETS",
    "TEXT_RULES",
    "VIDEO_RULES",
    "WHOLE_ELEMENT_RULES",
]
