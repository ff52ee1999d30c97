"""Data models for the style blending pipeline."""

from writemotion.models.persona import AUTHOR_CATEGORIES, AuthorCategory, ReferenceAuthor
from writemotion.models.rewrite import RewriteSuggestion
from writemotion.models.session import (
    TONE_SHIFTS,
    CycleState,
    EditorSettings,
    GenerationContext,
    SessionStats,
    ToneShift,
    UserProfile,
)
from writemotion.models.style import METRIC_KEYS, StyleMetrics

__all__ = [
    "AUTHOR_CATEGORIES",
    "AuthorCategory",
    "CycleState",
    "EditorSettings",
    "GenerationContext",
    "METRIC_KEYS",
    "ReferenceAuthor",
    "RewriteSuggestion",
    "SessionStats",
    "StyleMetrics",
    "TONE_SHIFTS",
    "ToneShift",
    "UserProfile",
]
