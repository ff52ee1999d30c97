"""Pydantic models for the style fingerprint."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

NEUTRAL_SCORE = 50.0

# Wire names used in oracle payloads, in display order.
METRIC_KEYS: tuple[str, ...] = (
    "vocabularyComplexity",
    "sentenceVariety",
    "formality",
    "imagery",
    "warmth",
    "pacing",
)


def clamp_score(value: float) -> float:
    """Clamp a score into [0, 100]."""
    return max(0.0, min(100.0, float(value)))


class StyleMetrics(BaseModel):
    """Six-axis style fingerprint. Every score lies in [0, 100]."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    vocabulary_complexity: float = Field(NEUTRAL_SCORE, alias="vocabularyComplexity")
    sentence_variety: float = Field(NEUTRAL_SCORE, alias="sentenceVariety")
    formality: float = NEUTRAL_SCORE
    imagery: float = NEUTRAL_SCORE
    warmth: float = NEUTRAL_SCORE
    pacing: float = NEUTRAL_SCORE

    @field_validator("*", mode="after")
    @classmethod
    def _clamp(cls, value: float) -> float:
        if not math.isfinite(value):
            return NEUTRAL_SCORE
        return clamp_score(value)

    @classmethod
    def neutral(cls) -> StyleMetrics:
        return cls()

    def merge(self, other: StyleMetrics, weight: float = 0.5) -> StyleMetrics:
        """Blend toward ``other``; ``weight`` 0 keeps self, 1 takes other."""
        w = clamp_score(weight * 100) / 100
        mine = self.model_dump()
        theirs = other.model_dump()
        return StyleMetrics(**{k: mine[k] * (1 - w) + theirs[k] * w for k in mine})

    def to_payload(self) -> dict[str, float]:
        """Serialize with the camelCase keys of the oracle contract."""
        return self.model_dump(by_alias=True)
