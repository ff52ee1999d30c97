"""Pydantic models for editor settings, session counters and the user profile."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from writemotion.models.style import StyleMetrics

ToneShift = Literal["neutral", "more-formal", "more-casual", "more-poetic"]

TONE_SHIFTS: tuple[str, ...] = get_args(ToneShift)

MAX_TARGET_AUTHORS = 2


class CycleState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    DELIVERED = "delivered"
    FAILED = "failed"


class EditorSettings(BaseModel):
    """Blend settings. ``target_author_ids`` is ordered oldest selection first."""

    model_config = ConfigDict(validate_assignment=True)

    blend_intensity: float = Field(0.5, ge=0.0, le=1.0)
    target_author_ids: list[str] = Field(default_factory=list)
    tone_shift: ToneShift = "neutral"

    @field_validator("target_author_ids")
    @classmethod
    def _unique_and_bounded(cls, ids: list[str]) -> list[str]:
        if len(set(ids)) != len(ids):
            raise ValueError("target_author_ids must not contain duplicates")
        if len(ids) > MAX_TARGET_AUTHORS:
            raise ValueError(f"at most {MAX_TARGET_AUTHORS} target authors")
        return ids

    def toggle_author(self, author_id: str) -> None:
        """Deselect if selected, else select; a third pick evicts the oldest."""
        ids = list(self.target_author_ids)
        if author_id in ids:
            ids.remove(author_id)
        else:
            ids.append(author_id)
            ids = ids[-MAX_TARGET_AUTHORS:]
        self.target_author_ids = ids


class SessionStats(BaseModel):
    suggestions_generated: int = 0
    suggestions_accepted: int = 0
    started_at: datetime = Field(default_factory=datetime.now)

    @property
    def acceptance_rate(self) -> int:
        """Accepted / generated as a rounded percentage."""
        if self.suggestions_generated <= 0:
            return 0
        return round(self.suggestions_accepted / self.suggestions_generated * 100)

    def session_minutes(self, now: datetime | None = None) -> int:
        now = now or datetime.now()
        return int((now - self.started_at).total_seconds() // 60)


class UserProfile(BaseModel):
    name: str = "User"
    has_analyzed_samples: bool = False
    base_style: StyleMetrics = Field(default_factory=StyleMetrics.neutral)
    sample_text: str = ""


class GenerationContext(BaseModel):
    """What a rewrite batch was generated from; drives how a pick is committed."""

    model_config = ConfigDict(frozen=True)

    scope: Literal["selection", "full"]
    original_text: str
