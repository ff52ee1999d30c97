"""Pydantic models for rewrite candidates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RewriteSuggestion(BaseModel):
    """One candidate rewrite of the current scope."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    original_text: str = Field(alias="originalText")
    rewritten_text: str = Field(alias="rewrittenText")  # paragraphs split by "\n\n"
    rationale: str = ""
    similarity_score: float = Field(alias="similarityScore", ge=0, le=100)
