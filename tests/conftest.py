"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from writemotion.clients.llm_client import LLMClient, LLMResponse
from writemotion.library.author_library import AuthorLibrary
from writemotion.models.persona import ReferenceAuthor
from writemotion.models.style import StyleMetrics


@pytest.fixture
def sample_text() -> str:
    return (
        "I walked down to the harbour before the fog lifted. The boats were still "
        "tied up, knocking against each other like old friends who had run out of "
        "things to say. Nobody was awake yet except the gulls.\n\n"
        "By noon the town was loud again, and I missed the quiet more than I expected."
    )


@pytest.fixture
def short_text() -> str:
    return "Too short to analyze."


@pytest.fixture
def sample_metrics() -> StyleMetrics:
    return StyleMetrics(
        vocabulary_complexity=62,
        sentence_variety=71,
        formality=35,
        imagery=80,
        warmth=66,
        pacing=40,
    )


@pytest.fixture
def metrics_payload() -> dict:
    return {
        "vocabularyComplexity": 62,
        "sentenceVariety": 71,
        "formality": 35,
        "imagery": 80,
        "warmth": 66,
        "pacing": 40,
    }


@pytest.fixture
def persona_payload() -> dict:
    return {
        "description": "Clipped, cryptic, oddly tender.",
        "traits": ["Cryptic", "Terse", "Tender"],
        "category": "Fiction",
    }


@pytest.fixture
def custom_author() -> ReferenceAuthor:
    return ReferenceAuthor(
        id="generated-abc123",
        name="Zorblax the Unknown",
        description="Clipped, cryptic, oddly tender.",
        traits=["Cryptic", "Terse", "Tender"],
        avatar_url="https://ui-avatars.com/api/?name=Zorblax",
        category="Fiction",
        is_custom=True,
    )


@pytest.fixture
def library() -> AuthorLibrary:
    return AuthorLibrary()


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_structured = AsyncMock(return_value={})
    return client
