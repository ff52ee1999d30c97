"""Tests for the structured request builders."""

import pytest

from writemotion.models.persona import AUTHOR_CATEGORIES
from writemotion.models.style import METRIC_KEYS, StyleMetrics
from writemotion.pipeline.request_builder import (
    BANNED_PHRASES,
    EM_DASH,
    build_analysis_request,
    build_persona_request,
    build_rewrite_request,
)


class TestAnalysisRequest:
    def test_schema_requires_all_six_metrics(self):
        request = build_analysis_request("x" * 100)
        assert request.kind == "analysis"
        assert request.schema["required"] == list(METRIC_KEYS)
        assert all(p["type"] == "number" for p in request.schema["properties"].values())

    def test_text_is_capped(self):
        text = "a" * 2000 + "TAILMARKER" + "b" * 500
        request = build_analysis_request(text)
        assert "a" * 2000 + '"' in request.instruction
        assert "TAILMARKER" not in request.instruction
        assert "0-100" in request.instruction

    def test_custom_cap(self):
        request = build_analysis_request("abcdefghij" * 20, max_chars=15)
        assert "abcdefghijabcde\"" in request.instruction


class TestPersonaRequest:
    def test_schema_shape(self):
        request = build_persona_request("Joan Didion")
        schema = request.schema
        assert set(schema["required"]) == {"description", "traits", "category"}
        assert schema["properties"]["traits"]["type"] == "array"
        assert schema["properties"]["category"]["enum"] == list(AUTHOR_CATEGORIES)

    def test_instruction_mentions_name_and_fallback(self):
        request = build_persona_request("Zorblax the Unknown")
        assert '"Zorblax the Unknown"' in request.instruction
        assert "fictional" in request.instruction
        assert "Never leave a field blank" in request.instruction
        assert request.temperature == 0.7


class TestRewriteRequest:
    def _build(self, **overrides):
        args = dict(
            text="The cat sat on the mat. It was quiet and still.",
            metrics=StyleMetrics(vocabulary_complexity=62, formality=35, pacing=40, imagery=80),
            author_names=["Ernest Hemingway"],
            intensity=0.5,
            tone="neutral",
        )
        args.update(overrides)
        return build_rewrite_request(**args)

    def test_schema_is_array_of_candidates(self):
        schema = self._build().schema
        assert schema["type"] == "array"
        assert set(schema["items"]["required"]) == {"rewrittenText", "rationale", "similarityScore"}

    def test_anchor_metrics_in_system(self):
        system = self._build().system
        assert "Vocabulary Complexity: 62/100" in system
        assert "Formality: 35/100" in system
        assert "Pacing: 40/100" in system
        assert "Imagery: 80/100" in system

    def test_intensity_scaled_to_percent(self):
        assert "Blend Intensity: 50%" in self._build().system
        assert "Blend Intensity: 33%" in self._build(intensity=0.333).system

    def test_two_authors_joined(self):
        system = self._build(author_names=["Ernest Hemingway", "Joan Didion"]).system
        assert "Ernest Hemingway and Joan Didion" in system

    def test_mimicry_mode_only_above_threshold(self):
        assert "voice-dominant" in self._build(intensity=0.8).system
        assert "mimicry-dominant" in self._build(intensity=0.81).system

    def test_fixed_directives_present(self):
        system = self._build(tone="more-poetic").system
        for phrase in BANNED_PHRASES:
            assert f'"{phrase}"' in system
        assert EM_DASH in system
        assert "archaic vocabulary" in system
        assert "blank line" in system
        assert "lean closer to the user's baseline" in system
        assert "Tone Adjustment: more-poetic" in system

    def test_instruction_quotes_text(self):
        request = self._build()
        assert request.instruction == 'Rewrite this text:\n"The cat sat on the mat. It was quiet and still."'
        assert request.temperature == 0.85

    def test_deterministic(self):
        assert self._build() == self._build()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"author_names": []},
            {"author_names": ["A", "B", "C"]},
            {"intensity": 1.2},
            {"tone": "angry"},
        ],
    )
    def test_invalid_inputs_raise(self, overrides):
        with pytest.raises(ValueError):
            self._build(**overrides)
