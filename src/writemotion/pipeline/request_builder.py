"""Output schemas and instructions for the three oracle request kinds.

Every builder is pure: identical inputs produce an identical request, so the
prompts can be asserted on directly in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from writemotion.models.persona import AUTHOR_CATEGORIES
from writemotion.models.session import TONE_SHIFTS
from writemotion.models.style import StyleMetrics

RequestKind = Literal["analysis", "persona", "rewrite"]

ANALYSIS_MAX_CHARS = 2000
MIMICRY_THRESHOLD = 0.8
EM_DASH = "—"

BANNED_PHRASES: tuple[str, ...] = (
    "delve",
    "testament",
    "tapestry",
    "underscores",
    "complex landscape",
)

METRIC_DESCRIPTIONS: dict[str, str] = {
    "vocabularyComplexity": "0-100 score of vocabulary rarity and sophistication.",
    "sentenceVariety": "0-100 score of sentence length variation and structural complexity.",
    "formality": "0-100 score from casual (0) to academic/formal (100).",
    "imagery": "0-100 score of metaphor usage and descriptive language.",
    "warmth": "0-100 score of emotional resonance and friendliness.",
    "pacing": "0-100 score: 0 is slow/deliberate, 100 is fast/punchy.",
}


@dataclass(frozen=True)
class StructuredRequest:
    """A schema-constrained prompt ready for the generation gateway."""

    kind: RequestKind
    schema: dict = field(hash=False)
    instruction: str
    system: str = ""
    temperature: float = 0.7


# --- Analysis ---------------------------------------------------------------

ANALYSIS_SCHEMA: dict = {
    "type": "object",
    "properties": {
        key: {"type": "number", "description": desc}
        for key, desc in METRIC_DESCRIPTIONS.items()
    },
    "required": list(METRIC_DESCRIPTIONS),
}


def build_analysis_request(
    text: str,
    max_chars: int = ANALYSIS_MAX_CHARS,
    temperature: float = 0.4,
) -> StructuredRequest:
    """Ask for a 0-100 score per metric over a bounded prefix of ``text``."""
    excerpt = text[:max_chars]
    instruction = (
        "Analyze the writing style of the following text. "
        "Provide quantitative scores (0-100) for the requested metrics.\n\n"
        f'Text to analyze:\n"{excerpt}"'
    )
    return StructuredRequest(
        kind="analysis",
        schema=ANALYSIS_SCHEMA,
        instruction=instruction,
        temperature=temperature,
    )


# --- Persona ----------------------------------------------------------------

PERSONA_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "description": {
            "type": "string",
            "description": "A concise (max 10 words) description of their writing style.",
        },
        "traits": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Exactly 3 single-word adjectives describing their voice (e.g., 'Stoic', 'Lyrical').",
        },
        "category": {
            "type": "string",
            "enum": list(AUTHOR_CATEGORIES),
            "description": "The primary genre the author is known for.",
        },
    },
    "required": ["description", "traits", "category"],
}


def build_persona_request(name: str, temperature: float = 0.7) -> StructuredRequest:
    instruction = (
        f'Generate a stylistic profile for the author: "{name}".\n'
        "If the author is well-known, describe their actual style.\n"
        "If the author is unknown or fictional, create a plausible style profile "
        "based on the name context or generic writer traits, but be specific.\n"
        "Never leave a field blank: always give a description, exactly 3 traits "
        "and one category."
    )
    return StructuredRequest(
        kind="persona",
        schema=PERSONA_SCHEMA,
        instruction=instruction,
        temperature=temperature,
    )


# --- Rewrite ----------------------------------------------------------------

REWRITE_SCHEMA: dict = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "rewrittenText": {
                "type": "string",
                "description": "The rewritten text, with a blank line (\\n\\n) between paragraphs.",
            },
            "rationale": {
                "type": "string",
                "description": (
                    "Specific stylistic device borrowed (e.g., 'Used Hemingway's parataxis' "
                    "or 'Adopted Sorkin's repetition')."
                ),
            },
            "similarityScore": {
                "type": "number",
                "description": (
                    "0-100 confidence that the rewrite preserves the user's authentic "
                    "voice while applying the blend."
                ),
            },
        },
        "required": ["rewrittenText", "rationale", "similarityScore"],
    },
}

REWRITE_SYSTEM = """\
You are WRITEMOTION, a writing coach.
Rewrite the user's text by blending their *authentic* baseline style with the stylistic strengths of the selected reference authors.

User's Baseline Style Fingerprint (The Anchor):
- Vocabulary Complexity: {vocabulary}/100
- Formality: {formality}/100
- Pacing: {pacing}/100
- Imagery: {imagery}/100

Target Reference Influence (The Spice): {authors}
Blend Intensity: {intensity}% (0% = Pure User, 100% = Pure Author Mimicry)
Blend Mode: {mode}
Tone Adjustment: {tone}

Directives:
1. Preserve Voice: the result must sound like the user, just elevated. Do not turn the user into a caricature of the target author unless intensity is above {threshold}%.
2. Drift Correction: if a target author is historically distant from contemporary usage, borrow only their rhythm or imagery, not archaic vocabulary.
3. Anti-Generic Filter: never use {banned}, or other generic filler. Use specific, concrete words.
4. Structure: keep the original paragraph structure. Separate paragraphs with a blank line (\\n\\n). If the input is one long block, break it into logical paragraphs. Never output a single wall of text for multi-paragraph content.
5. Punctuation: never use the em dash ({em_dash}). Use commas, periods or parentheses instead.

If the blend feels unnatural, lean closer to the user's baseline."""


def _format_score(value: float) -> str:
    return str(round(value))


def build_rewrite_request(
    text: str,
    metrics: StyleMetrics,
    author_names: list[str],
    intensity: float,
    tone: str,
    temperature: float = 0.85,
    mimicry_threshold: float = MIMICRY_THRESHOLD,
) -> StructuredRequest:
    """Build the blend instruction for one rewrite batch.

    Raises:
        ValueError: on 0 or more than 2 authors, intensity outside [0, 1],
            or an unknown tone.
    """
    names = [n.strip() for n in author_names if n and n.strip()]
    if not 1 <= len(names) <= 2:
        raise ValueError(f"Expected 1-2 author names, got {len(names)}")
    if not 0.0 <= intensity <= 1.0:
        raise ValueError(f"intensity must be within [0, 1], got {intensity}")
    if tone not in TONE_SHIFTS:
        raise ValueError(f"Unknown tone {tone!r}")

    mode = (
        "mimicry-dominant (the reference authors may lead)"
        if intensity > mimicry_threshold
        else "voice-dominant (the user's voice leads)"
    )
    system = REWRITE_SYSTEM.format(
        vocabulary=_format_score(metrics.vocabulary_complexity),
        formality=_format_score(metrics.formality),
        pacing=_format_score(metrics.pacing),
        imagery=_format_score(metrics.imagery),
        authors=" and ".join(names),
        intensity=round(intensity * 100),
        mode=mode,
        tone=tone,
        threshold=round(mimicry_threshold * 100),
        banned=", ".join(f'"{p}"' for p in BANNED_PHRASES),
        em_dash=EM_DASH,
    )
    return StructuredRequest(
        kind="rewrite",
        schema=REWRITE_SCHEMA,
        instruction=f'Rewrite this text:\n"{text}"',
        system=system,
        temperature=temperature,
    )
