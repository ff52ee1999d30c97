"""Validate and repair oracle payloads into domain models."""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Collection, Mapping

from writemotion.errors import ShapeInvalid
from writemotion.models.persona import AUTHOR_CATEGORIES, ReferenceAuthor, avatar_url_for
from writemotion.models.rewrite import RewriteSuggestion
from writemotion.models.style import METRIC_KEYS, NEUTRAL_SCORE, StyleMetrics

logger = logging.getLogger(__name__)

MAX_TRAITS = 3
_LIST_WRAPPER_KEYS = ("suggestions", "candidates", "items", "result")


def _coerce_score(value: object) -> float | None:
    """Return ``value`` as a finite number in [0, 100], or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value) or not 0.0 <= value <= 100.0:
        return None
    return value


def normalize_metrics(payload: object) -> StyleMetrics:
    """Repair field by field; any bad field becomes 50, the rest are kept."""
    if not isinstance(payload, Mapping):
        logger.warning("Analysis payload is %s, using neutral metrics", type(payload).__name__)
        return StyleMetrics.neutral()

    values: dict[str, float] = {}
    for key in METRIC_KEYS:
        score = _coerce_score(payload.get(key))
        if score is None:
            logger.info("Analysis field %s invalid (%r), using %s", key, payload.get(key), NEUTRAL_SCORE)
            score = NEUTRAL_SCORE
        values[key] = score
    return StyleMetrics(**values)


def new_persona_id(taken_ids: Collection[str] = ()) -> str:
    while True:
        candidate = f"generated-{uuid.uuid4().hex[:12]}"
        if candidate not in taken_ids:
            return candidate


def normalize_persona(
    payload: object,
    name: str,
    taken_ids: Collection[str] = (),
) -> ReferenceAuthor:
    """Build a persona or raise ShapeInvalid; never returns a partial persona."""
    if not isinstance(payload, Mapping):
        raise ShapeInvalid(f"persona payload is {type(payload).__name__}, expected object")

    description = payload.get("description")
    if not isinstance(description, str) or not description.strip():
        raise ShapeInvalid("persona description missing")

    raw_traits = payload.get("traits")
    if not isinstance(raw_traits, list):
        raise ShapeInvalid("persona traits missing")
    traits = [t.strip() for t in raw_traits if isinstance(t, str) and t.strip()][:MAX_TRAITS]
    if not traits:
        raise ShapeInvalid("persona traits empty")

    category = payload.get("category")
    if category not in AUTHOR_CATEGORIES:
        raise ShapeInvalid(f"persona category {category!r} not in {AUTHOR_CATEGORIES}")

    clean_name = name.strip()
    return ReferenceAuthor(
        id=new_persona_id(taken_ids),
        name=clean_name,
        description=description.strip(),
        traits=traits,
        avatar_url=avatar_url_for(clean_name),
        category=category,
        is_custom=True,
    )


def normalize_rewrites(payload: object, original_text: str) -> list[RewriteSuggestion]:
    """Map raw candidates 1:1 in order, dropping items with no rewritten text."""
    if isinstance(payload, Mapping):
        for key in _LIST_WRAPPER_KEYS:
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break
        else:
            raise ShapeInvalid("rewrite payload is an object without a candidate list")
    if not isinstance(payload, list):
        raise ShapeInvalid(f"rewrite payload is {type(payload).__name__}, expected array")

    batch = uuid.uuid4().hex[:8]
    result: list[RewriteSuggestion] = []
    for index, item in enumerate(payload):
        if not isinstance(item, Mapping):
            logger.info("Dropping rewrite candidate %d: not an object", index)
            continue
        text = item.get("rewrittenText")
        if not isinstance(text, str) or not text.strip():
            logger.info("Dropping rewrite candidate %d: no rewrittenText", index)
            continue
        rationale = item.get("rationale")
        raw_score = item.get("similarityScore")
        score = _coerce_score(raw_score)
        if score is None:
            score = _clamp_or_neutral(raw_score)
        result.append(
            RewriteSuggestion(
                id=f"sugg-{batch}-{index}",
                original_text=original_text,
                rewritten_text=text,
                rationale=rationale if isinstance(rationale, str) else "",
                similarity_score=score,
            )
        )
    return result


def _clamp_or_neutral(value: object) -> float:
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return NEUTRAL_SCORE
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return max(0.0, min(100.0, float(value)))
    return NEUTRAL_SCORE
