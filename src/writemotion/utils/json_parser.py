"""Utility to extract JSON from free-text oracle payloads."""

from __future__ import annotations

import json


def extract_json(text: str) -> dict | list:
    """Extract a JSON object or array from an oracle text payload.

    Tries in order:
    1. Direct json.loads on the full text
    2. The body of a fenced code block (```json ... ```)
    3. The outermost bracketed span, whichever of '[' or '{' opens first
    4. The outermost span of the other bracket kind
    """
    text = (text or "").strip()
    if not text:
        raise ValueError("Could not extract JSON from empty text")

    for candidate in (text, _strip_code_fences(text)):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    spans = [("[", "]"), ("{", "}")]
    spans.sort(key=lambda pair: text.find(pair[0]) if pair[0] in text else len(text))
    for opener, closer in spans:
        result = _extract_span(text, opener, closer)
        if result is not None:
            return result

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _strip_code_fences(text: str) -> str:
    """Return the body of the first fenced block, or the text unchanged."""
    start = text.find("```")
    if start == -1:
        return text
    body_start = text.find("\n", start)
    if body_start == -1:
        return text
    end = text.find("```", body_start)
    body = text[body_start + 1 : end if end != -1 else len(text)]
    return body.strip()


def _extract_span(text: str, opener: str, closer: str) -> dict | list | None:
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        return None
    try:
        return json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return None
