"""Rewrite Generator - blends the user's voice with reference authors."""

from __future__ import annotations

import logging

from writemotion.clients.llm_client import DEFAULT_MODEL, LLMClient
from writemotion.errors import GenerationFailed, ShapeInvalid
from writemotion.models.rewrite import RewriteSuggestion
from writemotion.models.style import StyleMetrics
from writemotion.pipeline.gateway import GenerationGateway
from writemotion.pipeline.normalizer import normalize_rewrites
from writemotion.pipeline.request_builder import MIMICRY_THRESHOLD, build_rewrite_request

logger = logging.getLogger(__name__)


class RewriteGenerator:
    """Generate a batch of rewrite candidates for one text scope."""

    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        *,
        temperature: float = 0.85,
        mimicry_threshold: float = MIMICRY_THRESHOLD,
        max_tokens: int = 4096,
    ):
        self.gateway = GenerationGateway(llm, model=model, max_tokens=max_tokens)
        self.temperature = temperature
        self.mimicry_threshold = mimicry_threshold

    async def request(
        self,
        text: str,
        metrics: StyleMetrics,
        author_names: list[str],
        intensity: float,
        tone: str,
    ) -> list[RewriteSuggestion]:
        """Issue one rewrite request.

        Raises:
            GenerationFailed: the oracle failed or returned nothing usable.
            ShapeInvalid: the payload was not a candidate array.
            ValueError: invalid author count, intensity or tone.
        """
        request = build_rewrite_request(
            text,
            metrics,
            author_names,
            intensity,
            tone,
            temperature=self.temperature,
            mimicry_threshold=self.mimicry_threshold,
        )
        payload = await self.gateway.invoke(request)
        suggestions = normalize_rewrites(payload, text)
        if not suggestions:
            logger.info("Rewrite request returned no candidates")
        return suggestions

    async def generate(
        self,
        text: str,
        metrics: StyleMetrics,
        author_names: list[str],
        intensity: float,
        tone: str,
    ) -> list[RewriteSuggestion]:
        """Like ``request`` but returns an empty list on any failure."""
        if not text or not text.strip():
            return []
        try:
            return await self.request(text, metrics, author_names, intensity, tone)
        except (GenerationFailed, ShapeInvalid, ValueError):
            logger.exception("Rewrite generation failed")
            return []


async def generate_rewrites(
    llm: LLMClient,
    text: str,
    metrics: StyleMetrics,
    author_names: list[str],
    intensity: float,
    tone: str,
    model: str = DEFAULT_MODEL,
) -> list[RewriteSuggestion]:
    return await RewriteGenerator(llm, model=model).generate(
        text, metrics, author_names, intensity, tone
    )
