"""Style Analyst - scores a writing sample into a StyleMetrics fingerprint."""

from __future__ import annotations

import logging

from writemotion.clients.llm_client import DEFAULT_MODEL, LLMClient
from writemotion.errors import GenerationFailed
from writemotion.models.style import StyleMetrics
from writemotion.pipeline.gateway import GenerationGateway
from writemotion.pipeline.normalizer import normalize_metrics
from writemotion.pipeline.request_builder import ANALYSIS_MAX_CHARS, build_analysis_request

logger = logging.getLogger(__name__)

MIN_ANALYSIS_LENGTH = 50


class StyleAnalyst:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        *,
        min_length: int = MIN_ANALYSIS_LENGTH,
        max_chars: int = ANALYSIS_MAX_CHARS,
        temperature: float = 0.4,
        max_tokens: int = 4096,
    ):
        self.gateway = GenerationGateway(llm, model=model, max_tokens=max_tokens)
        self.min_length = min_length
        self.max_chars = max_chars
        self.temperature = temperature

    async def analyze(self, text: str) -> StyleMetrics:
        """Return the fingerprint of ``text``. Never raises.

        Samples shorter than ``min_length`` get the neutral fingerprint
        without a request.
        """
        if not text or len(text) < self.min_length:
            logger.debug("Sample of %d chars below %d, using neutral metrics", len(text or ""), self.min_length)
            return StyleMetrics.neutral()

        request = build_analysis_request(text, max_chars=self.max_chars, temperature=self.temperature)
        try:
            payload = await self.gateway.invoke(request)
        except GenerationFailed:
            logger.exception("Style analysis failed")
            return StyleMetrics.neutral()
        return normalize_metrics(payload)


async def analyze_style(llm: LLMClient, text: str, model: str = DEFAULT_MODEL) -> StyleMetrics:
    """Fingerprint ``text``; always resolves to a valid StyleMetrics."""
    return await StyleAnalyst(llm, model=model).analyze(text)
