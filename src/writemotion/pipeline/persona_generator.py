"""Persona Generator - turns an author name into a ReferenceAuthor."""

from __future__ import annotations

import logging
from collections.abc import Collection

from writemotion.clients.llm_client import DEFAULT_MODEL, LLMClient
from writemotion.errors import GenerationFailed, ShapeInvalid
from writemotion.models.persona import ReferenceAuthor
from writemotion.pipeline.gateway import GenerationGateway
from writemotion.pipeline.normalizer import normalize_persona
from writemotion.pipeline.request_builder import build_persona_request

logger = logging.getLogger(__name__)


class PersonaGenerator:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        *,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ):
        self.gateway = GenerationGateway(llm, model=model, max_tokens=max_tokens)
        self.temperature = temperature

    async def generate(
        self,
        name: str,
        taken_ids: Collection[str] = (),
    ) -> ReferenceAuthor | None:
        """Generate a persona for ``name``.

        Returns None for a blank name, an oracle failure, or a payload that
        cannot form a complete persona (missing traits, unknown category).
        The new id never appears in ``taken_ids``.
        """
        if not name or not name.strip():
            return None

        request = build_persona_request(name.strip(), temperature=self.temperature)
        try:
            payload = await self.gateway.invoke(request)
            return normalize_persona(payload, name, taken_ids)
        except (GenerationFailed, ShapeInvalid):
            logger.exception("Persona generation failed for %r", name)
            return None


async def generate_persona(
    llm: LLMClient,
    name: str,
    taken_ids: Collection[str] = (),
    model: str = DEFAULT_MODEL,
) -> ReferenceAuthor | None:
    return await PersonaGenerator(llm, model=model).generate(name, taken_ids)
