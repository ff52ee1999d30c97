"""Single choke point between the pipeline and the generation oracle."""

from __future__ import annotations

import logging

from writemotion.clients.llm_client import DEFAULT_MODEL, LLMClient
from writemotion.errors import GenerationFailed
from writemotion.pipeline.request_builder import StructuredRequest

logger = logging.getLogger(__name__)


class GenerationGateway:
    """Invoke the oracle with a schema-constrained request.

    Every failure mode (transport error, non-JSON payload, empty payload) is
    raised as a single ``GenerationFailed``; the original exception is kept
    as ``__cause__`` for logging only.
    """

    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 4096,
    ):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens

    async def invoke(self, request: StructuredRequest, model: str | None = None) -> dict | list:
        model = model or self.model
        try:
            payload = await self.llm.generate_structured(
                prompt=request.instruction,
                schema=request.schema,
                system=request.system,
                model=model,
                temperature=request.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as exc:
            logger.warning("%s request failed on %s: %s", request.kind, model, exc)
            raise GenerationFailed(f"{request.kind} generation failed") from exc

        if payload is None or payload == {} or payload == "":
            logger.warning("%s request returned an empty payload", request.kind)
            raise GenerationFailed(f"{request.kind} generation returned nothing")
        if not isinstance(payload, (dict, list)):
            logger.warning("%s request returned %s", request.kind, type(payload).__name__)
            raise GenerationFailed(f"{request.kind} generation returned non-JSON payload")
        return payload
