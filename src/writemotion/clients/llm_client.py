"""Claude API wrapper with async support, retry logic and schema-constrained output."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import anthropic
from tenacity import retry, stop_after_attempt, wait_exponential

from writemotion.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"
STRUCTURED_TOOL_NAME = "emit_result"


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int
    data: Any = None  # structured tool input, when a schema was attached
    stop_reason: str | None = field(default=None, repr=False)


def _wrap_schema(schema: dict) -> tuple[dict, bool]:
    """Tool input must be an object; wrap other schemas under ``result``."""
    if schema.get("type") == "object":
        return schema, False
    return {
        "type": "object",
        "properties": {"result": schema},
        "required": ["result"],
    }, True


class LLMClient:
    """Async Claude API client with exponential-backoff retries."""

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True,
    )
    async def _call_api(self, **kwargs: Any) -> anthropic.types.Message:
        """Make the actual API call with retry logic."""
        return await self.client.messages.create(**kwargs)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 4096,
        schema: dict | None = None,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the response with usage.

        When ``schema`` is given, the model is forced to answer through a
        single tool whose input schema is ``schema``, and the parsed tool
        input is returned in ``LLMResponse.data``.
        """
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        wrapped = False
        if schema is not None:
            input_schema, wrapped = _wrap_schema(schema)
            kwargs["tools"] = [{
                "name": STRUCTURED_TOOL_NAME,
                "description": "Return the answer in the required structure.",
                "input_schema": input_schema,
            }]
            kwargs["tool_choice"] = {"type": "tool", "name": STRUCTURED_TOOL_NAME}

        logger.debug("LLM call: model=%s structured=%s", model, schema is not None)
        try:
            message = await self._call_api(**kwargs)
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))

        text_parts: list[str] = []
        data: Any = None
        for block in message.content:
            if block.type == "tool_use" and block.name == STRUCTURED_TOOL_NAME:
                data = block.input
                if wrapped and isinstance(data, dict):
                    data = data.get("result")
            elif block.type == "text":
                text_parts.append(block.text)

        return LLMResponse(
            text="".join(text_parts),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            data=data,
            stop_reason=message.stop_reason,
        )

    async def generate_structured(
        self,
        prompt: str,
        schema: dict,
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ) -> dict | list | None:
        """Send a prompt constrained by ``schema`` and return the parsed payload.

        Falls back to extracting JSON from any text blocks when the model
        answered in prose instead of through the tool. Returns None when the
        response carried neither.
        """
        response = await self.generate(
            prompt=prompt,
            system=system,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            schema=schema,
        )
        if response.data is not None:
            return response.data
        if not response.text.strip():
            return None
        return extract_json(response.text)

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
