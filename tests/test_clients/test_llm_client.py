"""Tests for LLMClient (Claude API wrapper)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from writemotion.clients.llm_client import STRUCTURED_TOOL_NAME, LLMClient, LLMResponse


def _text_block(text: str) -> MagicMock:
    block = MagicMock()
    block.type = "text"
    block.text = text
    return block


def _tool_block(data, name: str = STRUCTURED_TOOL_NAME) -> MagicMock:
    block = MagicMock()
    block.type = "tool_use"
    block.name = name
    block.input = data
    return block


def _make_api_message(blocks, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = blocks
    message.stop_reason = "end_turn"
    return message


def _client_returning(mock_cls, message) -> MagicMock:
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock(return_value=message)
    mock_cls.return_value = mock_client
    return mock_client


class TestLLMClientInit:
    def test_init_default_creates_client_with_no_kwargs(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient()
            mock_cls.assert_called_once_with()

    def test_init_with_both_params_passes_both(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient(api_key="test-key", timeout=30.0)
            mock_cls.assert_called_once_with(api_key="test-key", timeout=30.0)


class TestLLMClientGenerate:
    async def test_generate_returns_llm_response(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _client_returning(mock_cls, _make_api_message([_text_block("hello world")]))
            llm = LLMClient()
            result = await llm.generate("say hello")

        assert isinstance(result, LLMResponse)
        assert result.text == "hello world"
        assert result.data is None
        assert result.input_tokens == 100

    async def test_generate_without_schema_sends_no_tools(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = _client_returning(mock_cls, _make_api_message([_text_block("x")]))
            await LLMClient().generate("prompt", system="be brief", temperature=0.85)

        kwargs = mock_client.messages.create.call_args.kwargs
        assert "tools" not in kwargs
        assert kwargs["system"] == "be brief"
        assert kwargs["temperature"] == 0.85

    async def test_object_schema_forces_tool(self):
        schema = {"type": "object", "properties": {"a": {"type": "number"}}, "required": ["a"]}
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = _client_returning(mock_cls, _make_api_message([_tool_block({"a": 1})]))
            result = await LLMClient().generate("prompt", schema=schema)

        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["tools"][0]["input_schema"] is schema
        assert kwargs["tool_choice"] == {"type": "tool", "name": STRUCTURED_TOOL_NAME}
        assert result.data == {"a": 1}

    async def test_array_schema_is_wrapped_and_unwrapped(self):
        schema = {"type": "array", "items": {"type": "string"}}
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = _client_returning(
                mock_cls, _make_api_message([_tool_block({"result": ["a", "b"]})])
            )
            result = await LLMClient().generate("prompt", schema=schema)

        input_schema = mock_client.messages.create.call_args.kwargs["tools"][0]["input_schema"]
        assert input_schema["type"] == "object"
        assert input_schema["properties"]["result"] is schema
        assert result.data == ["a", "b"]

    async def test_token_log_accumulates_across_calls(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _client_returning(mock_cls, _make_api_message([_text_block("r")], 10, 5))
            llm = LLMClient()
            await llm.generate("one", model="m-1")
            await llm.generate("two", model="m-1")

        assert llm._token_log == [("m-1", 10, 5), ("m-1", 10, 5)]


class TestLLMClientGenerateStructured:
    async def test_returns_tool_input(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _client_returning(mock_cls, _make_api_message([_tool_block({"pacing": 70})]))
            result = await LLMClient().generate_structured("p", {"type": "object"})

        assert result == {"pacing": 70}

    async def test_falls_back_to_text_json(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _client_returning(mock_cls, _make_api_message([_text_block('```json\n{"pacing": 70}\n```')]))
            result = await LLMClient().generate_structured("p", {"type": "object"})

        assert result == {"pacing": 70}

    async def test_empty_response_returns_none(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _client_returning(mock_cls, _make_api_message([]))
            result = await LLMClient().generate_structured("p", {"type": "object"})

        assert result is None

    async def test_prose_response_raises_value_error(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _client_returning(mock_cls, _make_api_message([_text_block("I cannot help with that.")]))
            with pytest.raises(ValueError):
                await LLMClient().generate_structured("p", {"type": "object"})


class TestLLMClientTokenSummary:
    def test_get_token_summary_returns_totals_and_clears(self):
        with patch("writemotion.clients.llm_client.anthropic.AsyncAnthropic"):
            llm = LLMClient()
            llm._token_log = [("m", 100, 50), ("m", 200, 80)]

        summary = llm.get_token_summary()

        assert summary["input"] == 300
        assert summary["output"] == 130
        assert len(summary["calls"]) == 2
        assert llm.get_token_summary()["calls"] == []
