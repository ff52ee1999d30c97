"""Tests for the generation gateway."""

import json

import pytest

from writemotion.errors import GenerationFailed
from writemotion.pipeline.gateway import GenerationGateway
from writemotion.pipeline.request_builder import build_analysis_request, build_rewrite_request
from writemotion.models.style import StyleMetrics


@pytest.fixture
def analysis_request():
    return build_analysis_request("x" * 80)


class TestGenerationGateway:
    @pytest.mark.asyncio
    async def test_passes_schema_prompt_and_temperature(self, mock_llm_client, analysis_request):
        mock_llm_client.generate_structured.return_value = {"pacing": 70}
        gateway = GenerationGateway(mock_llm_client, model="fast-model")

        result = await gateway.invoke(analysis_request)

        assert result == {"pacing": 70}
        kwargs = mock_llm_client.generate_structured.call_args.kwargs
        assert kwargs["schema"] is analysis_request.schema
        assert kwargs["prompt"] == analysis_request.instruction
        assert kwargs["temperature"] == analysis_request.temperature
        assert kwargs["model"] == "fast-model"

    @pytest.mark.asyncio
    async def test_model_override(self, mock_llm_client, analysis_request):
        mock_llm_client.generate_structured.return_value = {"pacing": 70}
        await GenerationGateway(mock_llm_client).invoke(analysis_request, model="other")
        assert mock_llm_client.generate_structured.call_args.kwargs["model"] == "other"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [RuntimeError("connection reset"), ValueError("Could not extract JSON"), json.JSONDecodeError("x", "", 0)],
    )
    async def test_any_error_becomes_generation_failed(self, mock_llm_client, analysis_request, error):
        mock_llm_client.generate_structured.side_effect = error
        with pytest.raises(GenerationFailed) as exc_info:
            await GenerationGateway(mock_llm_client).invoke(analysis_request)
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, {}, ""])
    async def test_empty_payload_fails(self, mock_llm_client, analysis_request, payload):
        mock_llm_client.generate_structured.return_value = payload
        with pytest.raises(GenerationFailed):
            await GenerationGateway(mock_llm_client).invoke(analysis_request)

    @pytest.mark.asyncio
    async def test_scalar_payload_fails(self, mock_llm_client, analysis_request):
        mock_llm_client.generate_structured.return_value = 42
        with pytest.raises(GenerationFailed):
            await GenerationGateway(mock_llm_client).invoke(analysis_request)

    @pytest.mark.asyncio
    async def test_empty_candidate_array_is_valid(self, mock_llm_client):
        request = build_rewrite_request("Some text here.", StyleMetrics(), ["Joan Didion"], 0.5, "neutral")
        mock_llm_client.generate_structured.return_value = []
        assert await GenerationGateway(mock_llm_client).invoke(request) == []
