"""Tests for the OpenAI-backed text model."""

from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from wizard_search.agent.llm_utils import OpenAITextModel, get_client
from wizard_search.config import Settings
from wizard_search.errors import ConfigurationError, ModelError


def _make_mock_response(content):
    choice = MagicMock()
    choice.message.content = content
    choice.message.role = "assistant"
    resp = MagicMock()
    resp.choices = [choice]
    return resp


class TestOpenAITextModel:
    def test_returns_text(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _make_mock_response("A summary.")
        model = OpenAITextModel(client, "gpt-4o-mini")

        assert model.generate("prompt text", caller="synthesize") == "A summary."

        call_kw = client.chat.completions.create.call_args[1]
        assert call_kw["model"] == "gpt-4o-mini"
        assert call_kw["messages"] == [{"role": "user", "content": "prompt text"}]

    def test_empty_content_raises(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(ModelError, match="empty"):
            OpenAITextModel(client, "m").generate("p")

    def test_api_error_raises_model_error(self):
        client = MagicMock()
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        client.chat.completions.create.side_effect = openai.APITimeoutError(request=request)
        with pytest.raises(ModelError) as exc_info:
            OpenAITextModel(client, "m").generate("p")
        assert isinstance(exc_info.value.__cause__, openai.APITimeoutError)


class TestGetClient:
    def test_missing_key_raises(self):
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            get_client(Settings(openai_api_key=""))

    def test_passes_timeout_and_base_url(self):
        settings = Settings(openai_api_key="sk-test", openai_base_url="https://llm.internal/v1", llm_timeout_seconds=12)
        with patch("wizard_search.agent.llm_utils.OpenAI") as mock_openai:
            get_client(settings)
        kwargs = mock_openai.call_args[1]
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["timeout"] == 12
        assert kwargs["base_url"] == "https://llm.internal/v1"
        assert kwargs["max_retries"] == 0
