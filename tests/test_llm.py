import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from api_intent_agent.errors import CompletionError, MissingCredentialError
from api_intent_agent.llm import DEFAULT_MODEL, LlmClient


def _response(content):
    mock_resp = MagicMock()
    mock_resp.choices = [MagicMock()]
    mock_resp.choices[0].message.content = content
    return mock_resp


class TestLlmClient:
    def test_default_model(self):
        client = LlmClient(api_key="sk-test")
        assert client.model == DEFAULT_MODEL
        assert client.timeout == 30.0

    def test_custom_model(self):
        client = LlmClient(api_key="sk-test", model="gpt-4o")
        assert client.model == "gpt-4o"

    @pytest.mark.parametrize("api_key", [None, ""])
    def test_api_key_required(self, api_key):
        with pytest.raises(MissingCredentialError):
            LlmClient(api_key=api_key)

    @patch("api_intent_agent.llm.completion")
    def test_complete_returns_content(self, mock_completion):
        mock_completion.return_value = _response("test response")

        client = LlmClient(api_key="sk-test")
        assert client.complete("Hello") == "test response"
        mock_completion.assert_called_once()

    @patch("api_intent_agent.llm.completion")
    def test_complete_sends_single_user_message(self, mock_completion):
        mock_completion.return_value = _response("ok")

        client = LlmClient(api_key="sk-test", model="claude-sonnet-4-20250514", max_tokens=500, timeout=5)
        client.complete("prompt text")

        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["model"] == "claude-sonnet-4-20250514"
        assert call_kwargs["max_tokens"] == 500
        assert call_kwargs["timeout"] == 5
        assert call_kwargs["api_key"] == "sk-test"
        assert call_kwargs["messages"] == [{"role": "user", "content": "prompt text"}]

    @patch("api_intent_agent.llm.completion")
    def test_upstream_failure_wrapped(self, mock_completion):
        mock_completion.side_effect = RuntimeError("rate limited")

        client = LlmClient(api_key="sk-test")
        with pytest.raises(CompletionError, match="rate limited") as exc_info:
            client.complete("Hello")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @patch("api_intent_agent.llm.completion")
    def test_empty_reply_is_an_error(self, mock_completion):
        mock_completion.return_value = _response(None)

        client = LlmClient(api_key="sk-test")
        with pytest.raises(CompletionError):
            client.complete("Hello")

    @patch("api_intent_agent.llm.completion")
    def test_no_choices_is_an_error(self, mock_completion):
        mock_resp = MagicMock()
        mock_resp.choices = []
        mock_completion.return_value = mock_resp

        client = LlmClient(api_key="sk-test")
        with pytest.raises(CompletionError, match="Malformed"):
            client.complete("Hello")


class TestLlmClientAsync:
    @patch("api_intent_agent.llm.acompletion", new_callable=AsyncMock)
    def test_acomplete_returns_content(self, mock_acompletion):
        mock_acompletion.return_value = _response("async reply")

        client = LlmClient(api_key="sk-test")
        assert asyncio.run(client.acomplete("Hello")) == "async reply"
        assert mock_acompletion.call_args[1]["messages"][0]["role"] == "user"

    @patch("api_intent_agent.llm.acompletion", new_callable=AsyncMock)
    def test_acomplete_failure_wrapped(self, mock_acompletion):
        mock_acompletion.side_effect = ConnectionError("down")

        client = LlmClient(api_key="sk-test")
        with pytest.raises(CompletionError, match="down"):
            asyncio.run(client.acomplete("Hello"))

    @patch("api_intent_agent.llm.acompletion", new_callable=AsyncMock)
    def test_cancellation_not_wrapped(self, mock_acompletion):
        mock_acompletion.side_effect = asyncio.CancelledError()

        client = LlmClient(api_key="sk-test")
        with pytest.raises(asyncio.CancelledError):
            asyncio.run(client.acomplete("Hello"))
