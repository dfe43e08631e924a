"""Tests for provider clients with the vendor SDKs mocked out."""

import threading
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from llm_core.exceptions import (
    APIError,
    AuthenticationError,
    GenerationCancelledError,
    GenerationFailedError,
    LlmModelError,
    RateLimitError,
    ResponseTruncatedError,
)
from llm_core.providers import ClaudeClient, GeminiClient, GenerationRequest, OpenAIClient


def _claude_response(text="Hello", stop_reason="end_turn"):
    return SimpleNamespace(id="msg_123", content=[SimpleNamespace(text=text)], stop_reason=stop_reason)


def _openai_response(text="Hello", finish_reason="stop"):
    choice = SimpleNamespace(message=SimpleNamespace(content=text), finish_reason=finish_reason)
    return SimpleNamespace(id="chatcmpl-1", choices=[choice])


class TestProviderClientBase:
    """Tests for behaviour shared by all clients."""

    def test_is_configured(self):
        """Test is_configured reflects the API key."""
        assert ClaudeClient(api_key="key").is_configured is True
        assert ClaudeClient(api_key=None).is_configured is False
        assert ClaudeClient(api_key="   ").is_configured is False

    def test_default_model_is_first_listed(self):
        assert ClaudeClient(api_key="key").default_model == "claude-sonnet-4-5"
        assert OpenAIClient(api_key="key").default_model == "gpt-4o"
        assert GeminiClient(api_key="key").default_model == "gemini-2.5-flash"

    def test_explicit_default_model(self):
        assert OpenAIClient(api_key="key", default_model="gpt-4.1").default_model == "gpt-4.1"

    def test_missing_key_raises_authentication_error(self):
        """Test calling a client without a key fails before any SDK call."""
        client = OpenAIClient(api_key=None)
        with pytest.raises(AuthenticationError):
            client.chat_completion("", "hi", "gpt-4o")

    def test_estimate_tokens(self):
        assert GeminiClient(api_key="key").estimate_tokens("abcdefgh") == 2


class TestClaudeClient:
    """Tests for ClaudeClient."""

    def test_chat_completion(self):
        """Test a successful completion returns content and id."""
        client = ClaudeClient(api_key="key")
        sdk = MagicMock()
        sdk.messages.create.return_value = _claude_response("A story")
        with patch.object(client, "_get_client", return_value=sdk):
            content, generation_id = client.chat_completion("Be brief", "Tell me", "claude-sonnet-4-5", max_tokens=100)

        assert content == "A story"
        assert generation_id == "msg_123"
        kwargs = sdk.messages.create.call_args.kwargs
        assert kwargs["system"] == "Be brief"
        assert kwargs["max_tokens"] == 100

    def test_truncated_response_raises(self):
        client = ClaudeClient(api_key="key")
        sdk = MagicMock()
        sdk.messages.create.return_value = _claude_response(stop_reason="max_tokens")
        with patch.object(client, "_get_client", return_value=sdk):
            with pytest.raises(ResponseTruncatedError):
                client.chat_completion("", "Tell me", "claude-sonnet-4-5")

    def test_sdk_error_wrapped(self):
        """Test SDK exceptions surface as LlmModelError."""
        client = ClaudeClient(api_key="key")
        sdk = MagicMock()
        sdk.messages.create.side_effect = RuntimeError("overloaded")
        with patch.object(client, "_get_client", return_value=sdk):
            with pytest.raises(LlmModelError, match="overloaded"):
                client.chat_completion("", "Tell me", "claude-sonnet-4-5")

    def test_generate_wraps_result(self):
        client = ClaudeClient(api_key="key")
        with patch.object(client, "chat_completion", return_value=("Text", "gen-1")):
            result = client.generate(GenerationRequest(user_prompt="hi"))
        assert result.content == "Text"
        assert result.model == "claude-sonnet-4-5"
        assert result.generation_id == "gen-1"

    def test_generate_failed_response(self):
        """Test an error-looking response raises GenerationFailedError."""
        client = ClaudeClient(api_key="key")
        with patch.object(client, "chat_completion", return_value=("Error: nope", "gen-1")):
            with pytest.raises(GenerationFailedError):
                client.generate(GenerationRequest(user_prompt="hi"))


class TestOpenAIClient:
    """Tests for OpenAIClient."""

    def test_chat_completion_maps_max_tokens(self):
        """Test max_tokens is sent as max_completion_tokens."""
        client = OpenAIClient(api_key="key")
        sdk = MagicMock()
        sdk.chat.completions.create.return_value = _openai_response("Answer")
        with patch.object(client, "_get_client", return_value=sdk):
            content, generation_id = client.chat_completion("sys", "user", "gpt-4o", max_tokens=50)

        assert content == "Answer"
        assert generation_id == "chatcmpl-1"
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["max_completion_tokens"] == 50
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}

    def test_length_finish_reason_raises_truncated(self):
        client = OpenAIClient(api_key="key")
        sdk = MagicMock()
        sdk.chat.completions.create.return_value = _openai_response(finish_reason="length")
        with patch.object(client, "_get_client", return_value=sdk):
            with pytest.raises(ResponseTruncatedError):
                client.chat_completion("", "user", "gpt-4o")

    def test_stream_completion_yields_deltas(self):
        """Test streamed deltas are yielded in order."""
        client = OpenAIClient(api_key="key")
        events = [
            SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content="Once "))]),
            SimpleNamespace(choices=[]),
            SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content="upon"))]),
        ]
        sdk = MagicMock()
        sdk.chat.completions.create.return_value = iter(events)
        with patch.object(client, "_get_client", return_value=sdk):
            chunks = list(client.stream_completion(GenerationRequest(user_prompt="go")))
        assert chunks == ["Once ", "upon"]


class TestStreamCancellation:
    """Tests for cooperative cancellation of streams."""

    def test_cancel_event_stops_stream(self):
        """Test setting the event raises with the partial content."""
        client = ClaudeClient(api_key="key")
        cancel_event = threading.Event()

        def chunks(request, model_name):
            yield "First "
            cancel_event.set()
            yield "second"

        with patch.object(client, "_stream_chunks", side_effect=chunks):
            received = []
            with pytest.raises(GenerationCancelledError) as exc_info:
                for chunk in client.stream_completion(GenerationRequest(user_prompt="go"), cancel_event):
                    received.append(chunk)

        assert received == ["First "]
        assert exc_info.value.partial_content == "First "


class TestGeminiClient:
    """Tests for GeminiClient."""

    def test_chat_completion_joins_parts(self):
        """Test text parts of the first candidate are joined."""
        client = GeminiClient(api_key="key")
        parts = [SimpleNamespace(text="Hello "), SimpleNamespace(text="world")]
        response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))], text="")
        sdk = MagicMock()
        sdk.models.generate_content.return_value = response
        with patch.object(client, "_get_client", return_value=sdk), patch.object(
            GeminiClient, "_build_config", return_value=None
        ):
            content, generation_id = client.chat_completion("", "hi", "gemini-2.5-flash")

        assert content == "Hello world"
        assert generation_id.startswith("gemini_")

    def test_empty_response_raises(self):
        client = GeminiClient(api_key="key")
        sdk = MagicMock()
        sdk.models.generate_content.return_value = SimpleNamespace(candidates=[], text="")
        with patch.object(client, "_get_client", return_value=sdk), patch.object(
            GeminiClient, "_build_config", return_value=None
        ):
            with pytest.raises(LlmModelError, match="Empty response"):
                client.chat_completion("", "hi", "gemini-2.5-flash")

    def test_max_tokens_finish_raises_truncated(self):
        client = GeminiClient(api_key="key")
        candidate = SimpleNamespace(finish_reason="FinishReason.MAX_TOKENS", content=None)
        sdk = MagicMock()
        sdk.models.generate_content.return_value = SimpleNamespace(candidates=[candidate], text="partial")
        with patch.object(client, "_get_client", return_value=sdk), patch.object(
            GeminiClient, "_build_config", return_value=None
        ):
            with pytest.raises(ResponseTruncatedError):
                client.chat_completion("", "hi", "gemini-2.5-flash")


class _StatusError(Exception):
    """Stand-in for an SDK error carrying an HTTP status."""

    def __init__(self, message, status_code=None, code=None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class TestErrorMapping:
    """Tests for translating SDK errors into LlmModelError subclasses."""

    @pytest.mark.parametrize(
        "error, expected",
        [
            (_StatusError("slow down", status_code=429), RateLimitError),
            (_StatusError("bad key", status_code=401), AuthenticationError),
            (_StatusError("forbidden", code=403), AuthenticationError),
            (_StatusError("server", status_code=500), APIError),
        ],
    )
    def test_status_codes(self, error, expected):
        client = ClaudeClient(api_key="key")
        sdk = MagicMock()
        sdk.messages.create.side_effect = error
        with patch.object(client, "_get_client", return_value=sdk):
            with pytest.raises(expected):
                client.chat_completion("", "Tell me", "claude-sonnet-4-5")

    def test_gemini_code_attribute(self):
        """Test google-genai's ``code`` attribute is honoured."""
        client = GeminiClient(api_key="key")
        sdk = MagicMock()
        sdk.models.generate_content.side_effect = _StatusError("quota", code=429)
        with patch.object(client, "_get_client", return_value=sdk), patch.object(
            GeminiClient, "_build_config", return_value=None
        ):
            with pytest.raises(RateLimitError, match="Gemini API call failed: quota"):
                client.chat_completion("", "hi", "gemini-2.5-flash")

    def test_openai_stream_status_error(self):
        client = OpenAIClient(api_key="key")
        sdk = MagicMock()
        sdk.chat.completions.create.side_effect = _StatusError("unavailable", status_code=503)
        with patch.object(client, "_get_client", return_value=sdk):
            with pytest.raises(APIError, match=r"\(503\)"):
                list(client.stream_completion(GenerationRequest(user_prompt="go")))


class TestStreamTruncation:
    """Tests that streams stopped by the token limit raise after yielding."""

    @staticmethod
    def _openai_event(content, finish_reason=None):
        choice = SimpleNamespace(delta=SimpleNamespace(content=content), finish_reason=finish_reason)
        return SimpleNamespace(choices=[choice])

    def test_openai_length_finish(self):
        client = OpenAIClient(api_key="key")
        events = [self._openai_event("Once upon"), self._openai_event(" a time", "length")]
        sdk = MagicMock()
        sdk.chat.completions.create.return_value = iter(events)
        received = []
        with patch.object(client, "_get_client", return_value=sdk):
            with pytest.raises(ResponseTruncatedError):
                for chunk in client.stream_completion(GenerationRequest(user_prompt="go")):
                    received.append(chunk)
        assert received == ["Once upon", " a time"]

    def test_openai_stop_finish(self):
        client = OpenAIClient(api_key="key")
        events = [self._openai_event("Done", "stop")]
        sdk = MagicMock()
        sdk.chat.completions.create.return_value = iter(events)
        with patch.object(client, "_get_client", return_value=sdk):
            assert list(client.stream_completion(GenerationRequest(user_prompt="go"))) == ["Done"]

    @staticmethod
    def _claude_sdk(stop_reason):
        stream = MagicMock()
        stream.text_stream = iter(["Once ", "upon"])
        stream.get_final_message.return_value = SimpleNamespace(stop_reason=stop_reason)
        sdk = MagicMock()
        sdk.messages.stream.return_value.__enter__.return_value = stream
        return sdk

    def test_claude_stream(self):
        client = ClaudeClient(api_key="key")
        with patch.object(client, "_get_client", return_value=self._claude_sdk("end_turn")):
            chunks = list(client.stream_completion(GenerationRequest(user_prompt="go", max_tokens=300)))
        assert chunks == ["Once ", "upon"]

    def test_claude_max_tokens(self):
        client = ClaudeClient(api_key="key")
        sdk = self._claude_sdk("max_tokens")
        with patch.object(client, "_get_client", return_value=sdk):
            with pytest.raises(ResponseTruncatedError):
                list(client.stream_completion(GenerationRequest(user_prompt="go", max_tokens=300)))
        assert sdk.messages.stream.call_args.kwargs["max_tokens"] == 300

    @staticmethod
    def _gemini_chunks(last_finish_reason):
        return [
            SimpleNamespace(text="Once ", candidates=[SimpleNamespace(finish_reason=None)]),
            SimpleNamespace(text="upon", candidates=[SimpleNamespace(finish_reason=last_finish_reason)]),
        ]

    def test_gemini_stream(self):
        client = GeminiClient(api_key="key")
        sdk = MagicMock()
        sdk.models.generate_content_stream.return_value = iter(self._gemini_chunks("FinishReason.STOP"))
        with patch.object(client, "_get_client", return_value=sdk), patch.object(
            GeminiClient, "_build_config", return_value=None
        ):
            chunks = list(client.stream_completion(GenerationRequest(user_prompt="go")))
        assert chunks == ["Once ", "upon"]

    def test_gemini_max_tokens(self):
        client = GeminiClient(api_key="key")
        sdk = MagicMock()
        sdk.models.generate_content_stream.return_value = iter(self._gemini_chunks("FinishReason.MAX_TOKENS"))
        with patch.object(client, "_get_client", return_value=sdk), patch.object(
            GeminiClient, "_build_config", return_value=None
        ):
            with pytest.raises(ResponseTruncatedError):
                list(client.stream_completion(GenerationRequest(user_prompt="go")))
