"""Claude (Anthropic) provider client."""

from typing import Any, Iterator, Tuple

from loguru import logger

from llm_core.exceptions import LlmModelError
from llm_core.providers.base import ProviderClient
from llm_core.providers.types import GenerationRequest, Provider

module_logger = logger


class ClaudeClient(ProviderClient):
    """Client for Claude (Anthropic) SDK calls."""

    provider = Provider.CLAUDE
    display_name = "Claude"

    def _get_client(self):
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            api_key = self._require_key()
            try:
                import anthropic

                self._client = anthropic.Anthropic(api_key=api_key)
            except ImportError as e:
                raise LlmModelError(f"Anthropic SDK not available: {e}") from e
        return self._client

    def _request_params(self, system_prompt: str, user_prompt: str, model_name: str, **kwargs) -> dict[str, Any]:
        request_params: dict[str, Any] = {
            "model": model_name,
            "max_tokens": kwargs.pop("max_tokens", 4000),
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if system_prompt:
            request_params["system"] = system_prompt
        request_params.update(kwargs)
        return request_params

    def chat_completion(
        self,
        system_prompt: str,
        user_prompt: str,
        model_name: str,
        **kwargs,
    ) -> Tuple[str, str]:
        """Make a chat completion call using Anthropic SDK."""
        client = self._get_client()

        try:
            response = client.messages.create(**self._request_params(system_prompt, user_prompt, model_name, **kwargs))

            if not response.content or not response.content[0].text:
                raise ValueError("Empty response from Claude")

            content = response.content[0].text

            if response.stop_reason == "max_tokens":
                raise self._truncated(model_name)

            return content, response.id

        except LlmModelError:
            raise
        except Exception as e:
            module_logger.error(f"Claude API call failed: {e}")
            raise self._wrap_error(e) from e

    def _stream_chunks(self, request: GenerationRequest, model_name: str) -> Iterator[str]:
        client = self._get_client()
        params = self._request_params(
            request.system_prompt,
            request.user_prompt,
            model_name,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )
        try:
            with client.messages.stream(**params) as stream:
                for text in stream.text_stream:
                    yield text
                final_message = stream.get_final_message()
            if final_message.stop_reason == "max_tokens":
                raise self._truncated(model_name)
        except LlmModelError:
            raise
        except Exception as e:
            module_logger.error(f"Claude streaming call failed: {e}")
            raise self._wrap_error(e, "streaming call") from e
