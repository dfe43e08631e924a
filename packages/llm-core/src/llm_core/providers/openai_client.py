"""OpenAI provider client."""

from typing import Any, Iterator, Tuple

from loguru import logger

from llm_core.exceptions import LlmModelError
from llm_core.providers.base import ProviderClient
from llm_core.providers.types import GenerationRequest, Provider

module_logger = logger


class OpenAIClient(ProviderClient):
    """Client for OpenAI SDK calls (Chat Completions API)."""

    provider = Provider.OPENAI
    display_name = "OpenAI"

    def _get_client(self):
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            api_key = self._require_key()
            try:
                import openai

                self._client = openai.OpenAI(api_key=api_key)
            except ImportError as e:
                raise LlmModelError(f"OpenAI SDK not available: {e}") from e
        return self._client

    @staticmethod
    def _messages(system_prompt: str, user_prompt: str) -> list[dict[str, str]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})
        return messages

    def chat_completion(
        self,
        system_prompt: str,
        user_prompt: str,
        model_name: str,
        **kwargs,
    ) -> Tuple[str, str]:
        """Make a chat completion call using OpenAI SDK."""
        client = self._get_client()

        try:
            request_kwargs: dict[str, Any] = {
                "model": model_name,
                "messages": self._messages(system_prompt, user_prompt),
            }
            max_tokens = kwargs.pop("max_tokens", None)
            if max_tokens is not None:
                request_kwargs["max_completion_tokens"] = max_tokens
            request_kwargs.update(kwargs)

            response = client.chat.completions.create(**request_kwargs)

            if not response.choices:
                raise ValueError("Empty response output from OpenAI")

            choice = response.choices[0]
            content = choice.message.content or ""
            if not content.strip():
                raise ValueError("Empty response from OpenAI")

            if choice.finish_reason == "length":
                raise self._truncated(model_name)

            return content, response.id

        except LlmModelError:
            raise
        except Exception as e:
            module_logger.error(f"OpenAI API call failed: {e}")
            raise self._wrap_error(e) from e

    def _stream_chunks(self, request: GenerationRequest, model_name: str) -> Iterator[str]:
        client = self._get_client()
        try:
            stream = client.chat.completions.create(
                model=model_name,
                messages=self._messages(request.system_prompt, request.user_prompt),
                max_completion_tokens=request.max_tokens,
                temperature=request.temperature,
                stream=True,
            )
            finish_reason = None
            for event in stream:
                if not event.choices:
                    continue
                choice = event.choices[0]
                finish_reason = getattr(choice, "finish_reason", None) or finish_reason
                delta = choice.delta
                if delta is not None and delta.content:
                    yield delta.content
            if finish_reason == "length":
                raise self._truncated(model_name)
        except LlmModelError:
            raise
        except Exception as e:
            module_logger.error(f"OpenAI streaming call failed: {e}")
            raise self._wrap_error(e, "streaming call") from e
