"""Gemini provider client."""

from typing import Iterator, Tuple

from loguru import logger

from llm_core.exceptions import LlmModelError
from llm_core.providers.base import ProviderClient
from llm_core.providers.types import GenerationRequest, Provider

module_logger = logger


class GeminiClient(ProviderClient):
    """Client for Google GenAI SDK calls."""

    provider = Provider.GEMINI
    display_name = "Gemini"

    def _get_client(self):
        """Lazy initialization of Gemini client."""
        if self._client is None:
            api_key = self._require_key()
            try:
                from google import genai

                self._client = genai.Client(api_key=api_key)
            except ImportError as e:
                raise LlmModelError(f"Google GenAI SDK not available: {e}") from e
        return self._client

    @staticmethod
    def _extract_text_from_parts(parts: list) -> str:
        """Join the text parts of a candidate, skipping non-text parts."""
        text_parts = []
        for part in parts:
            if hasattr(part, "text") and part.text:
                text_parts.append(part.text)
            elif isinstance(part, dict) and part.get("text"):
                text_parts.append(part["text"])
        return "".join(text_parts)

    @staticmethod
    def _hit_token_limit(candidate) -> bool:
        return str(getattr(candidate, "finish_reason", "") or "").endswith("MAX_TOKENS")

    @staticmethod
    def _build_config(system_prompt: str, **kwargs):
        from google.genai import types

        config_kwargs = {}
        if "temperature" in kwargs:
            config_kwargs["temperature"] = kwargs.pop("temperature")
        if "max_tokens" in kwargs:
            config_kwargs["max_output_tokens"] = kwargs.pop("max_tokens")
        config_kwargs.update(kwargs)
        if system_prompt:
            config_kwargs["system_instruction"] = system_prompt
        return types.GenerateContentConfig(**config_kwargs)

    def chat_completion(
        self,
        system_prompt: str,
        user_prompt: str,
        model_name: str,
        **kwargs,
    ) -> Tuple[str, str]:
        """Make a chat completion call using Gemini SDK."""
        client = self._get_client()

        try:
            config = self._build_config(system_prompt, **kwargs)
            response = client.models.generate_content(model=model_name, contents=user_prompt, config=config)

            content = ""
            if hasattr(response, "candidates") and response.candidates:
                candidate = response.candidates[0]
                if self._hit_token_limit(candidate):
                    raise self._truncated(model_name)
                if hasattr(candidate, "content") and candidate.content and hasattr(candidate.content, "parts"):
                    parts = candidate.content.parts
                    if parts:
                        content = self._extract_text_from_parts(parts)

            if not content:
                if not response.text:
                    raise ValueError("Empty response from Gemini")
                content = response.text

            return content, self._new_generation_id("gemini")

        except LlmModelError:
            raise
        except Exception as e:
            module_logger.error(f"Gemini API call failed: {e}")
            raise self._wrap_error(e) from e

    def _stream_chunks(self, request: GenerationRequest, model_name: str) -> Iterator[str]:
        client = self._get_client()
        try:
            config = self._build_config(
                request.system_prompt,
                temperature=request.temperature,
                max_tokens=request.max_tokens,
            )
            truncated = False
            for chunk in client.models.generate_content_stream(
                model=model_name, contents=request.user_prompt, config=config
            ):
                candidates = getattr(chunk, "candidates", None)
                if candidates and self._hit_token_limit(candidates[0]):
                    truncated = True
                if chunk.text:
                    yield chunk.text
            if truncated:
                raise self._truncated(model_name)
        except LlmModelError:
            raise
        except Exception as e:
            module_logger.error(f"Gemini streaming call failed: {e}")
            raise self._wrap_error(e, "streaming call") from e
