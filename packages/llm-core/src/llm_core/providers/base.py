"""Abstract base class for provider-specific LLM clients."""

import threading
import time
import uuid
from abc import ABC, abstractmethod
from typing import Iterator, Optional, Tuple

from loguru import logger

from llm_core.exceptions import (
    APIError,
    AuthenticationError,
    GenerationCancelledError,
    GenerationFailedError,
    LlmModelError,
    RateLimitError,
    ResponseTruncatedError,
)
from llm_core.providers.types import MODELS_BY_PROVIDER, GenerationRequest, GenerationResult, ModelConfig, Provider
from llm_core.tokens import TokenCounter
from llm_core.utils import is_failed_response

module_logger = logger


class ProviderClient(ABC):
    """Abstract base class for synchronous provider-specific LLM clients.

    Subclasses implement ``chat_completion`` and ``_stream_chunks``; request
    handling, cancellation and token estimation are shared here.
    """

    provider: Provider
    display_name: str = "LLM"

    def __init__(self, api_key: Optional[str], default_model: Optional[str] = None):
        self.api_key = api_key
        self._default_model = default_model
        self._client = None
        self._token_counter = TokenCounter()

    @property
    def provider_name(self) -> str:
        return self.provider.value

    @property
    def supports_streaming(self) -> bool:
        return True

    @property
    def is_configured(self) -> bool:
        """True when an API key is available."""
        return bool(self.api_key and self.api_key.strip())

    @property
    def available_models(self) -> list[ModelConfig]:
        return list(MODELS_BY_PROVIDER.get(self.provider, []))

    @property
    def default_model(self) -> str:
        if self._default_model:
            return self._default_model
        return self.available_models[0].model_id

    @property
    def max_context_tokens(self) -> int:
        return self._token_counter.max_context_tokens(self.default_model)

    def _require_key(self) -> str:
        if not self.is_configured:
            raise AuthenticationError(f"No API key configured for provider '{self.provider_name}'")
        return self.api_key  # type: ignore[return-value]

    @staticmethod
    def _status_code(error: Exception) -> Optional[int]:
        """HTTP status carried by an SDK error (``status_code`` or google-genai's ``code``)."""
        for attribute in ("status_code", "code"):
            value = getattr(error, attribute, None)
            if isinstance(value, int):
                return value
        return None

    def _wrap_error(self, error: Exception, action: str = "API call") -> LlmModelError:
        """Translate an SDK exception into the matching ``LlmModelError`` subclass."""
        message = f"{self.display_name} {action} failed: {error}"
        status = self._status_code(error)
        if status in (401, 403):
            return AuthenticationError(message)
        if status == 429:
            return RateLimitError(message)
        if status is not None:
            return APIError(f"{self.display_name} {action} failed ({status}): {error}")
        return LlmModelError(message)

    def _truncated(self, model_name: str) -> ResponseTruncatedError:
        module_logger.warning("Response truncated: consider increasing max_tokens")
        return ResponseTruncatedError(
            message="Response truncated due to max_tokens limit",
            model_name=model_name,
        )

    @staticmethod
    def _new_generation_id(prefix: str) -> str:
        return f"{prefix}_{int(time.time())}_{uuid.uuid4().hex[:8]}"

    @abstractmethod
    def chat_completion(
        self,
        system_prompt: str,
        user_prompt: str,
        model_name: str,
        **kwargs,
    ) -> Tuple[str, str]:
        """
        Make a chat completion call.

        Args:
            system_prompt: System prompt for the conversation
            user_prompt: User prompt for the conversation
            model_name: Name of the model to use
            **kwargs: Additional arguments (temperature, max_tokens)

        Returns:
            Tuple of (response_content, generation_id)
        """
        pass

    @abstractmethod
    def _stream_chunks(self, request: GenerationRequest, model_name: str) -> Iterator[str]:
        """Yield raw text deltas from the provider's streaming API."""
        pass

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run a request to completion and wrap the response."""
        model_name = request.model or self.default_model
        content, generation_id = self.chat_completion(
            system_prompt=request.system_prompt,
            user_prompt=request.user_prompt,
            model_name=model_name,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )
        if is_failed_response(content):
            raise GenerationFailedError(f"Empty response from {self.provider_name}", model_name=model_name)
        return GenerationResult(content=content, model=model_name, generation_id=generation_id)

    def stream_completion(
        self,
        request: GenerationRequest,
        cancel_event: Optional[threading.Event] = None,
    ) -> Iterator[str]:
        """Yield text chunks as the provider produces them.

        Raises:
            GenerationCancelledError: If ``cancel_event`` is set mid-stream.
        """
        model_name = request.model or self.default_model
        received: list[str] = []
        for chunk in self._stream_chunks(request, model_name):
            if cancel_event is not None and cancel_event.is_set():
                module_logger.info(f"{self.provider_name} stream cancelled after {len(received)} chunks")
                raise GenerationCancelledError(partial_content="".join(received))
            if chunk:
                received.append(chunk)
                yield chunk

    def estimate_tokens(self, text: Optional[str]) -> int:
        return self._token_counter.estimate_tokens(text)
