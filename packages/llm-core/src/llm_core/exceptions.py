"""Custom exceptions for LLM Core library."""

from typing import Optional


class LlmModelError(Exception):
    """Base exception for provider and model errors."""

    pass


class GenerationFailedError(LlmModelError):
    """Exception raised when a generation produced nothing usable.

    Attributes:
        message: Description of the failure
        model_name: Optional model that produced the response
    """

    def __init__(self, message: str, model_name: Optional[str] = None):
        self.message = message
        self.model_name = model_name
        super().__init__(self.message)


class ResponseTruncatedError(LlmModelError):
    """Exception raised when an LLM response is truncated due to max_tokens limit.

    Attributes:
        message: Description of the truncation
        model_name: The model that produced the truncated response
    """

    def __init__(self, message: str, model_name: Optional[str] = None):
        self.message = message
        self.model_name = model_name
        super().__init__(self.message)


class GenerationCancelledError(LlmModelError):
    """Raised when a streaming generation is stopped by its caller."""

    def __init__(self, message: str = "Generation cancelled", partial_content: str = ""):
        self.message = message
        self.partial_content = partial_content
        super().__init__(self.message)


class RateLimitError(LlmModelError):
    """Rate limit exceeded."""

    pass


class APIError(LlmModelError):
    """General API error."""

    pass


class AuthenticationError(LlmModelError):
    """Authentication failed or no API key is configured."""

    pass
