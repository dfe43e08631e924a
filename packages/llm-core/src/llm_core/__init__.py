"""LLM Core - Provider clients, settings and token accounting."""

__version__ = "0.2.0"

from llm_core.config import BaseConfig, Settings, settings
from llm_core.exceptions import (
    APIError,
    AuthenticationError,
    GenerationCancelledError,
    GenerationFailedError,
    LlmModelError,
    RateLimitError,
    ResponseTruncatedError,
)
from llm_core.providers import (
    # Model constants
    CLAUDE_HAIKU_4_5,
    CLAUDE_OPUS_4_5,
    CLAUDE_SONNET_4_5,
    GEMINI_FLASH,
    GEMINI_PRO,
    GPT_4_1,
    GPT_4O,
    GPT_4O_MINI,
    # Clients
    ClaudeClient,
    GeminiClient,
    # Types
    GenerationRequest,
    GenerationResult,
    ModelConfig,
    OpenAIClient,
    Provider,
    ProviderClient,
    ProviderFactory,
    TokenUsage,
    provider_for_model,
)
from llm_core.tokens import TokenCounter
from llm_core.utils import extract_json_text, is_failed_response, parse_json_response

__all__ = [
    # Version
    "__version__",
    # Config
    "settings",
    "Settings",
    "BaseConfig",
    # Providers
    "ProviderClient",
    "ProviderFactory",
    "provider_for_model",
    "ClaudeClient",
    "OpenAIClient",
    "GeminiClient",
    "Provider",
    "ModelConfig",
    "GenerationRequest",
    "GenerationResult",
    "TokenUsage",
    # Tokens
    "TokenCounter",
    # Exceptions
    "LlmModelError",
    "GenerationFailedError",
    "GenerationCancelledError",
    "ResponseTruncatedError",
    "RateLimitError",
    "APIError",
    "AuthenticationError",
    # Utilities
    "is_failed_response",
    "extract_json_text",
    "parse_json_response",
    # Model constants
    "CLAUDE_OPUS_4_5",
    "CLAUDE_SONNET_4_5",
    "CLAUDE_HAIKU_4_5",
    "GPT_4O",
    "GPT_4O_MINI",
    "GPT_4_1",
    "GEMINI_PRO",
    "GEMINI_FLASH",
]
