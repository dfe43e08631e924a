"""LLM provider clients for Anthropic, OpenAI and Gemini."""

from llm_core.providers.base import ProviderClient
from llm_core.providers.claude import ClaudeClient
from llm_core.providers.factory import ProviderFactory, provider_for_model
from llm_core.providers.gemini import GeminiClient
from llm_core.providers.openai_client import OpenAIClient
from llm_core.providers.types import (
    CLAUDE_HAIKU_4_5,
    CLAUDE_OPUS_4_5,
    CLAUDE_SONNET_4_5,
    GEMINI_FLASH,
    GEMINI_PRO,
    GPT_4_1,
    GPT_4O,
    GPT_4O_MINI,
    MODELS_BY_PROVIDER,
    GenerationRequest,
    GenerationResult,
    ModelConfig,
    Provider,
    TokenUsage,
)

__all__ = [
    # Base class
    "ProviderClient",
    # Provider clients
    "ClaudeClient",
    "OpenAIClient",
    "GeminiClient",
    # Factory
    "ProviderFactory",
    "provider_for_model",
    # Types
    "Provider",
    "ModelConfig",
    "GenerationRequest",
    "GenerationResult",
    "TokenUsage",
    "MODELS_BY_PROVIDER",
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
