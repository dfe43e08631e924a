"""Provider types, request/response models and model constants for LLM Core."""

from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from llm_core.config.pydantic_config import BaseConfig


class Provider(str, Enum):
    """Enumeration of supported LLM providers."""

    CLAUDE = "claude"
    OPENAI = "openai"
    GEMINI = "gemini"


class ModelConfig(BaseConfig):
    """Configuration for a model, including provider and model identifier."""

    provider: Provider
    model_id: str
    display_name: Optional[str] = None
    context_tokens: int = Field(8000, gt=0)
    max_output_tokens: int = Field(4096, gt=0)

    @model_validator(mode="after")
    def _set_display_name(self) -> "ModelConfig":
        """Default the display name to the model id."""
        if self.display_name is None:
            self.display_name = self.model_id
        return self


class TokenUsage(BaseConfig):
    """Token accounting reported by a provider."""

    input_tokens: int = Field(0, ge=0)
    output_tokens: int = Field(0, ge=0)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class GenerationRequest(BaseConfig):
    """A single text generation request."""

    user_prompt: str
    system_prompt: str = ""
    model: Optional[str] = None
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(4000, gt=0)


class GenerationResult(BaseConfig):
    """The outcome of a non-streaming generation."""

    content: str
    model: str
    generation_id: str = ""
    finish_reason: Optional[str] = None
    usage: Optional[TokenUsage] = None


# Model constants with provider information
CLAUDE_OPUS_4_5 = ModelConfig(
    provider=Provider.CLAUDE, model_id="claude-opus-4-5", context_tokens=200000, max_output_tokens=32000
)
CLAUDE_SONNET_4_5 = ModelConfig(
    provider=Provider.CLAUDE, model_id="claude-sonnet-4-5", context_tokens=200000, max_output_tokens=64000
)
CLAUDE_HAIKU_4_5 = ModelConfig(
    provider=Provider.CLAUDE, model_id="claude-haiku-4-5", context_tokens=200000, max_output_tokens=64000
)
GPT_4O = ModelConfig(provider=Provider.OPENAI, model_id="gpt-4o", context_tokens=128000, max_output_tokens=16384)
GPT_4O_MINI = ModelConfig(
    provider=Provider.OPENAI, model_id="gpt-4o-mini", context_tokens=128000, max_output_tokens=16384
)
GPT_4_1 = ModelConfig(provider=Provider.OPENAI, model_id="gpt-4.1", context_tokens=1047576, max_output_tokens=32768)
GEMINI_PRO = ModelConfig(
    provider=Provider.GEMINI, model_id="gemini-2.5-pro", context_tokens=1048576, max_output_tokens=65536
)
GEMINI_FLASH = ModelConfig(
    provider=Provider.GEMINI, model_id="gemini-2.5-flash", context_tokens=1048576, max_output_tokens=65536
)

MODELS_BY_PROVIDER: dict[Provider, list[ModelConfig]] = {
    Provider.CLAUDE: [CLAUDE_SONNET_4_5, CLAUDE_OPUS_4_5, CLAUDE_HAIKU_4_5],
    Provider.OPENAI: [GPT_4O, GPT_4O_MINI, GPT_4_1],
    Provider.GEMINI: [GEMINI_FLASH, GEMINI_PRO],
}
