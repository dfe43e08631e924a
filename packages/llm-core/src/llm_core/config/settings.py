"""Application settings using Pydantic Settings."""

import os

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_PROVIDERS = ("claude", "openai", "gemini")


class Settings(BaseSettings):
    """Provider credentials and defaults loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    anthropic_api_key: SecretStr | None = Field(None, alias="ANTHROPIC_API_KEY")
    openai_api_key: SecretStr | None = Field(None, alias="OPENAI_API_KEY")
    gemini_api_key: SecretStr | None = Field(None, alias="GEMINI_API_KEY")

    default_provider: str = Field("claude", alias="LLM_DEFAULT_PROVIDER")
    default_model: str | None = Field(None, alias="LLM_DEFAULT_MODEL")

    debug: bool = False

    @field_validator("default_provider")
    @classmethod
    def _check_default_provider(cls, value: str) -> str:
        value = value.lower()
        if value == "anthropic":
            value = "claude"
        if value not in SUPPORTED_PROVIDERS:
            raise ValueError(f"default_provider must be one of {', '.join(SUPPORTED_PROVIDERS)}, got '{value}'")
        return value

    def get_api_key(self, provider: str) -> str | None:
        """Get the API key for a provider name.

        Args:
            provider: Provider name (anthropic, claude, openai or gemini)

        Returns:
            API key string if found, None otherwise
        """
        provider_key = provider.lower()
        key_map = {
            "anthropic": ("ANTHROPIC_API_KEY", self.anthropic_api_key),
            "claude": ("ANTHROPIC_API_KEY", self.anthropic_api_key),
            "openai": ("OPENAI_API_KEY", self.openai_api_key),
            "gemini": ("GEMINI_API_KEY", self.gemini_api_key),
        }
        env_name, secret_value = key_map.get(provider_key, (None, None))
        if secret_value:
            return secret_value.get_secret_value()
        if env_name:
            return os.getenv(env_name)
        return None


settings: Settings = Settings()  # type: ignore[call-arg]
