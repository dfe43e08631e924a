"""Provider lookup by provider type or model id."""

from typing import Optional, Union

from loguru import logger

from llm_core.config import Settings, settings as default_settings
from llm_core.exceptions import LlmModelError
from llm_core.providers.base import ProviderClient
from llm_core.providers.claude import ClaudeClient
from llm_core.providers.gemini import GeminiClient
from llm_core.providers.openai_client import OpenAIClient
from llm_core.providers.types import Provider

_CLIENT_CLASSES: dict[Provider, type[ProviderClient]] = {
    Provider.CLAUDE: ClaudeClient,
    Provider.OPENAI: OpenAIClient,
    Provider.GEMINI: GeminiClient,
}

_OPENAI_PREFIXES = ("gpt", "o1", "o3", "o4", "chatgpt")


def provider_for_model(model_id: str) -> Provider:
    """Infer the provider from a model id.

    Raises:
        LlmModelError: If the model id matches no known provider.
    """
    name = model_id.lower().split("/")[-1]
    if name.startswith("claude"):
        return Provider.CLAUDE
    if name.startswith(_OPENAI_PREFIXES):
        return Provider.OPENAI
    if name.startswith("gemini"):
        return Provider.GEMINI
    raise LlmModelError(f"Cannot determine provider for model '{model_id}'")


class ProviderFactory:
    """Creates and caches one client per provider."""

    def __init__(self, app_settings: Optional[Settings] = None):
        self.settings = app_settings or default_settings
        self._clients: dict[Provider, ProviderClient] = {}

    def get_provider(self, provider: Union[Provider, str]) -> ProviderClient:
        """Return the client for a provider, creating it on first use."""
        if isinstance(provider, str):
            key = provider.lower()
            provider = Provider("claude" if key == "anthropic" else key)
        if provider not in self._clients:
            client_class = _CLIENT_CLASSES[provider]
            default_model = None
            if self.settings.default_model and self.settings.default_provider == provider.value:
                default_model = self.settings.default_model
            self._clients[provider] = client_class(
                api_key=self.settings.get_api_key(provider.value),
                default_model=default_model,
            )
            logger.debug(f"Created {provider.value} provider client")
        return self._clients[provider]

    def get_provider_for_model(self, model_id: str) -> ProviderClient:
        return self.get_provider(provider_for_model(model_id))

    def get_default_provider(self) -> ProviderClient:
        return self.get_provider(self.settings.default_provider)

    def get_all_providers(self) -> list[ProviderClient]:
        return [self.get_provider(provider) for provider in Provider]

    def get_configured_providers(self) -> list[ProviderClient]:
        """Return only providers that have an API key."""
        return [client for client in self.get_all_providers() if client.is_configured]
