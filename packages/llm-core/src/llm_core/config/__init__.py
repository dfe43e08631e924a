"""Configuration for LLM Core."""

from llm_core.config.pydantic_config import BaseConfig
from llm_core.config.settings import SUPPORTED_PROVIDERS, Settings, settings

__all__ = ["BaseConfig", "Settings", "settings", "SUPPORTED_PROVIDERS"]
