"""
LLM Provider Factory
"""

import os
from typing import Dict
from enum import Enum

from ..config import LLMConfig
from .base import LLMProvider
from .litellm_provider import LiteLLMProvider
from .openrouter_provider import OpenRouterProvider


class LLMProviderType(Enum):
    """Available LLM provider types"""
    LITELLM = "litellm"
    OPENROUTER = "openrouter"


class LLMProviderFactory:
    """Factory for creating LLM providers"""

    PROVIDERS = {
        LLMProviderType.LITELLM: LiteLLMProvider,
        LLMProviderType.OPENROUTER: OpenRouterProvider,
    }

    @classmethod
    def create_provider(
        cls,
        provider_type: LLMProviderType,
        api_key: str,
        model: str,
        **kwargs
    ) -> LLMProvider:
        """Create an LLM provider instance"""
        if provider_type not in cls.PROVIDERS:
            raise ValueError(f"Unknown provider type: {provider_type}")

        provider_class = cls.PROVIDERS[provider_type]
        return provider_class(api_key=api_key, model=model, **kwargs)

    @classmethod
    def _parse_type(cls, value: str, source: str) -> LLMProviderType:
        try:
            return LLMProviderType(value.lower())
        except ValueError:
            raise ValueError(f"Invalid provider type in {source}: {value}")

    @classmethod
    def from_config(cls, config: LLMConfig) -> LLMProvider:
        """Create provider from the llm section of the configuration"""
        provider_type = cls._parse_type(config.provider, "llm.provider")

        api_key = config.api_key
        if not api_key:
            raise ValueError(f"Environment variable {config.api_key_env} is required")

        extra_config = {"timeout": config.timeout}
        if provider_type == LLMProviderType.OPENROUTER:
            if referer := os.getenv("OPENROUTER_REFERER"):
                extra_config["referer"] = referer
            if title := os.getenv("OPENROUTER_TITLE"):
                extra_config["title"] = title

        return cls.create_provider(provider_type, api_key, config.model, **extra_config)

    @classmethod
    def get_available_providers(cls) -> Dict[str, str]:
        """Get list of available providers with descriptions"""
        return {
            LLMProviderType.LITELLM.value: "LiteLLM provider (supports multiple LLM services)",
            LLMProviderType.OPENROUTER.value: "OpenRouter direct API provider"
        }
