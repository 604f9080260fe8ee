"""
Base LLM provider interface
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """Text returned by a provider plus usage metadata"""
    content: str
    model: str
    usage: Optional[Dict[str, int]] = None
    finish_reason: Optional[str] = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers"""

    def __init__(self, api_key: str, model: str, **kwargs):
        self.api_key = api_key
        self.model = model
        self.config = kwargs
        self.timeout = kwargs.get("timeout", 30)

    @abstractmethod
    async def generate(self, prompt: str, **kwargs) -> LLMResponse:
        """Generate a completion for a single user prompt.

        Raises:
            LLMProviderError: the request failed or returned no content.
        """

    def validate_config(self) -> bool:
        """Check that credentials and model are present."""
        name = type(self).__name__
        if not self.api_key:
            raise ValueError(f"API key is required for {name}")
        if not self.model:
            raise ValueError(f"Model is required for {name}")
        return True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass
