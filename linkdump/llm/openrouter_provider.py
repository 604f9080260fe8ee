"""
OpenRouter direct provider implementation
"""

import asyncio
from typing import Optional

import aiohttp

from ..errors import LLMProviderError
from ..logging_config import get_logger
from .base import LLMProvider, LLMResponse

logger = get_logger("llm.openrouter")


class OpenRouterProvider(LLMProvider):
    """OpenRouter chat completions API over aiohttp"""

    BASE_URL = "https://openrouter.ai/api/v1"

    def __init__(self, api_key: str, model: str, **kwargs):
        super().__init__(api_key, model, **kwargs)
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()
            self.session = None

    async def generate(self, prompt: str, **kwargs) -> LLMResponse:
        """Post a single-message chat completion to OpenRouter."""
        self.validate_config()

        if not self.session:
            await self.__aenter__()

        call_kwargs = {
            "temperature": 0.3,
            "max_tokens": 300,
            **kwargs
        }

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.config.get("referer", "https://github.com/linkdump"),
            "X-Title": self.config.get("title", "LinkDump")
        }

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            **call_kwargs
        }

        logger.debug("OpenRouter request: model=%s, prompt_len=%d", self.model, len(prompt))
        try:
            async with self.session.post(
                f"{self.BASE_URL}/chat/completions",
                headers=headers,
                json=payload
            ) as response:
                response.raise_for_status()
                data = await response.json()
        except asyncio.TimeoutError as e:
            raise LLMProviderError(f"OpenRouter API request timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise LLMProviderError(f"OpenRouter API request failed: {e}") from e

        try:
            choice = data["choices"][0]
            content = choice["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMProviderError(f"Unexpected OpenRouter response: {data!r}") from e
        if not content:
            raise LLMProviderError("OpenRouter returned an empty completion")

        return LLMResponse(
            content=content,
            model=data.get("model", self.model),
            usage=data.get("usage"),
            finish_reason=choice.get("finish_reason")
        )
