"""
LiteLLM provider implementation
"""

import litellm

from ..errors import LLMProviderError
from ..logging_config import get_logger
from .base import LLMProvider, LLMResponse

logger = get_logger("llm.litellm")


class LiteLLMProvider(LLMProvider):
    """Provider routed through litellm (OpenAI, Anthropic, OpenRouter, ...)"""

    async def generate(self, prompt: str, **kwargs) -> LLMResponse:
        """Run a single-message chat completion through litellm."""
        self.validate_config()

        call_kwargs = {
            "temperature": 0.3,
            "max_tokens": 300,
            **kwargs
        }
        if "base_url" in self.config:
            call_kwargs.setdefault("api_base", self.config["base_url"])

        logger.debug("LiteLLM request: model=%s, prompt_len=%d", self.model, len(prompt))
        try:
            response = await litellm.acompletion(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                api_key=self.api_key,
                timeout=self.timeout,
                **call_kwargs
            )
        except Exception as e:
            raise LLMProviderError(f"LiteLLM generation failed: {e}") from e

        choice = response.choices[0]
        content = choice.message.content
        if not content:
            raise LLMProviderError("LiteLLM returned an empty completion")

        usage = None
        if getattr(response, "usage", None):
            usage = {
                "prompt_tokens": getattr(response.usage, "prompt_tokens", 0),
                "completion_tokens": getattr(response.usage, "completion_tokens", 0),
                "total_tokens": getattr(response.usage, "total_tokens", 0)
            }

        return LLMResponse(
            content=content,
            model=self.model,
            usage=usage,
            finish_reason=getattr(choice, "finish_reason", None)
        )
