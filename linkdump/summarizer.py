"""
AI summary generation on top of an LLM provider
"""
import re
from typing import Optional

from .config import LLMConfig, SummarizerConfig
from .errors import LLMProviderError, SummarizeError
from .llm import LLMProvider, LLMProviderFactory
from .logging_config import get_logger

logger = get_logger("summarizer")

_PREFIX_RE = re.compile(r"^\s*summary\s*:\s*", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


class LLMSummarizer:
    """Summarizes a page from its URL, title and description.

    Without an explicit provider one is built from the llm configuration
    on first use, so a missing API key only matters once a summary is needed.
    """

    def __init__(
        self,
        llm_provider: Optional[LLMProvider] = None,
        config: Optional[SummarizerConfig] = None,
        llm_config: Optional[LLMConfig] = None,
    ):
        self._llm_provider = llm_provider
        self.config = config or SummarizerConfig()
        self.llm_config = llm_config or LLMConfig()

    @property
    def llm_provider(self) -> LLMProvider:
        if self._llm_provider is None:
            self._llm_provider = LLMProviderFactory.from_config(self.llm_config)
        return self._llm_provider

    def build_prompt(self, url: str, title: Optional[str], description: Optional[str]) -> str:
        return f"""Summarize the following web page for someone deciding whether to open it.

URL: {url}
Title: {title or "No title"}
Description: {description or "No description"}

Guidelines:
- 2-3 sentences covering the core content
- Say plainly why the link is worth reading
- No filler or hype

Summary:"""

    def cleanup_summary(self, text: str) -> str:
        """Strip a leading 'Summary:' label, collapse whitespace and cap length."""
        text = _PREFIX_RE.sub("", text.strip())
        text = _WHITESPACE_RE.sub(" ", text).strip()
        return text[: self.config.max_chars]

    async def summarize(
        self,
        url: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        prompt = self.build_prompt(url, title, description)

        try:
            llm_provider = self.llm_provider
            logger.info("Requesting AI summary for %s via %s", url, type(llm_provider).__name__)
            async with llm_provider as provider:
                response = await provider.generate(
                    prompt,
                    temperature=self.config.temperature,
                    max_tokens=self.config.max_tokens,
                )
        except (LLMProviderError, ValueError) as e:
            raise SummarizeError(f"Summarization failed for {url}: {e}") from e

        summary = self.cleanup_summary(response.content)
        if not summary:
            raise SummarizeError(f"Summarization returned no text for {url}")
        return summary
