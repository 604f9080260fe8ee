"""
Content classification deciding whether a page warrants an AI summary
"""
from typing import Iterable, Optional
from urllib.parse import urlparse

from .config import ClassifierConfig
from .models import ContentClassification, ContentType


class ContentClassifier:
    """Classifies a URL and its metadata into a content type.

    Pure and deterministic: the same inputs always give the same result,
    and classification never raises.
    """

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = config or ClassifierConfig()
        self.social_domains = tuple(d.lower() for d in self.config.social_domains)
        self.video_domains = tuple(d.lower() for d in self.config.video_domains)
        self.threshold = self.config.summarize_threshold

    def classify(
        self,
        url: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ContentClassification:
        """Classify content using the host denylists, then metadata length."""
        host = self.extract_hostname(url)

        if self._matches(host, self.social_domains):
            return ContentClassification(
                type=ContentType.SOCIAL_MEDIA,
                should_summarize=False,
                reason=f"Social media platform ({host}): using page metadata only",
            )

        if self._matches(host, self.video_domains):
            return ContentClassification(
                type=ContentType.VIDEO,
                should_summarize=False,
                reason=f"Video platform ({host}): using page metadata only",
            )

        length = len(title or "") + len(description or "")
        if length >= self.threshold:
            return ContentClassification(
                type=ContentType.LONG_CONTENT,
                should_summarize=True,
                reason=f"Metadata length {length} >= {self.threshold}: AI summary warranted",
            )

        return ContentClassification(
            type=ContentType.SHORT_CONTENT,
            should_summarize=False,
            reason=f"Metadata length {length} < {self.threshold}: short content",
        )

    @staticmethod
    def extract_hostname(url: str) -> str:
        """Lower-cased hostname of url, or '' when it cannot be parsed."""
        try:
            return (urlparse(url).hostname or "").lower()
        except (ValueError, TypeError, AttributeError):
            return ""

    @staticmethod
    def _matches(host: str, domains: Iterable[str]) -> bool:
        if not host:
            return False
        return any(host == d or host.endswith("." + d) for d in domains)
