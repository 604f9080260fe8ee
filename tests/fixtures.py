"""
Shared test fakes for the link processing tests
"""

from typing import Dict, List, Optional, Union

from linkdump.errors import NotificationError, ScrapeError, SummarizeError
from linkdump.link_service import LinkOrchestrator
from linkdump.models import LinkRecord, ScrapedContent
from linkdump.repository import InMemoryLinkRepository


class FakeScraper:
    """Returns canned metadata per URL, or raises the configured error"""

    def __init__(self, pages: Optional[Dict[str, Union[ScrapedContent, Exception]]] = None,
                 default: Optional[ScrapedContent] = None):
        self.pages = pages or {}
        self.default = default or ScrapedContent(title="Test Page", description="A test page")
        self.calls: List[str] = []

    async def scrape(self, url: str) -> ScrapedContent:
        self.calls.append(url)
        result = self.pages.get(url, self.default)
        if isinstance(result, Exception):
            raise result
        return result


class FakeSummarizer:
    """Returns a fixed summary and records every request"""

    def __init__(self, summary: str = "S", error: Optional[Exception] = None):
        self.summary = summary
        self.error = error
        self.calls: List[dict] = []

    async def summarize(self, url: str, title: Optional[str] = None,
                        description: Optional[str] = None) -> str:
        self.calls.append({"url": url, "title": title, "description": description})
        if self.error:
            raise self.error
        return self.summary


class RecordingNotifier:
    """Collects sent links; optionally raises on send"""

    def __init__(self, error: Optional[Exception] = None):
        self.sent: List[LinkRecord] = []
        self.error = error

    async def send(self, link: LinkRecord) -> None:
        self.sent.append(link)
        if self.error:
            raise self.error


def create_orchestrator(scraper: Optional[FakeScraper] = None,
                        summarizer: Optional[FakeSummarizer] = None,
                        repository: Optional[InMemoryLinkRepository] = None) -> LinkOrchestrator:
    return LinkOrchestrator(
        repository=repository or InMemoryLinkRepository(),
        scraper=scraper or FakeScraper(),
        summarizer=summarizer or FakeSummarizer(),
    )


def scrape_failure(message: str = "HTTP 500: Internal Server Error") -> ScrapeError:
    return ScrapeError(message)


def summarize_failure(message: str = "backend unavailable") -> SummarizeError:
    return SummarizeError(message)


def notification_failure(message: str = "webhook rejected") -> NotificationError:
    return NotificationError(message)


LONG_DESCRIPTION = "A" * 250

SAMPLE_URLS = [
    "https://blog.example/post-1",
    "https://blog.example/post-2",
    "https://blog.example/post-3",
]

SAMPLE_HTML = """
<html>
<head>
  <title>  HTML Title  </title>
  <meta property="og:title" content="OG Title">
  <meta property="og:description" content="OG description of the page">
  <meta property="og:image" content="https://example.com/og.png">
  <meta name="description" content="Meta description">
</head>
<body><p>Hello</p></body>
</html>
"""
