"""
Collaborator protocols used by the link processing services
"""
from typing import List, Optional, Protocol

from .models import LinkRecord, LinkStatus, ScrapedContent


class ContentScraper(Protocol):
    """Fetches a page and extracts its metadata. Raises ScrapeError."""

    async def scrape(self, url: str) -> ScrapedContent: ...


class Summarizer(Protocol):
    """Produces a short summary for a page. Raises SummarizeError."""

    async def summarize(
        self,
        url: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str: ...


class LinkRepository(Protocol):
    """Persistence for link records. save() upserts by id."""

    async def find_all(self) -> List[LinkRecord]: ...

    async def find_by_id(self, link_id: str) -> Optional[LinkRecord]: ...

    async def find_by_url(self, url: str) -> Optional[LinkRecord]: ...

    async def find_by_status(self, status: LinkStatus) -> List[LinkRecord]: ...

    async def save(self, link: LinkRecord) -> LinkRecord: ...

    async def save_all(self, links: List[LinkRecord]) -> List[LinkRecord]: ...

    async def delete(self, link_id: str) -> bool: ...

    async def exists(self, url: str) -> bool: ...


class Notifier(Protocol):
    """Delivers a completed link. Per-endpoint failures never propagate."""

    async def send(self, link: LinkRecord) -> None: ...
