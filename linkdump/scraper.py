"""
Web page fetching and metadata extraction
"""
import asyncio
import json
from typing import Any, Dict, Iterable, Optional

import aiohttp
from bs4 import BeautifulSoup

from .config import ScraperConfig
from .errors import ScrapeError
from .logging_config import get_logger
from .models import ScrapedContent

logger = get_logger("scraper")


class WebContentScraper:
    """Fetches HTML pages and extracts Open Graph / Twitter / JSON-LD metadata"""

    def __init__(self, config: Optional[ScraperConfig] = None):
        self.config = config or ScraperConfig()

    async def scrape(self, url: str) -> ScrapedContent:
        """Fetch url and return its metadata.

        Raises:
            ScrapeError: on network failure, non-2xx status or timeout.
        """
        html = await self.fetch(url)
        metadata = self.parse_metadata(html)
        metadata.content = html[: self.config.content_chars]
        logger.info(
            "Scraped %s - title: %s, description: %s",
            url, metadata.title, (metadata.description or "")[:50],
        )
        return metadata

    async def fetch(self, url: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        headers = {"User-Agent": self.config.user_agent}

        try:
            async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
                async with session.get(url) as response:
                    if response.status >= 400:
                        raise ScrapeError(f"HTTP {response.status}: {response.reason}")
                    return await response.text(errors="replace")
        except asyncio.TimeoutError as e:
            raise ScrapeError(f"Timed out after {self.config.timeout}s fetching {url}") from e
        except aiohttp.ClientError as e:
            raise ScrapeError(f"Failed to fetch {url}: {e}") from e

    def parse_metadata(self, html: str) -> ScrapedContent:
        """Pick the best title, description and image found in the markup."""
        soup = BeautifulSoup(html, "html.parser")

        def meta(attr: str, name: str) -> Optional[str]:
            tag = soup.find("meta", attrs={attr: name})
            return tag.get("content") if tag else None

        json_ld = self._extract_json_ld(soup)
        html_title = soup.title.get_text() if soup.title else None

        title = self.select_best_value([
            meta("property", "og:title"),
            meta("name", "twitter:title"),
            json_ld.get("name") or json_ld.get("headline"),
            html_title,
        ])
        description = self.select_best_value([
            meta("property", "og:description"),
            meta("name", "twitter:description"),
            json_ld.get("description"),
            meta("name", "description"),
        ])
        image = self.select_best_value([
            meta("property", "og:image"),
            meta("name", "twitter:image"),
            self._json_ld_image(json_ld.get("image")),
        ])

        return ScrapedContent(title=title, description=description, image=image)

    @staticmethod
    def select_best_value(values: Iterable[Any]) -> Optional[str]:
        """First non-blank string value, stripped."""
        for value in values:
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None

    @staticmethod
    def _extract_json_ld(soup: BeautifulSoup) -> Dict[str, Any]:
        script = soup.find("script", attrs={"type": "application/ld+json"})
        if script is None or not script.string:
            return {}
        try:
            data = json.loads(script.string)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring malformed JSON-LD block: %s", e)
            return {}
        if isinstance(data, list):
            data = data[0] if data else {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _json_ld_image(value: Any) -> Optional[str]:
        # schema.org image may be a URL, an ImageObject or a list of either
        if isinstance(value, list):
            value = value[0] if value else None
        if isinstance(value, dict):
            value = value.get("url")
        return value if isinstance(value, str) else None
