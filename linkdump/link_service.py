"""
Link processing orchestration: scrape, classify, summarize, persist
"""
from typing import Iterable, List, Optional, Tuple

from .classifier import ContentClassifier
from .errors import DuplicateLinkError, InvalidStateError, LinkNotFoundError
from .interfaces import ContentScraper, LinkRepository, Summarizer
from .logging_config import get_logger
from .models import (
    ContentClassification,
    ContentType,
    LinkRecord,
    LinkStatistics,
    LinkStatus,
    ProcessingResult,
)

logger = get_logger("link_service")

DEFAULT_TITLE = "No Title"
DEFAULT_DESCRIPTION = "No description available."
SIMPLE_SUMMARY_MAX_CHARS = 280


def abbreviate(text: str, max_chars: int = SIMPLE_SUMMARY_MAX_CHARS) -> str:
    text = " ".join(text.split())
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3].rstrip() + "..."


def _clean(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def create_simple_summary(
    title: Optional[str],
    description: Optional[str],
    content_type: ContentType,
) -> str:
    """Summary built from page metadata when no AI summary is requested."""
    title = title or DEFAULT_TITLE
    description = description or DEFAULT_DESCRIPTION

    if content_type is ContentType.SOCIAL_MEDIA:
        return abbreviate(description)

    if content_type is ContentType.SHORT_CONTENT:
        return abbreviate(title if title == description else f"{title}: {description}")

    if title == description:
        return title
    return f"{title}\n\n{description}"


class LinkOrchestrator:
    """Drives link records through their processing lifecycle.

    Records are processed one at a time; nothing here runs concurrently.
    """

    def __init__(
        self,
        repository: LinkRepository,
        scraper: ContentScraper,
        summarizer: Summarizer,
        classifier: Optional[ContentClassifier] = None,
    ):
        self.repository = repository
        self.scraper = scraper
        self.summarizer = summarizer
        self.classifier = classifier or ContentClassifier()

    async def create_link(self, url: str, tags: Iterable[str] = ()) -> LinkRecord:
        """Validate and store a new pending link.

        Raises:
            ValidationError: url is not an absolute URI.
            DuplicateLinkError: a link with this url is already stored.
        """
        link = LinkRecord.create(url, tags)
        if await self.repository.exists(url):
            raise DuplicateLinkError(url)

        saved = await self.repository.save(link)
        logger.info("Created link %s for %s", saved.id, url)
        return saved

    async def process_link(self, link_id: str) -> LinkRecord:
        """Scrape, classify and summarize a pending link.

        On failure the record is persisted as failed and the error is
        re-raised to the caller.
        """
        link, _ = await self._process(link_id)
        return link

    async def _process(self, link_id: str) -> Tuple[LinkRecord, ContentClassification]:
        link = await self._get(link_id)
        if not link.can_be_processed():
            raise InvalidStateError(
                f"Link {link_id} cannot be processed from status '{link.status.value}'"
            )

        processing = link.start_processing()
        await self.repository.save(processing)
        logger.info("Processing link %s (%s)", link_id, link.url)

        try:
            scraped = await self.scraper.scrape(link.url)
            title = _clean(scraped.title)
            description = _clean(scraped.description)
            classification = self.classifier.classify(link.url, title, description)

            if classification.should_summarize:
                logger.info("AI summary for %s: %s", link_id, classification.reason)
                summary = await self.summarizer.summarize(
                    url=link.url,
                    title=title,
                    description=description,
                )
            else:
                logger.info("Metadata summary for %s: %s", link_id, classification.reason)
                summary = create_simple_summary(
                    title, description, classification.type
                )

            completed = processing.complete_processing(
                title=title or DEFAULT_TITLE,
                description=description or DEFAULT_DESCRIPTION,
                summary=summary,
                image=scraped.image,
            )
        except Exception as e:
            logger.error("Processing failed for %s: %s", link_id, e)
            await self.repository.save(processing.fail_processing(e))
            raise

        saved = await self.repository.save(completed)
        logger.info("Completed link %s", link_id)
        return saved, classification

    async def process_all_pending(self) -> List[ProcessingResult]:
        """Process every pending link in turn, collecting one result per link."""
        pending = await self.repository.find_by_status(LinkStatus.PENDING)
        logger.info("Processing %d pending links", len(pending))
        results: List[ProcessingResult] = []

        for link in pending:
            try:
                processed, classification = await self._process(link.id)
                results.append(ProcessingResult(
                    success=True,
                    link=processed,
                    classification=classification,
                ))
            except Exception as e:
                logger.error("Link processing failed (%s): %s", link.id, e)
                current = await self.repository.find_by_id(link.id)
                results.append(ProcessingResult(
                    success=False,
                    link=current or link,
                    error=str(e),
                ))

        return results

    async def reprocess_link(self, link_id: str) -> LinkRecord:
        """Reset a failed link to pending and process it again."""
        link = await self._get(link_id)
        await self.repository.save(link.reset_for_retry())
        return await self.process_link(link_id)

    async def add_tags_to_link(self, link_id: str, tags: Iterable[str]) -> LinkRecord:
        link = await self._get(link_id)
        return await self.repository.save(link.add_tags(tags))

    async def get_links_for_notification(self) -> List[LinkRecord]:
        return await self.repository.find_by_status(LinkStatus.COMPLETED)

    async def get_statistics(self) -> LinkStatistics:
        """Count all links by status and by tag in a single scan."""
        stats = LinkStatistics()
        for link in await self.repository.find_all():
            stats.total += 1
            stats.by_status[link.status.value] += 1
            for tag in link.tags:
                stats.by_tag[tag] = stats.by_tag.get(tag, 0) + 1
        return stats

    async def _get(self, link_id: str) -> LinkRecord:
        link = await self.repository.find_by_id(link_id)
        if link is None:
            raise LinkNotFoundError(link_id)
        return link
