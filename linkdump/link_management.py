"""
Application service: schedules link processing and sends notifications
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .background import BackgroundTaskRunner
from .interfaces import Notifier
from .link_service import LinkOrchestrator
from .logging_config import get_logger
from .models import LinkRecord, LinkStatistics, LinkStatus, ProcessingResult

logger = get_logger("link_management")


@dataclass
class BatchReport:
    """Summary of a process-all run"""
    processed: int = 0
    successful: int = 0
    failed: int = 0
    results: List[ProcessingResult] = field(default_factory=list)


class LinkManagementService:
    """Entry point used by the CLI and other hosts.

    New links are processed in the background; each completed link is
    sent to the notifier exactly once, right after it completes.
    """

    def __init__(
        self,
        orchestrator: LinkOrchestrator,
        notifier: Notifier,
        runner: Optional[BackgroundTaskRunner] = None,
    ):
        self.orchestrator = orchestrator
        self.notifier = notifier
        self.runner = runner or BackgroundTaskRunner()

    @property
    def repository(self):
        return self.orchestrator.repository

    async def add_link(self, url: str, tags: Iterable[str] = ()) -> LinkRecord:
        """Store a link and schedule its processing in the background."""
        link = await self.orchestrator.create_link(url, tags)
        self.runner.schedule(lambda: self._process_in_background(link.id))
        return link

    async def process_link(self, link_id: str) -> LinkRecord:
        """Process a pending link now and notify on completion."""
        link = await self.orchestrator.process_link(link_id)
        await self._notify_if_completed(link)
        return link

    async def retry_link(self, link_id: str) -> LinkRecord:
        """Reprocess a failed link now and notify on completion."""
        link = await self.orchestrator.reprocess_link(link_id)
        await self._notify_if_completed(link)
        return link

    async def process_all_links(self) -> BatchReport:
        results = await self.orchestrator.process_all_pending()

        for result in results:
            if result.success:
                await self._notify_if_completed(result.link, context="process_all_links")

        successful = sum(1 for r in results if r.success)
        return BatchReport(
            processed=len(results),
            successful=successful,
            failed=len(results) - successful,
            results=results,
        )

    async def get_links(
        self,
        status: Optional[LinkStatus] = None,
        tag: Optional[str] = None,
    ) -> List[LinkRecord]:
        if status is not None:
            links = await self.repository.find_by_status(LinkStatus(status))
        else:
            links = await self.repository.find_all()
        if tag:
            links = [l for l in links if tag in l.tags]
        return links

    async def get_statistics(self) -> LinkStatistics:
        return await self.orchestrator.get_statistics()

    async def add_tags_to_link(self, link_id: str, tags: Iterable[str]) -> LinkRecord:
        return await self.orchestrator.add_tags_to_link(link_id, tags)

    async def delete_link(self, link_id: str) -> bool:
        deleted = await self.repository.delete(link_id)
        if deleted:
            logger.info("Deleted link %s", link_id)
        return deleted

    def get_pending_task_count(self) -> int:
        return self.runner.get_pending_task_count()

    async def wait_for_completion(self) -> None:
        await self.runner.wait_for_completion()

    async def _process_in_background(self, link_id: str) -> None:
        try:
            link = await self.orchestrator.process_link(link_id)
        except Exception as e:
            # Already persisted as failed by the orchestrator
            logger.error("Background processing failed (%s): %s", link_id, e)
            return
        await self._notify_if_completed(link)

    async def _notify_if_completed(self, link: LinkRecord, context: Optional[str] = None) -> None:
        if not link.is_completed():
            return
        try:
            await self.notifier.send(link)
        except Exception as e:
            suffix = f" ({context})" if context else ""
            logger.error("Notification failed%s (%s): %s", suffix, link.id, e)
