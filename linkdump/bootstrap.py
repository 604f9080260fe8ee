"""
Builds the service graph once at process start
"""
from typing import Optional

from .background import BackgroundTaskRunner
from .classifier import ContentClassifier
from .config import Config, get_config
from .link_management import LinkManagementService
from .link_service import LinkOrchestrator
from .llm import LLMProvider
from .notifier import DiscordNotifier
from .repository import JsonFileLinkRepository
from .scraper import WebContentScraper
from .summarizer import LLMSummarizer


def create_service(
    config: Optional[Config] = None,
    llm_provider: Optional[LLMProvider] = None,
) -> LinkManagementService:
    """Wire the JSON repository, web scraper, LLM summarizer and Discord notifier.

    The LLM provider is built from config.llm on first summary unless given.
    """
    config = config or get_config()

    orchestrator = LinkOrchestrator(
        repository=JsonFileLinkRepository(config.storage.links_path),
        scraper=WebContentScraper(config.scraper),
        summarizer=LLMSummarizer(llm_provider, config.summarizer, config.llm),
        classifier=ContentClassifier(config.classifier),
    )
    return LinkManagementService(
        orchestrator=orchestrator,
        notifier=DiscordNotifier(config=config.notification),
        runner=BackgroundTaskRunner(poll_interval=config.queue.poll_interval),
    )
