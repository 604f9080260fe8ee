"""
linkdump: link ingestion, enrichment and notification pipeline
"""
from .errors import (
    LinkDumpError,
    ValidationError,
    DuplicateLinkError,
    InvalidStateError,
    LinkNotFoundError,
    ScrapeError,
    SummarizeError,
    NotificationError,
    StorageError,
)
from .models import (
    LinkRecord,
    LinkStatus,
    ContentType,
    ContentClassification,
    ScrapedContent,
    ProcessingResult,
    LinkStatistics,
)
from .classifier import ContentClassifier
from .task_queue import MemoryTaskQueue, SequentialQueueProcessor
from .background import BackgroundTaskRunner
from .link_service import LinkOrchestrator
from .link_management import LinkManagementService

__all__ = [
    'LinkDumpError',
    'ValidationError',
    'DuplicateLinkError',
    'InvalidStateError',
    'LinkNotFoundError',
    'ScrapeError',
    'SummarizeError',
    'NotificationError',
    'StorageError',
    'LinkRecord',
    'LinkStatus',
    'ContentType',
    'ContentClassification',
    'ScrapedContent',
    'ProcessingResult',
    'LinkStatistics',
    'ContentClassifier',
    'MemoryTaskQueue',
    'SequentialQueueProcessor',
    'BackgroundTaskRunner',
    'LinkOrchestrator',
    'LinkManagementService',
]
