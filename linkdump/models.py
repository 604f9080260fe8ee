"""
Data models for link records and their processing lifecycle
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple
from urllib.parse import urlparse

from .errors import InvalidStateError, ValidationError


class LinkStatus(str, Enum):
    """Lifecycle states of a link record"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ContentType(str, Enum):
    """Content categories used to decide on AI summarization"""
    SOCIAL_MEDIA = "social_media"
    VIDEO = "video"
    LONG_CONTENT = "long_content"
    SHORT_CONTENT = "short_content"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_url(url: str) -> str:
    """Return url unchanged if it is an absolute URI, else raise ValidationError."""
    if not url or not isinstance(url, str):
        raise ValidationError("URL is required and must be a string")

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as e:
        raise ValidationError(f"Invalid URL: {url}") from e

    if not parsed.scheme or not hostname or any(c.isspace() for c in url):
        raise ValidationError(f"Invalid URL: {url}")
    return url


def merge_tags(existing: Iterable[str], new: Iterable[str]) -> Tuple[str, ...]:
    """Union of two tag sequences, first-seen order kept, blanks dropped."""
    merged: Dict[str, None] = {}
    for tag in (*existing, *new):
        tag = tag.strip()
        if tag:
            merged.setdefault(tag, None)
    return tuple(merged)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class LinkRecord:
    """One submitted URL and its processing state.

    Records are immutable: every transition returns a new snapshot, so a
    record handed to a reader never changes underneath it.
    """
    id: str
    url: str
    tags: Tuple[str, ...] = ()
    status: LinkStatus = LinkStatus.PENDING
    title: Optional[str] = None
    description: Optional[str] = None
    summary: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    processed_at: Optional[datetime] = None
    error: Optional[str] = None

    @classmethod
    def create(cls, url: str, tags: Iterable[str] = ()) -> "LinkRecord":
        """Create a new pending record after validating the URL."""
        validate_url(url)
        return cls(
            id=uuid.uuid4().hex,
            url=url,
            tags=merge_tags((), tags),
            status=LinkStatus.PENDING,
            created_at=utcnow(),
        )

    def start_processing(self) -> "LinkRecord":
        if self.status is not LinkStatus.PENDING:
            raise InvalidStateError(
                f"Link {self.id} cannot start processing from status '{self.status.value}'"
            )
        return replace(self, status=LinkStatus.PROCESSING)

    def complete_processing(
        self,
        title: str,
        description: str,
        summary: str,
        image: Optional[str] = None,
    ) -> "LinkRecord":
        if self.status is not LinkStatus.PROCESSING:
            raise InvalidStateError(
                f"Link {self.id} is not being processed (status '{self.status.value}')"
            )
        for name, value in (("title", title), ("description", description), ("summary", summary)):
            if not value or not value.strip():
                raise ValidationError(f"Completed link requires a non-empty {name}")

        return replace(
            self,
            title=title,
            description=description,
            summary=summary,
            image=image,
            status=LinkStatus.COMPLETED,
            processed_at=utcnow(),
            error=None,
        )

    def fail_processing(self, error: Any) -> "LinkRecord":
        """Mark the record failed. Allowed from pending and processing."""
        if self.status in (LinkStatus.COMPLETED, LinkStatus.FAILED):
            raise InvalidStateError(
                f"Link {self.id} is already in terminal status '{self.status.value}'"
            )
        return replace(
            self,
            status=LinkStatus.FAILED,
            processed_at=utcnow(),
            error=str(error) or type(error).__name__,
        )

    def reset_for_retry(self) -> "LinkRecord":
        """Return a failed record to pending so it can be processed again."""
        if self.status is not LinkStatus.FAILED:
            raise InvalidStateError(
                f"Only failed links can be retried (link {self.id} is '{self.status.value}')"
            )
        return replace(self, status=LinkStatus.PENDING, processed_at=None, error=None)

    def add_tags(self, new_tags: Iterable[str]) -> "LinkRecord":
        return replace(self, tags=merge_tags(self.tags, new_tags))

    def can_be_processed(self) -> bool:
        return self.status is LinkStatus.PENDING

    def is_completed(self) -> bool:
        return self.status is LinkStatus.COMPLETED

    def is_failed(self) -> bool:
        return self.status is LinkStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase mapping used by the persisted document."""
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "summary": self.summary,
            "tags": list(self.tags),
            "status": self.status.value,
            "createdAt": _format_datetime(self.created_at),
            "processedAt": _format_datetime(self.processed_at),
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinkRecord":
        validate_url(data.get("url", ""))
        created_at = _parse_datetime(data.get("createdAt")) or utcnow()
        return cls(
            id=data["id"],
            url=data["url"],
            tags=merge_tags((), data.get("tags") or ()),
            status=LinkStatus(data.get("status", LinkStatus.PENDING.value)),
            title=data.get("title"),
            description=data.get("description"),
            summary=data.get("summary"),
            image=data.get("image"),
            created_at=created_at,
            processed_at=_parse_datetime(data.get("processedAt")),
            error=data.get("error"),
        )

    def to_notification_payload(self) -> Dict[str, Any]:
        """Flattened view of the record handed to notifiers."""
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "summary": self.summary,
            "image": self.image,
            "tags": list(self.tags),
            "created_at": self.created_at,
            "processed_at": self.processed_at,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ContentClassification:
    """Result of deciding whether a page warrants an AI summary"""
    type: ContentType
    should_summarize: bool
    reason: str


@dataclass
class ScrapedContent:
    """Metadata extracted from a fetched page"""
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    content: Optional[str] = None


@dataclass
class ProcessingResult:
    """Outcome of processing a single record in a batch"""
    success: bool
    link: LinkRecord
    error: Optional[str] = None
    classification: Optional[ContentClassification] = None


@dataclass
class LinkStatistics:
    """Counts of stored links by status and by tag"""
    total: int = 0
    by_status: Dict[str, int] = field(
        default_factory=lambda: {status.value: 0 for status in LinkStatus}
    )
    by_tag: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "by_status": dict(self.by_status),
            "by_tag": dict(self.by_tag),
        }
