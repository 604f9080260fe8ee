"""
Exception hierarchy for link processing
"""


class LinkDumpError(Exception):
    """Base class for all link processing errors"""


class ValidationError(LinkDumpError):
    """Input rejected before it reached the lifecycle (bad URL, empty fields)"""


class DuplicateLinkError(ValidationError):
    """A link with the same URL is already stored"""

    def __init__(self, url: str):
        super().__init__(f"Link already exists: {url}")
        self.url = url


class InvalidStateError(LinkDumpError):
    """Lifecycle transition not allowed from the record's current status"""


class LinkNotFoundError(LinkDumpError):
    """No record stored under the requested id"""

    def __init__(self, link_id: str):
        super().__init__(f"Link not found: {link_id}")
        self.link_id = link_id


class ScrapeError(LinkDumpError):
    """Fetching or parsing a page failed"""


class SummarizeError(LinkDumpError):
    """The AI backend could not produce a summary"""


class NotificationError(LinkDumpError):
    """A single notification endpoint rejected the payload"""


class StorageError(LinkDumpError):
    """Persisted link document could not be read or written"""


class LLMProviderError(LinkDumpError):
    """An LLM provider call failed"""
