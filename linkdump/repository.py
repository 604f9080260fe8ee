"""
Link record repositories: in-memory and JSON file backed
"""
import asyncio
import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .errors import StorageError, LinkDumpError
from .logging_config import get_logger
from .models import LinkRecord, LinkStatus, utcnow
from .storage_models import LinksDocument, StoredLink

logger = get_logger("repository")


class InMemoryLinkRepository:
    """Keeps records in a dict keyed by id, in insertion order."""

    def __init__(self, links: Optional[List[LinkRecord]] = None):
        self._links: Dict[str, LinkRecord] = {}
        for link in links or []:
            self._links[link.id] = link

    async def find_all(self) -> List[LinkRecord]:
        return list(self._links.values())

    async def find_by_id(self, link_id: str) -> Optional[LinkRecord]:
        return self._links.get(link_id)

    async def find_by_url(self, url: str) -> Optional[LinkRecord]:
        return next((l for l in self._links.values() if l.url == url), None)

    async def find_by_status(self, status: LinkStatus) -> List[LinkRecord]:
        status = LinkStatus(status)
        return [l for l in self._links.values() if l.status is status]

    async def save(self, link: LinkRecord) -> LinkRecord:
        self._links[link.id] = link
        return link

    async def save_all(self, links: List[LinkRecord]) -> List[LinkRecord]:
        for link in links:
            self._links[link.id] = link
        return links

    async def delete(self, link_id: str) -> bool:
        return self._links.pop(link_id, None) is not None

    async def exists(self, url: str) -> bool:
        return await self.find_by_url(url) is not None


class JsonFileLinkRepository:
    """Stores all records in one JSON document: {links, lastUpdated}.

    Every operation reads the whole file and every write rewrites it, in a
    worker thread so the event loop is not blocked. There is no locking:
    concurrent writers are last-writer-wins.
    """

    def __init__(self, path: Path = Path("data/links.json")):
        self.path = Path(path)

    def _load(self) -> List[LinkRecord]:
        if not self.path.exists():
            return []

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "{}")
            document = LinksDocument.model_validate(raw)
            return [
                LinkRecord.from_dict(stored.model_dump(by_alias=True, mode="json"))
                for stored in document.links
            ]
        except (json.JSONDecodeError, PydanticValidationError, LinkDumpError, ValueError) as e:
            raise StorageError(f"Failed to load links from {self.path}: {e}") from e

    def _write(self, links: List[LinkRecord]) -> None:
        document = LinksDocument(
            links=[StoredLink.model_validate(link.to_dict()) for link in links],
            last_updated=utcnow(),
        )
        payload = json.dumps(
            document.model_dump(by_alias=True, mode="json"), indent=2, ensure_ascii=False
        )

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Failed to write links to {self.path}: {e}") from e
        logger.debug("Saved %d links to %s", len(links), self.path)

    def _upsert(self, links: List[LinkRecord]) -> None:
        existing = {l.id: l for l in self._load()}
        for link in links:
            existing[link.id] = link
        self._write(list(existing.values()))

    def _remove(self, link_id: str) -> bool:
        links = self._load()
        remaining = [l for l in links if l.id != link_id]
        if len(remaining) == len(links):
            return False
        self._write(remaining)
        return True

    async def find_all(self) -> List[LinkRecord]:
        return await asyncio.to_thread(self._load)

    async def find_by_id(self, link_id: str) -> Optional[LinkRecord]:
        return next((l for l in await self.find_all() if l.id == link_id), None)

    async def find_by_url(self, url: str) -> Optional[LinkRecord]:
        return next((l for l in await self.find_all() if l.url == url), None)

    async def find_by_status(self, status: LinkStatus) -> List[LinkRecord]:
        status = LinkStatus(status)
        return [l for l in await self.find_all() if l.status is status]

    async def save(self, link: LinkRecord) -> LinkRecord:
        await self.save_all([link])
        return link

    async def save_all(self, links: List[LinkRecord]) -> List[LinkRecord]:
        await asyncio.to_thread(self._upsert, links)
        return links

    async def delete(self, link_id: str) -> bool:
        return await asyncio.to_thread(self._remove, link_id)

    async def exists(self, url: str) -> bool:
        return await self.find_by_url(url) is not None
