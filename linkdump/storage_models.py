"""
Pydantic models for the persisted links document
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import LinkStatus


class StoredLink(BaseModel):
    """A link record as written to storage."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    summary: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: LinkStatus = LinkStatus.PENDING
    created_at: datetime = Field(alias="createdAt")
    processed_at: Optional[datetime] = Field(default=None, alias="processedAt")
    error: Optional[str] = None


class LinksDocument(BaseModel):
    """Root model for the links file: {links, lastUpdated}."""

    model_config = ConfigDict(populate_by_name=True)

    links: List[StoredLink] = Field(default_factory=list)
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")
