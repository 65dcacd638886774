"""Cache data models."""

from datetime import datetime

from pydantic import BaseModel, Field

from epubie.models.book import Metadata, TableOfContents


class CacheMetadata(BaseModel):
    """Metadata for cache invalidation."""

    file_path: str
    file_hash: str
    file_size: int
    file_mtime: float
    cached_at: datetime = Field(default_factory=datetime.now)
    cache_version: str = "1"


class CachedChapter(BaseModel):
    """Chapter summary (without file content)."""

    index: int
    title: str
    file_ids: list[str]
    hrefs: list[str]
    content_length: int = 0  # Characters of raw XHTML across files


class CachedEpubStructure(BaseModel):
    """Structure of a parsed EPUB, enough to list it without re-parsing."""

    cache_metadata: CacheMetadata
    metadata: Metadata
    toc: TableOfContents = Field(default_factory=TableOfContents)
    chapters: list[CachedChapter]
    file_count: int = 0


class CacheIndex(BaseModel):
    """Index mapping file paths to cache entries."""

    entries: dict[str, str] = Field(default_factory=dict)  # path -> hash
