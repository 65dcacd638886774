"""Data models for extracted chapter output."""

from datetime import datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ExtractOptions(BaseModel):
    """Options for the extract command."""

    output_dir: Path
    output_format: Literal["markdown", "text", "html"] = "markdown"
    sections: list[int] = Field(default_factory=list)  # 0-based chapter indices

    @field_validator("sections")
    @classmethod
    def _sorted_unique(cls, value: list[int]) -> list[int]:
        if any(i < 0 for i in value):
            raise ValueError("section indices must be non-negative")
        return sorted(set(value))


class ChapterMetadata(BaseModel):
    """Metadata accompanying chapter content."""

    chapter_index: int
    title: str
    file_ids: list[str]
    hrefs: list[str]
    source_path: str
    extracted_at: datetime = Field(default_factory=datetime.now)
    word_count: int
    character_count: int
    paragraph_count: int


class ChapterOutput(BaseModel):
    """Complete chapter output."""

    metadata: ChapterMetadata
    content: str
    format: Literal["markdown", "text", "html"] = "markdown"


class BookOutput(BaseModel):
    """Manifest written next to extracted chapters."""

    book_title: str | None
    authors: list[str]
    identifier: str = ""
    language: str | None = None
    total_chapters: int
    extracted_chapters: list[int]
    output_directory: str
    created_at: datetime = Field(default_factory=datetime.now)
    chapters: list[ChapterMetadata]
