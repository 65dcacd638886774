"""Data models for the parsed EPUB document."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

XHTML_MEDIA_TYPE = "application/xhtml+xml"


class EpubFile(BaseModel):
    """One XHTML content file from the manifest."""

    model_config = ConfigDict(frozen=True)

    id: str
    href: str  # As declared in the manifest, unresolved
    title: str | None = None  # From the navigation document
    content: str = Field(default="", repr=False)
    media_type: str = XHTML_MEDIA_TYPE

    @property
    def html_bytes(self) -> bytes:
        """Content encoded as UTF-8, for HTML parsers that want bytes."""
        return self.content.encode("utf-8")

    @property
    def parsable_html(self) -> str:
        return self.content

    def is_html(self) -> bool:
        return self.media_type == XHTML_MEDIA_TYPE


class Chapter(BaseModel):
    """A logical chapter made of one or more content files."""

    model_config = ConfigDict(frozen=True)

    title: str
    files: list[EpubFile] = Field(min_length=1)

    @property
    def file_count(self) -> int:
        return len(self.files)


class TOCEntry(BaseModel):
    """Single entry in table of contents."""

    model_config = ConfigDict(frozen=True)

    title: str
    href: str
    level: int = 0


class TableOfContents(BaseModel):
    """Flat table of contents, one entry per content file."""

    model_config = ConfigDict(frozen=True)

    entries: list[TOCEntry] = Field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return len(self.entries)


class Metadata(BaseModel):
    """Book-level metadata."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    creators: list[str] = Field(default_factory=list)
    language: str | None = None
    identifier: str = ""
    date: str | None = None
    publisher: str | None = None
    description: str | None = None
    rights: str | None = None
    cover: str | None = None  # Manifest id of the cover image
    tags: list[str] = Field(default_factory=list)


class Epub(BaseModel):
    """Complete parsed EPUB.

    Built once by :func:`epubie.core.epub_parser.read_epub` and never
    modified afterwards. The original archive bytes are kept for on-demand
    lookups such as :meth:`cover_bytes`.
    """

    model_config = ConfigDict(frozen=True)

    metadata: Metadata
    chapters: list[Chapter] = Field(default_factory=list)
    table_of_contents: TableOfContents = Field(default_factory=TableOfContents)
    files: list[EpubFile] = Field(default_factory=list)
    file_bytes: bytes = Field(default=b"", repr=False, exclude=True)

    @classmethod
    def from_bytes(cls, file_bytes: bytes) -> "Epub":
        from epubie.core.epub_parser import read_epub

        return read_epub(file_bytes)

    @classmethod
    def from_path(cls, path: Path | str) -> "Epub":
        from epubie.core.epub_parser import read_epub

        return read_epub(Path(path))

    @property
    def title(self) -> str | None:
        return self.metadata.title

    @property
    def creator(self) -> str | None:
        """First creator, if any."""
        return self.metadata.creators[0] if self.metadata.creators else None

    @property
    def creators(self) -> list[str]:
        return self.metadata.creators

    @property
    def language(self) -> str | None:
        return self.metadata.language

    @property
    def identifier(self) -> str:
        return self.metadata.identifier

    @property
    def date(self) -> str | None:
        return self.metadata.date

    @property
    def publisher(self) -> str | None:
        return self.metadata.publisher

    @property
    def description(self) -> str | None:
        return self.metadata.description

    @property
    def rights(self) -> str | None:
        return self.metadata.rights

    @property
    def cover(self) -> str | None:
        return self.metadata.cover

    @property
    def tags(self) -> list[str]:
        return self.metadata.tags

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    @property
    def file_count(self) -> int:
        return len(self.files)

    def cover_bytes(self) -> bytes | None:
        """Read the cover image from the archive.

        Returns None when there is no cover or it cannot be read.
        """
        if self.metadata.cover is None:
            return None

        from epubie.core.cover import read_cover_bytes

        return read_cover_bytes(self.file_bytes, self.metadata.cover)

    def get_file(self, href: str) -> EpubFile | None:
        """Find a content file by its manifest href."""
        for file in self.files:
            if file.href == href:
                return file
        return None

    def get_file_content(self, href: str) -> bytes | None:
        """Content of the file at ``href`` as UTF-8 bytes."""
        file = self.get_file(href)
        return file.html_bytes if file is not None else None
