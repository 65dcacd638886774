"""Parse EPUB archives into metadata, chapters and a table of contents."""

from epubie.core.epub_parser import EpubParser, read_epub
from epubie.core.errors import (
    EpubError,
    InvalidArchiveError,
    MalformedContainerError,
    MalformedPackageError,
    MissingContainerError,
    MissingPackageError,
    NoRootFileError,
)
from epubie.models.book import Chapter, Epub, EpubFile, Metadata, TableOfContents, TOCEntry

__version__ = "0.1.0"

__all__ = [
    "read_epub",
    "EpubParser",
    "Epub",
    "EpubFile",
    "Chapter",
    "Metadata",
    "TableOfContents",
    "TOCEntry",
    "EpubError",
    "InvalidArchiveError",
    "MissingContainerError",
    "MalformedContainerError",
    "NoRootFileError",
    "MissingPackageError",
    "MalformedPackageError",
]
