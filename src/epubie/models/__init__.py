"""Data models."""

from epubie.models.book import (
    XHTML_MEDIA_TYPE,
    Chapter,
    Epub,
    EpubFile,
    Metadata,
    TableOfContents,
    TOCEntry,
)
from epubie.models.output import (
    BookOutput,
    ChapterMetadata,
    ChapterOutput,
    ExtractOptions,
)
from epubie.models.package import (
    ContainerLocator,
    ManifestItem,
    MetaDeclaration,
    PackageDescriptor,
    PackageMetadata,
    RootFile,
    SpineItemRef,
)

__all__ = [
    # Document models
    "XHTML_MEDIA_TYPE",
    "EpubFile",
    "Chapter",
    "TOCEntry",
    "TableOfContents",
    "Metadata",
    "Epub",
    # Package models
    "RootFile",
    "ContainerLocator",
    "MetaDeclaration",
    "PackageMetadata",
    "ManifestItem",
    "SpineItemRef",
    "PackageDescriptor",
    # Output models
    "ExtractOptions",
    "ChapterMetadata",
    "ChapterOutput",
    "BookOutput",
]
