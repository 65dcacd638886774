"""Assemble a parsed Epub from archive bytes."""

import logging
from pathlib import Path

from epubie.core.archive import ArchiveReader
from epubie.core.chapters import group_into_chapters
from epubie.core.cover import find_cover_id
from epubie.core.errors import InvalidArchiveError
from epubie.core.files import materialize_files
from epubie.core.navigation import build_nav_titles
from epubie.core.package import resolve_package
from epubie.models.book import Epub, EpubFile, Metadata, TableOfContents, TOCEntry
from epubie.models.package import PackageDescriptor

log = logging.getLogger(__name__)


def build_metadata(package: PackageDescriptor) -> Metadata:
    """Copy package metadata, defaulting the identifier to an empty string."""
    source = package.metadata
    return Metadata(
        title=source.title,
        creators=list(source.creators),
        language=source.language,
        identifier=source.identifiers[0] if source.identifiers else "",
        date=source.date,
        publisher=source.publisher,
        description=source.description,
        rights=source.rights,
        cover=find_cover_id(package),
        tags=list(source.subjects),
    )


def build_table_of_contents(files: list[EpubFile]) -> TableOfContents:
    """One flat entry per content file, titled by nav title or id."""
    return TableOfContents(
        entries=[
            TOCEntry(
                title=file.title if file.title is not None else file.id,
                href=file.href,
                level=0,
            )
            for file in files
        ]
    )


class EpubParser:
    """Parse EPUB archives into an :class:`Epub`."""

    def __init__(self, source: bytes | Path | str):
        if isinstance(source, (bytes, bytearray)):
            self.path: Path | None = None
            self.file_bytes = bytes(source)
        else:
            self.path = Path(source)
            try:
                self.file_bytes = self.path.read_bytes()
            except OSError as e:
                raise InvalidArchiveError(
                    f"cannot read {self.path}: {e}", str(self.path)
                ) from e

    def parse(self) -> Epub:
        """Parse the EPUB and return complete structure.

        Raises:
            EpubError: If the container or package document cannot be
                resolved. No partial result is returned.
        """
        with ArchiveReader(self.file_bytes) as archive:
            opf_path, package = resolve_package(archive)
            nav_titles = build_nav_titles(archive, package, opf_path)
            metadata = build_metadata(package)
            files = materialize_files(archive, package, nav_titles, opf_path)
            entry_count = len(archive.names())

        log.debug(
            "Parsed %s: %d entries, %d content file(s), %d nav title(s), %d spine item(s)",
            self.path or "<bytes>",
            entry_count,
            len(files),
            len(nav_titles),
            len(package.spine),
        )

        return Epub(
            metadata=metadata,
            chapters=group_into_chapters(files, (ref.idref for ref in package.spine)),
            table_of_contents=build_table_of_contents(files),
            files=files,
            file_bytes=self.file_bytes,
        )


def read_epub(source: bytes | Path | str) -> Epub:
    """Parse an EPUB from raw bytes or a filesystem path."""
    return EpubParser(source).parse()
