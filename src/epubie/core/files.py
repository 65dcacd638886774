"""Materialize XHTML content files from the manifest."""

import logging

from epubie.core.archive import ArchiveReader
from epubie.core.errors import ArchiveEntryError
from epubie.core.navigation import NAV_PROPERTY
from epubie.core.paths import resolve_path
from epubie.models.book import XHTML_MEDIA_TYPE, EpubFile
from epubie.models.package import ManifestItem, PackageDescriptor

log = logging.getLogger(__name__)


def is_content_item(item: ManifestItem) -> bool:
    """XHTML item that is not the navigation document."""
    return item.media_type == XHTML_MEDIA_TYPE and not item.has_property(NAV_PROPERTY)


def _load_file(
    archive: ArchiveReader,
    item: ManifestItem,
    nav_titles: dict[str, str],
    opf_path: str,
) -> EpubFile | None:
    try:
        content = archive.read_text(resolve_path(opf_path, item.href))
    except ArchiveEntryError as e:
        log.debug("Skipping unreadable content file %s: %s", item.id, e)
        return None

    return EpubFile(
        id=item.id,
        href=item.href,
        title=nav_titles.get(item.href),
        content=content,
        media_type=item.media_type,
    )


def materialize_files(
    archive: ArchiveReader,
    package: PackageDescriptor,
    nav_titles: dict[str, str],
    opf_path: str,
) -> list[EpubFile]:
    """Read every content file, in manifest order.

    Files that cannot be read are left out rather than failing the parse.
    """
    loaded = (
        _load_file(archive, item, nav_titles, opf_path)
        for item in package.manifest
        if is_content_item(item)
    )
    return [file for file in loaded if file is not None]
