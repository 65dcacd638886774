"""Cover image lookup for EPUB2 and EPUB3 packages."""

import logging

from epubie.core.archive import ArchiveReader
from epubie.core.errors import ArchiveEntryError, EpubError
from epubie.core.package import resolve_package
from epubie.core.paths import resolve_path
from epubie.models.package import PackageDescriptor

log = logging.getLogger(__name__)

COVER_IMAGE_PROPERTY = "cover-image"


def find_cover_id(package: PackageDescriptor) -> str | None:
    """Find the manifest id of the cover image.

    Tried in order:
    1. EPUB2 ``<meta name="cover" content="ID"/>``
    2. EPUB3 ``<meta property="cover-image">``, content attribute or text
    3. A manifest item with ``properties="cover-image"``
    """
    meta = package.metadata.meta

    for decl in meta:
        if decl.name == "cover" and decl.content is not None:
            return decl.content

    for decl in meta:
        if decl.property == COVER_IMAGE_PROPERTY:
            if decl.content is not None:
                return decl.content
            if decl.value is not None:
                return decl.value

    for item in package.manifest:
        if item.has_property(COVER_IMAGE_PROPERTY):
            return item.id

    return None


def read_cover_bytes(file_bytes: bytes, cover_id: str) -> bytes | None:
    """Re-open the archive and read the raw bytes of the cover item.

    Any failure along the way returns None.
    """
    try:
        with ArchiveReader(file_bytes) as archive:
            opf_path, package = resolve_package(archive)
            item = package.get_item(cover_id)
            if item is None:
                log.debug("Cover id %r not in manifest", cover_id)
                return None
            return archive.read_bytes(resolve_path(opf_path, item.href))
    except (EpubError, ArchiveEntryError) as e:
        log.debug("Cover %r unreadable: %s", cover_id, e)
        return None
