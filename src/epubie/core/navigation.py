"""Recover display titles from the EPUB3 navigation document."""

import logging
import re

from epubie.core.archive import ArchiveReader
from epubie.core.errors import ArchiveEntryError
from epubie.core.paths import resolve_path
from epubie.models.package import ManifestItem, PackageDescriptor

log = logging.getLogger(__name__)

NAV_PROPERTY = "nav"

# <a href="HREF" ...>TEXT</a>; the label may not contain nested markup
NAV_LINK_PATTERN = re.compile(r'<a\s+href="([^"]+)"[^>]*>([^<]+)</a>')


def find_nav_item(package: PackageDescriptor) -> ManifestItem | None:
    """First manifest item flagged with the ``nav`` property."""
    for item in package.manifest:
        if item.has_property(NAV_PROPERTY):
            return item
    return None


def scan_nav_titles(markup: str) -> dict[str, str]:
    """Map each link href in ``markup`` to its trimmed label.

    Later links to the same href overwrite earlier ones.
    """
    titles: dict[str, str] = {}
    for match in NAV_LINK_PATTERN.finditer(markup):
        href, label = match.groups()
        titles[href] = label.strip()
    return titles


def build_nav_titles(
    archive: ArchiveReader, package: PackageDescriptor, opf_path: str
) -> dict[str, str]:
    """Title map for the book. Empty when there is no readable nav document."""
    nav_item = find_nav_item(package)
    if nav_item is None:
        return {}

    nav_path = resolve_path(opf_path, nav_item.href)
    try:
        markup = archive.read_text(nav_path)
    except ArchiveEntryError as e:
        log.debug("Navigation document unavailable: %s", e)
        return {}

    return scan_nav_titles(markup)
