"""Group the spine into chapters using the ``_part`` naming convention.

Many producers split one logical chapter across several files named like
``chapter_4_part1``, ``chapter_4_part2``. Files sharing a chapter base stay
together; a file carrying its own navigation title with a different base
starts a new chapter. Files without a title are folded into the running
chapter whatever their id.
"""

import logging
from typing import Iterable

from epubie.models.book import Chapter, EpubFile

log = logging.getLogger(__name__)


def chapter_base(file_id: str) -> str:
    """Strip a trailing ``_part...`` segment: ``chapter_4_part2`` -> ``chapter_4``."""
    head, sep, tail = file_id.rpartition("_")
    if sep and tail.startswith("part"):
        return head
    return file_id


def belong_to_same_chapter(first: EpubFile, other: EpubFile) -> bool:
    return chapter_base(first.id) == chapter_base(other.id)


def _seal(buffer: list[EpubFile]) -> Chapter:
    first = buffer[0]
    title = first.title if first.title is not None else first.id
    return Chapter(title=title, files=list(buffer))


def group_into_chapters(
    files: Iterable[EpubFile], spine_ids: Iterable[str]
) -> list[Chapter]:
    """Walk the spine in order and partition it into chapters.

    Spine ids with no matching file are skipped.
    """
    by_id = {file.id: file for file in files}
    chapters: list[Chapter] = []
    buffer: list[EpubFile] = []

    for idref in spine_ids:
        file = by_id.get(idref)
        if file is None:
            log.debug("Skipping dangling spine reference %r", idref)
            continue

        if buffer and file.title is not None and not belong_to_same_chapter(buffer[0], file):
            chapters.append(_seal(buffer))
            buffer = []

        buffer.append(file)

    if buffer:
        chapters.append(_seal(buffer))

    return chapters
