"""Thin read-only wrapper around a ZIP container."""

import io
import zipfile
import zlib

from epubie.core.errors import ArchiveEntryError, InvalidArchiveError


class ArchiveReader:
    """Read named entries from an in-memory ZIP archive.

    Entry names are matched exactly (case-sensitive, no normalization).
    """

    def __init__(self, file_bytes: bytes):
        self.file_bytes = file_bytes
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(file_bytes))
        except (zipfile.BadZipFile, ValueError) as e:
            raise InvalidArchiveError(f"not a ZIP archive ({e})") from e

    def names(self) -> list[str]:
        """List entry names in archive order."""
        return self._zip.namelist()

    def read_bytes(self, name: str) -> bytes:
        """Read an entry fully.

        Raises:
            ArchiveEntryError: If the entry is missing, encrypted or corrupt
        """
        try:
            return self._zip.read(name)
        except KeyError as e:
            raise ArchiveEntryError(name, "no such entry") from e
        except (zipfile.BadZipFile, zlib.error, RuntimeError, NotImplementedError, OSError) as e:
            raise ArchiveEntryError(name, str(e)) from e

    def read_text(self, name: str) -> str:
        """Read an entry and decode it as UTF-8."""
        data = self.read_bytes(name)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ArchiveEntryError(name, f"not valid UTF-8 ({e.reason})") from e

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
