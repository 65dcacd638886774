"""Cache parsed EPUB structure with hash/mtime invalidation."""

import hashlib
import json
import logging
import shutil
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from epubie.cache.models import (
    CachedChapter,
    CachedEpubStructure,
    CacheIndex,
    CacheMetadata,
)
from epubie.models.book import Epub

log = logging.getLogger(__name__)


class CacheManager:
    """Manages caching of parsed EPUB structures."""

    CACHE_DIR = ".epubie_cache"
    INDEX_FILE = "index.json"
    CACHE_VERSION = "1"

    def __init__(self, project_dir: Path):
        self.cache_root = project_dir / self.CACHE_DIR
        self.index_path = self.cache_root / self.INDEX_FILE
        self._index: CacheIndex | None = None

    def _load_index(self) -> CacheIndex:
        """Load or create cache index."""
        if self._index is not None:
            return self._index

        self._index = CacheIndex()
        if self.index_path.exists():
            try:
                data = json.loads(self.index_path.read_text())
                self._index = CacheIndex.model_validate(data)
            except (json.JSONDecodeError, ValidationError, OSError) as e:
                log.warning("Ignoring corrupt cache index %s: %s", self.index_path, e)

        return self._index

    def _save_index(self) -> None:
        self.cache_root.mkdir(parents=True, exist_ok=True)
        self.index_path.write_text(self._load_index().model_dump_json(indent=2))

    def _structure_path(self, file_hash: str) -> Path:
        return self.cache_root / "books" / file_hash / "structure.json"

    def _read_structure(self, cache_file: Path) -> CachedEpubStructure | None:
        try:
            return CachedEpubStructure.model_validate_json(cache_file.read_text())
        except (ValidationError, OSError) as e:
            log.debug("Unreadable cache entry %s: %s", cache_file, e)
            return None

    def get_file_hash(self, file_path: Path) -> str:
        """Compute SHA-256 hash of a file."""
        sha256 = hashlib.sha256()
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                sha256.update(chunk)
        return sha256.hexdigest()

    def get_cached_structure(self, file_path: Path) -> CachedEpubStructure | None:
        """Return the cached structure if it still matches the file on disk."""
        if not self.cache_root.exists():
            return None

        file_hash = self._load_index().entries.get(str(file_path.resolve()))
        if file_hash is None:
            return None

        cache_file = self._structure_path(file_hash)
        if not cache_file.exists():
            return None

        cached = self._read_structure(cache_file)
        if cached is None or cached.cache_metadata.cache_version != self.CACHE_VERSION:
            return None

        stat = file_path.stat()

        # Fast path: mtime and size unchanged
        if (
            cached.cache_metadata.file_mtime == stat.st_mtime
            and cached.cache_metadata.file_size == stat.st_size
        ):
            return cached

        # Slow path: mtime changed, verify with hash
        if cached.cache_metadata.file_hash == self.get_file_hash(file_path):
            cached.cache_metadata.file_mtime = stat.st_mtime
            cache_file.write_text(cached.model_dump_json(indent=2))
            return cached

        return None

    def is_cache_valid(self, file_path: Path) -> bool:
        return self.get_cached_structure(file_path) is not None

    def save_structure(self, file_path: Path, epub: Epub) -> CachedEpubStructure:
        """Save the structure of a parsed EPUB to the cache."""
        stat = file_path.stat()
        file_hash = self.get_file_hash(file_path)

        structure = CachedEpubStructure(
            cache_metadata=CacheMetadata(
                file_path=str(file_path.resolve()),
                file_hash=file_hash,
                file_size=stat.st_size,
                file_mtime=stat.st_mtime,
                cached_at=datetime.now(),
                cache_version=self.CACHE_VERSION,
            ),
            metadata=epub.metadata,
            toc=epub.table_of_contents,
            chapters=[
                CachedChapter(
                    index=i,
                    title=chapter.title,
                    file_ids=[f.id for f in chapter.files],
                    hrefs=[f.href for f in chapter.files],
                    content_length=sum(len(f.content) for f in chapter.files),
                )
                for i, chapter in enumerate(epub.chapters)
            ],
            file_count=epub.file_count,
        )

        cache_file = self._structure_path(file_hash)
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache_file.write_text(structure.model_dump_json(indent=2))

        index = self._load_index()
        index.entries[str(file_path.resolve())] = file_hash
        self._save_index()
        return structure

    def clear_cache(self) -> int:
        """Clear all cached data. Returns number of entries cleared."""
        if not self.cache_root.exists():
            return 0

        books_dir = self.cache_root / "books"
        count = len(list(books_dir.iterdir())) if books_dir.exists() else 0

        shutil.rmtree(self.cache_root)
        self._index = None
        return count

    def list_cached(self) -> list[tuple[str, str]]:
        """List all cached EPUBs. Returns list of (path, hash)."""
        return list(self._load_index().entries.items())
