import os

from epubie import read_epub
from epubie.cache.manager import CacheManager


def test_save_and_load_structure(tmp_path, sample_epub_path):
    manager = CacheManager(tmp_path)
    assert manager.get_cached_structure(sample_epub_path) is None

    manager.save_structure(sample_epub_path, read_epub(sample_epub_path))
    cached = CacheManager(tmp_path).get_cached_structure(sample_epub_path)

    assert cached is not None
    assert cached.metadata.title == "Sample Book"
    assert [c.title for c in cached.chapters] == ["Introduction", "Chapter One", "Chapter Two"]
    assert cached.chapters[1].file_ids == ["chapter_1_part1", "chapter_1_part2"]
    assert cached.toc.entry_count == 4
    assert cached.file_count == 4


def test_touched_but_unchanged_file_stays_valid(tmp_path, sample_epub_path):
    manager = CacheManager(tmp_path)
    manager.save_structure(sample_epub_path, read_epub(sample_epub_path))

    stat = sample_epub_path.stat()
    os.utime(sample_epub_path, (stat.st_atime, stat.st_mtime + 10))
    assert manager.is_cache_valid(sample_epub_path)


def test_modified_file_invalidates(tmp_path, sample_epub_path):
    manager = CacheManager(tmp_path)
    manager.save_structure(sample_epub_path, read_epub(sample_epub_path))

    with open(sample_epub_path, "ab") as f:
        f.write(b"trailing")
    assert not manager.is_cache_valid(sample_epub_path)


def test_corrupt_index_is_ignored(tmp_path, sample_epub_path):
    manager = CacheManager(tmp_path)
    manager.cache_root.mkdir()
    manager.index_path.write_text("{not json")
    assert manager.list_cached() == []


def test_list_and_clear(tmp_path, sample_epub_path):
    manager = CacheManager(tmp_path)
    assert manager.clear_cache() == 0

    manager.save_structure(sample_epub_path, read_epub(sample_epub_path))
    [(path, file_hash)] = manager.list_cached()
    assert path == str(sample_epub_path.resolve())
    assert len(file_hash) == 64

    assert manager.clear_cache() == 1
    assert manager.list_cached() == []
