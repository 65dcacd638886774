"""Write extracted chapters to an output directory."""

from datetime import datetime
from pathlib import Path

from epubie.core.content_processor import ContentProcessor, OutputFormat
from epubie.models.book import Chapter, Epub
from epubie.models.output import BookOutput, ChapterMetadata, ChapterOutput


class OutputWriter:
    """Write chapters as JSON files plus a manifest."""

    def __init__(self, output_dir: Path, source_path: Path):
        """Initialize output writer.

        Args:
            output_dir: Directory to write output files
            source_path: Path to the source EPUB
        """
        self.output_dir = output_dir
        self.source_path = source_path
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.processor = ContentProcessor()

    def write_chapter(
        self,
        chapter: Chapter,
        index: int,
        output_format: OutputFormat = "markdown",
    ) -> tuple[Path, ChapterMetadata]:
        """Write a single chapter to ``chapter_XXX.json``."""
        content = self.processor.process_chapter(chapter, output_format)
        stats = self.processor.get_stats(content)

        metadata = ChapterMetadata(
            chapter_index=index,
            title=chapter.title,
            file_ids=[f.id for f in chapter.files],
            hrefs=[f.href for f in chapter.files],
            source_path=str(self.source_path),
            extracted_at=datetime.now(),
            **stats,
        )
        output = ChapterOutput(metadata=metadata, content=content, format=output_format)

        filepath = self.output_dir / f"chapter_{index + 1:03d}.json"
        filepath.write_text(output.model_dump_json(indent=2), encoding="utf-8")

        return filepath, metadata

    def write_manifest(
        self,
        epub: Epub,
        extracted_indices: list[int],
        chapter_metadata: list[ChapterMetadata],
    ) -> Path:
        """Write ``manifest.json`` describing the extraction."""
        manifest = BookOutput(
            book_title=epub.title,
            authors=epub.creators,
            identifier=epub.identifier,
            language=epub.language,
            total_chapters=epub.chapter_count,
            extracted_chapters=extracted_indices,
            output_directory=str(self.output_dir),
            created_at=datetime.now(),
            chapters=chapter_metadata,
        )

        filepath = self.output_dir / "manifest.json"
        filepath.write_text(manifest.model_dump_json(indent=2), encoding="utf-8")
        return filepath
