"""Extract command implementation."""

import re
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress
from rich.prompt import Prompt
from rich.table import Table

from epubie.cache.manager import CacheManager
from epubie.core.content_processor import OutputFormat
from epubie.core.epub_parser import read_epub
from epubie.core.output_writer import OutputWriter
from epubie.models.book import Chapter, Epub
from epubie.models.output import ExtractOptions


def parse_chapter_selection(selection: str, total_chapters: int) -> list[int]:
    """Parse user chapter selection string to list of indices.

    Supports: "1,3,5-7", "all", "1-10", etc.
    Returns 0-based indices.
    """
    selection = selection.strip().lower()

    if selection == "all":
        return list(range(total_chapters))

    indices = set()
    for part in selection.split(","):
        part = part.strip()
        if not part:
            continue

        if "-" in part:
            match = re.match(r"(\d+)\s*-\s*(\d+)$", part)
            if match:
                start, end = int(match.group(1)), int(match.group(2))
                indices.update(range(start - 1, end))
        elif part.isdigit():
            indices.add(int(part) - 1)

    return sorted(i for i in indices if 0 <= i < total_chapters)


def display_chapters(chapters: list[Chapter], console: Console) -> None:
    """Display the chapter list with file counts."""
    table = Table(title="Chapters", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Files", justify="right", style="green")

    for i, chapter in enumerate(chapters):
        table.add_row(str(i + 1), chapter.title, str(chapter.file_count))

    console.print(table)


def interactive_select(chapters: list[Chapter], console: Console) -> list[int]:
    """Prompt until the user picks at least one chapter or quits."""
    console.print()
    console.print(
        Panel(
            "[bold]Select chapters to extract:[/]\n"
            "  - Enter chapter numbers (e.g., [cyan]1,3,5-7[/])\n"
            "  - Enter [cyan]all[/] for all chapters\n"
            "  - Enter [cyan]q[/] to quit",
            title="Selection",
            border_style="blue",
        )
    )
    console.print()

    while True:
        selection = Prompt.ask("Your selection", console=console)

        if selection.lower() == "q":
            return []

        indices = parse_chapter_selection(selection, len(chapters))
        if indices:
            console.print(f"\n[green]Selected {len(indices)} chapter(s)[/]")
            return indices

        console.print("[red]Invalid selection. Please try again.[/]")


def get_default_output_dir(book_path: Path) -> Path:
    """``<book>_chapters`` next to the EPUB."""
    clean_stem = re.sub(r"[^\w\s-]", "", book_path.stem).strip()
    clean_stem = re.sub(r"[-\s]+", "_", clean_stem)
    return book_path.parent / f"{clean_stem}_chapters"


def write_chapters(
    epub: Epub,
    book_path: Path,
    options: ExtractOptions,
    console: Console,
    quiet: bool = False,
) -> Path:
    """Write the selected chapters and a manifest. Returns the manifest path."""
    writer = OutputWriter(options.output_dir, book_path)
    chapter_metadata = []

    with Progress(console=console, disable=quiet) as progress:
        task = progress.add_task("Extracting chapters...", total=len(options.sections))
        for idx in options.sections:
            chapter = epub.chapters[idx]
            _, metadata = writer.write_chapter(chapter, idx, options.output_format)
            chapter_metadata.append(metadata)
            progress.update(
                task, advance=1, description=f"Extracting: {chapter.title[:40]}..."
            )

    return writer.write_manifest(epub, options.sections, chapter_metadata)


def execute_extract(
    book_path: Path,
    chapters: str | None,
    interactive: bool,
    output_dir: Path | None,
    output_format: OutputFormat,
    force: bool,
    quiet: bool,
    console: Console,
) -> None:
    """Execute the extract command."""
    epub = read_epub(book_path)

    cache_manager = CacheManager(book_path.parent)
    if force or not cache_manager.is_cache_valid(book_path):
        cache_manager.save_structure(book_path, epub)
        if not quiet:
            console.print("[dim]Cached structure[/]")

    if not quiet:
        console.print()
        console.print(
            Panel(
                "\n".join(
                    [
                        f"[bold]{epub.title or 'Untitled'}[/]",
                        f"[dim]Author(s):[/] {', '.join(epub.creators) or 'Unknown'}",
                        f"[dim]Chapters:[/] {epub.chapter_count}",
                        f"[dim]Content files:[/] {epub.file_count}",
                    ]
                ),
                title="Book Info",
                border_style="green",
            )
        )
        console.print()

    if interactive or chapters is None:
        if not quiet:
            display_chapters(epub.chapters, console)
        selected = interactive_select(epub.chapters, console)
    else:
        selected = parse_chapter_selection(chapters, epub.chapter_count)

    if not selected:
        console.print("[yellow]No chapters selected. Exiting.[/]")
        return

    options = ExtractOptions(
        output_dir=output_dir or get_default_output_dir(book_path),
        output_format=output_format,
        sections=selected,
    )
    manifest_path = write_chapters(epub, book_path, options, console, quiet=quiet)

    if not quiet:
        console.print()
        console.print(
            Panel(
                "\n".join(
                    [
                        f"[green]Successfully extracted {len(selected)} chapter(s)[/]",
                        "",
                        f"[dim]Output directory:[/] {options.output_dir}",
                        f"[dim]Manifest:[/] {manifest_path.name}",
                    ]
                ),
                title="Complete",
                border_style="green",
            )
        )
