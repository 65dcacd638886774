"""Main CLI application."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from epubie.cache.manager import CacheManager
from epubie.core.epub_parser import read_epub
from epubie.core.errors import EpubError
from epubie.utils import format_size, setup_logging

app = typer.Typer(
    name="epubie",
    help="Inspect EPUB files: metadata, chapters, table of contents and cover.",
    add_completion=False,
)

console = Console()

# Cache subcommand group
cache_app = typer.Typer(help="Cache management commands")
app.add_typer(cache_app, name="cache")

BookPath = Annotated[
    Path,
    typer.Argument(
        help="Path to the EPUB file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log parsing details to stderr"),
    ] = False,
) -> None:
    """Inspect EPUB files: metadata, chapters, table of contents and cover."""
    setup_logging(verbose)


@app.command()
def info(book_path: BookPath) -> None:
    """Display book metadata and chapters."""
    try:
        epub = read_epub(book_path)
    except EpubError as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)

    info_lines = [
        f"[bold]{epub.title or 'Untitled'}[/]",
        "",
        f"[dim]Author(s):[/] {', '.join(epub.creators) or 'Unknown'}",
        f"[dim]Language:[/] {epub.language or 'Unknown'}",
        f"[dim]Identifier:[/] {epub.identifier or 'None'}",
        f"[dim]Date:[/] {epub.date or 'Unknown'}",
        f"[dim]Publisher:[/] {epub.publisher or 'Unknown'}",
    ]
    if epub.rights:
        info_lines.append(f"[dim]Rights:[/] {epub.rights}")
    if epub.tags:
        info_lines.append(f"[dim]Tags:[/] {', '.join(epub.tags)}")
    info_lines.append(f"[dim]Cover:[/] {epub.cover or 'None'}")
    info_lines.append(f"[dim]Chapters:[/] {epub.chapter_count}")
    info_lines.append(f"[dim]Content files:[/] {epub.file_count}")
    if epub.description:
        info_lines.extend(["", epub.description])

    console.print()
    console.print(Panel("\n".join(info_lines), title="Book Information", border_style="green"))

    console.print()
    table = Table(title="Chapters", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Files", justify="right", style="green")
    table.add_column("Size", justify="right", style="dim")

    for i, chapter in enumerate(epub.chapters):
        size = sum(len(f.html_bytes) for f in chapter.files)
        table.add_row(str(i + 1), chapter.title, str(chapter.file_count), format_size(size))

    console.print(table)
    console.print()


@app.command()
def toc(book_path: BookPath) -> None:
    """Display the table of contents."""
    try:
        epub = read_epub(book_path)
    except EpubError as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)

    table = Table(
        title=f"Table of Contents ({epub.table_of_contents.entry_count} entries)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Href", style="dim")

    for i, entry in enumerate(epub.table_of_contents.entries):
        indent = "  " * entry.level
        table.add_row(str(i + 1), f"{indent}{entry.title}", entry.href)

    console.print(table)


@app.command()
def extract(
    book_path: BookPath,
    sections: Annotated[
        Optional[str],
        typer.Option(
            "--sections",
            "-s",
            help="Chapters to extract by index: '1,3,5-7' or 'all' (use 'epubie info' to see indices)",
        ),
    ] = None,
    interactive: Annotated[
        bool,
        typer.Option(
            "--interactive",
            "-i",
            help="Interactive mode: display chapters and select",
        ),
    ] = False,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory (default: {book_name}_chapters/)",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format: markdown, text, or html",
        ),
    ] = "markdown",
    force: Annotated[
        bool,
        typer.Option("--force", help="Refresh the cached structure"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress progress output"),
    ] = False,
) -> None:
    """Extract chapters to JSON files in markdown, text or html."""
    if output_format not in ("markdown", "text", "html"):
        console.print(
            f"[red]Invalid format: {output_format}. Use markdown, text, or html.[/]"
        )
        raise typer.Exit(1)

    try:
        from epubie.commands.extract import execute_extract

        execute_extract(
            book_path=book_path,
            chapters=sections,
            interactive=interactive,
            output_dir=output_dir,
            output_format=output_format,  # type: ignore
            force=force,
            quiet=quiet,
            console=console,
        )
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def cover(
    book_path: BookPath,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Where to write the image (default: {book_name}_cover.<ext> next to the EPUB)",
        ),
    ] = None,
) -> None:
    """Save the cover image."""
    try:
        epub = read_epub(book_path)
    except EpubError as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)

    data = epub.cover_bytes()
    if data is None:
        console.print("[yellow]No readable cover image[/]")
        raise typer.Exit(1)

    if output is None:
        suffix = _guess_image_suffix(data)
        output = book_path.parent / f"{book_path.stem}_cover{suffix}"

    output.write_bytes(data)
    console.print(f"[green]Saved cover ({format_size(len(data))}) to {output}[/]")


def _guess_image_suffix(data: bytes) -> str:
    if data.startswith(b"\xff\xd8\xff"):
        return ".jpg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return ".png"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return ".gif"
    if data.lstrip().startswith((b"<svg", b"<?xml")):
        return ".svg"
    return ".img"


@cache_app.command("clear")
def cache_clear(
    project_dir: Annotated[
        Path,
        typer.Option(
            "--dir",
            "-d",
            help="Project directory containing the cache (default: current directory)",
        ),
    ] = Path("."),
) -> None:
    """Clear all cached data."""
    cache_manager = CacheManager(project_dir.resolve())
    count = cache_manager.clear_cache()

    if count > 0:
        console.print(f"[green]Cleared {count} cached file(s)[/]")
    else:
        console.print("[dim]No cache to clear[/]")


@cache_app.command("list")
def cache_list(
    project_dir: Annotated[
        Path,
        typer.Option(
            "--dir",
            "-d",
            help="Project directory containing the cache (default: current directory)",
        ),
    ] = Path("."),
) -> None:
    """List all cached files."""
    cache_manager = CacheManager(project_dir.resolve())
    cached = cache_manager.list_cached()

    if not cached:
        console.print("[dim]No cached files[/]")
        return

    table = Table(title="Cached Files", show_header=True, header_style="bold cyan")
    table.add_column("Path", style="white")
    table.add_column("Hash", style="dim", width=12)

    for path, file_hash in cached:
        display_path = path if len(path) < 60 else "..." + path[-57:]
        table.add_row(display_path, file_hash[:12])

    console.print(table)


if __name__ == "__main__":
    app()
