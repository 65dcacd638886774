from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest

XHTML = "application/xhtml+xml"

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

DEFAULT_METADATA = """
    <dc:identifier id="uid">urn:uuid:1234</dc:identifier>
    <dc:title>Sample Book</dc:title>
    <dc:creator>Jane Author</dc:creator>
    <dc:creator>John Editor</dc:creator>
    <dc:language>en</dc:language>
    <dc:date>2020-01-01</dc:date>
    <dc:publisher>Sample Press</dc:publisher>
    <dc:description>A book for tests.</dc:description>
    <dc:rights>CC0</dc:rights>
    <dc:subject>Fiction</dc:subject>
    <dc:subject>Testing</dc:subject>
"""


def xhtml(body: str, title: str = "t") -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml">'
        f"<head><title>{title}</title></head><body>{body}</body></html>"
    )


def nav_document(links: list[tuple[str, str]]) -> str:
    items = "\n".join(f'<li><a href="{href}">{label}</a></li>' for href, label in links)
    return xhtml(f'<nav epub:type="toc"><ol>\n{items}\n</ol></nav>', title="Contents")


def make_opf(
    manifest: list[tuple],
    spine: list[str],
    metadata: str = DEFAULT_METADATA,
) -> str:
    """Build a package document.

    ``manifest`` entries are ``(id, href, media_type)`` or
    ``(id, href, media_type, properties)``.
    """
    items = []
    for entry in manifest:
        item_id, href, media_type = entry[:3]
        props = f' properties="{entry[3]}"' if len(entry) > 3 and entry[3] else ""
        items.append(f'<item id="{item_id}" href="{href}" media-type="{media_type}"{props}/>')
    refs = "".join(f'<itemref idref="{idref}"/>' for idref in spine)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">'
        f'<metadata xmlns:dc="http://purl.org/dc/elements/1.1/">{metadata}</metadata>'
        f"<manifest>{''.join(items)}</manifest>"
        f"<spine>{refs}</spine>"
        "</package>"
    )


def build_archive(entries: dict[str, str | bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


def build_epub(
    manifest: list[tuple],
    spine: list[str],
    contents: dict[str, str | bytes] | None = None,
    metadata: str = DEFAULT_METADATA,
    opf_path: str = "OEBPS/content.opf",
) -> bytes:
    """Archive with container.xml, the package document and ``contents``.

    ``contents`` keys are archive paths.
    """
    entries: dict[str, str | bytes] = {
        "META-INF/container.xml": CONTAINER_XML.format(opf_path=opf_path),
        opf_path: make_opf(manifest, spine, metadata),
    }
    entries.update(contents or {})
    return build_archive(entries)


@pytest.fixture
def sample_epub_bytes() -> bytes:
    """Three logical chapters, one of them split across two files, plus a cover."""
    manifest = [
        ("nav", "nav.xhtml", XHTML, "nav"),
        ("cover-img", "images/cover.jpg", "image/jpeg", "cover-image"),
        ("intro", "intro.xhtml", XHTML),
        ("chapter_1_part1", "ch1a.xhtml", XHTML),
        ("chapter_1_part2", "ch1b.xhtml", XHTML),
        ("chapter_2", "ch2.xhtml", XHTML),
        ("style", "style.css", "text/css"),
    ]
    spine = ["intro", "chapter_1_part1", "chapter_1_part2", "chapter_2"]
    contents = {
        "OEBPS/nav.xhtml": nav_document(
            [
                ("intro.xhtml", "Introduction"),
                ("ch1a.xhtml", " Chapter One "),
                ("ch1b.xhtml", "Chapter One (cont.)"),
                ("ch2.xhtml", "Chapter Two"),
            ]
        ),
        "OEBPS/images/cover.jpg": b"\xff\xd8\xff\xe0fakejpeg",
        "OEBPS/intro.xhtml": xhtml("<h1>Introduction</h1><p>Welcome.</p>"),
        "OEBPS/ch1a.xhtml": xhtml("<h1>Chapter One</h1><p>First half.</p>"),
        "OEBPS/ch1b.xhtml": xhtml("<p>Second half.</p>"),
        "OEBPS/ch2.xhtml": xhtml("<h1>Chapter Two</h1><p>The end.</p>"),
        "OEBPS/style.css": "body { margin: 0 }",
    }
    return build_epub(manifest, spine, contents)


@pytest.fixture
def sample_epub_path(tmp_path: Path, sample_epub_bytes: bytes) -> Path:
    path = tmp_path / "sample.epub"
    path.write_bytes(sample_epub_bytes)
    return path
