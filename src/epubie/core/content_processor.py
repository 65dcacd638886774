"""Convert XHTML content files into markdown, text or cleaned HTML."""

import warnings
from typing import Literal

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from markdownify import markdownify as md

from epubie.models.book import Chapter, EpubFile

# Content files are XHTML; lxml's HTML parser handles them fine
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

OutputFormat = Literal["markdown", "text", "html"]


class ContentProcessor:
    """Turn chapter content into AI- and search-friendly formats."""

    def process(self, html_content: str | bytes, output_format: OutputFormat = "markdown") -> str:
        """Convert one XHTML document to the requested format."""
        soup = BeautifulSoup(html_content, "lxml")

        # Remove scripts, styles, and navigation chrome
        for tag in soup(["script", "style", "nav", "header", "footer", "aside"]):
            tag.decompose()

        if output_format == "html":
            return self._to_clean_html(soup)
        elif output_format == "text":
            return self._to_plain_text(soup)
        else:
            return self._to_markdown(soup)

    def process_file(self, file: EpubFile, output_format: OutputFormat = "markdown") -> str:
        return self.process(file.content, output_format)

    def process_chapter(self, chapter: Chapter, output_format: OutputFormat = "markdown") -> str:
        """Convert every file of a chapter and join them in reading order."""
        parts = [self.process_file(f, output_format) for f in chapter.files]
        return "\n\n".join(p for p in parts if p)

    def _to_markdown(self, soup: BeautifulSoup) -> str:
        body = soup.body or soup
        markdown = md(
            str(body),
            heading_style="ATX",
            bullets="-",
            strip=["a"],  # Keep link text only
        )
        # Collapse runs of blank lines
        cleaned = []
        prev_blank = False
        for line in (line.rstrip() for line in markdown.split("\n")):
            is_blank = not line
            if is_blank and prev_blank:
                continue
            cleaned.append(line)
            prev_blank = is_blank

        return "\n".join(cleaned).strip()

    def _to_plain_text(self, soup: BeautifulSoup) -> str:
        """Text of block elements, one paragraph per block."""
        paragraphs = []
        for block in soup.find_all(["p", "h1", "h2", "h3", "h4", "h5", "h6", "li"]):
            text = block.get_text(" ", strip=True)
            if text:
                paragraphs.append(text)
        return "\n\n".join(paragraphs)

    def _to_clean_html(self, soup: BeautifulSoup) -> str:
        body = soup.body or soup
        return str(body)

    def get_stats(self, content: str) -> dict[str, int]:
        words = content.split()
        paragraphs = [p for p in content.split("\n\n") if p.strip()]
        return {
            "word_count": len(words),
            "character_count": len(content),
            "paragraph_count": len(paragraphs),
        }
