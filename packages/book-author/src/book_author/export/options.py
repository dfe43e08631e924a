"""Export options and per-format descriptions."""

from enum import Enum
from typing import Optional
from uuid import UUID

from llm_core.config import BaseConfig
from pydantic import Field

from book_author.models import ExportFormat

FORMAT_EXTENSIONS: dict[ExportFormat, str] = {
    ExportFormat.DOCX: ".docx",
    ExportFormat.PDF: ".pdf",
    ExportFormat.EPUB: ".epub",
    ExportFormat.MARKDOWN: ".md",
    ExportFormat.HTML: ".html",
    ExportFormat.PLAIN_TEXT: ".txt",
}

# Rough output size relative to the raw text
SIZE_MULTIPLIERS: dict[ExportFormat, float] = {
    ExportFormat.PLAIN_TEXT: 1.0,
    ExportFormat.MARKDOWN: 1.1,
    ExportFormat.HTML: 1.5,
    ExportFormat.DOCX: 2.0,
    ExportFormat.PDF: 2.5,
    ExportFormat.EPUB: 1.8,
}


class PageSize(str, Enum):
    LETTER = "letter"
    A4 = "a4"
    A5 = "a5"
    CUSTOM = "custom"


class PageMargins(BaseConfig):
    """Page margins in inches."""

    top: float = Field(1.0, ge=0)
    bottom: float = Field(1.0, ge=0)
    left: float = Field(1.25, ge=0)
    right: float = Field(1.25, ge=0)


class ExportOptions(BaseConfig):
    """What to export and how it should look.

    Range checks on ``font_size`` and ``line_spacing`` live in
    ``book_author.validation`` so that bad values are reported as
    validation errors rather than raised on construction.
    """

    format: ExportFormat = ExportFormat.DOCX
    output_path: str = ""
    include_table_of_contents: bool = True
    include_chapter_titles: bool = True
    include_chapter_numbers: bool = True
    chapter_page_breaks: bool = True
    include_front_matter: bool = True
    embed_fonts: bool = True
    chapter_filter: Optional[list[UUID]] = None
    font_family: str = "Georgia"
    font_size: int = 12
    line_spacing: float = 1.5
    custom_css: Optional[str] = None
    page_size: PageSize = PageSize.LETTER
    margins: PageMargins = Field(default_factory=PageMargins)

    def chapter_heading(self, order: int, title: str) -> str:
        """Heading text for a chapter, honouring ``include_chapter_numbers``."""
        if self.include_chapter_numbers:
            return f"Chapter {order}: {title}" if title else f"Chapter {order}"
        return title


class ExportFormatInfo(BaseConfig):
    """Display information for an export format."""

    format: ExportFormat
    name: str
    description: str
    extension: str
    icon: str
    is_available: bool = True


FORMAT_INFO: list[ExportFormatInfo] = [
    ExportFormatInfo(
        format=ExportFormat.DOCX,
        name="Microsoft Word",
        description="Standard document format compatible with Word, Google Docs, etc.",
        extension=".docx",
        icon="FileWord",
    ),
    ExportFormatInfo(
        format=ExportFormat.PDF,
        name="PDF",
        description="Portable document format for sharing and printing",
        extension=".pdf",
        icon="FilePdfBox",
    ),
    ExportFormatInfo(
        format=ExportFormat.EPUB,
        name="EPUB",
        description="E-book format for Kindle, Kobo, and other readers",
        extension=".epub",
        icon="BookOpenPageVariant",
    ),
    ExportFormatInfo(
        format=ExportFormat.MARKDOWN,
        name="Markdown",
        description="Plain text format with formatting, great for version control",
        extension=".md",
        icon="LanguageMarkdown",
    ),
    ExportFormatInfo(
        format=ExportFormat.HTML,
        name="HTML",
        description="Web format for online publishing",
        extension=".html",
        icon="LanguageHtml5",
    ),
    ExportFormatInfo(
        format=ExportFormat.PLAIN_TEXT,
        name="Plain Text",
        description="Simple text format without formatting",
        extension=".txt",
        icon="FileDocumentOutline",
    ),
]
