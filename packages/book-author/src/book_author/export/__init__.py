"""Manuscript exporters: DOCX, PDF, EPUB, Markdown, HTML and plain text."""

from .base import BookExporter, ExportCancelledError, TextExporter
from .docx_exporter import DocxExporter
from .epub_exporter import EpubExporter
from .html import HtmlExporter
from .markdown import MarkdownExporter
from .options import FORMAT_EXTENSIONS, FORMAT_INFO, ExportFormatInfo, ExportOptions, PageMargins, PageSize
from .pdf import PdfExporter
from .service import ExportService, default_exporters
from .text import PlainTextExporter

__all__ = [
    "BookExporter",
    "TextExporter",
    "ExportCancelledError",
    "ExportService",
    "default_exporters",
    "ExportOptions",
    "ExportFormatInfo",
    "PageMargins",
    "PageSize",
    "FORMAT_EXTENSIONS",
    "FORMAT_INFO",
    "DocxExporter",
    "EpubExporter",
    "HtmlExporter",
    "MarkdownExporter",
    "PdfExporter",
    "PlainTextExporter",
]
