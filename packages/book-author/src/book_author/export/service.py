"""Validates export requests and dispatches them to the format exporters."""

import threading
from pathlib import Path
from typing import Optional

from loguru import logger

from book_author.export.base import BookExporter
from book_author.export.docx_exporter import DocxExporter
from book_author.export.epub_exporter import EpubExporter
from book_author.export.html import HtmlExporter
from book_author.export.markdown import MarkdownExporter
from book_author.export.options import FORMAT_EXTENSIONS, FORMAT_INFO, SIZE_MULTIPLIERS, ExportFormatInfo, ExportOptions
from book_author.export.pdf import PdfExporter
from book_author.export.text import PlainTextExporter
from book_author.models import Chapter, ChapterStatus, ExportFormat, Project
from book_author.result import Result
from book_author.validation import ValidationError, ValidationResult, validate_export_options


def default_exporters() -> dict[ExportFormat, BookExporter]:
    exporters: list[BookExporter] = [
        DocxExporter(),
        PdfExporter(),
        EpubExporter(),
        MarkdownExporter(),
        HtmlExporter(),
        PlainTextExporter(),
    ]
    return {exporter.format: exporter for exporter in exporters}


class ExportService:
    """Entry point for exporting a project to any supported format."""

    def __init__(self, exporters: Optional[dict[ExportFormat, BookExporter]] = None):
        self.exporters = exporters if exporters is not None else default_exporters()

    def available_formats(self) -> list[ExportFormatInfo]:
        return [info.model_copy(update={"is_available": info.format in self.exporters}) for info in FORMAT_INFO]

    def validate_options(self, project: Project, options: ExportOptions) -> ValidationResult:
        """Check the options against the project: path, extension and chapter filter."""
        results = [validate_export_options(options)]
        errors: list[ValidationError] = []

        expected = FORMAT_EXTENSIONS[options.format]
        if options.output_path and Path(options.output_path).suffix.lower() != expected:
            errors.append(
                ValidationError(
                    "OutputPath",
                    f"Output file should have {expected} extension for {options.format.value} format",
                    "extension",
                    options.output_path,
                )
            )

        if options.chapter_filter:
            known = {chapter.id for chapter in project.chapters}
            invalid = [chapter_id for chapter_id in options.chapter_filter if chapter_id not in known]
            if invalid:
                errors.append(
                    ValidationError(
                        "ChapterFilter",
                        f"Chapter filter contains {len(invalid)} invalid chapter IDs",
                        "invalid_chapters",
                        invalid,
                    )
                )

        results.append(ValidationResult(tuple(errors)))
        return ValidationResult.combine(results)

    def select_chapters(self, project: Project, options: ExportOptions) -> list[Chapter]:
        """Chapters to export in order, skipping outline-only chapters."""
        chapters = [chapter for chapter in project.chapters if chapter.status != ChapterStatus.OUTLINED]
        if options.chapter_filter:
            wanted = set(options.chapter_filter)
            chapters = [chapter for chapter in chapters if chapter.id in wanted]
        return sorted(chapters, key=lambda chapter: chapter.order)

    def export(
        self,
        project: Project,
        options: ExportOptions,
        cancel_event: Optional[threading.Event] = None,
    ) -> Result[str]:
        """Export ``project`` and return the written path."""
        if project is None:
            raise ValueError("project is required")
        if options is None:
            raise ValueError("options are required")

        logger.info(f"Exporting project '{project.name}' to {options.format.value}: {options.output_path}")

        validation = self.validate_options(project, options)
        if validation.is_invalid:
            message = validation.all_error_messages("; ")
            logger.warning(f"Export validation failed: {message}")
            return Result.fail(message)

        exporter = self.exporters.get(options.format)
        if exporter is None:
            return Result.fail(f"Export format {options.format.value} is not supported")

        try:
            Path(options.output_path).parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.exception("Could not create export directory")
            return Result.fail(f"Export failed: {e}", e)

        chapters = self.select_chapters(project, options)
        if not chapters:
            return Result.fail("No chapters to export")

        if cancel_event is not None and cancel_event.is_set():
            return Result.fail("Export cancelled")

        return exporter.export(project, chapters, options, cancel_event)

    def estimate_export_size(self, project: Project, export_format: ExportFormat) -> int:
        """Approximate output size in bytes."""
        base = sum(len(chapter.content) + len(chapter.title) * 10 for chapter in project.chapters)
        return int(base * SIZE_MULTIPLIERS.get(export_format, 1.0))
