"""Base class shared by the format exporters."""

import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from loguru import logger

from book_author.export.options import ExportOptions
from book_author.models import Chapter, ExportFormat, Project
from book_author.result import Result


class ExportCancelledError(Exception):
    """Raised inside an exporter when the caller sets the cancel event."""


class BookExporter(ABC):
    """Writes a project's chapters to ``options.output_path``.

    Subclasses implement ``_write``. ``export`` turns any error into a
    failed ``Result`` carrying ``"<label> export failed: ..."``.
    """

    format: ExportFormat
    label: str

    def export(
        self,
        project: Project,
        chapters: list[Chapter],
        options: ExportOptions,
        cancel_event: Optional[threading.Event] = None,
    ) -> Result[str]:
        logger.debug(f"Exporting to {self.label}: {len(chapters)} chapters")
        try:
            self._write(project, chapters, options, cancel_event)
        except ExportCancelledError:
            logger.info(f"{self.label} export cancelled")
            return Result.fail("Export cancelled")
        except Exception as e:
            logger.exception(f"{self.label} export failed")
            return Result.fail(f"{self.label} export failed: {e}", e)

        logger.info(f"{self.label} export complete: {options.output_path}")
        return Result.ok(options.output_path)

    @abstractmethod
    def _write(
        self,
        project: Project,
        chapters: list[Chapter],
        options: ExportOptions,
        cancel_event: Optional[threading.Event],
    ) -> None:
        pass

    @staticmethod
    def check_cancelled(cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise ExportCancelledError()


class TextExporter(BookExporter):
    """Exporter for formats rendered to a single UTF-8 string."""

    @abstractmethod
    def render(
        self,
        project: Project,
        chapters: list[Chapter],
        options: ExportOptions,
        cancel_event: Optional[threading.Event] = None,
    ) -> str:
        """Render the whole document as text."""

    def _write(self, project, chapters, options, cancel_event) -> None:
        text = self.render(project, chapters, options, cancel_event)
        Path(options.output_path).write_text(text, encoding="utf-8")
