"""Book Author - projects, exporters, the creation wizard, chapter generation and KDP tools."""

__version__ = "0.2.0"

from book_author.config import AppSettings
from book_author.export import ExportOptions, ExportService
from book_author.generation import ChapterGenerator
from book_author.kdp import KdpService
from book_author.logging_config import setup_logging
from book_author.project_service import ProjectService, ProjectSummary
from book_author.repositories import ChapterRepository, ProjectRepository, WizardSessionRepository
from book_author.result import Result, ResultError
from book_author.wizard import WizardService

__all__ = [
    "__version__",
    "AppSettings",
    "ChapterGenerator",
    "ChapterRepository",
    "ExportOptions",
    "ExportService",
    "KdpService",
    "ProjectRepository",
    "ProjectService",
    "ProjectSummary",
    "Result",
    "ResultError",
    "WizardService",
    "WizardSessionRepository",
    "setup_logging",
]
