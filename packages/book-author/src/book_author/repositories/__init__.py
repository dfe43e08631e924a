"""File-backed repositories returning ``Result`` values."""

from .base import JsonRepository
from .projects import ChapterRepository, ProjectRepository
from .wizard_sessions import WizardSessionRepository

__all__ = [
    "JsonRepository",
    "ProjectRepository",
    "ChapterRepository",
    "WizardSessionRepository",
]
