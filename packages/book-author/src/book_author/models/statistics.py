"""Derived project statistics."""

from datetime import datetime

from llm_core.config import BaseConfig
from pydantic import Field

from .base import count_words
from .enums import ChapterStatus
from .project import Project

WORDS_PER_MINUTE = 250


class ProjectStatistics(BaseConfig):
    """A snapshot of a project's size and progress."""

    total_word_count: int = 0
    target_word_count: int = 0
    total_chapters: int = 0
    completed_chapters: int = 0
    chapters_by_status: dict[ChapterStatus, int] = Field(default_factory=dict)
    character_count: int = 0
    location_count: int = 0
    outline_item_count: int = 0
    research_note_count: int = 0
    estimated_reading_time_minutes: int = 0
    created_at: datetime
    last_modified: datetime

    @property
    def completion_percentage(self) -> float:
        if self.target_word_count <= 0:
            return 0.0
        return min(100.0, self.total_word_count / self.target_word_count * 100)

    @property
    def average_words_per_chapter(self) -> float:
        if self.total_chapters <= 0:
            return 0.0
        return self.total_word_count / self.total_chapters

    @classmethod
    def from_project(cls, project: Project) -> "ProjectStatistics":
        """Compute statistics; every chapter status appears in the breakdown."""
        if project is None:
            raise ValueError("project is required")

        by_status = {status: 0 for status in ChapterStatus}
        for chapter in project.chapters:
            by_status[chapter.status] += 1

        total_words = sum(count_words(chapter.content) for chapter in project.chapters)
        target_words = project.target_word_count or sum(c.target_word_count for c in project.chapters)

        return cls(
            total_word_count=total_words,
            target_word_count=target_words,
            total_chapters=len(project.chapters),
            completed_chapters=by_status[ChapterStatus.COMPLETE],
            chapters_by_status=by_status,
            character_count=len(project.characters),
            location_count=len(project.locations),
            outline_item_count=len(project.outline.items) if project.outline else 0,
            research_note_count=len(project.research_notes),
            estimated_reading_time_minutes=total_words // WORDS_PER_MINUTE,
            created_at=project.created_at,
            last_modified=project.modified_at,
        )
