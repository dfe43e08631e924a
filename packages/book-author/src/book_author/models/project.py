"""The book project aggregate."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from llm_core.config import BaseConfig
from pydantic import Field

from .base import Entity
from .chapter import Chapter
from .character import Character
from .enums import AIProviderType, BookCategory, GenerationMode, PointOfView, ProjectStatus, Tense
from .location import Location, ResearchNote
from .outline import Outline


class BookMetadata(BaseConfig):
    """Publishing metadata for the book."""

    title: str = ""
    subtitle: Optional[str] = None
    author: str = ""
    author_bio: Optional[str] = None
    genre: str = ""
    tags: list[str] = Field(default_factory=list)
    isbn10: Optional[str] = None
    isbn13: Optional[str] = None
    publisher: Optional[str] = None
    publication_date: Optional[datetime] = None
    language: str = "en-US"
    description: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    copyright: Optional[str] = None
    target_audience: Optional[str] = None
    category: BookCategory = BookCategory.FICTION


class GenerationSettings(BaseConfig):
    """How AI generation should write for this project."""

    provider: AIProviderType = AIProviderType.CLAUDE
    model: Optional[str] = None
    mode: GenerationMode = GenerationMode.STANDARD
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    point_of_view: PointOfView = PointOfView.THIRD_PERSON_LIMITED
    tense: Tense = Tense.PAST
    target_chapter_length: int = Field(3000, gt=0)
    style_description: Optional[str] = None
    tone_description: Optional[str] = None
    custom_instructions: Optional[str] = None


class Project(Entity):
    """A book project: metadata, chapters, cast, places, outline and research."""

    name: str = ""
    description: str = ""
    owner_id: Optional[str] = None
    metadata: BookMetadata = Field(default_factory=BookMetadata)
    outline: Optional[Outline] = None
    status: ProjectStatus = ProjectStatus.PLANNING
    template_name: Optional[str] = None
    chapters: list[Chapter] = Field(default_factory=list)
    characters: list[Character] = Field(default_factory=list)
    locations: list[Location] = Field(default_factory=list)
    research_notes: list[ResearchNote] = Field(default_factory=list)
    generation_settings: GenerationSettings = Field(default_factory=GenerationSettings)
    file_path: Optional[str] = Field(None, exclude=True)
    target_word_count: int = 80000

    @property
    def total_word_count(self) -> int:
        return sum(chapter.word_count for chapter in self.chapters)

    @property
    def completion_percentage(self) -> float:
        if self.target_word_count <= 0:
            return 0.0
        return min(100.0, self.total_word_count / self.target_word_count * 100)

    def get_chapter(self, chapter_id: UUID) -> Optional[Chapter]:
        return next((c for c in self.chapters if c.id == chapter_id), None)

    def add_chapter(self, chapter: Chapter) -> None:
        """Append a chapter; its order becomes the new chapter count."""
        if chapter is None:
            raise ValueError("chapter is required")
        chapter.order = len(self.chapters) + 1
        self.chapters.append(chapter)
        self.mark_modified()

    def remove_chapter(self, chapter_id: UUID) -> bool:
        chapter = self.get_chapter(chapter_id)
        if chapter is None:
            return False
        self.chapters.remove(chapter)
        self._reorder_chapters()
        self.mark_modified()
        return True

    def move_chapter(self, chapter_id: UUID, new_order: int) -> None:
        """Move a chapter to a 1-based position, clamped to the valid range."""
        chapter = self.get_chapter(chapter_id)
        if chapter is None:
            return
        new_order = max(1, min(new_order, len(self.chapters)))
        self.chapters.remove(chapter)
        self.chapters.insert(new_order - 1, chapter)
        self._reorder_chapters()
        self.mark_modified()

    def add_character(self, character: Character) -> None:
        if character is None:
            raise ValueError("character is required")
        self.characters.append(character)
        self.mark_modified()

    def remove_character(self, character_id: UUID) -> bool:
        return self._remove_by_id(self.characters, character_id)

    def add_location(self, location: Location) -> None:
        if location is None:
            raise ValueError("location is required")
        self.locations.append(location)
        self.mark_modified()

    def remove_location(self, location_id: UUID) -> bool:
        return self._remove_by_id(self.locations, location_id)

    def add_research_note(self, note: ResearchNote) -> None:
        if note is None:
            raise ValueError("note is required")
        self.research_notes.append(note)
        self.mark_modified()

    def remove_research_note(self, note_id: UUID) -> bool:
        return self._remove_by_id(self.research_notes, note_id)

    def _remove_by_id(self, items: list, item_id: UUID) -> bool:
        item = next((i for i in items if i.id == item_id), None)
        if item is None:
            return False
        items.remove(item)
        self.mark_modified()
        return True

    def _reorder_chapters(self) -> None:
        for index, chapter in enumerate(self.chapters, start=1):
            chapter.order = index
