"""Chapter and scene models."""

from typing import Optional
from uuid import UUID

from pydantic import Field

from .base import Entity, count_words
from .enums import ChapterStatus


class Scene(Entity):
    """A scene within a chapter."""

    title: str = ""
    order: int = 1
    content: str = ""
    summary: Optional[str] = None
    scene_type: Optional[str] = None
    location_id: Optional[UUID] = None
    pov_character_id: Optional[UUID] = None
    character_ids: list[UUID] = Field(default_factory=list)
    notes: Optional[str] = None

    @property
    def word_count(self) -> int:
        return count_words(self.content)


class Chapter(Entity):
    """A chapter of the book with its prose, planning notes and scenes."""

    title: str = ""
    order: int = 1
    content: str = ""
    summary: Optional[str] = None
    outline: Optional[str] = None
    status: ChapterStatus = ChapterStatus.NOT_STARTED
    notes: Optional[str] = None
    scenes: list[Scene] = Field(default_factory=list)
    pov_character_id: Optional[UUID] = None
    primary_location_id: Optional[UUID] = None
    target_word_count: int = 3000
    custom_context: Optional[str] = None
    character_ids: list[UUID] = Field(default_factory=list)
    location_ids: list[UUID] = Field(default_factory=list)

    @property
    def word_count(self) -> int:
        return count_words(self.content)

    @property
    def completion_percentage(self) -> float:
        if self.target_word_count <= 0:
            return 0.0
        return min(100.0, self.word_count / self.target_word_count * 100)

    def update_content(self, content: Optional[str]) -> None:
        self.content = content or ""
        self.mark_modified()

    def add_scene(self, scene: Scene) -> None:
        """Append a scene, numbering it after the existing scenes."""
        if scene is None:
            raise ValueError("scene is required")
        scene.order = len(self.scenes) + 1
        self.scenes.append(scene)
        self.mark_modified()

    def remove_scene(self, scene_id: UUID) -> bool:
        scene = next((s for s in self.scenes if s.id == scene_id), None)
        if scene is None:
            return False
        self.scenes.remove(scene)
        for index, remaining in enumerate(self.scenes, start=1):
            remaining.order = index
        self.mark_modified()
        return True
