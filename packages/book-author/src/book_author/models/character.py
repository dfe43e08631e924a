"""Character models."""

from typing import Optional
from uuid import UUID

from llm_core.config import BaseConfig
from pydantic import Field

from .base import Entity


class CharacterRelationship(BaseConfig):
    """A directed relationship from one character to another."""

    other_character_id: UUID
    relationship_type: str = ""
    description: Optional[str] = None
    strength: int = Field(0, ge=-10, le=10)


class Character(Entity):
    """A character in the book."""

    name: str = ""
    nickname: Optional[str] = None
    role: str = "Supporting"
    is_main_character: bool = False
    age: Optional[int] = None
    gender: Optional[str] = None
    physical_description: Optional[str] = None
    personality_traits: list[str] = Field(default_factory=list)
    backstory: Optional[str] = None
    goals: Optional[str] = None
    fears: Optional[str] = None
    character_arc: Optional[str] = None
    voice_notes: Optional[str] = None
    occupation: Optional[str] = None
    notes: Optional[str] = None
    quick_summary: Optional[str] = None
    relationships: list[CharacterRelationship] = Field(default_factory=list)

    def add_relationship(self, relationship: CharacterRelationship) -> None:
        if relationship is None:
            raise ValueError("relationship is required")
        self.relationships.append(relationship)
        self.mark_modified()

    def remove_relationship(self, other_character_id: UUID) -> bool:
        relationship = next(
            (r for r in self.relationships if r.other_character_id == other_character_id),
            None,
        )
        if relationship is None:
            return False
        self.relationships.remove(relationship)
        self.mark_modified()
        return True

    def to_context_string(self) -> str:
        """Render the character as labelled lines for inclusion in a prompt."""
        parts = [f"Name: {self.name}"]
        if self.role and self.role.strip():
            parts.append(f"Role: {self.role}")
        if self.age is not None:
            parts.append(f"Age: {self.age}")
        if self.gender and self.gender.strip():
            parts.append(f"Gender: {self.gender}")
        if self.physical_description and self.physical_description.strip():
            parts.append(f"Appearance: {self.physical_description}")
        if self.personality_traits:
            parts.append(f"Personality: {', '.join(self.personality_traits)}")
        if self.goals and self.goals.strip():
            parts.append(f"Goals: {self.goals}")
        if self.voice_notes and self.voice_notes.strip():
            parts.append(f"Voice/Speech: {self.voice_notes}")
        if self.quick_summary and self.quick_summary.strip():
            parts.append(f"Summary: {self.quick_summary}")
        return "\n".join(parts)
