"""Location and research note models."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .base import Entity
from .enums import LocationType, ResearchCategory


class Location(Entity):
    """A place where the story happens."""

    name: str = ""
    location_type: LocationType = LocationType.OTHER
    description: str = ""
    sensory_details: Optional[str] = None
    atmosphere: Optional[str] = None
    history: Optional[str] = None
    features: list[str] = Field(default_factory=list)
    parent_location_id: Optional[UUID] = None
    character_ids: list[UUID] = Field(default_factory=list)
    notes: Optional[str] = None
    image_path: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    def to_context_string(self) -> str:
        """Render the location as labelled lines for inclusion in a prompt."""
        parts = [f"Location: {self.name}"]
        # OTHER carries no information for the model
        if self.location_type != LocationType.OTHER:
            parts.append(f"Type: {self.location_type.value.replace('_', ' ').title()}")
        if self.description and self.description.strip():
            parts.append(f"Description: {self.description}")
        if self.sensory_details and self.sensory_details.strip():
            parts.append(f"Sensory Details: {self.sensory_details}")
        if self.atmosphere and self.atmosphere.strip():
            parts.append(f"Atmosphere: {self.atmosphere}")
        if self.features:
            parts.append(f"Features: {', '.join(self.features)}")
        return "\n".join(parts)


class ResearchNote(Entity):
    """A piece of research attached to the project."""

    title: str = ""
    content: str = ""
    source: Optional[str] = None
    source_url: Optional[str] = None
    category: ResearchCategory = ResearchCategory.GENERAL
    tags: list[str] = Field(default_factory=list)
    chapter_ids: list[UUID] = Field(default_factory=list)
    character_ids: list[UUID] = Field(default_factory=list)
    location_ids: list[UUID] = Field(default_factory=list)
    is_starred: bool = False
    date_collected: Optional[datetime] = None
