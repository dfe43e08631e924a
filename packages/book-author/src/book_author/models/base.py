"""Shared base class for identified, timestamped records."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from llm_core.config import BaseConfig
from pydantic import Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def count_words(text: str | None) -> int:
    """Count whitespace-separated words."""
    if not text or not text.strip():
        return 0
    return len(text.split())


class Entity(BaseConfig):
    """A record with a UUID identity and UTC created/modified timestamps.

    Two entities are equal when their ids match, whatever their field values.
    """

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=utc_now)
    modified_at: datetime = Field(default_factory=utc_now)

    def mark_modified(self) -> None:
        self.modified_at = utc_now()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
