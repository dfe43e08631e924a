"""Hierarchical book outline."""

from typing import Iterator, Optional
from uuid import UUID

from pydantic import Field

from .base import Entity
from .enums import OutlineItemType


class OutlineItem(Entity):
    """An act, part, chapter, scene, beat or note in the outline tree."""

    title: str = ""
    item_type: OutlineItemType = OutlineItemType.CHAPTER
    order: int = 1
    summary: Optional[str] = None
    purpose: Optional[str] = None
    beats: list[str] = Field(default_factory=list)
    notes: Optional[str] = None
    estimated_word_count: Optional[int] = None
    percentage_of_book: Optional[float] = None
    is_complete: bool = False
    linked_chapter_id: Optional[UUID] = None
    children: list["OutlineItem"] = Field(default_factory=list)

    def add_child(self, child: "OutlineItem") -> None:
        if child is None:
            raise ValueError("child is required")
        child.order = len(self.children) + 1
        self.children.append(child)

    def remove_child(self, child_id: UUID) -> bool:
        child = next((c for c in self.children if c.id == child_id), None)
        if child is None:
            return False
        self.children.remove(child)
        for index, remaining in enumerate(self.children, start=1):
            remaining.order = index
        return True

    def flatten_children(self) -> Iterator["OutlineItem"]:
        """Yield all descendants depth first, each level in order."""
        for child in sorted(self.children, key=lambda c: c.order):
            yield child
            yield from child.flatten_children()


class Outline(Entity):
    """The book's outline: top-level items with nested children."""

    title: str = "Book Outline"
    beat_sheet_type: Optional[str] = None
    synopsis: Optional[str] = None
    theme: Optional[str] = None
    central_conflict: Optional[str] = None
    items: list[OutlineItem] = Field(default_factory=list)

    def add_item(self, item: OutlineItem) -> None:
        if item is None:
            raise ValueError("item is required")
        item.order = len(self.items) + 1
        self.items.append(item)
        self.mark_modified()

    def remove_item(self, item_id: UUID) -> bool:
        item = next((i for i in self.items if i.id == item_id), None)
        if item is None:
            return False
        self.items.remove(item)
        for index, remaining in enumerate(self.items, start=1):
            remaining.order = index
        self.mark_modified()
        return True

    def flatten(self) -> list[OutlineItem]:
        """All items depth first, each level sorted by order."""
        flattened: list[OutlineItem] = []
        for item in sorted(self.items, key=lambda i: i.order):
            flattened.append(item)
            flattened.extend(item.flatten_children())
        return flattened
