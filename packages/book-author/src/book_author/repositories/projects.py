"""Project and chapter repositories."""

from typing import Any, Optional
from uuid import UUID

from book_author.models import Chapter, ChapterStatus, Project
from book_author.result import Result

from .base import JsonRepository


class ProjectRepository(JsonRepository[Project]):
    model = Project
    collection = "projects"
    entity_name = "Project"

    def get_by_owner(self, owner_id: str) -> Result[list[Project]]:
        result = self._query(lambda doc: doc.get("owner_id") == owner_id)
        return result.map(lambda projects: sorted(projects, key=lambda p: p.modified_at, reverse=True))

    def get_recent(self, owner_id: str, count: int = 10) -> Result[list[Project]]:
        return self.get_by_owner(owner_id).map(lambda projects: projects[:count])

    def get_total_word_count(self, project_id: UUID) -> Result[int]:
        return self.get_by_id(project_id).map(lambda project: project.total_word_count)


class ChapterRepository(JsonRepository[Chapter]):
    """Chapters stored individually, each tagged with its project id."""

    model = Chapter
    collection = "chapters"
    entity_name = "Chapter"

    def _load(self, document: dict[str, Any]) -> Chapter:
        document = {key: value for key, value in document.items() if key != "project_id"}
        return Chapter.model_validate(document)

    def _extra_for_update(self, entity_id: UUID) -> Optional[dict[str, Any]]:
        project_id = self._read_document(self._path(entity_id)).get("project_id")
        return {"project_id": project_id} if project_id else None

    def add_to_project(self, project_id: UUID, chapter: Chapter) -> Result[Chapter]:
        if chapter is None:
            raise ValueError("chapter is required")
        try:
            self._write_document(chapter, {"project_id": str(project_id)})
        except Exception as e:
            return self._storage_error("create", e)
        return Result.ok(chapter)

    def get_by_project(self, project_id: UUID) -> Result[list[Chapter]]:
        """Chapters of a project ordered by chapter number."""
        wanted = str(project_id)
        result = self._query(lambda doc: doc.get("project_id") == wanted)
        return result.map(lambda chapters: sorted(chapters, key=lambda c: c.order))

    def get_by_number(self, project_id: UUID, order: int) -> Result[Chapter]:
        chapters = self.get_by_project(project_id)
        if chapters.is_failure:
            return chapters
        match = next((c for c in chapters.value if c.order == order), None)
        if match is None:
            return Result.fail(f"Chapter {order} not found")
        return Result.ok(match)

    def get_pending(self, project_id: UUID) -> Result[list[Chapter]]:
        """Chapters not yet written: not started or only outlined."""
        pending = {ChapterStatus.NOT_STARTED, ChapterStatus.OUTLINED}
        return self.get_by_project(project_id).map(lambda chapters: [c for c in chapters if c.status in pending])
