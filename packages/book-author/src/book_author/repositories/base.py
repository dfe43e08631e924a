"""JSON-document repository: one file per record under ``<root>/<collection>/``."""

import json
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar
from uuid import UUID

from loguru import logger

from book_author.models import Entity
from book_author.result import Result

E = TypeVar("E", bound=Entity)


class JsonRepository(Generic[E]):
    """CRUD over a directory of JSON documents.

    Each document is the entity's JSON dump plus any extra keys a subclass
    stores alongside it (for example a parent id). Missing records come back
    as failed results; I/O and parse problems as ``"Storage error: ..."``.
    """

    model: type[E]
    collection: str
    entity_name: str

    def __init__(self, root: Path):
        self.directory = Path(root) / self.collection

    def _path(self, entity_id: UUID) -> Path:
        return self.directory / f"{entity_id}.json"

    def _read_document(self, path: Path) -> dict[str, Any]:
        return json.loads(path.read_text(encoding="utf-8"))

    def _write_document(self, entity: E, extra: Optional[dict[str, Any]] = None) -> None:
        document = entity.model_dump(mode="json")
        if extra:
            document.update(extra)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(entity.id).write_text(json.dumps(document, indent=2), encoding="utf-8")

    def _load(self, document: dict[str, Any]) -> E:
        return self.model.model_validate(document)

    def _documents(self) -> list[dict[str, Any]]:
        if not self.directory.is_dir():
            return []
        return [self._read_document(path) for path in sorted(self.directory.glob("*.json"))]

    def _storage_error(self, action: str, error: Exception) -> Result:
        logger.exception(f"{self.entity_name} repository failed to {action}")
        return Result.fail(f"Storage error: {error}", error)

    def _query(self, predicate: Callable[[dict[str, Any]], bool]) -> Result[list[E]]:
        try:
            return Result.ok([self._load(doc) for doc in self._documents() if predicate(doc)])
        except Exception as e:
            return self._storage_error("query", e)

    def get_by_id(self, entity_id: UUID) -> Result[E]:
        path = self._path(entity_id)
        if not path.is_file():
            return Result.fail(f"{self.entity_name} not found")
        try:
            return Result.ok(self._load(self._read_document(path)))
        except Exception as e:
            return self._storage_error("read", e)

    def exists(self, entity_id: UUID) -> bool:
        return self._path(entity_id).is_file()

    def list_all(self) -> Result[list[E]]:
        return self._query(lambda doc: True)

    def create(self, entity: E) -> Result[E]:
        if entity is None:
            raise ValueError(f"{self.entity_name.lower()} is required")
        try:
            self._write_document(entity)
        except Exception as e:
            return self._storage_error("create", e)
        logger.debug(f"Created {self.entity_name} {entity.id}")
        return Result.ok(entity)

    def update(self, entity: E) -> Result[E]:
        if entity is None:
            raise ValueError(f"{self.entity_name.lower()} is required")
        if not self.exists(entity.id):
            return Result.fail(f"{self.entity_name} not found")
        try:
            entity.mark_modified()
            self._write_document(entity, self._extra_for_update(entity.id))
        except Exception as e:
            return self._storage_error("update", e)
        logger.debug(f"Updated {self.entity_name} {entity.id}")
        return Result.ok(entity)

    def delete(self, entity_id: UUID) -> Result[None]:
        path = self._path(entity_id)
        if not path.is_file():
            return Result.fail(f"{self.entity_name} not found")
        try:
            path.unlink()
        except OSError as e:
            return self._storage_error("delete", e)
        logger.debug(f"Deleted {self.entity_name} {entity_id}")
        return Result.ok()

    def _extra_for_update(self, entity_id: UUID) -> Optional[dict[str, Any]]:
        """Keys to carry over from the stored document on update."""
        return None
