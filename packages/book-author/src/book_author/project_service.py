"""Open, save, autosave and export ``.abpro`` project files.

An ``.abpro`` file is a ZIP archive holding ``project.json`` (the project
without chapter bodies) and one ``chapters/<chapter-id>.json`` per chapter
with its ``content`` and ``scenes``.
"""

import json
import os
import tempfile
import threading
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from llm_core.config import BaseConfig
from loguru import logger

from book_author.config import AppSettings
from book_author.export import ExportOptions, ExportService
from book_author.models import BookMetadata, ExportFormat, Project, Scene, utc_now
from book_author.result import Result

PROJECT_EXTENSION = ".abpro"
METADATA_FILE_NAME = "project.json"
CHAPTERS_FOLDER = "chapters"

PathLike = Union[str, Path]


class ProjectSummary(BaseConfig):
    """A recent-projects entry."""

    file_path: str
    name: str
    title: Optional[str] = None
    last_modified: datetime
    word_count: int = 0
    chapter_count: int = 0


def write_project_archive(project: Project, path: Path) -> None:
    """Write ``project`` to ``path`` as an ``.abpro`` archive."""
    data = project.model_dump(mode="json")
    for chapter_data in data["chapters"]:
        chapter_data.pop("content", None)
        chapter_data.pop("scenes", None)

    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(METADATA_FILE_NAME, json.dumps(data, indent=2))
        for chapter in project.chapters:
            body = {
                "content": chapter.content,
                "scenes": [scene.model_dump(mode="json") for scene in chapter.scenes],
            }
            archive.writestr(f"{CHAPTERS_FOLDER}/{chapter.id}.json", json.dumps(body, indent=2))


def read_project_archive(path: Path) -> Project:
    """Read an ``.abpro`` archive back into a project.

    Raises:
        KeyError: If the archive has no ``project.json``.
        zipfile.BadZipFile: If the file is not a ZIP archive.
    """
    with zipfile.ZipFile(path, "r") as archive:
        project = Project.model_validate(json.loads(archive.read(METADATA_FILE_NAME)))
        names = set(archive.namelist())
        for chapter in project.chapters:
            entry = f"{CHAPTERS_FOLDER}/{chapter.id}.json"
            if entry not in names:
                continue
            body = json.loads(archive.read(entry))
            chapter.content = body.get("content") or ""
            chapter.scenes = [Scene.model_validate(scene) for scene in body.get("scenes") or []]
    return project


class ProjectService:
    """Tracks the open project and reads and writes its file."""

    def __init__(self, app_settings: Optional[AppSettings] = None, export_service: Optional[ExportService] = None):
        self.settings = app_settings or AppSettings()
        self.export_service = export_service or ExportService()
        self._current_project: Optional[Project] = None
        self._has_unsaved_changes = False
        self._lock = threading.Lock()

    @property
    def current_project(self) -> Optional[Project]:
        return self._current_project

    @property
    def has_unsaved_changes(self) -> bool:
        return self._has_unsaved_changes

    def create(self, name: str, template_name: Optional[str] = None) -> Result[Project]:
        """Create a new project and make it the current, unsaved project."""
        logger.info(f"Creating new project: {name} (template: {template_name})")
        try:
            project = Project(name=name, template_name=template_name, metadata=BookMetadata(title=name))
        except Exception as e:
            logger.exception(f"Failed to create project: {name}")
            return Result.fail(f"Failed to create project: {e}", e)

        self._current_project = project
        self._has_unsaved_changes = True
        logger.info(f"Project created: {project.id}")
        return Result.ok(project)

    def load(self, path: PathLike) -> Result[Project]:
        path = Path(path)
        logger.info(f"Opening project: {path}")
        if not path.is_file():
            return Result.fail(f"Project file not found: {path}")
        if path.suffix.lower() != PROJECT_EXTENSION:
            return Result.fail(f"Invalid project file format. Expected {PROJECT_EXTENSION}")

        try:
            project = read_project_archive(path)
        except Exception as e:
            logger.exception(f"Failed to open project: {path}")
            return Result.fail(f"Failed to open project: {e}", e)

        project.file_path = str(path)
        self._current_project = project
        self._has_unsaved_changes = False
        logger.info(f"Project opened: {project.id}")
        return Result.ok(project)

    def save(self, project: Project, path: Optional[PathLike] = None) -> Result[str]:
        """Save the project, appending ``.abpro`` when missing.

        The archive is written to a temporary file beside the target and then
        moved into place, so a failed save never leaves a truncated file.
        """
        if project is None:
            raise ValueError("project is required")

        target = path or project.file_path
        if not target:
            return Result.fail("No file path specified for saving")
        target_path = Path(target)
        if target_path.suffix.lower() != PROJECT_EXTENSION:
            target_path = target_path.with_name(target_path.name + PROJECT_EXTENSION)

        logger.info(f"Saving project to: {target_path}")
        tmp_name = None
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(dir=target_path.parent, suffix=".tmp", delete=False) as tmp:
                tmp_name = tmp.name
            write_project_archive(project, Path(tmp_name))
            os.replace(tmp_name, target_path)
            tmp_name = None
        except Exception as e:
            logger.exception("Failed to save project")
            return Result.fail(f"Failed to save project: {e}", e)
        finally:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)

        project.file_path = str(target_path)
        if self._current_project is not None and self._current_project.id == project.id:
            self._current_project.file_path = str(target_path)
            self._has_unsaved_changes = False

        self._record_recent(project, target_path)
        logger.info("Project saved successfully")
        return Result.ok(str(target_path))

    def close_project(self) -> Result[None]:
        if self._has_unsaved_changes and self._current_project is not None:
            logger.warning(f"Closing project '{self._current_project.name}' with unsaved changes")
        self._current_project = None
        self._has_unsaved_changes = False
        return Result.ok()

    def mark_modified(self) -> None:
        self._has_unsaved_changes = True
        if self._current_project is not None:
            self._current_project.mark_modified()

    def delete(self, path: PathLike) -> Result[None]:
        path = Path(path)
        if not path.is_file():
            return Result.fail("Project file not found")
        try:
            path.unlink()
        except OSError as e:
            logger.exception(f"Failed to delete project: {path}")
            return Result.fail(f"Failed to delete project: {e}", e)
        logger.info(f"Project deleted: {path}")
        return Result.ok()

    def get_recent_projects(self, count: int = 10) -> Result[list[ProjectSummary]]:
        """Recently saved projects whose files still exist, newest first."""
        try:
            entries = self._read_recent()
            summaries = []
            for entry in entries:
                file_path = Path(entry["file_path"])
                if not file_path.is_file():
                    continue
                summaries.append(
                    ProjectSummary(
                        file_path=str(file_path),
                        name=entry.get("name") or file_path.stem,
                        title=entry.get("title"),
                        last_modified=datetime.fromtimestamp(file_path.stat().st_mtime).astimezone(),
                        word_count=entry.get("word_count", 0),
                        chapter_count=entry.get("chapter_count", 0),
                    )
                )
                if len(summaries) >= count:
                    break
        except Exception as e:
            logger.exception("Failed to get recent projects")
            return Result.fail(f"Failed to get recent projects: {e}", e)
        return Result.ok(summaries)

    def autosave(self) -> Result[str]:
        """Write a timestamped copy of the current project to the autosave folder.

        Only the newest ``autosave_keep`` copies of each project are kept.
        The project's own file path and unsaved state are left untouched.
        """
        project = self._current_project
        if project is None:
            return Result.fail("No project is open")

        autosave_dir = self.settings.autosave_dir
        stamp = utc_now().strftime("%Y%m%d_%H%M%S_%f")
        target = autosave_dir / f"{project.id}_{stamp}{PROJECT_EXTENSION}"
        try:
            with self._lock:
                autosave_dir.mkdir(parents=True, exist_ok=True)
                write_project_archive(project, target)
                self._prune_autosaves(str(project.id))
        except Exception as e:
            logger.exception("Autosave failed")
            return Result.fail(f"Autosave failed: {e}", e)
        logger.debug(f"Autosaved project to {target}")
        return Result.ok(str(target))

    def get_autosave_files(self) -> Result[list[str]]:
        """Autosave files, newest first."""
        autosave_dir = self.settings.autosave_dir
        if not autosave_dir.is_dir():
            return Result.ok([])
        try:
            files = sorted(
                autosave_dir.glob(f"*{PROJECT_EXTENSION}"),
                key=lambda p: (p.stat().st_mtime_ns, p.name),
                reverse=True,
            )
        except OSError as e:
            logger.exception("Failed to get autosave files")
            return Result.fail(f"Failed to get autosave files: {e}", e)
        return Result.ok([str(f) for f in files])

    def recover_from_autosave(self, path: PathLike) -> Result[Project]:
        """Load an autosave as a new unsaved project that must be saved under a new name."""
        logger.info(f"Recovering project from autosave: {path}")
        result = self.load(path)
        if result.is_success:
            result.value.file_path = None
            self._has_unsaved_changes = True
        return result

    def export(
        self,
        project: Project,
        export_format: ExportFormat,
        output_path: PathLike,
        options: Optional[ExportOptions] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Result[str]:
        logger.info(f"Export requested: {export_format.value} to {output_path}")
        if options is None:
            options = ExportOptions(format=export_format, output_path=str(output_path))
        else:
            options = options.model_copy(update={"format": export_format, "output_path": str(output_path)})
        return self.export_service.export(project, options, cancel_event)

    def _prune_autosaves(self, project_id: str) -> None:
        copies = sorted(self.settings.autosave_dir.glob(f"{project_id}_*{PROJECT_EXTENSION}"), reverse=True)
        for stale in copies[self.settings.autosave_keep :]:
            stale.unlink(missing_ok=True)
            logger.debug(f"Removed old autosave {stale.name}")

    def _read_recent(self) -> list[dict]:
        recent_file = self.settings.recent_file
        if not recent_file.is_file():
            return []
        return json.loads(recent_file.read_text(encoding="utf-8"))

    def _record_recent(self, project: Project, path: Path) -> None:
        try:
            entries = [e for e in self._read_recent() if Path(e["file_path"]) != path]
            entries.insert(
                0,
                {
                    "file_path": str(path),
                    "name": project.name,
                    "title": project.metadata.title or None,
                    "word_count": project.total_word_count,
                    "chapter_count": len(project.chapters),
                },
            )
            recent_file = self.settings.recent_file
            recent_file.parent.mkdir(parents=True, exist_ok=True)
            recent_file.write_text(json.dumps(entries[: self.settings.recent_limit], indent=2), encoding="utf-8")
        except (OSError, ValueError, KeyError) as e:
            logger.warning(f"Could not update recent projects list: {e}")
