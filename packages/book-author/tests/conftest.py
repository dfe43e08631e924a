"""Pytest configuration for book-author tests."""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from book_author.config import AppSettings
from book_author.models import BookMetadata, Chapter, ChapterStatus, Character, Location, Project


@pytest.fixture(autouse=True)
def mock_api_keys():
    """Mock all API keys for tests."""
    with patch.dict(
        os.environ,
        {
            "OPENAI_API_KEY": "test-openai-key",
            "GEMINI_API_KEY": "test-gemini-key",
            "ANTHROPIC_API_KEY": "test-anthropic-key",
        },
    ):
        yield


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def app_settings(temp_dir):
    """Settings whose data directory lives in the temporary directory."""
    return AppSettings(data_dir=temp_dir / "data")


@pytest.fixture
def sample_project():
    """A small project with two written chapters and one outlined chapter."""
    project = Project(
        name="The Glass Orchard",
        description="A family secret buried under an orchard.",
        metadata=BookMetadata(title="The Glass Orchard", author="Ada Finch", genre="Literary Fiction"),
        target_word_count=1000,
    )
    project.add_chapter(
        Chapter(
            title="Frost",
            content="The orchard froze overnight.\n\nMara walked the rows at dawn.",
            status=ChapterStatus.FIRST_DRAFT,
        )
    )
    project.add_chapter(
        Chapter(
            title="Roots & Branches",
            content="<p>Her father kept <strong>ledgers</strong>.</p><p>***</p><p>Nobody read them.</p>",
            status=ChapterStatus.COMPLETE,
        )
    )
    project.add_chapter(Chapter(title="Harvest", status=ChapterStatus.OUTLINED))
    project.add_character(Character(name="Mara", age=34))
    project.add_location(Location(name="The Orchard"))
    return project
