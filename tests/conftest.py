#!/usr/bin/env python3
"""
Pytest configuration and fixtures for the CLI test suite.
"""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from loguru import logger


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture(autouse=True)
def isolated_data_dir(temp_dir):
    """Keep recent-project lists and autosaves out of the real home directory."""
    with patch.dict(
        os.environ,
        {
            "BOOK_AUTHOR_DATA_DIR": str(temp_dir / "data"),
            "ANTHROPIC_API_KEY": "test-anthropic-key",
        },
    ):
        yield
    # Drop the file sink the CLI opens inside temp_dir
    logger.remove()
