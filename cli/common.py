"""
Shared utilities for CLI commands.

This module provides common functionality used across different CLI commands,
such as opening project files and reporting failures.
"""

import sys
from pathlib import Path
from typing import NoReturn, TypeVar

import click
from book_author import ProjectService, Result
from book_author.models import Project

T = TypeVar("T")


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def unwrap_or_exit(result: Result[T]) -> T:
    """Return the value of a successful result or exit with its error."""
    if result.is_failure:
        fail(result.error or "Unknown error")
    return result.value


def open_project(path: str) -> tuple[ProjectService, Project]:
    """Load a project file, exiting with an error when it cannot be read."""
    service = ProjectService()
    project = unwrap_or_exit(service.load(Path(path)))
    return service, project
