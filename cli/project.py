"""
Project commands.

This module handles creating project files, adding chapters and printing
project statistics.
"""

from pathlib import Path
from typing import Optional

import click
from book_author import ProjectService
from book_author.models import Chapter, ChapterStatus, ProjectStatistics
from book_author.validation import validate_chapter, validate_project

from .common import fail, open_project, unwrap_or_exit


@click.command("new")
@click.argument("name")
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="Where to save the .abpro file.")
@click.option("--author", default="", help="Author name for the book metadata.")
@click.option("--genre", default="", help="Genre for the book metadata.")
@click.help_option("--help", "-h")
def new_command(name: str, output: str, author: str, genre: str) -> None:
    """
    Create a new project file.

    NAME: Project name, also used as the book title

    Examples:
      python -m cli new "The Glass Orchard" -o orchard.abpro --author "A. Writer"
    """
    service = ProjectService()
    project = unwrap_or_exit(service.create(name))
    project.metadata.author = author
    project.metadata.genre = genre

    validation = validate_project(project)
    if validation.is_invalid:
        fail(validation.all_error_messages("; "))

    path = unwrap_or_exit(service.save(project, Path(output).resolve()))
    click.echo(f"Created project '{project.name}' at {path}")


@click.command("info")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.help_option("--help", "-h")
def info_command(path: str) -> None:
    """
    Show statistics for a project file.

    PATH: The .abpro project file
    """
    _, project = open_project(path)
    stats = ProjectStatistics.from_project(project)

    click.echo(f"Project: {project.name}")
    if project.metadata.author:
        click.echo(f"Author: {project.metadata.author}")
    click.echo(f"Status: {project.status.value}")
    click.echo(f"Chapters: {stats.total_chapters} ({stats.completed_chapters} complete)")
    click.echo(f"Words: {stats.total_word_count:,} / {stats.target_word_count:,} ({stats.completion_percentage:.1f}%)")
    click.echo(f"Average words per chapter: {stats.average_words_per_chapter:.0f}")
    click.echo(f"Reading time: {stats.estimated_reading_time_minutes} min")
    click.echo(f"Characters: {stats.character_count}  Locations: {stats.location_count}")
    for chapter in sorted(project.chapters, key=lambda c: c.order):
        click.echo(f"  {chapter.order:>3}. {chapter.title} [{chapter.status.value}] {chapter.word_count:,} words")


@click.command("add-chapter")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.argument("title")
@click.option(
    "--content-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Text file holding the chapter content.",
)
@click.help_option("--help", "-h")
def add_chapter_command(path: str, title: str, content_file: Optional[str]) -> None:
    """
    Append a chapter to a project file.

    PATH: The .abpro project file
    TITLE: Chapter title
    """
    service, project = open_project(path)
    content = Path(content_file).read_text(encoding="utf-8") if content_file else ""
    chapter = Chapter(title=title, content=content)
    if content.strip():
        chapter.status = ChapterStatus.FIRST_DRAFT

    validation = validate_chapter(chapter)
    if validation.is_invalid:
        fail(validation.all_error_messages("; "))

    project.add_chapter(chapter)
    unwrap_or_exit(service.save(project))
    click.echo(f"Added chapter {chapter.order}: {chapter.title} ({chapter.word_count:,} words)")
