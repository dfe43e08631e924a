"""
Main CLI entry point for Book Author.

This module provides a unified command-line interface with subcommands for
working with .abpro project files.

Usage:
    python -m cli <command> [args...]
    python -m cli --help

Available commands:
    new          Create a new project file
    info         Show project statistics
    add-chapter  Append a chapter to a project
    export       Export a project to DOCX, PDF, EPUB, Markdown, HTML or text
    formats      List export formats
    tokens       Estimate tokens and cost for a text file
    royalties    Estimate KDP royalties for a list price

Examples:
    python -m cli new "The Glass Orchard" --output orchard.abpro
    python -m cli export orchard.abpro orchard.docx
"""

import sys

import click
from book_author import AppSettings, setup_logging
from llm_core import settings

from .export import export_command, formats_command
from .project import add_chapter_command, info_command, new_command
from .publishing import royalties_command, tokens_command


@click.group()
@click.help_option("--help", "-h")
def cli():
    """Book Author - create, inspect and export book projects."""
    app_settings = AppSettings()
    level = "DEBUG" if settings.debug else app_settings.log_level
    # stdout carries command output, so records only go to the log file
    setup_logging(level=level, log_dir=app_settings.data_dir / "logs", console=False)


# Add the subcommands
cli.add_command(new_command)
cli.add_command(info_command)
cli.add_command(add_chapter_command)
cli.add_command(export_command)
cli.add_command(formats_command)
cli.add_command(tokens_command)
cli.add_command(royalties_command)


def main() -> None:
    """
    Main function to handle CLI execution with error handling.
    """
    try:
        cli()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)
