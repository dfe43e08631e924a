"""
Export commands.

This module handles exporting project files to manuscript formats.
"""

from pathlib import Path
from typing import Optional

import click
from book_author.export import FORMAT_EXTENSIONS, ExportOptions, ExportService
from book_author.models import ExportFormat

from .common import open_project, unwrap_or_exit

FORMAT_CHOICES = [f.value for f in ExportFormat]


def infer_format(output: Path) -> ExportFormat:
    """Pick the export format from the output extension, defaulting to DOCX."""
    suffix = output.suffix.lower()
    for export_format, extension in FORMAT_EXTENSIONS.items():
        if extension == suffix:
            return export_format
    return ExportFormat.DOCX


@click.command("export")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--format", "-f", "format_name", type=click.Choice(FORMAT_CHOICES), default=None, help="Output format.")
@click.option("--no-toc", is_flag=True, help="Leave out the table of contents.")
@click.option("--no-front-matter", is_flag=True, help="Leave out the title page.")
@click.help_option("--help", "-h")
def export_command(path: str, output: str, format_name: Optional[str], no_toc: bool, no_front_matter: bool) -> None:
    """
    Export a project file.

    PATH: The .abpro project file
    OUTPUT: File to write; the format is taken from its extension unless --format is given

    Examples:
      python -m cli export orchard.abpro out/orchard.epub
      python -m cli export orchard.abpro manuscript.txt --format plain_text --no-toc
    """
    _, project = open_project(path)
    output_path = Path(output).resolve()
    export_format = ExportFormat(format_name) if format_name else infer_format(output_path)

    options = ExportOptions(
        format=export_format,
        output_path=str(output_path),
        include_table_of_contents=not no_toc,
        include_front_matter=not no_front_matter,
    )
    written = unwrap_or_exit(ExportService().export(project, options))
    click.echo(f"Exported {export_format.value} to {written}")


@click.command("formats")
@click.help_option("--help", "-h")
def formats_command() -> None:
    """List the supported export formats."""
    for info in ExportService().available_formats():
        marker = "" if info.is_available else " (unavailable)"
        click.echo(f"{info.format.value:<12} {info.extension:<6} {info.name}: {info.description}{marker}")
