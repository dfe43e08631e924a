#!/usr/bin/env python3
"""
Tests for the command-line interface.
"""

import os
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from book_author.models import ExportFormat
from cli import cli
from cli.export import infer_format


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project_file(runner, temp_dir):
    """A saved project with one chapter."""
    path = temp_dir / "orchard.abpro"
    content = temp_dir / "frost.txt"
    content.write_text("The orchard froze overnight.\n\nMara walked the rows at dawn.", encoding="utf-8")
    runner.invoke(cli, ["new", "The Glass Orchard", "-o", str(path), "--author", "Ada Finch"])
    runner.invoke(cli, ["add-chapter", str(path), "Frost", "--content-file", str(content)])
    return path


class TestProjectCommands:
    """Tests for new, add-chapter and info."""

    def test_new(self, runner, temp_dir):
        path = temp_dir / "book"
        result = runner.invoke(cli, ["new", "My Book", "--output", str(path), "--genre", "Fantasy"])
        assert result.exit_code == 0
        assert "Created project 'My Book'" in result.output
        assert (temp_dir / "book.abpro").exists()
        with zipfile.ZipFile(temp_dir / "book.abpro") as archive:
            assert "project.json" in archive.namelist()

    def test_new_requires_output(self, runner):
        result = runner.invoke(cli, ["new", "My Book"])
        assert result.exit_code == 2

    def test_new_rejects_blank_name(self, runner, temp_dir):
        result = runner.invoke(cli, ["new", "  ", "-o", str(temp_dir / "blank.abpro")])
        assert result.exit_code == 1
        assert "Error: Project name is required" in result.output

    def test_add_chapter(self, runner, project_file):
        result = runner.invoke(cli, ["add-chapter", str(project_file), "Ledgers"])
        assert result.exit_code == 0
        assert "Added chapter 2: Ledgers (0 words)" in result.output

    def test_info(self, runner, project_file):
        result = runner.invoke(cli, ["info", str(project_file)])
        assert result.exit_code == 0
        assert "Project: The Glass Orchard" in result.output
        assert "Author: Ada Finch" in result.output
        assert "Chapters: 1 (0 complete)" in result.output
        assert "1. Frost [first_draft] 10 words" in result.output

    def test_info_missing_file(self, runner, temp_dir):
        result = runner.invoke(cli, ["info", str(temp_dir / "missing.abpro")])
        assert result.exit_code == 2

    def test_info_wrong_extension(self, runner, temp_dir):
        notes = temp_dir / "notes.txt"
        notes.write_text("not a project")
        result = runner.invoke(cli, ["info", str(notes)])
        assert result.exit_code == 1
        assert "Error: Invalid project file format. Expected .abpro" in result.output


class TestExportCommands:
    """Tests for export and formats."""

    def test_export_markdown(self, runner, project_file, temp_dir):
        output = temp_dir / "out" / "orchard.md"
        result = runner.invoke(cli, ["export", str(project_file), str(output)])
        assert result.exit_code == 0
        assert "Exported markdown to" in result.output
        text = output.read_text(encoding="utf-8")
        assert "## Chapter 1: Frost" in text
        assert "Mara walked the rows at dawn." in text

    def test_export_flags(self, runner, project_file, temp_dir):
        output = temp_dir / "orchard.txt"
        result = runner.invoke(cli, ["export", str(project_file), str(output), "--no-toc", "--no-front-matter"])
        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").startswith("Chapter 1: Frost")

    def test_export_docx(self, runner, project_file, temp_dir):
        output = temp_dir / "orchard.docx"
        result = runner.invoke(cli, ["export", str(project_file), str(output), "--format", "docx"])
        assert result.exit_code == 0
        assert output.exists()

    def test_export_extension_mismatch(self, runner, project_file, temp_dir):
        """Test an explicit format must match the output extension."""
        output = temp_dir / "orchard.txt"
        result = runner.invoke(cli, ["export", str(project_file), str(output), "--format", "html"])
        assert result.exit_code == 1
        assert "Error: Output file should have .html extension for html format" in result.output

    def test_export_without_chapters(self, runner, temp_dir):
        path = temp_dir / "empty.abpro"
        runner.invoke(cli, ["new", "Empty", "-o", str(path)])
        result = runner.invoke(cli, ["export", str(path), str(temp_dir / "empty.html")])
        assert result.exit_code == 1
        assert "Error: No chapters to export" in result.output

    def test_formats(self, runner):
        result = runner.invoke(cli, ["formats"])
        assert result.exit_code == 0
        assert "Microsoft Word" in result.output
        assert "plain_text" in result.output
        assert "(unavailable)" not in result.output

    def test_infer_format(self):
        assert infer_format(Path("book.EPUB")) == ExportFormat.EPUB
        assert infer_format(Path("book.md")) == ExportFormat.MARKDOWN
        assert infer_format(Path("book.unknown")) == ExportFormat.DOCX


class TestPublishingCommands:
    """Tests for tokens and royalties."""

    def test_tokens(self, runner, temp_dir):
        text_file = temp_dir / "chapter.txt"
        text_file.write_text("a" * 10, encoding="utf-8")
        result = runner.invoke(cli, ["tokens", str(text_file), "--model", "gpt-4o"])
        assert result.exit_code == 0
        assert "Estimated tokens: 3" in result.output
        assert "Context window: 128,000" in result.output
        assert "Fits in context: yes" in result.output

    def test_ebook_royalties(self, runner):
        result = runner.invoke(cli, ["royalties", "4.99"])
        assert result.exit_code == 0
        assert "Royalty rate: 70%" in result.output
        assert "Estimated royalty: 3.34 USD" in result.output

    def test_paperback_royalties(self, runner):
        result = runner.invoke(
            cli, ["royalties", "14.99", "--format", "paperback", "--pages", "300", "--marketplace", "uk"]
        )
        assert result.exit_code == 0
        assert "Printing cost: 4.45" in result.output
        assert "Minimum list price: 7.42" in result.output
        assert "Estimated royalty: 4.54 GBP" in result.output

    def test_paperback_needs_pages(self, runner):
        result = runner.invoke(cli, ["royalties", "14.99", "--format", "paperback"])
        assert result.exit_code == 1
        assert "Error: --pages is required for paperbacks" in result.output

    def test_invalid_price(self, runner):
        result = runner.invoke(cli, ["royalties", "cheap"])
        assert result.exit_code == 1
        assert "Error: Invalid price: cheap" in result.output

    @pytest.mark.parametrize("price", ["nan", "Infinity", "sNaN"])
    def test_non_finite_price(self, runner, price):
        result = runner.invoke(cli, ["royalties", price])
        assert result.exit_code == 1
        assert f"Error: Invalid price: {price}" in result.output


class TestLogging:
    """Tests that service logs go to the data directory instead of the terminal."""

    def test_output_has_no_log_records(self, runner, temp_dir):
        result = runner.invoke(cli, ["new", "My Book", "-o", str(temp_dir / "book.abpro")])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 1
        assert lines[0].startswith("Created project 'My Book' at ")

        log_text = (temp_dir / "data" / "logs" / "book_author.log").read_text(encoding="utf-8")
        assert "Creating new project: My Book" in log_text

    def test_log_level_setting(self, runner, temp_dir):
        with patch.dict(os.environ, {"BOOK_AUTHOR_LOG_LEVEL": "warning"}):
            result = runner.invoke(cli, ["new", "My Book", "-o", str(temp_dir / "book.abpro")])
        assert result.exit_code == 0
        log_text = (temp_dir / "data" / "logs" / "book_author.log").read_text(encoding="utf-8")
        assert "Creating new project" not in log_text
