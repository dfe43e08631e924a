"""Tests for the field validators."""

import pytest

from book_author.export import ExportOptions
from book_author.models import BookMetadata, Chapter, Character, Location, OutlineItem, Project
from book_author.validation import (
    ValidationError,
    ValidationResult,
    validate_api_key,
    validate_chapter,
    validate_character,
    validate_export_options,
    validate_location,
    validate_outline_item,
    validate_project,
)


class TestValidationResult:
    def test_success(self):
        result = ValidationResult.success()
        assert result.is_valid is True
        assert result.first_error_message is None
        assert result.all_error_messages() == ""

    def test_combine_keeps_every_error(self):
        """Test combining results concatenates their errors in order."""
        a = ValidationResult.failure(ValidationError("Name", "Name is required"))
        b = ValidationResult.failure(ValidationError("Age", "Too old"), ValidationError("Name", "Too long"))
        combined = ValidationResult.combine([a, ValidationResult.success(), b])
        assert combined.is_invalid is True
        assert combined.all_error_messages("; ") == "Name is required; Too old; Too long"
        assert [e.message for e in combined.errors_for("Name")] == ["Name is required", "Too long"]

    def test_error_str(self):
        assert str(ValidationError("Title", "Book title is required")) == "Title: Book title is required"


class TestProjectValidation:
    """Tests for project and metadata rules."""

    def test_valid_project(self):
        project = Project(name="Book", metadata=BookMetadata(title="Book"))
        assert validate_project(project).is_valid

    def test_name_and_title_required(self):
        result = validate_project(Project(name="  "))
        assert result.all_error_messages("|") == "Project name is required|Book title is required"

    def test_name_too_long(self):
        result = validate_project(Project(name="x" * 201, metadata=BookMetadata(title="T")))
        assert result.first_error_message == "Project name cannot exceed 200 characters"

    def test_title_too_long(self):
        result = validate_project(Project(name="Book", metadata=BookMetadata(title="t" * 301)))
        assert result.first_error_message == "Book title cannot exceed 300 characters"

    @pytest.mark.parametrize(
        "target, message",
        [
            (-1, "Target word count cannot be negative"),
            (1_000_001, "Target word count cannot exceed 1,000,000"),
        ],
    )
    def test_target_word_count_range(self, target, message):
        project = Project(name="Book", metadata=BookMetadata(title="Book"), target_word_count=target)
        result = validate_project(project)
        assert [e.message for e in result.errors_for("TargetWordCount")] == [message]


class TestEntityValidation:
    def test_chapter(self):
        result = validate_chapter(Chapter(title="", order=-1, target_word_count=-5))
        assert result.all_error_messages("|") == (
            "Chapter title is required|Chapter order cannot be negative|Target word count cannot be negative"
        )
        assert validate_chapter(Chapter(title="Fine")).is_valid

    def test_character_age(self):
        """Test character age must be within 0 to 10,000."""
        assert validate_character(Character(name="Old", age=10_000)).is_valid
        result = validate_character(Character(name="Older", age=10_001))
        assert result.first_error_message == "Character age must be between 0 and 10,000"
        assert validate_character(Character(name="x" * 101)).first_error_message == (
            "Character name cannot exceed 100 characters"
        )

    def test_location(self):
        assert validate_location(Location(name="")).first_error_message == "Location name is required"

    def test_outline_item(self):
        result = validate_outline_item(OutlineItem(title="", order=-1))
        assert result.all_error_messages("|") == "Outline item title is required|Order cannot be negative"


class TestExportOptionsValidation:
    def test_valid(self, temp_dir):
        assert validate_export_options(ExportOptions(output_path=str(temp_dir / "book.docx"))).is_valid

    def test_output_path_required(self):
        assert validate_export_options(ExportOptions()).first_error_message == "Output path is required"

    def test_output_path_needs_directory(self):
        result = validate_export_options(ExportOptions(output_path="book.docx"))
        assert result.first_error_message == "Invalid output path"

    def test_font_and_spacing_ranges(self, temp_dir):
        options = ExportOptions(output_path=str(temp_dir / "a.docx"), font_size=5, line_spacing=3.5)
        result = validate_export_options(options)
        assert result.all_error_messages("|") == (
            "Font size must be between 6 and 72|Line spacing must be between 0.5 and 3.0"
        )


class TestApiKeyValidation:
    """Tests for API key checks."""

    def test_missing(self):
        assert validate_api_key("claude", "").first_error_message == "Anthropic API key is required"

    def test_too_short(self):
        result = validate_api_key("gemini", "abc")
        assert result.first_error_message == "Gemini API key appears to be too short"

    def test_prefixes(self):
        assert validate_api_key("anthropic", "sk-ant-0123456789").is_valid
        assert validate_api_key("claude", "0123456789abcdef").first_error_message == (
            "Anthropic API keys should start with 'sk-ant-'"
        )
        assert validate_api_key("openai", "key-0123456789").first_error_message == (
            "OpenAI API keys should start with 'sk-'"
        )
        assert validate_api_key("openai", "sk-0123456789").is_valid
