"""Field validators for projects, chapters, cast, places and settings.

Validators never raise; they collect every problem into a
``ValidationResult`` so callers can show all messages at once.
"""

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Optional

from book_author.models import BookMetadata, Chapter, Character, Location, OutlineItem, Project

if TYPE_CHECKING:
    from book_author.export.options import ExportOptions

MAX_PROJECT_NAME_LENGTH = 200
MAX_BOOK_TITLE_LENGTH = 300
MAX_TARGET_WORD_COUNT = 1_000_000
MAX_CHAPTER_TITLE_LENGTH = 200
MAX_CHARACTER_NAME_LENGTH = 100
MAX_CHARACTER_AGE = 10_000
MAX_LOCATION_NAME_LENGTH = 200
MAX_OUTLINE_TITLE_LENGTH = 300
MIN_FONT_SIZE, MAX_FONT_SIZE = 6, 72
MIN_LINE_SPACING, MAX_LINE_SPACING = 0.5, 3.0
MIN_API_KEY_LENGTH = 10


@dataclass(frozen=True)
class ValidationError:
    property_name: str
    message: str
    error_code: Optional[str] = None
    attempted_value: Any = None

    def __str__(self) -> str:
        return f"{self.property_name}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[ValidationError, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def failure(cls, *errors: ValidationError) -> "ValidationResult":
        return cls(tuple(errors))

    @classmethod
    def combine(cls, results: Iterable["ValidationResult"]) -> "ValidationResult":
        return cls(tuple(error for result in results for error in result.errors))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def is_invalid(self) -> bool:
        return bool(self.errors)

    @property
    def first_error_message(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None

    def all_error_messages(self, separator: str = "\n") -> str:
        return separator.join(error.message for error in self.errors)

    def errors_for(self, property_name: str) -> list[ValidationError]:
        return [error for error in self.errors if error.property_name == property_name]


class _Collector:
    def __init__(self):
        self.errors: list[ValidationError] = []

    def add(self, property_name: str, message: str, value: Any = None, code: Optional[str] = None) -> None:
        self.errors.append(ValidationError(property_name, message, code, value))

    def required_text(self, property_name: str, value: Optional[str], label: str, max_length: int, limit_text: str) -> None:
        if not value or not value.strip():
            self.add(property_name, f"{label} is required", value, "required")
        elif len(value) > max_length:
            self.add(property_name, f"{label} cannot exceed {limit_text} characters", value, "max_length")

    def result(self) -> ValidationResult:
        return ValidationResult(tuple(self.errors))


def validate_book_metadata(metadata: BookMetadata) -> ValidationResult:
    check = _Collector()
    check.required_text("Title", metadata.title, "Book title", MAX_BOOK_TITLE_LENGTH, "300")
    return check.result()


def validate_project(project: Project) -> ValidationResult:
    check = _Collector()
    check.required_text("Name", project.name, "Project name", MAX_PROJECT_NAME_LENGTH, "200")
    if project.target_word_count < 0:
        check.add("TargetWordCount", "Target word count cannot be negative", project.target_word_count, "range")
    elif project.target_word_count > MAX_TARGET_WORD_COUNT:
        check.add("TargetWordCount", "Target word count cannot exceed 1,000,000", project.target_word_count, "range")
    return ValidationResult.combine([check.result(), validate_book_metadata(project.metadata)])


def validate_chapter(chapter: Chapter) -> ValidationResult:
    check = _Collector()
    check.required_text("Title", chapter.title, "Chapter title", MAX_CHAPTER_TITLE_LENGTH, "200")
    if chapter.order < 0:
        check.add("Order", "Chapter order cannot be negative", chapter.order, "range")
    if chapter.target_word_count < 0:
        check.add("TargetWordCount", "Target word count cannot be negative", chapter.target_word_count, "range")
    return check.result()


def validate_character(character: Character) -> ValidationResult:
    check = _Collector()
    check.required_text("Name", character.name, "Character name", MAX_CHARACTER_NAME_LENGTH, "100")
    if character.age is not None and not 0 <= character.age <= MAX_CHARACTER_AGE:
        check.add("Age", "Character age must be between 0 and 10,000", character.age, "range")
    return check.result()


def validate_location(location: Location) -> ValidationResult:
    check = _Collector()
    check.required_text("Name", location.name, "Location name", MAX_LOCATION_NAME_LENGTH, "200")
    return check.result()


def validate_outline_item(item: OutlineItem) -> ValidationResult:
    check = _Collector()
    check.required_text("Title", item.title, "Outline item title", MAX_OUTLINE_TITLE_LENGTH, "300")
    if item.order < 0:
        check.add("Order", "Order cannot be negative", item.order, "range")
    return check.result()


def validate_export_options(options: "ExportOptions") -> ValidationResult:
    check = _Collector()
    if not options.output_path or not options.output_path.strip():
        check.add("OutputPath", "Output path is required", options.output_path, "required")
    elif not os.path.dirname(options.output_path):
        check.add("OutputPath", "Invalid output path", options.output_path, "invalid_path")
    if not MIN_FONT_SIZE <= options.font_size <= MAX_FONT_SIZE:
        check.add("FontSize", "Font size must be between 6 and 72", options.font_size, "range")
    if not MIN_LINE_SPACING <= options.line_spacing <= MAX_LINE_SPACING:
        check.add("LineSpacing", "Line spacing must be between 0.5 and 3.0", options.line_spacing, "range")
    return check.result()


_PROVIDER_LABELS = {"claude": "Anthropic", "anthropic": "Anthropic", "openai": "OpenAI", "gemini": "Gemini"}


def validate_api_key(provider: str, api_key: Optional[str]) -> ValidationResult:
    """Check an API key's presence, length and the vendor's key prefix."""
    label = _PROVIDER_LABELS.get(provider.lower(), provider)
    check = _Collector()
    if not api_key or not api_key.strip():
        check.add("ApiKey", f"{label} API key is required", None, "required")
        return check.result()
    if len(api_key) < MIN_API_KEY_LENGTH:
        check.add("ApiKey", f"{label} API key appears to be too short", None, "too_short")
    if label == "Anthropic" and not api_key.startswith("sk-ant-"):
        check.add("ApiKey", "Anthropic API keys should start with 'sk-ant-'", None, "format")
    elif label == "OpenAI" and not api_key.startswith("sk-"):
        check.add("ApiKey", "OpenAI API keys should start with 'sk-'", None, "format")
    return check.result()
