"""Enumerations shared across the domain model."""

from enum import Enum


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    OUTLINING = "outlining"
    WRITING = "writing"
    EDITING = "editing"
    COMPLETE = "complete"
    PUBLISHED = "published"


class ChapterStatus(str, Enum):
    NOT_STARTED = "not_started"
    OUTLINED = "outlined"
    DRAFTING = "drafting"
    FIRST_DRAFT = "first_draft"
    REVISING = "revising"
    COMPLETE = "complete"


class CharacterRole(str, Enum):
    PROTAGONIST = "protagonist"
    ANTAGONIST = "antagonist"
    SUPPORTING = "supporting"
    MINOR = "minor"
    MENTOR = "mentor"
    LOVE_INTEREST = "love_interest"
    SIDEKICK = "sidekick"
    NARRATOR = "narrator"


class OutlineItemType(str, Enum):
    ACT = "act"
    PART = "part"
    CHAPTER = "chapter"
    SCENE = "scene"
    BEAT = "beat"
    NOTE = "note"


class LocationType(str, Enum):
    CITY = "city"
    BUILDING = "building"
    NATURAL = "natural"
    ROOM = "room"
    NEIGHBORHOOD = "neighborhood"
    REGION = "region"
    WORLD = "world"
    VEHICLE = "vehicle"
    OTHER = "other"


class ResearchCategory(str, Enum):
    GENERAL = "general"
    HISTORICAL = "historical"
    SCIENTIFIC = "scientific"
    CULTURAL = "cultural"
    GEOGRAPHIC = "geographic"
    CHARACTER = "character"
    PLOT = "plot"
    LANGUAGE = "language"
    VISUAL = "visual"
    OTHER = "other"


class BookCategory(str, Enum):
    FICTION = "fiction"
    NON_FICTION = "non_fiction"
    SPECIAL = "special"


class PointOfView(str, Enum):
    FIRST_PERSON = "first_person"
    SECOND_PERSON = "second_person"
    THIRD_PERSON_LIMITED = "third_person_limited"
    THIRD_PERSON_OMNISCIENT = "third_person_omniscient"


class Tense(str, Enum):
    PAST = "past"
    PRESENT = "present"


class GenerationMode(str, Enum):
    QUICK = "quick"
    STANDARD = "standard"
    PREMIUM = "premium"
    CUSTOM = "custom"


class ExportFormat(str, Enum):
    """Output formats supported by the exporters."""

    DOCX = "docx"
    PDF = "pdf"
    EPUB = "epub"
    MARKDOWN = "markdown"
    PLAIN_TEXT = "plain_text"
    HTML = "html"


class AIProviderType(str, Enum):
    CLAUDE = "claude"
    OPENAI = "openai"
    GEMINI = "gemini"
