"""Domain models for book projects."""

from .base import Entity, count_words, utc_now
from .chapter import Chapter, Scene
from .character import Character, CharacterRelationship
from .enums import (
    AIProviderType,
    BookCategory,
    ChapterStatus,
    CharacterRole,
    ExportFormat,
    GenerationMode,
    LocationType,
    OutlineItemType,
    PointOfView,
    ProjectStatus,
    ResearchCategory,
    Tense,
)
from .kdp import (
    BookDescriptionSuggestion,
    BookFormatType,
    CoverFinish,
    IssueSeverity,
    KdpCategory,
    KdpMarketplace,
    KdpMetadata,
    KeywordSuggestion,
    PaperType,
    PricingInfo,
    PrintSpecifications,
    SeriesInfo,
    SeriesStatus,
    TrimSize,
    ValidationIssue,
)
from .location import Location, ResearchNote
from .outline import Outline, OutlineItem
from .project import BookMetadata, GenerationSettings, Project
from .statistics import ProjectStatistics
from .wizard import (
    MIN_SEED_PROMPT_LENGTH,
    BookBlueprint,
    ChapterPlan,
    ClarificationPriority,
    ClarificationQuestion,
    PromptAnalysis,
    WizardProgressSummary,
    WizardSession,
    WizardStatus,
    WizardStep,
)

__all__ = [
    "Entity",
    "count_words",
    "utc_now",
    # Enums
    "AIProviderType",
    "BookCategory",
    "ChapterStatus",
    "CharacterRole",
    "ExportFormat",
    "GenerationMode",
    "LocationType",
    "OutlineItemType",
    "PointOfView",
    "ProjectStatus",
    "ResearchCategory",
    "Tense",
    # Project
    "BookMetadata",
    "Chapter",
    "Character",
    "CharacterRelationship",
    "GenerationSettings",
    "Location",
    "Outline",
    "OutlineItem",
    "Project",
    "ProjectStatistics",
    "ResearchNote",
    "Scene",
    # Wizard
    "MIN_SEED_PROMPT_LENGTH",
    "BookBlueprint",
    "ChapterPlan",
    "ClarificationPriority",
    "ClarificationQuestion",
    "PromptAnalysis",
    "WizardProgressSummary",
    "WizardSession",
    "WizardStatus",
    "WizardStep",
    # KDP
    "BookDescriptionSuggestion",
    "BookFormatType",
    "CoverFinish",
    "IssueSeverity",
    "KdpCategory",
    "KdpMarketplace",
    "KdpMetadata",
    "KeywordSuggestion",
    "PaperType",
    "PricingInfo",
    "PrintSpecifications",
    "SeriesInfo",
    "SeriesStatus",
    "TrimSize",
    "ValidationIssue",
]
