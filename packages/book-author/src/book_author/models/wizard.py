"""Guided creation wizard session and the artifacts it produces."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from llm_core.config import BaseConfig
from pydantic import Field

from .base import Entity

MIN_SEED_PROMPT_LENGTH = 50


class WizardStep(str, Enum):
    """Wizard steps, declared in the order the user walks through them."""

    PROMPT_ENTRY = "prompt_entry"
    ANALYSIS = "analysis"
    CLARIFICATION = "clarification"
    BLUEPRINT = "blueprint"
    GENERATION = "generation"

    @property
    def position(self) -> int:
        return list(WizardStep).index(self)

    @property
    def next(self) -> "WizardStep":
        """The following step; the last step returns itself."""
        steps = list(WizardStep)
        return steps[min(self.position + 1, len(steps) - 1)]

    @property
    def previous(self) -> "WizardStep":
        """The preceding step; the first step returns itself."""
        steps = list(WizardStep)
        return steps[max(self.position - 1, 0)]


class WizardStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class ClarificationPriority(str, Enum):
    REQUIRED = "required"
    IMPORTANT = "important"
    OPTIONAL = "optional"


class ClarificationQuestion(BaseConfig):
    """A question the analysis wants answered before planning the book."""

    id: UUID = Field(default_factory=uuid4)
    question: str
    rationale: str = ""
    category: str = "general"
    priority: ClarificationPriority = ClarificationPriority.IMPORTANT
    suggested_options: list[str] = Field(default_factory=list)
    default_answer: Optional[str] = None


class PromptAnalysis(BaseConfig):
    """What the model understood from the seed prompt."""

    genre: str = ""
    subgenre: Optional[str] = None
    tone: str = ""
    target_audience: str = ""
    themes: list[str] = Field(default_factory=list)
    setting: str = ""
    premise: str = ""
    estimated_word_count: int = Field(80000, gt=0)
    clarifying_questions: list[ClarificationQuestion] = Field(default_factory=list)


class ChapterPlan(BaseConfig):
    """One planned chapter in a blueprint."""

    number: int = Field(ge=1)
    title: str
    summary: str = ""
    key_events: list[str] = Field(default_factory=list)
    target_word_count: int = Field(3000, gt=0)


class BookBlueprint(BaseConfig):
    """The approved plan the generation step writes from."""

    title: str
    logline: str = ""
    synopsis: str = ""
    genre: str = ""
    chapters: list[ChapterPlan] = Field(default_factory=list)

    @property
    def total_target_words(self) -> int:
        return sum(chapter.target_word_count for chapter in self.chapters)


class WizardSession(Entity):
    """Persisted progress through the guided creation wizard."""

    owner_id: Optional[str] = None
    current_step: WizardStep = WizardStep.PROMPT_ENTRY
    step_history: list[WizardStep] = Field(default_factory=list)
    status: WizardStatus = WizardStatus.IN_PROGRESS
    seed_prompt: Optional[str] = None
    analysis: Optional[PromptAnalysis] = None
    clarification_answers: dict[str, str] = Field(default_factory=dict)
    blueprint: Optional[BookBlueprint] = None
    blueprint_approved: bool = False
    project_id: Optional[UUID] = None
    generated_chapter_ids: list[UUID] = Field(default_factory=list)
    error_message: Optional[str] = None
    completed_at: Optional[datetime] = None

    @property
    def started_at(self) -> datetime:
        return self.created_at


class WizardProgressSummary(BaseConfig):
    """A read-only view of where a session stands."""

    current_step: WizardStep
    current_step_number: int
    total_steps: int
    progress_percentage: float
    completed_steps: list[WizardStep] = Field(default_factory=list)
    remaining_steps: list[WizardStep] = Field(default_factory=list)
    elapsed_seconds: float = 0.0
    has_analysis: bool = False
    has_blueprint: bool = False
    is_blueprint_approved: bool = False
    generated_chapters: int = 0
    status: WizardStatus = WizardStatus.IN_PROGRESS
