"""Drives a wizard session from seed prompt to generated chapters."""

import threading
from typing import Callable, Optional
from uuid import UUID

from llm_core import (
    GenerationCancelledError,
    GenerationRequest,
    LlmModelError,
    ProviderClient,
    ResponseTruncatedError,
    parse_json_response,
)
from loguru import logger
from pydantic import ValidationError

from book_author.models import (
    MIN_SEED_PROMPT_LENGTH,
    BookBlueprint,
    BookMetadata,
    Chapter,
    ChapterStatus,
    ClarificationPriority,
    Project,
    ProjectStatus,
    PromptAnalysis,
    WizardProgressSummary,
    WizardSession,
    WizardStatus,
    WizardStep,
    utc_now,
)
from book_author.repositories import ProjectRepository, WizardSessionRepository
from book_author.result import Result

from .prompts import build_analysis_prompt, build_blueprint_prompt, build_chapter_prompt

ProgressCallback = Callable[[int, int, str], None]

ANALYSIS_MAX_TOKENS = 4000
BLUEPRINT_MAX_TOKENS = 8000
CHAPTER_MAX_TOKENS = 8000


class WizardService:
    """Steps a ``WizardSession`` through prompt entry, analysis, clarification,
    blueprint and generation, persisting it after every change.

    AI calls go through a ``ProviderClient``; responses for analysis and
    blueprint are parsed as JSON. Every public operation returns a ``Result``.
    """

    def __init__(
        self,
        repository: WizardSessionRepository,
        provider: ProviderClient,
        model: Optional[str] = None,
        project_repository: Optional[ProjectRepository] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.repository = repository
        self.provider = provider
        self.model = model
        self.project_repository = project_repository
        self.progress_callback = progress_callback

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def start_session(self, owner_id: Optional[str] = None) -> Result[WizardSession]:
        session = WizardSession(
            owner_id=owner_id,
            current_step=WizardStep.PROMPT_ENTRY,
            step_history=[WizardStep.PROMPT_ENTRY],
        )
        logger.info(f"Starting wizard session {session.id}")
        return self.repository.create(session)

    def load_session(self, session_id: UUID) -> Result[WizardSession]:
        result = self.repository.get_by_id(session_id)
        if result.is_failure and result.exception is None:
            return Result.fail(f"Session {session_id} not found")
        return result

    def save_session(self, session: Optional[WizardSession]) -> Result[WizardSession]:
        if session is None:
            return Result.fail("Session cannot be null")
        if self.repository.exists(session.id):
            return self.repository.update(session)
        return self.repository.create(session)

    def complete(self, session: WizardSession) -> Result[WizardSession]:
        session.status = WizardStatus.COMPLETED
        session.completed_at = utc_now()
        logger.info(f"Wizard session {session.id} completed")
        return self.save_session(session)

    def cancel(self, session: WizardSession) -> Result[WizardSession]:
        session.status = WizardStatus.CANCELLED
        logger.info(f"Wizard session {session.id} cancelled")
        return self.save_session(session)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def validate_step(self, session: WizardSession, step: Optional[WizardStep] = None) -> bool:
        """True when ``step`` (default: the current step) has everything it needs."""
        step = step or session.current_step
        if step == WizardStep.PROMPT_ENTRY:
            return bool(session.seed_prompt) and len(session.seed_prompt.strip()) >= MIN_SEED_PROMPT_LENGTH
        if step == WizardStep.ANALYSIS:
            return session.analysis is not None
        if step == WizardStep.CLARIFICATION:
            if session.analysis is None:
                return False
            required = [
                q for q in session.analysis.clarifying_questions if q.priority == ClarificationPriority.REQUIRED
            ]
            return all(session.clarification_answers.get(str(q.id), "").strip() for q in required)
        if step == WizardStep.BLUEPRINT:
            return session.blueprint is not None
        return session.blueprint_approved

    def is_step_available(self, session: WizardSession, step: WizardStep) -> bool:
        """A step is reachable once every step before it validates."""
        if step == WizardStep.PROMPT_ENTRY:
            return True
        return all(self.validate_step(session, earlier) for earlier in list(WizardStep)[: step.position])

    def advance(self, session: WizardSession) -> Result[WizardSession]:
        """Move to the next step once the current one validates; no-op on the last step."""
        current = session.current_step
        if current.next == current:
            return Result.ok(session)
        if not self.validate_step(session):
            return Result.fail(f"Complete the {current.value.replace('_', ' ')} step before continuing")
        return self._move_to(session, current.next)

    def go_back(self, session: WizardSession) -> Result[WizardSession]:
        current = session.current_step
        if current.previous == current:
            return Result.ok(session)
        return self._move_to(session, current.previous)

    def go_to_step(self, session: WizardSession, step: WizardStep) -> Result[WizardSession]:
        if not self.is_step_available(session, step):
            return Result.fail(f"Step {step.value} is not available yet. Complete previous steps first.")
        return self._move_to(session, step)

    def _move_to(self, session: WizardSession, step: WizardStep) -> Result[WizardSession]:
        logger.debug(f"Wizard {session.id}: {session.current_step.value} -> {step.value}")
        session.current_step = step
        if step not in session.step_history:
            session.step_history.append(step)
        return self.save_session(session)

    # ------------------------------------------------------------------
    # Step actions
    # ------------------------------------------------------------------

    def set_seed_prompt(self, session: WizardSession, seed_prompt: str) -> Result[WizardSession]:
        session.seed_prompt = (seed_prompt or "").strip() or None
        return self.save_session(session)

    def analyze_prompt(self, session: WizardSession) -> Result[PromptAnalysis]:
        if not session.seed_prompt or not session.seed_prompt.strip():
            return Result.fail("No seed prompt provided")

        system_prompt, user_prompt = build_analysis_prompt(session.seed_prompt)
        data = self._generate_json(system_prompt, user_prompt, ANALYSIS_MAX_TOKENS, "Prompt analysis")
        if data.is_failure:
            return data
        try:
            analysis = PromptAnalysis.model_validate(data.value)
        except ValidationError as e:
            logger.error(f"Analysis response did not match the expected shape: {e}")
            return Result.fail(f"Could not parse prompt analysis: {e}", e)

        session.analysis = analysis
        saved = self.save_session(session)
        if saved.is_failure:
            return saved
        logger.info(f"Analysis complete: {analysis.genre}, {len(analysis.clarifying_questions)} questions")
        return Result.ok(analysis)

    def answer_clarifications(self, session: WizardSession, answers: dict[str, str]) -> Result[WizardSession]:
        """Record answers keyed by question id; blank answers clear earlier ones."""
        if session.analysis is None:
            return Result.fail("Prompt analysis must be completed first")
        known = {str(q.id) for q in session.analysis.clarifying_questions}
        unknown = [key for key in answers if key not in known]
        if unknown:
            return Result.fail(f"Unknown clarification question: {unknown[0]}")

        updated = dict(session.clarification_answers)
        for question_id, answer in answers.items():
            answer = (answer or "").strip()
            if answer:
                updated[question_id] = answer
            else:
                updated.pop(question_id, None)
        session.clarification_answers = updated
        return self.save_session(session)

    def generate_blueprint(self, session: WizardSession) -> Result[BookBlueprint]:
        if session.analysis is None:
            return Result.fail("Prompt analysis must be completed first")

        questions = {str(q.id): q.question for q in session.analysis.clarifying_questions}
        system_prompt, user_prompt = build_blueprint_prompt(
            session.seed_prompt or "", session.analysis, session.clarification_answers, questions
        )
        data = self._generate_json(system_prompt, user_prompt, BLUEPRINT_MAX_TOKENS, "Blueprint generation")
        if data.is_failure:
            return data
        try:
            blueprint = BookBlueprint.model_validate(data.value)
        except ValidationError as e:
            logger.error(f"Blueprint response did not match the expected shape: {e}")
            return Result.fail(f"Could not parse blueprint: {e}", e)
        if not blueprint.chapters:
            return Result.fail("Blueprint contains no chapters")

        session.blueprint = blueprint
        session.blueprint_approved = False
        saved = self.save_session(session)
        if saved.is_failure:
            return saved
        logger.info(f"Blueprint ready: '{blueprint.title}' with {len(blueprint.chapters)} chapters")
        return Result.ok(blueprint)

    def approve_blueprint(self, session: WizardSession) -> Result[WizardSession]:
        if session.blueprint is None:
            return Result.fail("No blueprint to approve")
        session.blueprint_approved = True
        return self.save_session(session)

    def start_generation(
        self,
        session: WizardSession,
        cancel_event: Optional[threading.Event] = None,
    ) -> Result[Project]:
        """Write every planned chapter into a new project.

        Chapter text is streamed from the provider. When ``cancel_event`` is
        set the chapter in progress keeps its partial text, the project and
        session are saved, and a failed result is returned. A chapter cut off
        at the token limit keeps its partial text and stays ``drafting``.

        Only in-progress sessions generate; a failed session may be retried.
        """
        if session.status not in (WizardStatus.IN_PROGRESS, WizardStatus.FAILED):
            return Result.fail(f"Cannot generate for a {session.status.value} session")
        if session.blueprint is None:
            return Result.fail("Blueprint must be approved first")
        if not session.blueprint_approved:
            return Result.fail("Blueprint must be approved before generation")

        blueprint = session.blueprint
        session.status = WizardStatus.IN_PROGRESS
        project = self._create_project(session, blueprint)
        session.project_id = project.id
        session.generated_chapter_ids = []
        session.error_message = None
        plans = sorted(blueprint.chapters, key=lambda plan: plan.number)
        total = len(plans)

        for index, plan in enumerate(plans):
            if cancel_event is not None and cancel_event.is_set():
                return self._stop_generation(session, project, "Generation cancelled")

            chapter = Chapter(
                title=plan.title,
                summary=plan.summary or None,
                outline="\n".join(plan.key_events) or None,
                target_word_count=plan.target_word_count,
                status=ChapterStatus.DRAFTING,
            )
            project.add_chapter(chapter)

            self._notify_progress(plan.number, total, "generating")
            system_prompt, user_prompt = build_chapter_prompt(blueprint, plan, plans[:index])
            request = GenerationRequest(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                model=self.model,
                max_tokens=CHAPTER_MAX_TOKENS,
            )
            received: list[str] = []
            try:
                for chunk in self.provider.stream_completion(request, cancel_event):
                    received.append(chunk)
            except GenerationCancelledError as e:
                chapter.update_content(e.partial_content)
                self._notify_progress(plan.number, total, "cancelled")
                return self._stop_generation(session, project, "Generation cancelled")
            except ResponseTruncatedError as e:
                chapter.update_content("".join(received).strip())
                logger.warning(f"Chapter {plan.number} hit the token limit after {chapter.word_count} words")
                self._notify_progress(plan.number, total, "truncated")
                session.status = WizardStatus.FAILED
                session.error_message = f"Chapter {plan.number} was cut off at the token limit"
                return self._stop_generation(session, project, session.error_message, e)
            except LlmModelError as e:
                logger.error(f"Chapter {plan.number} generation failed: {e}")
                self._notify_progress(plan.number, total, "failed")
                session.status = WizardStatus.FAILED
                session.error_message = str(e)
                return self._stop_generation(session, project, f"Chapter generation failed: {e}", e)

            chapter.update_content("".join(received).strip())
            chapter.status = ChapterStatus.FIRST_DRAFT
            session.generated_chapter_ids.append(chapter.id)
            self._persist_project(project)
            saved = self.save_session(session)
            if saved.is_failure:
                logger.error(f"Could not save wizard session {session.id}: {saved.error}")
                return Result.fail(f"Failed to save session: {saved.error}", saved.exception)
            self._notify_progress(plan.number, total, "completed")
            logger.info(f"Generated chapter {plan.number}/{total}: {chapter.word_count} words")

        project.status = ProjectStatus.EDITING
        self._persist_project(project)
        saved = self.save_session(session)
        if saved.is_failure:
            return saved
        return Result.ok(project)

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def progress_summary(self, session: WizardSession) -> WizardProgressSummary:
        steps = list(WizardStep)
        position = session.current_step.position
        return WizardProgressSummary(
            current_step=session.current_step,
            current_step_number=position + 1,
            total_steps=len(steps),
            progress_percentage=position / len(steps) * 100,
            completed_steps=list(session.step_history),
            remaining_steps=steps[position + 1 :],
            elapsed_seconds=((session.completed_at or utc_now()) - session.started_at).total_seconds(),
            has_analysis=session.analysis is not None,
            has_blueprint=session.blueprint is not None,
            is_blueprint_approved=session.blueprint_approved,
            generated_chapters=len(session.generated_chapter_ids),
            status=session.status,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _generate_json(self, system_prompt: str, user_prompt: str, max_tokens: int, action: str) -> Result[object]:
        request = GenerationRequest(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            model=self.model,
            temperature=0.7,
            max_tokens=max_tokens,
        )
        try:
            response = self.provider.generate(request)
        except LlmModelError as e:
            logger.error(f"{action} failed: {e}")
            return Result.fail(f"{action} failed: {e}", e)
        try:
            return Result.ok(parse_json_response(response.content))
        except ValueError as e:
            logger.error(f"{action} returned malformed JSON")
            return Result.fail(f"{action} returned malformed JSON: {e}", e)

    def _create_project(self, session: WizardSession, blueprint: BookBlueprint) -> Project:
        project = Project(
            name=blueprint.title,
            description=blueprint.logline,
            owner_id=session.owner_id,
            metadata=BookMetadata(title=blueprint.title, genre=blueprint.genre, description=blueprint.synopsis or None),
            status=ProjectStatus.WRITING,
            target_word_count=blueprint.total_target_words,
        )
        if self.project_repository is not None:
            self.project_repository.create(project)
        return project

    def _persist_project(self, project: Project) -> None:
        if self.project_repository is None:
            return
        result = self.project_repository.update(project)
        if result.is_failure:
            logger.warning(f"Could not persist project {project.id}: {result.error}")

    def _stop_generation(
        self,
        session: WizardSession,
        project: Project,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> Result[Project]:
        self._persist_project(project)
        saved = self.save_session(session)
        if saved.is_failure:
            logger.error(f"Could not save wizard session {session.id}: {saved.error}")
        logger.info(f"{message} after {len(session.generated_chapter_ids)} chapters")
        return Result.fail(message, exception)

    def _notify_progress(self, chapter_number: int, total: int, status: str) -> None:
        """Notify progress callback if set."""
        if self.progress_callback:
            self.progress_callback(chapter_number, total, status)
