"""Writes, extends, rewrites and outlines chapters of an existing project."""

import threading
from decimal import Decimal
from typing import Callable, Iterator, Optional

from llm_core import (
    GenerationCancelledError,
    GenerationRequest,
    LlmModelError,
    ProviderClient,
    ResponseTruncatedError,
    TokenCounter,
)
from loguru import logger

from book_author.export.content import is_html, text_to_html
from book_author.models import Chapter, ChapterStatus, Project
from book_author.result import Result

from .prompts import (
    CHARS_PER_TOKEN,
    build_chapter_prompt,
    build_continue_prompt,
    build_outline_prompt,
    build_rewrite_prompt,
    chapter_text,
)

ChunkCallback = Callable[[str], None]

CONTINUE_MAX_TOKENS = 2000
CONTINUE_CONTEXT_TOKENS = 3000
REWRITE_MIN_TOKENS = 1000
OUTLINE_MAX_TOKENS = 1500
OUTLINE_TEMPERATURE = 0.6
TOKENS_PER_WORD = Decimal("1.35")


class ChapterGenerator:
    """AI writing operations for one chapter of a project.

    Prompts carry the project's cast, places and story so far, and follow its
    ``GenerationSettings``. Prose is streamed from the provider and every
    operation returns a ``Result``; the chapter is updated in place and the
    caller decides when to save the project.
    """

    def __init__(
        self,
        provider: ProviderClient,
        model: Optional[str] = None,
        token_counter: Optional[TokenCounter] = None,
    ):
        self.provider = provider
        self.model = model
        self.token_counter = token_counter or TokenCounter()

    def generate_chapter(
        self,
        project: Project,
        chapter: Chapter,
        instructions: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
        on_chunk: Optional[ChunkCallback] = None,
    ) -> Result[Chapter]:
        """Write the chapter from its summary, outline and notes.

        The new text replaces the chapter content and the chapter becomes a
        first draft. When cancelled or cut off at the token limit the partial
        text is kept and the chapter is left ``drafting``.
        """
        if project.get_chapter(chapter.id) is None:
            return Result.fail("Chapter does not belong to this project")

        system_prompt, user_prompt = build_chapter_prompt(project, chapter, instructions)
        request = self._request(project, system_prompt, user_prompt, self._chapter_max_tokens(project, chapter))
        logger.info(f"Generating chapter {chapter.order}: {chapter.title}")

        received: list[str] = []
        try:
            for chunk in self._stream(request, cancel_event, on_chunk):
                received.append(chunk)
        except GenerationCancelledError as e:
            self._keep_partial(chapter, e.partial_content)
            logger.info(f"Chapter {chapter.order} generation cancelled after {chapter.word_count} words")
            return Result.fail("Generation cancelled", e)
        except ResponseTruncatedError as e:
            self._keep_partial(chapter, "".join(received))
            logger.warning(f"Chapter {chapter.order} hit the token limit after {chapter.word_count} words")
            return Result.fail(f"Chapter {chapter.order} was cut off at the token limit", e)
        except LlmModelError as e:
            logger.error(f"Chapter {chapter.order} generation failed: {e}")
            return Result.fail(f"Chapter generation failed: {e}", e)

        chapter.update_content("".join(received).strip())
        chapter.status = ChapterStatus.FIRST_DRAFT
        logger.info(f"Generated chapter {chapter.order}: {chapter.word_count} words")
        return Result.ok(chapter)

    def continue_chapter(
        self,
        project: Project,
        chapter: Chapter,
        instructions: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
        on_chunk: Optional[ChunkCallback] = None,
    ) -> Result[str]:
        """Append new prose after the chapter's current text.

        Only the tail of a long chapter is sent. Partial text from a cancelled
        or truncated stream is still appended. Returns the appended text.
        """
        if project.get_chapter(chapter.id) is None:
            return Result.fail("Chapter does not belong to this project")
        existing = chapter_text(chapter.content)
        if not existing:
            return Result.fail("Chapter has no content to continue")

        tail_chars = CONTINUE_CONTEXT_TOKENS * CHARS_PER_TOKEN
        if len(existing) > tail_chars:
            existing = "..." + existing[-tail_chars:]
        system_prompt, user_prompt = build_continue_prompt(project, chapter, existing, instructions)
        request = self._request(project, system_prompt, user_prompt, CONTINUE_MAX_TOKENS)

        received: list[str] = []
        try:
            for chunk in self._stream(request, cancel_event, on_chunk):
                received.append(chunk)
        except GenerationCancelledError as e:
            self._append(chapter, e.partial_content)
            return Result.fail("Generation cancelled", e)
        except ResponseTruncatedError as e:
            self._append(chapter, "".join(received))
            logger.warning(f"Continuation of chapter {chapter.order} hit the token limit")
            return Result.fail(f"Chapter {chapter.order} was cut off at the token limit", e)
        except LlmModelError as e:
            logger.error(f"Continuing chapter {chapter.order} failed: {e}")
            return Result.fail(f"Continue writing failed: {e}", e)

        addition = self._append(chapter, "".join(received))
        if chapter.status in (ChapterStatus.NOT_STARTED, ChapterStatus.OUTLINED):
            chapter.status = ChapterStatus.DRAFTING
        logger.info(f"Continued chapter {chapter.order} by {len(addition.split())} words")
        return Result.ok(addition)

    def rewrite_section(
        self,
        project: Project,
        chapter: Chapter,
        passage: str,
        instructions: str,
        cancel_event: Optional[threading.Event] = None,
        on_chunk: Optional[ChunkCallback] = None,
    ) -> Result[str]:
        """Rewrite one passage of the chapter and splice it back in.

        The chapter is only changed when the rewrite finishes; a cancelled or
        truncated rewrite leaves the original passage in place.
        """
        if not passage or not passage.strip():
            return Result.fail("Passage to rewrite is required")
        if not instructions or not instructions.strip():
            return Result.fail("Rewrite instructions are required")
        if passage not in chapter.content:
            return Result.fail("Passage not found in chapter")

        system_prompt, user_prompt = build_rewrite_prompt(project, passage, instructions)
        max_tokens = max(REWRITE_MIN_TOKENS, self.token_counter.estimate_tokens(passage) * 2)
        request = self._request(project, system_prompt, user_prompt, max_tokens)

        try:
            rewritten = "".join(self._stream(request, cancel_event, on_chunk)).strip()
        except GenerationCancelledError as e:
            return Result.fail("Generation cancelled", e)
        except LlmModelError as e:
            logger.error(f"Rewriting a passage of chapter {chapter.order} failed: {e}")
            return Result.fail(f"Rewrite failed: {e}", e)

        if not rewritten:
            return Result.fail("Rewrite returned no text")
        chapter.update_content(chapter.content.replace(passage, rewritten, 1))
        return Result.ok(rewritten)

    def generate_outline(self, project: Project, chapter: Chapter) -> Result[str]:
        """Outline the chapter's beats and store them on ``chapter.outline``."""
        if project.get_chapter(chapter.id) is None:
            return Result.fail("Chapter does not belong to this project")

        system_prompt, user_prompt = build_outline_prompt(project, chapter)
        request = self._request(project, system_prompt, user_prompt, OUTLINE_MAX_TOKENS, OUTLINE_TEMPERATURE)
        try:
            response = self.provider.generate(request)
        except LlmModelError as e:
            logger.error(f"Outlining chapter {chapter.order} failed: {e}")
            return Result.fail(f"Outline generation failed: {e}", e)

        outline = response.content.strip()
        chapter.outline = outline
        if chapter.status == ChapterStatus.NOT_STARTED:
            chapter.status = ChapterStatus.OUTLINED
        chapter.mark_modified()
        return Result.ok(outline)

    def estimate_cost(self, project: Project, chapter: Chapter) -> Decimal:
        """Approximate USD cost of ``generate_chapter`` for this chapter."""
        system_prompt, user_prompt = build_chapter_prompt(project, chapter)
        input_tokens = self.token_counter.estimate_tokens_many([system_prompt, user_prompt])
        return self.token_counter.estimate_cost(
            self._model_for(project), input_tokens, self._chapter_max_tokens(project, chapter)
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _model_for(self, project: Project) -> str:
        return self.model or project.generation_settings.model or self.provider.default_model

    def _chapter_max_tokens(self, project: Project, chapter: Chapter) -> int:
        words = chapter.target_word_count or project.generation_settings.target_chapter_length
        wanted = int(words * TOKENS_PER_WORD)
        return min(wanted, self.token_counter.max_output_tokens(self._model_for(project)))

    def _request(
        self,
        project: Project,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: Optional[float] = None,
    ) -> GenerationRequest:
        return GenerationRequest(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            model=self._model_for(project),
            temperature=project.generation_settings.temperature if temperature is None else temperature,
            max_tokens=max_tokens,
        )

    def _stream(
        self,
        request: GenerationRequest,
        cancel_event: Optional[threading.Event],
        on_chunk: Optional[ChunkCallback],
    ) -> Iterator[str]:
        for chunk in self.provider.stream_completion(request, cancel_event):
            if on_chunk:
                on_chunk(chunk)
            yield chunk

    @staticmethod
    def _keep_partial(chapter: Chapter, text: str) -> None:
        chapter.update_content(text.strip())
        chapter.status = ChapterStatus.DRAFTING

    @staticmethod
    def _append(chapter: Chapter, text: str) -> str:
        """Add ``text`` after the chapter content, matching its HTML or plain form."""
        text = text.strip()
        if not text:
            return ""
        if is_html(chapter.content):
            chapter.update_content(f"{chapter.content}\n{text_to_html(text)}")
        else:
            chapter.update_content(f"{chapter.content.rstrip()}\n\n{text}")
        return text
