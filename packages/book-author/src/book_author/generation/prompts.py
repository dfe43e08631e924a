"""Prompt templates for writing inside an existing project."""

from typing import Optional

from book_author.export.content import split_paragraphs
from book_author.models import Chapter, Character, Location, PointOfView, Project, Tense

CHARS_PER_TOKEN = 4
MAX_CHARACTERS = 10
MAX_LOCATIONS = 5
CHARACTER_CONTEXT_TOKENS = 1000
LOCATION_CONTEXT_TOKENS = 500
PREVIOUS_SUMMARY_TOKENS = 2000
FALLBACK_SUMMARY_CHARS = 200

POV_LABELS = {
    PointOfView.FIRST_PERSON: "First Person (I/We)",
    PointOfView.SECOND_PERSON: "Second Person (You)",
    PointOfView.THIRD_PERSON_LIMITED: "Third Person Limited",
    PointOfView.THIRD_PERSON_OMNISCIENT: "Third Person Omniscient",
}

TENSE_LABELS = {
    Tense.PAST: "Past Tense",
    Tense.PRESENT: "Present Tense",
}

# =============================================================================
# System prompt
# =============================================================================

WRITER_SYSTEM_PROMPT = """You are an expert fiction writer working on a book titled "{book_title}".

## Book Information
{book_info}

## Writing Guidelines
1. Write vivid, sensory prose that immerses the reader
2. Balance dialogue, action and description
3. Keep every character's voice consistent with the notes you are given
4. Show emotion through action and detail rather than stating it
5. Mark scene breaks with a line containing * * *

Output only the requested prose: no headings, notes or commentary.
Separate paragraphs with a blank line.
"""

# =============================================================================
# Chapter generation
# =============================================================================

CHAPTER_USER_PROMPT = """{context}

## Current Task

Write Chapter {number}: {title}

{chapter_plan}
Write approximately {target_word_count} words. Begin the chapter now:
"""

CONTINUE_USER_PROMPT = """{context}

## Chapter {number}: {title} (so far)
{content}

## Current Task

Continue writing from exactly where the chapter leaves off. Keep the same voice, style and pacing.
{instructions}
Continue the chapter now:
"""

REWRITE_USER_PROMPT = """## Instructions
{instructions}

## Passage to Rewrite
{passage}

## Your Task

Rewrite the passage following the instructions. Return only the rewritten passage.
"""

OUTLINE_USER_PROMPT = """{context}

## Current Task

Create a detailed outline for Chapter {number}: {title}

Chapter summary: {summary}

Cover:
1. Opening scene and hook
2. Key plot points
3. Character development moments
4. Conflicts and tension
5. Chapter ending or cliffhanger

Outline:
"""


def _filled(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def chapter_text(content: str) -> str:
    """Chapter content as plain paragraphs separated by blank lines."""
    return "\n\n".join(split_paragraphs(content))


def relevant_characters(project: Project, chapter: Chapter) -> list[Character]:
    """POV character first, then characters linked to the chapter, then main characters."""
    ids = []
    if chapter.pov_character_id is not None:
        ids.append(chapter.pov_character_id)
    ids.extend(chapter.character_ids)
    ids.extend(c.id for c in project.characters if c.is_main_character)

    by_id = {c.id: c for c in project.characters}
    characters: list[Character] = []
    for character_id in dict.fromkeys(ids):
        if character_id in by_id:
            characters.append(by_id[character_id])
    return characters[:MAX_CHARACTERS]


def relevant_locations(project: Project, chapter: Chapter) -> list[Location]:
    """Primary location first, then locations linked to the chapter."""
    ids = []
    if chapter.primary_location_id is not None:
        ids.append(chapter.primary_location_id)
    ids.extend(chapter.location_ids)

    by_id = {loc.id: loc for loc in project.locations}
    return [by_id[i] for i in dict.fromkeys(ids) if i in by_id][:MAX_LOCATIONS]


def _within_budget(blocks: list[str], max_tokens: int) -> list[str]:
    """Keep leading blocks while their combined length fits ``max_tokens``."""
    max_chars = max_tokens * CHARS_PER_TOKEN
    kept: list[str] = []
    total = 0
    for block in blocks:
        if total + len(block) > max_chars:
            break
        kept.append(block)
        total += len(block)
    return kept


def build_previous_summary(project: Project, chapter: Chapter, max_tokens: int = PREVIOUS_SUMMARY_TOKENS) -> str:
    """Summarize the chapters before ``chapter``, oldest first.

    A chapter without a summary is represented by the opening of its text.
    """
    lines = []
    for previous in sorted(project.chapters, key=lambda c: c.order):
        if previous.order >= chapter.order:
            break
        summary = previous.summary
        if not _filled(summary) and _filled(previous.content):
            text = chapter_text(previous.content)
            if len(text) > FALLBACK_SUMMARY_CHARS:
                text = text[:FALLBACK_SUMMARY_CHARS] + "..."
            summary = text
        if _filled(summary):
            lines.append(f"Chapter {previous.order} ({previous.title}): {summary.strip()}")
    return "\n".join(_within_budget(lines, max_tokens))


def build_context(project: Project, chapter: Chapter) -> str:
    """Render the characters, places and story so far that frame ``chapter``."""
    sections = []

    characters = _within_budget(
        [c.to_context_string() for c in relevant_characters(project, chapter)], CHARACTER_CONTEXT_TOKENS
    )
    if characters:
        sections.append("## Characters\n" + "\n\n".join(characters))

    locations = _within_budget(
        [loc.to_context_string() for loc in relevant_locations(project, chapter)], LOCATION_CONTEXT_TOKENS
    )
    if locations:
        sections.append("## Locations\n" + "\n\n".join(locations))

    story_so_far = build_previous_summary(project, chapter)
    if story_so_far:
        sections.append("## Story So Far\n" + story_so_far)

    if _filled(chapter.custom_context):
        sections.append("## Additional Context\n" + chapter.custom_context.strip())

    return "\n\n".join(sections)


def build_system_prompt(project: Project) -> str:
    """Describe the book and the project's generation settings to the writer."""
    metadata = project.metadata
    settings = project.generation_settings
    lines = [f"- Genre: {metadata.genre or 'Not specified'}"]
    if _filled(metadata.target_audience):
        lines.append(f"- Target Audience: {metadata.target_audience}")
    lines.append(f"- Point of View: {POV_LABELS[settings.point_of_view]}")
    lines.append(f"- Tense: {TENSE_LABELS[settings.tense]}")
    if _filled(settings.style_description):
        lines.append(f"- Writing Style: {settings.style_description}")
    if _filled(settings.tone_description):
        lines.append(f"- Tone: {settings.tone_description}")

    prompt = WRITER_SYSTEM_PROMPT.format(
        book_title=metadata.title or project.name,
        book_info="\n".join(lines),
    )
    if _filled(settings.custom_instructions):
        prompt += f"\n## Author Instructions\n{settings.custom_instructions.strip()}\n"
    return prompt


def build_chapter_prompt(project: Project, chapter: Chapter, instructions: Optional[str] = None) -> tuple[str, str]:
    """Return (system, user) prompts for writing ``chapter`` from its plan."""
    plan = []
    if _filled(chapter.summary):
        plan.append(f"Summary: {chapter.summary.strip()}\n")
    if _filled(chapter.outline):
        plan.append(f"## Chapter Outline\n{chapter.outline.strip()}\n")
    if _filled(chapter.notes):
        plan.append(f"## Author Notes\n{chapter.notes.strip()}\n")
    if _filled(instructions):
        plan.append(f"## Additional Instructions\n{instructions.strip()}\n")

    user_msg = CHAPTER_USER_PROMPT.format(
        context=build_context(project, chapter),
        number=chapter.order,
        title=chapter.title,
        chapter_plan="\n".join(plan),
        target_word_count=chapter.target_word_count or project.generation_settings.target_chapter_length,
    )
    return build_system_prompt(project), user_msg.lstrip()


def build_continue_prompt(
    project: Project, chapter: Chapter, content: str, instructions: Optional[str] = None
) -> tuple[str, str]:
    """Return (system, user) prompts for carrying on from ``content``."""
    user_msg = CONTINUE_USER_PROMPT.format(
        context=build_context(project, chapter),
        number=chapter.order,
        title=chapter.title,
        content=content,
        instructions=f"\nAdditional instructions: {instructions.strip()}\n" if _filled(instructions) else "",
    )
    return build_system_prompt(project), user_msg.lstrip()


def build_rewrite_prompt(project: Project, passage: str, instructions: str) -> tuple[str, str]:
    """Return (system, user) prompts for rewriting one passage."""
    user_msg = REWRITE_USER_PROMPT.format(instructions=instructions.strip(), passage=passage)
    return build_system_prompt(project), user_msg


def build_outline_prompt(project: Project, chapter: Chapter) -> tuple[str, str]:
    """Return (system, user) prompts for outlining ``chapter``."""
    user_msg = OUTLINE_USER_PROMPT.format(
        context=build_context(project, chapter),
        number=chapter.order,
        title=chapter.title,
        summary=chapter.summary or "Not specified",
    )
    return build_system_prompt(project), user_msg.lstrip()
