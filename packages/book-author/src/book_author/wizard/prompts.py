"""Prompt templates for the guided creation wizard."""

from typing import Optional

from book_author.models import BookBlueprint, ChapterPlan, PromptAnalysis

# =============================================================================
# Analysis
# =============================================================================

ANALYSIS_SYSTEM_PROMPT = """You are an experienced acquisitions editor and story consultant.
You read a writer's book idea and work out what kind of book it wants to be.
You always answer with a single JSON object and nothing else.
"""

ANALYSIS_USER_PROMPT = """## Book Idea
{seed_prompt}

## Your Task

Analyze the idea and describe the book it suggests. Then list the questions you would
need answered before planning chapters. Mark a question "required" only when the book
cannot be planned without it.

## Output Format

Respond with JSON in exactly this shape:

```json
{{
  "genre": "...",
  "subgenre": "...",
  "tone": "...",
  "target_audience": "...",
  "themes": ["..."],
  "setting": "...",
  "premise": "...",
  "estimated_word_count": 80000,
  "clarifying_questions": [
    {{
      "question": "...",
      "rationale": "...",
      "category": "plot|character|setting|style|general",
      "priority": "required|important|optional",
      "suggested_options": ["..."],
      "default_answer": "..."
    }}
  ]
}}
```
"""

# =============================================================================
# Blueprint
# =============================================================================

BLUEPRINT_SYSTEM_PROMPT = """You are a bestselling author and developmental editor who plans
novels chapter by chapter. Your plans give every chapter a clear purpose and leave room
for the story to breathe. You always answer with a single JSON object and nothing else.
"""

BLUEPRINT_USER_PROMPT = """## Book Idea
{seed_prompt}

## Analysis
- Genre: {genre}
- Tone: {tone}
- Target audience: {target_audience}
- Setting: {setting}
- Themes: {themes}
- Premise: {premise}

## Author's Answers
{answers}

## Your Task

Plan the book. Aim for roughly {word_count} words in total across {chapter_count} chapters.

## Output Format

Respond with JSON in exactly this shape:

```json
{{
  "title": "...",
  "logline": "...",
  "synopsis": "...",
  "genre": "...",
  "chapters": [
    {{
      "number": 1,
      "title": "...",
      "summary": "...",
      "key_events": ["..."],
      "target_word_count": 3000
    }}
  ]
}}
```
"""

# =============================================================================
# Chapter generation
# =============================================================================

CHAPTER_SYSTEM_PROMPT = """You are an expert author writing a book titled "{book_title}".

Logline: {logline}

Write polished, publication-ready prose. Stay consistent with the synopsis and with the
chapters already written. Output only the chapter text: no headings, notes or commentary.
Separate paragraphs with a blank line and mark scene breaks with a line containing * * *.
"""

CHAPTER_USER_PROMPT = """## Synopsis
{synopsis}

## Story So Far
{previous_summaries}

## Current Task

Write Chapter {number}: {title}

Summary: {summary}

Key events:
{key_events}

Target length: about {target_word_count} words.

Begin writing the chapter now:
"""

WORDS_PER_CHAPTER = 3000


def build_analysis_prompt(seed_prompt: str) -> tuple[str, str]:
    """Return (system, user) prompts for analyzing the seed prompt."""
    return ANALYSIS_SYSTEM_PROMPT, ANALYSIS_USER_PROMPT.format(seed_prompt=seed_prompt.strip())


def build_blueprint_prompt(
    seed_prompt: str,
    analysis: PromptAnalysis,
    answers: dict[str, str],
    questions: Optional[dict[str, str]] = None,
) -> tuple[str, str]:
    """Return (system, user) prompts for planning the book.

    ``questions`` maps question ids to question text so answers can be shown
    next to the question they answer.
    """
    questions = questions or {}
    if answers:
        answer_lines = [f"- {questions.get(qid, qid)}: {answer}" for qid, answer in answers.items()]
        answer_text = "\n".join(answer_lines)
    else:
        answer_text = "No answers provided; use your best judgement."

    chapter_count = max(1, round(analysis.estimated_word_count / WORDS_PER_CHAPTER))
    user_msg = BLUEPRINT_USER_PROMPT.format(
        seed_prompt=seed_prompt.strip(),
        genre=analysis.genre or "Not specified",
        tone=analysis.tone or "Not specified",
        target_audience=analysis.target_audience or "Not specified",
        setting=analysis.setting or "Not specified",
        themes=", ".join(analysis.themes) or "Not specified",
        premise=analysis.premise or "Not specified",
        answers=answer_text,
        word_count=analysis.estimated_word_count,
        chapter_count=chapter_count,
    )
    return BLUEPRINT_SYSTEM_PROMPT, user_msg


def build_chapter_prompt(
    blueprint: BookBlueprint,
    plan: ChapterPlan,
    previous: list[ChapterPlan],
) -> tuple[str, str]:
    """Return (system, user) prompts for writing one planned chapter."""
    system_msg = CHAPTER_SYSTEM_PROMPT.format(
        book_title=blueprint.title,
        logline=blueprint.logline or "Not specified",
    )
    if previous:
        previous_text = "\n".join(f"- Chapter {p.number}: {p.title}. {p.summary}" for p in previous)
    else:
        previous_text = "This is the first chapter."
    key_events = "\n".join(f"- {event}" for event in plan.key_events) or "- Not specified"
    user_msg = CHAPTER_USER_PROMPT.format(
        synopsis=blueprint.synopsis or "Not specified",
        previous_summaries=previous_text,
        number=plan.number,
        title=plan.title,
        summary=plan.summary or "Not specified",
        key_events=key_events,
        target_word_count=plan.target_word_count,
    )
    return system_msg, user_msg
