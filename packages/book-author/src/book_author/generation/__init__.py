"""AI writing for the chapters of an existing project."""

from .prompts import build_chapter_prompt, build_context, build_system_prompt
from .service import ChapterGenerator

__all__ = [
    "ChapterGenerator",
    "build_chapter_prompt",
    "build_context",
    "build_system_prompt",
]
