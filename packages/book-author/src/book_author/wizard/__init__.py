"""Guided book creation: analyze an idea, plan the book, write the chapters."""

from .prompts import build_analysis_prompt, build_blueprint_prompt, build_chapter_prompt
from .service import WizardService

__all__ = [
    "WizardService",
    "build_analysis_prompt",
    "build_blueprint_prompt",
    "build_chapter_prompt",
]
