"""Tests for AI writing inside an existing project."""

import threading
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from llm_core import APIError, GenerationCancelledError, ResponseTruncatedError

from book_author.generation import ChapterGenerator, build_context, build_system_prompt
from book_author.generation.prompts import build_previous_summary, relevant_characters
from book_author.models import (
    Chapter,
    ChapterStatus,
    Character,
    GenerationSettings,
    PointOfView,
    Tense,
)


def _stream(*chunks, error=None):
    """A stream_completion side effect yielding ``chunks`` then raising ``error``."""

    def side_effect(request, cancel_event=None):
        yield from chunks
        if error is not None:
            raise error

    return side_effect


@pytest.fixture
def provider():
    provider = MagicMock()
    provider.default_model = "claude-sonnet-4-5"
    provider.stream_completion.side_effect = _stream("The pickers ", "came at noon.")
    return provider


@pytest.fixture
def generator(provider):
    return ChapterGenerator(provider)


@pytest.fixture
def harvest(sample_project):
    """The outlined third chapter, linked to the sample cast and orchard."""
    chapter = sample_project.chapters[2]
    chapter.summary = "The village gathers for the harvest."
    chapter.pov_character_id = sample_project.characters[0].id
    chapter.primary_location_id = sample_project.locations[0].id
    return chapter


class TestContext:
    """Tests for the context handed to the writer."""

    def test_linked_cast_and_places(self, sample_project, harvest):
        context = build_context(sample_project, harvest)
        assert "## Characters\nName: Mara\nRole: Supporting\nAge: 34" in context
        assert "## Locations\nLocation: The Orchard" in context
        assert "Chapter 1 (Frost): The orchard froze overnight.\n\nMara walked the rows at dawn." in context
        assert "Chapter 2 (Roots & Branches): Her father kept ledgers." in context
        assert "<strong>" not in context

    def test_unlinked_chapter(self, sample_project):
        context = build_context(sample_project, sample_project.chapters[0])
        assert context == ""

    def test_main_characters_always_included(self, sample_project):
        villain = Character(name="Aldous", is_main_character=True)
        sample_project.add_character(villain)
        chapter = sample_project.chapters[0]
        chapter.character_ids = [sample_project.characters[0].id, villain.id]
        assert [c.name for c in relevant_characters(sample_project, chapter)] == ["Mara", "Aldous"]

    def test_summary_preferred_and_budgeted(self, sample_project, harvest):
        sample_project.chapters[0].summary = "Frost ruins the crop."
        summary = build_previous_summary(sample_project, harvest)
        assert summary.splitlines()[0] == "Chapter 1 (Frost): Frost ruins the crop."
        assert build_previous_summary(sample_project, harvest, max_tokens=5) == ""

    def test_custom_context(self, sample_project, harvest):
        harvest.custom_context = "It rained all week."
        assert build_context(sample_project, harvest).endswith("## Additional Context\nIt rained all week.")

    def test_system_prompt_follows_generation_settings(self, sample_project):
        sample_project.generation_settings = GenerationSettings(
            point_of_view=PointOfView.FIRST_PERSON,
            tense=Tense.PRESENT,
            style_description="Spare and lyrical",
            tone_description="Melancholic",
            custom_instructions="Never name the village.",
        )
        prompt = build_system_prompt(sample_project)
        assert 'book titled "The Glass Orchard"' in prompt
        assert "- Genre: Literary Fiction" in prompt
        assert "- Point of View: First Person (I/We)" in prompt
        assert "- Tense: Present Tense" in prompt
        assert "- Writing Style: Spare and lyrical" in prompt
        assert "- Tone: Melancholic" in prompt
        assert prompt.rstrip().endswith("## Author Instructions\nNever name the village.")


class TestGenerateChapter:
    def test_writes_first_draft(self, generator, provider, sample_project, harvest):
        """Test streamed text replaces the content and the request follows the settings."""
        chunks = []
        result = generator.generate_chapter(sample_project, harvest, "End on the bonfire.", on_chunk=chunks.append)

        assert result.is_success
        assert result.value is harvest
        assert harvest.content == "The pickers came at noon."
        assert harvest.status == ChapterStatus.FIRST_DRAFT
        assert chunks == ["The pickers ", "came at noon."]

        request = provider.stream_completion.call_args.args[0]
        assert request.model == "claude-sonnet-4-5"
        assert request.temperature == 0.7
        assert request.max_tokens == 4050
        assert "Write Chapter 3: Harvest" in request.user_prompt
        assert "Summary: The village gathers for the harvest." in request.user_prompt
        assert "## Additional Instructions\nEnd on the bonfire." in request.user_prompt
        assert "Name: Mara" in request.user_prompt

    def test_project_model_and_temperature(self, generator, provider, sample_project, harvest):
        sample_project.generation_settings = GenerationSettings(model="gpt-4o", temperature=1.1)
        generator.generate_chapter(sample_project, harvest)
        request = provider.stream_completion.call_args.args[0]
        assert request.model == "gpt-4o"
        assert request.temperature == 1.1

    def test_cancelled_keeps_partial_text(self, generator, provider, sample_project, harvest):
        provider.stream_completion.side_effect = GenerationCancelledError(partial_content="The pickers ")
        cancel = threading.Event()
        result = generator.generate_chapter(sample_project, harvest, cancel_event=cancel)
        assert result.error == "Generation cancelled"
        assert harvest.content == "The pickers"
        assert harvest.status == ChapterStatus.DRAFTING

    def test_truncated_keeps_partial_text(self, generator, provider, sample_project, harvest):
        provider.stream_completion.side_effect = _stream(
            "The pickers ", "came", error=ResponseTruncatedError("cut off", model_name="claude-sonnet-4-5")
        )
        result = generator.generate_chapter(sample_project, harvest)
        assert result.error == "Chapter 3 was cut off at the token limit"
        assert isinstance(result.exception, ResponseTruncatedError)
        assert harvest.content == "The pickers came"
        assert harvest.status == ChapterStatus.DRAFTING

    def test_provider_error_leaves_chapter(self, generator, provider, sample_project, harvest):
        provider.stream_completion.side_effect = APIError("Claude API call failed (500): boom")
        result = generator.generate_chapter(sample_project, harvest)
        assert result.error == "Chapter generation failed: Claude API call failed (500): boom"
        assert harvest.content == ""
        assert harvest.status == ChapterStatus.OUTLINED

    def test_chapter_from_another_project(self, generator, provider, sample_project):
        result = generator.generate_chapter(sample_project, Chapter(title="Stray"))
        assert result.error == "Chapter does not belong to this project"
        provider.stream_completion.assert_not_called()


class TestContinueChapter:
    def test_appends_plain_text(self, generator, provider, sample_project):
        chapter = sample_project.chapters[0]
        result = generator.continue_chapter(sample_project, chapter, "Introduce the buyer.")

        assert result.value == "The pickers came at noon."
        assert chapter.content.endswith("Mara walked the rows at dawn.\n\nThe pickers came at noon.")
        assert chapter.status == ChapterStatus.FIRST_DRAFT
        user_prompt = provider.stream_completion.call_args.args[0].user_prompt
        assert "## Chapter 1: Frost (so far)\nThe orchard froze overnight." in user_prompt
        assert "Additional instructions: Introduce the buyer." in user_prompt

    def test_appends_html_paragraphs(self, generator, sample_project):
        chapter = sample_project.chapters[1]
        generator.continue_chapter(sample_project, chapter)
        assert chapter.content.endswith("<p>Nobody read them.</p>\n<p>The pickers came at noon.</p>")

    def test_long_chapter_sends_tail(self, generator, provider, sample_project):
        chapter = sample_project.chapters[0]
        chapter.update_content("opening " + "word " * 5000 + "closing line")
        generator.continue_chapter(sample_project, chapter)
        user_prompt = provider.stream_completion.call_args.args[0].user_prompt
        assert "opening" not in user_prompt
        assert "closing line" in user_prompt

    def test_empty_chapter(self, generator, provider, sample_project):
        result = generator.continue_chapter(sample_project, sample_project.chapters[2])
        assert result.error == "Chapter has no content to continue"
        provider.stream_completion.assert_not_called()

    def test_cancelled_appends_partial(self, generator, provider, sample_project):
        provider.stream_completion.side_effect = GenerationCancelledError(partial_content="The pickers")
        chapter = sample_project.chapters[0]
        result = generator.continue_chapter(sample_project, chapter)
        assert result.error == "Generation cancelled"
        assert chapter.content.endswith("dawn.\n\nThe pickers")


class TestRewriteSection:
    def test_replaces_passage(self, generator, provider, sample_project):
        provider.stream_completion.side_effect = _stream("Ice sealed the orchard by morning.")
        chapter = sample_project.chapters[0]
        result = generator.rewrite_section(
            sample_project, chapter, "The orchard froze overnight.", "Make it more vivid."
        )
        assert result.value == "Ice sealed the orchard by morning."
        assert chapter.content == "Ice sealed the orchard by morning.\n\nMara walked the rows at dawn."

        request = provider.stream_completion.call_args.args[0]
        assert request.max_tokens == 1000
        assert "## Instructions\nMake it more vivid." in request.user_prompt

    @pytest.mark.parametrize(
        "passage, instructions, error",
        [
            ("", "Shorter.", "Passage to rewrite is required"),
            ("The orchard froze overnight.", " ", "Rewrite instructions are required"),
            ("Not in the chapter.", "Shorter.", "Passage not found in chapter"),
        ],
    )
    def test_invalid_input(self, generator, sample_project, passage, instructions, error):
        result = generator.rewrite_section(sample_project, sample_project.chapters[0], passage, instructions)
        assert result.error == error

    def test_truncated_rewrite_leaves_original(self, generator, provider, sample_project):
        provider.stream_completion.side_effect = _stream(
            "Ice sealed", error=ResponseTruncatedError("cut off", model_name="claude-sonnet-4-5")
        )
        chapter = sample_project.chapters[0]
        original = chapter.content
        result = generator.rewrite_section(sample_project, chapter, "The orchard froze overnight.", "Vivid.")
        assert result.error.startswith("Rewrite failed: ")
        assert chapter.content == original


class TestGenerateOutline:
    def test_stores_outline(self, generator, provider, sample_project):
        provider.generate.return_value = SimpleNamespace(content="  1. Hook: the frost.\n2. The buyer arrives.  ")
        chapter = Chapter(title="Auction")
        sample_project.add_chapter(chapter)

        result = generator.generate_outline(sample_project, chapter)
        assert result.value == "1. Hook: the frost.\n2. The buyer arrives."
        assert chapter.outline == result.value
        assert chapter.status == ChapterStatus.OUTLINED

        request = provider.generate.call_args.args[0]
        assert request.max_tokens == 1500
        assert request.temperature == 0.6
        assert "Create a detailed outline for Chapter 4: Auction" in request.user_prompt

    def test_provider_error(self, generator, provider, sample_project):
        provider.generate.side_effect = APIError("rate limited")
        result = generator.generate_outline(sample_project, sample_project.chapters[2])
        assert result.error == "Outline generation failed: rate limited"


class TestEstimateCost:
    def test_positive_estimate(self, generator, sample_project, harvest):
        cost = generator.estimate_cost(sample_project, harvest)
        assert isinstance(cost, Decimal)
        assert cost > 0
