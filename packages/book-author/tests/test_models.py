"""Tests for the domain models."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from book_author.models import (
    Chapter,
    ChapterStatus,
    Character,
    CharacterRelationship,
    Location,
    LocationType,
    Outline,
    OutlineItem,
    OutlineItemType,
    Project,
    ProjectStatistics,
    Scene,
    WizardStep,
    count_words,
)


class TestEntity:
    """Tests for identity and timestamps."""

    def test_equality_by_id(self):
        """Test entities with the same id compare equal whatever their fields."""
        chapter = Chapter(title="One")
        copy = chapter.model_copy(update={"title": "Changed"})
        assert chapter == copy
        assert chapter != Chapter(title="One")
        assert len({chapter, copy}) == 1

    def test_mark_modified_moves_forward(self):
        chapter = Chapter(title="One")
        before = chapter.modified_at
        chapter.mark_modified()
        assert chapter.modified_at >= before
        assert chapter.created_at.tzinfo is not None


class TestWordCount:
    def test_count_words(self):
        assert count_words(None) == 0
        assert count_words("   ") == 0
        assert count_words("one  two\nthree") == 3

    def test_chapter_completion_capped(self):
        """Test completion is capped at 100 and zero targets report zero."""
        chapter = Chapter(title="A", content="word " * 50, target_word_count=10)
        assert chapter.word_count == 50
        assert chapter.completion_percentage == 100.0
        chapter.target_word_count = 0
        assert chapter.completion_percentage == 0.0


class TestChapterScenes:
    def test_add_and_remove_scenes_renumber(self):
        chapter = Chapter(title="A")
        first, second, third = Scene(title="1"), Scene(title="2"), Scene(title="3")
        for scene in (first, second, third):
            chapter.add_scene(scene)
        assert [s.order for s in chapter.scenes] == [1, 2, 3]

        assert chapter.remove_scene(second.id) is True
        assert [s.title for s in chapter.scenes] == ["1", "3"]
        assert [s.order for s in chapter.scenes] == [1, 2]
        assert chapter.remove_scene(uuid4()) is False


class TestProject:
    """Tests for chapter ordering on the project aggregate."""

    def test_add_chapter_assigns_order(self):
        project = Project(name="Book")
        project.add_chapter(Chapter(title="A", order=9))
        project.add_chapter(Chapter(title="B"))
        assert [c.order for c in project.chapters] == [1, 2]

    def test_remove_chapter_renumbers(self):
        project = Project(name="Book")
        chapters = [Chapter(title=t) for t in "ABC"]
        for chapter in chapters:
            project.add_chapter(chapter)

        assert project.remove_chapter(chapters[0].id) is True
        assert [(c.title, c.order) for c in project.chapters] == [("B", 1), ("C", 2)]
        assert project.remove_chapter(uuid4()) is False

    def test_move_chapter_clamps(self):
        """Test moving past either end clamps to the first or last slot."""
        project = Project(name="Book")
        chapters = [Chapter(title=t) for t in "ABC"]
        for chapter in chapters:
            project.add_chapter(chapter)

        project.move_chapter(chapters[0].id, 99)
        assert [c.title for c in project.chapters] == ["B", "C", "A"]
        project.move_chapter(chapters[0].id, -5)
        assert [c.title for c in project.chapters] == ["A", "B", "C"]
        assert [c.order for c in project.chapters] == [1, 2, 3]

    def test_total_words_and_completion(self, sample_project):
        assert sample_project.total_word_count == 16
        assert sample_project.completion_percentage == pytest.approx(1.6)

    def test_file_path_not_serialized(self):
        project = Project(name="Book", file_path="/tmp/book.abpro")
        assert "file_path" not in project.model_dump()

    def test_assignment_is_validated(self):
        project = Project(name="Book")
        with pytest.raises(ValidationError):
            project.generation_settings.temperature = 5.0


class TestCharacterAndLocation:
    def test_character_context_string(self):
        """Test only populated fields appear in the prompt context."""
        character = Character(name="Mara", age=34, personality_traits=["stubborn", "kind"], goals="Save the farm")
        text = character.to_context_string()
        assert text.splitlines() == [
            "Name: Mara",
            "Role: Supporting",
            "Age: 34",
            "Personality: stubborn, kind",
            "Goals: Save the farm",
        ]

    def test_relationships(self):
        other = uuid4()
        character = Character(name="Mara")
        character.add_relationship(CharacterRelationship(other_character_id=other, relationship_type="sister"))
        assert character.remove_relationship(other) is True
        assert character.remove_relationship(other) is False

    def test_relationship_strength_range(self):
        with pytest.raises(ValidationError):
            CharacterRelationship(other_character_id=uuid4(), strength=11)

    def test_location_context_string(self):
        location = Location(name="Orchard", location_type=LocationType.NATURAL, features=["frost", "ladders"])
        assert location.to_context_string() == "Location: Orchard\nType: Natural\nFeatures: frost, ladders"

    def test_location_other_type_omitted(self):
        assert Location(name="Somewhere").to_context_string() == "Location: Somewhere"


class TestOutline:
    def test_flatten_is_depth_first(self):
        outline = Outline()
        act = OutlineItem(title="Act I", item_type=OutlineItemType.ACT)
        outline.add_item(act)
        act.add_child(OutlineItem(title="Ch 1"))
        act.add_child(OutlineItem(title="Ch 2"))
        act.children[0].add_child(OutlineItem(title="Beat", item_type=OutlineItemType.BEAT))
        outline.add_item(OutlineItem(title="Act II", item_type=OutlineItemType.ACT))

        assert [item.title for item in outline.flatten()] == ["Act I", "Ch 1", "Beat", "Ch 2", "Act II"]

    def test_remove_item_renumbers(self):
        outline = Outline()
        items = [OutlineItem(title=t) for t in "ABC"]
        for item in items:
            outline.add_item(item)
        assert outline.remove_item(items[1].id) is True
        assert [(i.title, i.order) for i in outline.items] == [("A", 1), ("C", 2)]


class TestProjectStatistics:
    """Tests for derived project statistics."""

    def test_from_project(self, sample_project):
        stats = ProjectStatistics.from_project(sample_project)
        assert stats.total_chapters == 3
        assert stats.completed_chapters == 1
        assert stats.total_word_count == 16
        assert stats.character_count == 1
        assert stats.location_count == 1
        assert stats.chapters_by_status[ChapterStatus.OUTLINED] == 1
        assert set(stats.chapters_by_status) == set(ChapterStatus)
        assert stats.estimated_reading_time_minutes == 0
        assert stats.average_words_per_chapter == pytest.approx(16 / 3)

    def test_empty_project(self):
        stats = ProjectStatistics.from_project(Project(name="Empty", target_word_count=0))
        assert stats.average_words_per_chapter == 0.0
        assert stats.completion_percentage == 0.0

    def test_reading_time(self):
        project = Project(name="Long")
        project.add_chapter(Chapter(title="A", content="word " * 1000))
        assert ProjectStatistics.from_project(project).estimated_reading_time_minutes == 4


class TestWizardStep:
    def test_navigation_properties(self):
        assert WizardStep.PROMPT_ENTRY.position == 0
        assert WizardStep.ANALYSIS.next == WizardStep.CLARIFICATION
        assert WizardStep.GENERATION.next == WizardStep.GENERATION
        assert WizardStep.PROMPT_ENTRY.previous == WizardStep.PROMPT_ENTRY
