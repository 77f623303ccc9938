"""
Tests for passenger stories, butterfly effects and mock content.
"""

import random

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.models import PassengerStory, StoryChoice
from skylog.narrative import StoryBook, generate_butterfly_effects
from skylog.narrative.mock import (
    MOCK_DIARIES,
    PERSONALITIES,
    derive_diary_mood,
    get_mock_diary,
)


def make_story(story_id="s1"):
    return PassengerStory(
        id=story_id,
        route_id="alpha-bravo",
        plane_id="p1",
        passenger_name="Mira",
        content="Mira is flying home.",
        choices=[
            StoryChoice("a", "Offer a blanket", "She was moved and said thank you"),
            StoryChoice("b", "Let her sleep", "She slept the whole way"),
        ],
        created_at=1,
    )


class TestButterflyEffects:
    """Tests for generate_butterfly_effects."""

    def test_keyword_match(self):
        effects = generate_butterfly_effects("Mira", "Offer", "She was Moved to tears")
        assert effects == ["Mira's story raised your airport's reputation"]

    def test_several_matches(self):
        effects = generate_butterfly_effects("Tom", "Chat", "He posted online and will come back")
        assert len(effects) == 2

    def test_fallback(self):
        assert generate_butterfly_effects("Tom", "Wave", "Nothing happened") == [
            "Tom will remember this journey"
        ]


class TestStoryBook:
    """Tests for StoryBook."""

    def test_make_choice(self):
        book = StoryBook()
        story = make_story()
        book.add_story(story)
        book.set_pending_story(story)

        effects = book.make_choice("s1", "a")

        assert effects == ["Mira's story raised your airport's reputation"]
        assert story.chosen_id == "a"
        assert story.outcome == "She was moved and said thank you"
        assert story.butterfly_effects == effects
        assert book.pending_story is None
        assert book.butterfly_queue == effects

    def test_unknown_story_or_choice(self):
        book = StoryBook()
        book.add_story(make_story())

        assert book.make_choice("nope", "a") is None
        assert book.make_choice("s1", "z") is None
        assert book.get_story("s1").chosen_id is None

    def test_recent_stories(self):
        book = StoryBook()
        for i in range(4):
            book.add_story(make_story(f"s{i}"))

        assert [s.id for s in book.get_recent_stories(2)] == ["s2", "s3"]
        assert book.get_recent_stories(0) == []

    def test_snapshot_drops_pending(self):
        book = StoryBook()
        story = make_story()
        book.add_story(story)
        book.set_pending_story(story)
        book.add_butterfly_effect("Something changed")

        restored = StoryBook.hydrate(book.snapshot())

        assert restored.get_story("s1").choices[0].id == "a"
        assert restored.butterfly_queue == ["Something changed"]
        assert restored.pending_story is None

    def test_hydrate_empty(self):
        book = StoryBook.hydrate(None)
        assert book.stories == []


class TestMockContent:
    """Tests for mock diaries and moods."""

    @pytest.mark.parametrize("mood,label", [
        (100, "happy"), (81, "happy"), (80, "peaceful"), (61, "peaceful"),
        (60, "excited"), (41, "excited"), (40, "tired"), (21, "tired"),
        (20, "melancholy"), (0, "melancholy"),
    ])
    def test_diary_mood(self, mood, label):
        assert derive_diary_mood(mood) == label

    def test_every_personality_has_diaries(self):
        for personality in PERSONALITIES:
            assert MOCK_DIARIES[personality]

    def test_unknown_personality_uses_dreamer(self):
        text = get_mock_diary("grumpy", random.Random(3))
        assert text in MOCK_DIARIES["dreamer"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
