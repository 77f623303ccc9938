"""
Passenger Story Book
Keeps passenger stories, the story awaiting a choice and the queue of
butterfly effects produced by past choices.
"""

import copy
from typing import Any, Dict, List, Optional

from ..models import PassengerStory

# Consequence keywords -> effect template
BUTTERFLY_RULES = [
    (("thank", "moved"), "{name}'s story raised your airport's reputation"),
    (("online", "posted", "social"), "Your airline got attention on social media"),
    (("come back", "again"), "{name} may fly with you again"),
    (("dream", "brave", "change"), "A small gesture of yours changed someone's path in life"),
]


def generate_butterfly_effects(passenger_name: str, choice_text: str, consequence: str) -> List[str]:
    """
    Derive butterfly effect descriptions from a story choice.

    Always returns at least one effect.

    Example:
        >>> generate_butterfly_effects('Lin', 'Bring a towel', 'She was moved')
        ["Lin's story raised your airport's reputation"]
    """
    text = consequence.lower()
    effects = [
        template.format(name=passenger_name)
        for keywords, template in BUTTERFLY_RULES
        if any(keyword in text for keyword in keywords)
    ]

    if not effects:
        effects.append(f"{passenger_name} will remember this journey")

    return effects


class StoryBook:
    """Passenger stories and their butterfly effects."""

    def __init__(self) -> None:
        self.stories: List[PassengerStory] = []
        self.pending_story: Optional[PassengerStory] = None
        self.butterfly_queue: List[str] = []

    def add_story(self, story: PassengerStory) -> None:
        self.stories.append(story)

    def set_pending_story(self, story: Optional[PassengerStory]) -> None:
        self.pending_story = story

    def get_story(self, story_id: str) -> Optional[PassengerStory]:
        for story in self.stories:
            if story.id == story_id:
                return story
        return None

    def make_choice(self, story_id: str, choice_id: str) -> Optional[List[str]]:
        """
        Answer a story.

        Records the chosen id and its consequence as the outcome, clears
        the pending story and queues the resulting butterfly effects.

        Args:
            story_id: Story to answer
            choice_id: Id of one of its choices

        Returns:
            Butterfly effects, or None if the story or choice is unknown
        """
        story = self.get_story(story_id)
        if story is None:
            print(f"⚠️  Unknown story '{story_id}'")
            return None

        choice = next((c for c in story.choices if c.id == choice_id), None)
        if choice is None:
            print(f"⚠️  Story '{story_id}' has no choice '{choice_id}'")
            return None

        story.chosen_id = choice.id
        story.outcome = choice.consequence
        self.pending_story = None

        effects = generate_butterfly_effects(story.passenger_name, choice.text, choice.consequence)
        story.butterfly_effects.extend(effects)
        for effect in effects:
            self.add_butterfly_effect(effect)

        return effects

    def add_butterfly_effect(self, effect: str) -> None:
        self.butterfly_queue.append(effect)

    def get_recent_stories(self, count: int) -> List[PassengerStory]:
        """Get the newest stories, oldest first."""
        if count <= 0:
            return []
        return copy.deepcopy(self.stories[-count:])

    def snapshot(self) -> Dict[str, Any]:
        """Serializable state for the 'stories' save."""
        return {
            "stories": [s.to_dict() for s in self.stories],
            "butterfly_queue": list(self.butterfly_queue),
        }

    @classmethod
    def hydrate(cls, saved: Optional[Dict[str, Any]]) -> "StoryBook":
        """Restore stories and effects; a pending story is never restored."""
        book = cls()
        if saved:
            book.stories = [PassengerStory.from_dict(s) for s in saved.get("stories") or []]
            book.butterfly_queue = list(saved.get("butterfly_queue") or [])
        return book
