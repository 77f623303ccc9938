"""
SKYLOG Narrative Component

Plane diaries and passenger stories, from an HTTP text service or from
built-in mock content.

Main Classes:
    - NarrativeClient: Diary and story generation
    - StoryBook: Story history, pending story and butterfly effects

Modules:
    - client: HTTP client with mock fallback
    - mock: Offline diaries, stories and weather
    - stories: Story book and butterfly effects

Example:
    >>> from skylog.narrative import NarrativeClient, StoryBook
    >>> client = NarrativeClient()
    >>> book = StoryBook()
    >>> story = client.generate_story(plane, route, catalog.cities)
    >>> book.add_story(story)
    >>> book.make_choice(story.id, 'a')
"""

from .client import NarrativeClient
from .stories import StoryBook, generate_butterfly_effects

from . import client
from . import mock
from . import stories

__all__ = [
    # Main classes
    "NarrativeClient",
    "StoryBook",
    "generate_butterfly_effects",
    # Modules
    "client",
    "mock",
    "stories",
]
