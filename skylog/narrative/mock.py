"""
Mock Narrative Content
Offline diary entries, passenger stories and weather used whenever no
narrative service is configured or reachable.
"""

import random
from typing import Dict, List, Optional

from ..models import StoryChoice

PERSONALITIES = ("dreamer", "steady", "adventurer", "gentle", "proud", "shy")

WEATHER_OPTIONS = [
    "Clear skies for miles",
    "A few white clouds",
    "Thin veil of cirrus",
    "Stratocumulus all the way",
    "Sunset on the cloud edges",
    "Stars over the wing",
    "Light drizzle",
    "Thunderstorms in the distance",
    "Strong headwind",
    "Tailwind, arrived early",
    "Excellent visibility",
    "Hazy and grey",
    "Moonlight on the wings",
    "Above a sea of clouds",
    "Rainbow outside the window",
]

MOCK_DIARIES: Dict[str, List[str]] = {
    "dreamer": [
        "A cloud today looked just like a whale, swimming slowly across the sky. If I climbed a little higher, maybe we could talk.",
        "At sunset the whole sky turned peach. My wings caught the color too, like a brand new coat.",
        "Night flight. Moonlight came in from the left side. I counted more than three hundred stars, seventeen more than yesterday.",
        "One cloud looked like cotton candy. I wished I could stop and rest on it for a while. Of course I didn't.",
    ],
    "steady": [
        "Flight summary: departed on time, landed on time. Fuel burn 3% under plan, the winds were kind. All normal.",
        "Another safe landing. Wet runway, 12 knots of crosswind, spoilers deployed as expected. Passengers won't notice. I do.",
        "Fifteenth rotation on this route. I know every bump of turbulence by now. Efficiency is improving.",
        "Engines smooth, all systems green. Sometimes 'all normal' is the best diary entry there is.",
    ],
    "adventurer": [
        "FINALLY a new route! Never flown this way before, the coastline looks completely different! My engines are humming with excitement!",
        "Same route again... honestly a bit boring. There was a crosswind challenge today though, so that counts for something.",
        "Skimmed the edge of a thunderstorm today. Very bumpy. Honestly? I loved it. Don't tell the captain.",
        "I heard someone flew the polar route! How cool is that! When is it my turn? I'm ready!",
    ],
    "gentle": [
        "An elderly lady gave her window seat to the little boy next to her. I flew as smoothly as I could so they'd enjoy the trip.",
        "The landing was a little bumpy, I hope nobody got scared. I'll do better next time.",
        "I heard a baby laughing in the cabin. For that, I'd fly any distance.",
        "Not a perfect flight, but watching everyone walk off safe and sound was enough for me.",
    ],
    "proud": [
        "Perfect landing. Textbook smooth. If anyone were scoring, at least a 9.5. No, 9.8.",
        "My livery looked especially good in the sun today. The other planes on the apron were staring. Maybe. Maybe not.",
        "Twelve minutes late, but that was the storm. Not my fault. I took off the moment it cleared. Still excellent.",
        "The captain said I 'flew really steady' today. Well, I always do. Still... I didn't mind hearing it.",
    ],
    "shy": [
        "Today was... fine. Flew once. Nothing special... probably.",
        "The captain seemed to look at me a second longer. Maybe I'm imagining it. If not... that's kind of nice.",
        "Do the passengers know it's me flying them? ...It probably doesn't matter.",
        "The sunset was beautiful. I wanted to say so but didn't know how. Just... beautiful.",
    ],
}

MOCK_STORIES = [
    {
        "passenger_name": "Lin Xiaoyu",
        "content": (
            "The girl in 17C kept scrolling to the same photo: her and a white-haired "
            "old man. She hadn't been home in three years. Just before landing she "
            "started crying, then dried her eyes and fixed her makeup."
        ),
        "choices": [
            StoryChoice("a", "Have the crew bring her a warm towel and a note",
                        "She was moved and said she would come back to fly with you again"),
            StoryChoice("b", "Leave her alone with her thoughts",
                        "She walked off quietly and will remember this journey"),
        ],
    },
    {
        "passenger_name": "Marco Rossi",
        "content": (
            "The man in 3A sketched buildings on napkins the whole flight. When the "
            "attendant asked, he said he quit his architecture job last week to "
            "chase a dream of designing a museum of his own."
        ),
        "choices": [
            StoryChoice("a", "Ask the captain to announce a good-luck message",
                        "He felt brave enough to change everything, and posted about it online"),
            StoryChoice("b", "Give him a stack of fresh napkins",
                        "He laughed and thanked the crew before landing"),
        ],
    },
    {
        "passenger_name": "Chen Wei",
        "content": (
            "A boy flying alone for the first time held his boarding pass with both "
            "hands. His mother had written 'be brave' on the back of it."
        ),
        "choices": [
            StoryChoice("a", "Invite him to see the cockpit after landing",
                        "His dream of becoming a pilot started that day"),
            StoryChoice("b", "Give him a pair of junior pilot wings",
                        "He pinned them on and showed everyone at arrivals"),
        ],
    },
]


def random_weather(rng: Optional[random.Random] = None) -> str:
    """Pick a weather description."""
    return (rng or random).choice(WEATHER_OPTIONS)


def derive_diary_mood(plane_mood: int) -> str:
    """
    Diary mood label for a plane mood value.

    Example:
        >>> derive_diary_mood(85)
        'happy'
    """
    if plane_mood > 80:
        return "happy"
    if plane_mood > 60:
        return "peaceful"
    if plane_mood > 40:
        return "excited"
    if plane_mood > 20:
        return "tired"
    return "melancholy"


def get_mock_diary(personality: str, rng: Optional[random.Random] = None) -> str:
    """Get a mock diary text; unknown personalities use the dreamer set."""
    entries = MOCK_DIARIES.get(personality, MOCK_DIARIES["dreamer"])
    return (rng or random).choice(entries)


def get_mock_story(rng: Optional[random.Random] = None) -> dict:
    """Get a mock passenger story as {passenger_name, content, choices}."""
    return (rng or random).choice(MOCK_STORIES)
