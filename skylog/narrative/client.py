"""
Narrative Service Client
Requests plane diaries and passenger stories from an HTTP text service,
falling back to mock content when the service is missing or fails.
"""

import random
from typing import Any, Dict, Optional

import requests

from ..models import City, Diary, PassengerStory, Plane, Route, StoryChoice
from ..utils import now_ms
from .mock import derive_diary_mood, get_mock_diary, get_mock_story, random_weather


class NarrativeClient:
    """
    Client for the diary and story endpoints.

    Both endpoints take a JSON POST and answer with
    {"diary": {"content": ..., "weather": ...}} or
    {"story": {"passenger_name": ..., "content": ..., "choices": [...]}}.
    With no URL configured the client runs fully offline on mock content.

    Example:
        >>> client = NarrativeClient(diary_url='http://localhost:3000/api/diary')
        >>> diary = client.generate_diary(plane, route, cities)
        >>> repo.add_diary(plane.instance_id, diary)
    """

    def __init__(
        self,
        diary_url: Optional[str] = None,
        story_url: Optional[str] = None,
        timeout: int = 10,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize client.

        Args:
            diary_url: Diary endpoint (None = mock only)
            story_url: Story endpoint (None = mock only)
            timeout: Request timeout in seconds
            rng: Random source for mock content
        """
        self.diary_url = diary_url
        self.story_url = story_url
        self.timeout = timeout
        self.rng = rng or random.Random()

    @classmethod
    def from_config(cls, config) -> "NarrativeClient":
        """Create a client from the 'narrative' config section."""
        return cls(
            diary_url=config.diary_url,
            story_url=config.story_url,
            timeout=config.narrative_timeout,
        )

    def _post(self, url: Optional[str], payload: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
        """
        POST a request and return the named object from the response.

        Returns:
            Response object, or None if unavailable (caller falls back to mock)
        """
        if not url:
            return None

        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

            if isinstance(data, dict) and isinstance(data.get(key), dict):
                return data[key]
            print(f"⚠️  Narrative response without '{key}', using mock content")
            return None

        except requests.exceptions.Timeout:
            print(f"⚠️  Narrative request timeout after {self.timeout}s")
            return None
        except requests.exceptions.RequestException as e:
            print(f"❌ Error requesting {key}: {e}")
            return None
        except ValueError as e:
            print(f"❌ Error parsing {key} response: {e}")
            return None

    def generate_diary(
        self,
        plane: Plane,
        route: Optional[Route] = None,
        cities: Optional[Dict[str, City]] = None,
    ) -> Diary:
        """
        Produce a diary entry for a plane.

        Args:
            plane: Plane writing the diary
            route: Its assigned route, if any
            cities: City lookup for readable route names

        Returns:
            Finished Diary (never None)
        """
        cities = cities or {}
        route_from = route_to = None
        if route is not None:
            route_from = cities[route.origin].name if route.origin in cities else route.origin
            route_to = cities[route.destination].name if route.destination in cities else route.destination

        payload = {
            "plane_id": plane.instance_id,
            "nickname": plane.nickname,
            "personality": plane.personality,
            "mood": plane.mood,
            "bond": plane.bond,
            "level": plane.level,
            "total_flights": plane.total_flights,
            "route_from": route_from,
            "route_to": route_to,
        }

        remote = self._post(self.diary_url, payload, "diary") or {}
        created_at = now_ms()

        return Diary(
            id=f"diary-{plane.instance_id}-{created_at}",
            plane_id=plane.instance_id,
            content=remote.get("content") or get_mock_diary(plane.personality, self.rng),
            mood=derive_diary_mood(plane.mood),
            weather=remote.get("weather") or random_weather(self.rng),
            route_id=route.id if route is not None else None,
            created_at=created_at,
        )

    def generate_story(
        self,
        plane: Plane,
        route: Route,
        cities: Optional[Dict[str, City]] = None,
    ) -> PassengerStory:
        """
        Produce a passenger story for a flight on a route.

        Remote stories without a passenger, content or choices are
        replaced by mock content. Choices missing an id get 'a', 'b', ...

        Returns:
            Finished PassengerStory (never None)
        """
        cities = cities or {}
        origin = cities.get(route.origin)
        destination = cities.get(route.destination)

        payload = {
            "from_city": origin.name if origin else route.origin,
            "to_city": destination.name if destination else route.destination,
            "plane_nickname": plane.nickname,
            "plane_id": plane.instance_id,
            "route_id": route.id,
            "flight_number": plane.total_flights,
        }

        remote = self._post(self.story_url, payload, "story")
        parsed = self._parse_story(remote) if remote else None
        if parsed is None:
            parsed = get_mock_story(self.rng)

        created_at = now_ms()
        return PassengerStory(
            id=f"story-{plane.instance_id}-{created_at}",
            route_id=route.id,
            plane_id=plane.instance_id,
            passenger_name=parsed["passenger_name"],
            content=parsed["content"],
            choices=[StoryChoice(c.id, c.text, c.consequence) for c in parsed["choices"]],
            created_at=created_at,
        )

    @staticmethod
    def _parse_story(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        choices = data.get("choices")
        if not data.get("passenger_name") or not data.get("content") or not isinstance(choices, list):
            print("⚠️  Incomplete story response, using mock content")
            return None

        try:
            parsed_choices = [
                StoryChoice(
                    id=c.get("id") or chr(ord("a") + i),
                    text=c["text"],
                    consequence=c["consequence"],
                )
                for i, c in enumerate(choices)
            ]
        except (KeyError, TypeError, AttributeError) as e:
            print(f"⚠️  Invalid story choices ({e}), using mock content")
            return None

        return {
            "passenger_name": data["passenger_name"],
            "content": data["content"],
            "choices": parsed_choices,
        }
