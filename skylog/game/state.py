"""
SKYLOG Game State
Pause flag and timed world events.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..utils import now_ms
from .constants import EVENT_TYPES


@dataclass
class GameEvent:
    """A timed world event (weather, festival, incident, special)."""

    id: str
    type: str
    title: str
    description: str = ""
    effects: Dict[str, float] = field(default_factory=dict)  # e.g. {'revenue_multiplier': 1.5}
    start_at: int = 0
    end_at: int = 0
    city_id: Optional[str] = None

    def is_active(self, now: int) -> bool:
        return self.end_at > now


class GameState:
    """Session-wide game flags and active events."""

    def __init__(self) -> None:
        self.is_paused = False
        self.active_events: List[GameEvent] = []

    def toggle_pause(self) -> bool:
        """Flip the pause flag; returns the new value."""
        self.is_paused = not self.is_paused
        return self.is_paused

    def add_event(self, event: GameEvent) -> None:
        if event.type not in EVENT_TYPES:
            print(f"⚠️  Unknown event type '{event.type}'")
        self.active_events.append(event)

    def remove_event(self, event_id: str) -> None:
        self.active_events = [e for e in self.active_events if e.id != event_id]

    def clean_expired_events(self, now: Optional[int] = None) -> int:
        """
        Drop events that have ended.

        Returns:
            Number of events removed
        """
        now = now if now is not None else now_ms()
        before = len(self.active_events)
        self.active_events = [e for e in self.active_events if e.is_active(now)]
        return before - len(self.active_events)

    def snapshot(self) -> Dict[str, Any]:
        """Serializable state for the 'game' save (pause is not persisted)."""
        return {"active_events": [asdict(e) for e in self.active_events]}

    @classmethod
    def hydrate(cls, saved: Optional[Dict[str, Any]]) -> "GameState":
        state = cls()
        if saved:
            state.active_events = [GameEvent(**e) for e in saved.get("active_events") or []]
        return state
