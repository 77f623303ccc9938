"""
Tests for session game state and events.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.game import GameEvent, GameState


class TestGameState:
    """Tests for GameState class."""

    def test_toggle_pause(self):
        state = GameState()
        assert state.toggle_pause() is True
        assert state.toggle_pause() is False

    def test_events(self):
        state = GameState()
        state.add_event(GameEvent("e1", "festival", "Lanterns", end_at=100,
                                  effects={"revenue_multiplier": 1.5}))
        state.add_event(GameEvent("e2", "weather", "Fog", end_at=500, city_id="alpha"))

        assert state.clean_expired_events(now=100) == 1
        assert [e.id for e in state.active_events] == ["e2"]

        state.remove_event("e2")
        assert state.active_events == []

    def test_unknown_type_still_added(self):
        state = GameState()
        state.add_event(GameEvent("e1", "parade", "Parade", end_at=10))
        assert len(state.active_events) == 1

    def test_snapshot_roundtrip(self):
        state = GameState()
        state.toggle_pause()
        state.add_event(GameEvent("e1", "special", "Anniversary", "Double coins",
                                  {"revenue_multiplier": 2.0}, 0, 1000))

        restored = GameState.hydrate(state.snapshot())

        assert not restored.is_paused
        assert restored.active_events[0].effects == {"revenue_multiplier": 2.0}
        assert restored.active_events[0].description == "Double coins"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
