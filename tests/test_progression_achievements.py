"""
Tests for achievement checks.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.models import AchievementDef
from skylog.progression import PlayerLedger, achievement_progress, check_achievements


@pytest.fixture
def ledger(tiny_catalog):
    return PlayerLedger(coins=0, gems=0, unlocked_cities=["alpha", "bravo"],
                        model_ids=tiny_catalog.models, now=0)


class TestCheckAchievements:
    """Tests for check_achievements."""

    def test_nothing_met(self, ledger, tiny_catalog):
        unlocked = check_achievements(ledger, {"total_flights": 0}, tiny_catalog.achievements)
        assert unlocked == []
        assert ledger.achievements == []

    def test_first_flight_rewards(self, ledger, tiny_catalog):
        unlocked = check_achievements(ledger, {"total_flights": 1}, tiny_catalog.achievements)

        assert [a.id for a in unlocked] == ["first_flight"]
        assert ledger.coins == 500
        assert ledger.exp == 50

    def test_only_once(self, ledger, tiny_catalog):
        check_achievements(ledger, {"total_flights": 1}, tiny_catalog.achievements)
        again = check_achievements(ledger, {"total_flights": 5}, tiny_catalog.achievements)
        assert again == []
        assert ledger.coins == 500

    def test_city_condition(self, ledger, tiny_catalog):
        ledger.unlock_city("charlie")
        unlocked = check_achievements(ledger, {}, tiny_catalog.achievements)
        assert [a.id for a in unlocked] == ["explorer_3"]
        assert ledger.gems == 5

    def test_progress_sources(self, ledger):
        ledger.discover_plane("test-70")
        ledger.increment_stories_read()
        stats = {"total_flights": 7, "total_distance": 1234}

        def progress(condition):
            return achievement_progress(AchievementDef("x", "X", condition, 1), ledger, stats)

        assert progress("flights") == 7
        assert progress("distance") == 1234
        assert progress("planes") == 1
        assert progress("cities") == 2
        assert progress("stories") == 1
        assert progress("diary") == 0
        assert progress("level") == 1
        assert progress("coins") == 0
        assert progress("mystery") == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
