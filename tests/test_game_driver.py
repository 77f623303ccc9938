"""
Tests for the SKYLOG game driver.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.game import GameDriver, GameEvent
from skylog.models import FlightStatus
from skylog.narrative import NarrativeClient
from skylog.simulation.flight import flight_time_ms


@pytest.fixture
def config(temp_config):
    temp_config.set("player.starting_cities", ["alpha", "bravo", "charlie"])
    return temp_config


@pytest.fixture
def driver(config, tiny_catalog):
    """Started driver on a fresh save at t=0."""
    d = GameDriver(config, catalog=tiny_catalog, narrative=NarrativeClient())
    d.start(now=0)
    return d


def make_driver(config, catalog):
    return GameDriver(config, catalog=catalog, narrative=NarrativeClient())


class TestStart:
    """Tests for GameDriver.start."""

    def test_fresh_start(self, driver):
        assert driver.ledger.coins == 10000
        assert driver.ledger.unlocked_cities == ["alpha", "bravo", "charlie"]
        assert [p.instance_id for p in driver.repo.list_planes()] == ["p1", "p2"]
        assert len(driver.repo.list_routes()) == 3
        assert driver.ledger.collection["test-70"].owned_count == 2

    def test_commands_before_start(self, config, tiny_catalog):
        with pytest.raises(RuntimeError):
            make_driver(config, tiny_catalog).run_single_tick()

    def test_offline_catch_up(self, driver, config, tiny_catalog):
        driver.repo.assign_route("p1", "alpha-bravo")
        driver.save(now=0)
        flight_ms = flight_time_ms(driver.repo.get_route("alpha-bravo"))

        returning = make_driver(config, tiny_catalog)
        report = returning.start(now=3 * flight_ms)

        assert report.flights_completed == 3
        # first_flight and explorer_3 rewards
        assert returning.ledger.coins == 10000 + report.coins_earned + 500 + 200
        assert returning.repo.get_plane("p1").total_flights == 3
        assert returning.ledger.last_online == 3 * flight_ms
        assert any(n.type == "welcome_back" for n in returning.ledger.notifications)

    def test_short_absence_skips_catch_up(self, driver, config, tiny_catalog):
        driver.repo.assign_route("p1", "alpha-bravo")
        driver.save(now=0)

        returning = make_driver(config, tiny_catalog)
        assert returning.start(now=4 * 60_000) is None
        assert returning.repo.get_plane("p1").total_flights == 0

    def test_expired_events_dropped(self, driver, config, tiny_catalog):
        driver.state.add_event(GameEvent("e1", "festival", "Lanterns", end_at=1000))
        driver.state.add_event(GameEvent("e2", "weather", "Storm", end_at=10**12))
        driver.save(now=0)

        returning = make_driver(config, tiny_catalog)
        returning.start(now=2000)
        assert [e.id for e in returning.state.active_events] == ["e2"]


class TestTick:
    """Tests for GameDriver.run_single_tick."""

    def test_completed_flight_credited(self, driver):
        driver.repo.assign_route("p1", "alpha-bravo")
        driver.repo.start_flight("p1", now=0)
        flight_ms = flight_time_ms(driver.repo.get_route("alpha-bravo"))

        results = driver.run_single_tick(now=flight_ms)

        assert len(results) == 1
        assert driver.ledger.coins == 10000 + results[0].revenue + 500 + 200
        assert driver.ledger.has_achievement("first_flight")
        assert driver.ledger.exp == 5 + 50

    def test_auto_start(self, driver):
        driver.repo.assign_route("p1", "alpha-bravo")

        driver.run_single_tick(now=1000)
        assert driver.repo.get_plane("p1").flight_status == FlightStatus.IDLE

        driver.run_single_tick(now=6000)
        assert driver.repo.get_plane("p1").flight_status == FlightStatus.TAXIING

    def test_pause(self, driver):
        driver.repo.assign_route("p1", "alpha-bravo")
        driver.repo.start_flight("p1", now=0)
        driver.state.toggle_pause()

        assert driver.run_single_tick(now=10**7) == []
        assert driver.repo.get_plane("p1").flight_progress == 0.0

        driver.state.toggle_pause()
        driver.run_single_tick(now=10**7 + 1000)
        assert 0 < driver.repo.get_plane("p1").flight_progress < 0.01

    def test_periodic_save(self, driver):
        assert driver.db.load("player") is None
        driver.run_single_tick(now=31_000)
        assert driver.db.load("player")["last_online"] == 31_000


class TestCommands:
    """Tests for player commands."""

    def test_unlock_city(self, driver):
        assert driver.unlock_city("delta")
        assert len(driver.repo.list_routes()) == 6
        assert not driver.unlock_city("delta")
        assert not driver.unlock_city("atlantis")

    def test_request_diary(self, driver):
        diary = driver.request_diary("p1")

        assert diary.plane_id == "p1"
        assert diary.content
        assert len(driver.repo.get_plane("p1").diaries) == 1
        assert driver.ledger.total_diaries_read == 1
        assert driver.request_diary("ghost") is None

    def test_story_flow(self, driver):
        assert driver.request_story("p1") is None  # no route yet

        driver.repo.assign_route("p1", "alpha-bravo")
        story = driver.request_story("p1")

        assert story.route_id == "alpha-bravo"
        assert driver.stories.pending_story is story
        assert driver.ledger.total_stories_read == 1

        effects = driver.choose_story(story.id, story.choices[0].id)

        assert effects
        assert driver.ledger.reputation == 5
        assert driver.stories.pending_story is None
        assert driver.choose_story(story.id, "zz") is None
        assert driver.ledger.reputation == 5

    def test_save_roundtrip(self, driver, config, tiny_catalog):
        driver.repo.assign_route("p1", "alpha-bravo")
        driver.ledger.add_coins(123)
        driver.save(now=0)

        restored = make_driver(config, tiny_catalog)
        restored.start(now=1000)

        assert restored.ledger.coins == 10123
        assert restored.repo.get_plane("p1").assigned_route == "alpha-bravo"


class TestRun:
    """Tests for the console loop."""

    def test_welcome_back_printed(self, driver, config, tiny_catalog, capsys):
        driver.repo.assign_route("p1", "alpha-bravo")
        driver.save(now=0)
        flight_ms = flight_time_ms(driver.repo.get_route("alpha-bravo"))

        returning = make_driver(config, tiny_catalog)
        returning.print_welcome_back(returning.start(now=2 * flight_ms))

        out = capsys.readouterr().out
        assert "Welcome back" in out
        assert "2 flights" in out

    def test_welcome_back_silent_without_earnings(self, driver, capsys):
        driver.print_welcome_back(None)
        assert capsys.readouterr().out == ""

    @patch("scripts.play.GameDriver")
    def test_play_script_shows_offline_report(self, mock_driver_cls, tmp_path):
        from scripts import play

        driver = mock_driver_cls.return_value
        argv = ["play.py", "--db", str(tmp_path / "saves.db"), "--ticks", "1"]

        with patch.object(sys, "argv", argv):
            play.main()

        driver.print_welcome_back.assert_called_once_with(driver.start.return_value)
        driver.run.assert_called_once_with(max_ticks=1)

    @patch("skylog.game.driver.time.sleep")
    def test_run_limited_ticks_saves(self, mock_sleep, config, tiny_catalog):
        d = make_driver(config, tiny_catalog)
        d.start()
        d.run(max_ticks=3)

        assert d.tick_count == 3
        assert mock_sleep.call_count == 3
        assert d.db.load("planes") is not None

    @patch("skylog.game.driver.time.sleep", side_effect=KeyboardInterrupt)
    def test_interrupt_saves(self, mock_sleep, config, tiny_catalog):
        d = make_driver(config, tiny_catalog)
        d.run()

        assert d.is_started
        assert d.db.load("player") is not None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
