"""
Tests for offline catch-up.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.models import FlightStatus, Plane
from skylog.simulation.economy import flight_revenue
from skylog.simulation.flight import flight_time_ms
from skylog.simulation.offline import apply_offline_progress, calculate_offline_earnings
from skylog.simulation.routes import generate_routes
from skylog.utils import round_half_up

HOUR_MS = 3_600_000


@pytest.fixture
def routes(tiny_catalog):
    return {r.id: r for r in generate_routes(["alpha", "bravo", "charlie"], tiny_catalog)}


@pytest.fixture
def flyer(routes):
    route = routes["alpha-bravo"]
    plane = Plane(instance_id="p1", model_id="test-70", nickname="One", personality="dreamer")
    plane.assigned_route = route.id
    route.assigned_plane_id = plane.instance_id
    return plane


@pytest.fixture
def idler():
    return Plane(instance_id="p2", model_id="test-70", nickname="Two",
                 personality="dreamer", mood=50)


class TestCalculateOfflineEarnings:
    """Tests for calculate_offline_earnings."""

    def test_three_whole_flights(self, flyer, routes, tiny_catalog):
        """Exactly three flight times offline: 3 flights at 80% revenue."""
        route = routes["alpha-bravo"]
        per_flight = flight_revenue(route, flyer, tiny_catalog.get_model("test-70"))

        report = calculate_offline_earnings(
            [flyer], routes.values(), tiny_catalog, 3 * flight_time_ms(route)
        )

        assert report.flights_completed == 3
        assert report.plane_flights == {"p1": 3}
        assert report.coins_earned == round_half_up(per_flight * 3 * 0.8)

    def test_partial_flight_not_counted(self, flyer, routes, tiny_catalog):
        route = routes["alpha-bravo"]
        report = calculate_offline_earnings(
            [flyer], routes.values(), tiny_catalog, flight_time_ms(route) - 1
        )
        assert report.flights_completed == 0
        assert report.coins_earned == 0
        assert report.plane_flights == {}

    def test_unassigned_planes_earn_nothing(self, idler, routes, tiny_catalog):
        report = calculate_offline_earnings([idler], routes.values(), tiny_catalog, 10 * HOUR_MS)
        assert report.flights_completed == 0

    def test_unknown_model_skipped(self, flyer, routes, tiny_catalog):
        flyer.model_id = "missing"
        report = calculate_offline_earnings([flyer], routes.values(), tiny_catalog, 10 * HOUR_MS)
        assert report.flights_completed == 0

    def test_does_not_mutate_planes(self, flyer, routes, tiny_catalog):
        calculate_offline_earnings([flyer], routes.values(), tiny_catalog, 10 * HOUR_MS)
        assert flyer.total_flights == 0
        assert flyer.mood == 80


class TestApplyOfflineProgress:
    """Tests for apply_offline_progress."""

    def test_flyer_mood_and_totals(self, flyer, routes, tiny_catalog):
        route = routes["alpha-bravo"]
        report = calculate_offline_earnings(
            [flyer], routes.values(), tiny_catalog, 3 * flight_time_ms(route)
        )
        apply_offline_progress([flyer], routes.values(), report)

        assert flyer.mood == 71
        assert flyer.total_flights == 3
        assert flyer.total_distance == 333
        assert flyer.flight_status == FlightStatus.IDLE  # status untouched

    def test_mood_floor(self, flyer, routes, tiny_catalog):
        flyer.mood = 20
        route = routes["alpha-bravo"]
        report = calculate_offline_earnings(
            [flyer], routes.values(), tiny_catalog, 10 * flight_time_ms(route)
        )
        apply_offline_progress([flyer], routes.values(), report)
        assert flyer.mood == 10

    def test_idle_recovery(self, idler, routes, tiny_catalog):
        """Dreamer recovers 8 points per hour, capped at 100."""
        report = calculate_offline_earnings([idler], routes.values(), tiny_catalog, 2 * HOUR_MS)
        apply_offline_progress([idler], routes.values(), report)
        assert idler.mood == 66

        report = calculate_offline_earnings([idler], routes.values(), tiny_catalog, 24 * HOUR_MS)
        apply_offline_progress([idler], routes.values(), report)
        assert idler.mood == 100

    def test_bond_unchanged(self, flyer, routes, tiny_catalog):
        report = calculate_offline_earnings([flyer], routes.values(), tiny_catalog, 10 * HOUR_MS)
        apply_offline_progress([flyer], routes.values(), report)
        assert flyer.bond == 30.0

    def test_experience_batched(self, flyer, routes, tiny_catalog):
        """30 flights x 11 exp = 330 exp -> level 3 with 130 left."""
        route = routes["alpha-bravo"]
        report = calculate_offline_earnings(
            [flyer], routes.values(), tiny_catalog, 30 * flight_time_ms(route)
        )
        leveled = apply_offline_progress([flyer], routes.values(), report)

        assert leveled == ["p1"]
        assert flyer.level == 3
        assert flyer.exp == 130

    def test_experience_disabled(self, flyer, routes, tiny_catalog):
        route = routes["alpha-bravo"]
        report = calculate_offline_earnings(
            [flyer], routes.values(), tiny_catalog, 30 * flight_time_ms(route)
        )
        leveled = apply_offline_progress([flyer], routes.values(), report, accrue_experience=False)

        assert leveled == []
        assert flyer.level == 1
        assert flyer.exp == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
