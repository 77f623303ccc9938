"""
Tests for SKYLOG utility functions.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.utils import (
    clamp,
    format_duration,
    haversine_distance,
    round_half_up,
    stable_hash,
    validate_coordinates,
)


class TestHaversineDistance:
    """Tests for haversine_distance function."""

    def test_same_point(self):
        """Distance between same point should be 0."""
        assert haversine_distance(39.9042, 116.4074, 39.9042, 116.4074) == 0.0

    def test_one_degree_on_equator(self):
        """One degree of longitude on the equator is about 111 km."""
        assert round(haversine_distance(0, 0, 0, 1)) == 111

    def test_symmetric(self):
        """Distance does not depend on direction."""
        there = haversine_distance(39.9042, 116.4074, 31.2304, 121.4737)
        back = haversine_distance(31.2304, 121.4737, 39.9042, 116.4074)
        assert there == pytest.approx(back)
        assert 1000 < there < 1100  # Beijing to Shanghai


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_halves_round_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2

    def test_regular_rounding(self):
        assert round_half_up(134.857) == 135
        assert round_half_up(7.49) == 7


class TestStableHash:
    """Tests for stable_hash."""

    def test_deterministic(self):
        assert stable_hash("beijingshanghai") == stable_hash("beijingshanghai")

    def test_empty_string(self):
        assert stable_hash("") == 0
        assert stable_hash(None) == 0

    def test_never_negative(self):
        for text in ["a", "zz" * 40, "losangelesnewyork", "香港"]:
            assert stable_hash(text) >= 0

    def test_known_value(self):
        """Matches the classic 31-multiplier string hash."""
        assert stable_hash("ab") == 97 * 31 + 98


class TestHelpers:
    """Tests for formatting and validation helpers."""

    def test_clamp(self):
        assert clamp(120, 0, 100) == 100
        assert clamp(-5, 0, 100) == 0
        assert clamp(50, 0, 100) == 50

    def test_format_duration(self):
        assert format_duration(90061) == "1d 1h 1m 1s"
        assert format_duration(3600) == "1h"
        assert format_duration(0) == "0s"
        assert format_duration(None) == "N/A"
        assert format_duration(-1) == "N/A"

    def test_validate_coordinates(self):
        assert validate_coordinates(39.9042, 116.4074)
        assert not validate_coordinates(100, 0)
        assert not validate_coordinates(0, 200)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
