"""
Economy Calculator
Pure functions for per-flight revenue, mood, bond and experience.
"""

import math
from typing import Callable, Tuple

from ..config import Settings
from ..models import Plane, PlaneModel, Route
from ..utils import round_half_up


def flight_revenue(route: Route, plane: Plane, model: PlaneModel) -> int:
    """
    Calculate coins earned by one flight with plane bonuses.

    Multipliers are applied in sequence and rounded once at the end:
    capacity, fuel efficiency, mood (up to +30%), bond (up to +20%)
    and level (+5% per level above 1).

    Args:
        route: Route being flown
        plane: Plane flying it (current mood/bond/level)
        model: The plane's model

    Returns:
        Revenue in coins, never negative
    """
    revenue = float(route.base_revenue)

    revenue *= 1 + model.capacity / Settings.CAPACITY_DIVISOR
    revenue *= model.fuel_efficiency
    revenue *= 1 + (plane.mood / 100) * Settings.MOOD_REVENUE_BONUS
    revenue *= 1 + (plane.bond / 100) * Settings.BOND_REVENUE_BONUS
    revenue *= 1 + (plane.level - 1) * Settings.LEVEL_REVENUE_BONUS

    return max(0, round_half_up(revenue))


def mood_change_per_flight(route: Route) -> int:
    """Mood lost by one flight; short flights are less tiring."""
    for max_minutes, change in Settings.MOOD_COST_TIERS:
        if route.flight_duration_min < max_minutes:
            return change
    return Settings.MOOD_COST_LONG_HAUL


def bond_gain_per_flight(plane: Plane) -> float:
    """Bond gained by one flight; bond grows slower as it increases."""
    for bond_below, gain in Settings.BOND_GAIN_TIERS:
        if plane.bond < bond_below:
            return gain
    return Settings.BOND_GAIN_MAX_TIER


def exp_gain_per_flight(route: Route) -> int:
    """Plane experience earned by one flight on a route."""
    return round_half_up(
        route.distance_km / Settings.EXP_DISTANCE_DIVISOR + Settings.EXP_BASE_PER_FLIGHT
    )


def plane_exp_for_level(level: int) -> int:
    """Experience a plane needs to advance past the given level."""
    return math.floor(50 * level + 10 * level * level)


def player_exp_for_level(level: int) -> int:
    """Experience the player needs to advance past the given level."""
    return math.floor(80 * level + 20 * level * level)


def apply_level_ups(
    exp: int, level: int, threshold: Callable[[int], int] = plane_exp_for_level
) -> Tuple[int, int, bool]:
    """
    Convert accumulated experience into levels.

    Subtracts the threshold of the current level and increments the level
    for as long as enough experience remains, so one large gain can grant
    several levels.

    Args:
        exp: Experience including the new gain
        level: Current level
        threshold: Experience curve (plane or player)

    Returns:
        Tuple of (remaining exp, new level, leveled)
    """
    leveled = False
    while exp >= threshold(level):
        exp -= threshold(level)
        level += 1
        leveled = True
    return exp, level, leveled


def mood_recovery_rate(plane: Plane) -> int:
    """Idle mood recovery in points per hour for the plane's personality."""
    return Settings.MOOD_RECOVERY_RATES.get(
        plane.personality, Settings.DEFAULT_MOOD_RECOVERY_RATE
    )


def mood_recovery(plane: Plane, hours: float) -> float:
    """Mood points recovered by idling for the given number of hours."""
    return mood_recovery_rate(plane) * max(0.0, hours)
