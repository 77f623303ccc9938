"""
Route Generation
Derives one route per unordered pair of unlocked cities with deterministic
distance, duration, demand and base revenue.
"""

from math import sqrt
from typing import Iterable, List

from ..config import Constants, Settings
from ..models import City, Route
from ..utils import haversine_distance, round_half_up, stable_hash


def route_id(city_a: str, city_b: str) -> str:
    """
    Canonical id of the route between two cities.

    The ids are sorted so both travel directions share one route.

    Example:
        >>> route_id('shanghai', 'beijing')
        'beijing-shanghai'
    """
    first, second = sorted([city_a, city_b])
    return f"{first}-{second}"


def route_distance(city_a: City, city_b: City) -> int:
    """Great-circle distance between two cities, rounded to whole km."""
    return round_half_up(
        haversine_distance(
            city_a.latitude, city_a.longitude, city_b.latitude, city_b.longitude
        )
    )


def flight_duration(distance_km: float, speed_kmh: float = Constants.CRUISE_SPEED_KMH) -> int:
    """
    Flight duration in minutes including ground overhead.

    Args:
        distance_km: Route distance
        speed_kmh: Cruise speed (default: fleet average)

    Returns:
        Minutes, never less than the ground overhead
    """
    return round_half_up(distance_km / speed_kmh * 60) + Constants.GROUND_OVERHEAD_MIN


def calculate_demand(city_a: City, city_b: City) -> float:
    """
    Deterministic passenger demand for a city pair, in [0.3, 1.0].

    The hash input is the sorted, concatenated pair of ids so either
    ordering of the pair yields the same demand.
    """
    first, second = sorted([city_a.id, city_b.id])
    bucket = stable_hash(first + second) % Settings.DEMAND_BUCKETS
    demand = Settings.DEMAND_BASE + bucket / 100

    if city_a.country == city_b.country:
        demand += Settings.SAME_COUNTRY_DEMAND_BONUS

    return min(1.0, demand)


def base_revenue(distance_km: float, demand: float) -> int:
    """
    Base coin revenue of one flight on a route.

    Short routes (< 1000 km) land around 50-150 coins, long haul
    (5000 km+) around 500-2000 before plane bonuses.
    """
    distance_factor = sqrt(distance_km) * 2
    demand_multiplier = 0.5 + demand * 1.0
    return round_half_up(distance_factor * demand_multiplier)


def build_route(city_a: City, city_b: City) -> Route:
    """Create the unassigned route between two cities."""
    distance = route_distance(city_a, city_b)
    demand = calculate_demand(city_a, city_b)

    return Route(
        id=route_id(city_a.id, city_b.id),
        origin=city_a.id,
        destination=city_b.id,
        distance_km=distance,
        flight_duration_min=flight_duration(distance),
        base_revenue=base_revenue(distance, demand),
        demand=demand,
    )


def generate_routes(unlocked_city_ids: Iterable[str], catalog) -> List[Route]:
    """
    Generate all routes between unlocked cities.

    Unknown city ids are skipped with a warning; duplicate ids are ignored.

    Args:
        unlocked_city_ids: City ids the player has unlocked
        catalog: ReferenceCatalog used to resolve city ids

    Returns:
        One unassigned Route per unordered pair of distinct cities
    """
    cities: List[City] = []
    seen = set()

    for city_id in unlocked_city_ids:
        if city_id in seen:
            continue
        seen.add(city_id)

        city = catalog.get_city(city_id)
        if city is None:
            print(f"⚠️  Unknown city '{city_id}', skipping its routes")
            continue
        cities.append(city)

    routes = []
    for i, city_a in enumerate(cities):
        for city_b in cities[i + 1:]:
            routes.append(build_route(city_a, city_b))

    return routes


def merge_routes(current: Iterable[Route], fresh: List[Route]) -> List[Route]:
    """
    Carry plane assignments from the current route set into a fresh one.

    Assignments of routes missing from the fresh set are dropped.

    Args:
        current: Routes being replaced
        fresh: Newly generated routes (modified in place)

    Returns:
        The fresh route list
    """
    assignments = {route.id: route.assigned_plane_id for route in current}

    for route in fresh:
        if route.id in assignments:
            route.assigned_plane_id = assignments[route.id]

    return fresh
