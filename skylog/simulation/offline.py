"""
Offline Catch-Up
Computes what the fleet earned while the game was closed, analytically,
instead of replaying every tick.
"""

from typing import Dict, Iterable, List

from ..config import Constants, Settings
from ..models import OfflineReport, Plane, Route
from ..utils import round_half_up
from .economy import (
    apply_level_ups,
    exp_gain_per_flight,
    flight_revenue,
    mood_recovery,
    plane_exp_for_level,
)
from .flight import flight_time_ms


def calculate_offline_earnings(
    planes: Iterable[Plane],
    routes: Iterable[Route],
    catalog,
    offline_duration_ms: int,
) -> OfflineReport:
    """
    Count whole flights completed while offline and the coins they earned.

    Revenue per flight is computed once from each plane's current stats and
    is not re-evaluated as mood or bond would have changed mid-batch.
    Offline revenue is reduced by Settings.OFFLINE_REVENUE_FACTOR.

    Args:
        planes: Fleet at the time of the last save
        routes: Current routes
        catalog: ReferenceCatalog for model lookup
        offline_duration_ms: Time away in milliseconds

    Returns:
        OfflineReport; plane_flights lists only planes that flew
    """
    route_lookup = {route.id: route for route in routes}
    report = OfflineReport(offline_duration_ms=offline_duration_ms)

    for plane in planes:
        if plane.assigned_route is None:
            continue

        route = route_lookup.get(plane.assigned_route)
        if route is None:
            continue

        model = catalog.get_model(plane.model_id)
        if model is None:
            print(f"⚠️  Plane {plane.instance_id} has unknown model "
                  f"'{plane.model_id}', no offline earnings")
            continue

        completed = int(offline_duration_ms // flight_time_ms(route))
        if completed <= 0:
            continue

        revenue_per_flight = flight_revenue(route, plane, model)
        report.coins_earned += round_half_up(
            revenue_per_flight * completed * Settings.OFFLINE_REVENUE_FACTOR
        )
        report.flights_completed += completed
        report.plane_flights[plane.instance_id] = completed

    return report


def apply_offline_progress(
    planes: Iterable[Plane],
    routes: Iterable[Route],
    report: OfflineReport,
    accrue_experience: bool = True,
) -> List[str]:
    """
    Apply an offline report to the fleet.

    Planes that flew lose Settings.OFFLINE_MOOD_COST_PER_FLIGHT mood per
    flight (never below Settings.OFFLINE_MOOD_FLOOR) and have their totals
    advanced. Every other plane recovers mood as if idle for the whole
    absence.

    Args:
        planes: Fleet (mutated)
        routes: Current routes
        report: Result of calculate_offline_earnings
        accrue_experience: Grant per-flight experience in one leveling pass

    Returns:
        Instance ids of planes that leveled up
    """
    route_lookup: Dict[str, Route] = {route.id: route for route in routes}
    hours = report.offline_duration_ms / Constants.MS_PER_HOUR
    leveled_planes = []

    for plane in planes:
        flights = report.plane_flights.get(plane.instance_id, 0)

        if flights <= 0:
            recovered = plane.mood + mood_recovery(plane, hours)
            plane.mood = min(100, round_half_up(recovered))
            continue

        route = route_lookup.get(plane.assigned_route)
        distance = route.distance_km * flights if route else 0

        plane.total_flights += flights
        plane.total_distance += distance
        plane.mood = max(
            Settings.OFFLINE_MOOD_FLOOR,
            plane.mood - flights * Settings.OFFLINE_MOOD_COST_PER_FLIGHT,
        )

        if accrue_experience and route is not None:
            gained = exp_gain_per_flight(route) * flights
            plane.exp, plane.level, leveled = apply_level_ups(
                plane.exp + gained, plane.level, plane_exp_for_level
            )
            if leveled:
                leveled_planes.append(plane.instance_id)

    return leveled_planes
