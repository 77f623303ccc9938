"""
Flight Simulation Core
Advances flight progress, resolves arrivals and auto-restarts planes.

Status is derived from progress while a plane is in the air. Only two
transitions are written directly: taxiing on departure and arrived on
completion. This keeps the tick correct for any positive delta, whether it
is one second of live play or a large jump.

The functions here mutate the Plane objects handed to them and never touch
player-level state; callers credit the returned FlightResult records.
"""

from typing import Dict, Iterable, List, Optional

from ..config import Constants, Settings
from ..models import FlightResult, FlightStatus, Plane, PlaneModel, Route
from ..utils import clamp, now_ms
from .economy import (
    apply_level_ups,
    bond_gain_per_flight,
    exp_gain_per_flight,
    flight_revenue,
    mood_change_per_flight,
    plane_exp_for_level,
)


def derive_status(progress: float) -> FlightStatus:
    """
    Flight status for an in-flight progress value.

    Example:
        >>> derive_status(0.5)
        <FlightStatus.AIRBORNE: 'airborne'>
    """
    if progress < Constants.TAXI_PROGRESS_LIMIT:
        return FlightStatus.TAXIING
    if progress > Constants.LANDING_PROGRESS_LIMIT:
        return FlightStatus.LANDING
    return FlightStatus.AIRBORNE


def flight_time_ms(route: Route) -> int:
    """Duration of one flight on the route in milliseconds."""
    return route.flight_duration_min * Constants.MS_PER_MINUTE


def start_flight(plane: Plane, departed_at: Optional[int] = None) -> None:
    """
    Put a plane on the runway.

    Writes taxiing/0/departure time unconditionally; a plane without a
    route will simply never be advanced by the tick.
    """
    plane.flight_status = FlightStatus.TAXIING
    plane.flight_progress = 0.0
    plane.flight_departed_at = departed_at if departed_at is not None else now_ms()


def park(plane: Plane) -> None:
    """Return a plane to idle on the ground, keeping its route."""
    plane.flight_status = FlightStatus.IDLE
    plane.flight_progress = 0.0
    plane.flight_departed_at = None


def can_depart(plane: Plane) -> bool:
    """True if the plane has a route, is on the ground and is in the mood to fly."""
    return (
        plane.assigned_route is not None
        and plane.flight_status in (FlightStatus.IDLE, FlightStatus.ARRIVED)
        and plane.mood > Settings.MIN_MOOD_FOR_DEPARTURE
    )


def resolve_completion(plane: Plane, route: Route, model: PlaneModel) -> FlightResult:
    """
    Resolve the arrival of a flight.

    Revenue, mood, bond and experience are computed from the plane's
    pre-arrival stats, then all updates are applied together.

    Args:
        plane: Arriving plane (mutated)
        route: Route it flew
        model: The plane's model

    Returns:
        FlightResult with revenue and experience for the caller to credit
    """
    revenue = flight_revenue(route, plane, model)
    mood_delta = mood_change_per_flight(route)
    bond_gain = bond_gain_per_flight(plane)
    exp_gain = exp_gain_per_flight(route)

    exp, level, leveled = apply_level_ups(
        plane.exp + exp_gain, plane.level, plane_exp_for_level
    )

    plane.flight_status = FlightStatus.ARRIVED
    plane.flight_progress = 1.0
    plane.flight_departed_at = None
    plane.total_flights += 1
    plane.total_distance += route.distance_km
    plane.mood = clamp(plane.mood + mood_delta, 0, 100)
    plane.bond = min(100.0, plane.bond + bond_gain)
    plane.exp = exp
    plane.level = level

    return FlightResult(
        plane_id=plane.instance_id,
        revenue=revenue,
        exp_gained=exp_gain,
        leveled=leveled,
    )


def advance_plane(
    plane: Plane,
    routes: Dict[str, Route],
    catalog,
    delta_ms: float,
    now: int,
) -> Optional[FlightResult]:
    """
    Advance one plane by delta_ms.

    Args:
        plane: Plane to advance (mutated)
        routes: Route snapshot keyed by id
        catalog: ReferenceCatalog for model lookup
        delta_ms: Elapsed time in milliseconds
        now: Epoch ms used for auto-restart departures

    Returns:
        FlightResult if the plane arrived during this step, else None
    """
    if plane.assigned_route is None or plane.flight_status == FlightStatus.IDLE:
        return None

    if plane.flight_status == FlightStatus.ARRIVED:
        if plane.mood > Settings.MIN_MOOD_FOR_DEPARTURE:
            start_flight(plane, now)
        return None

    route = routes.get(plane.assigned_route)
    if route is None:
        print(f"⚠️  Plane {plane.instance_id} assigned to unknown route "
              f"'{plane.assigned_route}', parking it")
        park(plane)
        return None

    model = catalog.get_model(plane.model_id)
    if model is None:
        print(f"⚠️  Plane {plane.instance_id} has unknown model "
              f"'{plane.model_id}', parking it")
        park(plane)
        return None

    progress_delta = max(0.0, delta_ms) / flight_time_ms(route)
    new_progress = min(1.0, plane.flight_progress + progress_delta)

    if new_progress >= 1.0:
        return resolve_completion(plane, route, model)

    plane.flight_progress = new_progress
    plane.flight_status = derive_status(new_progress)
    return None


def tick_flights(
    planes: Iterable[Plane],
    routes: Iterable[Route],
    catalog,
    delta_ms: float,
    now: Optional[int] = None,
) -> List[FlightResult]:
    """
    Advance every plane by one tick.

    The route collection is snapshotted into a lookup once, so every plane
    in the tick sees the same route data.

    Args:
        planes: Planes to advance (mutated)
        routes: Current routes
        catalog: ReferenceCatalog for model lookup
        delta_ms: Elapsed time since the previous tick in milliseconds
        now: Epoch ms for new departures (default: wall clock)

    Returns:
        One FlightResult per plane that arrived during this tick
    """
    now = now if now is not None else now_ms()
    route_lookup = {route.id: route for route in routes}

    completed = []
    for plane in planes:
        result = advance_plane(plane, route_lookup, catalog, delta_ms, now)
        if result is not None:
            completed.append(result)

    return completed
