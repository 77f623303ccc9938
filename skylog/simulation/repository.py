"""
Fleet & Route Repository
Owning store of all planes and routes for a game session.

Every operation that touches the plane/route relationship goes through this
class, which keeps the two sides of an assignment in step: a route has at
most one plane and a plane has at most one route. Accessors hand out copies
so callers cannot bypass that invariant.
"""

import copy
from typing import Any, Dict, Iterable, List, Optional

from ..models import Diary, FlightResult, FlightStatus, OfflineReport, Plane, Route
from ..utils import clamp, now_ms, round_half_up
from . import flight
from .economy import mood_recovery
from .offline import apply_offline_progress, calculate_offline_earnings
from .routes import generate_routes, merge_routes

# Plane fields players may edit directly; everything else is simulation-owned
EDITABLE_PLANE_FIELDS = {"nickname", "color", "personality"}


class FleetRepository:
    """
    Command/query interface over the fleet and route network.

    Example:
        >>> repo = FleetRepository(catalog, planes=catalog.starter_planes())
        >>> repo.refresh_routes(['beijing', 'shanghai'])
        >>> repo.assign_route('starter-luna', 'beijing-shanghai')
        >>> repo.start_flight('starter-luna')
        >>> results = repo.tick_flights(1000)
    """

    def __init__(
        self,
        catalog,
        planes: Optional[Iterable[Plane]] = None,
        routes: Optional[Iterable[Route]] = None,
    ) -> None:
        """
        Initialize repository.

        Args:
            catalog: ReferenceCatalog for city and model lookups
            planes: Initial fleet (owned by the repository from now on)
            routes: Initial route network
        """
        self.catalog = catalog
        self._planes: Dict[str, Plane] = {p.instance_id: p for p in planes or []}
        self._routes: Dict[str, Route] = {r.id: r for r in routes or []}

    # --- Queries ---

    def get_plane(self, plane_id: str) -> Optional[Plane]:
        """Get a copy of a plane by instance id."""
        plane = self._planes.get(plane_id)
        return copy.deepcopy(plane) if plane else None

    def get_route(self, route_id: str) -> Optional[Route]:
        """Get a copy of a route by id."""
        route = self._routes.get(route_id)
        return copy.deepcopy(route) if route else None

    def list_planes(self) -> List[Plane]:
        """Get copies of all planes in acquisition order."""
        return [copy.deepcopy(p) for p in self._planes.values()]

    def list_routes(self) -> List[Route]:
        """Get copies of all routes."""
        return [copy.deepcopy(r) for r in self._routes.values()]

    def flying_count(self) -> int:
        """Number of planes currently in the air."""
        return sum(1 for p in self._planes.values() if p.is_flying)

    def fleet_totals(self) -> Dict[str, int]:
        """Summed flights and distance across the fleet."""
        return {
            "total_flights": sum(p.total_flights for p in self._planes.values()),
            "total_distance": sum(p.total_distance for p in self._planes.values()),
        }

    # --- Fleet ---

    def add_plane(self, plane: Plane) -> None:
        """Add a newly acquired plane; duplicate instance ids are ignored."""
        if plane.instance_id in self._planes:
            print(f"⚠️  Plane {plane.instance_id} already in fleet")
            return
        plane = copy.deepcopy(plane)
        plane.assigned_route = None
        plane.flight_status = FlightStatus.IDLE
        plane.flight_progress = 0.0
        plane.flight_departed_at = None
        self._planes[plane.instance_id] = plane

    def remove_plane(self, plane_id: str) -> None:
        """Delete a plane and clear any route pointing at it."""
        if self._planes.pop(plane_id, None) is None:
            return
        self._clear_route_pointers(plane_id)

    def update_plane(self, plane_id: str, **changes: Any) -> None:
        """
        Edit cosmetic plane fields (nickname, color, personality).

        Simulation-owned fields are ignored with a warning.
        """
        plane = self._planes.get(plane_id)
        if plane is None:
            return

        for key, value in changes.items():
            if key not in EDITABLE_PLANE_FIELDS:
                print(f"⚠️  Field '{key}' cannot be edited directly, ignoring")
                continue
            setattr(plane, key, value)

    # --- Routes ---

    def refresh_routes(self, unlocked_city_ids: Iterable[str]) -> None:
        """
        Regenerate the route network for the unlocked cities.

        Assignments survive for routes present before and after; planes
        whose route disappeared are returned to idle.
        """
        fresh = generate_routes(unlocked_city_ids, self.catalog)
        merged = merge_routes(self._routes.values(), fresh)
        self._routes = {route.id: route for route in merged}

        for route in self._routes.values():
            plane = self._planes.get(route.assigned_plane_id)
            if plane is None or plane.assigned_route != route.id:
                route.assigned_plane_id = None

        for plane in self._planes.values():
            if plane.assigned_route is None:
                continue
            route = self._routes.get(plane.assigned_route)
            if route is None:
                self._ground(plane)
            elif route.assigned_plane_id is None:
                route.assigned_plane_id = plane.instance_id
            elif route.assigned_plane_id != plane.instance_id:
                self._ground(plane)

    def assign_route(self, plane_id: str, route_id: str) -> None:
        """
        Bind a plane to a route one-to-one.

        Clears the plane's previous route and the route's previous plane,
        then resets the plane to idle. Unknown ids are ignored.
        """
        plane = self._planes.get(plane_id)
        route = self._routes.get(route_id)
        if plane is None or route is None:
            print(f"⚠️  Cannot assign plane '{plane_id}' to route '{route_id}'")
            return

        self._clear_route_pointers(plane_id)

        previous = self._planes.get(route.assigned_plane_id)
        if previous is not None and previous is not plane:
            self._ground(previous)

        route.assigned_plane_id = plane_id
        plane.assigned_route = route_id
        flight.park(plane)

    def unassign_route(self, plane_id: str) -> None:
        """Take a plane off its route and return it to idle."""
        plane = self._planes.get(plane_id)
        if plane is None:
            return
        self._ground(plane)
        self._clear_route_pointers(plane_id)

    def _clear_route_pointers(self, plane_id: str) -> None:
        for route in self._routes.values():
            if route.assigned_plane_id == plane_id:
                route.assigned_plane_id = None

    @staticmethod
    def _ground(plane: Plane) -> None:
        plane.assigned_route = None
        flight.park(plane)

    # --- Flight Lifecycle ---

    def start_flight(self, plane_id: str, now: Optional[int] = None) -> None:
        """Send a plane taxiing from progress 0."""
        plane = self._planes.get(plane_id)
        if plane is None:
            return
        flight.start_flight(plane, now)

    def start_ready_flights(self, now: Optional[int] = None) -> List[str]:
        """
        Start every plane that has a route, is on the ground and is in the
        mood to fly. Planes of unknown models stay parked.

        Returns:
            Instance ids of planes that departed
        """
        now = now if now is not None else now_ms()
        started = []
        for plane in self._planes.values():
            if not flight.can_depart(plane):
                continue
            if self.catalog.get_model(plane.model_id) is None:
                continue
            flight.start_flight(plane, now)
            started.append(plane.instance_id)
        return started

    def update_flight_progress(self, plane_id: str, progress: float) -> None:
        """Set a plane's progress directly, deriving its status. Needs a route."""
        plane = self._planes.get(plane_id)
        if plane is None or plane.assigned_route is None:
            return
        plane.flight_progress = clamp(float(progress), 0.0, 1.0)
        plane.flight_status = flight.derive_status(plane.flight_progress)

    def complete_flight(self, plane_id: str) -> Optional[FlightResult]:
        """
        Land a plane immediately and resolve its arrival.

        Returns:
            FlightResult, or None if the plane, its route or model is unknown
        """
        plane = self._planes.get(plane_id)
        if plane is None or plane.assigned_route is None:
            return None

        route = self._routes.get(plane.assigned_route)
        model = self.catalog.get_model(plane.model_id)
        if route is None or model is None:
            return None

        return flight.resolve_completion(plane, route, model)

    def tick_flights(self, delta_ms: float, now: Optional[int] = None) -> List[FlightResult]:
        """Advance all planes by delta_ms; see flight.tick_flights."""
        return flight.tick_flights(
            self._planes.values(), list(self._routes.values()), self.catalog, delta_ms, now
        )

    def process_offline_flights(
        self, offline_duration_ms: int, accrue_experience: bool = True
    ) -> OfflineReport:
        """
        Apply an offline catch-up to the fleet.

        Args:
            offline_duration_ms: Time away in milliseconds
            accrue_experience: Grant plane experience for offline flights

        Returns:
            OfflineReport for the progression ledger
        """
        routes = list(self._routes.values())
        report = calculate_offline_earnings(
            self._planes.values(), routes, self.catalog, offline_duration_ms
        )
        apply_offline_progress(self._planes.values(), routes, report, accrue_experience)
        return report

    # --- Mood ---

    def recover_mood(self, plane_id: str, hours: float) -> None:
        """Recover mood for hours spent idle."""
        plane = self._planes.get(plane_id)
        if plane is None:
            return
        plane.mood = min(100, round_half_up(plane.mood + mood_recovery(plane, hours)))

    def boost_mood(self, plane_id: str, amount: int) -> None:
        """Raise mood by a flat amount (gifts, events)."""
        plane = self._planes.get(plane_id)
        if plane is None:
            return
        plane.mood = clamp(round_half_up(plane.mood + amount), 0, 100)

    # --- Diary ---

    def add_diary(self, plane_id: str, diary: Diary) -> None:
        """Append a finished diary entry to its plane."""
        plane = self._planes.get(plane_id)
        if plane is None:
            print(f"⚠️  Diary for unknown plane '{plane_id}' dropped")
            return
        plane.diaries.append(diary)

    def get_recent_diaries(self, plane_id: str, count: int) -> List[Diary]:
        """Get the newest diary entries of a plane, oldest first."""
        plane = self._planes.get(plane_id)
        if plane is None or count <= 0:
            return []
        return copy.deepcopy(plane.diaries[-count:])

    # --- Persistence ---

    def snapshot(self) -> Dict[str, Any]:
        """Serializable state for the 'planes' save."""
        return {
            "planes": [p.to_dict() for p in self._planes.values()],
            "routes": [r.to_dict() for r in self._routes.values()],
        }

    @classmethod
    def hydrate(
        cls,
        saved: Optional[Dict[str, Any]],
        unlocked_city_ids: Iterable[str],
        catalog,
        now: Optional[int] = None,
    ) -> "FleetRepository":
        """
        Restore a repository from a saved snapshot.

        On first run (no save, or a save without planes) the fleet starts
        with the starter planes. Routes are always regenerated so newly
        added cities appear, keeping saved assignments.

        Args:
            saved: Snapshot from the 'planes' store, or None
            unlocked_city_ids: Cities the player has unlocked
            catalog: ReferenceCatalog
            now: Acquisition timestamp for starter planes

        Returns:
            Hydrated FleetRepository
        """
        saved = saved or {}
        saved_planes = saved.get("planes") or []

        if saved_planes:
            planes = [Plane.from_dict(p) for p in saved_planes]
            routes = [Route.from_dict(r) for r in saved.get("routes") or []]
        else:
            now = now if now is not None else now_ms()
            planes = catalog.starter_planes(acquired_at=now)
            routes = []

        repo = cls(catalog, planes=planes, routes=routes)
        repo.refresh_routes(unlocked_city_ids)
        return repo
