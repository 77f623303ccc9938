"""
SKYLOG Data Model
Reference records, live game entities and the result records exchanged
between the simulation core and its callers.
"""

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional


class FlightStatus(str, Enum):
    """Lifecycle state of a plane's current flight."""

    IDLE = "idle"
    BOARDING = "boarding"  # Reserved, never set by the tick
    TAXIING = "taxiing"
    AIRBORNE = "airborne"
    LANDING = "landing"
    ARRIVED = "arrived"


# =============================================================================
# Reference Data (immutable)
# =============================================================================


@dataclass(frozen=True)
class City:
    """A city planes can fly between."""

    id: str
    name: str
    country: str
    latitude: float
    longitude: float
    iata: str = ""
    unlock_level: int = 1


@dataclass(frozen=True)
class PlaneModel:
    """Static specification of an aircraft type."""

    id: str
    name: str
    capacity: int
    range_km: int
    speed_kmh: int
    fuel_efficiency: float  # 0-1, higher = better
    rarity: str = "common"
    type: str = "narrow"
    manufacturer: str = ""
    unlock_level: int = 1
    base_price: int = 0


@dataclass(frozen=True)
class AchievementDef:
    """An achievement and the threshold that unlocks it."""

    id: str
    name: str
    condition_type: str  # flights, distance, planes, cities, stories, level, coins, diary
    target: int
    reward_coins: int = 0
    reward_gems: int = 0
    reward_exp: int = 0
    description: str = ""


# =============================================================================
# Live Game Objects
# =============================================================================


@dataclass
class Diary:
    """A finished diary entry written by a plane."""

    id: str
    plane_id: str
    content: str
    mood: str
    weather: str
    route_id: Optional[str]
    created_at: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Diary":
        return cls(
            id=data["id"],
            plane_id=data["plane_id"],
            content=data.get("content", ""),
            mood=data.get("mood", "peaceful"),
            weather=data.get("weather", ""),
            route_id=data.get("route_id"),
            created_at=int(data.get("created_at", 0)),
        )


@dataclass
class Route:
    """An unordered city pair with fixed economics and at most one plane."""

    id: str
    origin: str
    destination: str
    distance_km: int
    flight_duration_min: int
    base_revenue: int
    demand: float
    assigned_plane_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Route":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class Plane:
    """An owned plane instance with its progression and flight state."""

    instance_id: str
    model_id: str
    nickname: str
    personality: str
    level: int = 1
    exp: int = 0
    mood: int = 80  # 0-100
    bond: float = 30.0  # 0-100
    total_flights: int = 0
    total_distance: int = 0  # km
    assigned_route: Optional[str] = None
    flight_status: FlightStatus = FlightStatus.IDLE
    flight_progress: float = 0.0  # 0-1
    flight_departed_at: Optional[int] = None  # epoch ms
    diaries: List[Diary] = field(default_factory=list)
    acquired_at: int = 0
    color: str = "#7BC4E8"

    @property
    def is_flying(self) -> bool:
        """True while the plane is between departure and arrival."""
        return self.flight_status in (
            FlightStatus.TAXIING,
            FlightStatus.AIRBORNE,
            FlightStatus.LANDING,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["flight_status"] = self.flight_status.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Plane":
        """
        Build a plane from a saved record.

        Fields missing from older saves fall back to their defaults
        (flight_status -> idle, flight_progress -> 0, flight_departed_at -> None).
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}

        status = values.get("flight_status") or FlightStatus.IDLE.value
        try:
            values["flight_status"] = FlightStatus(status)
        except ValueError:
            values["flight_status"] = FlightStatus.IDLE
        if values.get("flight_progress") is None:
            values["flight_progress"] = 0.0
        values["diaries"] = [Diary.from_dict(d) for d in values.get("diaries") or []]

        return cls(**values)


@dataclass
class StoryChoice:
    """One of the two answers offered in a passenger story."""

    id: str
    text: str
    consequence: str


@dataclass
class PassengerStory:
    """A finished passenger story, optionally answered by the player."""

    id: str
    route_id: str
    plane_id: str
    passenger_name: str
    content: str
    choices: List[StoryChoice]
    chosen_id: Optional[str] = None
    outcome: Optional[str] = None
    butterfly_effects: List[str] = field(default_factory=list)
    created_at: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PassengerStory":
        return cls(
            id=data["id"],
            route_id=data.get("route_id", "unknown"),
            plane_id=data.get("plane_id", "unknown"),
            passenger_name=data.get("passenger_name", ""),
            content=data.get("content", ""),
            choices=[StoryChoice(**c) for c in data.get("choices") or []],
            chosen_id=data.get("chosen_id"),
            outcome=data.get("outcome"),
            butterfly_effects=list(data.get("butterfly_effects") or []),
            created_at=int(data.get("created_at", 0)),
        )


# =============================================================================
# Simulation Results
# =============================================================================


@dataclass
class FlightResult:
    """Outcome of one completed flight, to be credited by the caller."""

    plane_id: str
    revenue: int
    exp_gained: int = 0
    leveled: bool = False


@dataclass
class OfflineReport:
    """Aggregate earnings of an offline catch-up."""

    offline_duration_ms: int
    coins_earned: int = 0
    flights_completed: int = 0
    plane_flights: Dict[str, int] = field(default_factory=dict)
