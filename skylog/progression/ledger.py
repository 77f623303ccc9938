"""
Player Progression Ledger
Coins, gems, experience, unlocked cities, plane collection, achievements
and notifications for the player.
"""

import uuid
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..config import Settings
from ..models import FlightResult, OfflineReport
from ..simulation.economy import apply_level_ups, player_exp_for_level
from ..utils import format_duration, now_ms


@dataclass
class Notification:
    """A player-facing event record (presentation is up to the UI)."""

    id: str
    type: str  # flight_complete, diary, story, level_up, achievement, event, welcome_back
    title: str
    message: str
    read: bool = False
    created_at: int = 0
    data: Optional[Dict[str, Any]] = None


@dataclass
class CollectionEntry:
    """Discovery and ownership record of one plane model."""

    model_id: str
    discovered: bool = False
    discovered_at: Optional[int] = None
    owned_count: int = 0
    first_owned_at: Optional[int] = None


class PlayerLedger:
    """
    Player-level bookkeeping fed by the simulation results.

    The ledger never inspects planes or routes; it only consumes
    FlightResult and OfflineReport records.

    Example:
        >>> ledger = PlayerLedger(model_ids=catalog.models)
        >>> ledger.credit_flights(repo.tick_flights(1000))
        >>> ledger.coins
        10135
    """

    def __init__(
        self,
        name: str = "Captain",
        coins: int = 10000,
        gems: int = 50,
        unlocked_cities: Optional[Iterable[str]] = None,
        model_ids: Optional[Iterable[str]] = None,
        now: Optional[int] = None,
    ) -> None:
        """
        Initialize a brand new player.

        Args:
            name: Display name
            coins: Starting coins
            gems: Starting gems
            unlocked_cities: Starting city ids
            model_ids: Plane model ids in the collection catalog
            now: Creation timestamp (epoch ms)
        """
        now = now if now is not None else now_ms()

        self.name = name
        self.level = 1
        self.exp = 0
        self.coins = coins
        self.gems = gems
        self.reputation = 0
        self.unlocked_cities: List[str] = list(dict.fromkeys(unlocked_cities or []))
        self.achievements: List[str] = []
        self.total_stories_read = 0
        self.total_diaries_read = 0
        self.last_online = now
        self.created_at = now
        self.notifications: List[Notification] = []
        self.collection: Dict[str, CollectionEntry] = {
            model_id: CollectionEntry(model_id) for model_id in model_ids or []
        }

    # --- Economy ---

    def add_coins(self, amount: int) -> None:
        """Add coins (negative amounts never push the balance below 0)."""
        self.coins = max(0, self.coins + amount)

    def spend_coins(self, amount: int) -> bool:
        """Spend coins if affordable; returns False and changes nothing otherwise."""
        if self.coins < amount:
            return False
        self.coins -= amount
        return True

    def add_gems(self, amount: int) -> None:
        """Add gems (never below 0)."""
        self.gems = max(0, self.gems + amount)

    def spend_gems(self, amount: int) -> bool:
        """Spend gems if affordable."""
        if self.gems < amount:
            return False
        self.gems -= amount
        return True

    # --- Progression ---

    def add_exp(self, amount: int) -> bool:
        """
        Add player experience, leveling up as often as it allows.

        Returns:
            True if at least one level was gained
        """
        self.exp, level, leveled = apply_level_ups(
            self.exp + amount, self.level, player_exp_for_level
        )
        if leveled:
            self.level = level
            self.add_notification(
                "level_up", "Level up!", f"Congratulations, you reached level {level}!"
            )
        return leveled

    def add_reputation(self, amount: int) -> None:
        """Add reputation (never below 0)."""
        self.reputation = max(0, self.reputation + amount)

    def credit_flights(self, results: Iterable[FlightResult]) -> int:
        """
        Credit completed flights from a tick.

        Adds the summed revenue and a flat amount of player experience
        per flight.

        Returns:
            Coins credited
        """
        results = list(results)
        if not results:
            return 0

        revenue = sum(r.revenue for r in results)
        self.add_coins(revenue)
        self.add_exp(len(results) * Settings.PLAYER_EXP_PER_FLIGHT)
        return revenue

    # --- Cities ---

    def unlock_city(self, city_id: str) -> bool:
        """Unlock a city; returns False if it was already unlocked."""
        if city_id in self.unlocked_cities:
            return False
        self.unlocked_cities.append(city_id)
        return True

    def is_city_unlocked(self, city_id: str) -> bool:
        return city_id in self.unlocked_cities

    # --- Collection ---

    def discover_plane(self, model_id: str, now: Optional[int] = None) -> None:
        """Mark a plane model as seen."""
        entry = self.collection.get(model_id)
        if entry is None or entry.discovered:
            return
        entry.discovered = True
        entry.discovered_at = now if now is not None else now_ms()

    def own_plane(self, model_id: str, now: Optional[int] = None) -> None:
        """Record ownership of one more plane of a model (implies discovery)."""
        entry = self.collection.get(model_id)
        if entry is None:
            return
        now = now if now is not None else now_ms()
        entry.discovered = True
        entry.discovered_at = entry.discovered_at or now
        entry.owned_count += 1
        entry.first_owned_at = entry.first_owned_at or now

    def collection_progress(self) -> Dict[str, int]:
        """Discovered vs. total plane models."""
        return {
            "discovered": sum(1 for e in self.collection.values() if e.discovered),
            "total": len(self.collection),
        }

    # --- Achievements ---

    def unlock_achievement(self, achievement_id: str) -> bool:
        """Record an achievement once; returns False if already held."""
        if achievement_id in self.achievements:
            return False
        self.achievements.append(achievement_id)
        self.add_notification("achievement", "Achievement unlocked!", achievement_id)
        return True

    def has_achievement(self, achievement_id: str) -> bool:
        return achievement_id in self.achievements

    # --- Stats ---

    def increment_stories_read(self) -> None:
        self.total_stories_read += 1

    def increment_diaries_read(self) -> None:
        self.total_diaries_read += 1

    # --- Notifications ---

    def add_notification(
        self,
        type: str,
        title: str,
        message: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        """Queue a notification for the UI."""
        notification = Notification(
            id=f"n-{uuid.uuid4().hex[:12]}",
            type=type,
            title=title,
            message=message,
            created_at=now_ms(),
            data=data,
        )
        self.notifications.append(notification)
        return notification

    def mark_notification_read(self, notification_id: str) -> None:
        for notification in self.notifications:
            if notification.id == notification_id:
                notification.read = True

    def clear_notifications(self) -> None:
        self.notifications = []

    # --- Offline ---

    def process_offline_return(self, report: OfflineReport) -> None:
        """Credit offline earnings and queue a welcome-back notification."""
        self.add_coins(report.coins_earned)

        away = format_duration(report.offline_duration_ms // 1000)
        self.add_notification(
            "welcome_back",
            "Welcome back!",
            f"You were away for {away}. Your planes completed "
            f"{report.flights_completed} flights and earned {report.coins_earned} coins.",
            data=asdict(report),
        )

    def update_last_online(self, now: Optional[int] = None) -> None:
        self.last_online = now if now is not None else now_ms()

    # --- Persistence ---

    def snapshot(self) -> Dict[str, Any]:
        """Serializable state for the 'player' save."""
        return {
            "name": self.name,
            "level": self.level,
            "exp": self.exp,
            "coins": self.coins,
            "gems": self.gems,
            "reputation": self.reputation,
            "unlocked_cities": list(self.unlocked_cities),
            "achievements": list(self.achievements),
            "total_stories_read": self.total_stories_read,
            "total_diaries_read": self.total_diaries_read,
            "last_online": self.last_online,
            "created_at": self.created_at,
            "notifications": [asdict(n) for n in self.notifications],
            "collection": [asdict(e) for e in self.collection.values()],
        }

    @classmethod
    def hydrate(
        cls,
        saved: Optional[Dict[str, Any]],
        model_ids: Iterable[str],
        **defaults: Any,
    ) -> "PlayerLedger":
        """
        Restore a ledger from a saved snapshot.

        Collection entries are back-filled for plane models added since
        the save was written.

        Args:
            saved: Snapshot from the 'player' store, or None for a new player
            model_ids: Current plane model catalog ids
            **defaults: Constructor arguments for a new player

        Returns:
            PlayerLedger
        """
        model_ids = list(model_ids)
        ledger = cls(model_ids=model_ids, **defaults)
        if not saved:
            return ledger

        for key in (
            "name", "level", "exp", "coins", "gems", "reputation",
            "total_stories_read", "total_diaries_read", "last_online", "created_at",
        ):
            if saved.get(key) is not None:
                setattr(ledger, key, saved[key])

        ledger.unlocked_cities = list(
            dict.fromkeys(saved.get("unlocked_cities") or ledger.unlocked_cities)
        )
        ledger.achievements = list(saved.get("achievements") or [])
        ledger.notifications = [
            Notification(**n) for n in saved.get("notifications") or []
        ]
        for entry in saved.get("collection") or []:
            if entry.get("model_id") in ledger.collection:
                ledger.collection[entry["model_id"]] = CollectionEntry(**entry)

        return ledger
