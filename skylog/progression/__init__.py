"""
SKYLOG Progression Component

Player-level state fed by the simulation's flight results.

Main Classes:
    - PlayerLedger: Coins, experience, cities, collection and notifications

Modules:
    - ledger: Player ledger and notification records
    - achievements: Achievement threshold checks

Example:
    >>> from skylog.progression import PlayerLedger, check_achievements
    >>> ledger = PlayerLedger(unlocked_cities=['beijing', 'shanghai'])
    >>> ledger.credit_flights(results)
    >>> check_achievements(ledger, repo.fleet_totals(), catalog.achievements)
"""

from .ledger import CollectionEntry, Notification, PlayerLedger
from .achievements import achievement_progress, check_achievements

from . import ledger
from . import achievements

__all__ = [
    # Main classes
    "PlayerLedger",
    "Notification",
    "CollectionEntry",
    "check_achievements",
    "achievement_progress",
    # Modules
    "ledger",
    "achievements",
]
