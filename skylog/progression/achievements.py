"""
Achievement Checks
Evaluates achievement thresholds against the player ledger and fleet totals.
"""

from typing import Callable, Dict, Iterable, List

from ..models import AchievementDef


def _progress_sources(ledger, fleet_stats: Dict[str, int]) -> Dict[str, Callable[[], int]]:
    return {
        "flights": lambda: fleet_stats.get("total_flights", 0),
        "distance": lambda: fleet_stats.get("total_distance", 0),
        "planes": lambda: ledger.collection_progress()["discovered"],
        "cities": lambda: len(ledger.unlocked_cities),
        "stories": lambda: ledger.total_stories_read,
        "diary": lambda: ledger.total_diaries_read,
        "level": lambda: ledger.level,
        "coins": lambda: ledger.coins,
    }


def achievement_progress(
    definition: AchievementDef, ledger, fleet_stats: Dict[str, int]
) -> int:
    """
    Current value of an achievement's condition.

    Unknown condition types report 0 and therefore never unlock.
    """
    source = _progress_sources(ledger, fleet_stats).get(definition.condition_type)
    return source() if source else 0


def check_achievements(
    ledger,
    fleet_stats: Dict[str, int],
    definitions: Iterable[AchievementDef],
) -> List[AchievementDef]:
    """
    Unlock every achievement whose target is now met and grant its rewards.

    Achievements already held are skipped, so calling this after every tick
    is safe.

    Args:
        ledger: PlayerLedger (mutated)
        fleet_stats: Fleet totals, see FleetRepository.fleet_totals()
        definitions: Achievement catalog

    Returns:
        Newly unlocked achievement definitions

    Example:
        >>> unlocked = check_achievements(ledger, repo.fleet_totals(), catalog.achievements)
        >>> [a.id for a in unlocked]
        ['first_flight']
    """
    unlocked = []

    for definition in definitions:
        if ledger.has_achievement(definition.id):
            continue
        if achievement_progress(definition, ledger, fleet_stats) < definition.target:
            continue

        ledger.unlock_achievement(definition.id)
        ledger.add_coins(definition.reward_coins)
        ledger.add_gems(definition.reward_gems)
        if definition.reward_exp:
            ledger.add_exp(definition.reward_exp)
        unlocked.append(definition)

    return unlocked
