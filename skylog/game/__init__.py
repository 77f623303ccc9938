"""
SKYLOG Game Component

Session driver, save database and game-wide state.

Main Classes:
    - GameDriver: Tick loop, offline catch-up and saving
    - SaveDatabase: SQLite snapshot storage
    - GameState: Pause flag and timed events

Example:
    >>> from skylog.config import Config
    >>> from skylog.game import GameDriver
    >>> driver = GameDriver(Config())
    >>> driver.start()
    >>> driver.run_single_tick()
    >>> driver.save()
"""

from .database import SaveDatabase
from .driver import GameDriver
from .state import GameEvent, GameState

from . import constants

__all__ = [
    # Main classes
    "GameDriver",
    "SaveDatabase",
    "GameState",
    "GameEvent",
    # Modules
    "constants",
]
