"""
SKYLOG - Idle Fleet Simulation

Simulation core of an idle airplane-fleet game: personified planes fly
routes between unlocked cities, earning coins and experience in real time
and while the player is away.

Components:
    - data: Reference catalogs (cities, plane models, achievements)
    - simulation: Routes, economy, flight state machine, offline catch-up
    - progression: Player ledger and achievements
    - narrative: Plane diaries and passenger stories
    - game: Session driver and save database
    - visualization: Route network maps

Example:
    >>> from skylog.game import GameDriver
    >>> from skylog import Config
    >>> config = Config()
    >>> driver = GameDriver(config)
    >>> driver.run()
"""

# Component imports for easy access
from . import data
from . import simulation
from . import progression
from . import narrative
from . import game
from . import visualization
from . import utils
from . import config
from .config import Config

SKYLOG_VERSION = "v1.0.0"

__version__ = SKYLOG_VERSION
__author__ = "SKYLOG Project"
__license__ = "MIT"

__all__ = [
    "Config",
    "data",
    "simulation",
    "progression",
    "narrative",
    "game",
    "visualization",
    "utils",
    "config",
]
