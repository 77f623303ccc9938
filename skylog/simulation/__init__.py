"""
SKYLOG Simulation Component

Route generation, the flight economy and the tick-driven flight state
machine, owned by the fleet repository.

Main Classes:
    - FleetRepository: Owning store of planes and routes

Modules:
    - routes: Route network generation
    - economy: Revenue, mood, bond and experience formulas
    - flight: Flight state machine and tick
    - offline: Offline catch-up

Example:
    >>> from skylog.data import ReferenceCatalog
    >>> from skylog.simulation import FleetRepository
    >>> catalog = ReferenceCatalog()
    >>> repo = FleetRepository.hydrate(None, ['beijing', 'shanghai'], catalog)
    >>> repo.assign_route('starter-luna', 'beijing-shanghai')
    >>> repo.start_flight('starter-luna')
    >>> completed = repo.tick_flights(1000)
"""

from .repository import FleetRepository

from . import routes
from . import economy
from . import flight
from . import offline

__all__ = [
    # Main classes
    "FleetRepository",
    # Modules
    "routes",
    "economy",
    "flight",
    "offline",
]
