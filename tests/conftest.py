"""
Shared fixtures for SKYLOG tests.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.config import Config
from skylog.data import ReferenceCatalog

# Three cities on the equator, one degree apart. alpha/bravo share a country.
TINY_CITIES = """
cities:
  - {id: alpha, name: Alpha, country: XX, latitude: 0.0, longitude: 0.0}
  - {id: bravo, name: Bravo, country: XX, latitude: 0.0, longitude: 1.0}
  - {id: charlie, name: Charlie, country: YY, latitude: 0.0, longitude: 2.0}
  - {id: delta, name: Delta, country: YY, latitude: 0.0, longitude: 0.0}
"""

TINY_PLANES = """
models:
  - {id: test-70, name: Test 70, capacity: 70, range_km: 3000, speed_kmh: 800, fuel_efficiency: 0.9}
  - {id: test-200, name: Test 200, capacity: 200, range_km: 9000, speed_kmh: 900, fuel_efficiency: 0.8, rarity: rare}
"""

TINY_STARTERS = """
planes:
  - {instance_id: p1, model_id: test-70, nickname: One, personality: dreamer}
  - {instance_id: p2, model_id: test-70, nickname: Two, personality: steady}
"""

TINY_ACHIEVEMENTS = """
achievements:
  - {id: first_flight, name: First Takeoff, condition_type: flights, target: 1, reward_coins: 500, reward_exp: 50}
  - {id: explorer_3, name: Explorer, condition_type: cities, target: 3, reward_coins: 200, reward_gems: 5}
  - {id: rich, name: Rich, condition_type: coins, target: 1000000, reward_gems: 100}
"""


@pytest.fixture
def tiny_catalog(tmp_path):
    """Catalog with a few equatorial cities and two plane models."""
    (tmp_path / "cities.yaml").write_text(TINY_CITIES)
    (tmp_path / "planes.yaml").write_text(TINY_PLANES)
    (tmp_path / "starter_planes.yaml").write_text(TINY_STARTERS)
    (tmp_path / "achievements.yaml").write_text(TINY_ACHIEVEMENTS)
    return ReferenceCatalog(tmp_path)


@pytest.fixture
def temp_config():
    """Default configuration pointing at a temporary save database."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    config = Config()
    config.set("database.path", db_path)

    yield config

    # Cleanup
    try:
        os.unlink(db_path)
    except OSError:
        pass
