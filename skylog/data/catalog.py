"""
Reference Data Catalog
Read-only lookup of cities, plane models, starter planes and achievements
loaded from the bundled YAML files (or a custom directory).
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..models import AchievementDef, City, Plane, PlaneModel
from ..utils import validate_coordinates

DATA_DIR = Path(__file__).parent


class ReferenceCatalog:
    """
    Static catalogs consumed by id lookup.

    Lookups never raise: an unknown id returns None and callers decide
    whether to skip the affected entity.

    Example:
        >>> catalog = ReferenceCatalog()
        >>> catalog.get_city('beijing').country
        'CN'
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Load all catalogs.

        Args:
            data_dir: Directory holding cities.yaml, planes.yaml,
                      starter_planes.yaml and achievements.yaml.
                      Defaults to the bundled data.
        """
        self.data_dir = Path(data_dir) if data_dir else DATA_DIR

        self.cities: Dict[str, City] = {}
        for row in self._load("cities.yaml", "cities"):
            city = City(**row)
            if not validate_coordinates(city.latitude, city.longitude):
                print(f"⚠️  Skipping city '{city.id}' with invalid coordinates")
                continue
            self.cities[city.id] = city

        self.models: Dict[str, PlaneModel] = {
            row["id"]: PlaneModel(**row) for row in self._load("planes.yaml", "models")
        }
        self.achievements: List[AchievementDef] = [
            AchievementDef(**row)
            for row in self._load("achievements.yaml", "achievements")
        ]
        self._starter_rows = self._load("starter_planes.yaml", "planes")

    def _load(self, filename: str, section: str) -> List[Dict[str, Any]]:
        """Read one list section of a YAML catalog file."""
        path = self.data_dir / filename
        if not path.exists():
            print(f"⚠️  Catalog file not found: {path}")
            return []

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return list(data.get(section) or [])

    def get_city(self, city_id: str) -> Optional[City]:
        """Get a city by id."""
        return self.cities.get(city_id)

    def get_model(self, model_id: str) -> Optional[PlaneModel]:
        """Get a plane model by id."""
        return self.models.get(model_id)

    def starter_planes(self, acquired_at: int = 0) -> List[Plane]:
        """
        Build fresh starter plane instances.

        Args:
            acquired_at: Epoch ms stamped on each plane

        Returns:
            New Plane objects (safe to mutate)
        """
        return [Plane(acquired_at=acquired_at, **row) for row in self._starter_rows]
