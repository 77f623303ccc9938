"""
Tests for the reference data catalog.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.data import ReferenceCatalog
from skylog.models import FlightStatus


class TestBundledCatalog:
    """Tests against the bundled YAML data."""

    @pytest.fixture
    def catalog(self):
        return ReferenceCatalog()

    def test_starting_cities_present(self, catalog):
        assert catalog.get_city("beijing").country == "CN"
        assert catalog.get_city("shanghai") is not None

    def test_starter_models_present(self, catalog):
        for model_id in ("crj-200", "erj-175", "arj21"):
            assert catalog.get_model(model_id) is not None

    def test_starter_planes(self, catalog):
        planes = catalog.starter_planes(acquired_at=123)
        assert [p.nickname for p in planes] == ["Luna", "Breeze", "Dash"]
        assert all(p.acquired_at == 123 for p in planes)
        assert all(p.flight_status == FlightStatus.IDLE for p in planes)
        assert all(catalog.get_model(p.model_id) for p in planes)

    def test_starter_planes_are_fresh_objects(self, catalog):
        first = catalog.starter_planes()
        first[0].mood = 1
        assert catalog.starter_planes()[0].mood != 1

    def test_achievements_loaded(self, catalog):
        ids = {a.id for a in catalog.achievements}
        assert "first_flight" in ids

    def test_unknown_lookups(self, catalog):
        assert catalog.get_city("atlantis") is None
        assert catalog.get_model("concorde-2") is None


class TestCustomCatalog:
    """Tests with a custom data directory."""

    def test_missing_files(self, tmp_path):
        """Missing catalog files give empty catalogs."""
        catalog = ReferenceCatalog(tmp_path)
        assert catalog.cities == {}
        assert catalog.models == {}
        assert catalog.starter_planes() == []

    def test_invalid_coordinates_skipped(self, tmp_path):
        (tmp_path / "cities.yaml").write_text(
            "cities:\n"
            "  - {id: ok, name: Ok, country: XX, latitude: 1, longitude: 1}\n"
            "  - {id: bad, name: Bad, country: XX, latitude: 95, longitude: 1}\n"
        )
        catalog = ReferenceCatalog(tmp_path)
        assert list(catalog.cities) == ["ok"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
