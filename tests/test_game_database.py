"""
Tests for the SKYLOG save database.
"""

import pytest
import sys
import os
import sqlite3
import tempfile
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.game.database import SaveDatabase


@pytest.fixture
def temp_db():
    """Create temporary database for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = SaveDatabase(path)

    yield db

    # Cleanup
    try:
        os.unlink(path)
    except OSError:
        pass


class TestSaveDatabase:
    """Tests for SaveDatabase class."""

    def test_init_database(self, temp_db):
        """Test database initialization."""
        assert os.path.exists(temp_db.db_path)

    def test_creates_parent_directory(self, tmp_path):
        db = SaveDatabase(str(tmp_path / "nested" / "saves.db"))
        assert Path(db.db_path).exists()

    def test_save_and_load(self, temp_db):
        temp_db.save("player", {"coins": 10, "name": "Ace", "cities": ["beijing"]})
        assert temp_db.load("player") == {"coins": 10, "name": "Ace", "cities": ["beijing"]}

    def test_save_replaces(self, temp_db):
        temp_db.save("player", {"coins": 10})
        temp_db.save("player", {"coins": 20})
        assert temp_db.load("player") == {"coins": 20}

    def test_missing_key(self, temp_db):
        assert temp_db.load("planes") is None

    def test_keys_are_prefixed(self, temp_db):
        temp_db.save("game", {"active_events": []})

        conn = sqlite3.connect(temp_db.db_path)
        keys = [row[0] for row in conn.execute("SELECT key FROM saves")]
        conn.close()

        assert keys == ["skylog_game"]

    def test_corrupt_json(self, temp_db):
        conn = sqlite3.connect(temp_db.db_path)
        conn.execute("INSERT INTO saves VALUES ('skylog_player', '{not json', 0)")
        conn.commit()
        conn.close()

        assert temp_db.load("player") is None

    def test_delete_and_clear(self, temp_db):
        for name in ("player", "planes", "game", "stories"):
            temp_db.save(name, {"name": name})

        temp_db.delete("player")
        assert temp_db.load("player") is None
        assert temp_db.load("planes") is not None

        temp_db.clear_all_saves()
        assert temp_db.list_saves() == []

    def test_list_saves(self, temp_db):
        temp_db.save("planes", {"planes": []})
        temp_db.save("player", {"coins": 1})

        saves = temp_db.list_saves()

        assert [s["name"] for s in saves] == ["planes", "player"]
        assert all(s["size_bytes"] > 0 for s in saves)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
