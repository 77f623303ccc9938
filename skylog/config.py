"""
SKYLOG Configuration Management

This module provides configuration management for the SKYLOG fleet simulation.
It includes physical and formula constants, tunable game tables, map colors,
and runtime configuration loaded from YAML files.
"""

import os
from typing import Any, Dict, List, Optional

import yaml

# =============================================================================
# Physical & Formula Constants
# =============================================================================


class Constants:
    """Fixed constants used by the route and flight formulas."""

    EARTH_RADIUS_KM: float = 6371.0  # Earth's radius for distance calculations
    CRUISE_SPEED_KMH: float = 850.0  # Average cruise speed for route durations
    GROUND_OVERHEAD_MIN: int = 30  # Taxi, takeoff and landing overhead per flight
    MS_PER_MINUTE: int = 60_000
    MS_PER_HOUR: int = 3_600_000

    # Flight progress thresholds for status derivation
    TAXI_PROGRESS_LIMIT: float = 0.08  # Below this a plane is taxiing
    LANDING_PROGRESS_LIMIT: float = 0.92  # Above this a plane is landing


# =============================================================================
# Game Balance Settings
# =============================================================================


class Settings:
    """Tunable tables for the economy, mood and progression formulas."""

    # --- Route Demand ---
    DEMAND_BASE: float = 0.3  # Lowest possible hashed demand
    DEMAND_BUCKETS: int = 50  # Hash is folded into this many 0.01 steps
    SAME_COUNTRY_DEMAND_BONUS: float = 0.2  # Domestic routes are busier

    # --- Revenue Multipliers ---
    CAPACITY_DIVISOR: float = 500.0  # revenue *= 1 + capacity / divisor
    MOOD_REVENUE_BONUS: float = 0.3  # Up to +30% for a happy plane
    BOND_REVENUE_BONUS: float = 0.2  # Up to +20% for a bonded plane
    LEVEL_REVENUE_BONUS: float = 0.05  # +5% per level above 1

    # --- Mood ---
    # (max flight duration in minutes, mood change); longer flights are more tiring
    MOOD_COST_TIERS: List[tuple] = [(60, -2), (180, -5), (360, -8)]
    MOOD_COST_LONG_HAUL: int = -12
    MIN_MOOD_FOR_DEPARTURE: int = 10  # Planes at or below this stay grounded

    # Idle mood recovery per hour, by personality
    MOOD_RECOVERY_RATES: Dict[str, int] = {
        "dreamer": 8,
        "gentle": 7,
        "steady": 6,
        "shy": 6,
        "proud": 5,
        "adventurer": 4,
    }
    DEFAULT_MOOD_RECOVERY_RATE: int = 5

    # --- Bond ---
    # (bond below, gain per flight); bond grows slower as it increases
    BOND_GAIN_TIERS: List[tuple] = [(30, 3.0), (60, 2.0), (90, 1.0)]
    BOND_GAIN_MAX_TIER: float = 0.5

    # --- Experience ---
    EXP_DISTANCE_DIVISOR: float = 100.0  # exp = distance / divisor + base
    EXP_BASE_PER_FLIGHT: int = 10
    PLAYER_EXP_PER_FLIGHT: int = 5  # Credited to the player per completed flight

    # --- Offline Catch-Up ---
    OFFLINE_REVENUE_FACTOR: float = 0.8  # Offline earnings are 80% of live play
    OFFLINE_MOOD_COST_PER_FLIGHT: int = 3
    OFFLINE_MOOD_FLOOR: int = 10  # Offline flying never fully grounds a plane

    # --- Stories ---
    STORY_CHOICE_REPUTATION: int = 5  # Reputation for answering a passenger story

    # --- Driver Cadence ---
    TICK_INTERVAL_SECONDS: float = 1.0
    SAVE_INTERVAL_SECONDS: float = 30.0
    AUTO_START_INTERVAL_SECONDS: float = 5.0
    MIN_OFFLINE_MINUTES: float = 5.0

    # --- Visualization ---
    DEFAULT_MAP_STYLE: str = "CartoDB.Positron"  # Base map tile style
    DEFAULT_ZOOM: int = 4  # Initial map zoom level
    ROUTE_MIN_WEIGHT: int = 2  # Route line thickness at zero demand
    ROUTE_MAX_WEIGHT: int = 7  # Route line thickness at full demand
    ROUTE_OPACITY: float = 0.7  # Route line transparency (0-1)
    CITY_MARKER_RADIUS: int = 7  # City marker size (pixels)


# =============================================================================
# Color Schemes
# =============================================================================


class Colors:
    """Color definitions for route maps and plane rarity."""

    ASSIGNED_ROUTE_COLOR: str = "#F0A500"  # Amber: a plane flies this route
    OPEN_ROUTE_COLOR: str = "#7BC4E8"  # Sky blue: no plane assigned
    CITY_COLOR: str = "#2c3e50"

    RARITY_COLORS: Dict[str, str] = {
        "common": "#9CA3AF",
        "uncommon": "#34D399",
        "rare": "#60A5FA",
        "epic": "#A78BFA",
        "legendary": "#FBBF24",
    }


# =============================================================================
# Runtime Configuration
# =============================================================================


class Config:
    """
    Runtime configuration manager for SKYLOG.

    Loads settings from YAML files or uses sensible defaults.
    Provides property-based access to common settings.

    Example:
        >>> config = Config('skylog.yaml')
        >>> print(f"Saving to {config.db_path}")
        >>> print(f"Tick every {config.tick_interval}s")
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. If None or missing,
                        uses default configuration.
        """
        self.config_path = config_path
        self._config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file or return defaults.

        Returns:
            Configuration dictionary
        """
        if self.config_path is None or not os.path.exists(self.config_path):
            return self._get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
                if self._validate_config(config):
                    return config
                else:
                    print("⚠️  Invalid config structure, using defaults")
                    return self._get_default_config()
        except (OSError, yaml.YAMLError) as e:
            print(f"⚠️  Could not load config file: {e}")
            return self._get_default_config()

    def _validate_config(self, config: Dict[str, Any]) -> bool:
        """
        Validate configuration structure and required fields.

        Args:
            config: Configuration dictionary to validate

        Returns:
            True if valid, False otherwise
        """
        try:
            # Required: player section
            assert "player" in config
            cities = config["player"]["starting_cities"]
            assert isinstance(cities, list) and len(cities) > 0
            assert all(isinstance(c, str) for c in cities)

            # Required: game section
            assert "game" in config
            tick = config["game"]["tick_interval_seconds"]
            assert isinstance(tick, (float, int)) and tick > 0

            # Required: database section
            assert "database" in config
            assert isinstance(config["database"]["path"], str)

            return True
        except (AssertionError, KeyError, TypeError):
            return False

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration.

        Returns:
            Default configuration dictionary
        """
        return {
            "player": {
                "name": "Captain",
                "starting_cities": ["beijing", "shanghai"],
                "starting_coins": 10000,
                "starting_gems": 50,
            },
            "game": {
                "tick_interval_seconds": Settings.TICK_INTERVAL_SECONDS,
                "save_interval_seconds": Settings.SAVE_INTERVAL_SECONDS,
                "auto_start_interval_seconds": Settings.AUTO_START_INTERVAL_SECONDS,
            },
            "offline": {
                "min_offline_minutes": Settings.MIN_OFFLINE_MINUTES,
                "accrue_experience": True,
            },
            "database": {"path": "data/skylog_saves.db"},
            "narrative": {
                "diary_url": None,  # POST endpoint returning {"diary": {...}}
                "story_url": None,  # POST endpoint returning {"story": {...}}
                "timeout_seconds": 10,
            },
            "visualization": {
                "map_style": Settings.DEFAULT_MAP_STYLE,
                "output_path": "data/skylog_routes.html",
            },
        }

    def save_config(self) -> None:
        """
        Save current configuration to YAML file.

        Raises:
            ValueError: If config_path is not set
        """
        if self.config_path is None:
            raise ValueError("Cannot save config: no config_path specified")

        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                yaml.dump(self._config, f, default_flow_style=False)
        except OSError as e:
            print(f"❌ Error saving config: {e}")
            raise

    # --- Property Accessors ---

    @property
    def player_name(self) -> str:
        """Get the player's display name."""
        return self._config["player"].get("name", "Captain")

    @property
    def starting_cities(self) -> List[str]:
        """Get city ids unlocked for a brand new player."""
        return list(self._config["player"]["starting_cities"])

    @property
    def starting_coins(self) -> int:
        """Get the coin balance of a brand new player."""
        return int(self._config["player"].get("starting_coins", 10000))

    @property
    def starting_gems(self) -> int:
        """Get the gem balance of a brand new player."""
        return int(self._config["player"].get("starting_gems", 50))

    @property
    def tick_interval(self) -> float:
        """Get simulation tick interval in seconds."""
        return float(self._config["game"]["tick_interval_seconds"])

    @property
    def save_interval(self) -> float:
        """Get snapshot save interval in seconds."""
        return float(
            self.get("game.save_interval_seconds", Settings.SAVE_INTERVAL_SECONDS)
        )

    @property
    def auto_start_interval(self) -> float:
        """Get interval in seconds between auto-start sweeps of idle planes."""
        return float(
            self.get(
                "game.auto_start_interval_seconds",
                Settings.AUTO_START_INTERVAL_SECONDS,
            )
        )

    @property
    def min_offline_ms(self) -> int:
        """Get minimum absence (ms) before offline catch-up runs."""
        minutes = float(
            self.get("offline.min_offline_minutes", Settings.MIN_OFFLINE_MINUTES)
        )
        return int(minutes * Constants.MS_PER_MINUTE)

    @property
    def offline_accrues_experience(self) -> bool:
        """Whether offline flights grant plane experience."""
        return bool(self.get("offline.accrue_experience", True))

    @property
    def db_path(self) -> str:
        """Get save database file path."""
        return self._config["database"]["path"]

    @property
    def diary_url(self) -> Optional[str]:
        """Get diary generation endpoint, or None for mock diaries."""
        return self.get("narrative.diary_url")

    @property
    def story_url(self) -> Optional[str]:
        """Get story generation endpoint, or None for mock stories."""
        return self.get("narrative.story_url")

    @property
    def narrative_timeout(self) -> float:
        """Get narrative request timeout in seconds."""
        return float(self.get("narrative.timeout_seconds", 10))

    @property
    def map_style(self) -> str:
        """Get route map tile style."""
        return self.get("visualization.map_style", Settings.DEFAULT_MAP_STYLE)

    @property
    def map_output_path(self) -> str:
        """Get default route map output path."""
        return self.get("visualization.output_path", "data/skylog_routes.html")

    # --- Generic Accessors ---

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'game.tick_interval_seconds')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('offline.min_offline_minutes', 5)
            5
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'database.path')
            value: Value to set

        Example:
            >>> config.set('game.tick_interval_seconds', 2)
        """
        keys = key.split(".")
        config = self._config

        # Navigate to parent of target key
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        # Set final value
        config[keys[-1]] = value
