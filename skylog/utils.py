"""
SKYLOG Utility Functions
Common helpers for distance calculations, rounding, hashing and formatting.
"""

import math
import time
from math import radians, sin, cos, sqrt, atan2
from typing import Union

from .config import Constants

Number = Union[int, float]


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great circle distance between two points using Haversine formula.

    The Haversine formula calculates the shortest distance over the earth's
    surface, giving an "as-the-crow-flies" distance between two points.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in kilometers

    Example:
        >>> round(haversine_distance(0, 0, 0, 1))
        111
    """
    # Convert to radians
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    # Haversine formula
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return Constants.EARTH_RADIUS_KM * c


def round_half_up(value: Number) -> int:
    """
    Round to the nearest integer with halves rounded up.

    Python's built-in round() uses banker's rounding (round(0.5) == 0), which
    would make game formulas drift by one coin on exact halves.

    Example:
        >>> round_half_up(2.5), round_half_up(-2.5)
        (3, -2)
    """
    return int(math.floor(value + 0.5))


def clamp(value: Number, low: Number, high: Number) -> Number:
    """Clamp value into the closed range [low, high]."""
    return max(low, min(high, value))


def stable_hash(text: str) -> int:
    """
    Deterministic, non-cryptographic string hash.

    Multiplies by 31 per character with 32-bit signed wrap-around and returns
    the absolute value, so the same string always hashes the same way across
    runs and interpreters (unlike the salted built-in hash()).

    Args:
        text: String to hash (empty string hashes to 0)

    Returns:
        Non-negative integer
    """
    value = 0
    for char in text or "":
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def format_duration(seconds: int) -> str:
    """
    Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string

    Example:
        >>> format_duration(90061)
        '1d 1h 1m 1s'
    """
    if seconds is None or seconds < 0:
        return "N/A"

    seconds = int(seconds)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")

    return " ".join(parts)


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Validate latitude and longitude coordinates.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        True if coordinates are valid

    Example:
        >>> validate_coordinates(39.9042, 116.4074)
        True
        >>> validate_coordinates(100, 200)
        False
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180
