"""
SKYLOG Reference Data

Bundled YAML catalogs of cities, plane models, starter planes and
achievement definitions.
"""

from .catalog import ReferenceCatalog, DATA_DIR

__all__ = [
    "ReferenceCatalog",
    "DATA_DIR",
]
