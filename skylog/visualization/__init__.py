"""
SKYLOG Visualization Component

Interactive route network maps.

Main Classes:
    - RouteMapGenerator: Cities, routes and flying planes on a Folium map

Example:
    >>> from skylog.visualization import RouteMapGenerator
    >>> generator = RouteMapGenerator(catalog)
    >>> generator.generate(ledger.unlocked_cities, repo.list_routes(), repo.list_planes())
    >>> generator.save('data/skylog_routes.html')

Map Styles:
    - CartoDB.Positron (default)
    - CartoDB.DarkMatter
    - OpenStreetMap
"""

from .route_map import RouteMapGenerator

__all__ = [
    # Main classes
    "RouteMapGenerator",
]
