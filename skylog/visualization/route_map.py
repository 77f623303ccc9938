"""
Route Map Generator
Creates interactive Folium maps of the unlocked cities, the route network
and the planes currently in the air.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional

import folium

from skylog.config import Colors, Settings
from skylog.models import City, Plane, Route

MAP_TILE_URLS = {
    "CartoDB.DarkMatter": "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png",
    "CartoDB.Positron": "https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}{r}.png",
    "OpenStreetMap": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
}


class RouteMapGenerator:
    """
    Generates interactive route network maps using Folium.

    Supports visualization of:
    - Unlocked cities
    - Routes (line weight by demand, assigned routes highlighted)
    - Flying planes at their current progress along the route

    Example:
        >>> generator = RouteMapGenerator(catalog)
        >>> generator.generate(ledger.unlocked_cities, repo.list_routes(), repo.list_planes())
        >>> generator.save('data/skylog_routes.html')
    """

    def __init__(
        self,
        catalog,
        zoom: int = Settings.DEFAULT_ZOOM,
        style: str = Settings.DEFAULT_MAP_STYLE,
    ):
        """
        Initialize map generator.

        Args:
            catalog: ReferenceCatalog for city and model lookups
            zoom: Initial zoom level
            style: Map style/theme
        """
        self.catalog = catalog
        self.zoom = zoom
        self.style = style
        self.map: Optional[folium.Map] = None

    def _create_base_map(self, cities: List[City]) -> folium.Map:
        """Create base Folium map centered on the given cities."""
        if cities:
            center = [
                sum(c.latitude for c in cities) / len(cities),
                sum(c.longitude for c in cities) / len(cities),
            ]
        else:
            center = [0.0, 0.0]

        tiles = MAP_TILE_URLS.get(self.style, self.style)

        return folium.Map(
            location=center,
            zoom_start=self.zoom,
            tiles=tiles,
            attr="SKYLOG Route Map",
        )

    def _resolve_cities(self, city_ids: Iterable[str]) -> List[City]:
        cities = []
        for city_id in city_ids:
            city = self.catalog.get_city(city_id)
            if city is None:
                print(f"⚠️  Unknown city '{city_id}' not drawn")
                continue
            cities.append(city)
        return cities

    def add_city(self, city: City):
        """Add a city marker."""
        folium.CircleMarker(
            location=[city.latitude, city.longitude],
            radius=Settings.CITY_MARKER_RADIUS,
            color=Colors.CITY_COLOR,
            fill=True,
            fill_opacity=0.9,
            popup=f"{city.name} ({city.iata or city.country})",
            tooltip=city.name,
        ).add_to(self.map)

    def add_route(self, route: Route, planes: Dict[str, Plane]):
        """
        Add a route line.

        Args:
            route: Route to draw
            planes: Planes by instance id, for the assigned plane's name
        """
        origin = self.catalog.get_city(route.origin)
        destination = self.catalog.get_city(route.destination)
        if origin is None or destination is None:
            return

        plane = planes.get(route.assigned_plane_id)
        color = Colors.ASSIGNED_ROUTE_COLOR if plane else Colors.OPEN_ROUTE_COLOR
        weight = self._get_demand_weight(route.demand)

        folium.PolyLine(
            locations=[
                [origin.latitude, origin.longitude],
                [destination.latitude, destination.longitude],
            ],
            color=color,
            weight=weight,
            opacity=Settings.ROUTE_OPACITY,
            popup=self._create_route_popup(route, origin, destination, plane),
            tooltip=f"{origin.name} - {destination.name}",
        ).add_to(self.map)

    def add_plane(self, plane: Plane, route: Route):
        """Add a marker for a flying plane at its current progress."""
        origin = self.catalog.get_city(route.origin)
        destination = self.catalog.get_city(route.destination)
        if origin is None or destination is None:
            return

        progress = plane.flight_progress
        lat = origin.latitude + (destination.latitude - origin.latitude) * progress
        lon = origin.longitude + (destination.longitude - origin.longitude) * progress

        model = self.catalog.get_model(plane.model_id)
        rarity = model.rarity if model else "common"

        folium.Marker(
            [lat, lon],
            popup=f"{plane.nickname} - {plane.flight_status.value} ({progress:.0%})",
            tooltip=plane.nickname,
            icon=folium.Icon(
                color="white",
                icon_color=Colors.RARITY_COLORS.get(rarity, Colors.RARITY_COLORS["common"]),
                icon="plane",
                prefix="fa",
            ),
        ).add_to(self.map)

    def _create_route_popup(
        self, route: Route, origin: City, destination: City, plane: Optional[Plane]
    ) -> str:
        """
        Create HTML popup for a route.

        Returns:
            HTML string for popup
        """
        assigned = plane.nickname if plane else "Unassigned"

        html = f"""
        <div style='font-family: Arial; min-width: 200px;'>
            <h4 style='margin: 0 0 10px 0; color: #F0A500;'>
                ✈️ {origin.name} - {destination.name}
            </h4>
            <table style='width: 100%; border-collapse: collapse;'>
                <tr><td><b>Distance:</b></td><td>{route.distance_km:,} km</td></tr>
                <tr><td><b>Duration:</b></td><td>{route.flight_duration_min} min</td></tr>
                <tr><td><b>Base revenue:</b></td><td>{route.base_revenue:,}</td></tr>
                <tr><td><b>Demand:</b></td><td>{route.demand:.2f}</td></tr>
                <tr><td><b>Plane:</b></td><td>{assigned}</td></tr>
            </table>
        </div>
        """
        return html

    def _get_demand_weight(self, demand: float) -> int:
        """
        Get line weight based on route demand.

        Args:
            demand: Route demand (0-1)

        Returns:
            Line weight in pixels
        """
        span = Settings.ROUTE_MAX_WEIGHT - Settings.ROUTE_MIN_WEIGHT
        return Settings.ROUTE_MIN_WEIGHT + round(max(0.0, min(1.0, demand)) * span)

    def generate(
        self,
        city_ids: Iterable[str],
        routes: Iterable[Route],
        planes: Iterable[Plane],
    ) -> folium.Map:
        """
        Build the full route map.

        Args:
            city_ids: Unlocked city ids
            routes: Route network
            planes: Fleet

        Returns:
            The Folium map
        """
        cities = self._resolve_cities(city_ids)
        routes = list(routes)
        plane_lookup = {p.instance_id: p for p in planes}
        route_lookup = {r.id: r for r in routes}

        self.map = self._create_base_map(cities)

        for route in routes:
            self.add_route(route, plane_lookup)

        for city in cities:
            self.add_city(city)

        for plane in plane_lookup.values():
            route = route_lookup.get(plane.assigned_route)
            if plane.is_flying and route is not None:
                self.add_plane(plane, route)

        return self.map

    def save(self, filename: str):
        """
        Save map to HTML file.

        Args:
            filename: Output filename (should end in .html)
        """
        if self.map is None:
            raise ValueError("No map generated, call generate() first")

        Path(filename).parent.mkdir(parents=True, exist_ok=True)
        self.map.save(filename)

        # Add a page title
        with open(filename, "r", encoding="utf-8") as f:
            html_content = f.read()
        html_content = html_content.replace("<head>", "<head>\n    <title>SKYLOG Routes</title>", 1)
        with open(filename, "w", encoding="utf-8") as f:
            f.write(html_content)

        print(f"✅ Map saved to: {filename}")
