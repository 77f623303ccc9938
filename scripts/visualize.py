#!/usr/bin/env python3
"""
SKYLOG Route Map Script

Usage:
    python scripts/visualize.py [OPTIONS]

Examples:
    # Map the saved route network
    python scripts/visualize.py

    # Dark map, custom output, open in browser
    python scripts/visualize.py --style CartoDB.DarkMatter --output routes.html --open
"""

import sys
import argparse
import webbrowser
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.config import Config, Settings
from skylog.data import ReferenceCatalog
from skylog.game import SaveDatabase
from skylog.progression import PlayerLedger
from skylog.simulation import FleetRepository
from skylog.visualization import RouteMapGenerator


def main():
    """Main entry point for route map generation."""
    parser = argparse.ArgumentParser(
        description="SKYLOG Route Map - Create an interactive map of your network",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="skylog.yaml",
        help="Path to config file (default: skylog.yaml)",
    )
    parser.add_argument(
        "--db",
        type=str,
        help="Path to save database (default: from config)",
    )
    parser.add_argument(
        "--output", type=str, help="Output filename (default: from config)"
    )
    parser.add_argument(
        "--style",
        type=str,
        choices=["CartoDB.DarkMatter", "CartoDB.Positron", "OpenStreetMap"],
        help="Map style (default: from config)",
    )
    parser.add_argument(
        "--zoom",
        type=int,
        default=Settings.DEFAULT_ZOOM,
        help=f"Initial zoom level (default: {Settings.DEFAULT_ZOOM})",
    )
    parser.add_argument(
        "--open", action="store_true", help="Open the map in the default browser"
    )

    args = parser.parse_args()

    config = Config(args.config)
    db_path = args.db if args.db else config.db_path
    output = args.output or config.map_output_path

    try:
        catalog = ReferenceCatalog()
        db = SaveDatabase(db_path)

        ledger = PlayerLedger.hydrate(
            db.load("player"),
            catalog.models,
            unlocked_cities=config.starting_cities,
        )
        repo = FleetRepository.hydrate(db.load("planes"), ledger.unlocked_cities, catalog)

        print("🗺️  Generating route map...")
        generator = RouteMapGenerator(catalog, args.zoom, args.style or config.map_style)
        generator.generate(ledger.unlocked_cities, repo.list_routes(), repo.list_planes())
        generator.save(output)

        if args.open:
            webbrowser.open(Path(output).resolve().as_uri())

    except Exception as e:
        print(f"❌ Error: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
