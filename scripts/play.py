#!/usr/bin/env python3
"""
SKYLOG Game Script

Usage:
    python scripts/play.py [OPTIONS]

Examples:
    # Run the game loop until Ctrl+C
    python scripts/play.py

    # Unlock a city, assign a plane and run 60 ticks
    python scripts/play.py --unlock tokyo --assign starter-luna=beijing-shanghai --ticks 60

    # Show saves / reset the game
    python scripts/play.py --list-saves
    python scripts/play.py --reset
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skylog.config import Config
from skylog.game import GameDriver, SaveDatabase


def main():
    """Main entry point for the game loop."""
    parser = argparse.ArgumentParser(
        description="SKYLOG - Idle fleet simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default="skylog.yaml",
        help="Path to configuration file (default: skylog.yaml)",
    )
    parser.add_argument(
        "--db",
        type=str,
        help="Path to save database (default: from config)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        help="Stop after N ticks (default: run until Ctrl+C)",
    )
    parser.add_argument(
        "--unlock",
        type=str,
        action="append",
        default=[],
        metavar="CITY_ID",
        help="Unlock a city before starting (repeatable)",
    )
    parser.add_argument(
        "--assign",
        type=str,
        action="append",
        default=[],
        metavar="PLANE_ID=ROUTE_ID",
        help="Assign a plane to a route before starting (repeatable)",
    )
    parser.add_argument(
        "--list-saves",
        action="store_true",
        help="List saved stores and exit",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all saves and exit",
    )

    args = parser.parse_args()

    # Load configuration
    try:
        config = Config(args.config)
    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        sys.exit(1)

    if args.db:
        config.set("database.path", args.db)

    db = SaveDatabase(config.db_path)

    if args.list_saves:
        saves = db.list_saves()
        if not saves:
            print("No saves found")
        for save in saves:
            print(f"💾 {save['name']:<10} {save['size_bytes']:>8,} bytes  (updated {save['updated_at']})")
        return

    if args.reset:
        db.clear_all_saves()
        print(f"🗑️  All saves deleted from {config.db_path}")
        return

    try:
        driver = GameDriver(config, db=db)
        driver.print_welcome_back(driver.start())

        for city_id in args.unlock:
            if driver.unlock_city(city_id):
                print(f"🏙️  Unlocked {city_id}")

        for assignment in args.assign:
            plane_id, _, route_id = assignment.partition("=")
            driver.repo.assign_route(plane_id, route_id)

        driver.run(max_ticks=args.ticks)
    except KeyboardInterrupt:
        print("\n👋 Game stopped by user")
    except Exception as e:
        print(f"❌ Fatal error: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
