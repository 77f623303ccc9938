"""
SKYLOG Game Driver
Runs the game session: loads saves, applies offline catch-up, ticks the
fleet on a fixed cadence, credits the player and saves periodically.
"""

import time
from datetime import datetime
from typing import List, Optional

from ..config import Config, Constants, Settings
from ..data import ReferenceCatalog
from ..models import Diary, FlightResult, OfflineReport, PassengerStory
from ..narrative import NarrativeClient, StoryBook
from ..progression import PlayerLedger, check_achievements
from ..simulation import FleetRepository
from ..utils import format_duration, now_ms
from .constants import STATUS_EVERY_TICKS
from .database import SaveDatabase
from .state import GameState


class GameDriver:
    """
    Periodic driver around the fleet repository and the player ledger.

    The driver owns every collaborator for one session and is the only
    place where simulation results flow into the ledger.

    Example:
        >>> driver = GameDriver(Config('skylog.yaml'))
        >>> report = driver.start()
        >>> driver.run()
    """

    def __init__(
        self,
        config: Config,
        catalog: Optional[ReferenceCatalog] = None,
        db: Optional[SaveDatabase] = None,
        narrative: Optional[NarrativeClient] = None,
    ):
        """
        Initialize game driver.

        Args:
            config: SKYLOG configuration object
            catalog: Reference data (default: bundled catalog)
            db: Save database (default: config.db_path)
            narrative: Narrative client (default: from config)
        """
        self.config = config
        self.catalog = catalog or ReferenceCatalog()
        self.db = db or SaveDatabase(config.db_path)
        self.narrative = narrative or NarrativeClient.from_config(config)

        self.ledger: Optional[PlayerLedger] = None
        self.repo: Optional[FleetRepository] = None
        self.state: Optional[GameState] = None
        self.stories: Optional[StoryBook] = None

        self.tick_count = 0
        self.flights_this_session = 0
        self.coins_this_session = 0
        self._last_tick = 0
        self._last_save = 0
        self._last_auto_start = 0

    @property
    def is_started(self) -> bool:
        return self.repo is not None

    def _require_started(self):
        if not self.is_started:
            raise RuntimeError("Game not started, call start() first")

    # --- Lifecycle ---

    def start(self, now: Optional[int] = None) -> Optional[OfflineReport]:
        """
        Load all stores and catch up on time spent offline.

        The player is loaded first since the route network depends on the
        unlocked cities.

        Args:
            now: Current epoch ms (default: wall clock)

        Returns:
            OfflineReport if an offline catch-up ran, else None
        """
        now = now if now is not None else now_ms()

        saved_player = self.db.load("player")
        self.ledger = PlayerLedger.hydrate(
            saved_player,
            self.catalog.models,
            name=self.config.player_name,
            coins=self.config.starting_coins,
            gems=self.config.starting_gems,
            unlocked_cities=self.config.starting_cities,
            now=now,
        )

        self.repo = FleetRepository.hydrate(
            self.db.load("planes"), self.ledger.unlocked_cities, self.catalog, now
        )
        self.state = GameState.hydrate(self.db.load("game"))
        self.stories = StoryBook.hydrate(self.db.load("stories"))

        if saved_player is None:
            for plane in self.repo.list_planes():
                self.ledger.own_plane(plane.model_id, now)

        report = None
        offline_duration = now - self.ledger.last_online
        if offline_duration > self.config.min_offline_ms:
            report = self.repo.process_offline_flights(
                offline_duration, self.config.offline_accrues_experience
            )
            if report.coins_earned > 0 or report.flights_completed > 0:
                self.ledger.process_offline_return(report)
                check_achievements(
                    self.ledger, self.repo.fleet_totals(), self.catalog.achievements
                )

        self.ledger.update_last_online(now)
        self.state.clean_expired_events(now)

        self._last_tick = now
        self._last_save = now
        self._last_auto_start = now
        return report

    def run_single_tick(self, now: Optional[int] = None) -> List[FlightResult]:
        """
        Run one driver tick.

        Advances flights by the time since the previous tick, credits
        completed flights, and runs the auto-start and save cadences.
        While paused nothing advances and paused time is not simulated.

        Returns:
            Flight results completed this tick
        """
        self._require_started()
        now = now if now is not None else now_ms()

        if self.state.is_paused:
            self._last_tick = now
            return []

        delta_ms = now - self._last_tick
        self._last_tick = now
        self.tick_count += 1

        results = self.repo.tick_flights(delta_ms, now)
        if results:
            self.coins_this_session += self.ledger.credit_flights(results)
            self.flights_this_session += len(results)
            check_achievements(
                self.ledger, self.repo.fleet_totals(), self.catalog.achievements
            )

        if now - self._last_auto_start > self.config.auto_start_interval * 1000:
            self._last_auto_start = now
            self.repo.start_ready_flights(now)

        if now - self._last_save > self.config.save_interval * 1000:
            self.save(now)

        return results

    def save(self, now: Optional[int] = None):
        """Write every store snapshot to the save database."""
        self._require_started()
        now = now if now is not None else now_ms()

        self.ledger.update_last_online(now)
        self.db.save("player", self.ledger.snapshot())
        self.db.save("planes", self.repo.snapshot())
        self.db.save("game", self.state.snapshot())
        self.db.save("stories", self.stories.snapshot())
        self._last_save = now

    # --- Player Commands ---

    def unlock_city(self, city_id: str) -> bool:
        """
        Unlock a city and extend the route network.

        Returns:
            True if the city was newly unlocked
        """
        self._require_started()
        if self.catalog.get_city(city_id) is None:
            print(f"⚠️  Unknown city '{city_id}'")
            return False
        if not self.ledger.unlock_city(city_id):
            return False

        self.repo.refresh_routes(self.ledger.unlocked_cities)
        check_achievements(self.ledger, self.repo.fleet_totals(), self.catalog.achievements)
        return True

    def request_diary(self, plane_id: str) -> Optional[Diary]:
        """Have a plane write a diary entry and store it."""
        self._require_started()
        plane = self.repo.get_plane(plane_id)
        if plane is None:
            print(f"⚠️  Unknown plane '{plane_id}'")
            return None

        route = self.repo.get_route(plane.assigned_route) if plane.assigned_route else None
        diary = self.narrative.generate_diary(plane, route, self.catalog.cities)

        self.repo.add_diary(plane_id, diary)
        self.ledger.increment_diaries_read()
        self.ledger.add_notification(
            "diary", f"{plane.nickname} wrote a diary", diary.content[:60],
            data={"plane_id": plane_id, "diary_id": diary.id},
        )
        return diary

    def request_story(self, plane_id: str) -> Optional[PassengerStory]:
        """
        Generate a passenger story for a plane's current route.

        The story becomes the pending story awaiting a choice.
        """
        self._require_started()
        plane = self.repo.get_plane(plane_id)
        if plane is None or plane.assigned_route is None:
            print(f"⚠️  Plane '{plane_id}' has no route for a story")
            return None

        route = self.repo.get_route(plane.assigned_route)
        if route is None:
            return None

        story = self.narrative.generate_story(plane, route, self.catalog.cities)
        self.stories.add_story(story)
        self.stories.set_pending_story(story)
        self.ledger.increment_stories_read()
        return story

    def choose_story(self, story_id: str, choice_id: str) -> Optional[List[str]]:
        """
        Answer a passenger story and reward the player with reputation.

        Returns:
            Butterfly effects, or None if the story or choice is unknown
        """
        self._require_started()
        effects = self.stories.make_choice(story_id, choice_id)
        if effects is not None:
            self.ledger.add_reputation(Settings.STORY_CHOICE_REPUTATION)
        return effects

    # --- Console Loop ---

    def print_header(self):
        """Print session header."""
        print("=" * 70)
        print("✈️  SKYLOG - Idle Fleet Simulation")
        print("=" * 70)
        print(f"👤 Player: {self.ledger.name} (level {self.ledger.level})")
        print(f"🏙️  Cities: {', '.join(self.ledger.unlocked_cities)}")
        print(f"🛩️  Fleet: {len(self.repo.list_planes())} planes, "
              f"{len(self.repo.list_routes())} routes")
        print(f"💾 Saves: {self.db.db_path}")
        print("=" * 70)

    def print_welcome_back(self, report: Optional[OfflineReport]):
        """Print the offline earnings summary, if anything was earned."""
        if report is None or (report.flights_completed == 0 and report.coins_earned == 0):
            return

        away = format_duration(report.offline_duration_ms // 1000)
        print(f"\n👋 Welcome back! Away for {away}: "
              f"{report.flights_completed} flights, "
              f"+{report.coins_earned:,} coins")

    def print_status(self):
        """Print a one-line session status."""
        print(f"[{datetime.now().strftime('%H:%M:%S')}] "
              f"Tick #{self.tick_count} | "
              f"Flying: {self.repo.flying_count()} | "
              f"Coins: {self.ledger.coins:,} | "
              f"Session flights: {self.flights_this_session}")

    def run(self, max_ticks: Optional[int] = None):
        """
        Run the tick loop until interrupted.

        Args:
            max_ticks: Stop after this many ticks (None = run forever)
        """
        if not self.is_started:
            self.print_welcome_back(self.start())

        self.print_header()
        print("\n🔄 Starting game loop... (Press Ctrl+C to stop)\n")

        try:
            while max_ticks is None or self.tick_count < max_ticks:
                try:
                    results = self.run_single_tick()
                    for result in results:
                        print(f"🛬 {result.plane_id} landed: +{result.revenue:,} coins")
                except Exception as e:
                    print(f"\n⚠️  Error in tick {self.tick_count}: {e}")
                    print("   Continuing with next tick...")

                if self.tick_count and self.tick_count % STATUS_EVERY_TICKS == 0:
                    self.print_status()

                time.sleep(self.config.tick_interval)

            self._handle_shutdown()

        except KeyboardInterrupt:
            self._handle_shutdown()

    def _handle_shutdown(self):
        """Handle graceful shutdown."""
        print("\n\n👋 Stopping game...")

        try:
            self.save()
        except Exception as e:
            print(f"❌ Error saving game: {e}")
            return

        totals = self.repo.fleet_totals()
        session_minutes = self.tick_count * self.config.tick_interval * 1000 / Constants.MS_PER_MINUTE
        print(f"\n📊 Session Statistics:")
        print(f"   Ticks: {self.tick_count:,} (~{session_minutes:.1f} min)")
        print(f"   Flights this session: {self.flights_this_session:,}")
        print(f"   Coins this session: {self.coins_this_session:,}")
        print(f"   Fleet lifetime flights: {totals['total_flights']:,}")
        print(f"   Fleet lifetime distance: {totals['total_distance']:,} km")
        print(f"\n💾 Game saved to: {self.db.db_path}")
