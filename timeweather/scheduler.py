"""Refresh scheduler: clock tick, weather poll, and selection changes.

Runs on one asyncio event loop. Both timers read the selected city and
unit from the controls when they fire, so a change made by the user is
picked up on the next tick without re-arming anything.

Commands accepted on stdin while running:
    city <key>                  switch city
    unit <celsius|fahrenheit>   switch temperature unit
    quit                        stop the widget
"""

import asyncio
import logging
import signal
import sys
import threading
from collections.abc import AsyncIterator

from timeweather.config.catalog import CityCatalog
from timeweather.config.schema import ScheduleConfig
from timeweather.models.common import CityKey, Unit
from timeweather.render import Renderer, WidgetContext
from timeweather.storage.settings_store import SettingsStore

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Owns the widget context and drives every refresh of it."""

    def __init__(
        self,
        context: WidgetContext,
        catalog: CityCatalog,
        store: SettingsStore,
        renderer: Renderer,
        schedule: ScheduleConfig | None = None,
    ):
        self.context = context
        self.catalog = catalog
        self.store = store
        self.renderer = renderer
        self.schedule = schedule or ScheduleConfig()
        self._running = False
        self._stopped: asyncio.Event | None = None
        self._tasks: list[asyncio.Task] = []
        self._total_ticks = 0
        self._total_polls = 0
        self._total_polls_dropped = 0

    @property
    def clock_interval(self) -> float:
        return self.schedule.clock_tick_seconds

    @property
    def weather_interval(self) -> float:
        return self.schedule.weather_poll_minutes * 60

    def load_settings(self) -> None:
        """Read saved settings and reflect them into the controls."""
        settings = self.store.load()
        controls = self.context.controls
        controls.city_key = settings.city_key
        controls.unit = settings.unit
        logger.info("Loaded settings city=%s unit=%s", settings.city_key, settings.unit)

    async def render_once(self) -> None:
        """Load settings and do one full render, waiting for the weather."""
        self.load_settings()
        controls = self.context.controls
        await self.renderer.render(controls.city_key, controls.unit)

    async def start(self) -> None:
        """Startup sequence: load settings, render once, arm both timers.

        The first weather fetch runs in the background, so the clock starts
        ticking right away.
        """
        self._stopped = asyncio.Event()
        self._running = True
        self.load_settings()
        controls = self.context.controls
        self.renderer.render(controls.city_key, controls.unit)
        self._tasks = [
            asyncio.create_task(self._clock_loop(), name="clock-tick"),
            asyncio.create_task(self._weather_loop(), name="weather-poll"),
        ]
        logger.info(
            "Scheduler started: clock every %.1fs, weather every %.0fs",
            self.clock_interval, self.weather_interval,
        )

    async def run(self, commands: AsyncIterator[str] | None = None) -> None:
        """Run until stop() is called, a signal arrives, or 'quit' is entered."""
        await self.start()
        self._setup_signals()
        if commands is not None:
            self._tasks.append(
                asyncio.create_task(self._command_loop(commands), name="commands")
            )
        try:
            assert self._stopped is not None
            await self._stopped.wait()
        finally:
            await self.shutdown()

    def stop(self) -> None:
        self._running = False
        if self._stopped is not None:
            self._stopped.set()

    async def shutdown(self) -> None:
        self._running = False
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        await self.renderer.cancel_pending()
        self._tasks = []
        logger.info(
            "Scheduler stopped: %d ticks, %d weather polls (%d dropped)",
            self._total_ticks, self._total_polls, self._total_polls_dropped,
        )

    # --- Triggers ---

    def tick_clock(self) -> None:
        """Redisplay local time for whichever city is selected right now."""
        self._total_ticks += 1
        self.renderer.update_time(self.context.controls.city_key)

    async def poll_weather(self) -> None:
        controls = self.context.controls
        self._total_polls += 1
        reading = await self.renderer.update_weather(controls.city_key, controls.unit)
        if reading is None:
            self._total_polls_dropped += 1

    def on_selection_change(
        self, city_key: CityKey | None = None, unit: Unit | str | None = None
    ) -> bool:
        """Apply a user selection: persist once, then do one full render.

        Title, time and map are redrawn before this returns; the weather
        refresh runs in the background.

        Values left as None keep the current selection. Returns False (and
        changes nothing) when a value is not a valid choice.
        """
        controls = self.context.controls
        new_city = controls.city_key if city_key is None else city_key
        if new_city not in self.catalog:
            self.context.display.show_message(
                f"Unknown city {new_city!r}. Choose one of: {', '.join(self.catalog.keys())}"
            )
            return False

        try:
            new_unit = controls.unit if unit is None else Unit(unit)
        except ValueError:
            self.context.display.show_message(
                f"Unknown unit {unit!r}. Choose celsius or fahrenheit"
            )
            return False

        controls.city_key = new_city
        controls.unit = new_unit
        self.store.save(new_city, new_unit)
        self.renderer.render(new_city, new_unit)
        return True

    def handle_command(self, line: str) -> bool:
        """Handle one stdin command. Returns False when the widget should stop."""
        parts = line.strip().split()
        if not parts:
            return True
        cmd, args = parts[0].lower(), parts[1:]

        if cmd in ("quit", "exit", "q"):
            self.stop()
            return False
        if cmd == "city" and len(args) == 1:
            self.on_selection_change(city_key=args[0].lower())
        elif cmd == "unit" and len(args) == 1:
            self.on_selection_change(unit=args[0].lower())
        else:
            self.context.display.show_message(
                "Commands: city <key> | unit <celsius|fahrenheit> | quit"
            )
        return True

    # --- Loops ---

    async def _clock_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self.clock_interval)
            try:
                self.tick_clock()
            except Exception:
                logger.exception("Clock tick crashed")

    async def _weather_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self.weather_interval)
            try:
                await self.poll_weather()
            except Exception:
                self._total_polls_dropped += 1
                logger.exception("Weather poll crashed")

    async def _command_loop(self, commands: AsyncIterator[str]) -> None:
        async for line in commands:
            try:
                if not self.handle_command(line):
                    return
            except Exception:
                logger.exception("Command %r crashed", line.strip())
        logger.info("Command input closed; timers keep running")

    def _setup_signals(self) -> None:
        """Handle SIGTERM and SIGINT for graceful shutdown."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except (NotImplementedError, RuntimeError):
                # No loop signal support here; Ctrl-C still ends asyncio.run()
                logger.debug("Signal handler for %s not installed", sig.name)

    def _on_signal(self, sig: signal.Signals) -> None:
        logger.info("Received %s, shutting down gracefully...", sig.name)
        self.stop()


async def stdin_lines() -> AsyncIterator[str]:
    """Yield lines typed on stdin without blocking the event loop.

    The blocking read happens on a daemon thread so an idle prompt never
    holds up interpreter exit.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    def _reader() -> None:
        try:
            for line in sys.stdin:
                loop.call_soon_threadsafe(queue.put_nowait, line)
            loop.call_soon_threadsafe(queue.put_nowait, None)
        except RuntimeError:
            # event loop already closed
            return

    threading.Thread(target=_reader, name="stdin-reader", daemon=True).start()
    while True:
        line = await queue.get()
        if line is None:
            return
        yield line
