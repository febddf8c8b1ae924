"""Display targets the widget writes into."""

import sys
from typing import Protocol, TextIO

from timeweather.reporting.map_view import MapView


class Display(Protocol):
    def show_title(self, text: str) -> None: ...

    def show_time(self, text: str) -> None: ...

    def show_weather(self, text: str) -> None: ...

    def show_map(self, view: MapView) -> None: ...

    def show_message(self, text: str) -> None: ...


class TerminalDisplay:
    """Single status line, redrawn in place: title │ time │ weather."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout
        self.title = ""
        self.time = ""
        self.weather = "Loading weather..."
        self._map_link: str | None = None

    def show_title(self, text: str) -> None:
        self.title = text
        self._redraw()

    def show_time(self, text: str) -> None:
        self.time = text
        self._redraw()

    def show_weather(self, text: str) -> None:
        self.weather = text
        self._redraw()

    def show_map(self, view: MapView) -> None:
        if view.link_url == self._map_link:
            return
        self._map_link = view.link_url
        self._print_line(f"🗺  {view.link_url}")

    def show_message(self, text: str) -> None:
        self._print_line(text)

    def status_line(self) -> str:
        return " │ ".join(p for p in (self.title, self.time, self.weather) if p)

    def _print_line(self, text: str) -> None:
        # Clear the status line, print above it, then restore it
        self.stream.write(f"\r\x1b[K{text}\n")
        self._redraw()

    def _redraw(self) -> None:
        self.stream.write(f"\r\x1b[K{self.status_line()}")
        self.stream.flush()


class MemoryDisplay:
    """Records every write; used by the one-shot command and in tests."""

    def __init__(self) -> None:
        self.title: str | None = None
        self.time: str | None = None
        self.weather: str | None = None
        self.map: MapView | None = None
        self.messages: list[str] = []
        self.history: list[tuple[str, str]] = []

    def show_title(self, text: str) -> None:
        self.title = text
        self.history.append(("title", text))

    def show_time(self, text: str) -> None:
        self.time = text
        self.history.append(("time", text))

    def show_weather(self, text: str) -> None:
        self.weather = text
        self.history.append(("weather", text))

    def show_map(self, view: MapView) -> None:
        self.map = view
        self.history.append(("map", view.link_url))

    def show_message(self, text: str) -> None:
        self.messages.append(text)
        self.history.append(("message", text))
