"""Exception types raised by the widget."""


class WidgetError(Exception):
    """Base class for widget errors."""


class WeatherFetchError(WidgetError):
    """Raised when current conditions cannot be obtained."""


class HttpError(WeatherFetchError):
    """Raised when the weather service answers with a non-success status."""

    def __init__(self, status: int, url: str = ""):
        super().__init__(f"HTTP {status}" + (f" from {url}" if url else ""))
        self.status = status
        self.url = url


class NetworkError(WeatherFetchError):
    """Raised when the request never produced a response."""


class ParseError(WeatherFetchError):
    """Raised when the response body is not the expected shape."""


class InvalidTimeZone(WidgetError):
    def __init__(self, time_zone: str):
        super().__init__(f"Unknown time zone: {time_zone!r}")
        self.time_zone = time_zone
