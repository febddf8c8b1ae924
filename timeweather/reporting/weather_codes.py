"""Open-Meteo (WMO) weather code to human-readable description."""

WEATHER_CODE_LABELS: dict[int, str] = {
    0: "Clear",
    1: "Mostly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Rime fog",
    51: "Light drizzle",
    53: "Drizzle",
    55: "Heavy drizzle",
    61: "Light rain",
    63: "Rain",
    65: "Heavy rain",
    71: "Light snow",
    73: "Snow",
    75: "Heavy snow",
    80: "Rain showers",
    81: "Rain showers",
    82: "Heavy rain showers",
    95: "Thunderstorm",
    96: "Thunderstorm (hail)",
    99: "Thunderstorm (heavy hail)",
}


def translate(code: int) -> str:
    """Describe a weather code; unknown codes fall back to 'Weather code N'."""
    return WEATHER_CODE_LABELS.get(code, f"Weather code {code}")
