"""Open-Meteo forecast API client for current conditions."""

import logging

import httpx

from timeweather.config.schema import DEFAULT_USER_AGENT, OPEN_METEO_BASE_URL
from timeweather.errors import HttpError, NetworkError, ParseError
from timeweather.models.common import Unit

logger = logging.getLogger(__name__)

CURRENT_FIELDS = "temperature_2m,weather_code,wind_speed_10m"
WIND_SPEED_UNIT = "mph"


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str = OPEN_METEO_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout

    async def get_current(
        self, latitude: float, longitude: float, time_zone: str, unit: Unit
    ) -> dict:
        """Fetch the current-conditions payload for a coordinate pair.

        Raises HttpError on a non-success status, NetworkError when no
        response arrives, and ParseError when the body is not a JSON object.
        """
        url = f"{self.base_url}/v1/forecast"
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": CURRENT_FIELDS,
            "temperature_unit": Unit(unit).value,
            "wind_speed_unit": WIND_SPEED_UNIT,
            "timezone": time_zone,
        }
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=True
            ) as client:
                resp = await client.get(url, params=params, headers=headers)
        except httpx.RequestError as e:
            logger.error("Open-Meteo request failed for %s,%s: %s", latitude, longitude, e)
            raise NetworkError(str(e)) from e

        if not resp.is_success:
            logger.error("Open-Meteo returned %d for %s", resp.status_code, resp.url)
            raise HttpError(resp.status_code, str(resp.url))

        try:
            data = resp.json()
        except ValueError as e:
            raise ParseError(f"Response body is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")
        return data
