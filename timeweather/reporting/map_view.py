"""OpenStreetMap embed and link URLs centered on a city."""

from dataclasses import dataclass
from urllib.parse import quote, urlencode

from timeweather.config.schema import CityEntry

OSM_BASE_URL = "https://www.openstreetmap.org"


@dataclass(frozen=True)
class MapView:
    latitude: float
    longitude: float
    left: float
    bottom: float
    right: float
    top: float
    embed_url: str
    link_url: str

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        return (self.left, self.bottom, self.right, self.top)


def map_view(
    city: CityEntry,
    lon_pad: float = 0.15,
    lat_pad: float = 0.10,
    zoom: int = 12,
) -> MapView:
    """Build a small bounding box around the city plus a marker at its center."""
    lat, lon = city.latitude, city.longitude
    left, bottom, right, top = lon - lon_pad, lat - lat_pad, lon + lon_pad, lat + lat_pad

    query = urlencode(
        {
            "bbox": f"{left},{bottom},{right},{top}",
            "layer": "mapnik",
            "marker": f"{lat},{lon}",
        },
        safe=",",
        quote_via=quote,
    )
    embed_url = f"{OSM_BASE_URL}/export/embed.html?{query}"
    link_url = f"{OSM_BASE_URL}/?mlat={lat}&mlon={lon}#map={zoom}/{lat}/{lon}"

    return MapView(
        latitude=lat,
        longitude=lon,
        left=left,
        bottom=bottom,
        right=right,
        top=top,
        embed_url=embed_url,
        link_url=link_url,
    )
