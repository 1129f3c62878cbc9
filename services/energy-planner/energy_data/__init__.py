# External data collaborators: NASA POWER, geolocation, weather
# All of them recover from failures locally and report notices instead of raising

from .models import (
    Coordinates,
    Location,
    LocationResult,
    SnapshotResult,
    WeatherResult,
    IPLocationResult,
)
from .provider import FALLBACK_SNAPSHOT, fetch_energy_snapshot, summarize_series
from .location import (
    InvalidCoordinatesError,
    parse_coordinates,
    lookup_ip_location,
    reverse_geocode,
)
from .weather import FALLBACK_WEATHER, fetch_weather

__all__ = [
    "Coordinates",
    "Location",
    "LocationResult",
    "SnapshotResult",
    "WeatherResult",
    "IPLocationResult",
    "FALLBACK_SNAPSHOT",
    "fetch_energy_snapshot",
    "summarize_series",
    "InvalidCoordinatesError",
    "parse_coordinates",
    "lookup_ip_location",
    "reverse_geocode",
    "FALLBACK_WEATHER",
    "fetch_weather",
]
