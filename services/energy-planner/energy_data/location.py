"""
Location provider.

- IP based coordinates (ipapi.co) when the browser cannot share its position
- Reverse geocoding (BigDataCloud client endpoint, no API key required)
- Validation of manually typed coordinates
"""

import logging
import math
from typing import Optional

import httpx
from pydantic import ValidationError

import config
from scoring.models import Notice
from .cache import TTLCache
from .client import get_json
from .models import Coordinates, Location, LocationResult, IPLocationResult

logger = logging.getLogger(__name__)

location_cache = TTLCache(config.CACHE_TTL_SECONDS)


class InvalidCoordinatesError(ValueError):
    """Raised for non-numeric or out-of-range manual coordinates"""

    def __init__(self, message: str = "Please enter valid latitude and longitude"):
        super().__init__(message)
        self.message = message


def parse_coordinates(lat_text: str, lon_text: str) -> Coordinates:
    """Parse free-text coordinates as typed by the user"""
    try:
        lat = float(str(lat_text).strip())
        lon = float(str(lon_text).strip())
    except (TypeError, ValueError):
        raise InvalidCoordinatesError()

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinatesError()

    try:
        return Coordinates(latitude=lat, longitude=lon)
    except ValidationError:
        raise InvalidCoordinatesError()


async def lookup_ip_location(client: Optional[httpx.AsyncClient] = None) -> IPLocationResult:
    try:
        data = await get_json(config.IPAPI_URL, client=client)
        coordinates = Coordinates(latitude=data["latitude"], longitude=data["longitude"])
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning(f"IP location lookup failed: {e}")
        return IPLocationResult(notices=[Notice(
            type="warning",
            code="LOCATION_DETECTION_FAILED",
            message="Location detection failed, please enter coordinates manually",
        )])
    return IPLocationResult(coordinates=coordinates)


async def reverse_geocode(
    lat: float,
    lon: float,
    client: Optional[httpx.AsyncClient] = None,
    cache: Optional[TTLCache] = location_cache,
) -> LocationResult:
    """City/region/country for a point; names default to 'Unknown'"""
    cache_key = TTLCache.make_key("geo", lat, lon)
    if cache is not None:
        cached = cache.get(cache_key)
        if cached:
            return cached.model_copy(update={"cached": True})

    params = {"latitude": lat, "longitude": lon, "localityLanguage": "en"}
    try:
        data = await get_json(config.REVERSE_GEOCODE_URL, params, client)
        location = Location(
            latitude=lat,
            longitude=lon,
            city=data.get("city") or "Unknown",
            region=data.get("principalSubdivision") or "Unknown",
            country=data.get("countryName") or "Unknown",
        )
    except (httpx.HTTPError, ValueError, AttributeError) as e:
        logger.warning(f"Reverse geocoding failed for {lat:.4f},{lon:.4f}: {e}")
        return LocationResult(
            location=Location(latitude=lat, longitude=lon),
            source="fallback",
            notices=[Notice(
                type="warning",
                code="GEOCODING_FAILED",
                message="Failed to fetch location data, coordinates kept",
            )],
        )

    result = LocationResult(location=location)
    if cache is not None:
        cache.set(cache_key, result)
    return result
