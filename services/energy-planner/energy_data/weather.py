"""
Weather provider - OpenWeatherMap current conditions (metric units).
Without WEATHER_API_KEY, or on any failure, demo conditions are returned.
"""

import logging
from typing import Optional

import httpx

import config
from scoring.models import WeatherData, Notice
from .cache import TTLCache
from .client import get_json
from .models import WeatherResult

logger = logging.getLogger(__name__)

FALLBACK_WEATHER = WeatherData(temperature=28, humidity=65, clouds=30, condition="Partly Cloudy")

weather_cache = TTLCache(config.WEATHER_CACHE_TTL_SECONDS)


def parse_weather(payload: dict) -> WeatherData:
    return WeatherData(
        temperature=payload["main"]["temp"],
        humidity=payload["main"]["humidity"],
        clouds=payload["clouds"]["all"],
        condition=payload["weather"][0]["main"],
    )


def _fallback(code: str, message: str) -> WeatherResult:
    return WeatherResult(
        weather=FALLBACK_WEATHER,
        source="fallback",
        notices=[Notice(type="info", code=code, message=message)],
    )


async def fetch_weather(
    lat: float,
    lon: float,
    client: Optional[httpx.AsyncClient] = None,
    api_key: Optional[str] = None,
    cache: Optional[TTLCache] = weather_cache,
) -> WeatherResult:
    api_key = api_key if api_key is not None else config.WEATHER_API_KEY
    if not api_key:
        return _fallback("WEATHER_KEY_MISSING", "WEATHER_API_KEY not set, using demo weather")

    cache_key = TTLCache.make_key("weather", lat, lon)
    if cache is not None:
        cached = cache.get(cache_key)
        if cached:
            return cached.model_copy(update={"cached": True})

    params = {"lat": lat, "lon": lon, "units": "metric", "appid": api_key}
    try:
        payload = await get_json(config.OPENWEATHER_URL, params, client)
        weather = parse_weather(payload)
    except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
        logger.warning(f"Weather fetch failed for {lat:.4f},{lon:.4f}: {e}")
        return _fallback("WEATHER_FALLBACK", "Weather service unavailable, using demo weather")

    result = WeatherResult(weather=weather)
    if cache is not None:
        cache.set(cache_key, result)
    return result
