"""
Energy data provider - NASA POWER daily solar irradiance and wind speed.

Fetches the last HISTORY_DAYS days for a point:
- ALLSKY_SFC_SW_DWN: all-sky surface shortwave irradiance [kWh/m²/day]
- WS10M: wind speed at 10 m [m/s]

Each series is reduced to current (last day), average, peak and the last
CHART_SAMPLES samples. Any failure yields the static demo snapshot instead of
an error, so the engine always gets something to score.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, Optional

import httpx
import numpy as np

import config
from scoring.models import EnergySample, ResourceReading, EnergySnapshot, Notice
from .cache import TTLCache
from .client import get_json
from .models import SnapshotResult

logger = logging.getLogger(__name__)

SOLAR_PARAMETER = "ALLSKY_SFC_SW_DWN"
WIND_PARAMETER = "WS10M"

# Demo data used whenever the live fetch fails
FALLBACK_SOLAR = [4.2, 5.8, 6.1, 3.9, 7.2, 8.1, 5.4]
FALLBACK_WIND = [3.8, 4.5, 2.9, 5.2, 6.8, 4.1, 3.3]

FALLBACK_SNAPSHOT = EnergySnapshot(
    solar=ResourceReading(
        current=4.2,
        average=5.1,
        peak=8.3,
        data=[EnergySample(label=f"Day {i + 1}", value=v) for i, v in enumerate(FALLBACK_SOLAR)],
    ),
    wind=ResourceReading(
        current=3.8,
        average=4.2,
        peak=7.9,
        data=[EnergySample(label=f"Day {i + 1}", value=v) for i, v in enumerate(FALLBACK_WIND)],
    ),
)

snapshot_cache = TTLCache(config.CACHE_TTL_SECONDS)


def summarize_series(series: Dict[str, float], samples: int = config.CHART_SAMPLES) -> ResourceReading:
    """
    Reduce a {YYYYMMDD: value} series to a ResourceReading.
    Negative values are NASA POWER fill markers (-999) and are dropped.
    """
    points = []
    for day, value in sorted(series.items()):
        if value is None or float(value) < 0:
            continue
        label = datetime.strptime(day, "%Y%m%d").date().isoformat()
        points.append((label, float(value)))

    if not points:
        raise ValueError("series has no valid samples")

    values = np.array([v for _, v in points])
    return ResourceReading(
        current=float(values[-1]),
        average=float(values.mean()),
        peak=float(values.max()),
        data=[EnergySample(label=label, value=v) for label, v in points[-samples:]],
    )


def parse_power_response(payload: Dict) -> EnergySnapshot:
    parameters = payload["properties"]["parameter"]
    return EnergySnapshot(
        solar=summarize_series(parameters[SOLAR_PARAMETER]),
        wind=summarize_series(parameters[WIND_PARAMETER]),
    )


def fallback_result(reason: str) -> SnapshotResult:
    return SnapshotResult(
        snapshot=FALLBACK_SNAPSHOT,
        source="fallback",
        notices=[Notice(
            type="warning",
            code="ENERGY_DATA_FALLBACK",
            message=f"Failed to fetch energy data, using fallback data ({reason})",
        )],
    )


async def fetch_energy_snapshot(
    lat: float,
    lon: float,
    client: Optional[httpx.AsyncClient] = None,
    today: Optional[date] = None,
    cache: Optional[TTLCache] = snapshot_cache,
) -> SnapshotResult:
    """Never raises for data problems: returns the fallback snapshot with a notice"""
    cache_key = TTLCache.make_key("power", lat, lon)
    if cache is not None:
        cached = cache.get(cache_key)
        if cached:
            return cached.model_copy(update={"cached": True})

    today = today or date.today()
    start = today - timedelta(days=config.HISTORY_DAYS)
    params = {
        "parameters": f"{SOLAR_PARAMETER},{WIND_PARAMETER}",
        "community": "RE",
        "longitude": lon,
        "latitude": lat,
        "start": start.strftime("%Y%m%d"),
        "end": today.strftime("%Y%m%d"),
        "format": "JSON",
    }

    try:
        payload = await get_json(config.NASA_POWER_URL, params, client)
        snapshot = parse_power_response(payload)
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning(f"NASA POWER fetch failed for {lat:.4f},{lon:.4f}: {e}")
        return fallback_result(type(e).__name__)

    result = SnapshotResult(
        snapshot=snapshot,
        source="nasa-power",
        notices=[Notice(
            type="success",
            code="ENERGY_DATA_UPDATED",
            message="Real-time data from NASA POWER API",
        )],
    )
    if cache is not None:
        cache.set(cache_key, result)
    logger.info(
        f"NASA POWER snapshot for {lat:.4f},{lon:.4f}: "
        f"solar avg {snapshot.solar.average:.2f}, wind avg {snapshot.wind.average:.2f}"
    )
    return result
