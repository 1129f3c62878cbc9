"""
Report export - plain JSON snapshot of the whole dashboard state.
No schema versioning: the document mirrors the models as they are.
"""

import json
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from energy_data.models import Location
from scoring.battery import recompute_battery
from scoring.consumption import default_profile
from scoring.models import (
    EnergySnapshot,
    BatteryState,
    EnergyConsumptionProfile,
    CostAnalysis,
    CarbonFootprint,
    WeatherData,
    ScoringConstants,
)


class ExportRequest(BaseModel):
    location: Optional[Location] = None
    snapshot: Optional[EnergySnapshot] = None
    battery: BatteryState = Field(default_factory=BatteryState)
    consumption: EnergyConsumptionProfile = Field(default_factory=default_profile)
    cost: Optional[CostAnalysis] = None
    carbon: Optional[CarbonFootprint] = None
    weather: Optional[WeatherData] = None


def _dump(model: Optional[BaseModel]) -> Any:
    return model.model_dump(mode="json") if model is not None else None


def build_report(
    request: ExportRequest,
    timestamp: Optional[datetime] = None,
    constants: Optional[ScoringConstants] = None,
) -> Dict[str, Any]:
    """Battery percentage and runtime are recomputed, never copied from the request"""
    timestamp = timestamp or datetime.now(timezone.utc)
    battery = recompute_battery(
        request.battery.capacity, request.battery.current_charge, request.snapshot, constants
    )
    return {
        "location": _dump(request.location),
        "energy_data": _dump(request.snapshot),
        "battery": _dump(battery),
        "energy_consumption": _dump(request.consumption),
        "cost_analysis": _dump(request.cost),
        "carbon_footprint": _dump(request.carbon),
        "weather": _dump(request.weather),
        "timestamp": timestamp.isoformat(),
    }


def render_report(report: Dict[str, Any]) -> str:
    return json.dumps(report, indent=2, ensure_ascii=False)


def report_filename(location: Optional[Location], today: Optional[date] = None) -> str:
    """enershift-report-<city>-<YYYY-MM-DD>.json"""
    today = today or date.today()
    city = location.city if location else "location"
    # Header-safe slug
    city = re.sub(r"[^A-Za-z0-9_-]+", "-", city).strip("-") or "location"
    return f"enershift-report-{city}-{today.isoformat()}.json"
