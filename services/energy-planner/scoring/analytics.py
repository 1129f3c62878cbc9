"""
Analytics panel figures derived from the snapshot.

Reference scales:
- solar capacity factor against 8 kWh/m²/day
- wind capacity factor against 10 m/s
- panel sizing at 5 kWh/day per kW installed
"""

from typing import List
from .models import (
    EnergySnapshot,
    BatteryState,
    EnergyConsumptionProfile,
    CostAnalysis,
    PerformanceMetrics,
    OptimizationHints,
    EnergyMixEntry,
    SavingsPoint,
    WeatherData,
    WeatherImpact,
)

SOLAR_REFERENCE = 8.0  # kWh/m²/day
WIND_REFERENCE = 10.0  # m/s
KWH_PER_KW_PANEL = 5.0
BACKUP_FACTOR = 1.5  # 36 h of demand
LOAD_SHIFT_SHARE = 0.3

# Chart x-axis labels, independent of the host locale
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def performance_metrics(
    snapshot: EnergySnapshot,
    battery: BatteryState,
    consumption: EnergyConsumptionProfile,
) -> PerformanceMetrics:
    renewable = snapshot.solar.average + snapshot.wind.average
    return PerformanceMetrics(
        solar_capacity_factor_pct=snapshot.solar.average / SOLAR_REFERENCE * 100,
        wind_capacity_factor_pct=snapshot.wind.average / WIND_REFERENCE * 100,
        # Larger banks lose a little more to self-discharge and balancing
        battery_efficiency_pct=95 - (5 if battery.capacity > 100 else 0),
        grid_independence_pct=min(100.0, renewable / consumption.daily_demand * 100),
    )


def optimization_hints(
    snapshot: EnergySnapshot, consumption: EnergyConsumptionProfile
) -> OptimizationHints:
    demand = consumption.daily_demand
    return OptimizationHints(
        additional_solar_kw=max(0.0, (demand - snapshot.solar.average) / KWH_PER_KW_PANEL),
        optimal_battery_kwh=demand * BACKUP_FACTOR,
        load_shift_kwh=demand * LOAD_SHIFT_SHARE,
    )


def energy_mix(
    snapshot: EnergySnapshot,
    battery: BatteryState,
    consumption: EnergyConsumptionProfile,
) -> List[EnergyMixEntry]:
    """Pie chart shares: solar, wind, battery, remaining grid"""
    grid = consumption.daily_demand - snapshot.solar.average - snapshot.wind.average
    return [
        EnergyMixEntry(name="Solar", value=snapshot.solar.average),
        EnergyMixEntry(name="Wind", value=snapshot.wind.average),
        EnergyMixEntry(name="Battery", value=battery.current_charge / 10),
        EnergyMixEntry(name="Grid", value=max(0.0, grid)),
    ]


def savings_projection(cost: CostAnalysis) -> List[SavingsPoint]:
    """Cumulative savings month by month over one year"""
    monthly = cost.annual_savings / 12
    return [
        SavingsPoint(month=label, savings=monthly * m)
        for m, label in enumerate(MONTH_LABELS, start=1)
    ]


def weather_impact(weather: WeatherData, snapshot: EnergySnapshot) -> WeatherImpact:
    if weather.clouds < 30:
        solar = "excellent"
    elif weather.clouds < 60:
        solar = "good"
    else:
        solar = "reduced"

    if snapshot.wind.current > 5:
        wind = "favorable"
    elif snapshot.wind.current > 3:
        wind = "moderate"
    else:
        wind = "limited"

    return WeatherImpact(solar_efficiency=solar, wind_potential=wind)
