"""
Tests for analytics figures, report export and configuration overrides
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
from datetime import date, datetime, timezone

import pytest

import config
from energy_data.models import Location
from report import ExportRequest, build_report, render_report, report_filename
from scoring.analytics import (
    performance_metrics,
    optimization_hints,
    energy_mix,
    savings_projection,
    weather_impact,
)
from scoring.battery import recompute_battery
from scoring.models import (
    ResourceReading,
    EnergySnapshot,
    BatteryState,
    EnergyConsumptionProfile,
    CostAnalysis,
    CarbonFootprint,
    WeatherData,
)


@pytest.fixture
def snapshot():
    return EnergySnapshot(
        solar=ResourceReading(current=5.5, average=4.0, peak=7.0),
        wind=ResourceReading(current=4.0, average=5.0, peak=6.0),
    )


@pytest.fixture
def consumption():
    return EnergyConsumptionProfile(daily_demand=25)


def weather(clouds):
    return WeatherData(temperature=28, humidity=65, clouds=clouds, condition="Clouds")


class TestPerformanceMetrics:

    def test_capacity_factors_and_independence(self, snapshot, consumption):
        metrics = performance_metrics(snapshot, recompute_battery(100, 75), consumption)
        assert metrics.solar_capacity_factor_pct == pytest.approx(50)
        assert metrics.wind_capacity_factor_pct == pytest.approx(50)
        assert metrics.battery_efficiency_pct == 95
        assert metrics.grid_independence_pct == pytest.approx(36)

    def test_large_battery_efficiency_penalty(self, snapshot, consumption):
        metrics = performance_metrics(snapshot, recompute_battery(150, 75), consumption)
        assert metrics.battery_efficiency_pct == 90

    def test_grid_independence_capped(self, snapshot):
        metrics = performance_metrics(
            snapshot, recompute_battery(100, 75), EnergyConsumptionProfile(daily_demand=5)
        )
        assert metrics.grid_independence_pct == 100


class TestOptimizationHints:

    def test_hints(self, snapshot, consumption):
        hints = optimization_hints(snapshot, consumption)
        assert hints.additional_solar_kw == pytest.approx(4.2)
        assert hints.optimal_battery_kwh == pytest.approx(37.5)
        assert hints.load_shift_kwh == pytest.approx(7.5)

    def test_no_extra_panels_when_solar_covers_demand(self, snapshot):
        hints = optimization_hints(snapshot, EnergyConsumptionProfile(daily_demand=3))
        assert hints.additional_solar_kw == 0


class TestEnergyMixAndSavings:

    def test_energy_mix(self, snapshot, consumption):
        mix = energy_mix(snapshot, recompute_battery(100, 75), consumption)
        assert [(m.name, m.value) for m in mix] == [
            ("Solar", 4.0),
            ("Wind", 5.0),
            ("Battery", 7.5),
            ("Grid", 16.0),
        ]

    def test_grid_share_never_negative(self, snapshot):
        mix = energy_mix(snapshot, recompute_battery(100, 75), EnergyConsumptionProfile(daily_demand=2))
        assert mix[-1].value == 0

    def test_savings_projection_is_cumulative(self):
        points = savings_projection(CostAnalysis(annual_savings=1200))
        assert len(points) == 12
        assert points[0].month == "Jan"
        assert points[0].savings == pytest.approx(100)
        assert points[5].savings == pytest.approx(600)
        assert points[-1].month == "Dec"
        assert points[-1].savings == pytest.approx(1200)

    def test_month_labels_are_fixed(self):
        points = savings_projection(CostAnalysis(annual_savings=0))
        assert [p.month for p in points] == [
            "Jan", "Feb", "Mar", "Apr", "May", "Jun",
            "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
        ]


class TestWeatherImpact:

    @pytest.mark.parametrize("clouds,label", [
        (0, "excellent"),
        (29, "excellent"),
        (30, "good"),
        (59, "good"),
        (60, "reduced"),
        (95, "reduced"),
    ])
    def test_solar_efficiency(self, snapshot, clouds, label):
        assert weather_impact(weather(clouds), snapshot).solar_efficiency == label

    @pytest.mark.parametrize("wind_current,label", [
        (6.0, "favorable"),
        (5.0, "moderate"),
        (3.5, "moderate"),
        (3.0, "limited"),
    ])
    def test_wind_potential(self, wind_current, label):
        snapshot = EnergySnapshot(
            solar=ResourceReading(current=5, average=5, peak=5),
            wind=ResourceReading(current=wind_current, average=4, peak=7),
        )
        assert weather_impact(weather(20), snapshot).wind_potential == label


class TestReportExport:

    def test_report_has_every_section(self, snapshot, consumption):
        request = ExportRequest(
            location=Location(latitude=28.61, longitude=77.21, city="New Delhi",
                              region="Delhi", country="India"),
            snapshot=snapshot,
            battery=recompute_battery(100, 75, snapshot),
            consumption=consumption,
            cost=CostAnalysis(grid_cost_per_kwh=8.5, renewable_savings_per_day=50),
            carbon=CarbonFootprint(current_emissions=20.5),
            weather=weather(20),
        )
        stamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        report = build_report(request, stamp)

        assert set(report) == {
            "location", "energy_data", "battery", "energy_consumption",
            "cost_analysis", "carbon_footprint", "weather", "timestamp",
        }
        assert report["timestamp"] == "2024-05-01T12:00:00+00:00"
        assert report["location"]["city"] == "New Delhi"
        assert report["energy_data"]["solar"]["average"] == 4.0
        assert report["energy_consumption"]["total_load"] == 0

        decoded = json.loads(render_report(report))
        assert decoded == report

    def test_stale_battery_fields_are_recomputed(self, snapshot):
        request = ExportRequest(
            snapshot=snapshot,
            battery=BatteryState(capacity=100, current_charge=10, percentage=90, runtime=99),
        )
        battery = build_report(request)["battery"]
        assert battery["percentage"] == pytest.approx(10)
        # mean of averages (4 + 5) / 2 = 4.5
        assert battery["runtime"] == pytest.approx(10 / 4.5)

    def test_missing_sections_are_null(self):
        report = build_report(ExportRequest())
        assert report["location"] is None
        assert report["energy_data"] is None
        assert report["battery"]["capacity"] == 100
        assert len(report["energy_consumption"]["appliances"]) == 5

    def test_filename(self):
        location = Location(latitude=28.61, longitude=77.21, city="New Delhi")
        assert report_filename(location, date(2024, 5, 1)) == "enershift-report-New-Delhi-2024-05-01.json"
        assert report_filename(None, date(2024, 5, 1)) == "enershift-report-location-2024-05-01.json"


class TestConfig:

    def test_constants_from_environment(self, monkeypatch):
        monkeypatch.setenv("GRID_EMISSION_FACTOR", "0.45")
        monkeypatch.setenv("SYSTEM_COST", "120000")
        monkeypatch.setenv("CURRENCY_SYMBOL", "$")
        constants = config.load_scoring_constants()
        assert constants.grid_emission_factor == 0.45
        assert constants.system_cost == 120000
        assert constants.currency_symbol == "$"
        assert constants.derating_factor == 0.8

    def test_defaults_without_environment(self, monkeypatch):
        for name in ("DERATING_FACTOR", "GRID_EMISSION_FACTOR", "TREE_ABSORPTION_KG",
                     "SYSTEM_COST", "FALLBACK_AVERAGE_DEMAND", "CURRENCY_SYMBOL"):
            monkeypatch.delenv(name, raising=False)
        constants = config.load_scoring_constants()
        assert constants.grid_emission_factor == 0.82
        assert constants.tree_absorption_kg == 22
        assert constants.system_cost == 80000
