"""
Consumption profile helpers.
Each operation returns a new profile; the input is left untouched.
"""

from typing import List, Optional
from .models import Appliance, EnergyConsumptionProfile


DEFAULT_APPLIANCES: List[Appliance] = [
    Appliance(name="LED Lights", power_kw=0.5, hours_per_day=8),
    Appliance(name="Refrigerator", power_kw=1.2, hours_per_day=24),
    Appliance(name="Mobile Charging", power_kw=0.1, hours_per_day=4),
    Appliance(name="Water Pump", power_kw=2.0, hours_per_day=2),
    Appliance(name="TV", power_kw=0.8, hours_per_day=6),
]


def default_profile() -> EnergyConsumptionProfile:
    """Typical rural household: 25 kWh/day, evening peak"""
    return EnergyConsumptionProfile(
        daily_demand=25.0,
        peak_hours="18:00-22:00",
        appliances=[a.model_copy() for a in DEFAULT_APPLIANCES],
    )


def add_appliance(
    profile: EnergyConsumptionProfile, appliance: Optional[Appliance] = None
) -> EnergyConsumptionProfile:
    new = appliance or Appliance(name="New Appliance", power_kw=1.0, hours_per_day=4)
    return profile.model_copy(update={"appliances": [*profile.appliances, new]})


def update_appliance(
    profile: EnergyConsumptionProfile, index: int, **changes
) -> EnergyConsumptionProfile:
    """Replace fields of the appliance at index (validated)"""
    if not 0 <= index < len(profile.appliances):
        raise IndexError(f"No appliance at index {index}")
    current = profile.appliances[index]
    updated = Appliance.model_validate({**current.model_dump(), **changes})
    appliances = list(profile.appliances)
    appliances[index] = updated
    return profile.model_copy(update={"appliances": appliances})


def remove_appliance(profile: EnergyConsumptionProfile, index: int) -> EnergyConsumptionProfile:
    if not 0 <= index < len(profile.appliances):
        raise IndexError(f"No appliance at index {index}")
    appliances = [a for i, a in enumerate(profile.appliances) if i != index]
    return profile.model_copy(update={"appliances": appliances})
