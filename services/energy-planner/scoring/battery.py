"""
Battery state recomputation.

Called explicitly after any change to capacity, charge or snapshot; the
percentage and runtime stored on an incoming BatteryState are never trusted.
"""

from typing import Optional
from .models import BatteryState, EnergySnapshot, ScoringConstants


def average_demand(
    snapshot: Optional[EnergySnapshot], constants: Optional[ScoringConstants] = None
) -> float:
    """Mean of solar and wind averages, or the fallback when there is no usable snapshot"""
    constants = constants or ScoringConstants()
    if snapshot is None:
        return constants.fallback_average_demand
    demand = (snapshot.solar.average + snapshot.wind.average) / 2
    if demand <= 0:
        return constants.fallback_average_demand
    return demand


def recompute_battery(
    capacity: float,
    current_charge: float,
    snapshot: Optional[EnergySnapshot] = None,
    constants: Optional[ScoringConstants] = None,
) -> BatteryState:
    """
    Build a BatteryState with derived fields.

    Example: capacity=100, charge=0, no snapshot -> percentage 0, runtime 0/5 = 0
    """
    state = BatteryState(capacity=capacity, current_charge=current_charge)
    return state.model_copy(update={
        "percentage": current_charge / capacity * 100,
        "runtime": current_charge / average_demand(snapshot, constants),
    })
