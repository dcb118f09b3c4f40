"""Helper functions for maintenance request cost calculations."""

import math
from typing import TYPE_CHECKING, Iterable, List

from .cost_breakdown import CostBreakdown
from .maintenance_type import MaintenanceType
from .rates import DEFAULT_RATES, RateTable

if TYPE_CHECKING:
    from .selection import VehicleSelection

FIELD_SERVICE_TYPES = frozenset(
    {
        MaintenanceType.FLS,
        MaintenanceType.CALIBRATION,
        MaintenanceType.FLS_CALIBRATION,
    }
)


def calc_maintenance_fees(
    selections: Iterable["VehicleSelection"], rates: RateTable = DEFAULT_RATES
) -> float:
    """Sum the price of every chosen type on every vehicle."""
    return sum(
        rates.price_of(mt) for s in selections for mt in s.maintenance_types
    )


def calc_work_days(vehicle_count: int, divisor: int = 3) -> int:
    """One work day covers up to `divisor` vehicles; partial days round up."""
    if vehicle_count <= 0:
        return 0
    return math.ceil(vehicle_count / divisor)


def calc_crew_count(selections: Iterable["VehicleSelection"]) -> int:
    """
    Classify crew size from the maintenance types chosen.

    - Offline-only work: 1 crew member
    - Any fls/calibration/fls_calibration: 2 crew members
    - Nothing chosen: 0
    """
    with_maintenance = [s for s in selections if s.has_maintenance]
    if not with_maintenance:
        return 0
    if all(s.is_offline_only for s in with_maintenance):
        return 1
    if any(s.maintenance_types & FIELD_SERVICE_TYPES for s in with_maintenance):
        return 2
    return 1


def calc_transportation(
    selections: Iterable["VehicleSelection"], rates: RateTable = DEFAULT_RATES
) -> float:
    """Flat rate per distinct location of vehicles with maintenance chosen."""
    locations = {s.vehicle.location for s in selections if s.has_maintenance}
    return sum(rates.transportation_for(loc) for loc in locations)


def calculate_costs(
    selections: Iterable["VehicleSelection"], rates: RateTable = DEFAULT_RATES
) -> CostBreakdown:
    """
    Calculate the cost breakdown of a set of vehicle selections.

    Logic:
    - Vehicles without maintenance types are ignored entirely
    - If nothing is chosen anywhere: zero breakdown
    - work days = ceil(vehicles with maintenance / 3)
    - per diem = crew count x per diem rate x work days
    - transportation is charged once per distinct location

    Never raises; the result is recomputed from scratch on every call.
    """
    with_maintenance: List["VehicleSelection"] = [
        s for s in selections if s.has_maintenance
    ]
    if not with_maintenance:
        return CostBreakdown()

    work_days = calc_work_days(len(with_maintenance), rates.work_day_divisor)
    crew_count = calc_crew_count(with_maintenance)

    return CostBreakdown(
        maintenance_fees=calc_maintenance_fees(with_maintenance, rates),
        per_diem=crew_count * rates.per_diem_rate * work_days,
        transportation=calc_transportation(with_maintenance, rates),
        work_days=work_days,
        crew_count=crew_count,
    )
