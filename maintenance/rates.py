"""Rate table used by the cost calculator."""

from typing import Dict, Optional

from .maintenance_type import MaintenanceType

MAINTENANCE_PRICES: Dict[MaintenanceType, float] = {
    MaintenanceType.OFFLINE: 600,
    MaintenanceType.FLS: 800,
    MaintenanceType.CALIBRATION: 1200,
    MaintenanceType.FLS_CALIBRATION: 1400,
}

PER_DIEM_RATE = 1600  # ETB per crew member per work day
VEHICLES_PER_WORK_DAY = 3

TRANSPORTATION_RATES: Dict[str, float] = {
    "Addis Ababa": 0,
    "Dire Dawa": 2000,
    "Hawassa": 1500,
    "Mekelle": 2500,
    "Bahir Dar": 2000,
    "Jimma": 1800,
    "Adama": 800,
    "Gondar": 2200,
    "Awash": 1200,
}


class RateTable:
    """Prices, per-diem and transportation rates for one pricing scheme."""

    def __init__(
        self,
        maintenance_prices: Optional[Dict[MaintenanceType, float]] = None,
        per_diem_rate: Optional[float] = None,
        work_day_divisor: Optional[int] = None,
        transportation_rates: Optional[Dict[str, float]] = None,
    ):
        prices = dict(MAINTENANCE_PRICES)
        prices.update(maintenance_prices or {})
        self.maintenance_prices = prices
        self.per_diem_rate = PER_DIEM_RATE if per_diem_rate is None else per_diem_rate
        self.work_day_divisor = work_day_divisor or VEHICLES_PER_WORK_DAY
        self.transportation_rates = dict(
            TRANSPORTATION_RATES if transportation_rates is None else transportation_rates
        )

    def price_of(self, maintenance_type: MaintenanceType) -> float:
        return self.maintenance_prices.get(maintenance_type, 0)

    def transportation_for(self, location: Optional[str]) -> float:
        """Flat rate for a location; unlisted locations cost nothing."""
        if location is None:
            return 0
        return self.transportation_rates.get(location, 0)


DEFAULT_RATES = RateTable()
