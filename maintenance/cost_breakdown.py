"""CostBreakdown dataclass for calculated request pricing."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CostBreakdown:
    """Cost of a set of vehicle selections. total is always the sum of the parts."""

    maintenance_fees: float = 0
    per_diem: float = 0
    transportation: float = 0
    work_days: int = 0
    crew_count: int = 0

    @property
    def total(self) -> float:
        return self.maintenance_fees + self.per_diem + self.transportation

    @property
    def is_zero(self) -> bool:
        return self.total == 0

    def to_dict(self) -> dict:
        """Serialize using the camelCase keys of request files."""
        return {
            "maintenanceFees": self.maintenance_fees,
            "perDiem": self.per_diem,
            "transportation": self.transportation,
            "workDays": self.work_days,
            "crewCount": self.crew_count,
            "total": self.total,
        }
