"""Vehicle selections: the input state of the cost calculator."""

from typing import Dict, Iterable, Iterator, Optional

from .calculations import calculate_costs
from .cost_breakdown import CostBreakdown
from .maintenance_type import MaintenanceType
from .rates import DEFAULT_RATES, RateTable
from .vehicle import Vehicle


class DuplicatePlateError(ValueError):
    """Raised when a plate number is already part of a selection set."""


class DuplicateVehicleError(ValueError):
    """Raised when a selection set is built from entries sharing a vehicle id."""


class VehicleSelection:
    """A vehicle together with the maintenance types chosen for it."""

    def __init__(
        self,
        vehicle: Vehicle,
        maintenance_types: Optional[Iterable[MaintenanceType]] = None,
    ):
        self.vehicle = vehicle
        self.maintenance_types = frozenset(maintenance_types or ())

    @property
    def has_maintenance(self) -> bool:
        return bool(self.maintenance_types)

    @property
    def is_offline_only(self) -> bool:
        return self.maintenance_types == {MaintenanceType.OFFLINE}


class SelectionSet:
    """
    Ordered collection of vehicle selections keyed by vehicle id.

    Iteration follows insertion order, which is also the display order.
    """

    def __init__(self, selections: Optional[Iterable[VehicleSelection]] = None):
        self._selections: Dict[str, VehicleSelection] = {}
        for selection in selections or []:
            if selection.vehicle.id in self._selections:
                raise DuplicateVehicleError(
                    f"Vehicle id '{selection.vehicle.id}' appears more than once"
                )
            self.add_vehicle(selection.vehicle)
            self.update_maintenance_types(
                selection.vehicle.id, selection.maintenance_types
            )

    def __iter__(self) -> Iterator[VehicleSelection]:
        return iter(list(self._selections.values()))

    def __len__(self) -> int:
        return len(self._selections)

    def __contains__(self, vehicle_id: str) -> bool:
        return vehicle_id in self._selections

    def get(self, vehicle_id: str) -> Optional[VehicleSelection]:
        """Find a selection by vehicle id."""
        return self._selections.get(vehicle_id)

    def has_plate(self, plate_number: str) -> bool:
        """Check whether a plate is already selected (case-insensitive)."""
        key = plate_number.strip().lower()
        return any(s.vehicle.plate_key == key for s in self._selections.values())

    def add_vehicle(self, vehicle: Vehicle) -> None:
        """
        Add a vehicle with no maintenance types chosen.

        Re-adding an id already present is a no-op. A different vehicle
        carrying an already selected plate raises DuplicatePlateError.
        """
        if vehicle.id in self._selections:
            return
        if self.has_plate(vehicle.plate_number):
            raise DuplicatePlateError(
                f"Plate number '{vehicle.plate_number}' is already added"
            )
        self._selections[vehicle.id] = VehicleSelection(vehicle)

    def remove_vehicle(self, vehicle_id: str) -> None:
        self._selections.pop(vehicle_id, None)

    def update_maintenance_types(
        self, vehicle_id: str, maintenance_types: Iterable[MaintenanceType]
    ) -> None:
        """Replace the maintenance types of a selected vehicle."""
        current = self._selections.get(vehicle_id)
        if current is None:
            return
        self._selections[vehicle_id] = VehicleSelection(
            current.vehicle, maintenance_types
        )

    def clear(self) -> None:
        self._selections = {}

    def calculate_costs(self, rates: RateTable = DEFAULT_RATES) -> CostBreakdown:
        """Compute the cost breakdown of the current selections."""
        return calculate_costs(self, rates)
