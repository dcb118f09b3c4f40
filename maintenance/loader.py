"""YAML loading and saving utilities for maintenance request files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Union

import yaml

from .cost_breakdown import CostBreakdown
from .maintenance_type import MaintenanceType
from .milestone import Milestone, MilestoneStatus, MilestoneType
from .rates import RateTable
from .request import MaintenanceRequest
from .selection import (
    DuplicatePlateError,
    DuplicateVehicleError,
    SelectionSet,
    VehicleSelection,
)
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def _parse_object(
    dct: Dict[str, Any]
) -> Union[VehicleSelection, Milestone, MaintenanceRequest, dict]:
    """Parse dictionary into appropriate object type."""
    # Vehicle entry (vehicle + chosen maintenance types)
    if "plateNumber" in dct and "location" in dct:
        vehicle = Vehicle(
            str(dct["id"]),
            str(dct["plateNumber"]),
            dct["location"],
            dct.get("createdAt"),
        )
        types = [MaintenanceType(t) for t in dct.get("maintenanceTypes") or []]
        return VehicleSelection(vehicle, types)
    # Milestone
    elif "milestoneType" in dct and "createdBy" in dct:
        return Milestone(
            dct["title"],
            MilestoneType(dct["milestoneType"]),
            dct["createdBy"],
            MilestoneStatus(dct.get("status") or "pending"),
            dct.get("assignedTo"),
            dct.get("id"),
            dct.get("description"),
            dct.get("plannedDate"),
            dct.get("completionPercentage"),
            dct.get("orderIndex"),
            dct.get("isCritical"),
            dct.get("createdByRole"),
            dct.get("requestId"),
        )
    # Top-level request file
    elif "request" in dct and "vehicles" in dct:
        info = dct["request"] or {}
        return MaintenanceRequest(
            info["ownerName"],
            str(info["contactNumber"]),
            SelectionSet(dct["vehicles"] or []),
            dct.get("milestones"),
            info.get("id"),
            info.get("companyName"),
            info.get("status"),
            info.get("priority"),
            info.get("notes"),
            info.get("assignedTo"),
        )
    else:
        # Return dict as-is for unknown structures (like 'request' or 'breakdown')
        return dct


def _read_yaml(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write_yaml(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def load_request(filename: Union[str, Path]) -> MaintenanceRequest:
    """Load a maintenance request from a YAML file."""
    with open(filename, "rb") as fp:
        json_data = json.dumps(yaml.load(fp, Loader=yaml.SafeLoader), indent=4)
        request = json.loads(json_data, object_hook=_parse_object)
    logger.debug(
        "Loaded %s: %d vehicles, %d milestones",
        filename,
        len(request.selections),
        len(request.milestones),
    )
    return request


def load_rates(filename: Union[str, Path]) -> RateTable:
    """
    Load a rate table from a YAML file.

    Recognized keys: maintenancePrices, perDiemRate, workDayDivisor,
    transportationRates. Missing keys fall back to the default rates.
    """
    data = _read_yaml(filename)
    prices = {
        MaintenanceType(name): price
        for name, price in (data.get("maintenancePrices") or {}).items()
    }
    logger.debug("Loaded rates from %s", filename)
    return RateTable(
        maintenance_prices=prices,
        per_diem_rate=data.get("perDiemRate"),
        work_day_divisor=data.get("workDayDivisor"),
        transportation_rates=data.get("transportationRates"),
    )


def _selection_to_dict(selection: VehicleSelection) -> Dict[str, Any]:
    """Serialize a VehicleSelection to the YAML dict format (camelCase keys)."""
    vehicle = selection.vehicle
    d: Dict[str, Any] = {
        "id": vehicle.id,
        "plateNumber": vehicle.plate_number,
        "location": vehicle.location,
    }
    if vehicle.created_at is not None:
        d["createdAt"] = vehicle.created_at
    # Stable order for diffs
    d["maintenanceTypes"] = [
        mt.value for mt in MaintenanceType if mt in selection.maintenance_types
    ]
    return d


def _milestone_to_dict(milestone: Milestone) -> Dict[str, Any]:
    """Serialize a Milestone to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "title": milestone.title,
        "milestoneType": milestone.milestone_type.value,
        "status": milestone.status.value,
        "createdBy": milestone.created_by,
    }
    if milestone.id is not None:
        d["id"] = milestone.id
    if milestone.request_id is not None:
        d["requestId"] = milestone.request_id
    if milestone.assigned_to is not None:
        d["assignedTo"] = milestone.assigned_to
    if milestone.created_by_role is not None:
        d["createdByRole"] = milestone.created_by_role
    if milestone.description is not None:
        d["description"] = milestone.description
    if milestone.planned_date is not None:
        d["plannedDate"] = milestone.planned_date
    if milestone.completion_percentage:
        d["completionPercentage"] = milestone.completion_percentage
    if milestone.order_index:
        d["orderIndex"] = milestone.order_index
    if milestone.is_critical:
        d["isCritical"] = milestone.is_critical
    return d


def _request_info_to_dict(request: MaintenanceRequest) -> Dict[str, Any]:
    d: Dict[str, Any] = {}
    if request.id is not None:
        d["id"] = request.id
    d["ownerName"] = request.owner_name
    d["contactNumber"] = request.contact_number
    if request.company_name is not None:
        d["companyName"] = request.company_name
    d["status"] = request.status
    d["priority"] = request.priority
    if request.assigned_to is not None:
        d["assignedTo"] = request.assigned_to
    if request.notes is not None:
        d["notes"] = request.notes
    return d


def create_request(filename: Union[str, Path], request: MaintenanceRequest) -> None:
    """Write a new request YAML file, including its current cost breakdown."""
    data: Dict[str, Any] = {
        "request": _request_info_to_dict(request),
        "vehicles": [_selection_to_dict(s) for s in request.selections],
        "milestones": [_milestone_to_dict(m) for m in request.milestones],
        "breakdown": request.calculate_costs().to_dict(),
    }
    _write_yaml(filename, data)
    logger.info("Created request file %s", filename)


def save_milestone(filename: Union[str, Path], milestone: Milestone) -> None:
    """
    Append a milestone to a request YAML file.

    Loads the raw YAML, appends the milestone to the milestones list,
    and writes back to the file.
    """
    data = _read_yaml(filename)

    if data.get("milestones") is None:
        data["milestones"] = []

    data["milestones"].append(_milestone_to_dict(milestone))
    _write_yaml(filename, data)
    logger.debug("Appended milestone '%s' to %s", milestone.title, filename)


def update_milestone(
    filename: Union[str, Path], index: int, milestone: Milestone
) -> None:
    """Replace the milestone at milestones[index] in a request YAML file."""
    data = _read_yaml(filename)

    milestones = data.get("milestones") or []
    if index < 0 or index >= len(milestones):
        raise IndexError(
            f"Milestone index {index} out of range (0..{len(milestones) - 1})"
        )

    milestones[index] = _milestone_to_dict(milestone)
    _write_yaml(filename, data)


def delete_milestone(filename: Union[str, Path], index: int) -> None:
    """Remove the milestone at milestones[index] in a request YAML file."""
    data = _read_yaml(filename)

    milestones = data.get("milestones") or []
    if index < 0 or index >= len(milestones):
        raise IndexError(
            f"Milestone index {index} out of range (0..{len(milestones) - 1})"
        )

    del milestones[index]
    _write_yaml(filename, data)


def add_vehicle(
    filename: Union[str, Path],
    vehicle: Vehicle,
    maintenance_types: Iterable[MaintenanceType] = (),
) -> None:
    """
    Append a vehicle to a request YAML file.

    The plate is stored trimmed and upper-cased. Raises DuplicatePlateError
    if the plate is already in the request and DuplicateVehicleError if the
    id is.
    """
    data = _read_yaml(filename)
    vehicle = Vehicle(
        vehicle.id,
        vehicle.plate_number.strip().upper(),
        vehicle.location,
        vehicle.created_at,
    )

    if data.get("vehicles") is None:
        data["vehicles"] = []

    plate_key = vehicle.plate_key
    for entry in data["vehicles"]:
        if str(entry.get("id")) == vehicle.id:
            raise DuplicateVehicleError(f"Vehicle id '{vehicle.id}' is already added")
        if str(entry.get("plateNumber", "")).strip().lower() == plate_key:
            raise DuplicatePlateError(
                f"Plate number '{vehicle.plate_number}' is already added"
            )

    data["vehicles"].append(
        _selection_to_dict(VehicleSelection(vehicle, maintenance_types))
    )
    _write_yaml(filename, data)


def _find_vehicle_index(data: Dict[str, Any], vehicle_id: str) -> int:
    for index, entry in enumerate(data.get("vehicles") or []):
        if str(entry.get("id")) == vehicle_id:
            return index
    raise KeyError(f"Unknown vehicle id '{vehicle_id}'")


def update_vehicle_types(
    filename: Union[str, Path],
    vehicle_id: str,
    maintenance_types: Iterable[MaintenanceType],
) -> None:
    """Replace the maintenance types chosen for a vehicle in a request YAML file."""
    data = _read_yaml(filename)

    index = _find_vehicle_index(data, vehicle_id)
    entry = data["vehicles"][index]
    chosen = set(maintenance_types)
    entry["maintenanceTypes"] = [mt.value for mt in MaintenanceType if mt in chosen]

    _write_yaml(filename, data)
    logger.debug("Updated maintenance types of vehicle %s in %s", vehicle_id, filename)


def remove_vehicle(filename: Union[str, Path], vehicle_id: str) -> None:
    """Remove a vehicle from a request YAML file."""
    data = _read_yaml(filename)

    index = _find_vehicle_index(data, vehicle_id)
    del data["vehicles"][index]

    _write_yaml(filename, data)


def save_breakdown(filename: Union[str, Path], breakdown: CostBreakdown) -> None:
    """Store a computed cost breakdown in the breakdown section of a request file."""
    data = _read_yaml(filename)
    data["breakdown"] = breakdown.to_dict()
    _write_yaml(filename, data)
    logger.debug("Saved breakdown (total %s) to %s", breakdown.total, filename)
