"""
Fleet maintenance request models.

This package provides data models and business rules for maintenance requests:
- MaintenanceType: Service categories (offline, fls, calibration, ...)
- Vehicle / VehicleSelection / SelectionSet: What is being serviced
- CostBreakdown / RateTable / calculate_costs: Request pricing
- Milestone / MilestoneType / MilestoneStatus: Request timeline entries
- Role / TimelinePermissions / can_*: Role-based timeline permissions
- TimelineTemplate: Built-in milestone workflows
- MaintenanceRequest: Main aggregate combining all data
"""

from .maintenance_type import MaintenanceType
from .vehicle import Vehicle
from .cost_breakdown import CostBreakdown
from .rates import DEFAULT_RATES, RateTable
from .calculations import (
    calc_crew_count,
    calc_maintenance_fees,
    calc_transportation,
    calc_work_days,
    calculate_costs,
)
from .selection import (
    DuplicatePlateError,
    DuplicateVehicleError,
    SelectionSet,
    VehicleSelection,
)
from .milestone import Milestone, MilestoneStatus, MilestoneType
from .permissions import (
    NO_PERMISSIONS,
    Role,
    TimelinePermissions,
    can_create_milestone,
    can_delete_milestone,
    can_update_milestone,
    get_permissions,
    get_visible_milestones,
)
from .templates import (
    TIMELINE_TEMPLATES,
    TimelineTemplate,
    create_timeline_from_template,
    get_template_by_id,
    get_templates_by_category,
)
from .request import MaintenanceRequest
from .loader import load_rates, load_request, save_breakdown, save_milestone

__all__ = [
    "MaintenanceType",
    "Vehicle",
    "CostBreakdown",
    "DEFAULT_RATES",
    "RateTable",
    "calc_crew_count",
    "calc_maintenance_fees",
    "calc_transportation",
    "calc_work_days",
    "calculate_costs",
    "DuplicatePlateError",
    "DuplicateVehicleError",
    "SelectionSet",
    "VehicleSelection",
    "Milestone",
    "MilestoneStatus",
    "MilestoneType",
    "NO_PERMISSIONS",
    "Role",
    "TimelinePermissions",
    "can_create_milestone",
    "can_delete_milestone",
    "can_update_milestone",
    "get_permissions",
    "get_visible_milestones",
    "TIMELINE_TEMPLATES",
    "TimelineTemplate",
    "create_timeline_from_template",
    "get_template_by_id",
    "get_templates_by_category",
    "MaintenanceRequest",
    "load_rates",
    "load_request",
    "save_breakdown",
    "save_milestone",
]
