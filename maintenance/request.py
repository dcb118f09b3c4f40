"""MaintenanceRequest class - the aggregate of requester, vehicles and timeline."""

from typing import List, Optional, Set

from .cost_breakdown import CostBreakdown
from .maintenance_type import MaintenanceType
from .milestone import Milestone
from .permissions import Role, get_visible_milestones
from .rates import DEFAULT_RATES, RateTable
from .selection import SelectionSet


class MaintenanceRequest:
    """A maintenance request for one or more vehicles and its milestone timeline."""

    def __init__(
        self,
        owner_name: str,
        contact_number: str,
        selections: Optional[SelectionSet] = None,
        milestones: Optional[List[Milestone]] = None,
        id: Optional[str] = None,
        company_name: Optional[str] = None,
        status: str = "pending",
        priority: str = "medium",
        notes: Optional[str] = None,
        assigned_to: Optional[str] = None,
    ):
        self.owner_name = owner_name
        self.contact_number = contact_number
        self.selections = selections if selections is not None else SelectionSet()
        self.milestones = milestones or []
        self.id = id
        self.company_name = company_name
        self.status = status or "pending"
        self.priority = priority or "medium"
        self.notes = notes
        self.assigned_to = assigned_to

    @property
    def maintenance_types(self) -> Set[MaintenanceType]:
        """All maintenance types requested across every vehicle."""
        types: Set[MaintenanceType] = set()
        for selection in self.selections:
            types |= selection.maintenance_types
        return types

    def calculate_costs(self, rates: RateTable = DEFAULT_RATES) -> CostBreakdown:
        return self.selections.calculate_costs(rates)

    def get_milestone(self, milestone_id: str) -> Optional[Milestone]:
        """Find a milestone by its id."""
        for milestone in self.milestones:
            if milestone.id == milestone_id:
                return milestone
        return None

    def get_milestones_sorted(
        self, sort_by: str = "order", reverse: bool = False
    ) -> List[Milestone]:
        """
        Get milestones sorted by specified field.

        Args:
            sort_by: "order", "date", or "status"
            reverse: If True, highest/latest first
        """
        if sort_by == "order":
            return sorted(self.milestones, key=lambda m: m.order_index, reverse=reverse)
        elif sort_by == "date":
            return sorted(
                self.milestones, key=lambda m: m.planned_date or "", reverse=reverse
            )
        elif sort_by == "status":
            return sorted(
                self.milestones,
                key=lambda m: (m.status.value, m.order_index),
                reverse=reverse,
            )
        return list(self.milestones)

    def visible_milestones(self, role: Role, actor_name: str) -> List[Milestone]:
        """Milestones the actor may see, in timeline order."""
        return get_visible_milestones(
            role, actor_name, self.get_milestones_sorted("order")
        )
