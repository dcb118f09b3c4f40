"""Milestone class and its type/status enums for request timelines."""

from enum import Enum
from typing import Optional


class MilestoneType(Enum):
    MAJOR = "major"
    MINOR = "minor"
    EVENT = "event"
    DEADLINE = "deadline"


class MilestoneStatus(Enum):
    """Progress states. Completed and cancelled are terminal."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DELAYED = "delayed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (MilestoneStatus.COMPLETED, MilestoneStatus.CANCELLED)


class Milestone:
    """A timeline entry of a maintenance request."""

    def __init__(
        self,
        title: str,
        milestone_type: MilestoneType,
        created_by: str,
        status: MilestoneStatus = MilestoneStatus.PENDING,
        assigned_to: Optional[str] = None,
        id: Optional[str] = None,
        description: Optional[str] = None,
        planned_date: Optional[str] = None,
        completion_percentage: float = 0,
        order_index: int = 0,
        is_critical: bool = False,
        created_by_role: Optional[str] = None,
        request_id: Optional[str] = None,
    ):
        self.title = title
        self.milestone_type = milestone_type
        self.created_by = created_by
        self.status = status
        self.assigned_to = assigned_to
        self.id = id
        self.description = description
        self.planned_date = planned_date
        self.completion_percentage = completion_percentage or 0
        self.order_index = order_index or 0
        self.is_critical = is_critical or False
        self.created_by_role = created_by_role
        self.request_id = request_id

    @property
    def is_assigned(self) -> bool:
        return bool(self.assigned_to)
