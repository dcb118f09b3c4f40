"""
Role-based permissions for request timelines.

Each role maps to one fixed TimelinePermissions record. The predicates
below build on that record and never raise: unknown roles or milestone
types get the most restrictive answer.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar, Union

from .milestone import MilestoneStatus, MilestoneType

E = TypeVar("E", bound=Enum)


class Role(Enum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    TECHNICIAN = "technician"


@dataclass(frozen=True)
class TimelinePermissions:
    """Capability flags for one role. Defaults are all False."""

    # View
    can_view_full_timeline: bool = False
    can_view_all_milestones: bool = False
    can_view_critical_path: bool = False
    can_view_resource_allocation: bool = False
    can_view_analytics: bool = False

    # Create
    can_create_major_milestones: bool = False
    can_create_minor_milestones: bool = False
    can_create_events: bool = False
    can_create_deadlines: bool = False

    # Edit
    can_edit_own_milestones: bool = False
    can_edit_all_milestones: bool = False
    can_edit_assigned_milestones: bool = False
    can_reschedule_milestones: bool = False
    can_update_progress: bool = False

    # Delete
    can_delete_own_milestones: bool = False
    can_delete_all_milestones: bool = False

    # Assignment
    can_assign_technicians: bool = False
    can_reassign_work: bool = False

    # Advanced
    can_create_templates: bool = False
    can_manage_escalations: bool = False
    can_generate_reports: bool = False
    can_bulk_update: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


NO_PERMISSIONS = TimelinePermissions()

_ROLE_PERMISSIONS: Dict[Role, TimelinePermissions] = {
    Role.ADMIN: TimelinePermissions(
        can_view_full_timeline=True,
        can_view_all_milestones=True,
        can_view_critical_path=True,
        can_view_resource_allocation=True,
        can_view_analytics=True,
        can_create_major_milestones=True,
        can_create_minor_milestones=True,
        can_create_events=True,
        can_create_deadlines=True,
        can_edit_own_milestones=True,
        can_edit_all_milestones=True,
        can_edit_assigned_milestones=True,
        can_reschedule_milestones=True,
        can_update_progress=True,
        can_delete_own_milestones=True,
        can_delete_all_milestones=True,
        can_assign_technicians=True,
        can_reassign_work=True,
        can_create_templates=True,
        can_manage_escalations=True,
        can_generate_reports=True,
        can_bulk_update=True,
    ),
    Role.SUPERVISOR: TimelinePermissions(
        can_view_full_timeline=True,
        can_view_all_milestones=True,
        can_view_critical_path=True,
        can_view_resource_allocation=True,
        can_view_analytics=True,
        can_create_major_milestones=False,  # admin only
        can_create_minor_milestones=True,
        can_create_events=True,
        can_create_deadlines=True,
        can_edit_own_milestones=True,
        can_edit_all_milestones=False,
        can_edit_assigned_milestones=True,
        can_reschedule_milestones=True,
        can_update_progress=True,
        can_delete_own_milestones=True,
        can_delete_all_milestones=False,
        can_assign_technicians=True,
        can_reassign_work=True,
        can_create_templates=False,
        can_manage_escalations=True,
        can_generate_reports=True,
        can_bulk_update=False,
    ),
    Role.TECHNICIAN: TimelinePermissions(
        can_view_full_timeline=False,
        can_view_all_milestones=False,
        can_view_critical_path=False,
        can_view_resource_allocation=False,
        can_view_analytics=False,
        can_create_major_milestones=False,
        can_create_minor_milestones=False,
        can_create_events=True,
        can_create_deadlines=False,
        can_edit_own_milestones=False,
        can_edit_all_milestones=False,
        can_edit_assigned_milestones=True,
        can_reschedule_milestones=False,
        can_update_progress=True,
        can_delete_own_milestones=False,
        can_delete_all_milestones=False,
        can_assign_technicians=False,
        can_reassign_work=False,
        can_create_templates=False,
        can_manage_escalations=False,
        can_generate_reports=False,
        can_bulk_update=False,
    ),
}

_CREATE_FLAGS: Dict[MilestoneType, str] = {
    MilestoneType.MAJOR: "can_create_major_milestones",
    MilestoneType.MINOR: "can_create_minor_milestones",
    MilestoneType.EVENT: "can_create_events",
    MilestoneType.DEADLINE: "can_create_deadlines",
}


def _coerce(enum_cls: Type[E], value: Any) -> Optional[E]:
    """Map a member or its string value onto enum_cls; None if unrecognized."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def get_permissions(role: Union[Role, str, None]) -> TimelinePermissions:
    """Look up the capability set for a role (all False when unrecognized)."""
    return _ROLE_PERMISSIONS.get(_coerce(Role, role), NO_PERMISSIONS)


def can_update_milestone(
    role: Union[Role, str, None], actor_name: str, milestone: Any
) -> bool:
    """
    Decide whether an actor may edit a milestone. First match wins:

    1. Completed or cancelled milestones are never editable
    2. Admin: can_edit_all_milestones
    3. Creator with can_edit_own_milestones
    4. Assignee with can_edit_assigned_milestones
    5. Supervisor on a non-major milestone: can_edit_all_milestones
    """
    role = _coerce(Role, role)
    permissions = get_permissions(role)

    status = _coerce(MilestoneStatus, milestone.status)
    if status is not None and status.is_terminal:
        return False

    if role is Role.ADMIN:
        return permissions.can_edit_all_milestones

    if milestone.created_by == actor_name and permissions.can_edit_own_milestones:
        return True

    assigned_to = getattr(milestone, "assigned_to", None)
    if assigned_to == actor_name and permissions.can_edit_assigned_milestones:
        return True

    # Always False for supervisors with the current table.
    milestone_type = _coerce(MilestoneType, milestone.milestone_type)
    if role is Role.SUPERVISOR and milestone_type is not MilestoneType.MAJOR:
        return permissions.can_edit_all_milestones

    return False


def can_create_milestone(
    role: Union[Role, str, None], milestone_type: Union[MilestoneType, str, None]
) -> bool:
    flag = _CREATE_FLAGS.get(_coerce(MilestoneType, milestone_type))
    if flag is None:
        return False
    return getattr(get_permissions(role), flag)


def can_delete_milestone(
    role: Union[Role, str, None], actor_name: str, milestone: Any
) -> bool:
    permissions = get_permissions(role)
    if permissions.can_delete_all_milestones:
        return True
    return milestone.created_by == actor_name and permissions.can_delete_own_milestones


def get_visible_milestones(
    role: Union[Role, str, None], actor_name: str, milestones: Iterable[Any]
) -> List[Any]:
    """
    Filter milestones down to what the actor may see.

    Roles with can_view_all_milestones see everything in the original order.
    Others see milestones assigned to them, created by them, or unassigned.
    """
    milestones = list(milestones)
    if get_permissions(role).can_view_all_milestones:
        return milestones
    return [
        m
        for m in milestones
        if getattr(m, "assigned_to", None) == actor_name
        or m.created_by == actor_name
        or not getattr(m, "assigned_to", None)
    ]
