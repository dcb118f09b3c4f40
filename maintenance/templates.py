"""Built-in timeline templates for common maintenance workflows."""

from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from .milestone import Milestone, MilestoneStatus, MilestoneType

CATEGORIES = ("routine", "emergency", "inspection", "repair", "custom")

SYSTEM_AUTHOR = "system"


class TimelineTemplate:
    """A named, ordered set of milestone blueprints."""

    def __init__(
        self,
        id: str,
        name: str,
        description: str,
        category: str,
        estimated_duration: int,
        milestones: List[Milestone],
    ):
        self.id = id
        self.name = name
        self.description = description
        self.category = category
        self.estimated_duration = estimated_duration  # days
        self.milestones = milestones


def _step(
    order_index: int,
    milestone_type: MilestoneType,
    title: str,
    description: str,
    is_critical: bool = True,
) -> Milestone:
    return Milestone(
        title=title,
        milestone_type=milestone_type,
        created_by=SYSTEM_AUTHOR,
        description=description,
        order_index=order_index,
        is_critical=is_critical,
        created_by_role="admin",
    )


TIMELINE_TEMPLATES: List[TimelineTemplate] = [
    TimelineTemplate(
        "routine-maintenance",
        "Routine Maintenance",
        "Standard routine maintenance workflow for regular vehicle servicing",
        "routine",
        5,
        [
            _step(1, MilestoneType.MAJOR, "Initial Inspection",
                  "Comprehensive vehicle assessment and diagnostic check"),
            _step(2, MilestoneType.MINOR, "Fluid Checks",
                  "Check and replace engine oil, brake fluid, coolant",
                  is_critical=False),
            _step(3, MilestoneType.MINOR, "Filter Replacement",
                  "Replace air filter, cabin filter, and fuel filter",
                  is_critical=False),
            _step(4, MilestoneType.MAJOR, "Testing & Calibration",
                  "System verification and performance testing"),
            _step(5, MilestoneType.MAJOR, "Quality Assurance",
                  "Final inspection and quality check"),
            _step(6, MilestoneType.DEADLINE, "Delivery Preparation",
                  "Customer handover preparation and documentation"),
        ],
    ),
    TimelineTemplate(
        "emergency-repair",
        "Emergency Repair",
        "Fast-track workflow for urgent vehicle repairs",
        "emergency",
        2,
        [
            _step(1, MilestoneType.MAJOR, "Emergency Assessment",
                  "Rapid diagnostic and safety evaluation"),
            _step(2, MilestoneType.MAJOR, "Emergency Repair",
                  "Execute critical repairs to restore functionality"),
            _step(3, MilestoneType.MAJOR, "Safety Verification",
                  "Verify repair safety and basic functionality"),
            _step(4, MilestoneType.DEADLINE, "Emergency Handover",
                  "Quick handover with follow-up recommendations"),
        ],
    ),
    TimelineTemplate(
        "annual-inspection",
        "Annual Inspection",
        "Comprehensive annual vehicle inspection and certification",
        "inspection",
        7,
        [
            _step(1, MilestoneType.MAJOR, "Pre-Inspection Review",
                  "Review vehicle history and prepare inspection checklist"),
            _step(2, MilestoneType.MAJOR, "Mechanical Inspection",
                  "Comprehensive mechanical systems inspection"),
            _step(3, MilestoneType.MAJOR, "Safety Systems Check",
                  "Inspect brakes, lights, signals, and safety equipment"),
            _step(4, MilestoneType.MINOR, "Emissions Testing",
                  "Environmental compliance and emissions testing",
                  is_critical=False),
            _step(5, MilestoneType.MAJOR, "Documentation & Certification",
                  "Complete inspection documentation and issue certificates"),
        ],
    ),
]


def get_templates_by_category(category: str) -> List[TimelineTemplate]:
    return [t for t in TIMELINE_TEMPLATES if t.category == category]


def get_template_by_id(template_id: str) -> Optional[TimelineTemplate]:
    for template in TIMELINE_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def create_timeline_from_template(
    template_id: str,
    request_id: str,
    start_date: date,
    assigned_to: Optional[str] = None,
) -> List[Milestone]:
    """
    Instantiate a template's milestones for a request.

    Milestones are planned one day apart starting at start_date. The
    assignee (when given) is also recorded as the creator; otherwise
    the creator is "system". Unknown template ids yield no milestones.
    """
    template = get_template_by_id(template_id)
    if template is None:
        return []

    timeline = []
    for index, blueprint in enumerate(template.milestones):
        planned = start_date + relativedelta(days=index)
        timeline.append(
            Milestone(
                title=blueprint.title,
                milestone_type=blueprint.milestone_type,
                created_by=assigned_to or SYSTEM_AUTHOR,
                status=MilestoneStatus.PENDING,
                assigned_to=assigned_to or blueprint.assigned_to,
                request_id=request_id,
                description=blueprint.description,
                planned_date=planned.isoformat(),
                order_index=blueprint.order_index,
                is_critical=blueprint.is_critical,
                created_by_role=blueprint.created_by_role,
            )
        )
    return timeline
