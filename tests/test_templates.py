#!/usr/bin/env python3
"""Tests for built-in timeline templates."""
from datetime import date

import pytest
from maintenance import (
    TIMELINE_TEMPLATES,
    MilestoneStatus,
    MilestoneType,
    create_timeline_from_template,
    get_template_by_id,
    get_templates_by_category,
)
from maintenance.templates import CATEGORIES


class TestTemplateLookup:
    """Tests for template lookup helpers."""

    def test_builtin_templates(self):
        assert [t.id for t in TIMELINE_TEMPLATES] == [
            "routine-maintenance",
            "emergency-repair",
            "annual-inspection",
        ]

    def test_categories_are_known(self):
        for template in TIMELINE_TEMPLATES:
            assert template.category in CATEGORIES

    def test_get_by_id(self):
        template = get_template_by_id("emergency-repair")
        assert template.name == "Emergency Repair"
        assert template.estimated_duration == 2
        assert len(template.milestones) == 4

    def test_get_by_unknown_id(self):
        assert get_template_by_id("nope") is None

    def test_get_by_category(self):
        assert [t.id for t in get_templates_by_category("inspection")] == [
            "annual-inspection"
        ]
        assert get_templates_by_category("custom") == []

    def test_blueprints_are_ordered(self):
        for template in TIMELINE_TEMPLATES:
            orders = [m.order_index for m in template.milestones]
            assert orders == list(range(1, len(orders) + 1))


class TestCreateTimelineFromTemplate:
    """Tests for create_timeline_from_template."""

    def test_unknown_template_is_empty(self):
        assert create_timeline_from_template("nope", "req-1", date(2025, 3, 1)) == []

    def test_milestones_planned_one_day_apart(self):
        timeline = create_timeline_from_template(
            "routine-maintenance", "req-1", date(2025, 2, 27)
        )
        assert [m.planned_date for m in timeline] == [
            "2025-02-27",
            "2025-02-28",
            "2025-03-01",
            "2025-03-02",
            "2025-03-03",
            "2025-03-04",
        ]

    def test_copies_blueprint_fields(self):
        timeline = create_timeline_from_template(
            "routine-maintenance", "req-1", date(2025, 3, 1)
        )
        first = timeline[0]
        assert first.title == "Initial Inspection"
        assert first.milestone_type == MilestoneType.MAJOR
        assert first.status == MilestoneStatus.PENDING
        assert first.is_critical is True
        assert first.request_id == "req-1"
        assert timeline[-1].milestone_type == MilestoneType.DEADLINE

    def test_unassigned_created_by_system(self):
        timeline = create_timeline_from_template(
            "annual-inspection", "req-1", date(2025, 3, 1)
        )
        assert all(m.created_by == "system" for m in timeline)
        assert all(m.assigned_to is None for m in timeline)

    def test_assignee_is_also_creator(self):
        timeline = create_timeline_from_template(
            "emergency-repair", "req-1", date(2025, 3, 1), assigned_to="Carl"
        )
        assert all(m.assigned_to == "Carl" for m in timeline)
        assert all(m.created_by == "Carl" for m in timeline)

    def test_template_blueprints_untouched(self):
        create_timeline_from_template(
            "emergency-repair", "req-1", date(2025, 3, 1), assigned_to="Carl"
        )
        template = get_template_by_id("emergency-repair")
        assert all(m.assigned_to is None for m in template.milestones)
        assert all(m.planned_date is None for m in template.milestones)
