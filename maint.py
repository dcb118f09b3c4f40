#!/usr/bin/env python3
"""
Unified CLI for fleet maintenance requests.

Commands:
  quote          - Show the cost breakdown of a request
  permissions    - Show the timeline capabilities of a role
  timeline       - Show the milestones a user may see and edit
  templates      - List built-in timeline templates
  apply-template - Add a template's milestones to a request
  set-types      - Change the maintenance types chosen for a vehicle
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import Iterable, List, Optional

from maintenance import (
    DEFAULT_RATES,
    TIMELINE_TEMPLATES,
    CostBreakdown,
    MaintenanceRequest,
    MaintenanceType,
    Milestone,
    Role,
    TimelinePermissions,
    can_delete_milestone,
    can_update_milestone,
    create_timeline_from_template,
    get_permissions,
    get_template_by_id,
    get_templates_by_category,
    load_rates,
    load_request,
    save_breakdown,
    save_milestone,
)
from maintenance.loader import update_vehicle_types
from maintenance.rates import RateTable

logger = logging.getLogger(__name__)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_cost(cost: Optional[float]) -> str:
    """Format an amount in birr for display."""
    return f"{cost:,.0f} ETB" if cost is not None else "-"


def format_flag(value: bool) -> str:
    return "yes" if value else "no"


def format_types(types: Iterable[MaintenanceType]) -> str:
    """Format maintenance types in declaration order (e.g., 'offline, fls')."""
    chosen = set(types)
    names = [mt.value for mt in MaintenanceType if mt in chosen]
    return ", ".join(names) if names else "-"


def format_label(name: str) -> str:
    """Turn a flag name like 'can_view_analytics' into 'View analytics'."""
    words = name.split("_")
    if words and words[0] == "can":
        words = words[1:]
    return " ".join(words).capitalize()


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_types(values: List[str]) -> List[MaintenanceType]:
    """Parse maintenance type names; raises ValueError on unknown names."""
    return [MaintenanceType(v.strip().lower()) for v in values]


def parse_role(value: str) -> Role:
    return Role(value.strip().lower())


def read_request(path: Path) -> Optional[MaintenanceRequest]:
    """Load a request file, printing the error and returning None if it is invalid."""
    try:
        return load_request(path)
    except ValueError as e:
        print(f"Error: {e}")
        return None


# =============================================================================
# Quote command
# =============================================================================


def make_quote_table(
    request: MaintenanceRequest, rates: RateTable = DEFAULT_RATES
) -> List[List[str]]:
    """Convert vehicle selections to table rows."""
    rows = []
    for selection in request.selections:
        fees = sum(rates.price_of(mt) for mt in selection.maintenance_types)
        rows.append(
            [
                selection.vehicle.plate_number,
                selection.vehicle.location,
                format_types(selection.maintenance_types),
                format_cost(fees) if selection.has_maintenance else "-",
            ]
        )
    return rows


def make_breakdown_table(
    breakdown: CostBreakdown, rates: RateTable = DEFAULT_RATES
) -> List[List[str]]:
    """Convert a cost breakdown to label/value rows."""
    per_diem_detail = (
        f"{breakdown.crew_count} crew x {format_cost(rates.per_diem_rate)}"
        f" x {breakdown.work_days} days"
    )
    return [
        ["Maintenance fees", format_cost(breakdown.maintenance_fees)],
        ["Per diem", f"{format_cost(breakdown.per_diem)} ({per_diem_detail})"],
        ["Transportation", format_cost(breakdown.transportation)],
        ["Total", format_cost(breakdown.total)],
    ]


def cmd_quote(args):
    """Show the cost breakdown of a request."""
    request = read_request(args.request_file)
    if request is None:
        return 1
    try:
        rates = load_rates(args.rates) if args.rates else DEFAULT_RATES
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    breakdown = request.calculate_costs(rates)

    print(f"Request: {request.id or args.request_file.stem} ({request.owner_name})")
    if request.company_name:
        print(f"Company: {request.company_name}")
    print(f"Vehicles: {len(request.selections)}")
    print()

    if len(request.selections) == 0:
        print("No vehicles in request.")
        return 0

    headers = ["Plate", "Location", "Maintenance", "Fees"]
    print(tabulate(make_quote_table(request, rates), headers=headers, tablefmt="simple"))
    print()
    print(tabulate(make_breakdown_table(breakdown, rates), tablefmt="plain"))

    if args.save:
        save_breakdown(args.request_file, breakdown)
        print()
        print("Breakdown saved.")

    return 0


# =============================================================================
# Permissions command
# =============================================================================


def make_permissions_table(permissions: TimelinePermissions) -> List[List[str]]:
    return [
        [format_label(name), format_flag(value)]
        for name, value in permissions.to_dict().items()
    ]


def cmd_permissions(args):
    """Show the timeline capabilities of a role."""
    try:
        role = parse_role(args.role)
    except ValueError:
        print(f"Error: Unknown role '{args.role}'")
        print(f"Available roles: {', '.join(r.value for r in Role)}")
        return 1

    print(f"Role: {role.value}")
    print()
    headers = ["Capability", "Allowed"]
    print(
        tabulate(
            make_permissions_table(get_permissions(role)),
            headers=headers,
            tablefmt="simple",
        )
    )
    return 0


# =============================================================================
# Timeline command
# =============================================================================


def make_timeline_table(
    milestones: List[Milestone], role: Role, actor: str
) -> List[List[str]]:
    """Convert milestones to table rows with the actor's edit/delete rights."""
    rows = []
    for m in milestones:
        rows.append(
            [
                m.order_index or "-",
                truncate(m.title),
                m.milestone_type.value,
                m.status.value,
                m.planned_date or "-",
                m.assigned_to or "-",
                format_flag(can_update_milestone(role, actor, m)),
                format_flag(can_delete_milestone(role, actor, m)),
            ]
        )
    return rows


def cmd_timeline(args):
    """Show the milestones a user may see and edit."""
    try:
        role = parse_role(args.role)
    except ValueError:
        print(f"Error: Unknown role '{args.role}'")
        return 1

    request = read_request(args.request_file)
    if request is None:
        return 1
    visible = request.visible_milestones(role, args.actor)

    print(f"Request: {request.id or args.request_file.stem}")
    print(f"Viewing as: {args.actor} ({role.value})")
    print(f"Milestones: {len(visible)} of {len(request.milestones)} visible")
    print()

    if not visible:
        print("No milestones to show.")
        return 0

    headers = ["#", "Title", "Type", "Status", "Planned", "Assigned", "Edit", "Delete"]
    print(
        tabulate(
            make_timeline_table(visible, role, args.actor),
            headers=headers,
            tablefmt="simple",
        )
    )
    return 0


# =============================================================================
# Templates command
# =============================================================================


def cmd_templates(args):
    """List built-in timeline templates."""
    templates = (
        get_templates_by_category(args.category) if args.category else TIMELINE_TEMPLATES
    )

    if not templates:
        print("No templates found.")
        return 0

    rows = [
        [t.id, t.name, t.category, f"{t.estimated_duration}d", len(t.milestones)]
        for t in templates
    ]
    headers = ["Id", "Name", "Category", "Duration", "Milestones"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_apply_template(args):
    """Add a template's milestones to a request."""
    template = get_template_by_id(args.template_id)
    if template is None:
        print(f"Error: Unknown template '{args.template_id}'")
        print(f"Available templates: {', '.join(t.id for t in TIMELINE_TEMPLATES)}")
        return 1

    try:
        start = date.fromisoformat(args.start) if args.start else date.today()
    except ValueError:
        print(f"Error: Invalid date '{args.start}' (expected YYYY-MM-DD)")
        return 1

    request = read_request(args.request_file)
    if request is None:
        return 1
    milestones = create_timeline_from_template(
        template.id, request.id or args.request_file.stem, start, args.assign
    )

    print(f"Adding '{template.name}' to {args.request_file}:")
    for m in milestones:
        print(f"  {m.planned_date}  {m.milestone_type.value:<8} {m.title}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    for m in milestones:
        save_milestone(args.request_file, m)
    print(f"{len(milestones)} milestones saved.")
    return 0


# =============================================================================
# Set Types command
# =============================================================================


def cmd_set_types(args):
    """Change the maintenance types chosen for a vehicle."""
    request = read_request(args.request_file)
    if request is None:
        return 1
    selection = request.selections.get(args.vehicle_id)
    if selection is None:
        print(f"Error: Unknown vehicle '{args.vehicle_id}'")
        print("\nVehicles in request:")
        for s in request.selections:
            print(f"  {s.vehicle.id}: {s.vehicle.name}")
        return 1

    try:
        types = parse_types(args.types)
    except ValueError as e:
        print(f"Error: {e}")
        print(f"Available types: {', '.join(mt.value for mt in MaintenanceType)}")
        return 1

    before = request.calculate_costs()
    request.selections.update_maintenance_types(args.vehicle_id, types)
    after = request.calculate_costs()

    print(f"Vehicle: {selection.vehicle.name}")
    print(f"Maintenance: {format_types(selection.maintenance_types)} -> {format_types(types)}")
    print(f"Total: {format_cost(before.total)} -> {format_cost(after.total)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    update_vehicle_types(args.request_file, args.vehicle_id, types)
    save_breakdown(args.request_file, after)
    print("Vehicle updated.")
    return 0


# =============================================================================
# Main
# =============================================================================


def configure_logging(verbose: bool) -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet maintenance request tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s quote requests/acme.yaml
  %(prog)s quote requests/acme.yaml --rates rates.yaml --save
  %(prog)s permissions supervisor
  %(prog)s timeline requests/acme.yaml --role technician --actor Carl
  %(prog)s templates --category routine
  %(prog)s apply-template requests/acme.yaml routine-maintenance \\
      --start 2025-03-01 --assign Carl
  %(prog)s set-types requests/acme.yaml v1 fls calibration
""",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Quote subcommand
    quote_parser = subparsers.add_parser(
        "quote", help="Show the cost breakdown of a request"
    )
    quote_parser.add_argument("request_file", type=Path, help="Path to request YAML file")
    quote_parser.add_argument(
        "--rates",
        type=Path,
        help="Path to a rate table YAML file (default: built-in rates)",
    )
    quote_parser.add_argument(
        "--save",
        action="store_true",
        help="Store the breakdown in the request file",
    )

    # Permissions subcommand
    permissions_parser = subparsers.add_parser(
        "permissions", help="Show the timeline capabilities of a role"
    )
    permissions_parser.add_argument(
        "role", type=str, help="Role (admin, supervisor, technician)"
    )

    # Timeline subcommand
    timeline_parser = subparsers.add_parser(
        "timeline", help="Show the milestones a user may see and edit"
    )
    timeline_parser.add_argument(
        "request_file", type=Path, help="Path to request YAML file"
    )
    timeline_parser.add_argument("--role", type=str, required=True, help="Viewer role")
    timeline_parser.add_argument(
        "--actor", type=str, required=True, help="Viewer display name"
    )

    # Templates subcommand
    templates_parser = subparsers.add_parser(
        "templates", help="List built-in timeline templates"
    )
    templates_parser.add_argument(
        "--category",
        type=str,
        help="Filter by category (routine, emergency, inspection, repair, custom)",
    )

    # Apply Template subcommand
    apply_parser = subparsers.add_parser(
        "apply-template", help="Add a template's milestones to a request"
    )
    apply_parser.add_argument("request_file", type=Path, help="Path to request YAML file")
    apply_parser.add_argument("template_id", type=str, help="Template id")
    apply_parser.add_argument(
        "--start",
        type=str,
        help="First milestone date in YYYY-MM-DD format (default: today)",
    )
    apply_parser.add_argument(
        "--assign", type=str, help="Technician to assign every milestone to"
    )
    apply_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Set Types subcommand
    set_types_parser = subparsers.add_parser(
        "set-types", help="Change the maintenance types chosen for a vehicle"
    )
    set_types_parser.add_argument(
        "request_file", type=Path, help="Path to request YAML file"
    )
    set_types_parser.add_argument("vehicle_id", type=str, help="Vehicle id")
    set_types_parser.add_argument(
        "types",
        nargs="*",
        help="Maintenance types (offline, fls, calibration, fls_calibration)",
    )
    set_types_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    # Validate request file exists
    request_file = getattr(args, "request_file", None)
    if request_file is not None and not request_file.exists():
        print(f"Error: File not found: {request_file}")
        return 1
    if getattr(args, "rates", None) is not None and not args.rates.exists():
        print(f"Error: File not found: {args.rates}")
        return 1

    logger.debug("Running %s", args.command)

    # Dispatch to command handler
    if args.command == "quote":
        return cmd_quote(args)
    elif args.command == "permissions":
        return cmd_permissions(args)
    elif args.command == "timeline":
        return cmd_timeline(args)
    elif args.command == "templates":
        return cmd_templates(args)
    elif args.command == "apply-template":
        return cmd_apply_template(args)
    elif args.command == "set-types":
        return cmd_set_types(args)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
