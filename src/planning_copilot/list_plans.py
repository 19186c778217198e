"""Command-line tool for listing plans from .copilot/plans/state.yaml.

Usage:
    planning-copilot-list [--status STATUS ...] [--target DIR]
"""

import argparse
import sys
from importlib import import_module
from typing import Optional

import_module("planning_copilot.logging")

from planning_copilot.console import console, print_error  # noqa: E402
from planning_copilot.domain.models import PlanRecord, PlanStatus  # noqa: E402
from planning_copilot.services.plan_store import list_plans, load_state  # noqa: E402


def display_plan_list(plans: list[PlanRecord], title: str = "Listing plans") -> None:
    """Display a formatted list of plans to stdout.

    Args:
        plans: Plan records to show, already filtered and sorted
        title: Header title to display above the list
    """
    if not plans:
        console.print(f"{title}: None found.", markup=False)
        return

    console.print(f"{title}:", markup=False)
    console.print("-" * (len(title) + 1), markup=False)
    for plan in plans:
        console.print(f"[{plan.id}] ({plan.status.value}) {plan.title}", markup=False)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the planning-copilot-list CLI tool."""
    parser = argparse.ArgumentParser(
        prog="planning-copilot-list",
        description="List plans from .copilot/plans/state.yaml, with optional status filters.",
    )
    parser.add_argument(
        "--status",
        action="append",
        help=(
            "Filter by status (e.g., draft, pending_review). Can be used multiple times. "
            f"Allowed: {', '.join(s.value for s in PlanStatus)}"
        ),
    )
    parser.add_argument("--target", metavar="DIR", default=None, help="Project directory")
    parser.add_argument(
        "--summary", action="store_true", help="Also print the per-status counters"
    )
    args = parser.parse_args(argv)

    try:
        plans = list_plans(statuses=args.status, root=args.target)
    except (FileNotFoundError, ValueError) as e:
        print_error(f"Error: {e}")
        sys.exit(1)

    title = "Listing plans"
    if args.status:
        title += f" matching: status={'/'.join(args.status)}"
    display_plan_list(plans, title=title)

    if args.summary:
        summary = load_state(args.target).summary.model_dump()
        console.print()
        for status, count in summary.items():
            console.print(f"  {status + ':':<16}{count}", markup=False)


if __name__ == "__main__":
    main()
