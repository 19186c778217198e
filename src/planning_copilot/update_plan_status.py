"""Command-line tool for moving a plan to a new status.

Only lifecycle edges are accepted:
draft -> pending_review -> approved | rejected | draft,
approved -> in_progress -> completed -> archived.

Usage:
    planning-copilot-set-status PLAN_ID NEW_STATUS [--target DIR]
"""

import argparse
import sys
from importlib import import_module
from typing import Optional

import_module("planning_copilot.logging")

from planning_copilot.console import print_error, print_info, print_success  # noqa: E402
from planning_copilot.domain.models import PlanStatus  # noqa: E402
from planning_copilot.domain.validation import allowed_targets  # noqa: E402
from planning_copilot.services.plan_store import load_state, set_plan_status  # noqa: E402


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the planning-copilot-set-status CLI tool."""
    parser = argparse.ArgumentParser(
        prog="planning-copilot-set-status",
        description="Update the status of a plan in .copilot/plans/state.yaml.",
    )
    parser.add_argument("plan_id", help="The ID of the plan to update (e.g. PLAN-001).")
    parser.add_argument(
        "new_status",
        help=f"The new status. Allowed values: {', '.join(s.value for s in PlanStatus)}",
    )
    parser.add_argument("--target", metavar="DIR", default=None, help="Project directory")
    args = parser.parse_args(argv)

    try:
        old_status = None
        state = load_state(args.target)
        if args.plan_id in state.plans:
            old_status = state.plans[args.plan_id].status
        record = set_plan_status(args.plan_id, args.new_status, root=args.target)
    except KeyError as e:
        print_error(f"Error: {e.args[0]}")
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        # Includes InvalidTransitionError
        print_error(f"Error: {e}")
        sys.exit(1)

    print_success(
        f"Updated plan '{record.id}' from '{old_status.value}' to '{record.status.value}'."
    )
    next_steps = allowed_targets(record.status)
    if next_steps:
        print_info(f"Next allowed: {', '.join(s.value for s in next_steps)}")


if __name__ == "__main__":
    main()
