"""Command-line tool for adding a draft plan to .copilot/plans/state.yaml.

Usage:
    planning-copilot-new "Title" [--description TEXT] [--target DIR]
"""

import argparse
import sys
from importlib import import_module
from typing import Optional

import_module("planning_copilot.logging")

from planning_copilot.console import print_error, print_success  # noqa: E402
from planning_copilot.services.plan_store import create_plan  # noqa: E402


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the planning-copilot-new CLI tool."""
    parser = argparse.ArgumentParser(
        prog="planning-copilot-new",
        description="Add a new draft plan to .copilot/plans/state.yaml.",
    )
    parser.add_argument("title", help="Short title of the plan.")
    parser.add_argument("--description", default=None, help="Optional longer description.")
    parser.add_argument("--target", metavar="DIR", default=None, help="Project directory")
    args = parser.parse_args(argv)

    try:
        record = create_plan(args.title, description=args.description, root=args.target)
    except ValueError as e:
        print_error(f"Error: {e}")
        sys.exit(1)

    print_success(f"Created plan '{record.id}' ({record.status.value}): {record.title}")


if __name__ == "__main__":
    main()
