"""Command-line installer for the planning workflow.

Creates the .copilot/ and .github/ layout in the target project, initializes the
YAML state files and installs the agent, instructions, prompt and standards
documents (downloaded, or the embedded copies when the download fails).

Usage:
    planning-copilot-install [--with-standards | --no-standards | --minimal]
                             [--target DIR] [--offline] [--preserve-state]
"""

import argparse
import logging
import sys
from importlib import import_module
from typing import Optional

from planning_copilot import __version__

# Configure logging once, before anything logs.
import_module("planning_copilot.logging")

from planning_copilot.console import console, print_banner, print_error, print_info, print_rule  # noqa: E402
from planning_copilot.services.assets import AssetUnavailableError  # noqa: E402
from planning_copilot.services.installer import InstallOptions, InstallReport, install  # noqa: E402

logger = logging.getLogger(__name__)

EPILOG = """\
Examples:
  planning-copilot-install                      # Full installation with standards (default)
  planning-copilot-install --no-standards       # Install without standards
  planning-copilot-install --minimal            # Install only the smart agent
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="planning-copilot-install",
        description="Install the Smart Agent and documentation structure into your project.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # Later flags win, as in "--no-standards --with-standards".
    parser.add_argument(
        "--with-standards",
        dest="with_standards",
        action="store_const",
        const=True,
        default=True,
        help="Install with language standards (default)",
    )
    parser.add_argument(
        "--no-standards",
        dest="with_standards",
        action="store_const",
        const=False,
        help="Skip language standards installation",
    )
    parser.add_argument(
        "--minimal",
        action="store_true",
        help="Install only the agent, no standards or extras",
    )
    parser.add_argument(
        "--target",
        metavar="DIR",
        default=None,
        help="Project directory to install into (default: current directory)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Do not download anything; use the embedded copies",
    )
    parser.add_argument(
        "--preserve-state",
        action="store_true",
        help="Keep existing state files instead of resetting them",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def display_summary(report: InstallReport, options: InstallOptions) -> None:
    """Print the completion banner and next steps."""
    console.print()
    print_rule("Installation Complete!")
    console.print()
    console.print("The following has been installed:")
    installed = [
        ("Smart agent", ".github/agents/smart.agent.md"),
        ("Copilot instructions", ".github/copilot-instructions.md"),
    ]
    if not options.minimal:
        installed.append(("Setup prompt", ".copilot/prompts/setup-project.md"))
    installed += [
        ("Copilot folder", ".copilot/"),
        ("Documentation", ".copilot/docs/"),
        ("Search index", ".copilot/docs/index.yaml"),
        ("Plans tracker", ".copilot/plans/state.yaml"),
    ]
    if options.with_standards:
        installed.append(("Standards", ".copilot/standards/"))
    for label, path in installed:
        console.print(f"  • {label + ':':<22}{path}", markup=False)

    if report.fallbacks:
        console.print()
        print_info(f"Embedded copies used for: {', '.join(report.fallbacks)}")

    console.print()
    console.print("Next steps:")
    console.print("  1. Review .copilot/instructions.md and add project-specific rules")
    console.print("  2. Use the @smart agent in GitHub Copilot to start planning")
    console.print("  3. Run 'Setup Project' handoff to auto-analyze and document your project")
    console.print("  4. The agent will populate docs/ with comprehensive documentation")
    console.print()
    print_info("Note: .copilot/ contents are gitignored by default")
    print_info("Tip: Use the 'Setup Project' handoff button to auto-configure!")


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the planning-copilot-install CLI tool."""
    args = build_parser().parse_args(argv)
    options = InstallOptions(
        root=args.target,
        with_standards=args.with_standards,
        minimal=args.minimal,
        offline=args.offline,
        preserve_state=args.preserve_state,
    )

    print_banner("Smart Agent Installer")
    print_info("Starting installation...")
    try:
        report = install(options)
    except (OSError, AssetUnavailableError) as e:
        logger.debug("Installation aborted", exc_info=True)
        print_error(f"Installation failed: {e}")
        sys.exit(1)

    display_summary(report, options)


if __name__ == "__main__":
    main()
