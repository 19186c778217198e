"""Entry point for `python -m planning_copilot`: runs the installer."""

from planning_copilot.install import main

if __name__ == "__main__":
    main()
