"""planning-copilot - plan, approve, implement.

This package installs a human-in-the-loop planning workflow for an AI coding
assistant into a project: a fixed `.copilot/` layout, YAML state documents and
the agent persona, instructions, prompt and standards documents.

Key components:
- services.installer: materializes the layout into a project root
- services.assets: remote and embedded asset providers
- services.state_templates: empty state documents
- services.plan_store: validated plan status transitions on plans/state.yaml
- install / list_plans / create_plan / update_plan_status: command-line entry points
"""

__version__ = "0.3.0"
