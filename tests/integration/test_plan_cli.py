"""Integration tests for the plan command-line tools."""

import pytest
import yaml

from planning_copilot import create_plan as create_cli
from planning_copilot import list_plans as list_cli
from planning_copilot import update_plan_status as status_cli

pytestmark = pytest.mark.integration


def _summary(root):
    path = root / ".copilot" / "plans" / "state.yaml"
    return yaml.safe_load(path.read_text(encoding="utf-8"))["summary"]


class TestCreatePlanCli:
    """The planning-copilot-new command."""

    def test_creates_draft(self, installed_root, capsys):
        """Test that a new plan starts in draft."""
        create_cli.main(["Add caching", "--target", str(installed_root)])
        out = capsys.readouterr().out
        assert "PLAN-001" in out
        assert _summary(installed_root)["draft"] == 1

    def test_blank_title_exits_one(self, installed_root, capsys):
        """Test that an invalid title fails with exit 1."""
        with pytest.raises(SystemExit) as exc_info:
            create_cli.main(["  ", "--target", str(installed_root)])
        assert exc_info.value.code == 1
        assert "Title cannot be empty" in capsys.readouterr().err


class TestSetStatusCli:
    """The planning-copilot-set-status command."""

    def test_allowed_transition(self, installed_root, capsys):
        """Test a lifecycle edge and the next-step hint."""
        create_cli.main(["Review me", "--target", str(installed_root)])
        status_cli.main(["PLAN-001", "pending_review", "--target", str(installed_root)])
        out = capsys.readouterr().out
        assert "from 'draft' to 'pending_review'" in out
        assert "Next allowed: draft, approved, rejected" in out
        summary = _summary(installed_root)
        assert summary["pending_review"] == 1
        assert summary["draft"] == 0

    def test_rejected_transition(self, installed_root, capsys):
        """Test that an illegal transition exits 1 and names the allowed moves."""
        create_cli.main(["Too fast", "--target", str(installed_root)])
        capsys.readouterr()
        with pytest.raises(SystemExit) as exc_info:
            status_cli.main(["PLAN-001", "completed", "--target", str(installed_root)])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "cannot move from 'draft' to 'completed'" in err
        assert _summary(installed_root)["draft"] == 1

    def test_unknown_plan(self, installed_root, capsys):
        """Test that an unknown plan id exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            status_cli.main(["PLAN-404", "approved", "--target", str(installed_root)])
        assert exc_info.value.code == 1
        assert "Plan 'PLAN-404' not found" in capsys.readouterr().err

    def test_not_installed(self, tmp_path, capsys):
        """Test that a project without state asks for an install."""
        with pytest.raises(SystemExit) as exc_info:
            status_cli.main(["PLAN-001", "approved", "--target", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "planning-copilot-install" in capsys.readouterr().err


class TestListPlansCli:
    """The planning-copilot-list command."""

    def test_empty(self, installed_root, capsys):
        """Test listing when there are no plans."""
        list_cli.main(["--target", str(installed_root)])
        assert "Listing plans: None found." in capsys.readouterr().out

    def test_filtered_listing_and_summary(self, installed_root, capsys):
        """Test a status filter and the counters."""
        create_cli.main(["First", "--target", str(installed_root)])
        create_cli.main(["Second", "--target", str(installed_root)])
        status_cli.main(["PLAN-002", "pending_review", "--target", str(installed_root)])
        capsys.readouterr()

        list_cli.main(["--status", "pending_review", "--summary", "--target", str(installed_root)])
        out = capsys.readouterr().out
        assert "[PLAN-002] (pending_review) Second" in out
        assert "[PLAN-001]" not in out
        assert "draft:" in out

    def test_invalid_status_filter(self, installed_root, capsys):
        """Test that an unknown status filter exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            list_cli.main(["--status", "done", "--target", str(installed_root)])
        assert exc_info.value.code == 1
        assert "Invalid status" in capsys.readouterr().err
