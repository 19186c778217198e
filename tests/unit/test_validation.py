"""Unit tests for validation module."""

import pytest

from planning_copilot.domain.models import PlanStatus
from planning_copilot.domain.validation import (
    ALLOWED_TRANSITIONS,
    InvalidTransitionError,
    allowed_targets,
    validate_description,
    validate_title,
    validate_transition,
)


class TestValidateTitle:
    """Test title validation."""

    def test_valid_title(self):
        """Test that a valid title is accepted."""
        result = validate_title("Valid Title")
        assert result == "Valid Title"

    def test_empty_title_raises_error(self):
        """Test that an empty title raises ValueError."""
        with pytest.raises(ValueError, match="Title cannot be empty"):
            validate_title("")

    def test_whitespace_only_title_raises_error(self):
        """Test that a whitespace-only title is treated as empty."""
        with pytest.raises(ValueError, match="Title cannot be empty"):
            validate_title("   ")

    def test_none_title_raises_error(self):
        """Test that None title raises ValueError."""
        with pytest.raises(ValueError, match="Title cannot be empty"):
            validate_title(None)

    def test_title_strips_whitespace(self):
        """Test that title whitespace is stripped."""
        result = validate_title("  Title with spaces  ")
        assert result == "Title with spaces"

    def test_long_title(self):
        """Test that very long titles raise ValueError (max 200)."""
        with pytest.raises(ValueError, match="Title too long"):
            validate_title("A" * 500)

    def test_max_length_title(self):
        """Test that title at max length is accepted."""
        max_title = "A" * 200
        assert validate_title(max_title) == max_title

    def test_title_with_control_character_raises_error(self):
        """Test that control characters are rejected."""
        with pytest.raises(ValueError, match="invalid characters"):
            validate_title("bad\x07title")

    @pytest.mark.parametrize("title", ["line one\nline two", "a\rb", "tab\tseparated"])
    def test_title_must_be_single_line(self, title):
        """Test that newlines, carriage returns and tabs are rejected in titles."""
        with pytest.raises(ValueError, match="invalid characters"):
            validate_title(title)


class TestValidateDescription:
    """Test description validation."""

    def test_valid_description(self):
        """Test that a valid description is accepted."""
        assert validate_description("Valid description") == "Valid description"

    def test_none_description(self):
        """Test that None description is accepted."""
        assert validate_description(None) is None

    def test_blank_description_is_none(self):
        """Test that blank text means no description."""
        assert validate_description("   ") is None

    def test_multiline_description_allowed(self):
        """Test that newlines and tabs are allowed."""
        text = "line one\n\tline two"
        assert validate_description(text) == text

    def test_long_description(self):
        """Test that descriptions over 2000 characters are rejected."""
        with pytest.raises(ValueError, match="Description too long"):
            validate_description("x" * 2001)


class TestTransitions:
    """Test the plan lifecycle transition table."""

    def test_every_status_has_an_entry(self):
        """Test that the table covers every status."""
        assert set(ALLOWED_TRANSITIONS) == set(PlanStatus)

    @pytest.mark.parametrize(
        "current,requested",
        [
            (PlanStatus.DRAFT, PlanStatus.PENDING_REVIEW),
            (PlanStatus.PENDING_REVIEW, PlanStatus.APPROVED),
            (PlanStatus.PENDING_REVIEW, PlanStatus.REJECTED),
            (PlanStatus.PENDING_REVIEW, PlanStatus.DRAFT),
            (PlanStatus.APPROVED, PlanStatus.IN_PROGRESS),
            (PlanStatus.IN_PROGRESS, PlanStatus.COMPLETED),
            (PlanStatus.COMPLETED, PlanStatus.ARCHIVED),
        ],
    )
    def test_allowed_edges(self, current, requested):
        """Test that lifecycle edges validate without error."""
        validate_transition("PLAN-001", current, requested)

    def test_skipping_review_is_rejected(self):
        """Test that a draft cannot be approved directly."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            validate_transition("PLAN-001", PlanStatus.DRAFT, PlanStatus.APPROVED)
        err = exc_info.value
        assert err.plan_id == "PLAN-001"
        assert err.current is PlanStatus.DRAFT
        assert err.requested is PlanStatus.APPROVED
        assert "Allowed: pending_review" in str(err)

    def test_same_status_is_rejected(self):
        """Test that a no-op change is not an edge."""
        with pytest.raises(InvalidTransitionError):
            validate_transition("PLAN-001", PlanStatus.APPROVED, PlanStatus.APPROVED)

    def test_terminal_status_message(self):
        """Test that terminal statuses say so in the error message."""
        with pytest.raises(InvalidTransitionError, match="terminal status"):
            validate_transition("PLAN-002", PlanStatus.REJECTED, PlanStatus.DRAFT)

    def test_invalid_transition_is_value_error(self):
        """Test that callers catching ValueError also catch transition errors."""
        assert issubclass(InvalidTransitionError, ValueError)

    def test_allowed_targets_in_enum_order(self):
        """Test that allowed targets keep the status declaration order."""
        assert allowed_targets(PlanStatus.PENDING_REVIEW) == [
            PlanStatus.DRAFT,
            PlanStatus.APPROVED,
            PlanStatus.REJECTED,
        ]
        assert allowed_targets(PlanStatus.ARCHIVED) == []
