"""Tests for per-approver status derivation."""

import pytest

from grantflow.core.approval import (
    ApproverStatus,
    RequestStatus,
    derive_status,
    resolve_approvers,
)
from grantflow.core.approval.status import latest_decision
from grantflow.core.catalog import EntryKind

RESUBMITTED = "Request resubmitted for approval"


@pytest.fixture
def derive(markers):
    def _derive(approver, current_stage, overall_status, history):
        return derive_status(
            approver, current_stage, overall_status, history, markers=markers
        )
    return _derive


class TestScenarios:
    """Reference scenarios."""

    def test_first_stage_is_current(self, derive, approver):
        """Empty history, reviewer's turn, pending -> current."""
        result = derive(approver("Reviewer"), "Reviewer", "pending", [])
        assert result is ApproverStatus.CURRENT

    def test_approved_single_stage(self, derive, approver, make_entry):
        """Reviewer approved, workflow done -> approved."""
        history = [make_entry("Reviewer", "approved")]
        result = derive(approver("Reviewer"), "Done", "approved", history)
        assert result is ApproverStatus.APPROVED

    def test_denied_at_second_stage(self, derive, approver, make_entry):
        """Reviewer approved then governance denied."""
        history = [
            make_entry("Reviewer", "approved", day=0),
            make_entry("Governance", "denied", day=1),
        ]
        assert derive(approver("Reviewer"), "Done", "denied", history) is ApproverStatus.APPROVED
        assert derive(approver("Governance"), "Done", "denied", history) is ApproverStatus.DENIED


class TestPrecedence:
    """Test rule ordering."""

    def test_unreached_stages_pending_after_denial(self, derive, approver, make_entry):
        """Test stages after the denial read as pending, not current."""
        history = [
            make_entry("Reviewer", "approved", day=0),
            make_entry("Governance", "denied", day=1),
        ]
        assert derive(approver("API Security"), "Done", "denied", history) is ApproverStatus.PENDING
        assert derive(approver("Tenant Admin"), "Done", "denied", history) is ApproverStatus.PENDING

    def test_denial_not_shown_while_pending(self, derive, approver, make_entry):
        """Test an old denial is not displayed once the request is live again."""
        history = [
            make_entry("Reviewer", "denied", day=0),
            make_entry("Reviewer", RESUBMITTED, day=1),
        ]
        result = derive(approver("Reviewer"), "Reviewer", "pending", history)
        assert result is ApproverStatus.CURRENT

    def test_denial_followed_by_approval(self, derive, approver, make_entry):
        """Test a denial followed by a later approval does not read as the denial."""
        history = [
            make_entry("Governance", "denied", day=0),
            make_entry("Reviewer", "approved", day=1),
        ]
        result = derive(approver("Governance"), "Done", "denied", history)
        assert result is ApproverStatus.PENDING

    def test_approved_beats_current(self, derive, approver, make_entry):
        """Test a recorded approval wins over being the current stage."""
        history = [make_entry("Reviewer", "approved")]
        result = derive(approver("Reviewer"), "Reviewer", "pending", history)
        assert result is ApproverStatus.APPROVED

    def test_not_yet_reached(self, derive, approver):
        """Test a later stage with no history is pending."""
        result = derive(approver("Governance"), "Reviewer", "pending", [])
        assert result is ApproverStatus.PENDING

    def test_notes_are_ignored(self, derive, approver, make_entry):
        """Test free-text entries at a stage are not decisions."""
        history = [make_entry("Reviewer", "Asked requester for justification")]
        result = derive(approver("Reviewer"), "Reviewer", "pending", history)
        assert result is ApproverStatus.CURRENT

    def test_disapproval_reads_as_denial(self, derive, approver, make_entry):
        """Test a reviewer who wrote "Disapproved" is shown as denied."""
        history = [make_entry("Reviewer", "Disapproved")]
        result = derive(approver("Reviewer"), "Done", "denied", history)
        assert result is ApproverStatus.DENIED

    def test_status_strings_any_case(self, derive, approver, make_entry):
        """Test overall status is accepted as enum or string."""
        history = [make_entry("Reviewer", "denied")]
        assert derive(approver("Reviewer"), "Done", "DENIED", history) is ApproverStatus.DENIED
        assert derive(approver("Reviewer"), "Done", RequestStatus.DENIED, history) is ApproverStatus.DENIED

    def test_unknown_current_stage(self, derive, approver):
        """Test a current stage naming no approver leaves everyone pending."""
        result = derive(approver("Reviewer"), "Finance", "pending", [])
        assert result is ApproverStatus.PENDING


class TestMonotonicApproval:
    """Approvals are sticky."""

    def test_approval_survives_later_stages(self, derive, approver, make_entry):
        """Test approval stays while later stages proceed."""
        history = [make_entry("Reviewer", "approved", day=0)]
        for stage in ("Governance", "API Security", "Tenant Admin", "Done"):
            assert derive(approver("Reviewer"), stage, "pending", history) is ApproverStatus.APPROVED

    def test_approval_survives_resubmission(self, derive, approver, make_entry):
        """Test earlier approvals remain visible across a resubmission."""
        history = [
            make_entry("Reviewer", "approved", day=0),
            make_entry("Governance", "denied", day=1),
            make_entry("Reviewer", RESUBMITTED, day=2),
        ]
        assert derive(approver("Reviewer"), "Reviewer", "pending", history) is ApproverStatus.APPROVED
        assert derive(approver("Governance"), "Reviewer", "pending", history) is ApproverStatus.PENDING

    def test_latest_entry_at_stage_wins(self, derive, approver, make_entry):
        """Test a newer decision at the same stage supersedes the approval."""
        history = [
            make_entry("Reviewer", "approved", day=0),
            make_entry("Reviewer", "denied", day=1),
        ]
        assert derive(approver("Reviewer"), "Done", "denied", history) is ApproverStatus.DENIED

    def test_reapproval_after_denial(self, derive, approver, make_entry):
        """Test an approval after an earlier denial at the same stage counts."""
        history = [
            make_entry("Governance", "denied", day=0),
            make_entry("Reviewer", RESUBMITTED, day=1),
            make_entry("Governance", "approved", day=2),
        ]
        assert derive(approver("Governance"), "Done", "approved", history) is ApproverStatus.APPROVED


class TestInvariants:
    """Properties that hold for every snapshot."""

    SNAPSHOTS = [
        ("Reviewer", "pending", []),
        ("Governance", "pending", [("Reviewer", "approved")]),
        ("API Security", "pending", [("Reviewer", "approved"), ("Governance", "approved")]),
        ("Done", "denied", [("Reviewer", "approved"), ("Governance", "denied")]),
        ("Reviewer", "pending", [("Reviewer", "denied"), ("Reviewer", RESUBMITTED)]),
        ("Done", "approved", [("Reviewer", "approved"), ("Governance", "approved"),
                              ("API Security", "approved"), ("Tenant Admin", "approved")]),
    ]

    @pytest.mark.parametrize("current_stage,overall,raw_history", SNAPSHOTS)
    def test_single_current(self, derive, workflow_config, make_entry,
                            current_stage, overall, raw_history):
        """Test at most one approver in a chain is current."""
        history = [make_entry(stage, comment, day=i) for i, (stage, comment) in enumerate(raw_history)]
        chain = resolve_approvers(["Directory.Read.All"], config=workflow_config)
        statuses = [derive(a, current_stage, overall, history) for a in chain]
        assert statuses.count(ApproverStatus.CURRENT) <= 1

    @pytest.mark.parametrize("current_stage,overall,raw_history", SNAPSHOTS)
    def test_deterministic(self, derive, workflow_config, make_entry,
                           current_stage, overall, raw_history):
        """Test identical inputs give identical outputs."""
        history = [make_entry(stage, comment, day=i) for i, (stage, comment) in enumerate(raw_history)]
        chain = resolve_approvers(["Directory.Read.All"], config=workflow_config)
        first = [derive(a, current_stage, overall, history) for a in chain]
        second = [derive(a, current_stage, overall, history) for a in chain]
        assert first == second


class TestLatestDecision:
    """Test latest_decision helper."""

    def test_none_without_decision(self, markers, make_entry):
        """Test no decision entries gives None."""
        history = [make_entry("Reviewer", "note")]
        assert latest_decision("Reviewer", history, markers) is None

    def test_returns_last(self, markers, make_entry):
        """Test index of the most recent decision at the stage."""
        history = [
            make_entry("Reviewer", "approved"),
            make_entry("Governance", "approved"),
            make_entry("Reviewer", "denied"),
        ]
        assert latest_decision("Reviewer", history, markers) == (2, EntryKind.DENIAL)
