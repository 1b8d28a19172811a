"""Approval workflow module for grantflow.

Resolves approver chains, derives per-approver status from the audit
history, counts resubmissions and produces the only valid updates of an
approval snapshot.
"""

from .states import (
    ApproverStatus,
    RequestStatus,
    HistoryEntry,
    PermissionApprovalStatus,
    Request,
    LOCKED_STATES,
    FINISHED_STATES,
)
from .chain import resolve_approvers, approver_for_stage, current_approver
from .status import derive_status
from .revisions import count_revisions, revision_suffix, revision_label
from .workflow import (
    Action,
    can_apply,
    start_approval,
    record_decision,
    record_resubmission,
    mark_implemented,
)
from .views import (
    ApproverProgress,
    RequestSummary,
    approval_progress,
    request_summary,
    status_label,
    is_permission_locked,
    search_permissions,
)

__all__ = [
    "ApproverStatus",
    "RequestStatus",
    "HistoryEntry",
    "PermissionApprovalStatus",
    "Request",
    "LOCKED_STATES",
    "FINISHED_STATES",
    "resolve_approvers",
    "approver_for_stage",
    "current_approver",
    "derive_status",
    "count_revisions",
    "revision_suffix",
    "revision_label",
    "Action",
    "can_apply",
    "start_approval",
    "record_decision",
    "record_resubmission",
    "mark_implemented",
    "ApproverProgress",
    "RequestSummary",
    "approval_progress",
    "request_summary",
    "status_label",
    "is_permission_locked",
    "search_permissions",
]
