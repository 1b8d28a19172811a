"""Derived views for request list and detail screens.

Presentation code renders these values; it never re-implements the rules.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Mapping, Optional, Tuple

from ..catalog import ApproverDefinition, PermissionDefinition, WorkflowConfig, get_workflow_config
from .chain import current_approver, resolve_approvers
from .revisions import count_revisions, revision_suffix
from .states import (
    FINISHED_STATES,
    LOCKED_STATES,
    ApproverStatus,
    PermissionApprovalStatus,
    Request,
    RequestStatus,
)
from .status import derive_status

STATUS_LABELS = {
    RequestStatus.PENDING: "Pending",
    RequestStatus.APPROVED: "Approved",
    RequestStatus.DENIED: "Denied",
    RequestStatus.IMPLEMENTED: "Implemented",
}


def status_label(status: Any) -> str:
    """Display label for a request status; unknown values read as Pending."""
    return STATUS_LABELS[RequestStatus.parse(status)]


@dataclass(frozen=True)
class ApproverProgress:
    """One step of a permission's approval progress indicator."""

    approver: ApproverDefinition
    status: ApproverStatus
    acted_on: Optional[datetime] = None


def approval_progress(
    permission: str,
    approval: Optional[PermissionApprovalStatus],
    *,
    config: Optional[WorkflowConfig] = None,
) -> Optional[List[ApproverProgress]]:
    """
    Status of every approver in a permission's chain.

    Returns None when the request carries no approval status for the
    permission. ``acted_on`` is the date of the first history entry logged
    at the approver's stage.

    Raises:
        UnknownPermission: If the permission is not in the catalog
    """
    if approval is None:
        return None
    config = config or get_workflow_config()

    progress = []
    for approver in resolve_approvers([permission], config=config):
        first_entry = next(
            (entry for entry in approval.history if entry.stage == approver.role),
            None,
        )
        progress.append(
            ApproverProgress(
                approver=approver,
                status=derive_status(
                    approver,
                    approval.current_stage,
                    approval.status,
                    approval.history,
                    markers=config.markers,
                ),
                acted_on=first_entry.date if first_entry else None,
            )
        )
    return progress


@dataclass(frozen=True)
class RequestSummary:
    """Row of the request list."""

    id: str
    version: str
    revision_count: int
    status: RequestStatus
    status_label: str
    current_approver: Optional[ApproverDefinition]
    submitted_date: Optional[datetime]
    permission_count: int

    @property
    def display_id(self) -> str:
        return f"{self.id}{self.version}"


def request_summary(
    request: Request, *, config: Optional[WorkflowConfig] = None
) -> RequestSummary:
    """List-row view of a request.

    Approved, denied and implemented requests show no current approver,
    even when ``current_stage`` still names a configured role.
    """
    config = config or get_workflow_config()
    revisions = count_revisions(request.history, markers=config.markers)
    # Nobody is left to act on a finished request, whatever stage it was left at
    if request.status in FINISHED_STATES:
        approver = None
    else:
        approver = current_approver(request.current_stage, config=config)
    return RequestSummary(
        id=request.id,
        version=revision_suffix(revisions),
        revision_count=revisions,
        status=request.status,
        status_label=status_label(request.status),
        current_approver=approver,
        submitted_date=request.submitted_date,
        permission_count=len(request.permissions),
    )


def is_permission_locked(
    existing_approvals: Optional[Mapping[str, Any]], permission: str
) -> bool:
    """Whether a permission already on a request may no longer be removed.

    Pending, approved and implemented permissions are locked; denied or
    absent ones can still be edited. Values may be snapshots or plain
    ``{"status": ...}`` mappings. Plain status strings are compared
    case-insensitively ("Approved" locks like "approved").
    """
    if not existing_approvals or permission not in existing_approvals:
        return False
    existing = existing_approvals[permission]
    raw = existing.get("status") if isinstance(existing, Mapping) else existing.status
    value = raw.value if isinstance(raw, RequestStatus) else str(raw)
    # Unrecognized statuses stay editable, so no RequestStatus.parse here
    return value.lower() in {state.value for state in LOCKED_STATES}


def search_permissions(
    query: str = "", *, config: Optional[WorkflowConfig] = None
) -> Tuple[PermissionDefinition, ...]:
    """Catalog entries whose name or description contains ``query`` (any case)."""
    config = config or get_workflow_config()
    if not query:
        return tuple(config.catalog)
    return tuple(config.catalog.search(query))
