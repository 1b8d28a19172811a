"""Per-approver status derivation.

An approver's status is computed from three request fields, never stored:

    1. denied   - the request is denied and this stage's latest decision is
                  the denial that ended it (no approval was logged after it)
    2. approved - this stage's latest decision is an approval
    3. current  - this stage is the request's current stage
    4. pending  - anything else

Rules are evaluated in that order. Approvals are sticky: they survive later
stages and resubmission cycles until a newer decision at the same stage
replaces them. Denial and "current" are recomputed from the live
current_stage/status pair, so a denied request shows every stage it never
reached as pending.
"""

from typing import Optional, Sequence, Tuple, Union

from ..catalog import ApproverDefinition, CommentMarkers, EntryKind, get_workflow_config
from .states import ApproverStatus, HistoryEntry, RequestStatus

DECISION_KINDS = frozenset({EntryKind.APPROVAL, EntryKind.DENIAL})


def latest_decision(
    role: str,
    history: Sequence[HistoryEntry],
    markers: CommentMarkers,
) -> Optional[Tuple[int, EntryKind]]:
    """Index and kind of the most recent decision logged at a stage."""
    found = None
    for index, entry in enumerate(history):
        if entry.stage != role:
            continue
        kind = markers.classify(entry.comment)
        if kind in DECISION_KINDS:
            found = (index, kind)
    return found


def _approved_after(
    index: int,
    history: Sequence[HistoryEntry],
    markers: CommentMarkers,
) -> bool:
    return any(
        markers.classify(entry.comment) is EntryKind.APPROVAL
        for entry in history[index + 1:]
    )


def derive_status(
    approver: ApproverDefinition,
    current_stage: Optional[str],
    overall_status: Union[RequestStatus, str],
    history: Sequence[HistoryEntry],
    *,
    markers: Optional[CommentMarkers] = None,
) -> ApproverStatus:
    """
    Compute one approver's display status.

    Args:
        approver: Approver from the resolved chain
        current_stage: Role label whose turn it is, or the completion sentinel
        overall_status: Outcome of the permission request
        history: Audit log, oldest first
        markers: Comment markers, process-wide ones by default

    Returns:
        The approver's ApproverStatus
    """
    markers = markers or get_workflow_config().markers
    overall = RequestStatus.parse(overall_status)

    decision = latest_decision(approver.role, history, markers)
    if decision is not None:
        index, kind = decision
        if (
            kind is EntryKind.DENIAL
            and overall is RequestStatus.DENIED
            and not _approved_after(index, history, markers)
        ):
            return ApproverStatus.DENIED
        if kind is EntryKind.APPROVAL:
            return ApproverStatus.APPROVED

    if approver.role == current_stage:
        return ApproverStatus.CURRENT

    return ApproverStatus.PENDING
