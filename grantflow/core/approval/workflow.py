"""Approval snapshot updates.

These functions are the only writers of PermissionApprovalStatus. Each one
returns a new snapshot with the history entry appended and current_stage and
status moved together, so a reader can never see a stage advance without
the decision that caused it.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, NamedTuple, Optional, Sequence, Set

from ...common.logger import get_logger
from ..catalog import ApproverDefinition, EntryKind, WorkflowConfig, get_workflow_config
from ..errors import InvalidDecision
from .states import HistoryEntry, PermissionApprovalStatus, RequestStatus

logger = get_logger("workflow")


class Action(str, Enum):
    """Actions that move an approval snapshot."""

    APPROVE = "approve"        # Current stage signs off
    DENY = "deny"              # Current stage refuses; workflow ends
    RESUBMIT = "resubmit"      # Denied request re-enters at the first stage
    IMPLEMENT = "implement"    # Approved grant has been applied


class ActionRule(NamedTuple):
    """Defines where an action is allowed."""
    from_status: RequestStatus
    action: Action


ACTION_RULES: list[ActionRule] = [
    ActionRule(RequestStatus.PENDING, Action.APPROVE),
    ActionRule(RequestStatus.PENDING, Action.DENY),
    ActionRule(RequestStatus.DENIED, Action.RESUBMIT),
    ActionRule(RequestStatus.APPROVED, Action.IMPLEMENT),
]

VALID_ACTIONS: Dict[RequestStatus, Set[Action]] = {}
for rule in ACTION_RULES:
    VALID_ACTIONS.setdefault(rule.from_status, set()).add(rule.action)

IMPLEMENTED_COMMENT = "Implemented"


def can_apply(status: RequestStatus, action: Action) -> bool:
    """Check if an action is valid from the given status."""
    return action in VALID_ACTIONS.get(status, set())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _check(approval: PermissionApprovalStatus, action: Action, stage: str) -> None:
    if not can_apply(approval.status, action):
        raise InvalidDecision(
            f"Cannot {action.value} a request that is {approval.status.value}",
            stage,
            approval.current_stage,
        )


def start_approval(
    chain: Sequence[ApproverDefinition],
    *,
    config: Optional[WorkflowConfig] = None,
) -> PermissionApprovalStatus:
    """Initial snapshot for a permission whose chain has just been resolved.

    An empty chain needs no sign-off and starts out approved.
    """
    config = config or get_workflow_config()
    if not chain:
        return PermissionApprovalStatus(
            current_stage=config.complete_stage, status=RequestStatus.APPROVED
        )
    return PermissionApprovalStatus(current_stage=chain[0].role)


def record_decision(
    approval: PermissionApprovalStatus,
    chain: Sequence[ApproverDefinition],
    stage: str,
    action: Action,
    *,
    comment: Optional[str] = None,
    actor: Optional[str] = None,
    date: Optional[datetime] = None,
    config: Optional[WorkflowConfig] = None,
) -> PermissionApprovalStatus:
    """
    Record an approval or denial by the current stage.

    Args:
        approval: Snapshot to advance
        chain: Resolved chain for the permission (pipeline order)
        stage: Role label of the acting approver
        action: Action.APPROVE or Action.DENY
        comment: Comment to log; defaults to the first configured marker for
            the decision and must otherwise be recognized as that decision
        actor: Identity of the acting approver
        date: Timestamp of the decision, now (UTC) by default

    Returns:
        The new snapshot

    Raises:
        InvalidDecision: If the request is not pending, ``stage`` is not its
            current stage, or ``comment`` does not record the decision
    """
    config = config or get_workflow_config()
    markers = config.markers

    if action is Action.APPROVE:
        expected, default_comment = EntryKind.APPROVAL, markers.approval[0]
    elif action is Action.DENY:
        expected, default_comment = EntryKind.DENIAL, markers.denial[0]
    else:
        raise InvalidDecision(
            f"{action.value} is not a stage decision", stage, approval.current_stage
        )

    _check(approval, action, stage)
    if stage != approval.current_stage:
        raise InvalidDecision(
            f"Stage {stage!r} cannot act; current stage is {approval.current_stage!r}",
            stage,
            approval.current_stage,
        )

    roles = [approver.role for approver in chain]
    if stage not in roles:
        raise InvalidDecision(
            f"Stage {stage!r} is not part of the approval chain",
            stage,
            approval.current_stage,
        )

    if comment is None:
        comment = default_comment
    elif markers.classify(comment) is not expected:
        raise InvalidDecision(
            f"Comment {comment!r} does not record a {expected.value}",
            stage,
            approval.current_stage,
        )

    if action is Action.DENY:
        next_stage, next_status = config.complete_stage, RequestStatus.DENIED
    else:
        position = roles.index(stage)
        if position + 1 < len(roles):
            next_stage, next_status = roles[position + 1], RequestStatus.PENDING
        else:
            next_stage, next_status = config.complete_stage, RequestStatus.APPROVED

    entry = HistoryEntry(stage=stage, date=date or _now(), comment=comment, actor=actor)
    logger.info(
        f"{stage} recorded {action.value}: {approval.current_stage} -> {next_stage} "
        f"({next_status.value})"
    )
    return PermissionApprovalStatus(
        current_stage=next_stage,
        status=next_status,
        history=approval.history + (entry,),
    )


def record_resubmission(
    approval: PermissionApprovalStatus,
    chain: Sequence[ApproverDefinition],
    *,
    actor: Optional[str] = None,
    date: Optional[datetime] = None,
    config: Optional[WorkflowConfig] = None,
) -> PermissionApprovalStatus:
    """Send a denied request back to the first stage of its chain.

    The logged entry carries the resubmission marker and is attributed to the
    stage the request re-enters. Earlier approvals stay in the history.
    """
    config = config or get_workflow_config()
    first_stage = chain[0].role if chain else config.complete_stage
    _check(approval, Action.RESUBMIT, first_stage)
    if not chain:
        raise InvalidDecision(
            "Cannot resubmit a request with an empty approval chain",
            first_stage,
            approval.current_stage,
        )

    entry = HistoryEntry(
        stage=first_stage,
        date=date or _now(),
        comment=config.markers.resubmission,
        actor=actor,
    )
    logger.info(f"Request resubmitted, re-entering at {first_stage}")
    return PermissionApprovalStatus(
        current_stage=first_stage,
        status=RequestStatus.PENDING,
        history=approval.history + (entry,),
    )


def mark_implemented(
    approval: PermissionApprovalStatus,
    *,
    actor: Optional[str] = None,
    date: Optional[datetime] = None,
    config: Optional[WorkflowConfig] = None,
) -> PermissionApprovalStatus:
    """Flag an approved grant as applied."""
    config = config or get_workflow_config()
    _check(approval, Action.IMPLEMENT, config.complete_stage)

    entry = HistoryEntry(
        stage=config.complete_stage,
        date=date or _now(),
        comment=IMPLEMENTED_COMMENT,
        actor=actor,
    )
    logger.info("Approved grant marked implemented")
    return PermissionApprovalStatus(
        current_stage=config.complete_stage,
        status=RequestStatus.IMPLEMENTED,
        history=approval.history + (entry,),
    )
