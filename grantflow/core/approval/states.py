"""Approval snapshot types and status vocabularies.

A request holds one PermissionApprovalStatus per requested permission:

    current_stage   role label of the approver whose turn it is,
                    or the completion sentinel ("Done")
    status          overall outcome of that permission
    history         append-only audit log, oldest first

Request status lifecycle:

    ┌─────────┐  approve (last stage)  ┌──────────┐  implement  ┌─────────────┐
    │ PENDING │───────────────────────►│ APPROVED │────────────►│ IMPLEMENTED │
    └──┬───▲──┘                        └──────────┘             └─────────────┘
       │   │
  deny │   │ resubmit
    ┌──▼───┴─┐
    │ DENIED │
    └────────┘

Approving any stage but the last keeps the request PENDING and moves
current_stage to the next stage of the chain.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Tuple


class ApproverStatus(str, Enum):
    """Display status of one approver within a chain."""

    APPROVED = "approved"   # Acted and approved (sticky)
    DENIED = "denied"       # Caused the request's denial
    CURRENT = "current"     # Their turn
    PENDING = "pending"     # Not reached


class RequestStatus(str, Enum):
    """Overall outcome of a permission request."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    IMPLEMENTED = "implemented"

    @classmethod
    def parse(cls, value: Any) -> "RequestStatus":
        """Case-insensitive parse; anything unrecognized reads as PENDING."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.PENDING


# Existing approvals in these states cannot be removed from a request
LOCKED_STATES: FrozenSet[RequestStatus] = frozenset({
    RequestStatus.PENDING,
    RequestStatus.APPROVED,
    RequestStatus.IMPLEMENTED,
})

# No approver is left to act
FINISHED_STATES: FrozenSet[RequestStatus] = frozenset({
    RequestStatus.APPROVED,
    RequestStatus.DENIED,
    RequestStatus.IMPLEMENTED,
})


@dataclass(frozen=True)
class HistoryEntry:
    """One audit log line."""

    stage: str
    date: datetime
    comment: str = ""
    actor: Optional[str] = None


@dataclass(frozen=True)
class PermissionApprovalStatus:
    """Approval state of one permission on one request.

    Instances are snapshots. New snapshots are produced only by the functions
    in ``grantflow.core.approval.workflow``, which append the history entry and
    move ``current_stage``/``status`` in a single step.
    """

    current_stage: str
    status: RequestStatus = RequestStatus.PENDING
    history: Tuple[HistoryEntry, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "status", RequestStatus.parse(self.status))
        object.__setattr__(self, "history", tuple(self.history))


@dataclass(frozen=True)
class Request:
    """Read-only view of an externally owned access request."""

    id: str
    permissions: Tuple[str, ...] = ()
    permission_approvals: Mapping[str, PermissionApprovalStatus] = field(
        default_factory=dict
    )
    status: RequestStatus = RequestStatus.PENDING
    current_stage: Optional[str] = None
    history: Tuple[HistoryEntry, ...] = ()
    submitted_date: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "permissions", tuple(self.permissions))
        object.__setattr__(
            self,
            "permission_approvals",
            MappingProxyType(dict(self.permission_approvals)),
        )
        object.__setattr__(self, "status", RequestStatus.parse(self.status))
        object.__setattr__(self, "history", tuple(self.history))
