"""Request and response schemas for the grantflow API.

Clients post request snapshots in the camelCase shape the UI stores them in;
the schemas convert them into the engine's immutable types.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from grantflow.core.approval import (
    ApproverProgress,
    HistoryEntry,
    PermissionApprovalStatus,
    Request,
    RequestSummary,
)
from grantflow.core.catalog import ApproverDefinition, PermissionDefinition


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Snapshots (input)
class HistoryEntryIn(CamelModel):
    stage: str
    date: datetime
    comment: str = ""
    actor: Optional[str] = None

    def to_entry(self) -> HistoryEntry:
        return HistoryEntry(
            stage=self.stage, date=self.date, comment=self.comment, actor=self.actor
        )


class ApprovalStatusIn(CamelModel):
    current_stage: str
    status: str = "pending"
    history: List[HistoryEntryIn] = []

    def to_status(self) -> PermissionApprovalStatus:
        return PermissionApprovalStatus(
            current_stage=self.current_stage,
            status=self.status,
            history=tuple(h.to_entry() for h in self.history),
        )


class RequestIn(CamelModel):
    id: str
    permissions: List[str] = []
    permission_approvals: Dict[str, ApprovalStatusIn] = {}
    status: str = "pending"
    current_stage: Optional[str] = None
    history: List[HistoryEntryIn] = []
    submitted_date: Optional[datetime] = None

    def to_request(self) -> Request:
        return Request(
            id=self.id,
            permissions=tuple(self.permissions),
            permission_approvals={
                name: approval.to_status()
                for name, approval in self.permission_approvals.items()
            },
            status=self.status,
            current_stage=self.current_stage,
            history=tuple(h.to_entry() for h in self.history),
            submitted_date=self.submitted_date,
        )


class ChainRequest(CamelModel):
    permissions: List[str] = Field(..., min_length=1)
    skip_unknown: bool = False


class ProgressRequest(CamelModel):
    permission: str
    approval: Optional[ApprovalStatusIn] = None


class SummaryRequest(CamelModel):
    request: RequestIn


# Responses
class ApproverOut(CamelModel):
    unique_id: str
    role: str
    name: str
    order: int

    @classmethod
    def from_definition(cls, approver: ApproverDefinition) -> "ApproverOut":
        return cls(
            unique_id=approver.unique_id,
            role=approver.role,
            name=approver.name,
            order=approver.order,
        )


class PermissionOut(CamelModel):
    permission: str
    type: str
    description: str
    glr: bool
    api_scan: bool
    asa: bool

    @classmethod
    def from_definition(cls, definition: PermissionDefinition) -> "PermissionOut":
        return cls(
            permission=definition.name,
            type=definition.type.value,
            description=definition.description,
            glr=definition.glr,
            api_scan=definition.api_scan,
            asa=definition.asa,
        )


class ChainResponse(BaseModel):
    approvers: List[ApproverOut]


class ProgressStep(CamelModel):
    approver: ApproverOut
    status: str
    acted_on: Optional[datetime] = None

    @classmethod
    def from_progress(cls, step: ApproverProgress) -> "ProgressStep":
        return cls(
            approver=ApproverOut.from_definition(step.approver),
            status=step.status.value,
            acted_on=step.acted_on,
        )


class ProgressResponse(BaseModel):
    permission: str
    steps: Optional[List[ProgressStep]] = None


class SummaryResponse(CamelModel):
    id: str
    display_id: str
    version: str
    revision_count: int
    status: str
    status_label: str
    current_approver: Optional[ApproverOut] = None
    submitted_date: Optional[datetime] = None
    permission_count: int

    @classmethod
    def from_summary(cls, summary: RequestSummary) -> "SummaryResponse":
        approver = summary.current_approver
        return cls(
            id=summary.id,
            display_id=summary.display_id,
            version=summary.version,
            revision_count=summary.revision_count,
            status=summary.status.value,
            status_label=summary.status_label,
            current_approver=ApproverOut.from_definition(approver) if approver else None,
            submitted_date=summary.submitted_date,
            permission_count=summary.permission_count,
        )


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    permission: Optional[str] = None
