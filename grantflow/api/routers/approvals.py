"""Approval chain and progress endpoints.

Both endpoints are read-only: the caller posts the snapshot it holds and
gets back the derived view.
"""

from fastapi import APIRouter, Depends

from grantflow.api.deps import get_config
from grantflow.api.schemas import (
    ApproverOut,
    ChainRequest,
    ChainResponse,
    ErrorResponse,
    ProgressRequest,
    ProgressResponse,
    ProgressStep,
)
from grantflow.core.approval import approval_progress, resolve_approvers
from grantflow.core.catalog import WorkflowConfig

router = APIRouter(
    prefix="/approvals",
    tags=["approvals"],
    responses={422: {"model": ErrorResponse}},
)


@router.post("/chain", response_model=ChainResponse)
async def resolve_chain(
    body: ChainRequest,
    config: WorkflowConfig = Depends(get_config),
):
    """Ordered approvers required by a set of permissions."""
    approvers = resolve_approvers(
        body.permissions, config=config, skip_unknown=body.skip_unknown
    )
    return ChainResponse(
        approvers=[ApproverOut.from_definition(approver) for approver in approvers]
    )


@router.post("/progress", response_model=ProgressResponse)
async def get_progress(
    body: ProgressRequest,
    config: WorkflowConfig = Depends(get_config),
):
    """Per-approver status for one permission of a request."""
    approval = body.approval.to_status() if body.approval else None
    steps = approval_progress(body.permission, approval, config=config)
    return ProgressResponse(
        permission=body.permission,
        steps=[ProgressStep.from_progress(step) for step in steps] if steps is not None else None,
    )
