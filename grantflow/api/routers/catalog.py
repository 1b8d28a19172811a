"""Permission catalog and approver directory endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from grantflow.api.deps import get_config
from grantflow.api.schemas import ApproverOut, PermissionOut
from grantflow.core.approval import search_permissions
from grantflow.core.catalog import WorkflowConfig

router = APIRouter(tags=["catalog"])


@router.get("/permissions", response_model=List[PermissionOut])
async def list_permissions(
    search: Optional[str] = Query(None, description="Filter by name or description"),
    config: WorkflowConfig = Depends(get_config),
):
    """List catalog permissions, optionally filtered."""
    return [
        PermissionOut.from_definition(definition)
        for definition in search_permissions(search or "", config=config)
    ]


@router.get("/approvers", response_model=List[ApproverOut])
async def list_approvers(config: WorkflowConfig = Depends(get_config)):
    """List approval stages in pipeline order."""
    return [ApproverOut.from_definition(approver) for approver in config.directory]
