"""Request list endpoints."""

from fastapi import APIRouter, Depends

from grantflow.api.deps import get_config
from grantflow.api.schemas import SummaryRequest, SummaryResponse
from grantflow.core.approval import request_summary
from grantflow.core.catalog import WorkflowConfig

router = APIRouter(prefix="/requests", tags=["requests"])


@router.post("/summary", response_model=SummaryResponse)
async def summarize_request(
    body: SummaryRequest,
    config: WorkflowConfig = Depends(get_config),
):
    """List-row view of a request: version tag, status label, current approver."""
    summary = request_summary(body.request.to_request(), config=config)
    return SummaryResponse.from_summary(summary)
