"""Approver chain resolution and stage lookup."""

from typing import Dict, Iterable, Optional, Tuple

from ...common.logger import get_logger
from ..catalog import ApproverDefinition, WorkflowConfig, get_workflow_config
from ..errors import UnknownPermission, UnknownStage

logger = get_logger("chain")


def resolve_approvers(
    permission_names: Iterable[str],
    *,
    config: Optional[WorkflowConfig] = None,
    skip_unknown: bool = False,
) -> Tuple[ApproverDefinition, ...]:
    """
    Resolve the approvers a set of permissions requires.

    Every permission is run through the policy table; the required stages of
    all permissions are merged (by approver uniqueId) and returned in pipeline
    order, which is the order callers compare against ``current_stage``.

    Args:
        permission_names: Requested permission names
        config: Workflow configuration, process-wide one by default
        skip_unknown: Drop names missing from the catalog instead of raising

    Returns:
        Approvers sorted by ``order`` ascending, without duplicates

    Raises:
        UnknownPermission: If a name is not in the catalog and
            ``skip_unknown`` is False
    """
    config = config or get_workflow_config()

    required: Dict[str, ApproverDefinition] = {}
    for name in permission_names:
        try:
            permission = config.catalog.get(name)
        except UnknownPermission:
            if not skip_unknown:
                raise
            logger.warning(f"Dropping unknown permission from chain: {name}")
            continue

        for stage in config.policy.required_stages(permission):
            approver = config.directory.for_stage(stage)
            required[approver.unique_id] = approver

    return tuple(sorted(required.values(), key=lambda a: a.order))


def approver_for_stage(
    stage: str, *, config: Optional[WorkflowConfig] = None
) -> ApproverDefinition:
    """Get the approver bound to a stage label.

    Raises:
        UnknownStage: If no approver is configured for the stage
    """
    config = config or get_workflow_config()
    return config.directory.for_stage(stage)


def current_approver(
    stage: Optional[str], *, config: Optional[WorkflowConfig] = None
) -> Optional[ApproverDefinition]:
    """Approver to display for a current stage, or None when there is nobody to show."""
    config = config or get_workflow_config()
    if not stage or stage == config.complete_stage:
        return None
    try:
        return approver_for_stage(stage, config=config)
    except UnknownStage:
        logger.debug(f"No approver configured for stage {stage!r}")
        return None
