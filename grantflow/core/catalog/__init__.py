"""Static workflow configuration: permissions, approvers, policy and markers.

Everything here is loaded once at startup and is read-only afterwards.
"""

from .permissions import PermissionType, PermissionDefinition, PermissionCatalog
from .approvers import ApproverDefinition, ApproverDirectory
from .policy import PolicyRule, PolicyTable
from .markers import CommentMarkers, EntryKind, MatchMode, RESUBMISSION_MARKER
from .loader import (
    WorkflowConfig,
    get_workflow_config,
    load_workflow_config,
    parse_workflow_config,
)

__all__ = [
    "PermissionType",
    "PermissionDefinition",
    "PermissionCatalog",
    "ApproverDefinition",
    "ApproverDirectory",
    "PolicyRule",
    "PolicyTable",
    "CommentMarkers",
    "EntryKind",
    "MatchMode",
    "RESUBMISSION_MARKER",
    "WorkflowConfig",
    "get_workflow_config",
    "load_workflow_config",
    "parse_workflow_config",
]
