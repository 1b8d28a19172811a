"""Workflow configuration loading.

Builds the permission catalog, approver directory, policy table and comment
markers from plain dictionaries (built-in defaults or a YAML file) and
validates them once. Any inconsistency raises ConfigurationError here, so
per-request code never has to check configuration.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ...common.config import load_config
from ...common.logger import get_logger
from ..config import get_settings
from ..errors import ConfigurationError
from .approvers import ApproverDefinition, ApproverDirectory
from .defaults import DEFAULT_WORKFLOW_CONFIG
from .markers import CommentMarkers, MatchMode
from .permissions import PermissionCatalog, PermissionDefinition, PermissionType
from .policy import PolicyRule, PolicyTable

logger = get_logger("config")

# YAML condition key -> PolicyRule field
_CONDITION_FIELDS = {
    "type": "permission_type",
    "glr": "glr",
    "apiScan": "api_scan",
    "asa": "asa",
}


@dataclass(frozen=True)
class WorkflowConfig:
    """Everything the engine needs, validated and immutable."""

    catalog: PermissionCatalog
    directory: ApproverDirectory
    policy: PolicyTable
    markers: CommentMarkers
    complete_stage: str


def _section(config_dict: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    """Entries of a list section, each checked to be a mapping."""
    entries = config_dict[key]
    if not isinstance(entries, list):
        raise ConfigurationError(
            f"'{key}' must be a list, got {type(entries).__name__}"
        )
    for entry in entries:
        if not isinstance(entry, dict):
            raise ConfigurationError(f"{key} entry must be a mapping: {entry!r}")
    return entries


def _require(entry: Dict[str, Any], key: str, section: str) -> Any:
    if key not in entry or entry[key] in (None, ""):
        raise ConfigurationError(f"{section} entry is missing '{key}': {entry!r}")
    return entry[key]


def _parse_flag(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"Flag '{key}' must be true or false, got {value!r}")
    return value


def _parse_permission_type(value: Any) -> PermissionType:
    try:
        return PermissionType(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Unknown permission type {value!r}; expected one of "
            f"{[t.value for t in PermissionType]}"
        ) from None


def parse_permission(entry: Dict[str, Any]) -> PermissionDefinition:
    """Parse a catalog entry. Accepts ``permission`` or ``name`` as the key."""
    name = entry.get("permission") or entry.get("name")
    if not name:
        raise ConfigurationError(f"permissions entry is missing 'permission': {entry!r}")

    return PermissionDefinition(
        name=name,
        type=_parse_permission_type(_require(entry, "type", "permissions")),
        description=entry.get("description", ""),
        glr=_parse_flag(entry.get("glr", False), "glr"),
        api_scan=_parse_flag(entry.get("apiScan", False), "apiScan"),
        asa=_parse_flag(entry.get("asa", False), "asa"),
    )


def parse_approver(entry: Dict[str, Any]) -> ApproverDefinition:
    order = _require(entry, "order", "approvers")
    if isinstance(order, bool) or not isinstance(order, int):
        raise ConfigurationError(f"Approver order must be an integer, got {order!r}")

    return ApproverDefinition(
        unique_id=str(_require(entry, "uniqueId", "approvers")),
        role=_require(entry, "role", "approvers"),
        name=_require(entry, "name", "approvers"),
        order=order,
    )


def parse_policy_rule(entry: Dict[str, Any]) -> PolicyRule:
    """Parse a policy row: ``{stage: ..., when: {type|glr|apiScan|asa: ...}}``."""
    stage = _require(entry, "stage", "policy")
    conditions = entry.get("when") or {}
    if not isinstance(conditions, dict):
        raise ConfigurationError(
            f"Policy rule for {stage!r} needs a mapping of conditions, got {conditions!r}"
        )

    unknown = set(conditions) - set(_CONDITION_FIELDS)
    if unknown:
        raise ConfigurationError(
            f"Policy rule for {stage!r} has unknown conditions: {sorted(unknown)}"
        )

    fields: Dict[str, Any] = {}
    for key, value in conditions.items():
        if key == "type":
            fields["permission_type"] = _parse_permission_type(value)
        else:
            fields[_CONDITION_FIELDS[key]] = _parse_flag(value, key)

    return PolicyRule(stage=stage, **fields)


def _marker_list(value: Any, key: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(marker, str) and marker for marker in value
    ):
        raise ConfigurationError(
            f"Marker '{key}' must be a string or a list of strings, got {value!r}"
        )
    return tuple(value)


def parse_markers(entry: Dict[str, Any]) -> CommentMarkers:
    try:
        match_mode = MatchMode(entry.get("match_mode", MatchMode.CONTAINS.value))
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Unknown marker match_mode: {entry.get('match_mode')!r}"
        ) from None

    defaults = CommentMarkers()
    resubmission = entry.get("resubmission", defaults.resubmission)
    if not isinstance(resubmission, str):
        raise ConfigurationError(
            f"Marker 'resubmission' must be a string, got {resubmission!r}"
        )
    return CommentMarkers(
        resubmission=resubmission,
        approval=_marker_list(entry.get("approval", defaults.approval), "approval"),
        denial=_marker_list(entry.get("denial", defaults.denial), "denial"),
        match_mode=match_mode,
    )


def parse_workflow_config(config_dict: Dict[str, Any]) -> WorkflowConfig:
    """Build a validated WorkflowConfig.

    Sections missing from ``config_dict`` fall back to the built-in defaults.

    Raises:
        ConfigurationError: On any invalid or inconsistent entry
    """
    merged = {**DEFAULT_WORKFLOW_CONFIG, **config_dict}

    catalog = PermissionCatalog(parse_permission(p) for p in _section(merged, "permissions"))
    directory = ApproverDirectory(parse_approver(a) for a in _section(merged, "approvers"))
    policy = PolicyTable((parse_policy_rule(r) for r in _section(merged, "policy")), directory)
    marker_section = merged["markers"] or {}
    if not isinstance(marker_section, dict):
        raise ConfigurationError(f"'markers' must be a mapping, got {marker_section!r}")
    markers = parse_markers(marker_section)

    complete_stage = merged["complete_stage"]
    if not complete_stage or not isinstance(complete_stage, str):
        raise ConfigurationError("complete_stage must be a non-empty string")
    if complete_stage in directory:
        raise ConfigurationError(
            f"complete_stage {complete_stage!r} collides with an approver role"
        )

    return WorkflowConfig(
        catalog=catalog,
        directory=directory,
        policy=policy,
        markers=markers,
        complete_stage=complete_stage,
    )


def load_workflow_config(config_path: Optional[Union[str, Path]] = None) -> WorkflowConfig:
    """Load workflow configuration from YAML, or the defaults when no path is given."""
    if config_path is None:
        config = parse_workflow_config({})
        source = "built-in defaults"
    else:
        try:
            raw = load_config(config_path)
        except (FileNotFoundError, TypeError, yaml.YAMLError) as e:
            raise ConfigurationError(str(e)) from e
        config = parse_workflow_config(raw)
        source = str(config_path)

    logger.info(
        f"Loaded workflow configuration from {source}: "
        f"{len(config.catalog)} permissions, {len(config.directory)} stages, "
        f"{len(config.policy.rules)} policy rules"
    )
    return config


@lru_cache
def get_workflow_config() -> WorkflowConfig:
    """Process-wide workflow configuration, loaded on first use."""
    return load_workflow_config(get_settings().workflow_config_path)
