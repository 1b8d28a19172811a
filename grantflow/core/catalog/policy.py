"""Approval policy table.

Each row names a stage and the permission attributes that make the stage
mandatory. Unset conditions match anything, so a row with no conditions is
the baseline that every permission goes through.

Default policy:

    stage          condition
    -------------  ----------------------
    Reviewer       (always)
    Governance     glr = true
    API Security   apiScan = true
    ASA            asa = true
    Tenant Admin   type = Application
"""

from typing import FrozenSet, Iterable, NamedTuple, Optional, Tuple

from ..errors import ConfigurationError
from .approvers import ApproverDirectory
from .permissions import PermissionDefinition, PermissionType


class PolicyRule(NamedTuple):
    """A stage requirement and the permission attributes that trigger it."""
    stage: str
    permission_type: Optional[PermissionType] = None
    glr: Optional[bool] = None
    api_scan: Optional[bool] = None
    asa: Optional[bool] = None

    @property
    def is_baseline(self) -> bool:
        return (
            self.permission_type is None
            and self.glr is None
            and self.api_scan is None
            and self.asa is None
        )

    def matches(self, permission: PermissionDefinition) -> bool:
        """Check whether a permission satisfies every condition of this rule."""
        if self.permission_type is not None and permission.type != self.permission_type:
            return False
        if self.glr is not None and permission.glr != self.glr:
            return False
        if self.api_scan is not None and permission.api_scan != self.api_scan:
            return False
        if self.asa is not None and permission.asa != self.asa:
            return False
        return True


class PolicyTable:
    """Validated, immutable set of policy rules bound to a directory."""

    def __init__(self, rules: Iterable[PolicyRule], directory: ApproverDirectory):
        self._rules: Tuple[PolicyRule, ...] = tuple(rules)
        for rule in self._rules:
            if rule.stage not in directory:
                raise ConfigurationError(
                    f"Policy rule references undefined stage: {rule.stage}"
                )
        self._directory = directory

    @property
    def rules(self) -> Tuple[PolicyRule, ...]:
        return self._rules

    def required_stages(self, permission: PermissionDefinition) -> FrozenSet[str]:
        """Stage labels a single permission must pass through."""
        return frozenset(
            rule.stage for rule in self._rules if rule.matches(permission)
        )
