"""Approver directory.

The directory is the global approval pipeline: every stage is bound to one
approver and has a distinct ``order`` that fixes its position in any chain.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from ..errors import ConfigurationError, UnknownStage


@dataclass(frozen=True)
class ApproverDefinition:
    """One stage of the approval pipeline."""

    unique_id: str
    role: str    # Stage label, referenced by history entries and current_stage
    name: str    # Display identity of the approver
    order: int


class ApproverDirectory:
    """Read-only, order-sorted registry of approval stages."""

    def __init__(self, approvers: Iterable[ApproverDefinition]):
        by_id = {}
        by_role = {}
        by_order = {}
        for approver in approvers:
            if approver.unique_id in by_id:
                raise ConfigurationError(
                    f"Duplicate approver uniqueId: {approver.unique_id}"
                )
            if approver.role in by_role:
                raise ConfigurationError(f"Duplicate approver role: {approver.role}")
            if approver.order in by_order:
                raise ConfigurationError(
                    f"Approvers {by_order[approver.order].role!r} and "
                    f"{approver.role!r} share order {approver.order}"
                )
            by_id[approver.unique_id] = approver
            by_role[approver.role] = approver
            by_order[approver.order] = approver

        self._ordered: Tuple[ApproverDefinition, ...] = tuple(
            sorted(by_id.values(), key=lambda a: a.order)
        )
        self._by_id: Mapping[str, ApproverDefinition] = MappingProxyType(by_id)
        self._by_role: Mapping[str, ApproverDefinition] = MappingProxyType(by_role)

    def __iter__(self):
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, role: object) -> bool:
        return role in self._by_role

    @property
    def ordered(self) -> Tuple[ApproverDefinition, ...]:
        """All approvers in pipeline order."""
        return self._ordered

    def for_stage(self, stage: str) -> ApproverDefinition:
        """Get the approver bound to a stage label.

        Raises:
            UnknownStage: If no approver has this role
        """
        try:
            return self._by_role[stage]
        except KeyError:
            raise UnknownStage(stage) from None

    def by_id(self, unique_id: str) -> Optional[ApproverDefinition]:
        return self._by_id.get(unique_id)
