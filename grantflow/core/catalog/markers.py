"""Recognized history comment markers.

History entries carry free-text comments. A few comment texts are markers
that the engine interprets: approvals, denials and resubmissions. Matching is
either anywhere in the comment (``contains``) or whole-comment (``exact``).
In ``contains`` mode decision markers only match as whole words, so
"disapproved" never reads as "approved".
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..errors import ConfigurationError


RESUBMISSION_MARKER = "Request resubmitted for approval"

# Prefixes that turn an approval marker into a refusal
_NEGATION = r"(?:not\s+|dis|un)"


class MatchMode(str, Enum):
    CONTAINS = "contains"
    EXACT = "exact"


class EntryKind(str, Enum):
    """What a history entry records, as read from its comment."""

    APPROVAL = "approval"
    DENIAL = "denial"
    RESUBMISSION = "resubmission"
    NOTE = "note"        # Free text with no recognized marker


@dataclass(frozen=True)
class CommentMarkers:
    """Marker texts and the rule used to match them against comments.

    Resubmission matching is case-sensitive, as the audit log writes the
    marker verbatim. Decision markers are compared case-insensitively.
    """

    resubmission: str = RESUBMISSION_MARKER
    approval: Tuple[str, ...] = ("approved",)
    denial: Tuple[str, ...] = ("denied", "rejected")
    match_mode: MatchMode = MatchMode.CONTAINS

    def __post_init__(self):
        if not self.resubmission:
            raise ConfigurationError("Resubmission marker must not be empty")
        if not self.approval or not self.denial:
            raise ConfigurationError("Approval and denial markers must not be empty")

    def _match(self, marker: str, comment: str) -> bool:
        if self.match_mode is MatchMode.EXACT:
            return comment.strip() == marker
        return marker in comment

    def _match_decision(self, marker: str, comment: str, negated: bool = False) -> bool:
        if self.match_mode is MatchMode.EXACT:
            return not negated and comment.strip().lower() == marker.lower()
        prefix = _NEGATION if negated else ""
        pattern = rf"(?<!\w){prefix}{re.escape(marker)}(?!\w)"
        return re.search(pattern, comment, re.IGNORECASE) is not None

    def is_resubmission(self, comment: Optional[str]) -> bool:
        if not comment:
            return False
        return self._match(self.resubmission, comment)

    def classify(self, comment: Optional[str]) -> EntryKind:
        """Classify a comment.

        Denial wins over approval ("approval denied"), and a negated approval
        ("not approved", "disapproved", "unapproved") is a denial.
        """
        if not comment:
            return EntryKind.NOTE
        if self.is_resubmission(comment):
            return EntryKind.RESUBMISSION
        if any(self._match_decision(marker, comment) for marker in self.denial):
            return EntryKind.DENIAL
        if any(self._match_decision(marker, comment, negated=True) for marker in self.approval):
            return EntryKind.DENIAL
        if any(self._match_decision(marker, comment) for marker in self.approval):
            return EntryKind.APPROVAL
        return EntryKind.NOTE
