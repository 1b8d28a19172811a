"""Resubmission counting for request version tags."""

from typing import Iterable, Optional

from ..catalog import CommentMarkers, get_workflow_config
from .states import HistoryEntry


def count_revisions(
    history: Iterable[HistoryEntry],
    *,
    markers: Optional[CommentMarkers] = None,
) -> int:
    """Number of resubmission entries anywhere in the history."""
    markers = markers or get_workflow_config().markers
    return sum(1 for entry in history if markers.is_resubmission(entry.comment))


def revision_suffix(count: int) -> str:
    """Version tag for a revision count: ``-v2`` for 2, empty for 0."""
    return f"-v{count}" if count > 0 else ""


def revision_label(
    history: Iterable[HistoryEntry],
    *,
    markers: Optional[CommentMarkers] = None,
) -> str:
    return revision_suffix(count_revisions(history, markers=markers))
