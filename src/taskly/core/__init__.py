"""Functional core - pure business logic with no I/O."""

from .tasks import Task, filter_active, filter_overdue, filter_due_soon, select_candidates
from .prioritizer import (
    QUADRANT_LABELS,
    RankedTask,
    rank,
    ordered_tasks,
    group_by_quadrant,
    apply_ordering,
)
from .report import format_ranked_line, format_matrix, ranked_to_dict

__all__ = [
    # Tasks
    "Task",
    "filter_active",
    "filter_overdue",
    "filter_due_soon",
    "select_candidates",
    # Prioritizer
    "QUADRANT_LABELS",
    "RankedTask",
    "rank",
    "ordered_tasks",
    "group_by_quadrant",
    "apply_ordering",
    # Report
    "format_ranked_line",
    "format_matrix",
    "ranked_to_dict",
]
