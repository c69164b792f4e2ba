"""Eisenhower-matrix task prioritization - pure, no I/O.

Each task gets an importance rank (1-3) and an urgency score derived from how
close its due date is, amplified by its priority. Those two axes pick a
quadrant, and a composite score orders tasks: quadrant first, then urgency,
then importance, then earlier due date.

Q1: Important + Urgent (Do First)
Q2: Important + Not Urgent (Schedule)
Q3: Not Important + Urgent (Delegate)
Q4: Not Important + Not Urgent (Eliminate)
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from .tasks import Task

logger = logging.getLogger(__name__)

QUADRANT_LABELS = {1: "Do First", 2: "Schedule", 3: "Delegate", 4: "Eliminate"}

IMPORTANT_THRESHOLD = 2
URGENT_THRESHOLD = 5
PRIORITY_WEIGHT = 0.8
NO_DUE_DATE = 99991231

_LEVELS = {"high": 3, "medium": 2}


@dataclass(frozen=True)
class RankedTask:
    """A task with its quadrant and composite sort score."""

    quadrant: int
    score: float
    task: Task
    urgency: float = 0.0
    importance: int = 1

    @property
    def label(self) -> str:
        return QUADRANT_LABELS[self.quadrant]


def importance_rank(task: Task) -> int:
    """high=3, medium=2, anything else=1."""
    return _LEVELS.get(task.importance, 1) if isinstance(task.importance, str) else 1


def priority_rank(task: Task) -> int:
    """high=3, medium=2, anything else=1."""
    return _LEVELS.get(task.priority, 1) if isinstance(task.priority, str) else 1


def _as_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def due_reference(task: Task) -> date | None:
    """End date if set, else the scheduled date. Unusable values count as unset."""
    return _as_date(task.end_date) or _as_date(task.date)


def _base_urgency(diff_days: int) -> int:
    if diff_days < 0:
        return 10
    if diff_days == 0:
        return 6
    if diff_days == 1:
        return 5
    if diff_days <= 3:
        return 4
    if diff_days <= 7:
        return 3
    if diff_days <= 14:
        return 2
    return 1


def urgency_score(task: Task, today: date) -> float:
    """
    Urgency from due-date proximity plus a priority boost.

    Tasks without any due date have zero urgency.
    """
    due = due_reference(task)
    if due is None:
        return 0
    diff_days = (due - today).days
    return _base_urgency(diff_days) + priority_rank(task) * PRIORITY_WEIGHT


def determine_quadrant(importance: int, urgency: float) -> int:
    """Eisenhower quadrant (1-4) from the two axes."""
    important = importance >= IMPORTANT_THRESHOLD
    urgent = urgency >= URGENT_THRESHOLD

    if important and urgent:
        return 1
    elif important and not urgent:
        return 2
    elif not important and urgent:
        return 3
    else:
        return 4


def due_numeric(task: Task) -> int:
    """Due reference as a YYYYMMDD integer, or 99991231 without one."""
    due = due_reference(task)
    if due is None:
        return NO_DUE_DATE
    return due.year * 10000 + due.month * 100 + due.day


def composite_score(quadrant: int, urgency: float, importance: int, due: int) -> float:
    """Single sort key: quadrant dominates, then urgency, importance, earlier due."""
    return (5 - quadrant) * 1000 + urgency * 50 + importance * 30 - due


def resolve_today(today: date | str | None = None) -> date:
    """Reference date from a date, an ISO string, or the local clock."""
    if isinstance(today, datetime):
        return today.date()
    if isinstance(today, date):
        return today
    if today:
        try:
            return date.fromisoformat(today)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed reference date {today!r}, using today")
    return date.today()


def rank_task(task: Task, today: date) -> RankedTask:
    """Score and classify a single task."""
    imp = importance_rank(task)
    urg = urgency_score(task, today)
    quadrant = determine_quadrant(imp, urg)
    score = composite_score(quadrant, urg, imp, due_numeric(task))
    return RankedTask(quadrant=quadrant, score=score, task=task, urgency=urg, importance=imp)


def rank(tasks: list[Task], today: date | str | None = None) -> list[RankedTask]:
    """
    Classify tasks and order them for "what should I do next".

    Pure function - no I/O. Higher composite scores come first; tasks with
    equal scores keep their input order. Completed tasks are not filtered
    here, callers pass only active ones.
    """
    ref = resolve_today(today)
    results = [rank_task(t, ref) for t in tasks]
    # sorted() is stable, reverse=True included
    return sorted(results, key=lambda r: r.score, reverse=True)


def ordered_tasks(tasks: list[Task], today: date | str | None = None) -> list[Task]:
    """Ranked tasks without the scoring wrapper."""
    return [r.task for r in rank(tasks, today)]


def group_by_quadrant(ranked: list[RankedTask]) -> dict[int, list[Task]]:
    """Bucket ranked tasks by quadrant, preserving rank order within each."""
    groups: dict[int, list[Task]] = {1: [], 2: [], 3: [], 4: []}
    for r in ranked:
        groups[r.quadrant].append(r.task)
    return groups


def apply_ordering(
    tasks: list[Task],
    ordering: list[str],
    today: date | str | None = None,
) -> list[Task]:
    """
    Put tasks named in a pinned ordering first, then rank the rest.

    Ids in the ordering that match no task are skipped.
    """
    by_id = {t.id: t for t in tasks}
    pinned = [by_id[task_id] for task_id in dict.fromkeys(ordering) if task_id in by_id]
    pinned_objs = {id(t) for t in pinned}
    remainder = [t for t in tasks if id(t) not in pinned_objs]
    return pinned + ordered_tasks(remainder, today)


def quadrant_label(quadrant: int) -> str:
    """Human-readable quadrant label."""
    return QUADRANT_LABELS[quadrant]
