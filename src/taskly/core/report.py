"""Pure formatting of ranked tasks - no I/O dependencies."""

from datetime import date

from .prioritizer import QUADRANT_LABELS, RankedTask, due_reference
from .tasks import Task, days_until


def format_due(task: Task, today: date) -> str:
    """Describe how far away a task's due date is."""
    days = days_until(due_reference(task), today)
    if days is None:
        return "no due date"
    if days < 0:
        return f"OVERDUE by {-days}d"
    if days == 0:
        return "due TODAY"
    return f"due in {days}d"


def format_ranked_line(ranked: RankedTask, today: date) -> str:
    """
    Format a single ranked task for display.

    Pure function - no I/O.
    """
    due = format_due(ranked.task, today)
    return (
        f"[Q{ranked.quadrant} {ranked.label}] {ranked.task.title} "
        f"({due}, urgency {ranked.urgency:.1f})"
    )


def format_matrix(groups: dict[int, list[Task]], today: date) -> str:
    """
    Format quadrant groups as markdown sections.

    Pure function - no I/O.
    """
    sections = []
    for quadrant in (1, 2, 3, 4):
        lines = "\n".join(
            f"- {t.title} ({format_due(t, today)})" for t in groups.get(quadrant, [])
        ) or "None"
        sections.append(f"### Q{quadrant} {QUADRANT_LABELS[quadrant]}\n{lines}")
    return "\n\n".join(sections)


def task_to_dict(task: Task) -> dict:
    """JSON-ready view of a task."""
    due = due_reference(task)
    return {
        "id": task.id,
        "title": task.title,
        "due": due.isoformat() if due else None,
        "priority": task.priority,
        "importance": task.importance,
    }


def ranked_to_dict(ranked: RankedTask) -> dict:
    """JSON-ready view of a ranked task."""
    return {
        **task_to_dict(ranked.task),
        "quadrant": ranked.quadrant,
        "label": ranked.label,
        "urgency": round(ranked.urgency, 2),
        "score": ranked.score,
    }
