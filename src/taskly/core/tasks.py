"""Pure task domain logic - no I/O dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

logger = logging.getLogger(__name__)

STATUSES = ("todo", "in-progress", "completed")
FREQUENCIES = ("daily", "weekly", "monthly", "yearly")


def _parse_date(value, field_name: str, task_id: str) -> date | None:
    """Parse a YYYY-MM-DD string. Malformed values become None."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).split("T")[0])
    except ValueError:
        logger.warning(f"Task {task_id}: ignoring malformed {field_name} {value!r}")
        return None


def _parse_clock(value: str | None) -> time | None:
    """Parse HH:MM, None if unusable."""
    if not value:
        return None
    try:
        hour, minute = (int(part) for part in value.strip().split(":")[:2])
        return time(hour, minute)
    except ValueError:
        return None


def _add_months(start: date, months: int) -> date | None:
    """Same day-of-month N months later, None when that day does not exist."""
    index = start.month - 1 + months
    try:
        return start.replace(year=start.year + index // 12, month=index % 12 + 1)
    except ValueError:
        return None


def _add_years(start: date, years: int) -> date:
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        # Feb 29 rolls over to Mar 1 in non-leap years
        return date(start.year + years, 3, 1)


@dataclass
class Repeat:
    """Recurrence rule of a task."""

    frequency: str
    end_mode: str = "never"
    end_date: date | None = None
    count: int | None = None

    @classmethod
    def from_api(cls, data, task_id: str = "") -> Repeat | None:
        """Build from the backend's repeat object; unknown frequencies mean no repeat."""
        if not isinstance(data, dict) or data.get("frequency") not in FREQUENCIES:
            return None
        count = data.get("count")
        return cls(
            frequency=data["frequency"],
            end_mode=data.get("endMode") or "never",
            end_date=_parse_date(data.get("endDate"), "repeat.endDate", task_id),
            count=count if isinstance(count, int) and count > 0 else None,
        )

    def to_api(self) -> dict:
        payload = {
            "frequency": self.frequency,
            "endMode": self.end_mode,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "count": self.count,
        }
        return {k: v for k, v in payload.items() if v is not None}

    def occurrence_start(self, start: date, day: date) -> date | None:
        """
        Start of the latest occurrence beginning on or before day.

        None if no occurrence qualifies or the rule has run out.
        """
        if day < start:
            return None
        match self.frequency:
            case "daily":
                index = (day - start).days
                occurrence = day
            case "weekly":
                index = (day - start).days // 7
                occurrence = start + timedelta(days=index * 7)
            case "monthly":
                index = (day.year - start.year) * 12 + day.month - start.month
                occurrence = _add_months(start, index)
            case "yearly":
                index = day.year - start.year
                occurrence = _add_years(start, index)
            case _:
                return None

        if occurrence is None or occurrence > day:
            return None
        if self.end_mode == "after" and self.count and index + 1 > self.count:
            return None
        if self.end_mode == "onDate" and self.end_date and occurrence > self.end_date:
            return None
        return occurrence


@dataclass
class Task:
    """A student task as stored by the Taskly backend."""

    id: str
    title: str
    date: date | None = None
    end_date: date | None = None
    priority: str | None = None
    importance: str | None = None
    completed: bool = False
    status: str = "todo"
    start_time: str | None = None
    end_time: str | None = None
    time: str | None = None
    description: str = ""
    project_id: str | None = None
    repeat: Repeat | None = None

    def __post_init__(self):
        self.date = _parse_date(self.date, "date", self.id)
        self.end_date = _parse_date(self.end_date, "endDate", self.id)
        if self.status == "completed":
            self.completed = True
        elif self.completed:
            self.status = "completed"

    @property
    def due_reference(self) -> date | None:
        """End date when set, otherwise the scheduled date."""
        return self.end_date or self.date

    @property
    def api_status(self) -> str:
        """Status to send back, kept in step with the completed flag."""
        if self.completed:
            return "completed"
        return "todo" if self.status == "completed" else self.status

    def deadline(self) -> datetime | None:
        """
        Moment the task is due on its due day.

        Uses end_time, else the end of a legacy "HH:MM-HH:MM" time range,
        else 23:59:59.
        """
        due = self.due_reference
        if due is None:
            return None
        end = self.end_time
        if not end and self.time and "-" in self.time:
            end = self.time.split("-")[1]
        clock = _parse_clock(end)
        if end and clock is None:
            logger.debug(f"Task {self.id}: bad end time {end!r}")
        return datetime.combine(due, clock or time(23, 59, 59))

    def occurs_on(self, day: date) -> bool:
        """True if the task, or one of its repeats, spans the given day."""
        if self.date is None:
            return False
        if self.repeat is None:
            return self.date <= day <= (self.end_date or self.date)

        span = max((self.end_date - self.date).days, 0) if self.end_date else 0
        occurrence = self.repeat.occurrence_start(self.date, day)
        if occurrence is None:
            return False
        return occurrence <= day <= occurrence + timedelta(days=span)

    @classmethod
    def from_api(cls, data: dict) -> "Task":
        """Create Task from a backend JSON record."""
        task_id = str(data.get("_id") or data.get("id") or "")
        status = data.get("status") if data.get("status") in STATUSES else "todo"
        return cls(
            id=task_id,
            title=data.get("title", "") or "",
            date=_parse_date(data.get("date"), "date", task_id),
            end_date=_parse_date(data.get("endDate"), "endDate", task_id),
            priority=data.get("priority"),
            importance=data.get("importance"),
            completed=bool(data.get("completed", False)),
            status=status,
            start_time=data.get("startTime") or None,
            end_time=data.get("endTime") or None,
            time=data.get("time") or None,
            description=data.get("description", "") or "",
            project_id=data.get("projectId"),
            repeat=Repeat.from_api(data.get("repeat"), task_id),
        )

    def to_api(self) -> dict:
        """Serialize to the backend's field names, omitting unset values."""
        payload = {
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "time": self.time,
            "priority": self.priority,
            "importance": self.importance,
            "status": self.api_status,
            "projectId": self.project_id,
            "repeat": self.repeat.to_api() if self.repeat else None,
        }
        return {k: v for k, v in payload.items() if v is not None}


def filter_active(tasks: list[Task]) -> list[Task]:
    """Drop completed tasks."""
    return [t for t in tasks if not t.completed]


def filter_overdue(tasks: list[Task], now: datetime | None = None) -> list[Task]:
    """Active tasks whose deadline has passed."""
    now = now or datetime.now()
    result = []
    for t in tasks:
        if t.completed:
            continue
        deadline = t.deadline()
        if deadline is not None and now > deadline:
            result.append(t)
    return result


def filter_due_soon(tasks: list[Task], now: datetime | None = None, days: int = 7) -> list[Task]:
    """
    Active tasks not yet overdue and due within the next N days.

    Pure function - no I/O.
    """
    now = now or datetime.now()
    today = now.date()
    result = []
    for t in tasks:
        if t.completed:
            continue
        deadline = t.deadline()
        if deadline is None or now > deadline:
            continue
        if 0 <= (t.due_reference - today).days <= days:
            result.append(t)
    return result


def filter_occurring_on(tasks: list[Task], day: date) -> list[Task]:
    """Active tasks scheduled on (or spanning) a given day, repeats included."""
    return [t for t in tasks if not t.completed and t.occurs_on(day)]


def select_candidates(tasks: list[Task], now: datetime | None = None, days: int = 7) -> list[Task]:
    """
    Tasks worth considering right now: today's, overdue, and due soon.

    Recurring tasks count as today's when one of their occurrences spans
    today; overdue and due-soon use the first occurrence's due date.
    Deduplicated by id, keeping the first occurrence. Pure function - no I/O.
    """
    now = now or datetime.now()
    seen: set[str] = set()
    candidates = []
    groups = (
        filter_occurring_on(tasks, now.date()),
        filter_overdue(tasks, now),
        filter_due_soon(tasks, now, days),
    )
    for group in groups:
        for t in group:
            key = t.id or str(id(t))
            if key in seen:
                continue
            seen.add(key)
            candidates.append(t)
    return candidates


def days_until(due: date | None, today: date) -> int | None:
    """Days from today to due (negative if overdue)."""
    if due is None:
        return None
    return (due - today).days
