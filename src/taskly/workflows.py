"""Shared workflow layer for the CLI.

Each function loads tasks (from the backend or a JSON export), hands them to
the pure core, and returns the result.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path

from .adapters.taskly_api import TasklyAPIAdapter
from .config import Config
from .core.prioritizer import RankedTask, rank
from .core.tasks import Task, filter_active, select_candidates
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)


def get_repository(config: Config) -> TaskRepository:
    """Resolve the task repository for a config."""
    return TasklyAPIAdapter(config)


def load_tasks_file(path: Path | str) -> list[Task]:
    """
    Load tasks from a JSON export.

    Accepts a bare array of task records or an object with a "tasks" array,
    in the backend's field names.
    """
    data = json.loads(Path(path).expanduser().read_text())
    if isinstance(data, dict):
        data = data.get("tasks", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of tasks")
    tasks = [Task.from_api(item) for item in data if isinstance(item, dict)]
    logger.debug(f"Loaded {len(tasks)} tasks from {path}")
    return tasks


def load_tasks(config: Config, tasks_file: Path | str | None = None) -> list[Task]:
    """Active tasks from a file if given, otherwise from the backend."""
    if tasks_file:
        tasks = load_tasks_file(tasks_file)
    else:
        tasks = get_repository(config).fetch_all()
    return filter_active(tasks)


def rank_tasks(
    config: Config,
    today: date | str | None = None,
    tasks_file: Path | str | None = None,
) -> list[RankedTask]:
    """Rank every active task."""
    return rank(load_tasks(config, tasks_file), today)


def next_up(
    config: Config,
    now: datetime | None = None,
    limit: int | None = None,
    tasks_file: Path | str | None = None,
    days: int | None = None,
) -> list[RankedTask]:
    """Rank today's, overdue, and due-soon tasks and keep the top few."""
    now = now or datetime.now()
    days = config.due_soon_days if days is None else days
    limit = config.top_n if limit is None else limit

    candidates = select_candidates(load_tasks(config, tasks_file), now, days)
    ranked = rank(candidates, now.date())
    return ranked[:limit] if limit > 0 else ranked
