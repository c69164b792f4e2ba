"""Task repository interface."""

from typing import Protocol

from taskly.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for loading and saving tasks from any backend."""

    def fetch_all(self) -> list[Task]:
        """Fetch all tasks, completed ones included."""
        ...

    def save(self, task: Task) -> Task:
        """Create or update a task. Returns the stored version."""
        ...
