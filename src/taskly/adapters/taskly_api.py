"""Taskly backend adapter - HTTP client for task fetching and saving."""

import logging

import requests

from taskly.config import Config, load_config
from taskly.core.tasks import Task, filter_active

logger = logging.getLogger(__name__)

TASKS_ENDPOINT = "/api/tasks"


class AuthenticationError(Exception):
    """Raised when the backend rejects or lacks credentials."""

    pass


class TasklyAPIAdapter:
    """
    Taskly REST API adapter.

    Implements TaskRepository protocol. Handles the bearer token and API
    calls. No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        if not self.config.api_token:
            raise AuthenticationError("No API token. Set API_TOKEN in taskly.conf.")
        return {"Authorization": f"Bearer {self.config.api_token}"}

    def _api_request(self, method: str, endpoint: str, payload: dict | None = None) -> dict | list:
        """Make authenticated API request."""
        url = f"{self.config.api_base}{endpoint}"
        logger.debug(f"{method} {url}")
        resp = self._session.request(method, url, headers=self._headers(), json=payload)
        if resp.status_code in (401, 403):
            raise AuthenticationError(f"Backend rejected credentials: {resp.text}")
        resp.raise_for_status()
        return resp.json()

    def fetch_all(self) -> list[Task]:
        """Fetch every task of the current user."""
        data = self._api_request("GET", TASKS_ENDPOINT)
        if isinstance(data, dict):
            data = data.get("tasks", [])
        tasks = [Task.from_api(item) for item in data if isinstance(item, dict)]
        logger.info(f"Fetched {len(tasks)} tasks")
        return tasks

    def fetch_active(self) -> list[Task]:
        """Fetch tasks that are not completed."""
        return filter_active(self.fetch_all())

    def save(self, task: Task) -> Task:
        """
        Create the task if it has no id, update it otherwise.

        The backend only creates tasks that have a date and either a
        start_time or a legacy time range.
        """
        if task.id:
            data = self._api_request("PUT", f"{TASKS_ENDPOINT}/{task.id}", task.to_api())
        else:
            if not task.date or not (task.start_time or task.time):
                raise ValueError("New tasks need a date and a start_time or time")
            data = self._api_request("POST", TASKS_ENDPOINT, task.to_api())
        return Task.from_api(data)

    def complete(self, task_id: str) -> Task:
        """Mark a task completed."""
        data = self._api_request("PUT", f"{TASKS_ENDPOINT}/{task_id}", {"status": "completed"})
        return Task.from_api(data)
