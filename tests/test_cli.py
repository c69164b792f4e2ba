"""Tests for the click command line."""

import json
from datetime import date, timedelta
from unittest.mock import patch, MagicMock

import pytest
import requests
from click.testing import CliRunner

from taskly.cli import main
from taskly.config import Config
from taskly.core.tasks import Task


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def config():
    with patch("taskly.cli.load_config", return_value=Config(top_n=5)) as mock_load:
        yield mock_load.return_value


@pytest.fixture
def tasks_file(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            [
                {"_id": "z", "title": "Someday", "priority": "low", "importance": "low"},
                {"_id": "y", "title": "Project", "date": "2024-06-25", "importance": "high"},
                {"_id": "x", "title": "Lab", "date": "2024-06-09", "priority": "high", "importance": "high"},
                {"_id": "d", "title": "Done", "date": "2024-06-10", "status": "completed"},
            ]
        )
    )
    return str(path)


class TestRank:
    def test_text_output(self, runner, tasks_file):
        result = runner.invoke(main, ["rank", "--date", "2024-06-10", "--file", tasks_file])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "  1. [Q1 Do First] Lab (OVERDUE by 1d, urgency 12.4)"
        assert "[Q2 Schedule] Project" in lines[1]
        assert "[Q4 Eliminate] Someday" in lines[2]
        assert "Done" not in result.output

    def test_json_output(self, runner, tasks_file):
        result = runner.invoke(main, ["rank", "-d", "2024-06-10", "-f", tasks_file, "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [item["id"] for item in data] == ["x", "y", "z"]
        assert [item["quadrant"] for item in data] == [1, 2, 4]

    def test_empty(self, runner, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        result = runner.invoke(main, ["rank", "--file", str(path)])
        assert result.exit_code == 0
        assert "No active tasks." in result.output

    def test_bad_date(self, runner, tasks_file):
        result = runner.invoke(main, ["rank", "--date", "10/06/2024", "--file", tasks_file])
        assert result.exit_code == 2
        assert "YYYY-MM-DD" in result.output

    def test_missing_token(self, runner):
        result = runner.invoke(main, ["rank"])
        assert result.exit_code == 1
        assert "Error: No API token" in result.output

    def test_unreadable_file(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        result = runner.invoke(main, ["rank", "--file", str(path)])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestMatrix:
    def test_text_output(self, runner, tasks_file):
        result = runner.invoke(main, ["matrix", "--date", "2024-06-10", "--file", tasks_file])

        assert result.exit_code == 0
        assert "Eisenhower matrix for Monday, Jun 10" in result.output
        assert "### Q1 Do First\n- Lab (OVERDUE by 1d)" in result.output
        assert "### Q3 Delegate\nNone" in result.output

    def test_json_output(self, runner, tasks_file):
        result = runner.invoke(main, ["matrix", "--date", "2024-06-10", "--file", tasks_file, "--json"])

        data = json.loads(result.output)
        assert {q: [t["id"] for t in tasks] for q, tasks in data.items()} == {
            "1": ["x"],
            "2": ["y"],
            "3": [],
            "4": ["z"],
        }


class TestNext:
    def test_lists_candidates(self, runner, tmp_path):
        today = date.today()
        path = tmp_path / "tasks.json"
        path.write_text(
            json.dumps(
                [
                    {"_id": "far", "title": "Far away", "date": (today + timedelta(days=30)).isoformat()},
                    {"_id": "late", "title": "Late", "date": (today - timedelta(days=2)).isoformat()},
                    {"_id": "soon", "title": "Soon", "date": (today + timedelta(days=2)).isoformat()},
                ]
            )
        )

        result = runner.invoke(main, ["next", "--file", str(path)])

        assert result.exit_code == 0
        assert "Far away" not in result.output
        assert result.output.index("Late") < result.output.index("Soon")

    def test_limit(self, runner, tmp_path):
        today = date.today()
        path = tmp_path / "tasks.json"
        path.write_text(
            json.dumps(
                [
                    {"_id": "a", "title": "A", "date": today.isoformat()},
                    {"_id": "b", "title": "B", "date": today.isoformat()},
                ]
            )
        )
        result = runner.invoke(main, ["next", "-n", "1", "--file", str(path), "--json"])
        assert len(json.loads(result.output)) == 1

    def test_nothing_due(self, runner, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"_id": "z", "title": "Someday"}]))
        result = runner.invoke(main, ["next", "--file", str(path)])
        assert "Nothing due soon." in result.output


class TestDone:
    @patch("taskly.cli.TasklyAPIAdapter")
    def test_marks_complete(self, mock_cls, runner, config):
        mock_instance = MagicMock()
        mock_instance.complete.return_value = Task(id="1", title="Essay", completed=True)
        mock_cls.return_value = mock_instance

        result = runner.invoke(main, ["done", "1"])

        assert result.exit_code == 0
        mock_cls.assert_called_once_with(config)
        mock_instance.complete.assert_called_once_with("1")
        assert "Completed: Essay" in result.output

    @patch("taskly.cli.TasklyAPIAdapter")
    def test_api_error(self, mock_cls, runner):
        mock_cls.return_value.complete.side_effect = requests.ConnectionError("refused")
        result = runner.invoke(main, ["done", "1"])
        assert result.exit_code == 1
        assert "Error: refused" in result.output
