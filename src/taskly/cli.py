"""Taskly CLI - Eisenhower task prioritization."""

import json
import logging
import sys
from datetime import date

import click
import requests

from .adapters.taskly_api import AuthenticationError, TasklyAPIAdapter
from .config import load_config
from .core.prioritizer import group_by_quadrant
from .core.report import format_matrix, format_ranked_line, ranked_to_dict, task_to_dict
from .workflows import next_up, rank_tasks

LOAD_ERRORS = (AuthenticationError, requests.RequestException, OSError, ValueError)


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _reference_date(target_date: str | None) -> date:
    if not target_date:
        return date.today()
    try:
        return date.fromisoformat(target_date)
    except ValueError:
        raise click.BadParameter(f"{target_date!r} is not YYYY-MM-DD", param_hint="--date")


date_option = click.option(
    "--date", "-d", "target_date", default=None, help="Reference date (YYYY-MM-DD), defaults to today"
)
file_option = click.option(
    "--file", "-f", "tasks_file", default=None, type=click.Path(dir_okay=False),
    help="Read tasks from a JSON export instead of the API",
)
json_option = click.option("--json", "as_json", is_flag=True, help="Output as JSON")


@click.group()
@click.version_option(package_name="taskly")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Taskly - what should I do next?"""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@date_option
@file_option
@json_option
def rank(target_date: str | None, tasks_file: str | None, as_json: bool):
    """List all active tasks in priority order."""
    today = _reference_date(target_date)
    config = load_config()
    try:
        ranked = rank_tasks(config, today, tasks_file)
    except LOAD_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([ranked_to_dict(r) for r in ranked], indent=2))
        return

    if not ranked:
        click.echo("No active tasks.")
        return

    for position, r in enumerate(ranked, start=1):
        click.echo(f"{position:3}. {format_ranked_line(r, today)}")


@main.command()
@date_option
@file_option
@json_option
def matrix(target_date: str | None, tasks_file: str | None, as_json: bool):
    """Show active tasks grouped by Eisenhower quadrant."""
    today = _reference_date(target_date)
    config = load_config()
    try:
        groups = group_by_quadrant(rank_tasks(config, today, tasks_file))
    except LOAD_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(
            json.dumps(
                {str(q): [task_to_dict(t) for t in tasks] for q, tasks in groups.items()},
                indent=2,
            )
        )
    else:
        click.echo(f"Eisenhower matrix for {today.strftime('%A, %b %d')}\n")
        click.echo(format_matrix(groups, today))


@main.command("next")
@click.option("--limit", "-n", default=None, type=int, help="How many tasks to show")
@file_option
@json_option
def next_cmd(limit: int | None, tasks_file: str | None, as_json: bool):
    """Show what to do next: today's, overdue, and due-soon tasks."""
    config = load_config()
    try:
        ranked = next_up(config, limit=limit, tasks_file=tasks_file)
    except LOAD_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([ranked_to_dict(r) for r in ranked], indent=2))
        return

    if not ranked:
        click.echo("Nothing due soon.")
        return

    today = date.today()
    for r in ranked:
        click.echo(f"- {format_ranked_line(r, today)}")


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Mark a task completed."""
    config = load_config()
    try:
        task = TasklyAPIAdapter(config).complete(task_id)
    except (AuthenticationError, requests.RequestException) as e:
        _fail(e)

    click.echo(f"✓ Completed: {task.title or task_id}")


if __name__ == "__main__":
    main()
