"""
Tasks Report - Aggregation of Task Records

Reduces the full tasks collection into a TasksReport. Figures that depend on
the current time take an explicit ``now`` (defaults to the wall clock).

Usage:
    from apps.tasks.report import generate_tasks_report, new_tasks_fetcher

    report = generate_tasks_report(new_tasks_fetcher())
"""

import logging
from datetime import datetime
from typing import Optional, Sequence

import httpx

from utils.config import settings
from utils.schemas import AvailableDescription, CompletedDescription, Task, TasksReport
from utils.source import SourceFetcher

logger = logging.getLogger(__name__)


def new_tasks_fetcher(transport: Optional[httpx.BaseTransport] = None) -> SourceFetcher[Task]:
    """Build the fetcher for the configured tasks provider."""
    return SourceFetcher(
        settings.TASKS_API_BASE,
        settings.TASKS_API_PATH,
        Task,
        timeout=settings.API_TIMEOUT,
        transport=transport,
    )


def _day_of_year(ts: int, now: datetime) -> Optional[int]:
    # Same timezone as ``now``; a naive ``now`` means local time.
    # None when ts falls outside the range datetime can represent.
    try:
        return datetime.fromtimestamp(ts, tz=now.tzinfo).timetuple().tm_yday
    except (ValueError, OverflowError, OSError):
        return None


def populate_completed(tasks: Sequence[Task]) -> CompletedDescription:
    """Count completed tasks, split into on time (completed <= due) and late."""
    completed = CompletedDescription()
    for task in tasks:
        if task.completedDate is None:
            continue
        completed.total += 1
        if task.completedDate <= task.dueDate:
            completed.onTime += 1
        else:
            completed.late += 1
    return completed


def count_delayed(tasks: Sequence[Task], now: Optional[datetime] = None) -> int:
    """Count open tasks whose due date has already passed."""
    # Whole seconds, like the provider timestamps
    now_ts = int((now or datetime.now()).timestamp())
    return sum(1 for task in tasks if task.completedDate is None and task.dueDate < now_ts)


def populate_available(tasks: Sequence[Task], now: Optional[datetime] = None) -> AvailableDescription:
    """
    Count open tasks and those among them due today.

    "Due today" compares the day of the year only, so a task due exactly one
    year before or after ``now`` also counts. Due dates beyond what datetime
    can represent are never due today.
    """
    now = now or datetime.now()
    today = now.timetuple().tm_yday

    available = AvailableDescription()
    for task in tasks:
        if task.completedDate is not None:
            continue
        available.total += 1
        if _day_of_year(task.dueDate, now) == today:
            available.dueToday += 1
    return available


def generate_tasks_report(fetcher: SourceFetcher[Task], now: Optional[datetime] = None) -> TasksReport:
    """
    Fetch every task and aggregate it into a report (not persisted).

    An empty collection yields an all-zero report.

    Raises:
        SourceUnavailable: If the provider cannot be reached
        DecodeError: If the provider payload is malformed
    """
    all_tasks = fetcher.fetch_all()
    now = now or datetime.now()

    report = TasksReport(
        completed=populate_completed(all_tasks),
        delayed=count_delayed(all_tasks, now),
        available=populate_available(all_tasks, now),
    )

    logger.info(
        "Generated tasks report: tasks=%d, completed=%d, delayed=%d, available=%d",
        len(all_tasks), report.completed.total, report.delayed, report.available.total,
    )
    return report
