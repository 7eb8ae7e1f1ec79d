"""
Snapshot scheduler tests (RUN_ONCE mode).
"""

import asyncio

import pytest

from apps.domains import ReportingDomain
from apps.habits.report import generate_habits_report, new_habits_fetcher
from apps.scheduler.snapshot import SnapshotScheduler
from apps.tasks.report import generate_tasks_report, new_tasks_fetcher
from tests.providers import failing_transport, json_transport

HABITS = [
    {"color": "orange darken-1", "score": 4, "userID": "u1", "title": "walk"},
    {"color": "orange darken-1", "score": 6, "userID": "u2", "title": "swim"},
]


def run_once(domains) -> SnapshotScheduler:
    scheduler = SnapshotScheduler(domains, run_once=True)
    scheduler.setup_signal_handlers = lambda: None
    asyncio.run(scheduler.start())
    return scheduler


@pytest.fixture
def habits_domain(habits_store):
    fetcher = new_habits_fetcher(json_transport(HABITS))
    return ReportingDomain("habits", lambda: generate_habits_report(fetcher), habits_store)


def test_run_once_stores_one_report_per_domain(habits_domain, tasks_store):
    tasks_fetcher = new_tasks_fetcher(json_transport([{"dueDate": 0}]))
    tasks_domain = ReportingDomain("tasks", lambda: generate_tasks_report(tasks_fetcher), tasks_store)

    scheduler = run_once({"habits": habits_domain, "tasks": tasks_domain})

    assert scheduler.last_report_ids == {"habits": 1, "tasks": 1}
    assert scheduler.shutdown_event.is_set()
    assert habits_domain.store.get(1).rangeCount.orange == 2
    assert tasks_store.get(1).delayed == 1


def test_failing_domain_does_not_block_others(habits_domain, tasks_store):
    tasks_fetcher = new_tasks_fetcher(failing_transport())
    tasks_domain = ReportingDomain("tasks", lambda: generate_tasks_report(tasks_fetcher), tasks_store)

    scheduler = run_once({"tasks": tasks_domain, "habits": habits_domain})

    assert scheduler.last_report_ids == {"habits": 1}
    assert habits_domain.store.get(1).best.title == "swim"


def test_unexpected_error_skips_only_that_domain(habits_domain, tasks_store):
    def explode():
        raise RuntimeError("boom")

    tasks_domain = ReportingDomain("tasks", explode, tasks_store)

    scheduler = run_once({"tasks": tasks_domain, "habits": habits_domain})

    assert scheduler.last_report_ids == {"habits": 1}
    assert scheduler.shutdown_event.is_set()
