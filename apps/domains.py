"""
Reporting domains wiring.

Pairs each domain's report pipeline with its store so the API and the
snapshot scheduler can treat habits and tasks the same way. Stores are
created here explicitly and must be closed by whoever built them.

Usage:
    from apps.domains import build_domains, close_domains

    domains = build_domains()
    try:
        report_id = domains["habits"].snapshot()
    finally:
        close_domains(domains)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pydantic import BaseModel

from apps.habits.report import generate_habits_report, new_habits_fetcher
from apps.habits.store import new_habits_store
from apps.tasks.report import generate_tasks_report, new_tasks_fetcher
from apps.tasks.store import new_tasks_store
from utils.db import ReportStore

logger = logging.getLogger(__name__)


@dataclass
class ReportingDomain:
    """A report generator bound to the store its reports are persisted in."""

    name: str
    generate: Callable[[], BaseModel]
    store: ReportStore

    def snapshot(self) -> int:
        """Generate a fresh report and persist it, returning its id."""
        report = self.generate()
        return self.store.add(report)


def build_domains(db_path: Optional[str] = None) -> dict[str, ReportingDomain]:
    """
    Open both report stores and bind them to the configured providers.

    Raises:
        SchemaInitFatal: If a store cannot prepare its schema
    """
    habits_store = new_habits_store(db_path)
    try:
        tasks_store = new_tasks_store(db_path)
    except Exception:
        habits_store.close()
        raise

    habits_fetcher = new_habits_fetcher()
    tasks_fetcher = new_tasks_fetcher()

    return {
        "habits": ReportingDomain(
            name="habits",
            generate=lambda: generate_habits_report(habits_fetcher),
            store=habits_store,
        ),
        "tasks": ReportingDomain(
            name="tasks",
            generate=lambda: generate_tasks_report(tasks_fetcher),
            store=tasks_store,
        ),
    }


def close_domains(domains: dict[str, ReportingDomain]) -> None:
    """Close every domain store."""
    for domain in domains.values():
        domain.store.close()
    logger.info("Report stores closed")
