"""Tasks report persistence: tasks_reports table mapping."""

from typing import Any, Optional

from utils.config import settings
from utils.db import Column, ReportStore, ReportTable
from utils.schemas import AvailableDescription, CompletedDescription, TasksReport


def _to_row(report: TasksReport) -> tuple[Any, ...]:
    return (
        report.completed.total,
        report.completed.onTime,
        report.completed.late,
        report.delayed,
        report.available.total,
        report.available.dueToday,
    )


def _from_row(row: dict[str, Any]) -> TasksReport:
    return TasksReport(
        reportID=row["report_id"],
        completed=CompletedDescription(
            total=row["completed_total"],
            onTime=row["completed_on_time"],
            late=row["completed_late"],
        ),
        delayed=row["delayed_tasks"],
        available=AvailableDescription(
            total=row["available_total"],
            dueToday=row["available_due_today"],
        ),
    )


TASKS_TABLE: ReportTable[TasksReport] = ReportTable(
    name="tasks_reports",
    columns=(
        Column("completed_total", "INTEGER"),
        Column("completed_on_time", "INTEGER"),
        Column("completed_late", "INTEGER"),
        Column("delayed_tasks", "INTEGER"),
        Column("available_total", "INTEGER"),
        Column("available_due_today", "INTEGER"),
    ),
    to_row=_to_row,
    from_row=_from_row,
)


def new_tasks_store(db_path: Optional[str] = None) -> ReportStore[TasksReport]:
    """Open the tasks report store, creating its schema if needed."""
    return ReportStore(db_path or settings.SQLITE_PATH, TASKS_TABLE)
