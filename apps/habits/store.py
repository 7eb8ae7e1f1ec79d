"""Habits report persistence: habits_reports table mapping."""

from typing import Any, Optional

from utils.config import settings
from utils.db import Column, ReportStore, ReportTable
from utils.schemas import HabitDescription, HabitRange, HabitsReport


def _to_row(report: HabitsReport) -> tuple[Any, ...]:
    return (
        report.rangeCount.red,
        report.rangeCount.orange,
        report.rangeCount.yellow,
        report.rangeCount.green,
        report.rangeCount.blue,
        report.worst.user,
        report.worst.title,
        report.best.user,
        report.best.title,
    )


def _from_row(row: dict[str, Any]) -> HabitsReport:
    return HabitsReport(
        reportID=row["report_id"],
        rangeCount=HabitRange(
            red=row["red"],
            orange=row["orange"],
            yellow=row["yellow"],
            green=row["green"],
            blue=row["blue"],
        ),
        worst=HabitDescription(user=row["worst_name"], title=row["worst_title"]),
        best=HabitDescription(user=row["best_name"], title=row["best_title"]),
    )


HABITS_TABLE: ReportTable[HabitsReport] = ReportTable(
    name="habits_reports",
    columns=(
        Column("red", "INTEGER"),
        Column("orange", "INTEGER"),
        Column("yellow", "INTEGER"),
        Column("green", "INTEGER"),
        Column("blue", "INTEGER"),
        Column("worst_name", "TEXT"),
        Column("worst_title", "TEXT"),
        Column("best_name", "TEXT"),
        Column("best_title", "TEXT"),
    ),
    to_row=_to_row,
    from_row=_from_row,
)


def new_habits_store(db_path: Optional[str] = None) -> ReportStore[HabitsReport]:
    """Open the habits report store, creating its schema if needed."""
    return ReportStore(db_path or settings.SQLITE_PATH, HABITS_TABLE)
