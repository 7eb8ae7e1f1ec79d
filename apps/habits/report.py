"""
Habits Report - Aggregation of Habit Records

Reduces the full habits collection into a HabitsReport in a single pass per
figure. Nothing here touches the database; see apps.habits.store.

Usage:
    from apps.habits.report import generate_habits_report, new_habits_fetcher

    report = generate_habits_report(new_habits_fetcher())
"""

import logging
from typing import Optional, Sequence

import httpx

from utils.config import settings
from utils.errors import EmptyDataSet
from utils.schemas import Habit, HabitDescription, HabitRange, HabitsReport
from utils.source import SourceFetcher

logger = logging.getLogger(__name__)

COLOR_RED = "red darken-1"
COLOR_ORANGE = "orange darken-1"
COLOR_YELLOW = "yellow darken-2"
COLOR_GREEN = "light-green darken-1"
COLOR_BLUE = "blue darken-1"

# color tag -> HabitRange field
COLOR_BUCKETS = {
    COLOR_RED: "red",
    COLOR_ORANGE: "orange",
    COLOR_YELLOW: "yellow",
    COLOR_GREEN: "green",
    COLOR_BLUE: "blue",
}


def new_habits_fetcher(transport: Optional[httpx.BaseTransport] = None) -> SourceFetcher[Habit]:
    """Build the fetcher for the configured habits provider."""
    return SourceFetcher(
        settings.HABITS_API_BASE,
        settings.HABITS_API_PATH,
        Habit,
        timeout=settings.API_TIMEOUT,
        transport=transport,
    )


def create_habit_range(habits: Sequence[Habit]) -> HabitRange:
    """Count habits per known color; unknown colors are not counted."""
    counts = dict.fromkeys(COLOR_BUCKETS.values(), 0)
    for habit in habits:
        bucket = COLOR_BUCKETS.get(habit.color)
        if bucket is not None:
            counts[bucket] += 1
    return HabitRange(**counts)


def find_worst_habit(habits: Sequence[Habit]) -> HabitDescription:
    """
    Return the habit with the lowest score, the earliest one on ties.

    Raises:
        EmptyDataSet: If there are no habits
    """
    if not habits:
        raise EmptyDataSet("cannot find worst habit of an empty collection")

    current_worst = habits[0]
    for habit in habits:
        if habit.score < current_worst.score:
            current_worst = habit

    return HabitDescription(user=current_worst.userID, title=current_worst.title)


def find_best_habit(habits: Sequence[Habit]) -> HabitDescription:
    """
    Return the habit with the highest score, the earliest one on ties.

    Raises:
        EmptyDataSet: If there are no habits
    """
    if not habits:
        raise EmptyDataSet("cannot find best habit of an empty collection")

    current_best = habits[0]
    for habit in habits:
        if habit.score > current_best.score:
            current_best = habit

    return HabitDescription(user=current_best.userID, title=current_best.title)


def generate_habits_report(fetcher: SourceFetcher[Habit]) -> HabitsReport:
    """
    Fetch every habit and aggregate it into a report (not persisted).

    Raises:
        SourceUnavailable: If the provider cannot be reached
        DecodeError: If the provider payload is malformed
        EmptyDataSet: If the provider returned no habits
    """
    all_habits = fetcher.fetch_all()
    if not all_habits:
        raise EmptyDataSet("habits provider returned no habits")

    report = HabitsReport(
        rangeCount=create_habit_range(all_habits),
        worst=find_worst_habit(all_habits),
        best=find_best_habit(all_habits),
    )

    logger.info(
        "Generated habits report: habits=%d, categorized=%d",
        len(all_habits), report.rangeCount.total(),
    )
    return report
