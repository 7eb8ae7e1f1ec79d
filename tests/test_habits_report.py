"""
Habits aggregation tests.
"""

import pytest

from apps.habits.report import (
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_ORANGE,
    COLOR_RED,
    COLOR_YELLOW,
    create_habit_range,
    find_best_habit,
    find_worst_habit,
    generate_habits_report,
    new_habits_fetcher,
)
from utils.errors import EmptyDataSet, SourceUnavailable
from utils.schemas import Habit, HabitDescription, HabitRange, HabitsReport
from tests.providers import failing_transport, json_transport


def habit(color: str = COLOR_RED, score: int = 0, user: str = "u", title: str = "t") -> Habit:
    return Habit(color=color, score=score, userID=user, title=title)


class TestCreateHabitRange:
    def test_counts_each_known_color(self):
        habits = [
            habit(COLOR_RED),
            habit(COLOR_RED),
            habit(COLOR_ORANGE),
            habit(COLOR_YELLOW),
            habit(COLOR_GREEN),
            habit(COLOR_BLUE),
            habit(COLOR_BLUE),
            habit(COLOR_BLUE),
        ]

        assert create_habit_range(habits) == HabitRange(red=2, orange=1, yellow=1, green=1, blue=3)

    def test_unknown_colors_are_dropped(self):
        habits = [habit(COLOR_RED), habit("purple"), habit("green darken-1"), habit("")]

        habit_range = create_habit_range(habits)

        assert habit_range == HabitRange(red=1)
        assert habit_range.total() < len(habits)

    def test_total_equals_count_when_all_colors_known(self):
        habits = [habit(color) for color in (COLOR_RED, COLOR_GREEN, COLOR_YELLOW, COLOR_ORANGE)]

        assert create_habit_range(habits).total() == len(habits)

    def test_empty_collection(self):
        assert create_habit_range([]) == HabitRange()


class TestWorstAndBest:
    def test_unique_minimum_and_maximum(self):
        habits = [
            habit(score=5, user="u1", title="mid"),
            habit(score=-3, user="u2", title="low"),
            habit(score=12, user="u3", title="high"),
            habit(score=0, user="u4", title="zero"),
        ]

        assert find_worst_habit(habits) == HabitDescription(user="u2", title="low")
        assert find_best_habit(habits) == HabitDescription(user="u3", title="high")

    def test_ties_keep_earliest(self):
        habits = [
            habit(score=1, user="first-low", title="a"),
            habit(score=7, user="first-high", title="b"),
            habit(score=1, user="second-low", title="c"),
            habit(score=7, user="second-high", title="d"),
        ]

        assert find_worst_habit(habits).user == "first-low"
        assert find_best_habit(habits).user == "first-high"

    def test_single_habit_is_both(self):
        habits = [habit(score=4, user="only", title="one")]

        assert find_worst_habit(habits) == find_best_habit(habits) == HabitDescription(user="only", title="one")

    def test_empty_collection_raises(self):
        with pytest.raises(EmptyDataSet):
            find_worst_habit([])
        with pytest.raises(EmptyDataSet):
            find_best_habit([])


class TestGenerateHabitsReport:
    def test_two_habit_scenario(self):
        payload = [
            {"color": "red darken-1", "score": 1, "userID": "u1", "title": "t1"},
            {"color": "blue darken-1", "score": 9, "userID": "u2", "title": "t2"},
        ]

        report = generate_habits_report(new_habits_fetcher(json_transport(payload)))

        assert report == HabitsReport(
            reportID=0,
            rangeCount=HabitRange(red=1, orange=0, yellow=0, green=0, blue=1),
            worst=HabitDescription(user="u1", title="t1"),
            best=HabitDescription(user="u2", title="t2"),
        )

    def test_full_provider_records(self):
        payload = [
            {
                "difficulty": "hard",
                "color": "yellow darken-2",
                "score": -2,
                "_id": "h1",
                "userID": "u9",
                "type": "bad",
                "title": "snacking",
            },
            {
                "difficulty": "easy",
                "color": "light-green darken-1",
                "score": 3,
                "_id": "h2",
                "userID": "u8",
                "type": "good",
                "title": "running",
            },
        ]

        report = generate_habits_report(new_habits_fetcher(json_transport(payload)))

        assert report.rangeCount == HabitRange(yellow=1, green=1)
        assert report.worst == HabitDescription(user="u9", title="snacking")
        assert report.best == HabitDescription(user="u8", title="running")

    def test_empty_provider_raises(self):
        with pytest.raises(EmptyDataSet):
            generate_habits_report(new_habits_fetcher(json_transport([])))

    def test_unreachable_provider_raises(self):
        with pytest.raises(SourceUnavailable):
            generate_habits_report(new_habits_fetcher(failing_transport()))
