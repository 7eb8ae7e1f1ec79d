"""
Source fetcher tests against stubbed providers.
"""

import httpx
import pytest

from utils.errors import DecodeError, SourceUnavailable
from utils.schemas import Habit, Task
from utils.source import SourceFetcher
from tests.providers import failing_transport, json_transport, raw_transport


def test_requests_base_url_and_path():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=[])

    fetcher = SourceFetcher("http://tasks.local:8080/", "/Task/tasks", Task, transport=httpx.MockTransport(handler))
    fetcher.fetch_all()

    assert seen == ["http://tasks.local:8080/Task/tasks"]


def test_returns_records_in_provider_order():
    payload = [{"title": f"habit-{i}", "score": i} for i in range(5)]
    fetcher = SourceFetcher("http://habits.local", "/habits", Habit, transport=json_transport(payload))

    habits = fetcher.fetch_all()

    assert [h.title for h in habits] == [f"habit-{i}" for i in range(5)]
    assert all(isinstance(h, Habit) for h in habits)


def test_decodes_aliases_and_nulls():
    payload = [{"_id": "abc", "color": None, "score": 2, "userID": "u1", "title": "read"}]
    fetcher = SourceFetcher("http://habits.local", "/habits", Habit, transport=json_transport(payload))

    (habit,) = fetcher.fetch_all()

    assert habit.habitID == "abc"
    assert habit.color == ""


def test_open_task_has_no_completed_date():
    payload = [{"dueDate": 10, "userId": "u1", "remind": 5}, {"dueDate": 10, "completedDate": 8}]
    fetcher = SourceFetcher("http://tasks.local", "/Task/tasks", Task, transport=json_transport(payload))

    open_task, done_task = fetcher.fetch_all()

    assert open_task.completedDate is None
    assert not open_task.is_completed
    assert open_task.userID == "u1"
    assert open_task.reminder == 5
    assert done_task.is_completed


def test_null_numbers_decode_as_zero():
    habits = SourceFetcher(
        "http://habits.local", "/habits", Habit, transport=json_transport([{"score": None, "title": "read"}])
    )
    tasks = SourceFetcher(
        "http://tasks.local", "/Task/tasks", Task,
        transport=json_transport([{"dueDate": None, "remind": None, "completedDate": None}]),
    )

    (habit,) = habits.fetch_all()
    (task,) = tasks.fetch_all()

    assert habit.score == 0
    assert task.dueDate == 0
    assert task.reminder == 0
    assert task.completedDate is None


def test_keys_match_case_insensitively():
    habits = SourceFetcher(
        "http://habits.local", "/habits", Habit,
        transport=json_transport([{"USERID": "u1", "Color": "red darken-1", "SCORE": 3, "_ID": "h1"}]),
    )
    tasks = SourceFetcher(
        "http://tasks.local", "/Task/tasks", Task,
        transport=json_transport([{"UserID": "u2", "duedate": 7, "REMIND": 5, "CompletedDate": 9}]),
    )

    (habit,) = habits.fetch_all()
    (task,) = tasks.fetch_all()

    assert (habit.userID, habit.color, habit.score, habit.habitID) == ("u1", "red darken-1", 3, "h1")
    assert (task.userID, task.dueDate, task.reminder, task.completedDate) == ("u2", 7, 5, 9)


def test_exact_key_wins_over_other_casing():
    payload = [{"userid": "lower", "userId": "exact", "USERID": "upper"}]
    fetcher = SourceFetcher("http://tasks.local", "/Task/tasks", Task, transport=json_transport(payload))

    (task,) = fetcher.fetch_all()

    assert task.userID == "exact"


def test_transport_failure_is_source_unavailable():
    fetcher = SourceFetcher("http://habits.local", "/habits", Habit, transport=failing_transport())

    with pytest.raises(SourceUnavailable):
        fetcher.fetch_all()


def test_error_status_is_source_unavailable():
    fetcher = SourceFetcher("http://habits.local", "/habits", Habit, transport=json_transport({"error": "x"}, 503))

    with pytest.raises(SourceUnavailable):
        fetcher.fetch_all()


@pytest.mark.parametrize(
    "content",
    [
        b"not json",
        b'{"habits": []}',
        b'"just a string"',
        b'[{"score": "very high"}]',
        b"[1, 2, 3]",
    ],
)
def test_malformed_body_is_decode_error(content):
    fetcher = SourceFetcher("http://habits.local", "/habits", Habit, transport=raw_transport(content))

    with pytest.raises(DecodeError):
        fetcher.fetch_all()
