# tests/test_calendar.py

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from timeyogi.models.task_model import Task
from timeyogi.views import calendar

# Wednesday
REF = datetime(2026, 10, 21, 15, 45)


def _task(due=None, status="todo", priority=None, title="t") -> Task:
    return Task(title=title, due_date=due, status=status, priority=priority)


@pytest.mark.parametrize(
    ("view", "start", "end"),
    [
        ("daily", datetime(2026, 10, 21), datetime(2026, 10, 21, 23, 59, 59, 999999)),
        ("weekly", datetime(2026, 10, 18), datetime(2026, 10, 24, 23, 59, 59, 999999)),
        ("monthly", datetime(2026, 10, 1), datetime(2026, 10, 31, 23, 59, 59, 999999)),
        ("yearly", datetime(2026, 1, 1), datetime(2026, 12, 31, 23, 59, 59, 999999)),
    ],
)
def test_window(view, start, end) -> None:
    assert calendar.window(view, REF) == (start, end)


def test_weekly_window_on_sunday_starts_that_day() -> None:
    start, end = calendar.window("weekly", date(2026, 10, 18))
    assert start == datetime(2026, 10, 18)
    assert end.date() == date(2026, 10, 24)


def test_unknown_view_is_rejected() -> None:
    with pytest.raises(ValueError):
        calendar.window("hourly", REF)


def test_tasks_without_due_date_never_visible() -> None:
    undated = _task()
    for view in calendar.VIEWS:
        assert calendar.filter_tasks([undated], view, REF) == []


def test_wednesday_task_visible_in_week_but_daily_only_on_wednesday() -> None:
    task = Task(title="standup notes", due_date=datetime(2026, 10, 21, 10, 0), category="weekly")
    monday = datetime(2026, 10, 19, 9, 0)

    assert calendar.filter_tasks([task], "weekly", monday) == [task]
    assert calendar.filter_tasks([task], "daily", monday) == []
    assert calendar.filter_tasks([task], "daily", REF) == [task]


def test_filter_tasks_window_edges_and_priority() -> None:
    midnight = _task(datetime(2026, 10, 1, 0, 0), priority="high")
    last_moment = _task(datetime(2026, 10, 31, 23, 59, 59), priority="low")
    next_month = _task(datetime(2026, 11, 1, 0, 0), priority="high")
    tasks = [midnight, last_moment, next_month]

    assert calendar.filter_tasks(tasks, "monthly", REF) == [midnight, last_moment]
    assert calendar.filter_tasks(tasks, "monthly", REF, priority="high") == [midnight]
    with pytest.raises(ValueError):
        calendar.filter_tasks(tasks, "monthly", REF, priority="urgent")


def test_calendar_days() -> None:
    assert calendar.calendar_days("daily", REF) == [date(2026, 10, 21)]

    week = calendar.calendar_days("weekly", REF)
    assert week[0] == date(2026, 10, 18)
    assert week[-1] == date(2026, 10, 24)

    month = calendar.calendar_days("monthly", REF)
    assert len(month) == 42
    # October 1st 2026 is a Thursday
    assert month[0] == date(2026, 9, 27)
    assert month[-1] == date(2026, 11, 7)
    assert all(b - a == timedelta(days=1) for a, b in zip(month, month[1:]))

    year = calendar.calendar_days("yearly", REF)
    assert year == [date(2026, m, 1) for m in range(1, 13)]


def test_group_by_date_and_month() -> None:
    a = _task(datetime(2026, 10, 21, 9, 0))
    b = _task(datetime(2026, 10, 21, 18, 0))
    c = _task(datetime(2026, 12, 2, 8, 0))
    undated = _task()

    assert calendar.group_by_date([a, b, c, undated]) == {
        date(2026, 10, 21): [a, b],
        date(2026, 12, 2): [c],
    }
    assert calendar.group_by_month([a, b, c, undated]) == {
        date(2026, 10, 1): [a, b],
        date(2026, 12, 1): [c],
    }


def test_group_by_hour() -> None:
    a = _task(datetime(2026, 10, 21, 9, 15))
    b = _task(datetime(2026, 10, 21, 9, 45))
    other_day = _task(datetime(2026, 10, 22, 9, 0))

    assert calendar.group_by_hour([a, b, other_day], REF) == {9: [a, b]}


@pytest.mark.parametrize(
    ("completed", "total", "level"),
    [(7, 10, "high"), (10, 10, "high"), (3, 10, "medium"), (6, 10, "medium"), (2, 10, "low"), (0, 3, "low")],
)
def test_completion_level_thresholds(completed, total, level) -> None:
    due = datetime(2026, 10, 21, 9, 0)
    tasks = [_task(due, status="completed") for _ in range(completed)]
    tasks += [_task(due) for _ in range(total - completed)]
    assert calendar.completion_level(tasks) == level


def test_completion_level_ignores_undated_and_empty() -> None:
    assert calendar.completion_level([]) is None
    assert calendar.completion_level([_task(status="completed")]) is None

    due = datetime(2026, 10, 21, 9, 0)
    tasks = [_task(due, status="completed"), _task(status="todo"), _task(status="todo")]
    assert calendar.completion_level(tasks) == "high"


def test_completion_by_bucket() -> None:
    done = _task(datetime(2026, 10, 21, 9, 0), status="completed")
    open_ = _task(datetime(2026, 10, 22, 9, 0))

    assert calendar.completion_by_date([done, open_]) == {
        date(2026, 10, 21): "high",
        date(2026, 10, 22): "low",
    }
    assert calendar.completion_by_month([done, open_]) == {date(2026, 10, 1): "medium"}


def test_shift() -> None:
    assert calendar.shift("daily", REF, -1) == datetime(2026, 10, 20, 15, 45)
    assert calendar.shift("weekly", REF) == datetime(2026, 10, 28, 15, 45)
    assert calendar.shift("monthly", date(2026, 1, 31)) == date(2026, 2, 28)
    assert calendar.shift("monthly", date(2026, 1, 15), -2) == date(2025, 11, 15)
    assert calendar.shift("yearly", date(2024, 2, 29)) == date(2025, 2, 28)


def test_calendar_title() -> None:
    assert calendar.calendar_title("daily", REF) == "Wednesday, October 21, 2026"
    assert calendar.calendar_title("weekly", REF) == "Oct 18 - Oct 24, 2026"
    assert calendar.calendar_title("monthly", REF) == "October 2026"
    assert calendar.calendar_title("yearly", REF) == "2026"
