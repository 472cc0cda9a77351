"""Time windows and calendar buckets for the daily/weekly/monthly/yearly views.

All comparisons happen on naive local datetimes: timezone-aware due dates
(as returned by the API) are converted to local time first. Weeks start on
Sunday.
"""

import calendar
from collections import defaultdict
from datetime import date, datetime, time, timedelta

from timeyogi.models.task_model import CATEGORIES, COMPLETED, PRIORITIES

VIEWS = CATEGORIES

HIGH_COMPLETION = 0.7
MEDIUM_COMPLETION = 0.3

# Cells shown by the month grid: six full weeks
MONTH_GRID_DAYS = 42


def _check_view(view):
    if view not in VIEWS:
        raise ValueError(f"Unknown view: {view!r}")


def as_local(value):
    """Return ``value`` as a naive local datetime; dates map to midnight."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}")


def _days_since_sunday(day):
    # date.weekday() counts from Monday
    return (day.weekday() + 1) % 7


def add_months(value, months):
    """Move ``value`` by whole months, clamping the day to the month length."""
    index = value.year * 12 + value.month - 1 + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def window(view, reference):
    """Return the inclusive ``(start, end)`` datetimes of the period around ``reference``."""
    _check_view(view)
    day = as_local(reference).date()
    if view == "daily":
        start = day
        following = day + timedelta(days=1)
    elif view == "weekly":
        start = day - timedelta(days=_days_since_sunday(day))
        following = start + timedelta(days=7)
    elif view == "monthly":
        start = day.replace(day=1)
        following = add_months(start, 1)
    else:
        start = date(day.year, 1, 1)
        following = date(day.year + 1, 1, 1)
    return as_local(start), as_local(following) - timedelta(microseconds=1)


def filter_tasks(tasks, view, reference, priority="all"):
    """Tasks due inside the view's window, optionally of a single priority.

    Tasks without a due date never show up in a windowed view.
    """
    if priority != "all" and priority not in PRIORITIES:
        raise ValueError(f"Unknown priority filter: {priority!r}")
    start, end = window(view, reference)
    visible = [t for t in tasks if t.due_date is not None and start <= as_local(t.due_date) <= end]
    if priority != "all":
        visible = [t for t in visible if t.priority == priority]
    return visible


def calendar_days(view, reference):
    """The dates of the cells drawn for ``view``.

    The year grid has one cell per month, keyed by the first of the month.
    """
    _check_view(view)
    day = as_local(reference).date()
    if view == "daily":
        return [day]
    if view == "weekly":
        start = day - timedelta(days=_days_since_sunday(day))
        return [start + timedelta(days=i) for i in range(7)]
    if view == "monthly":
        first = day.replace(day=1)
        start = first - timedelta(days=_days_since_sunday(first))
        return [start + timedelta(days=i) for i in range(MONTH_GRID_DAYS)]
    return [date(day.year, month, 1) for month in range(1, 13)]


def group_by_date(tasks):
    grouped = defaultdict(list)
    for task in tasks:
        if task.due_date is not None:
            grouped[as_local(task.due_date).date()].append(task)
    return dict(grouped)


def group_by_month(tasks):
    """Bucket tasks by due month, keyed by the first day of that month."""
    grouped = defaultdict(list)
    for task in tasks:
        if task.due_date is not None:
            grouped[as_local(task.due_date).date().replace(day=1)].append(task)
    return dict(grouped)


def group_by_hour(tasks, day):
    """Hour slots (0-23) of the daily grid for tasks due on ``day``."""
    day = as_local(day).date()
    grouped = defaultdict(list)
    for task in tasks:
        if task.due_date is None:
            continue
        due = as_local(task.due_date)
        if due.date() == day:
            grouped[due.hour].append(task)
    return dict(grouped)


def completion_level(tasks):
    """Return "high", "medium" or "low" for a bucket, None when it is empty."""
    dated = [t for t in tasks if t.due_date is not None]
    if not dated:
        return None
    ratio = sum(1 for t in dated if t.status == COMPLETED) / len(dated)
    if ratio >= HIGH_COMPLETION:
        return "high"
    if ratio >= MEDIUM_COMPLETION:
        return "medium"
    return "low"


def completion_by_date(tasks):
    return {key: completion_level(bucket) for key, bucket in group_by_date(tasks).items()}


def completion_by_month(tasks):
    return {key: completion_level(bucket) for key, bucket in group_by_month(tasks).items()}


def shift(view, reference, steps=1):
    """Move ``reference`` forward (or back, for negative steps) by whole periods."""
    _check_view(view)
    if view == "daily":
        return reference + timedelta(days=steps)
    if view == "weekly":
        return reference + timedelta(days=7 * steps)
    if view == "monthly":
        return add_months(reference, steps)
    return add_months(reference, 12 * steps)


def calendar_title(view, reference):
    _check_view(view)
    day = as_local(reference).date()
    if view == "daily":
        return f"{day:%A}, {day:%B} {day.day}, {day.year}"
    if view == "weekly":
        start = day - timedelta(days=_days_since_sunday(day))
        end = start + timedelta(days=6)
        return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
    if view == "monthly":
        return f"{day:%B} {day.year}"
    return str(day.year)
