"""Task actions offered by the list and summary views.

Each function takes the task as currently displayed and returns the partial
update to send to the API, or None when the action is disabled.
"""

from timeyogi.models.task_model import (
    CATEGORIES,
    COMPLETED,
    IN_PROGRESS,
    PRIORITIES,
    STATUSES,
    TODO,
)


def toggle_play_pause(task):
    """Start or pause a task: todo <-> in-progress. Disabled once completed."""
    if task.status == COMPLETED:
        return None
    new_status = TODO if task.status == IN_PROGRESS else IN_PROGRESS
    return {"status": new_status}


def next_priority(priority):
    # unset sorts before low
    if priority not in PRIORITIES:
        return PRIORITIES[0]
    return PRIORITIES[(PRIORITIES.index(priority) + 1) % len(PRIORITIES)]


def cycle_priority(task):
    return {"priority": next_priority(task.priority)}


def toggle_complete(task):
    """Complete a task, or restore a completed one to the status it had."""
    if task.status == COMPLETED:
        return {"status": task.prev_status or TODO, "prevStatus": None}
    return {"status": COMPLETED, "prevStatus": task.status}


def change_status(task, status):
    if status not in STATUSES:
        raise ValueError(f"Invalid status: {status!r}")
    if status == COMPLETED:
        if task.status == COMPLETED:
            # already completed: keep the remembered status
            return {"status": COMPLETED}
        return {"status": COMPLETED, "prevStatus": task.status}
    if task.status == COMPLETED:
        return {"status": status, "prevStatus": None}
    return {"status": status}


def change_category(task, category):
    if category not in CATEGORIES:
        raise ValueError(f"Invalid category: {category!r}")
    return {"category": category}
