import logging
from datetime import datetime

import requests

from timeyogi.views import actions, calendar

logger = logging.getLogger(__name__)

DISPLAY_MODES = ("calendar", "list")
PRIORITY_FILTERS = ("all", "low", "medium", "high")


class TaskManager:
    """View state of the task screen.

    Every mutation goes to the API and is followed by a full re-fetch;
    local state is never patched optimistically. A failed call leaves the
    previous tasks in place and sets ``error`` to a one-line message.
    """

    def __init__(self, api, today=None):
        self.api = api
        self.tasks = []
        self.current_view = "daily"
        self.display_mode = "calendar"
        self.priority_filter = "all"
        self.selected_date = today or datetime.now()
        self.loading = False
        self.error = None

    def _call(self, message, func, *args):
        self.loading = True
        self.error = None
        try:
            func(*args)
        except requests.RequestException:
            logger.exception(message)
            self.error = f"{message}. Please try again later."
            return False
        finally:
            self.loading = False
        self.fetch_tasks()
        return True

    def fetch_tasks(self):
        self.loading = True
        self.error = None
        try:
            self.tasks = self.api.get_all_tasks()
        except requests.RequestException:
            logger.exception("Error fetching tasks")
            self.error = "Failed to fetch tasks. Please try again later."
            self.tasks = []
        finally:
            self.loading = False
        return self.tasks

    def add_task(self, fields):
        return self._call("Failed to add task", self.api.create_task, fields)

    def update_task(self, task_id, updates):
        return self._call("Failed to update task", self.api.update_task, task_id, updates)

    def delete_task(self, task_id):
        return self._call("Failed to delete task", self.api.delete_task, task_id)

    def _apply(self, task, updates):
        if updates is None:
            return False
        return self.update_task(task.id, updates)

    def toggle_play_pause(self, task):
        return self._apply(task, actions.toggle_play_pause(task))

    def cycle_priority(self, task):
        return self._apply(task, actions.cycle_priority(task))

    def toggle_complete(self, task):
        return self._apply(task, actions.toggle_complete(task))

    def change_status(self, task, status):
        return self._apply(task, actions.change_status(task, status))

    def change_category(self, task, category):
        return self._apply(task, actions.change_category(task, category))

    def set_view(self, view):
        if view not in calendar.VIEWS:
            raise ValueError(f"Unknown view: {view!r}")
        self.current_view = view

    def set_priority_filter(self, priority):
        if priority not in PRIORITY_FILTERS:
            raise ValueError(f"Unknown priority filter: {priority!r}")
        self.priority_filter = priority

    def toggle_display_mode(self):
        self.display_mode = "list" if self.display_mode == "calendar" else "calendar"

    def select_date(self, day):
        """Clicking a calendar cell opens that day in the daily view."""
        self.selected_date = day
        self.current_view = "daily"

    def visible_tasks(self):
        return calendar.filter_tasks(
            self.tasks, self.current_view, self.selected_date, self.priority_filter
        )

    def go_previous(self):
        self.selected_date = calendar.shift(self.current_view, self.selected_date, -1)

    def go_next(self):
        self.selected_date = calendar.shift(self.current_view, self.selected_date, 1)
