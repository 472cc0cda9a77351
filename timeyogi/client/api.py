import logging
import os
from datetime import date

import requests

from timeyogi.models.task_model import Task
from timeyogi.views.calendar import as_local

logger = logging.getLogger(__name__)

API_URL = os.environ.get("TIMEYOGI_API_URL", "http://localhost:5001/api")


def _encode(fields):
    """JSON-ready copy of ``fields``; naive datetimes and plain dates are local time."""
    return {
        k: as_local(v).astimezone().isoformat() if isinstance(v, date) else v
        for k, v in fields.items()
    }


class TaskAPI:
    """HTTP client for the task endpoints.

    Responses are turned into Task objects with parsed timestamps. Any
    failure (connection error or non-2xx status) is logged and re-raised
    as a ``requests.RequestException``.
    """

    def __init__(self, base_url=API_URL, session=None, timeout=10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        resp = self.session.request(
            method,
            f"{self.base_url}{path}",
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
            **kwargs,
        )
        resp.raise_for_status()
        return resp

    def get_all_tasks(self):
        try:
            resp = self._request("GET", "/tasks")
        except requests.RequestException:
            logger.exception("Error fetching tasks")
            raise
        return [Task.from_json(item) for item in resp.json()]

    def get_task(self, task_id):
        try:
            resp = self._request("GET", f"/tasks/{task_id}")
        except requests.RequestException:
            logger.exception("Error fetching task with ID %s", task_id)
            raise
        return Task.from_json(resp.json())

    def create_task(self, fields):
        # the server assigns ids; never send a client-side one
        payload = _encode({k: v for k, v in fields.items() if k != "id"})
        try:
            resp = self._request("POST", "/tasks", json=payload)
        except requests.RequestException:
            logger.exception("Error creating task")
            raise
        return Task.from_json(resp.json())

    def update_task(self, task_id, updates):
        try:
            resp = self._request("PUT", f"/tasks/{task_id}", json=_encode(updates))
        except requests.RequestException:
            logger.exception("Error updating task with ID %s", task_id)
            raise
        return Task.from_json(resp.json())

    def delete_task(self, task_id):
        try:
            self._request("DELETE", f"/tasks/{task_id}")
        except requests.RequestException:
            logger.exception("Error deleting task with ID %s", task_id)
            raise
