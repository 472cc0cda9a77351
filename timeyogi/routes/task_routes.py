from flask import Blueprint, current_app, jsonify, request

from timeyogi.models.task_store import TaskNotFound, TaskStore
from timeyogi.utils.db import get_db


tasks_bp = Blueprint("tasks", __name__)


def _store():
    return TaskStore(get_db())


def _not_found():
    return jsonify(error="Task not found"), 404


def _server_error():
    return jsonify(error="Server error"), 500


@tasks_bp.get("/", strict_slashes=False)
def list_tasks():
    try:
        tasks = _store().list_tasks()
    except Exception:  # noqa: BLE001
        current_app.logger.exception("Error fetching tasks")
        return _server_error()
    return jsonify([t.to_json() for t in tasks]), 200


@tasks_bp.get("/<task_id>")
def get_task(task_id):
    try:
        task = _store().get_task(task_id)
    except TaskNotFound:
        return _not_found()
    except Exception:  # noqa: BLE001
        current_app.logger.exception("Error fetching task %s", task_id)
        return _server_error()
    return jsonify(task.to_json()), 200


@tasks_bp.post("/", strict_slashes=False)
def create_task():
    payload = request.get_json(silent=True) or {}
    try:
        # any client-provided id or timestamps are stripped by the store
        task = _store().create_task(payload)
    except Exception:  # noqa: BLE001
        current_app.logger.exception("Error creating task")
        return _server_error()
    return jsonify(task.to_json()), 201


@tasks_bp.put("/<task_id>")
def update_task(task_id):
    payload = request.get_json(silent=True) or {}
    try:
        task = _store().update_task(task_id, payload)
    except TaskNotFound:
        return _not_found()
    except Exception:  # noqa: BLE001
        current_app.logger.exception("Error updating task %s", task_id)
        return _server_error()
    return jsonify(task.to_json()), 200


@tasks_bp.delete("/<task_id>")
def delete_task(task_id):
    try:
        _store().delete_task(task_id)
    except TaskNotFound:
        return _not_found()
    except Exception:  # noqa: BLE001
        current_app.logger.exception("Error deleting task %s", task_id)
        return _server_error()
    return "", 204
