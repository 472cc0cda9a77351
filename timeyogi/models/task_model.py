from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

PRIORITIES = ("low", "medium", "high")
STATUSES = ("todo", "in-progress", "completed")
CATEGORIES = ("daily", "weekly", "monthly", "yearly")

TODO = "todo"
IN_PROGRESS = "in-progress"
COMPLETED = "completed"
# States a completed task can be restored to
OPEN_STATUSES = (TODO, IN_PROGRESS)

# JSON field name -> MongoDB document key
FIELD_KEYS = {
    "title": "title",
    "description": "description",
    "dueDate": "due_date",
    "priority": "priority",
    "status": "status",
    "category": "category",
    "prevStatus": "prev_status",
}

# Server-managed fields, never taken from a request body
PROTECTED_FIELDS = ("id", "_id", "createdAt", "updatedAt")


class TaskValidationError(ValueError):
    """A task payload carried a value the task schema does not accept."""


def parse_datetime(value) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed); empty means unset."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise TaskValidationError(f"Invalid timestamp: {value!r}")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise TaskValidationError(f"Invalid timestamp: {value!r}") from exc


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        # stored datetimes are naive UTC
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _choice(name, value, choices, *, optional=True):
    if value is None or value == "":
        if optional:
            return None
        raise TaskValidationError(f"{name} is required")
    if value not in choices:
        raise TaskValidationError(f"Invalid {name}: {value!r}")
    return value


def clean_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a JSON payload and map it onto document keys.

    Only fields present in ``payload`` are returned. Server-managed fields
    (id, timestamps) and unknown keys are dropped. A ``prevStatus`` of
    ``completed`` is ignored since it is not a state to return to.
    """
    fields: Dict[str, Any] = {}
    for name, key in FIELD_KEYS.items():
        if name not in payload:
            continue
        value = payload[name]
        if name == "title":
            if not isinstance(value, str) or not value.strip():
                raise TaskValidationError("Title is required")
            value = value.strip()
        elif name == "description":
            if value is not None and not isinstance(value, str):
                raise TaskValidationError("Description must be text")
        elif name == "dueDate":
            value = to_utc_naive(parse_datetime(value))
        elif name == "priority":
            value = _choice(name, value, PRIORITIES)
        elif name == "status":
            value = _choice(name, value, STATUSES, optional=False)
        elif name == "category":
            value = _choice(name, value, CATEGORIES, optional=False)
        elif name == "prevStatus":
            if value == COMPLETED:
                continue
            value = _choice(name, value, OPEN_STATUSES)
        fields[key] = value
    return fields


def apply_status_change(current: Dict[str, Any], updates: Dict[str, Any]) -> Tuple[str, Optional[str]]:
    """Return the ``(status, prev_status)`` pair to store after ``updates``.

    Entering ``completed`` from X always records X; a prev_status in the
    update cannot override the status actually left. Staying completed
    keeps whatever was stored. Any status other than completed carries no
    prev_status.
    """
    old_status = current.get("status") or TODO
    new_status = updates.get("status") or old_status
    if new_status != COMPLETED:
        return new_status, None
    if old_status == COMPLETED:
        return new_status, current.get("prev_status")
    return new_status, old_status


def new_task_document(payload: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    fields = clean_fields(payload)
    if "title" not in fields:
        raise TaskValidationError("Title is required")
    doc = {
        "title": fields["title"],
        "description": fields.get("description"),
        "due_date": fields.get("due_date"),
        "priority": fields.get("priority"),
        "category": fields.get("category") or "daily",
    }
    doc["status"], doc["prev_status"] = apply_status_change({"status": TODO}, fields)
    if doc["status"] == COMPLETED and fields.get("prev_status"):
        # nothing was left on creation, so the requested state stands
        doc["prev_status"] = fields["prev_status"]
    doc["created_at"] = now
    doc["updated_at"] = now
    return doc


def task_update_document(existing: Dict[str, Any], payload: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    """Build the ``$set`` document for a partial update of ``existing``."""
    updates = clean_fields(payload)
    if "status" in updates or "prev_status" in updates:
        updates["status"], updates["prev_status"] = apply_status_change(existing, updates)
    updates["updated_at"] = now
    return updates


@dataclass
class Task:
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[str] = None  # low | medium | high
    status: str = TODO
    category: str = "daily"
    # Only set while completed: the status an "uncomplete" restores
    prev_status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    id: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "Task":
        return cls(
            id=str(doc["_id"]),
            title=doc.get("title") or "",
            description=doc.get("description"),
            due_date=doc.get("due_date"),
            priority=doc.get("priority"),
            status=doc.get("status") or TODO,
            category=doc.get("category") or "daily",
            prev_status=doc.get("prev_status"),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Task":
        """Build a Task from an API response body, parsing its timestamps."""
        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            description=data.get("description"),
            due_date=parse_datetime(data.get("dueDate")),
            priority=data.get("priority"),
            status=data.get("status") or TODO,
            category=data.get("category") or "daily",
            prev_status=data.get("prevStatus"),
            created_at=parse_datetime(data.get("createdAt")),
            updated_at=parse_datetime(data.get("updatedAt")),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": format_datetime(self.due_date),
            "priority": self.priority,
            "status": self.status,
            "category": self.category,
            "prevStatus": self.prev_status,
            "createdAt": format_datetime(self.created_at),
            "updatedAt": format_datetime(self.updated_at),
        }
