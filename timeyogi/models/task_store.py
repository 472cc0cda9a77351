from pymongo import ASCENDING, ReturnDocument

from timeyogi.models.task_model import Task, new_task_document, task_update_document
from timeyogi.utils.db import to_object_id, utcnow


class TaskNotFound(LookupError):
    def __init__(self, task_id):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class TaskStore:
    """Create/read/update/delete over the ``tasks`` collection.

    Unknown or malformed ids raise TaskNotFound. Validation errors
    (TaskValidationError) and pymongo errors propagate to the caller.
    """

    def __init__(self, db):
        self.collection = db["tasks"]

    def _find(self, task_id):
        oid = to_object_id(task_id)
        doc = self.collection.find_one({"_id": oid}) if oid is not None else None
        if doc is None:
            raise TaskNotFound(task_id)
        return doc

    def list_tasks(self):
        cursor = self.collection.find().sort([("created_at", ASCENDING), ("_id", ASCENDING)])
        return [Task.from_doc(d) for d in cursor]

    def get_task(self, task_id):
        return Task.from_doc(self._find(task_id))

    def create_task(self, payload):
        doc = new_task_document(payload, utcnow())
        res = self.collection.insert_one(doc)
        return Task.from_doc(self.collection.find_one({"_id": res.inserted_id}))

    def update_task(self, task_id, payload):
        existing = self._find(task_id)
        updates = task_update_document(existing, payload, utcnow())
        res = self.collection.find_one_and_update(
            {"_id": existing["_id"]},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        if not res:
            # deleted between the read and the write
            raise TaskNotFound(task_id)
        return Task.from_doc(res)

    def delete_task(self, task_id):
        oid = to_object_id(task_id)
        res = self.collection.delete_one({"_id": oid}) if oid is not None else None
        if res is None or res.deleted_count == 0:
            raise TaskNotFound(task_id)
