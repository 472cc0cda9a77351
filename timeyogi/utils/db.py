from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from flask import current_app
from pymongo import MongoClient


def init_app(app):
    """Create the application's MongoClient and register it as an extension.

    The client is shared by every request; pymongo pools connections
    internally. ``MONGO_CLIENT_FACTORY`` may be set in the config to build
    a different client (tests use mongomock).
    """
    factory = app.config.get("MONGO_CLIENT_FACTORY") or MongoClient
    client = factory(
        app.config["MONGO_URI"],
        serverSelectionTimeoutMS=app.config.get("MONGO_TIMEOUT_MS", 2000),
    )
    app.extensions["mongo"] = client
    app.logger.info("MongoDB client ready db=%s", app.config["MONGO_DB_NAME"])
    return client


def get_db():
    client = current_app.extensions["mongo"]
    return client[current_app.config["MONGO_DB_NAME"]]


def to_object_id(value):
    """Return ``value`` as an ObjectId, or None when it is not a valid one."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def utcnow():
    # BSON keeps datetimes as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)
