# tests/conftest.py

from __future__ import annotations

import mongomock
import pytest

from timeyogi.app import create_app
from timeyogi.client.api import TaskAPI

from .fakes import FlaskSession

TEST_DB = "timeyogi_test"


@pytest.fixture()
def app():
    """
    Application wired to an in-memory mongomock server.

    Each test gets an empty ``tasks`` collection.
    """
    app = create_app(
        {
            "TESTING": True,
            "MONGO_URI": "mongodb://localhost",
            "MONGO_DB_NAME": TEST_DB,
            "MONGO_CLIENT_FACTORY": mongomock.MongoClient,
        }
    )
    yield app
    app.extensions["mongo"].drop_database(TEST_DB)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def api(client) -> TaskAPI:
    """TaskAPI whose HTTP calls are served by the Flask test client."""
    return TaskAPI("http://testserver/api", session=FlaskSession(client))
