import os

import mongomock
import pytest
from pymongo.errors import PyMongoError

# Settings are read at import time, so set them before the app is imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")

import database  # noqa: E402

database.db = mongomock.MongoClient()["mechanic_shop_test"]

from fastapi.testclient import TestClient  # noqa: E402

from auth import get_current_user  # noqa: E402
from main import app  # noqa: E402


class BrokenCollection:
    """Collection whose every call fails like an unreachable server."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise PyMongoError("connection refused")
        return fail


class BrokenDatabase:
    def __getattr__(self, name):
        return BrokenCollection()


@pytest.fixture(autouse=True)
def db():
    yield database.db
    for name in database.db.list_collection_names():
        database.db.drop_collection(name)


@pytest.fixture
def broken_db():
    return BrokenDatabase()


@pytest.fixture
def make_profile(db):
    def _make(user_id, email, full_name=None, role=None, created_at="2024-01-01T00:00:00"):
        profile = {"id": user_id, "email": email, "full_name": full_name, "created_at": created_at}
        db.profiles.insert_one(dict(profile))
        if role is not None:
            db.user_roles.insert_one({"user_id": user_id, "role": role})
        return profile
    return _make


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as():
    def _login(profile):
        app.dependency_overrides[get_current_user] = lambda: profile
        return profile
    return _login
