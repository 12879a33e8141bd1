import re
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from config import Settings
from database import CatalogStore


def _matches(doc, query):
    for field, cond in query.items():
        value = doc.get(field)
        if isinstance(cond, dict) and "$regex" in cond:
            flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(cond["$regex"], value, flags):
                return False
        elif value != cond:
            return False
    return True


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs
        self._limit = 0

    def limit(self, n):
        self._limit = n
        return self

    def __iter__(self):
        docs = self._docs[:self._limit] if self._limit else self._docs
        return iter([dict(d) for d in docs])


class FakeCollection:
    """In-memory stand-in for the handful of pymongo Collection calls the app makes."""

    def __init__(self):
        self.docs = []
        self.calls = []
        self.fail_with = None

    def _record(self, name):
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def find(self, query=None):
        self._record("find")
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    def insert_one(self, doc):
        self._record("insert_one")
        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def update_one(self, query, update):
        self._record("update_one")
        for d in self.docs:
            if _matches(d, query):
                d.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def delete_one(self, query):
        self._record("delete_one")
        for i, d in enumerate(self.docs):
            if _matches(d, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase(dict):
    def __missing__(self, name):
        coll = self[name] = FakeCollection()
        return coll


class FakeMongoClient(dict):
    def __init__(self):
        super().__init__()
        self.closed = False

    def __missing__(self, name):
        db = self[name] = FakeDatabase()
        return db

    def close(self):
        self.closed = True


@pytest.fixture
def test_settings():
    return Settings(cors_allowed_origins=["http://allowed.example"], default_list_limit=10)


@pytest.fixture
def store(test_settings):
    return CatalogStore.from_client(FakeMongoClient(), test_settings)


@pytest.fixture
def store_failure():
    return PyMongoError("connection reset by peer")


@pytest.fixture
def client(store, test_settings):
    from api import create_app

    with TestClient(create_app(test_settings, store)) as test_client:
        yield test_client
