# tests/conftest.py
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from feedback_collector.main import app
from feedback_collector.services.database import get_feedback_collection


class FakeCursor:
    def __init__(self, documents):
        self.documents = documents

    def sort(self, key, direction):
        self.documents = sorted(self.documents, key=lambda doc: doc[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return list(self.documents if length is None else self.documents[:length])


class FakeCollection:
    """
    In-memory stand-in for the Motor collection. Setting `fail` makes
    every call raise as if the server were unreachable.
    """

    def __init__(self):
        self.documents = []
        self.fail = False

    def _check(self):
        if self.fail:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    async def insert_one(self, document):
        self._check()
        document["_id"] = ObjectId()
        self.documents.append(dict(document))
        return SimpleNamespace(inserted_id=document["_id"])

    def find(self, query=None):
        self._check()
        return FakeCursor(list(self.documents))


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def client(collection):
    """Test client whose feedback collection lives in memory."""

    async def override_collection():
        return collection

    app.dependency_overrides[get_feedback_collection] = override_collection
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
