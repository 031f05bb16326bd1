import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

import pytest
from fastapi.testclient import TestClient

from eehub.app import create_app
from eehub.auth.session import MemorySessionStore
from eehub.config import Settings
from eehub.store import MemoryDocumentStore, StoreError


class FailingStore:
    """Every call fails the way an unreachable backend would."""

    def find_by(self, collection, field_name, value, *, limit=None):
        raise StoreError("backend unavailable")

    def get(self, collection, doc_id):
        raise StoreError("backend unavailable")

    def list(self, collection):
        raise StoreError("backend unavailable")

    def add(self, collection, data):
        raise StoreError("backend unavailable")


@pytest.fixture()
def settings() -> Settings:
    return Settings(secret_key="test-secret", store_backend="memory")


@pytest.fixture()
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture()
def sessions(settings) -> MemorySessionStore:
    return MemorySessionStore(settings.session_max_age)


@pytest.fixture()
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture()
def client(settings, store, sessions) -> TestClient:
    return TestClient(create_app(settings, store=store, sessions=sessions))


@pytest.fixture()
def content(store) -> dict:
    """One document per content collection; returns their ids."""
    return {
        "articles": store.add("articles", {"title": "Why wetlands matter", "body": "Wetlands store carbon."}),
        "activities": store.add("activities", {"title": "Bird count", "description": "Count birds for 15 min."}),
        "forum": store.add("forum", {"title": "Native plants?", "author": "annx", "body": "Shady gardens."}),
    }


def signup(client, firstname="Ann", username="annx", email="a@x.com", password="pw123"):
    return client.post(
        "/signup",
        data={"firstname": firstname, "Username": username, "email": email, "password": password},
    )


def signin(client, email="a@x.com", password="pw123"):
    return client.post("/signin", data={"email": email, "password": password}, follow_redirects=False)


@pytest.fixture()
def signed_in(client) -> TestClient:
    signup(client)
    r = signin(client)
    assert r.status_code == 303
    return client
