import pytest
from fastapi.testclient import TestClient

from expense_tracker.db.storage import KeyValueStore, get_store
from expense_tracker.main import app


@pytest.fixture
def store(tmp_path):
    return KeyValueStore(tmp_path / "tracker.json")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
