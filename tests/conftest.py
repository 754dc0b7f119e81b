# tests/conftest.py
import os
import tempfile
import pytest
from fastapi.testclient import TestClient

from relay.deps import get_dji_client, get_store
from relay.main import create_app
from relay.settings import Settings
from fakes import FakeStore


# --- Temporary SQLite DB file for the whole test session ---
@pytest.fixture(scope="session")
def tmp_db_url():
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    url = f"sqlite:///{path}"
    yield url
    try:
        os.remove(path)
    except OSError:
        pass


# --- App wired to the local SQL store, no broker configured ---
@pytest.fixture
def settings(tmp_db_url):
    return Settings(store_backend="sql", local_db_url=tmp_db_url, dji_app_key="test-key")


@pytest.fixture
def app(settings):
    app = create_app(settings)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


# --- Swap the store for one that records calls ---
@pytest.fixture
def fake_store(app):
    store = FakeStore()
    app.dependency_overrides[get_store] = lambda: store
    return store


@pytest.fixture
def override_dji(app):
    def _override(dji):
        app.dependency_overrides[get_dji_client] = lambda: dji
    return _override
