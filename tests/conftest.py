import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_path():
    """Allow tests to import project modules without installation."""
    repo_root = Path(__file__).resolve().parent.parent
    repo_str = str(repo_root)
    if repo_str not in sys.path:
        sys.path.insert(0, repo_str)


_ensure_repo_root_on_path()

from src.document_store import InMemoryDocumentStore  # noqa: E402
from src.load_data import DataStore  # noqa: E402


@pytest.fixture(scope="session")
def data_store():
    return DataStore().load_data()


@pytest.fixture
def memory_store():
    return InMemoryDocumentStore()


@pytest.fixture
def seeded_store(memory_store, data_store):
    from src.models import seed_reference_data

    seed_reference_data(memory_store, data_store)
    return memory_store


@pytest.fixture
def api_client(monkeypatch, seeded_store):
    """FastAPI client backed by a fresh in-memory store and a generous rate limit."""
    from fastapi.testclient import TestClient

    from src import api
    from tests.helpers import isolate_app

    isolate_app(monkeypatch, api, seeded_store)
    return TestClient(api.app)


@pytest.fixture
def flask_client(monkeypatch, seeded_store):
    import backend.app as backend_app
    from tests.helpers import isolate_app

    isolate_app(monkeypatch, backend_app, seeded_store)
    return backend_app.app.test_client()
