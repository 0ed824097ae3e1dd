# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.api.dependencies.feedback_store import get_store
from app.main import create_app
from app.services.feedback_store import InMemoryFeedbackStore


@pytest.fixture()
def store() -> InMemoryFeedbackStore:
    """
    Fresh, isolated feedback store for each test.
    """
    return InMemoryFeedbackStore()


@pytest.fixture()
def client(store: InMemoryFeedbackStore) -> TestClient:
    """
    TestClient built through the application factory, with the feedback
    store dependency pointed at the per-test store.
    """
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
