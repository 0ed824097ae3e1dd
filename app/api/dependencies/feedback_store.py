# app/api/dependencies/feedback_store.py
from app.services.feedback_store import InMemoryFeedbackStore, get_feedback_store


def get_store() -> InMemoryFeedbackStore:
    """
    FastAPI dependency that provides the feedback store.

    Tests override this dependency to get an isolated store per test.
    """
    return get_feedback_store()
