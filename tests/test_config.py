# tests/test_config.py
import logging

import pytest

from app.core.config import Settings, get_settings
from app.core.logging_config import configure_logging
from app.schemas.score_weights import DEFAULT_SCORE_WEIGHTS
from app.services.meeting_scorer import get_default_weights


@pytest.fixture()
def fresh_settings():
    get_settings.cache_clear()
    get_default_weights.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_weights.cache_clear()


def test_default_weights_without_overrides(monkeypatch, fresh_settings):
    for key in ("SCORE_LONG_MEETING_MINUTES", "SCORE_HIGH_BAND", "SCORE_MEDIUM_BAND"):
        monkeypatch.delenv(key, raising=False)

    assert get_default_weights() == DEFAULT_SCORE_WEIGHTS


def test_default_weights_apply_threshold_overrides(monkeypatch, fresh_settings):
    monkeypatch.setenv("SCORE_HIGH_BAND", "80")
    monkeypatch.setenv("SCORE_LONG_MEETING_MINUTES", "45")

    weights = get_default_weights()

    assert weights.high_band == 80.0
    assert weights.long_meeting_minutes == 45
    assert weights.medium_band == DEFAULT_SCORE_WEIGHTS.medium_band
    assert weights.decision_made == DEFAULT_SCORE_WEIGHTS.decision_made


def test_configure_logging_sets_app_logger_level():
    configure_logging(Settings(LOG_LEVEL="debug"))
    assert logging.getLogger("app").level == logging.DEBUG

    configure_logging(Settings(LOG_LEVEL="chatty"))
    assert logging.getLogger("app").level == logging.INFO
