"""Tests for stored suggestion preferences."""

import pytest

from models.entities import PartialSuggestionConfig
from services.preferences_service import PreferencesService
from services.validation import PreferencesValidationError

USER_ID = "user_1"


@pytest.fixture
def service(store) -> PreferencesService:
    return PreferencesService(store)


def test_get_returns_defaults_without_stored_row(service):
    assert service.get(USER_ID) == PartialSuggestionConfig(
        max_daily_minutes=480,
        buffer_minutes=30,
        prefer_mornings=True,
        max_high_priority_per_day=2,
    )


def test_upsert_creates_with_defaults(service, store):
    saved = service.upsert(USER_ID, PartialSuggestionConfig(buffer_minutes=10))

    assert saved.buffer_minutes == 10
    assert saved.max_daily_minutes == 480
    assert store.get_preferences(USER_ID).prefer_mornings is True


def test_upsert_only_touches_given_fields(service):
    service.upsert(USER_ID, PartialSuggestionConfig(buffer_minutes=10, max_daily_minutes=300))
    saved = service.upsert(USER_ID, PartialSuggestionConfig(prefer_mornings=False))

    assert saved == PartialSuggestionConfig(
        max_daily_minutes=300,
        buffer_minutes=10,
        prefer_mornings=False,
        max_high_priority_per_day=2,
    )
    assert service.get(USER_ID) == saved


def test_timezone_is_never_stored(service, store):
    service.upsert(USER_ID, PartialSuggestionConfig(timezone="Asia/Tokyo"))

    assert store.get_preferences(USER_ID).timezone is None
    assert service.get(USER_ID).timezone is None


def test_invalid_update_is_rejected(service, store):
    with pytest.raises(PreferencesValidationError):
        service.upsert(USER_ID, PartialSuggestionConfig(buffer_minutes=-1))

    assert store.get_preferences(USER_ID) is None
