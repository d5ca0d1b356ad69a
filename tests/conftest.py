"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest
import pytz

from models.entities import AvailabilityWindow, PartialSuggestionConfig, SuggestionConfig
from services.calendar_service import LocalCalendar
from services.config_resolver import resolve_config
from services.session_store_mock import InMemorySessionStore

USER_ID = "user_1"

# Sunday 2025-01-05 12:00 UTC; the following Monday is 2025-01-06
NOW = datetime(2025, 1, 5, 12, 0, tzinfo=pytz.UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def utc_config() -> SuggestionConfig:
    """Default tuning in UTC."""
    return resolve_config(override=PartialSuggestionConfig(timezone="UTC"))


@pytest.fixture
def utc_calendar() -> LocalCalendar:
    return LocalCalendar("UTC")


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def monday_morning() -> list[AvailabilityWindow]:
    """Monday 09:00-10:00."""
    return [AvailabilityWindow(day_of_week=1, start_time="09:00", end_time="10:00")]
