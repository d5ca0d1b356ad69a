"""In-memory session store for local runs and tests."""

from dataclasses import replace
from datetime import datetime
from typing import Optional

from models.entities import (
    AvailabilityWindow,
    ExistingSession,
    PartialSuggestionConfig,
    SessionStatus,
    SessionTypeInfo,
)
from services.calendar_service import overlaps
from services.validation import validate_availability_window


class InMemorySessionStore:
    """In-memory store implementing the same lookups as SessionStoreClient."""

    def __init__(self):
        """Initialize with no data."""
        self._availability: dict[str, list[AvailabilityWindow]] = {}
        self._sessions: dict[str, list[tuple[ExistingSession, SessionStatus]]] = {}
        self._session_types: dict[str, dict[str, SessionTypeInfo]] = {}
        self._preferences: dict[str, PartialSuggestionConfig] = {}

    def set_availability(
        self,
        user_id: str,
        windows: list[AvailabilityWindow]
    ) -> list[AvailabilityWindow]:
        """Replace all availability windows for a user."""
        validated = [validate_availability_window(w) for w in windows]
        self._availability[user_id] = validated
        return self.list_availability(user_id)

    def add_session(
        self,
        user_id: str,
        session: ExistingSession,
        status: SessionStatus = "SCHEDULED"
    ) -> ExistingSession:
        """Record a session for a user."""
        self._sessions.setdefault(user_id, []).append((session, status))
        return session

    def add_session_type(self, user_id: str, session_type: SessionTypeInfo) -> SessionTypeInfo:
        """Register a session type owned by a user."""
        self._session_types.setdefault(user_id, {})[session_type.id] = session_type
        return session_type

    def list_availability(self, user_id: str) -> list[AvailabilityWindow]:
        """Availability windows sorted by day of week, then start time."""
        windows = self._availability.get(user_id, [])
        return sorted(windows, key=lambda w: (w.day_of_week, w.start_time))

    def list_scheduled_sessions(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime
    ) -> list[ExistingSession]:
        """Scheduled sessions overlapping [range_start, range_end), earliest first."""
        sessions = [
            session
            for session, status in self._sessions.get(user_id, [])
            if status == "SCHEDULED"
            and overlaps(range_start, range_end, session.start_time, session.end_time)
        ]
        return sorted(sessions, key=lambda s: s.start_time)

    def get_session_type(self, user_id: str, type_id: str) -> Optional[SessionTypeInfo]:
        """Session type by ID, only if owned by the user."""
        return self._session_types.get(user_id, {}).get(type_id)

    def get_preferences(self, user_id: str) -> Optional[PartialSuggestionConfig]:
        """Stored preferences, or None if the user never saved any."""
        return self._preferences.get(user_id)

    def save_preferences(
        self,
        user_id: str,
        preferences: PartialSuggestionConfig
    ) -> PartialSuggestionConfig:
        """Store preferences; timezone is not a stored preference."""
        stored = replace(preferences, timezone=None)
        self._preferences[user_id] = stored
        return stored
