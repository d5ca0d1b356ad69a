"""Suggestion engine: ranked time slots for a new session."""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

import pytz

from models.entities import (
    SessionTypeInfo,
    Suggestion,
    SuggestionRequest,
    SuggestionResult,
)
from services.calendar_service import LocalCalendar, add_minutes
from services.candidate_generator import generate_candidates
from services.config_resolver import DEFAULT_CONFIG, resolve_config
from services.day_load import build_day_schedules, schedule_for
from services.response_formatter import ResponseFormatter
from services.slot_scorer import score_slot

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 3
MAX_SUGGESTIONS = 10


def utc_now() -> datetime:
    return datetime.now(pytz.UTC)


class SuggestionEngine:
    """Engine for finding and ranking open slots for a single session."""

    def __init__(
        self,
        data_client,
        clock: Optional[Callable[[], datetime]] = None,
        max_suggestions: int = MAX_SUGGESTIONS
    ):
        """
        Initialize suggestion engine.

        Args:
            data_client: Store providing list_availability, list_scheduled_sessions,
                get_session_type and get_preferences
            clock: Returns the current UTC instant (defaults to the system clock)
            max_suggestions: Maximum number of suggestions to return
        """
        self.data_client = data_client
        self.clock = clock or utc_now
        self.max_suggestions = max_suggestions

    def get_suggestions(self, user_id: str, request: SuggestionRequest) -> SuggestionResult:
        """
        Suggest slots for one session of ``request.duration`` minutes.

        The request is assumed to be validated already. Store failures
        propagate unchanged; missing preferences or session types fall
        back to defaults.

        Args:
            user_id: Authenticated user
            request: Date range, duration, optional session type and config overrides

        Returns:
            SuggestionResult with suggestions sorted by score (best first)
        """
        # Defaults -> stored preferences -> request overrides
        stored = self.data_client.get_preferences(user_id)
        config = resolve_config(DEFAULT_CONFIG, stored, request.config)
        calendar = LocalCalendar(config.timezone)
        logger.debug("Resolved suggestion config for user %s: %s", user_id, config)

        # Whole local days covering the requested range
        start_day = calendar.local_date(request.start_date)
        end_day = calendar.local_date(request.end_date)
        range_start = calendar.local_instant(start_day, "00:00")
        range_end = calendar.local_instant(end_day + timedelta(days=1), "00:00")

        windows = self.data_client.list_availability(user_id)
        if not windows:
            logger.info("User %s has no availability windows", user_id)
            return SuggestionResult(
                suggestions=[],
                message=ResponseFormatter.no_availability_message()
            )

        # Sessions just outside the range still constrain buffer and spacing
        margin = 2 * config.buffer_minutes
        sessions = self.data_client.list_scheduled_sessions(
            user_id,
            add_minutes(range_start, -margin),
            add_minutes(range_end, margin)
        )

        priority = DEFAULT_PRIORITY
        session_type: Optional[SessionTypeInfo] = None
        if request.session_type_id:
            session_type = self.data_client.get_session_type(user_id, request.session_type_id)
            if session_type is not None:
                priority = session_type.priority

        day_schedules = build_day_schedules(sessions, calendar)

        candidates = generate_candidates(
            start_day,
            end_day,
            windows,
            sessions,
            request.duration,
            config,
            self.clock(),
            calendar
        )
        if not candidates:
            logger.info("No feasible slots for user %s between %s and %s", user_id, start_day, end_day)
            return SuggestionResult(
                suggestions=[],
                message=ResponseFormatter.no_slots_message()
            )

        for candidate in candidates:
            candidate.score, candidate.reasons = score_slot(
                candidate,
                priority,
                schedule_for(day_schedules, candidate.start_time, calendar),
                sessions,
                config,
                calendar
            )

        # Stable sort: ties keep generation order
        ranked = sorted(candidates, key=lambda c: c.score, reverse=True)[:self.max_suggestions]

        suggestions = [
            Suggestion(
                start_time=candidate.start_time,
                end_time=candidate.end_time,
                score=candidate.score,
                reasons=candidate.reasons or [ResponseFormatter.DEFAULT_REASON],
                session_type=session_type
            )
            for candidate in ranked
        ]

        logger.info(
            "Generated %d candidate slots for user %s, returning %d",
            len(candidates), user_id, len(suggestions)
        )
        return SuggestionResult(
            suggestions=suggestions,
            message=ResponseFormatter.found_message(len(suggestions))
        )
