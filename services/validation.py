"""Input validation applied before data reaches the suggestion engine."""

import re
from datetime import timedelta
from typing import Optional

from models.entities import AvailabilityWindow, PartialSuggestionConfig, SuggestionRequest
from services import settings

MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 480

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class SuggestionRequestError(ValueError):
    """Raised when a suggestion request is malformed."""


class AvailabilityValidationError(ValueError):
    """Raised when an availability window is malformed."""


class PreferencesValidationError(ValueError):
    """Raised when a preferences update is malformed."""


def validate_suggestion_request(
    request: SuggestionRequest,
    max_range_days: Optional[int] = None
) -> SuggestionRequest:
    """
    Reject requests the engine must never see.

    Args:
        request: Incoming suggestion request
        max_range_days: Longest allowed range in days (defaults to SUGGESTION_MAX_RANGE_DAYS)

    Returns:
        The same request, for chaining

    Raises:
        SuggestionRequestError: on a bad duration or date range
    """
    if max_range_days is None:
        max_range_days = settings.SUGGESTION_MAX_RANGE_DAYS

    duration = request.duration
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise SuggestionRequestError("Duration must be a whole number of minutes")
    if not MIN_DURATION_MINUTES <= duration <= MAX_DURATION_MINUTES:
        raise SuggestionRequestError(
            f"Duration must be between {MIN_DURATION_MINUTES} and {MAX_DURATION_MINUTES} minutes"
        )

    if request.end_date < request.start_date:
        raise SuggestionRequestError("End date must not be before start date")
    if request.end_date - request.start_date >= timedelta(days=max_range_days):
        raise SuggestionRequestError(f"Date range must not exceed {max_range_days} days")

    return request


def validate_availability_window(window: AvailabilityWindow) -> AvailabilityWindow:
    """Check day of week, HH:MM format and start < end."""
    if not 0 <= window.day_of_week <= 6:
        raise AvailabilityValidationError("Day of week must be between 0 (Sunday) and 6 (Saturday)")
    for value in (window.start_time, window.end_time):
        if not TIME_PATTERN.match(value):
            raise AvailabilityValidationError(f"Time must be in HH:MM format: {value!r}")
    if window.start_time >= window.end_time:
        raise AvailabilityValidationError("End time must be after start time")
    return window


def validate_preferences(preferences: PartialSuggestionConfig) -> PartialSuggestionConfig:
    """Check the numeric ranges of a (partial) preferences update."""
    if preferences.max_daily_minutes is not None and preferences.max_daily_minutes <= 0:
        raise PreferencesValidationError("Max daily minutes must be positive")
    if preferences.buffer_minutes is not None and preferences.buffer_minutes < 0:
        raise PreferencesValidationError("Buffer minutes must not be negative")
    if (
        preferences.max_high_priority_per_day is not None
        and preferences.max_high_priority_per_day < 0
    ):
        raise PreferencesValidationError("Max high-priority sessions per day must not be negative")
    return preferences
