"""Expansion of weekly availability into concrete, conflict-free slots."""

from datetime import date, datetime, timedelta

from models.entities import AvailabilityWindow, CandidateSlot, ExistingSession, SuggestionConfig
from services.calendar_service import LocalCalendar, add_minutes, overlaps

# Slot starts advance in fixed steps, independent of duration and buffer
SLOT_STEP_MINUTES = 30


def has_conflict(
    slot_start: datetime,
    slot_end: datetime,
    sessions: list[ExistingSession],
    buffer_minutes: int
) -> bool:
    """True if the buffered slot overlaps any existing session."""
    padded_start = add_minutes(slot_start, -buffer_minutes)
    padded_end = add_minutes(slot_end, buffer_minutes)
    return any(
        overlaps(padded_start, padded_end, session.start_time, session.end_time)
        for session in sessions
    )


def generate_candidates(
    start_day: date,
    end_day: date,
    windows: list[AvailabilityWindow],
    sessions: list[ExistingSession],
    duration: int,
    config: SuggestionConfig,
    now: datetime,
    calendar: LocalCalendar
) -> list[CandidateSlot]:
    """
    Generate unscored candidate slots between two local dates.

    For each local day in [start_day, end_day], every availability window
    for that weekday is walked in 30-minute steps. A slot is kept only if
    it fits inside the window, does not start before ``now`` and stays at
    least ``config.buffer_minutes`` clear of every existing session.

    Args:
        start_day: First local calendar date (inclusive)
        end_day: Last local calendar date (inclusive)
        windows: Weekly availability windows
        sessions: Already scheduled sessions
        duration: Requested session length in minutes
        config: Resolved configuration
        now: Current instant; earlier slot starts are dropped
        calendar: Calendar for config.timezone

    Returns:
        Candidates in generation order (day, then window order, then time)
    """
    candidates: list[CandidateSlot] = []
    duration_delta = timedelta(minutes=duration)

    for day in calendar.local_days(start_day, end_day):
        day_of_week = calendar.day_of_week(day)
        day_windows = [w for w in windows if w.day_of_week == day_of_week]

        for window in day_windows:
            window_start = calendar.local_instant(day, window.start_time)
            window_end = calendar.local_instant(day, window.end_time)

            # Window can never hold the requested duration
            if window_end - window_start < duration_delta:
                continue

            slot_start = window_start
            while slot_start + duration_delta <= window_end:
                slot_end = slot_start + duration_delta

                if slot_start >= now and not has_conflict(
                    slot_start, slot_end, sessions, config.buffer_minutes
                ):
                    candidates.append(CandidateSlot(start_time=slot_start, end_time=slot_end))

                slot_start = add_minutes(slot_start, SLOT_STEP_MINUTES)

    return candidates
