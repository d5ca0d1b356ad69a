"""Per-day load of existing sessions, bucketed by local calendar day."""

from datetime import datetime

from models.entities import DaySchedule, ExistingSession
from services.calendar_service import LocalCalendar

HIGH_PRIORITY_THRESHOLD = 4


def build_day_schedules(
    sessions: list[ExistingSession],
    calendar: LocalCalendar
) -> dict[str, DaySchedule]:
    """Aggregate sessions into DaySchedules keyed by local ISO date."""
    schedules: dict[str, DaySchedule] = {}

    for session in sessions:
        key = calendar.day_key(session.start_time)
        schedule = schedules.get(key)
        if schedule is None:
            schedule = DaySchedule(date=calendar.local_date(session.start_time))
            schedules[key] = schedule

        schedule.total_minutes += session.duration_minutes
        if session.priority >= HIGH_PRIORITY_THRESHOLD:
            schedule.high_priority_count += 1

    return schedules


def schedule_for(
    schedules: dict[str, DaySchedule],
    instant: datetime,
    calendar: LocalCalendar
) -> DaySchedule:
    """DaySchedule for the instant's local day; an empty one if the day has no sessions."""
    key = calendar.day_key(instant)
    return schedules.get(key) or DaySchedule(date=calendar.local_date(instant))
