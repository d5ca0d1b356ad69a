"""Timezone-aware calendar arithmetic for availability and session instants."""

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterator

import pytz

logger = logging.getLogger(__name__)


def to_utc(instant: datetime) -> datetime:
    """Return the instant as an aware UTC datetime (naive input is taken as UTC)."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=pytz.UTC)
    return instant.astimezone(pytz.UTC)


def add_minutes(instant: datetime, minutes: int) -> datetime:
    """Add (or subtract) an exact number of minutes."""
    return instant + timedelta(minutes=minutes)


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open overlap check; touching endpoints do not overlap."""
    return start_a < end_b and end_a > start_b


def parse_hhmm(value: str) -> time:
    """Parse an "HH:MM" wall-clock string."""
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


class LocalCalendar:
    """
    Calendar view of absolute instants in a single IANA timezone.

    An unknown timezone does not raise; dates and clock times then come
    from the instant in UTC.
    """

    def __init__(self, timezone: str):
        """Initialize for an IANA timezone name such as "Europe/Berlin"."""
        self.timezone = timezone
        try:
            self._tz = pytz.timezone(timezone)
        except pytz.UnknownTimeZoneError:
            logger.warning("Unknown timezone %r, falling back to UTC calendar days", timezone)
            self._tz = None

    def to_local(self, instant: datetime) -> datetime:
        utc_instant = to_utc(instant)
        if self._tz is None:
            return utc_instant
        return utc_instant.astimezone(self._tz)

    def local_date(self, instant: datetime) -> date:
        """Calendar date the instant falls on in this timezone."""
        return self.to_local(instant).date()

    def start_of_local_day(self, instant: datetime) -> datetime:
        """UTC midnight of the local calendar date, used as a day bucket."""
        local_day = self.local_date(instant)
        return datetime.combine(local_day, time.min).replace(tzinfo=pytz.UTC)

    def day_key(self, instant: datetime) -> str:
        """ISO date string of the local calendar day."""
        return self.local_date(instant).isoformat()

    def local_hour(self, instant: datetime) -> int:
        return self.to_local(instant).hour

    def local_day_of_week(self, instant: datetime) -> int:
        """Local day of week, 0 = Sunday."""
        return self.day_of_week(self.local_date(instant))

    @staticmethod
    def day_of_week(day: date) -> int:
        """Day of week for a calendar date, 0 = Sunday."""
        return (day.weekday() + 1) % 7

    def local_instant(self, day: date, wall_clock: str) -> datetime:
        """
        Absolute UTC instant of an "HH:MM" wall-clock time on a local date.

        Ambiguous or skipped DST times resolve to standard time.
        """
        naive = datetime.combine(day, parse_hhmm(wall_clock))
        if self._tz is None:
            return naive.replace(tzinfo=pytz.UTC)
        return self._tz.localize(naive, is_dst=False).astimezone(pytz.UTC)

    def local_days(self, start_day: date, end_day: date) -> Iterator[date]:
        """Every calendar date from start_day through end_day inclusive."""
        current = start_day
        while current <= end_day:
            yield current
            current += timedelta(days=1)
