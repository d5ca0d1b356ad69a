"""Domain models for the session suggestion engine."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, Optional


SessionStatus = Literal["SCHEDULED", "COMPLETED", "CANCELLED"]


@dataclass(frozen=True)
class AvailabilityWindow:
    """A recurring weekly open interval in local wall-clock time."""
    day_of_week: int  # 0 = Sunday
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM"


@dataclass(frozen=True)
class ExistingSession:
    """A committed, non-cancelled session occupying the user's time."""
    start_time: datetime
    end_time: datetime
    priority: int  # priority of the session's type, 1-5

    @property
    def duration_minutes(self) -> int:
        return int((self.end_time - self.start_time).total_seconds() // 60)


@dataclass(frozen=True)
class SessionTypeInfo:
    """Session type metadata attached to suggestions."""
    id: str
    name: str
    priority: int = 3
    color: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class PartialSuggestionConfig:
    """One tier of suggestion configuration; None means "not set"."""
    max_daily_minutes: Optional[int] = None
    buffer_minutes: Optional[int] = None
    prefer_mornings: Optional[bool] = None
    max_high_priority_per_day: Optional[int] = None
    timezone: Optional[str] = None


@dataclass(frozen=True)
class SuggestionConfig:
    """Fully resolved configuration for a single suggestion call."""
    max_daily_minutes: int
    buffer_minutes: int
    prefer_mornings: bool
    max_high_priority_per_day: int
    timezone: str


@dataclass
class DaySchedule:
    """Existing load on one local calendar day."""
    date: date
    high_priority_count: int = 0
    total_minutes: int = 0


@dataclass
class CandidateSlot:
    """A conflict-free slot of the requested duration."""
    start_time: datetime
    end_time: datetime
    score: float = 0
    reasons: list[str] = field(default_factory=list)


@dataclass
class SuggestionRequest:
    """Input for a single suggestion call."""
    start_date: datetime
    end_date: datetime
    duration: int  # minutes
    session_type_id: Optional[str] = None
    config: Optional[PartialSuggestionConfig] = None


@dataclass(frozen=True)
class Suggestion:
    """A ranked slot returned to the caller."""
    start_time: datetime
    end_time: datetime
    score: float
    reasons: list[str]
    session_type: Optional[SessionTypeInfo] = None


@dataclass(frozen=True)
class SuggestionResult:
    """Ordered suggestions plus a human-readable status message."""
    suggestions: list[Suggestion]
    message: str
