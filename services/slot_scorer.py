"""Heuristic scoring of candidate slots."""

from models.entities import CandidateSlot, DaySchedule, ExistingSession, SuggestionConfig
from services.calendar_service import LocalCalendar
from services.day_load import HIGH_PRIORITY_THRESHOLD

BASE_SCORE = 100

# Local hours considered optimal for high-priority work, [start, end)
MORNING_START = 6
MORNING_END = 12

MORNING_BONUS = 20
FATIGUE_PENALTY = 40
SPACING_PENALTY = 10
BUSY_DAY_PENALTY = 15
BUSY_DAY_RATIO = 0.5

MORNING_REASON = "Morning slot (optimal for high priority)"
FATIGUE_REASON = "Day already has high-priority sessions"
CLOSE_BEFORE_REASON = "Close to previous session"
CLOSE_AFTER_REASON = "Close to next session"
BUSY_DAY_REASON = "Day is already busy"


def score_slot(
    slot: CandidateSlot,
    priority: int,
    day_schedule: DaySchedule,
    existing_sessions: list[ExistingSession],
    config: SuggestionConfig,
    calendar: LocalCalendar
) -> tuple[float, list[str]]:
    """
    Score a candidate slot.

    Starts from 100 and applies every heuristic that fires: morning bonus
    for high-priority work, fatigue penalty on days that already hold
    enough high-priority sessions, a spacing penalty per nearby session
    (closer than twice the buffer) and a busy-day penalty once the day is
    past half its minute cap. The score is not clamped.

    Returns:
        (score, reasons) with reasons in the order the heuristics fired
    """
    score = BASE_SCORE
    reasons: list[str] = []
    high_priority = priority >= HIGH_PRIORITY_THRESHOLD

    hour = calendar.local_hour(slot.start_time)
    if config.prefer_mornings and high_priority and MORNING_START <= hour < MORNING_END:
        score += MORNING_BONUS
        reasons.append(MORNING_REASON)

    if high_priority and day_schedule.high_priority_count >= config.max_high_priority_per_day:
        score -= FATIGUE_PENALTY
        reasons.append(FATIGUE_REASON)

    ideal_gap_seconds = config.buffer_minutes * 2 * 60
    for session in existing_sessions:
        gap_before = (slot.start_time - session.end_time).total_seconds()
        gap_after = (session.start_time - slot.end_time).total_seconds()

        if 0 < gap_before < ideal_gap_seconds:
            score -= SPACING_PENALTY
            if CLOSE_BEFORE_REASON not in reasons:
                reasons.append(CLOSE_BEFORE_REASON)
        if 0 < gap_after < ideal_gap_seconds:
            score -= SPACING_PENALTY
            if CLOSE_AFTER_REASON not in reasons:
                reasons.append(CLOSE_AFTER_REASON)

    if day_schedule.total_minutes > config.max_daily_minutes * BUSY_DAY_RATIO:
        score -= BUSY_DAY_PENALTY
        reasons.append(BUSY_DAY_REASON)

    return score, reasons
