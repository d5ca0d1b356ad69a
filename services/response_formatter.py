"""Status messages and display formatting for suggestion results."""

from typing import List, Optional

from models.entities import SuggestionResult
from services.calendar_service import LocalCalendar


class ResponseFormatter:
    """Formats suggestion responses in a consistent, structured manner."""

    DEFAULT_REASON = "Available slot"

    @staticmethod
    def no_availability_message() -> str:
        return "No availability windows set. Please configure your availability."

    @staticmethod
    def no_slots_message() -> str:
        return "No available time slots found in the specified range."

    @staticmethod
    def found_message(count: int) -> str:
        return f"Found {count} suggested time slots"

    @staticmethod
    def format_suggestions(result: SuggestionResult, timezone: str) -> str:
        """Format ranked suggestions as markdown, times shown in the given timezone."""
        if not result.suggestions:
            return ResponseFormatter.format_error(
                "No Suggested Times",
                result.message,
                suggestions=[
                    "Try a wider date range",
                    "Add more availability windows",
                    "Consider a shorter duration"
                ]
            )

        calendar = LocalCalendar(timezone)
        lines = [
            "**🎯 Suggested Times**",
            "",
            result.message,
            ""
        ]

        for i, suggestion in enumerate(result.suggestions, 1):
            local_start = calendar.to_local(suggestion.start_time)
            local_end = calendar.to_local(suggestion.end_time)

            if i == 1:
                lines.append(f"⭐ **Option {i} (Best Match)**")
            else:
                lines.append(f"**Option {i}**")

            lines.append(f"   • Date: {local_start.strftime('%A, %B %d, %Y')}")
            lines.append(
                f"   • Time: {local_start.strftime('%H:%M')}-{local_end.strftime('%H:%M')} ({timezone})"
            )
            if suggestion.session_type is not None:
                lines.append(f"   • Type: {suggestion.session_type.name}")
            lines.append(f"   • Score: {suggestion.score:g}")
            lines.append(f"   • Why: {', '.join(suggestion.reasons)}")
            lines.append("")

        return "\n".join(lines).rstrip()

    @staticmethod
    def format_error(title: str, message: str, suggestions: Optional[List[str]] = None) -> str:
        """Format an error message."""
        lines = [
            f"**❌ {title}**",
            "",
            message
        ]

        if suggestions:
            lines.append("")
            lines.append("**Suggestions:**")
            for suggestion in suggestions:
                lines.append(f"• {suggestion}")

        return "\n".join(lines)
