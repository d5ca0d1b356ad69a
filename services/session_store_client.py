"""HTTP client for the session scheduling data API."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from models.entities import (
    AvailabilityWindow,
    ExistingSession,
    PartialSuggestionConfig,
    SessionTypeInfo,
)
from services import settings
from services.calendar_service import to_utc

logger = logging.getLogger(__name__)

PREFERENCE_FIELDS = {
    "max_daily_minutes": "maxDailyMinutes",
    "buffer_minutes": "bufferMinutes",
    "prefer_mornings": "preferMornings",
    "max_high_priority_per_day": "maxHighPriorityPerDay",
}


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant ("Z" or offset) into an aware UTC datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(value))


def format_instant(value: datetime) -> str:
    """Format an instant as ISO-8601 UTC with a "Z" suffix."""
    return to_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SessionStoreClient:
    """
    Client for the availability, session, session type and preferences API.

    Failures are not retried: HTTP and transport errors propagate to the
    caller. A 404 is only tolerated on the optional lookups
    (get_session_type, get_preferences), which then return None.
    """

    def __init__(
        self,
        base_url: str = None,
        api_key: str = None,
        timeout: float = None,
        transport: httpx.BaseTransport = None
    ):
        """
        Initialize session store client.

        Args:
            base_url: API root (defaults to env var SESSION_STORE_BASE_URL)
            api_key: Bearer token (defaults to env var SESSION_STORE_API_KEY)
            timeout: Request timeout in seconds (defaults to env var SESSION_STORE_TIMEOUT)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.base_url = (base_url or settings.SESSION_STORE_BASE_URL).rstrip("/")
        self.api_key = api_key or settings.SESSION_STORE_API_KEY
        self.timeout = timeout or settings.SESSION_STORE_TIMEOUT
        self.transport = transport

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        allow_not_found: bool = False
    ) -> Any:
        """Send a request and return the decoded JSON body (None on a tolerated 404)."""
        url = f"{self.base_url}{path}"
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = client.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    headers=self._get_headers()
                )
                if allow_not_found and response.status_code == 404:
                    return None
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(
                    "Session store %s %s failed with status %s",
                    method, path, e.response.status_code
                )
                raise
            except httpx.RequestError as e:
                logger.error("Session store %s %s failed: %s", method, path, e)
                raise
            return response.json()

    @staticmethod
    def _get_field(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
        """Value of the first key present, accepting camelCase and snake_case names."""
        for key in keys:
            if data.get(key) is not None:
                return data[key]
        return default

    def _map_availability(self, data: Dict[str, Any]) -> AvailabilityWindow:
        return AvailabilityWindow(
            day_of_week=int(self._get_field(data, "dayOfWeek", "day_of_week")),
            start_time=self._get_field(data, "startTime", "start_time"),
            end_time=self._get_field(data, "endTime", "end_time"),
        )

    def _map_session(self, data: Dict[str, Any]) -> ExistingSession:
        session_type = self._get_field(data, "sessionType", "session_type", default={})
        return ExistingSession(
            start_time=parse_instant(self._get_field(data, "startTime", "start_time")),
            end_time=parse_instant(self._get_field(data, "endTime", "end_time")),
            priority=int(self._get_field(session_type, "priority", default=3)),
        )

    def _map_session_type(self, data: Dict[str, Any]) -> SessionTypeInfo:
        return SessionTypeInfo(
            id=str(data["id"]),
            name=data.get("name", ""),
            priority=int(data.get("priority", 3)),
            color=data.get("color"),
            icon=data.get("icon"),
        )

    def _map_preferences(self, data: Dict[str, Any]) -> PartialSuggestionConfig:
        return PartialSuggestionConfig(**{
            name: self._get_field(data, camel, name)
            for name, camel in PREFERENCE_FIELDS.items()
        })

    def list_availability(self, user_id: str) -> List[AvailabilityWindow]:
        """Availability windows sorted by day of week, then start time."""
        data = self._request("GET", f"/users/{user_id}/availability")
        windows = [self._map_availability(item) for item in data]
        return sorted(windows, key=lambda w: (w.day_of_week, w.start_time))

    def list_scheduled_sessions(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime
    ) -> List[ExistingSession]:
        """Scheduled sessions overlapping [range_start, range_end)."""
        params = {
            "status": "SCHEDULED",
            "from": format_instant(range_start),
            "to": format_instant(range_end),
        }
        data = self._request("GET", f"/users/{user_id}/sessions", params=params)
        return [self._map_session(item) for item in data]

    def get_session_type(self, user_id: str, type_id: str) -> Optional[SessionTypeInfo]:
        """Session type owned by the user, or None if it does not exist."""
        data = self._request(
            "GET", f"/users/{user_id}/session-types/{type_id}", allow_not_found=True
        )
        if not data:
            return None
        return self._map_session_type(data)

    def get_preferences(self, user_id: str) -> Optional[PartialSuggestionConfig]:
        """Stored preferences, or None if the user never saved any."""
        data = self._request("GET", f"/users/{user_id}/preferences", allow_not_found=True)
        if not data:
            return None
        return self._map_preferences(data)

    def save_preferences(
        self,
        user_id: str,
        preferences: PartialSuggestionConfig
    ) -> PartialSuggestionConfig:
        """Create or replace the user's stored preferences."""
        body = {
            camel: getattr(preferences, name)
            for name, camel in PREFERENCE_FIELDS.items()
            if getattr(preferences, name) is not None
        }
        data = self._request("PUT", f"/users/{user_id}/preferences", json_body=body)
        return self._map_preferences(data)
