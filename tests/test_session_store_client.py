"""Tests for the HTTP session store client."""

import json
from datetime import datetime

import httpx
import pytest
import pytz

from models.entities import (
    AvailabilityWindow,
    ExistingSession,
    PartialSuggestionConfig,
    SessionTypeInfo,
    SuggestionRequest,
)
from services.session_store_client import SessionStoreClient, format_instant, parse_instant
from services.suggestion_engine import SuggestionEngine

UTC = pytz.UTC
BASE_URL = "https://sessions.test/api"


def make_client(handler) -> SessionStoreClient:
    return SessionStoreClient(
        base_url=BASE_URL, api_key="secret", timeout=5.0, transport=httpx.MockTransport(handler)
    )


def test_parse_and_format_instants():
    assert parse_instant("2025-01-06T09:00:00.000Z") == datetime(2025, 1, 6, 9, 0, tzinfo=UTC)
    assert parse_instant("2025-01-06T10:00:00+01:00") == datetime(2025, 1, 6, 9, 0, tzinfo=UTC)
    assert format_instant(datetime(2025, 1, 6, 9, 0, tzinfo=UTC)) == "2025-01-06T09:00:00.000Z"


def test_list_availability_sorts_and_authenticates():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[
            {"id": "a2", "dayOfWeek": 3, "startTime": "14:00", "endTime": "15:00"},
            {"id": "a1", "dayOfWeek": 1, "startTime": "09:00", "endTime": "10:00"},
        ])

    windows = make_client(handler).list_availability("user_1")

    assert seen == {"path": "/api/users/user_1/availability", "auth": "Bearer secret"}
    assert windows == [
        AvailabilityWindow(day_of_week=1, start_time="09:00", end_time="10:00"),
        AvailabilityWindow(day_of_week=3, start_time="14:00", end_time="15:00"),
    ]


def test_list_scheduled_sessions_sends_range_and_maps_priority():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(dict(request.url.params))
        return httpx.Response(200, json=[{
            "startTime": "2025-01-06T14:00:00.000Z",
            "endTime": "2025-01-06T15:00:00.000Z",
            "duration": 60,
            "sessionType": {"priority": 5},
        }])

    sessions = make_client(handler).list_scheduled_sessions(
        "user_1",
        datetime(2025, 1, 6, tzinfo=UTC),
        datetime(2025, 1, 7, tzinfo=UTC),
    )

    assert seen == {
        "status": "SCHEDULED",
        "from": "2025-01-06T00:00:00.000Z",
        "to": "2025-01-07T00:00:00.000Z",
    }
    assert sessions == [ExistingSession(
        start_time=datetime(2025, 1, 6, 14, tzinfo=UTC),
        end_time=datetime(2025, 1, 6, 15, tzinfo=UTC),
        priority=5,
    )]


def test_optional_lookups_return_none_on_404():
    client = make_client(lambda request: httpx.Response(404, json={"message": "Not found"}))

    assert client.get_session_type("user_1", "missing") is None
    assert client.get_preferences("user_1") is None


def test_get_session_type_maps_metadata():
    client = make_client(lambda request: httpx.Response(200, json={
        "id": "type_1", "name": "Focus", "priority": 4, "color": "#FF0000", "icon": None,
    }))

    assert client.get_session_type("user_1", "type_1") == SessionTypeInfo(
        id="type_1", name="Focus", priority=4, color="#FF0000", icon=None
    )


def test_required_lookup_errors_propagate(caplog):
    client = make_client(lambda request: httpx.Response(500, json={"message": "boom"}))

    with pytest.raises(httpx.HTTPStatusError):
        client.list_availability("user_1")
    assert "status 500" in caplog.text


def test_save_preferences_sends_only_set_fields():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "maxDailyMinutes": 480,
            "bufferMinutes": 15,
            "preferMornings": True,
            "maxHighPriorityPerDay": 2,
        })

    saved = make_client(handler).save_preferences(
        "user_1", PartialSuggestionConfig(buffer_minutes=15)
    )

    assert seen == {"method": "PUT", "body": {"bufferMinutes": 15}}
    assert saved.buffer_minutes == 15
    assert saved.max_daily_minutes == 480


def test_engine_runs_against_http_store():
    session_params = {}

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/preferences"):
            return httpx.Response(200, json={"bufferMinutes": 60})
        if path.endswith("/availability"):
            return httpx.Response(200, json=[{"dayOfWeek": 1, "startTime": "09:00", "endTime": "12:00"}])
        if path.endswith("/sessions"):
            session_params.update(dict(request.url.params))
            return httpx.Response(200, json=[{
                "startTime": "2025-01-06T10:30:00Z",
                "endTime": "2025-01-06T11:00:00Z",
                "sessionType": {"priority": 2},
            }])
        return httpx.Response(404)

    engine = SuggestionEngine(
        make_client(handler), clock=lambda: datetime(2025, 1, 5, tzinfo=UTC)
    )
    result = engine.get_suggestions("user_1", SuggestionRequest(
        start_date=datetime(2025, 1, 6, tzinfo=UTC),
        end_date=datetime(2025, 1, 6, tzinfo=UTC),
        duration=30,
        session_type_id="unknown",
        config=PartialSuggestionConfig(timezone="UTC"),
    ))

    # A 60 minute buffer around 10:30-11:00 leaves only the 09:00 slot
    assert [s.start_time for s in result.suggestions] == [datetime(2025, 1, 6, 9, tzinfo=UTC)]
    assert result.suggestions[0].reasons == ["Close to next session"]
    # Range widened by twice the 60 minute buffer on each side
    assert session_params["from"] == "2025-01-05T22:00:00.000Z"
    assert session_params["to"] == "2025-01-07T02:00:00.000Z"
