from __future__ import annotations

import pytest

from meeting_finder import finder as finder_module
from meeting_finder.finder import (
    SERVER_ERROR_MESSAGE,
    InvalidRequestError,
    SlotFinderController,
)
from meeting_finder.models import FindSlotsRequest


def _controller() -> SlotFinderController:
    return SlotFinderController(
        horizon_days=3,
        default_duration=30,
        boundary="hour",
        link_base="https://cal.com/book",
    )


def _request(**body) -> FindSlotsRequest:
    return FindSlotsRequest.model_validate(body)


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ({"participantLocations": "london"}, "Please provide your timezone."),
        ({"organizerZone": "   ", "participantLocations": "london"}, "Please provide your timezone."),
        ({"organizerZone": "UTC"}, "Please provide lead locations."),
        ({"organizerZone": "UTC", "participantLocations": " , ,"}, "Please provide lead locations."),
    ],
)
def test_missing_fields_are_client_errors(body: dict, message: str, new_york_morning) -> None:
    with pytest.raises(InvalidRequestError, match=message):
        _controller().find(_request(**body), now=new_york_morning)


def test_find_returns_table_and_first_link(new_york_morning) -> None:
    response = _controller().find(
        _request(organizerZone="America/New_York", participantLocations="London", durationMinutes=30),
        now=new_york_morning,
    )

    assert response.trace_id
    assert response.duration_minutes == 30
    assert len(response.slots) == 12
    assert response.booking_link == response.slots[0].booking_link
    assert response.slots_table.columns == ["Your Time", "Lead 1: London (Europe/London)"]
    assert len(response.slots_table.rows) == 12


def test_invalid_timezone_is_degraded_success(new_york_morning) -> None:
    response = _controller().find(
        _request(organizerZone="America/New_York", participantLocations="london, Nowhere City"),
        now=new_york_morning,
    )

    assert response.slots == []
    assert response.booking_link == ""
    assert response.slots_table.message.startswith("Invalid timezone(s) provided.")
    assert "Nowhere City" in response.slots_table.message


@pytest.mark.parametrize("duration", [None, "soon", "", 0, -15])
def test_duration_defaults_to_thirty(duration, new_york_morning) -> None:
    body = {"organizerZone": "America/New_York", "participantLocations": "london"}
    if duration is not None:
        body["durationMinutes"] = duration

    response = _controller().find(_request(**body), now=new_york_morning)

    assert response.duration_minutes == 30
    assert response.slots
    assert response.slots[0].booking_link.endswith("duration=30")


def test_whole_business_day_shows_empty_state(new_york_morning) -> None:
    response = _controller().find(
        _request(organizerZone="UTC", participantLocations="UTC", durationMinutes=480),
        now=new_york_morning,
    )

    assert response.slots == []
    assert response.booking_link == ""
    assert response.slots_table.message == "No overlapping slots found for the next 3 days."


def test_unexpected_failure_is_not_leaked(monkeypatch: pytest.MonkeyPatch, new_york_morning) -> None:
    def explode(*args, **kwargs):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(finder_module, "find_slots", explode)

    response = _controller().find(
        _request(organizerZone="UTC", participantLocations="london"), now=new_york_morning
    )

    assert response.slots_table.message == SERVER_ERROR_MESSAGE
    assert "secret" not in response.slots_table.html
    assert response.booking_link == ""
