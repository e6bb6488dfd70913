from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client():
    """HTTP client bound to the application with its default controller."""
    from meeting_finder.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def new_york_morning() -> datetime:
    """Tuesday 20 May 2025, 08:00 in New York (EDT, UTC-4)."""
    return datetime(2025, 5, 20, 8, 0, tzinfo=ZoneInfo("America/New_York"))
