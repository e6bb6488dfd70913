from __future__ import annotations

import pytest

from meeting_finder.utils.locations import (
    CITY_TIMEZONES,
    KnownZone,
    LiteralZone,
    LocationResolver,
    split_locations,
)


def test_split_locations_drops_empty_tokens() -> None:
    assert split_locations(" london, ,tokyo ,, Asia/Dubai ") == ["london", "tokyo", "Asia/Dubai"]
    assert split_locations(" , ,") == []
    assert split_locations("") == []


@pytest.mark.parametrize("name", sorted(CITY_TIMEZONES))
def test_city_lookup_ignores_case(name: str) -> None:
    resolver = LocationResolver()
    expected = resolver.lookup(name).zone

    assert resolver.lookup(name.upper()).zone == expected
    assert resolver.lookup(name.title()).zone == expected
    assert isinstance(resolver.lookup(name.title()), KnownZone)


def test_lookup_falls_back_to_literal_zone() -> None:
    resolver = LocationResolver()

    result = resolver.lookup("Europe/Berlin")

    assert result == LiteralZone(token="Europe/Berlin")
    assert result.zone == "Europe/Berlin"


def test_lookup_empty_token_is_utc() -> None:
    assert LocationResolver().lookup("") == KnownZone(token="", zone="UTC")


def test_resolve_keeps_input_order() -> None:
    resolution = LocationResolver().resolve("America/New_York", "Tokyo, london , Asia/Dubai")

    assert resolution.ok
    assert resolution.organizer.zone == "America/New_York"
    assert [p.zone for p in resolution.parties] == ["Asia/Tokyo", "Europe/London", "Asia/Dubai"]
    assert [p.display_label for p in resolution.parties] == ["Tokyo", "london", "Asia/Dubai"]


def test_organizer_accepts_city_name() -> None:
    resolution = LocationResolver().resolve("London", "tokyo")

    assert resolution.ok
    assert resolution.organizer.zone == "Europe/London"


def test_unrecognized_city_invalidates_whole_request() -> None:
    resolution = LocationResolver().resolve("America/New_York", "london, Nowhere City")

    assert not resolution.ok
    assert resolution.errors == ["Unrecognized location 'Nowhere City'"]


def test_invalid_zone_identifier_is_reported_as_such() -> None:
    resolution = LocationResolver().resolve("Mars/Olympus_Mons", "Asia/Atlantis")

    assert resolution.errors == [
        "Invalid timezone identifier 'Mars/Olympus_Mons'",
        "Invalid timezone identifier 'Asia/Atlantis'",
    ]


def test_city_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        CITY_TIMEZONES["atlantis"] = "Atlantic/Atlantis"  # type: ignore[index]


def test_custom_city_table_is_injected() -> None:
    resolver = LocationResolver({"HQ": "Europe/Riga"})

    assert resolver.lookup("hq") == KnownZone(token="hq", zone="Europe/Riga")
    assert isinstance(resolver.lookup("london"), LiteralZone)
