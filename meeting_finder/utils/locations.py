from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union

from meeting_finder.models import ResolvedParty
from meeting_finder.utils.time import DEFAULT_TZ, is_valid_zone

logger = logging.getLogger(__name__)

CITY_TIMEZONES: Mapping[str, str] = MappingProxyType(
    {
        "new york": "America/New_York",
        "london": "Europe/London",
        "mumbai": "Asia/Kolkata",
        "san francisco": "America/Los_Angeles",
        "berlin": "Europe/Berlin",
        "sydney": "Australia/Sydney",
        "tokyo": "Asia/Tokyo",
        "singapore": "Asia/Singapore",
        "paris": "Europe/Paris",
        "chicago": "America/Chicago",
        "delhi": "Asia/Kolkata",
        "boston": "America/New_York",
        "los angeles": "America/Los_Angeles",
        "toronto": "America/Toronto",
        "dubai": "Asia/Dubai",
        "shanghai": "Asia/Shanghai",
        "hong kong": "Asia/Hong_Kong",
        "seoul": "Asia/Seoul",
        "amsterdam": "Europe/Amsterdam",
        "zurich": "Europe/Zurich",
        "madrid": "Europe/Madrid",
        "rome": "Europe/Rome",
        "istanbul": "Europe/Istanbul",
        "johannesburg": "Africa/Johannesburg",
        "sao paulo": "America/Sao_Paulo",
        "mexico city": "America/Mexico_City",
        "vancouver": "America/Vancouver",
        "bengaluru": "Asia/Kolkata",
    }
)


@dataclass(frozen=True)
class KnownZone:
    """Token matched the city table (or was empty and fell back to UTC)."""

    token: str
    zone: str


@dataclass(frozen=True)
class LiteralZone:
    """Token missed the table and is taken verbatim as a zone identifier."""

    token: str

    @property
    def zone(self) -> str:
        return self.token


ZoneLookup = Union[KnownZone, LiteralZone]


@dataclass
class Resolution:
    organizer: ResolvedParty
    parties: list[ResolvedParty] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def split_locations(raw: str) -> list[str]:
    if not raw:
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


class LocationResolver:
    """Maps free-text locations onto validated zone identifiers."""

    def __init__(self, city_table: Mapping[str, str] = CITY_TIMEZONES) -> None:
        self._table = MappingProxyType(
            {name.lower(): zone for name, zone in city_table.items()}
        )

    def lookup(self, token: str) -> ZoneLookup:
        if not token:
            return KnownZone(token=token, zone=DEFAULT_TZ)
        zone = self._table.get(token.lower())
        if zone:
            return KnownZone(token=token, zone=zone)
        return LiteralZone(token=token)

    def resolve(self, organizer_zone: str, raw_locations: str) -> Resolution:
        organizer_lookup = self.lookup(organizer_zone.strip())
        lookups = [self.lookup(token) for token in split_locations(raw_locations)]
        logger.debug(
            "Resolved zones: organizer=%s parties=%s",
            organizer_lookup.zone,
            [item.zone for item in lookups],
        )

        errors: list[str] = []
        if not is_valid_zone(organizer_lookup.zone):
            errors.append(f"Invalid timezone identifier '{organizer_lookup.token}'")
        for item in lookups:
            if not is_valid_zone(item.zone):
                errors.append(self._describe_failure(item))

        return Resolution(
            organizer=_to_party(organizer_lookup),
            parties=[_to_party(item) for item in lookups],
            errors=errors,
        )

    @staticmethod
    def _describe_failure(item: ZoneLookup) -> str:
        if isinstance(item, KnownZone):
            return f"Timezone '{item.zone}' for '{item.token}' is unavailable"
        if "/" in item.token or item.token.isupper():
            return f"Invalid timezone identifier '{item.token}'"
        return f"Unrecognized location '{item.token}'"


def _to_party(item: ZoneLookup) -> ResolvedParty:
    return ResolvedParty(zone=item.zone, display_label=item.token or item.zone)
