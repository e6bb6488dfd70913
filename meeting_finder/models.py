from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_duration(value: Any) -> Optional[int]:
    """Parse a duration the lenient way clients send it.

    Integers pass through, floats are truncated and strings are read up to
    their first non-digit (``"45 min"`` is 45). Anything else, including zero
    and negative values, yields ``None`` so the caller applies its default.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        parsed = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return None
        parsed = int(match.group(1))
    else:
        return None
    return parsed if parsed > 0 else None


class ApiModel(BaseModel):
    """Base class for payloads serialised with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class ResolvedParty(ApiModel):
    model_config = ConfigDict(frozen=True)

    zone: str
    display_label: str


class AcceptedSlot(ApiModel):
    organizer_local: str
    per_party_local: list[str] = Field(default_factory=list)
    booking_link: str
    start_iso: str


class SlotsTable(ApiModel):
    columns: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    message: Optional[str] = None  # set for empty and degraded results
    html: str = ""


class FindSlotsRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    organizer_zone: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("organizerZone", "userTimezone", "organizer_zone"),
    )
    participant_locations: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "participantLocations", "leadLocations", "participant_locations"
        ),
    )
    duration_minutes: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("durationMinutes", "callDuration", "duration_minutes"),
    )

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _lenient_duration(cls, value: Any) -> Optional[int]:
        return coerce_duration(value)


class FindSlotsResponse(ApiModel):
    slots_table: SlotsTable
    booking_link: str = ""
    slots: list[AcceptedSlot] = Field(default_factory=list)
    duration_minutes: Optional[int] = None
    trace_id: str
