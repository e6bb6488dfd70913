from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Iterator, Sequence

from meeting_finder.models import AcceptedSlot, ResolvedParty
from meeting_finder.utils.render import DEFAULT_LINK_BASE, booking_link
from meeting_finder.utils.time import (
    ZONE_ERRORS,
    add_minutes,
    format_local,
    get_zone,
    now_in_tz,
    project,
)

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 30
DEFAULT_HORIZON_DAYS = 3

# Failures the zone conversion may raise for a single candidate.
PROJECTION_ERRORS = ZONE_ERRORS + (OverflowError, KeyError)


@dataclass(frozen=True)
class BusinessWindow:
    start_hour: int
    end_hour: int

    @property
    def minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60


BUSINESS_HOURS = BusinessWindow(start_hour=9, end_hour=17)


@dataclass(frozen=True)
class CandidateSlot:
    organizer_start: datetime
    duration_minutes: int

    @property
    def end(self) -> datetime:
        return add_minutes(self.organizer_start, self.duration_minutes)


def candidate_hours(
    duration_minutes: int, window: BusinessWindow = BUSINESS_HOURS
) -> range:
    """Organizer-local start hours that leave room for the meeting."""

    if duration_minutes >= window.minutes:
        return range(0)
    last = window.end_hour - math.ceil(duration_minutes / 60)
    return range(window.start_hour, last + 1)


def iter_candidates(
    organizer_zone: str,
    duration_minutes: int,
    horizon_days: int,
    now: datetime,
) -> Iterator[CandidateSlot]:
    tz = get_zone(organizer_zone)
    today = now.astimezone(tz).date()
    hours = candidate_hours(duration_minutes)
    for day in range(horizon_days):
        date = today + timedelta(days=day)
        for hour in hours:
            start = datetime.combine(date, time(hour, 0, 0, 0), tzinfo=tz)
            yield CandidateSlot(organizer_start=start, duration_minutes=duration_minutes)


def fits_business_hours(
    start: datetime,
    end: datetime,
    boundary: str = "hour",
    window: BusinessWindow = BUSINESS_HOURS,
) -> bool:
    """Check a local start/end pair against the business window.

    ``"hour"`` compares hours only, so an end at 17:30 still fits.
    ``"minute"`` requires the end to be at or before 17:00 exactly.
    """

    if end.date() != start.date():
        return False
    if boundary == "minute":
        return (
            start.time() >= time(window.start_hour)
            and end.time() <= time(window.end_hour)
        )
    return start.hour >= window.start_hour and end.hour <= window.end_hour


def _fits_party(candidate: CandidateSlot, zone: str, boundary: str) -> bool:
    try:
        local_start = project(candidate.organizer_start, zone)
        local_end = project(candidate.end, zone)
    except PROJECTION_ERRORS as exc:
        logger.debug("Projection into %s failed, skipping candidate: %s", zone, exc)
        return False
    return fits_business_hours(local_start, local_end, boundary)


def find_slots(
    organizer_zone: str,
    parties: Sequence[ResolvedParty],
    duration_minutes: int = DEFAULT_DURATION_MINUTES,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    *,
    now: datetime | None = None,
    boundary: str = "hour",
    link_base: str = DEFAULT_LINK_BASE,
) -> list[AcceptedSlot]:
    """Return every hour-aligned window inside business hours for all parties."""

    now = now or now_in_tz(organizer_zone)
    accepted: list[AcceptedSlot] = []
    for candidate in iter_candidates(organizer_zone, duration_minutes, horizon_days, now):
        if not all(_fits_party(candidate, party.zone, boundary) for party in parties):
            continue
        start = candidate.organizer_start
        accepted.append(
            AcceptedSlot(
                organizer_local=format_local(start, organizer_zone),
                per_party_local=[format_local(start, party.zone) for party in parties],
                booking_link=booking_link(link_base, organizer_zone, start, duration_minutes),
                start_iso=start.isoformat(),
            )
        )
    return accepted
