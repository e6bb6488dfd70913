from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Mapping

from meeting_finder.config import settings
from meeting_finder.models import AcceptedSlot, FindSlotsRequest, FindSlotsResponse
from meeting_finder.utils.locations import CITY_TIMEZONES, LocationResolver, split_locations
from meeting_finder.utils.render import SlotsFormat, render_message, render_slots
from meeting_finder.utils.slots import find_slots

logger = logging.getLogger(__name__)

INVALID_ZONES_MESSAGE = "Invalid timezone(s) provided."
SERVER_ERROR_MESSAGE = "Server error: Unable to find meeting slots."


class InvalidRequestError(ValueError):
    """Raised when required request fields are missing or empty."""


class SlotFinderController:
    """Runs the resolve, search and render pipeline for one request."""

    def __init__(
        self,
        *,
        city_table: Mapping[str, str] = CITY_TIMEZONES,
        horizon_days: int | None = None,
        default_duration: int | None = None,
        boundary: str | None = None,
        link_base: str | None = None,
    ) -> None:
        self.resolver = LocationResolver(city_table)
        self.horizon_days = horizon_days or settings.slot_horizon_days
        self.default_duration = default_duration or settings.default_duration_minutes
        self.boundary = boundary or settings.slot_boundary_mode
        self.link_base = link_base or settings.booking_link_base

    def find(self, req: FindSlotsRequest, *, now: datetime | None = None) -> FindSlotsResponse:
        self._validate(req)
        trace_id = str(uuid.uuid4())
        duration = req.duration_minutes or self.default_duration
        logger.info(
            "Finding meeting slots: organizer=%s locations=%s duration=%s",
            req.organizer_zone,
            req.participant_locations,
            duration,
        )

        try:
            formatted, slots = self._run(
                req.organizer_zone, req.participant_locations, duration, now
            )
        except Exception:
            logger.exception("Meeting slot search failed")
            formatted, slots = render_message(SERVER_ERROR_MESSAGE), []

        return FindSlotsResponse(
            slots_table=formatted.slots_table,
            booking_link=formatted.booking_link,
            slots=slots,
            duration_minutes=duration,
            trace_id=trace_id,
        )

    # ----------------------------------------------------------------- Internals
    @staticmethod
    def _validate(req: FindSlotsRequest) -> None:
        if not req.organizer_zone or not req.organizer_zone.strip():
            raise InvalidRequestError("Please provide your timezone.")
        if not req.participant_locations or not split_locations(req.participant_locations):
            raise InvalidRequestError("Please provide lead locations.")

    def _run(
        self, organizer_zone: str, locations: str, duration: int, now: datetime | None
    ) -> tuple[SlotsFormat, list[AcceptedSlot]]:
        resolution = self.resolver.resolve(organizer_zone, locations)
        if not resolution.ok:
            logger.warning("Rejected timezones: %s", "; ".join(resolution.errors))
            message = f"{INVALID_ZONES_MESSAGE} {'; '.join(resolution.errors)}."
            return render_message(message), []

        organizer = resolution.organizer.zone
        slots = find_slots(
            organizer,
            resolution.parties,
            duration,
            self.horizon_days,
            now=now,
            boundary=self.boundary,
            link_base=self.link_base,
        )
        logger.info("Number of slots found: %d", len(slots))
        formatted: SlotsFormat = render_slots(
            organizer, resolution.parties, slots, self.horizon_days
        )
        return formatted, slots
