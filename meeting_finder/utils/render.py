from __future__ import annotations

import html
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence
from urllib.parse import urlencode

from meeting_finder.models import AcceptedSlot, ResolvedParty, SlotsTable

DEFAULT_LINK_BASE = "https://cal.com/book"
ORGANIZER_COLUMN = "Your Time"

_TABLE_STYLE = "width:100%;border-collapse:collapse;background:#fff;color:#333;"
_HEADER_STYLE = "padding:8px;border-bottom:1px solid #ccc;"
_CELL_STYLE = "padding:8px;border-bottom:1px solid #eee;"
_EMPTY_STYLE = "padding:12px;color:#ff5252;text-align:center;"
_MESSAGE_STYLE = "color:#ff5252;"


@dataclass(frozen=True)
class SlotsFormat:
    slots_table: SlotsTable
    booking_link: str


def booking_link(base: str, organizer_zone: str, start: datetime, duration_minutes: int) -> str:
    query = urlencode(
        {"tz": organizer_zone, "start": start.isoformat(), "duration": duration_minutes}
    )
    return f"{base}?{query}"


def party_column(index: int, party: ResolvedParty) -> str:
    if party.display_label == party.zone:
        return f"Lead {index} ({party.zone})"
    return f"Lead {index}: {party.display_label} ({party.zone})"


def render_slots(
    organizer_zone: str,
    parties: Sequence[ResolvedParty],
    slots: Sequence[AcceptedSlot],
    horizon_days: int = 3,
) -> SlotsFormat:
    columns = [ORGANIZER_COLUMN] + [
        party_column(i, party) for i, party in enumerate(parties, start=1)
    ]
    if not slots:
        message = f"No overlapping slots found for the next {horizon_days} days."
        table = SlotsTable(
            columns=columns,
            rows=[],
            message=message,
            html=_table_html(columns, [], message),
        )
        return SlotsFormat(slots_table=table, booking_link="")

    rows = [[slot.organizer_local, *slot.per_party_local] for slot in slots]
    table = SlotsTable(columns=columns, rows=rows, html=_table_html(columns, rows, None))
    return SlotsFormat(slots_table=table, booking_link=slots[0].booking_link)


def render_message(message: str) -> SlotsFormat:
    markup = f'<div style="{_MESSAGE_STYLE}">{html.escape(message)}</div>'
    return SlotsFormat(
        slots_table=SlotsTable(message=message, html=markup),
        booking_link="",
    )


def _table_html(columns: Sequence[str], rows: Sequence[Sequence[str]], message: str | None) -> str:
    parts = [f'<table style="{_TABLE_STYLE}">', "<tr>"]
    parts.extend(f'<th style="{_HEADER_STYLE}">{html.escape(col)}</th>' for col in columns)
    parts.append("</tr>")
    if message is not None:
        parts.append(
            f'<tr><td colspan="{len(columns)}" style="{_EMPTY_STYLE}">'
            f"{html.escape(message)}</td></tr>"
        )
    for row in rows:
        parts.append("<tr>")
        parts.extend(f'<td style="{_CELL_STYLE}">{html.escape(cell)}</td>' for cell in row)
        parts.append("</tr>")
    parts.append("</table>")
    return "".join(parts)
