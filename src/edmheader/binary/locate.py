from __future__ import annotations
import logging
from typing import Iterable, Optional, Sequence

from .codecs.bitcursor import Cursor
from .codecs.flight_header import FLIGHT_HEADER_SIZE, is_plausible_flight_header
from edmheader.models.flight import FlightIndexEntry

logger = logging.getLogger(__name__)

# Declared lengths are whole words, so a flight can start at most one byte
# before the cursor. Widening this needs a format that rounds further.
PROBE_BACKOFF = (0, 1)


def probe_candidates(cursor: int, binary_start: int, size: int) -> list[int]:
    """Candidate start offsets for one flight, in priority order."""
    out = []
    for back in PROBE_BACKOFF:
        pos = cursor - back
        if pos < binary_start or pos + FLIGHT_HEADER_SIZE > size:
            continue
        out.append(pos)
    return out


def match_flight(cur: Cursor, pos: int, tag: bytes) -> bool:
    return cur.raw[pos:pos + 2] == tag and is_plausible_flight_header(cur, pos)


def locate_flight(cur: Cursor, entry: FlightIndexEntry, cursor: int, binary_start: int) -> Optional[int]:
    """Offset of `entry`'s flight header near `cursor`, or None."""
    tag = entry.tag
    for pos in probe_candidates(cursor, binary_start, len(cur)):
        logger.debug("flight %d: probing %d", entry.flight_number, pos)
        if match_flight(cur, pos, tag):
            return pos
    return None


def resolve_flight_offsets(
    data: bytes | bytearray | memoryview | Cursor,
    flights: Sequence[FlightIndexEntry] | Iterable[FlightIndexEntry],
    binary_start: int,
) -> int:
    """
    Set `resolved_offset` on each flight, walking the binary region in
    catalog order. A flight that cannot be located stays unresolved and the
    cursor still advances by its declared length.
    Returns the number of flights resolved.
    """
    cur = data if isinstance(data, Cursor) else Cursor(data)
    cursor = binary_start
    resolved = 0

    for entry in flights:
        pos = locate_flight(cur, entry, cursor, binary_start)
        if pos is None:
            logger.warning(
                "flight %d not found near offset %d (declared %d bytes)",
                entry.flight_number, cursor, entry.data_length,
            )
            cursor += entry.data_length
            continue
        entry.mark_resolved(pos)
        resolved += 1
        cursor = pos + entry.data_length

    return resolved
