from __future__ import annotations
from .bitcursor import Cursor
from edmheader.binary.bitfields import unpack_date_bits, unpack_time_bits
from edmheader.models.flight import FlightHeader, FlightIndexEntry

FLIGHT_HEADER_SIZE = 28                  # 14 big-endian 16-bit words

# Word offsets (bytes) inside the flight header
INTERVAL_AT = 22                         # word 11
DATE_AT = 24                             # word 12
TIME_AT = 26                             # word 13

INTERVAL_RANGE = (1, 60)
YEAR_RANGE = (2000, 2100)


def is_plausible_flight_header(cur: Cursor, pos: int) -> bool:
    """
    Heuristic check that the 28 bytes at `pos` look like a flight header:
    interval 1..60 s, a sane packed date and a sane packed time.
    Does not move the cursor.
    """
    if pos < 0 or pos + FLIGHT_HEADER_SIZE > len(cur):
        return False

    interval = cur.u16_at(pos + INTERVAL_AT)
    if not (INTERVAL_RANGE[0] <= interval <= INTERVAL_RANGE[1]):
        return False

    year, month, day = unpack_date_bits(cur.u16_at(pos + DATE_AT))
    if not (1 <= day <= 31 and 1 <= month <= 12 and YEAR_RANGE[0] <= year <= YEAR_RANGE[1]):
        return False

    hours, minutes, seconds = unpack_time_bits(cur.u16_at(pos + TIME_AT))
    if hours > 23 or minutes > 59 or seconds > 59:
        return False

    return True


def decode_flight_header(cur: Cursor) -> FlightHeader:
    """
    Parse the 28-byte flight header at the cursor:
      w0 flight number, w1..w2 feature flags (low, high), w3..w10 unknown,
      w11 interval seconds, w12 packed date, w13 packed time.
    """
    w = cur.words(FLIGHT_HEADER_SIZE // 2)
    year, month, day = unpack_date_bits(w[12])
    hours, minutes, seconds = unpack_time_bits(w[13])
    return FlightHeader(
        flight_number=w[0],
        flags=w[1] | (w[2] << 16),
        interval_s=w[11],
        year=year, month=month, day=day,
        hours=hours, minutes=minutes, seconds=seconds,
    )


def read_flight_header(data: bytes | bytearray | memoryview | Cursor, entry: FlightIndexEntry) -> FlightHeader:
    if not entry.is_resolved:
        raise ValueError(f"flight {entry.flight_number} has no resolved offset")
    cur = data if isinstance(data, Cursor) else Cursor(data)
    cur.seek(entry.resolved_offset)
    return decode_flight_header(cur)
