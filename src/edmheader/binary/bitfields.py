from __future__ import annotations
from datetime import datetime

YEAR_BASE = 2000

def _and_shift(v: int, width: int) -> tuple[int, int]:
    return v & ((1 << width) - 1), v >> width

def unpack_date_bits(v: int) -> tuple[int, int, int]:
    """
    Packed 16-bit date: day:5 (LSB), month:4, year-since-2000:7.
    Returns (year, month, day) with the year already offset.
    """
    day, v = _and_shift(v, 5)
    month, v = _and_shift(v, 4)
    year, _ = _and_shift(v, 7)
    return year + YEAR_BASE, month, day

def unpack_time_bits(v: int) -> tuple[int, int, int]:
    """
    Packed 16-bit time: 2-second ticks:5 (LSB), minutes:6, hours:5.
    Returns (hours, minutes, seconds); seconds are ticks * 2.
    """
    ticks, v = _and_shift(v, 5)
    minutes, v = _and_shift(v, 6)
    hours, _ = _and_shift(v, 5)
    return hours, minutes, ticks * 2

def pack_date_bits(year: int, month: int, day: int) -> int:
    return (((year - YEAR_BASE) & 0x7F) << 9) | ((month & 0x0F) << 5) | (day & 0x1F)

def pack_time_bits(hours: int, minutes: int, seconds: int) -> int:
    return ((hours & 0x1F) << 11) | ((minutes & 0x3F) << 5) | ((seconds // 2) & 0x1F)

def to_datetime(year: int, month: int, day: int, hours: int = 0, minutes: int = 0, seconds: int = 0) -> datetime | None:
    """Calendar datetime, or None when the fields do not name a real instant."""
    try:
        return datetime(year, month, day, hours, minutes, seconds)
    except ValueError:
        return None
