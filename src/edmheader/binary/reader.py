from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Union

from .codecs.bitcursor import Cursor
from .codecs.header_lines import HeaderLine, iter_header_lines
from .codecs.records import decode_record
from .locate import resolve_flight_offsets

from edmheader.models.header import HeaderBuilder, HeaderResult

logger = logging.getLogger(__name__)

BytesLike = Union[str, Path, bytes, bytearray, memoryview]


class HeaderParseError(ValueError):
    pass


# -----------------------------
# Helpers
# -----------------------------

def _load_bytes(inp: BytesLike) -> bytes:
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return bytes(inp)
    p = Path(str(inp))
    return p.read_bytes()


def iter_records(data: BytesLike) -> Iterator[HeaderLine]:
    """Verified header lines of a file, up to and including the $L record."""
    yield from iter_header_lines(Cursor(_load_bytes(data)))


# -----------------------------
# Header decode
# -----------------------------

def decode_header_lines(cur: Cursor) -> HeaderBuilder:
    """
    Fold the header lines at the cursor into a HeaderBuilder and fix the
    binary region start just past the terminal $L line.
    """
    acc = HeaderBuilder()
    count = 0
    for line in iter_header_lines(cur):
        count += 1
        decode_record(line.text, acc)
        if line.is_terminal:
            acc.set_binary_offset(line.end)

    if acc.binary_offset == 0:
        raise HeaderParseError(f"no terminal record found (after {count} header lines)")

    logger.info(
        "header: %d lines, %d flights, binary data at %d",
        count, len(acc.flights), acc.binary_offset,
    )
    return acc


def parse_header(data: BytesLike, *, resolve_positions: bool = True) -> HeaderResult:
    """
    Decode the ASCII header of an EDM file and locate each flight's binary
    header. With resolve_positions=False the flights are left unresolved.
    """
    cur = Cursor(_load_bytes(data))
    acc = decode_header_lines(cur)

    if resolve_positions and acc.flights:
        found = resolve_flight_offsets(cur, acc.flights, acc.binary_offset)
        logger.info("located %d of %d flights", found, len(acc.flights))

    return acc.build()
