from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator

from .bitcursor import Cursor, CRLF

logger = logging.getLogger(__name__)

LINE_MARKER = "$"
TERMINAL_MARKER = "$L"


class ChecksumError(ValueError):
    """`expected` is the declared value, or the declared text when it is not hex."""
    def __init__(self, expected: int | str, computed: int, line_number: int | None = None):
        self.expected = expected
        self.computed = computed
        self.line_number = line_number
        where = f" on header line {line_number}" if line_number is not None else ""
        shown = f"{expected:x}" if isinstance(expected, int) else repr(expected)
        super().__init__(f"Header checksum mismatch{where}: expected {shown}, got {computed:x}")


@dataclass(frozen=True)
class HeaderLine:
    number: int       # 1-based
    text: str         # without the CR-LF terminator
    start: int        # offset of the leading '$'
    end: int          # offset just past the CR-LF

    @property
    def is_terminal(self) -> bool:
        return self.text.startswith(TERMINAL_MARKER)


def compute_checksum(body: str) -> int:
    """XOR of the character codes of `body` (the text between '$' and '*')."""
    calc = 0
    for ch in body:
        calc ^= ord(ch)
    return calc


def verify_checksum(text: str, line_number: int | None = None) -> None:
    """
    Check the '*NN' suffix of a header line. The declared value is the two
    hex digits after the last '*'; a line without '*' is not checked.
    """
    star = text.rfind("*")
    if star == -1:
        return
    declared = text[star + 1:star + 3]
    try:
        expected = int(declared, 16)
    except ValueError:
        expected = declared
    computed = compute_checksum(text[1:star])
    if computed != expected:
        raise ChecksumError(expected, computed, line_number)


def iter_header_lines(cur: Cursor) -> Iterator[HeaderLine]:
    """
    Yield checksum-verified '$' lines starting at the cursor. Stops, without
    consuming it, at the first line that does not start with '$', at the end
    of the buffer, or right after the terminal '$L' line. The cursor is left
    just past the last consumed terminator.
    """
    number = 0
    while cur.remaining() > 0:
        start = cur.tell()
        eol = cur.find(CRLF)
        if eol == -1:
            return
        text = cur.buf[start:eol].tobytes().decode("latin-1")
        if not text.startswith(LINE_MARKER):
            return
        number += 1
        verify_checksum(text, number)
        cur.seek(eol + len(CRLF))
        line = HeaderLine(number=number, text=text, start=start, end=cur.tell())
        logger.debug("header line %d at %d: %r", number, start, text)
        yield line
        if line.is_terminal:
            return
