from __future__ import annotations
import struct

CRLF = b"\r\n"

class Cursor:
    __slots__ = ("raw", "buf", "pos")

    def __init__(self, data: bytes | bytearray | memoryview):
        self.raw = bytes(data)
        self.buf = memoryview(self.raw)
        self.pos = 0

    def __len__(self) -> int: return len(self.buf)
    def remaining(self) -> int: return len(self.buf) - self.pos
    def tell(self) -> int: return self.pos

    def seek(self, pos: int) -> None:
        if not (0 <= pos <= len(self.buf)): raise ValueError("seek out of bounds")
        self.pos = pos

    def take(self, n: int) -> bytes:
        end = self.pos + n
        if end > len(self.buf): raise ValueError(f"underrun: need {n} at {self.pos}")
        out = self.buf[self.pos:end].tobytes()
        self.pos = end
        return out

    def find(self, needle: bytes) -> int:
        """Absolute offset of the next `needle` at or after the cursor, or -1."""
        return self.raw.find(needle, self.pos)

    # byte-aligned big-endian reads
    def words(self, n: int) -> tuple[int, ...]:
        """Read `n` big-endian unsigned 16-bit words."""
        return struct.unpack(f">{n}H", self.take(2 * n))

    def u16_at(self, pos: int) -> int:
        """Big-endian word at an absolute offset; does not move the cursor."""
        if not (0 <= pos and pos + 2 <= len(self.buf)): raise ValueError(f"u16 out of bounds at {pos}")
        return struct.unpack_from(">H", self.raw, pos)[0]
