import pytest

from edmheader.binary.bitfields import pack_date_bits, pack_time_bits


def _line(body: str, checksum: bool = True) -> bytes:
    """'$' + body + '*NN' + CRLF, NN being the XOR of the body characters."""
    if not checksum:
        return f"${body}\r\n".encode("latin-1")
    calc = 0
    for ch in body:
        calc ^= ord(ch)
    return f"${body}*{calc:02X}\r\n".encode("latin-1")


def _flight_header(number, *, interval=6, date=(2023, 5, 13), time=(14, 30, 20), flags=0) -> bytes:
    words = [0] * 14
    words[0] = number & 0xFFFF
    words[1] = flags & 0xFFFF
    words[2] = (flags >> 16) & 0xFFFF
    words[11] = interval
    words[12] = pack_date_bits(*date)
    words[13] = pack_time_bits(*time)
    return b"".join(w.to_bytes(2, "big") for w in words)


def _flight_block(number, length, **kw) -> bytes:
    """A flight of exactly `length` bytes: header followed by filler."""
    head = _flight_header(number, **kw)
    assert length >= len(head)
    return head + b"\xAA" * (length - len(head))


@pytest.fixture
def edm_line():
    return _line


@pytest.fixture
def flight_header():
    return _flight_header


@pytest.fixture
def flight_block():
    return _flight_block


@pytest.fixture
def edm_file():
    """
    Build a complete file from flight true lengths: $D rows declare the
    word-rounded lengths, the binary region holds back-to-back flights.
    """
    def build(flights, *, extra_lines=(), terminal=True, blocks=None):
        out = bytearray()
        out += _line("U,N12345_")
        out += _line("A,305,230,500,415,60,1650,230,90")
        out += _line("C, 700,63741, 6193, 1552, 292")
        for body in extra_lines:
            out += _line(body)
        for number, true_len in flights:
            words = (true_len + 1) // 2
            out += _line(f"D,{number:5d},{words:5d}")
        out += _line("F,0,999, 0,2950,2950")
        out += _line("T, 5,13, 5,23, 2, 2222")
        if terminal:
            out += _line("L, 49")
        binary_start = len(out)
        if blocks is None:
            blocks = [_flight_block(n, ln) for n, ln in flights]
        for b in blocks:
            out += b
        return bytes(out), binary_start
    return build
