import pytest

from edmheader.binary.codecs.header_lines import ChecksumError
from edmheader.binary.reader import HeaderParseError, parse_header
from edmheader.models.header import HeaderResult


def test_full_decode(edm_file):
    data, start = edm_file([(227, 60), (228, 41), (229, 100)])
    h = parse_header(data)
    assert h.binary_offset == start
    assert h.tail_number == "N12345_"
    assert h.alarm_limits.cht == 415
    assert h.config.model == 700
    assert h.fuel_config.k_factor_2 == 2950
    assert h.timestamp.sequence == 2222
    assert [f.flight_number for f in h.flights] == [227, 228, 229]
    assert [f.start_offset for f in h.flights] == [0, 60, 102]
    assert [f.resolved_offset for f in h.flights] == [start, start + 60, start + 101]
    assert h.unresolved_flights() == []
    assert h.flight_span(h.flight(228)) == (start + 60, start + 102)


def test_binary_offset_follows_terminal_line(edm_line):
    data = edm_line("U,N1") + edm_line("L, 49") + b"\x00\x01\x02"
    h = parse_header(data)
    assert h.binary_offset == len(data) - 3
    assert h.flights == []


def test_lines_after_terminal_are_not_read(edm_line):
    data = edm_line("L, 49") + edm_line("U,LATE") + b"$C,1*00\r\n"
    h = parse_header(data)
    assert h.tail_number is None


def test_corrupt_byte_is_integrity_error(edm_file):
    data, _ = edm_file([(1, 40)])
    i = data.index(b"$A,") + 4
    bad = data[:i] + b"9" + data[i + 1:]
    assert bad != data
    with pytest.raises(ChecksumError):
        parse_header(bad)


def test_corrupt_byte_is_not_structural_error(edm_file):
    data, _ = edm_file([(1, 40)])
    i = data.index(b"$T,") + 2
    bad = data[:i] + b";" + data[i + 1:]
    with pytest.raises(ValueError) as ei:
        parse_header(bad)
    assert isinstance(ei.value, ChecksumError)
    assert not isinstance(ei.value, HeaderParseError)


def test_missing_terminal_is_structural_error(edm_file):
    data, _ = edm_file([(1, 40)], terminal=False)
    with pytest.raises(HeaderParseError, match="no terminal record found"):
        parse_header(data)


def test_empty_input_is_structural_error():
    with pytest.raises(HeaderParseError):
        parse_header(b"")


def test_unlocated_flight_keeps_sentinel(edm_file, flight_block):
    flights = [(1, 40), (2, 40), (3, 40)]
    blocks = [flight_block(1, 40), flight_block(2, 40, date=(2023, 13, 1)), flight_block(3, 40)]
    data, start = edm_file(flights, blocks=blocks)
    h = parse_header(data)
    assert [f.flight_number for f in h.unresolved_flights()] == [2]
    assert h.flight_span(h.flight(2)) is None
    assert h.flight(3).resolved_offset == start + 80


def test_resolution_can_be_skipped(edm_file):
    data, _ = edm_file([(1, 40)])
    h = parse_header(data, resolve_positions=False)
    assert not h.flights[0].is_resolved


def test_from_binary_reads_path(tmp_path, edm_file):
    data, start = edm_file([(7, 50)])
    p = tmp_path / "sample.jpi"
    p.write_bytes(data)
    h = HeaderResult.from_binary(p)
    assert h.binary_offset == start
    assert h.flight(7).resolved_offset == start
    dumped = h.model_dump(mode="json")
    assert dumped["flights"][0]["data_length"] == 50


def test_negative_word_count_does_not_rewind_search(edm_line, flight_block):
    head = edm_line("D,1,20") + edm_line("D,2,-20") + edm_line("D,3,20") + edm_line("L, 49")
    data = head + flight_block(1, 40) + flight_block(3, 40)
    h = parse_header(data)
    start = len(head)
    assert [(f.flight_number, f.data_length, f.resolved_offset) for f in h.flights] == [
        (1, 40, start),
        (2, 0, None),
        (3, 40, start + 40),
    ]
