from __future__ import annotations
import logging
import re
from typing import Callable, Dict, List, Optional

from edmheader.models.flight import FlightIndexEntry
from edmheader.models.header import HeaderBuilder
from edmheader.models.records import (
    AlarmLimitsRecord,
    ConfigRecord,
    FuelConfigRecord,
    TimestampRecord,
)

logger = logging.getLogger(__name__)


class RecordType:
    TAIL_NUMBER = "U"
    ALARM_LIMITS = "A"
    CONFIG = "C"
    FLIGHT_INDEX = "D"
    FUEL_CONFIG = "F"
    TIMESTAMP = "T"
    # recognised, carried no decoded fields
    CARB = "P"
    H = "H"
    LAST = "L"

INERT_TYPES = frozenset({RecordType.CARB, RecordType.H, RecordType.LAST})

_CHECKSUM_SUFFIX = re.compile(r"\*[0-9A-Fa-f]{2}$")
_LEADING_INT = re.compile(r"[+-]?\d+")


def strip_checksum(text: str) -> str:
    return _CHECKSUM_SUFFIX.sub("", text)


def split_fields(content: str) -> List[str]:
    """Comma-separated fields after the 3-character '$X,' prefix, whitespace-trimmed."""
    return [f.strip() for f in content[3:].split(",")]


def int_field(fields: List[str], i: int) -> int:
    """Leading base-10 integer of field `i`; 0 when missing or unparsable."""
    if i >= len(fields):
        return 0
    m = _LEADING_INT.match(fields[i])
    return int(m.group()) if m else 0


def uint_field(fields: List[str], i: int) -> int:
    """int_field for unsigned values; a negative number decodes to 0."""
    return max(0, int_field(fields, i))


def opt_int_field(fields: List[str], i: int) -> Optional[int]:
    """Like int_field, but None when the field is absent from the line."""
    if i >= len(fields):
        return None
    return int_field(fields, i)


def _ints(fields: List[str], n: int) -> List[int]:
    return [int_field(fields, i) for i in range(n)]


# ---- per-record decoders ----

def decode_tail_number(fields: List[str]) -> str:
    # The tail number may itself contain commas
    return re.sub(r"\*.*$", "", ",".join(fields)).strip()


def decode_alarm_limits(fields: List[str]) -> AlarmLimitsRecord:
    vh, vl, dif, cht, cld, tit, oh, ol = _ints(fields, 8)
    return AlarmLimitsRecord(
        volts_high=vh, volts_low=vl, dif=dif, cht=cht,
        cld=cld, tit=tit, oil_high=oh, oil_low=ol,
    )


def decode_config(fields: List[str]) -> ConfigRecord:
    model, lo, hi = _ints(fields, 3)
    return ConfigRecord(
        model=model, flags_low=lo, flags_high=hi,
        **{f"unknown{k}": opt_int_field(fields, k + 2) for k in range(1, 7)},
    )


def decode_fuel_config(fields: List[str]) -> FuelConfigRecord:
    empty, full, warn, k1, k2 = _ints(fields, 5)
    return FuelConfigRecord(
        empty_warning=empty, full_capacity=full, warning_level=warn,
        k_factor_1=k1, k_factor_2=k2,
    )


def decode_timestamp(fields: List[str]) -> TimestampRecord:
    mo, d, y, h, mi = _ints(fields, 5)
    return TimestampRecord(
        month=mo, day=d, year=y, hour=h, minute=mi,
        sequence=opt_int_field(fields, 5),
    )


_SINGLE_RECORDS: Dict[str, tuple[str, Callable[[List[str]], object]]] = {
    RecordType.TAIL_NUMBER: ("tail_number", decode_tail_number),
    RecordType.ALARM_LIMITS: ("alarm_limits", decode_alarm_limits),
    RecordType.CONFIG: ("config", decode_config),
    RecordType.FUEL_CONFIG: ("fuel_config", decode_fuel_config),
    RecordType.TIMESTAMP: ("timestamp", decode_timestamp),
}


def decode_record(text: str, acc: HeaderBuilder) -> Optional[FlightIndexEntry]:
    """
    Decode one checksum-verified header line into `acc`.
    Returns the new FlightIndexEntry for a $D line, otherwise None.
    Never raises on field content.
    """
    content = strip_checksum(text)
    rtype = content[1:2]
    fields = split_fields(content)

    if rtype == RecordType.FLIGHT_INDEX:
        return acc.add_flight(uint_field(fields, 0), uint_field(fields, 1))

    target = _SINGLE_RECORDS.get(rtype)
    if target is not None:
        attr, decode = target
        if getattr(acc, attr) is not None:
            logger.debug("duplicate $%s record, keeping the last one", rtype)
        setattr(acc, attr, decode(fields))
    elif rtype in INERT_TYPES:
        logger.debug("$%s record recognised, not decoded", rtype)
    else:
        logger.debug("ignoring unknown record type %r", rtype)
    return None
