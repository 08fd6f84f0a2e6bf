from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, computed_field

from ..binary.bitfields import to_datetime

# Resolved offset of a flight the resolver could not locate.
UNRESOLVED = None


class FlightIndexEntry(BaseModel):
    """One $D row. Only the resolved offset may change, once, via mark_resolved()."""
    model_config = ConfigDict(frozen=True)

    flight_number: int
    data_words: int = 0
    start_offset: int = 0   # cumulative declared bytes of earlier flights
    _resolved_offset: int | None = PrivateAttr(default=UNRESOLVED)

    @computed_field
    @property
    def data_length(self) -> int:
        return self.data_words * 2

    @computed_field
    @property
    def resolved_offset(self) -> int | None:
        return self._resolved_offset

    @property
    def tag(self) -> bytes:
        return (self.flight_number & 0xFFFF).to_bytes(2, "big")

    @property
    def is_resolved(self) -> bool:
        return self.resolved_offset is not UNRESOLVED

    def mark_resolved(self, offset: int) -> None:
        if self.is_resolved:
            raise ValueError(f"flight {self.flight_number} already resolved at {self.resolved_offset}")
        self._resolved_offset = offset


class FlightHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    flight_number: int = Field(..., ge=0, le=0xFFFF)
    flags: int = 0
    interval_s: int = 0
    year: int
    month: int
    day: int
    hours: int
    minutes: int
    seconds: int

    @property
    def recorded_at(self) -> datetime | None:
        return to_datetime(self.year, self.month, self.day, self.hours, self.minutes, self.seconds)
