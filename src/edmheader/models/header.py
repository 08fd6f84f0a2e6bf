from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field

from .flight import FlightIndexEntry
from .records import AlarmLimitsRecord, ConfigRecord, FuelConfigRecord, TimestampRecord


class HeaderResult(BaseModel):
    tail_number: str | None = None
    config: ConfigRecord | None = None
    alarm_limits: AlarmLimitsRecord | None = None
    fuel_config: FuelConfigRecord | None = None
    flights: List[FlightIndexEntry] = Field(default_factory=list)
    timestamp: TimestampRecord | None = None
    binary_offset: int = Field(0, ge=0)

    @classmethod
    def from_binary(cls, data: bytes | str | Path) -> "HeaderResult":
        from ..binary.reader import parse_header
        return parse_header(data)

    def flight(self, number: int) -> Optional[FlightIndexEntry]:
        for entry in self.flights:
            if entry.flight_number == number:
                return entry
        return None

    def unresolved_flights(self) -> List[FlightIndexEntry]:
        return [f for f in self.flights if not f.is_resolved]

    def flight_span(self, entry: FlightIndexEntry) -> tuple[int, int] | None:
        """Byte range [start, end) of a located flight in the source buffer."""
        if not entry.is_resolved:
            return None
        return entry.resolved_offset, entry.resolved_offset + entry.data_length


@dataclass
class HeaderBuilder:
    """
    Accumulator for one decode pass. Single-occurrence records are
    last-write-wins; flights keep their order of appearance.
    """
    tail_number: str | None = None
    config: ConfigRecord | None = None
    alarm_limits: AlarmLimitsRecord | None = None
    fuel_config: FuelConfigRecord | None = None
    timestamp: TimestampRecord | None = None
    flights: list[FlightIndexEntry] = field(default_factory=list)
    cumulative_offset: int = 0
    binary_offset: int = 0

    def add_flight(self, flight_number: int, data_words: int) -> FlightIndexEntry:
        entry = FlightIndexEntry(
            flight_number=flight_number,
            data_words=data_words,
            start_offset=self.cumulative_offset,
        )
        self.flights.append(entry)
        self.cumulative_offset += entry.data_length
        return entry

    def set_binary_offset(self, offset: int) -> None:
        if self.binary_offset:
            raise ValueError(f"binary offset already fixed at {self.binary_offset}")
        self.binary_offset = offset

    def build(self) -> HeaderResult:
        return HeaderResult(
            tail_number=self.tail_number,
            config=self.config,
            alarm_limits=self.alarm_limits,
            fuel_config=self.fuel_config,
            flights=self.flights,
            timestamp=self.timestamp,
            binary_offset=self.binary_offset,
        )
