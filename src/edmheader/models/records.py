from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from ..binary.bitfields import YEAR_BASE, to_datetime


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class AlarmLimitsRecord(_Record):
    """$A: VoltsHi*10, VoltsLo*10, DIF, CHT, CLD, TIT, OilHi, OilLo."""
    volts_high: int = 0
    volts_low: int = 0
    dif: int = 0
    cht: int = 0
    cld: int = 0
    tit: int = 0
    oil_high: int = 0
    oil_low: int = 0

    @property
    def volts_high_v(self) -> float: return self.volts_high / 10.0

    @property
    def volts_low_v(self) -> float: return self.volts_low / 10.0


class ConfigRecord(_Record):
    """
    $C: model number, feature flags (low/high 16 bits) and up to six
    trailing values whose meaning depends on the firmware. A trailing value
    missing from the line is None; one present but unparsable is 0.
    """
    model: int = 0
    flags_low: int = 0
    flags_high: int = 0
    unknown1: int | None = None
    unknown2: int | None = None
    unknown3: int | None = None
    unknown4: int | None = None
    unknown5: int | None = None
    unknown6: int | None = None

    @property
    def feature_flags(self) -> int:
        return (self.flags_low & 0xFFFF) | ((self.flags_high & 0xFFFF) << 16)


class FuelConfigRecord(_Record):
    """$F: empty, full, warning, k-factor 1, k-factor 2 (k-factors in hundredths)."""
    empty_warning: int = 0
    full_capacity: int = 0
    warning_level: int = 0
    k_factor_1: int = 0
    k_factor_2: int = 0

    @property
    def k_factor_1_value(self) -> float: return self.k_factor_1 / 100.0

    @property
    def k_factor_2_value(self) -> float: return self.k_factor_2 / 100.0


class TimestampRecord(_Record):
    """$T: download time as MM, DD, YY, hh, mm and an optional sequence value (UTC)."""
    month: int = 0
    day: int = 0
    year: int = 0
    hour: int = 0
    minute: int = 0
    sequence: int | None = None

    def as_datetime(self) -> datetime | None:
        return to_datetime(self.year + YEAR_BASE, self.month, self.day, self.hour, self.minute)
