"""Data models for economic indicator data."""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Instrument(Enum):
    """Tracked economic series."""
    EXCHANGE_RATE = "exchange_rate"
    INTEREST_RATE = "interest_rate"
    CPI = "cpi"


@dataclass(frozen=True)
class Observation:
    """Single dated reading for an instrument."""

    timestamp: date
    instrument: Instrument
    value: float
    scope: str | None = None  # currency code for exchange rates

    def __post_init__(self):
        if not self.scope:
            object.__setattr__(self, "scope", None)


@dataclass(frozen=True)
class BucketAverage:
    """Finalized period aggregate."""

    period_key: str
    scope: str | None
    average: float
    change: float | None = None  # vs. previous period, None for the first


@dataclass
class Bucket:
    """Running sum/count for one (period, scope) pair.

    The sum is carried as non-overlapping float partials (Shewchuk), so it
    stays exact until read back through ``math.fsum``. The average is then
    the same whatever order values were added in, and a bucket holds a few
    floats rather than every value it has seen.
    """

    period_key: str
    scope: str | None
    count: int = 0
    partials: list[float] = field(default_factory=list)

    @property
    def total(self) -> float:
        return math.fsum(self.partials)

    def add(self, value: float) -> None:
        x = value
        kept = 0
        for y in self.partials:
            if abs(x) < abs(y):
                x, y = y, x
            hi = x + y
            lo = y - (hi - x)
            if lo:
                self.partials[kept] = lo
                kept += 1
            x = hi
        self.partials[kept:] = [x]
        self.count += 1

    def finalize(self) -> BucketAverage | None:
        if self.count == 0:
            return None
        return BucketAverage(
            period_key=self.period_key,
            scope=self.scope,
            average=self.total / self.count,
        )


@dataclass(frozen=True)
class AxisScale:
    """Chart axis bounds and labels."""

    min: float
    max: float
    step: float
    section_count: int
    tick_labels: tuple[str, ...]


@dataclass(frozen=True)
class Band:
    """Named classification interval [low, high)."""

    name: str
    low: float
    high: float
    display_color: str
    text_color: str

    def contains(self, value: float, closed_right: bool = False) -> bool:
        if closed_right:
            return self.low <= value <= self.high
        return self.low <= value < self.high


BandSet = tuple[Band, ...]


@dataclass(frozen=True)
class BandMatch:
    """Matched band plus the band set it was matched against."""

    band: Band
    bands: BandSet


@dataclass(frozen=True)
class AlertRule:
    """User threshold for an instrument.

    ``threshold`` is kept as entered (a string from the settings screen is
    fine); it is parsed when the rule is evaluated.
    """

    instrument: Instrument
    threshold: float | str | None
    scope: str | None = None
    enabled: bool = True

    def __post_init__(self):
        if not self.scope:
            object.__setattr__(self, "scope", None)

    def matches(self, instrument: Instrument, scope: str | None) -> bool:
        return self.instrument == instrument and self.scope == scope


@dataclass(frozen=True)
class AlertState:
    """Last value seen for an (instrument, scope) pair."""

    instrument: Instrument
    scope: str | None
    last_observed_value: float


@dataclass(frozen=True)
class CrossingEvent:
    """Threshold traversed between two consecutive observations."""

    instrument: Instrument
    scope: str | None
    threshold: float
    previous_value: float
    current_value: float

    @property
    def direction(self) -> str:
        if self.current_value > self.previous_value:
            return "up"
        if self.current_value < self.previous_value:
            return "down"
        return "flat"
