"""Data models."""

from econ_gauge.models.market_data import (
    AlertRule,
    AlertState,
    AxisScale,
    Band,
    BandMatch,
    BandSet,
    Bucket,
    BucketAverage,
    CrossingEvent,
    Instrument,
    Observation,
)

__all__ = [
    "AlertRule",
    "AlertState",
    "AxisScale",
    "Band",
    "BandMatch",
    "BandSet",
    "Bucket",
    "BucketAverage",
    "CrossingEvent",
    "Instrument",
    "Observation",
]
