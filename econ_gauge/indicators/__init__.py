"""Derived views: period aggregates, axis scales, classification bands."""

from econ_gauge.indicators.axis import build_axis
from econ_gauge.indicators.bands import BAND_SETS, classify, classify_instrument, gauge_reading
from econ_gauge.indicators.bucketer import (
    aggregate,
    month_key,
    quarter_key,
    quarterly_deltas,
    with_deltas,
)

__all__ = [
    "BAND_SETS",
    "aggregate",
    "build_axis",
    "classify",
    "classify_instrument",
    "gauge_reading",
    "month_key",
    "quarter_key",
    "quarterly_deltas",
    "with_deltas",
]
