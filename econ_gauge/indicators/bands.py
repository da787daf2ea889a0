"""Classify a reading into a named band."""

import dataclasses
import math

from econ_gauge.data.parsing import parse_number
from econ_gauge.models import Band, BandMatch, BandSet, Instrument


def validate_band_set(bands: BandSet) -> BandSet:
    """Check a band set is non-empty, ordered and contiguous."""
    if not bands:
        raise ValueError("Band set is empty")

    for band in bands:
        if not band.low < band.high:
            raise ValueError(f"Band {band.name!r} has low >= high ({band.low}, {band.high})")

    for prev, curr in zip(bands, bands[1:]):
        if prev.high != curr.low:
            raise ValueError(
                f"Bands {prev.name!r} and {curr.name!r} are not contiguous "
                f"({prev.high} != {curr.low})"
            )

    return tuple(bands)


# CPI year-over-year change (%)
CPI_BANDS: BandSet = validate_band_set((
    Band("Deflation", -1.0, 0.0, "#FFE8E6", "#C62828"),
    Band("Low inflation", 0.0, 1.0, "#FFF3E0", "#EF6C00"),
    Band("Stable", 1.0, 3.0, "#E8F5E9", "#2E7D32"),
    Band("High inflation", 3.0, 5.0, "#FFE0B2", "#D84315"),
    Band("Very high inflation", 5.0, 6.0, "#FFEBEE", "#B71C1C"),
))

# Policy rate change vs. the previous decision (percentage points)
INTEREST_RATE_BANDS: BandSet = validate_band_set((
    Band("Very accommodative", -3.0, -1.5, "#E3F2FD", "#1565C0"),
    Band("Accommodative", -1.5, 0.0, "#E8F5E9", "#2E7D32"),
    Band("Neutral", 0.0, 1.0, "#FFF9C4", "#F9A825"),
    Band("Restrictive", 1.0, 3.0, "#FFE0B2", "#EF6C00"),
    Band("Very restrictive", 3.0, 5.0, "#FFEBEE", "#C62828"),
))

# KRW per USD; product default, pass another BandSet to classify() to override
EXCHANGE_RATE_BANDS: BandSet = validate_band_set((
    Band("Strong won", 1000.0, 1200.0, "#C8E6C9", "#4CAF50"),
    Band("Stable", 1200.0, 1350.0, "#FFF9C4", "#FFC107"),
    Band("Weak won", 1350.0, 1450.0, "#FFE0B2", "#F57C00"),
    Band("Very weak won", 1450.0, 1600.0, "#FFCDD2", "#F44336"),
))

BAND_SETS: dict[Instrument, BandSet] = {
    Instrument.CPI: CPI_BANDS,
    Instrument.INTEREST_RATE: INTEREST_RATE_BANDS,
    Instrument.EXCHANGE_RATE: EXCHANGE_RATE_BANDS,
}


def expand_bands(value: float, bands: BandSet) -> BandSet:
    """
    Stretch the outer bands so that ``value`` falls inside the set.

    The first band's low moves to floor(value) - 1 when value is below it;
    the last band's high moves to ceil(value) + 1 when value is above it.
    Inner boundaries never move.
    """
    expanded = list(bands)

    if value < expanded[0].low:
        expanded[0] = dataclasses.replace(expanded[0], low=float(math.floor(value) - 1))
    if value > expanded[-1].high:
        expanded[-1] = dataclasses.replace(expanded[-1], high=float(math.ceil(value) + 1))

    return tuple(expanded)


def classify(value, bands: BandSet) -> BandMatch | None:
    """
    Find the band containing ``value``.

    Bands are half-open [low, high) except the last, which is closed so the
    top of the (possibly expanded) range still matches. Expansion is done
    fresh on every call; ``bands`` itself is never modified.

    Returns None if value is not a finite number.
    """
    reading = parse_number(value)
    if reading is None:
        return None

    effective = expand_bands(reading, bands)
    last = len(effective) - 1

    for i, band in enumerate(effective):
        if band.contains(reading, closed_right=(i == last)):
            return BandMatch(band=band, bands=effective)

    # Only reachable with a gapped band set
    raise ValueError(f"No band contains {reading}; band set is not contiguous")


def classify_instrument(instrument: Instrument, value) -> BandMatch | None:
    """Classify against the instrument's static set.

    For the interest rate ``value`` is the change in the policy rate, not
    the rate itself; see ``gauge_reading``.
    """
    return classify(value, BAND_SETS[instrument])


def gauge_reading(instrument: Instrument, values) -> float | None:
    """
    Value the instrument's gauge classifies, from a chronological series.

    Exchange rate and CPI use the latest reading. The interest rate uses the
    latest rate minus the one before it, 0.0 when there is only one rate.
    Unparseable entries are skipped. Returns None for an empty series.
    """
    readings = [r for r in (parse_number(v) for v in values) if r is not None]
    if not readings:
        return None
    if instrument != Instrument.INTEREST_RATE:
        return readings[-1]
    if len(readings) < 2:
        return 0.0
    return readings[-1] - readings[-2]


def classify_rate_change(current, previous) -> BandMatch | None:
    """Policy stance for a move from ``previous`` to ``current`` rate."""
    current, previous = parse_number(current), parse_number(previous)
    if current is None or previous is None:
        return None
    return classify(current - previous, INTEREST_RATE_BANDS)


def gauge_fraction(value, bands: BandSet) -> float | None:
    """Position of value along the effective band span, 0 to 1."""
    match = classify(value, bands)
    if match is None:
        return None

    low, high = match.bands[0].low, match.bands[-1].high
    fraction = (parse_number(value) - low) / (high - low)
    return min(max(fraction, 0.0), 1.0)
