"""Chart axis scaling."""

from typing import Iterable

from econ_gauge.data.parsing import parse_number
from econ_gauge.models import AxisScale


MIN_SECTIONS = 2
MAX_SECTIONS = 6
DEFAULT_SECTIONS = 5  # matches the chart components' segment count

FLAT_PAD_RATIO = 0.01  # pad for a flat series, as a share of its value
RANGE_PAD_RATIO = 0.1  # pad on each end, as a share of the range
MIN_PAD = 1.0


def format_tick(value: float, suffix: str = "") -> str:
    """Two decimals with thousands separators: 1,320.50"""
    value = round(value, 2)
    if value == 0:
        value = 0.0  # no "-0.00"
    return f"{value:,.2f}{suffix}"


def build_axis(values: Iterable, desired_sections: int = DEFAULT_SECTIONS) -> AxisScale | None:
    """
    Compute a padded, rounded axis for a set of values.

    Returns None when there is nothing finite to chart. The minimum is
    floored at 0: every series charted today is a rate, index or price
    that cannot go negative.
    """
    clean = [v for v in (parse_number(x) for x in values) if v is not None]
    if not clean:
        return None

    low, high = min(clean), max(clean)
    if low == high:
        pad = max(abs(low) * FLAT_PAD_RATIO, MIN_PAD)
    else:
        pad = max((high - low) * RANGE_PAD_RATIO, MIN_PAD)
    low -= pad
    high += pad

    low = max(low, 0.0)
    if high <= low:
        # All-negative series; keep the axis non-degenerate
        high = low + MIN_PAD

    low = round(low, 2)
    high = round(high, 2)

    sections = min(max(int(desired_sections), MIN_SECTIONS), MAX_SECTIONS)
    step = round((high - low) / sections, 2)
    labels = tuple(format_tick(high - i * step) for i in range(sections + 1))

    return AxisScale(
        min=low,
        max=high,
        step=step,
        section_count=sections,
        tick_labels=labels,
    )


def tick_values(scale: AxisScale) -> list[float]:
    """Numeric ticks matching ``scale.tick_labels``, top to bottom."""
    return [round(scale.max - i * scale.step, 2) for i in range(scale.section_count + 1)]
