"""Group dated observations into coarser periods."""

from typing import Callable, Iterable

import pandas as pd

from econ_gauge.data.parsing import clean_series, parse_number
from econ_gauge.models import Bucket, BucketAverage, Observation


PeriodKeyFn = Callable[[Observation], str]


def month_key(obs: Observation) -> str:
    """'2024-03'"""
    return f"{obs.timestamp.year:04d}-{obs.timestamp.month:02d}"


def quarter_key(obs: Observation) -> str:
    """'2024-Q1'"""
    quarter = (obs.timestamp.month - 1) // 3 + 1
    return f"{obs.timestamp.year:04d}-Q{quarter}"


def year_key(obs: Observation) -> str:
    return f"{obs.timestamp.year:04d}"


def aggregate(
    observations: Iterable[Observation], period_key_fn: PeriodKeyFn
) -> dict[str | None, dict[str, BucketAverage]]:
    """
    Average observations per scope and period.

    Accumulation is sum/count only, so the result does not depend on input
    order. Values go through ``parse_number``; anything that does not parse
    to a finite number is dropped, as is an observation without a timestamp.
    A period with no valid values for a scope does not appear under that
    scope.

    Returns:
        {scope: {period_key: BucketAverage}}, period keys in sorted order
    """
    buckets: dict[tuple[str | None, str], Bucket] = {}

    for obs in observations:
        value = parse_number(obs.value)
        if value is None or obs.timestamp is None:
            continue
        key = period_key_fn(obs)
        bucket = buckets.get((obs.scope, key))
        if bucket is None:
            bucket = buckets[(obs.scope, key)] = Bucket(period_key=key, scope=obs.scope)
        bucket.add(value)

    result: dict[str | None, dict[str, BucketAverage]] = {}
    for (scope, key) in sorted(buckets, key=lambda k: (k[0] or "", k[1])):
        average = buckets[(scope, key)].finalize()
        if average is not None:
            result.setdefault(scope, {})[key] = average

    return result


def with_deltas(buckets: Iterable[BucketAverage]) -> list[BucketAverage]:
    """
    Attach period-over-period change to chronologically ordered buckets.

    The first bucket's change is None.
    """
    result = []
    previous: BucketAverage | None = None

    for bucket in buckets:
        change = None if previous is None else bucket.average - previous.average
        result.append(
            BucketAverage(
                period_key=bucket.period_key,
                scope=bucket.scope,
                average=bucket.average,
                change=change,
            )
        )
        previous = bucket

    return result


def quarterly_deltas(
    observations: Iterable[Observation], scope: str | None = None
) -> list[BucketAverage]:
    """Quarter averages for one scope with quarter-over-quarter change."""
    by_scope = aggregate(observations, quarter_key)
    quarters = by_scope.get(scope, {})
    return with_deltas(quarters[key] for key in sorted(quarters))


def aggregate_frame(df: pd.DataFrame, freq: str = "QE") -> pd.DataFrame:
    """
    Resample a cached series to period means.

    Args:
        df: DataFrame with DatetimeIndex and 'value' column
        freq: pandas offset alias ("ME" monthly, "QE" quarterly, "YE" yearly)

    Returns:
        DataFrame with 'average' and 'change' columns; empty periods dropped
    """
    if df.empty or "value" not in df.columns:
        return pd.DataFrame(columns=["average", "change"])

    values = clean_series(df["value"])
    if values.empty:
        return pd.DataFrame(columns=["average", "change"])

    averages = values.resample(freq).mean().dropna()
    return pd.DataFrame({"average": averages, "change": averages.diff()})
