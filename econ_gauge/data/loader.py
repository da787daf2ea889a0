"""Convert already-retrieved API payloads into observations."""

import logging
from typing import Iterable, Mapping

import pandas as pd

from econ_gauge.data.parsing import parse_date, parse_number
from econ_gauge.models import Instrument, Observation


logger = logging.getLogger(__name__)


# Period-series field -> currency scope
EXCHANGE_RATE_FIELDS: dict[str, str] = {
    "usdRate": "USD",
    "jpyRate": "JPY",
    "eurRate": "EUR",
    "cnyRate": "CNY",
}


def observations_from_records(
    records: Iterable[Mapping],
    instrument: Instrument,
    value_field: str,
    date_field: str = "date",
    scope: str | None = None,
) -> list[Observation]:
    """
    Build observations from a list of API records.

    Records with a missing/unparseable date or value are skipped.
    """
    observations = []
    skipped = 0

    for record in records:
        timestamp = parse_date(record.get(date_field))
        value = parse_number(record.get(value_field))
        if timestamp is None or value is None:
            skipped += 1
            continue
        observations.append(
            Observation(timestamp=timestamp, instrument=instrument, value=value, scope=scope)
        )

    if skipped:
        logger.debug(f"Skipped {skipped} malformed {instrument.value} records ({value_field})")

    return observations


def exchange_rate_observations(
    records: Iterable[Mapping], fields: Mapping[str, str] | None = None
) -> list[Observation]:
    """
    Fan out period-series records into one observation per currency.

    Each record looks like ``{"date": ..., "usdRate": ..., "jpyRate": ...}``;
    a currency missing from a record simply produces no observation.
    """
    records = list(records)
    fields = fields or EXCHANGE_RATE_FIELDS

    observations = []
    for field_name, scope in fields.items():
        observations.extend(
            observations_from_records(
                records, Instrument.EXCHANGE_RATE, field_name, scope=scope
            )
        )
    return observations


def observations_from_frame(
    df: pd.DataFrame, instrument: Instrument, scope: str | None = None
) -> list[Observation]:
    """Build observations from a DataFrame with a date index and 'value' column."""
    if df.empty or "value" not in df.columns:
        return []

    observations = []
    for idx, raw in df["value"].items():
        timestamp = parse_date(idx)
        value = parse_number(raw)
        if timestamp is None or value is None:
            continue
        observations.append(
            Observation(timestamp=timestamp, instrument=instrument, value=value, scope=scope)
        )
    return observations
