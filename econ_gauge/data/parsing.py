"""Tolerant parsing of raw numeric and date fields.

Everything that enters the bucketer, classifier or alert engine passes
through here first, so those components only ever see finite floats and
real dates.
"""

import math
import re
from datetime import date, datetime

import numpy as np
import pandas as pd


_NON_NUMERIC = re.compile(r"[^\d.+-]")


def parse_number(raw) -> float | None:
    """
    Parse a raw value into a finite float.

    Accepts numbers and numeric strings, including ones carrying thousands
    separators or units ("1,320.50", "3.5%"). Returns None for anything
    that does not yield a finite number.
    """
    if raw is None or isinstance(raw, (bool, np.bool_)):
        return None

    if isinstance(raw, (int, float, np.integer, np.floating)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            sanitized = _NON_NUMERIC.sub("", text)
            if not sanitized:
                return None
            try:
                value = float(sanitized)
            except ValueError:
                return None
    else:
        return None

    return value if math.isfinite(value) else None


def parse_date(raw) -> date | None:
    """Parse a date from a date/datetime/Timestamp or common string forms."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        if pd.isna(raw):
            return None
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    try:
        if text.isdigit() and len(text) == 8:
            return datetime.strptime(text, "%Y%m%d").date()
        if text.isdigit() and len(text) == 6:
            # Monthly releases (CPI) are keyed YYYYMM
            return datetime.strptime(text, "%Y%m").date()
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def clean_series(series: pd.Series) -> pd.Series:
    """Coerce a series to floats and drop anything non-finite."""
    if series.empty:
        return series.astype(float)

    if series.dtype == object:
        values = series.map(parse_number).astype(float)
    else:
        values = pd.to_numeric(series, errors="coerce").astype(float)

    return values[np.isfinite(values)]
