"""Generate chart data (quarterly aggregates, axes, bands) for the app."""
import json

import pandas as pd

from econ_gauge.config import Settings, INSTRUMENTS
from econ_gauge.data.cache import ObservationCache
from econ_gauge.indicators.axis import build_axis
from econ_gauge.indicators.bands import classify_instrument, gauge_reading
from econ_gauge.indicators.bucketer import aggregate_frame
from econ_gauge.models import Instrument

settings = Settings()
settings.validate()
cache = ObservationCache(settings.db_path)

output = {}

for instrument in Instrument:
    scopes = list(INSTRUMENTS[instrument.value]["scopes"]) or [None]
    for scope in scopes:
        df = cache.get_series(instrument, scope)
        if df.empty:
            continue

        quarterly = aggregate_frame(df, freq="QE")
        axis = build_axis(df["value"].tolist(), settings.axis_sections)
        latest = float(df["value"].iloc[-1])
        reading = gauge_reading(instrument, df["value"].tolist())
        match = classify_instrument(instrument, reading)

        key = f"{instrument.value}/{scope}" if scope else instrument.value
        output[key] = {
            'quarters': [
                {
                    'period': f"{idx.year}-Q{idx.quarter}",
                    'average': round(row['average'], 2),
                    'change': None if pd.isna(row['change']) else round(row['change'], 2),
                }
                for idx, row in quarterly.iterrows()
            ],
            'axis': None if axis is None else {
                'min': axis.min,
                'max': axis.max,
                'step': axis.step,
                'labels': list(axis.tick_labels),
            },
            'latest': {
                'date': df.index[-1].strftime('%Y-%m-%d'),
                'value': latest,
                'reading': reading,
                'band': match.band.name if match else None,
                'bands': [
                    {'name': b.name, 'low': b.low, 'high': b.high, 'color': b.display_color}
                    for b in match.bands
                ] if match else [],
            },
        }

with open('chart_data.json', 'w') as f:
    json.dump(output, f)

print(f"Saved chart data for {len(output)} series to chart_data.json")
