"""Quick look at the current gauge readings from the observation cache."""

from econ_gauge.config import Settings, INSTRUMENTS
from econ_gauge.data.cache import ObservationCache
from econ_gauge.indicators.bands import classify_instrument, gauge_reading
from econ_gauge.indicators.bucketer import aggregate_frame
from econ_gauge.models import Instrument


def main() -> None:
    settings = Settings()
    cache = ObservationCache(settings.db_path)
    status = cache.get_cache_status()

    if not status:
        print("No data available. Run econ-gauge-alerts with an observations file first.")
        return

    print("\nEconomic Gauges")
    print("=" * 60)

    for instrument in Instrument:
        meta = INSTRUMENTS[instrument.value]
        for scope in list(meta["scopes"]) or [None]:
            df = cache.get_series(instrument, scope)
            if df.empty:
                continue

            latest = float(df["value"].iloc[-1])
            match = classify_instrument(instrument, gauge_reading(instrument, df["value"].tolist()))
            label = f"{meta['title']} {scope or ''}".strip()
            print(f"  {label:32} | {latest:>10,.2f} | {match.band.name if match else '-'}")

            quarterly = aggregate_frame(df, freq="QE")
            if len(quarterly) >= 2:
                last = quarterly.iloc[-1]
                print(f"  {'':32} | QoQ change: {last['change']:+.2f}")

    print("\n" + "-" * 60)


if __name__ == "__main__":
    main()
