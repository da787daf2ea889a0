"""Run alert checks over a batch of observations."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping, Protocol

from econ_gauge.alerts.engine import CrossingAlertEngine
from econ_gauge.alerts.rules import InMemoryRuleStore, load_rules
from econ_gauge.config import Settings
from econ_gauge.data.cache import ObservationCache, SqliteStateStore
from econ_gauge.data.loader import exchange_rate_observations, observations_from_records
from econ_gauge.models import CrossingEvent, Instrument, Observation


logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, event: CrossingEvent) -> None:
        ...


class LoggingNotifier:
    """Logs each event; stands in for push delivery."""

    def __init__(self) -> None:
        self.delivered: list[CrossingEvent] = []

    def notify(self, event: CrossingEvent) -> None:
        scope = f"/{event.scope}" if event.scope else ""
        logger.info(
            f"ALERT {event.instrument.value}{scope}: crossed {event.threshold} "
            f"({event.previous_value} -> {event.current_value}, {event.direction})"
        )
        self.delivered.append(event)


def latest_observations(
    observations: Iterable[Observation],
) -> dict[tuple[Instrument, str | None], Observation]:
    """Most recent observation per (instrument, scope)."""
    latest: dict[tuple[Instrument, str | None], Observation] = {}
    for obs in observations:
        key = (obs.instrument, obs.scope)
        if key not in latest or obs.timestamp >= latest[key].timestamp:
            latest[key] = obs
    return latest


class AlertMonitor:
    """Fans a batch of observations out to the engine and a notifier."""

    def __init__(
        self,
        engine: CrossingAlertEngine,
        rules: InMemoryRuleStore,
        notifier: Notifier | None = None,
    ) -> None:
        self.engine = engine
        self.rules = rules
        self.notifier = notifier or LoggingNotifier()

    def run(self, observations: Iterable[Observation]) -> list[CrossingEvent]:
        """
        Check the latest reading of every (instrument, scope) in the batch.

        Returns all events, including any the notifier failed to deliver.
        """
        events = []
        latest = latest_observations(observations)

        for (instrument, scope), obs in sorted(
            latest.items(), key=lambda item: (item[0][0].value, item[0][1] or "")
        ):
            events.extend(
                self.engine.check(
                    instrument, scope, obs.value, self.rules.for_pair(instrument, scope)
                )
            )

        for event in events:
            try:
                self.notifier.notify(event)
            except Exception as e:
                logger.error(f"Failed to deliver alert for {event.instrument.value}/{event.scope}: {e}")

        return events


def load_observation_file(path: Path) -> list[Observation]:
    """
    Read observations from a JSON snapshot::

        {
            "exchange_rate": [{"date": "2024-06-03", "usdRate": "1,375.20", "jpyRate": 880.1}],
            "interest_rate": [{"date": "20240530", "value": 3.5}],
            "cpi": [{"date": "202405", "value": 2.7}]
        }
    """
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)

    if not isinstance(payload, Mapping):
        raise ValueError(f"{path} must contain a JSON object")

    observations = exchange_rate_observations(payload.get("exchange_rate") or [])
    observations += observations_from_records(
        payload.get("interest_rate") or [], Instrument.INTEREST_RATE, "value"
    )
    observations += observations_from_records(
        payload.get("cpi") or [], Instrument.CPI, "value"
    )
    return observations


def main() -> None:
    """CLI entry point for running alert checks."""
    import argparse
    import sys

    parser = argparse.ArgumentParser(description="Check threshold alerts for economic indicators")
    parser.add_argument(
        "observations",
        nargs="?",
        type=Path,
        help="JSON file with the latest observations",
    )
    parser.add_argument(
        "--rules",
        type=Path,
        help="Notification settings JSON (defaults to the data directory)",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show stored baselines and exit",
    )
    args = parser.parse_args()

    try:
        settings = Settings()
        settings.validate()
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    settings.configure_logging()
    store = SqliteStateStore(settings.db_path)

    if args.status:
        print("\nAlert baselines:")
        print("-" * 50)
        for state in store.all():
            scope = state.scope or "-"
            print(f"{state.instrument.value:15} | {scope:5} | {state.last_observed_value:>12,.2f}")
        return

    if args.observations is None:
        parser.error("an observations file is required unless --status is given")

    try:
        observations = load_observation_file(args.observations)
    except (OSError, ValueError) as e:
        print(f"Could not read observations: {e}")
        sys.exit(1)

    cache = ObservationCache(settings.db_path)
    stored = cache.store_observations(observations, datetime.now())
    logger.info(f"Cached {stored} observations")

    rules = InMemoryRuleStore(load_rules(args.rules or settings.rules_path))
    monitor = AlertMonitor(CrossingAlertEngine(store), rules)
    events = monitor.run(observations)

    print(f"\n{len(events)} alert(s)")
    for event in events:
        scope = f" {event.scope}" if event.scope else ""
        print(
            f"  {event.instrument.value}{scope}: {event.threshold:,.2f} "
            f"({event.previous_value:,.2f} -> {event.current_value:,.2f})"
        )


if __name__ == "__main__":
    main()
