"""Threshold-crossing detection between consecutive observations."""

import logging
import sqlite3
import threading
from typing import Iterable

from econ_gauge.data.cache import AlertStateStore, StateStoreError
from econ_gauge.data.parsing import parse_number
from econ_gauge.models import AlertRule, CrossingEvent, Instrument


logger = logging.getLogger(__name__)

STORE_ERRORS = (StateStoreError, sqlite3.Error, OSError)


def evaluate_crossings(
    instrument: Instrument,
    scope: str | None,
    previous: float,
    current: float,
    rules: Iterable[AlertRule],
) -> list[CrossingEvent]:
    """
    Return one event per enabled rule whose threshold lies in
    [min(previous, current), max(previous, current)].

    Rules for other (instrument, scope) pairs and rules with an unparseable
    threshold are skipped.
    """
    low, high = min(previous, current), max(previous, current)
    events = []

    for rule in rules:
        if not rule.enabled or not rule.matches(instrument, scope):
            continue

        threshold = parse_number(rule.threshold)
        if threshold is None:
            logger.debug(f"Skipping rule with bad threshold {rule.threshold!r} ({instrument.value}/{scope})")
            continue

        if low <= threshold <= high:
            events.append(
                CrossingEvent(
                    instrument=instrument,
                    scope=scope,
                    threshold=threshold,
                    previous_value=previous,
                    current_value=current,
                )
            )

    return events


class CrossingAlertEngine:
    """
    Compares each new observation to the previous one for the same
    (instrument, scope) and reports which thresholds were crossed.

    The store is the only place the previous value lives. Every check
    overwrites it with the current value, fired or not. Checks on the same
    pair are serialised within this process.
    """

    def __init__(self, store: AlertStateStore) -> None:
        self.store = store
        self._locks: dict[tuple[Instrument, str | None], threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, instrument: Instrument, scope: str | None) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault((instrument, scope), threading.Lock())

    def _load_previous(self, instrument: Instrument, scope: str | None) -> float | None:
        try:
            state = self.store.get(instrument, scope)
        except STORE_ERRORS as e:
            # Unreadable baseline counts as unseeded: better to miss one alert than repeat one
            logger.warning(f"Could not load alert state for {instrument.value}/{scope}: {e}")
            return None

        if state is None:
            return None
        return parse_number(state.last_observed_value)

    def check(
        self,
        instrument: Instrument,
        scope: str | None,
        current_value,
        rules: Iterable[AlertRule],
    ) -> list[CrossingEvent]:
        """
        Check rules against the move from the stored value to ``current_value``.

        The first check for a pair only records the baseline. A non-finite
        current value is ignored and leaves the stored baseline as it was.
        An empty scope is the same pair as no scope.
        """
        scope = scope or None
        current = parse_number(current_value)
        if current is None:
            logger.debug(f"Ignoring non-numeric value {current_value!r} for {instrument.value}/{scope}")
            return []

        with self._lock_for(instrument, scope):
            previous = self._load_previous(instrument, scope)

            if previous is None:
                logger.info(f"Seeding alert baseline for {instrument.value}/{scope} at {current}")
                events = []
            else:
                events = evaluate_crossings(instrument, scope, previous, current, rules)

            try:
                self.store.set(instrument, scope, current)
            except STORE_ERRORS as e:
                logger.warning(f"Could not save alert state for {instrument.value}/{scope}: {e}")

        if events:
            logger.info(f"{len(events)} threshold(s) crossed for {instrument.value}/{scope}: {previous} -> {current}")

        return events
