"""Unit tests for the alert monitor"""

import json
from datetime import date
from econ_gauge.alerts.engine import CrossingAlertEngine
from econ_gauge.alerts.monitor import (
    AlertMonitor,
    LoggingNotifier,
    latest_observations,
    load_observation_file,
)
from econ_gauge.alerts.rules import InMemoryRuleStore
from econ_gauge.models import AlertRule, Instrument, Observation


FX = Instrument.EXCHANGE_RATE


class FailingNotifier:
    """Notifier that always raises"""

    def notify(self, event):
        raise RuntimeError("push service down")


def _snapshot(usd: float, cpi: float) -> list[Observation]:
    return [
        Observation(date(2024, 6, 2), FX, 1000.0, "USD"),  # older, ignored
        Observation(date(2024, 6, 3), FX, usd, "USD"),
        Observation(date(2024, 5, 1), Instrument.CPI, cpi),
    ]


def _rules() -> InMemoryRuleStore:
    return InMemoryRuleStore([
        AlertRule(FX, "1300", scope="USD"),
        AlertRule(Instrument.CPI, "2.5"),
    ])


def test_latest_observations():
    """Test the most recent reading wins per pair"""
    latest = latest_observations(_snapshot(1310.0, 2.7))

    assert latest[(FX, "USD")].value == 1310.0
    assert latest[(Instrument.CPI, None)].value == 2.7


def test_monitor_seeds_then_alerts(memory_store):
    """Test first run seeds, second run delivers crossings"""
    notifier = LoggingNotifier()
    monitor = AlertMonitor(CrossingAlertEngine(memory_store), _rules(), notifier)

    assert monitor.run(_snapshot(1290.0, 2.3)) == []
    events = monitor.run(_snapshot(1310.0, 2.7))

    assert {(e.instrument, e.scope) for e in events} == {(FX, "USD"), (Instrument.CPI, None)}
    assert notifier.delivered == events


def test_monitor_survives_notifier_failure(memory_store):
    """Test delivery errors do not lose events"""
    monitor = AlertMonitor(CrossingAlertEngine(memory_store), _rules(), FailingNotifier())

    monitor.run(_snapshot(1290.0, 2.3))
    events = monitor.run(_snapshot(1310.0, 2.3))

    assert len(events) == 1
    assert memory_store.get(FX, "USD").last_observed_value == 1310.0


def test_load_observation_file(tmp_path):
    """Test reading a JSON observation snapshot"""
    path = tmp_path / "observations.json"
    path.write_text(
        json.dumps({
            "exchange_rate": [{"date": "2024-06-03", "usdRate": "1,375.20", "jpyRate": 880.1}],
            "interest_rate": [{"date": "20240530", "value": 3.5}],
            "cpi": [{"date": "202405", "value": "2.7"}, {"date": "202406", "value": ""}],
        }),
        encoding="utf-8",
    )

    observations = load_observation_file(path)

    assert len(observations) == 4
    assert {o.instrument for o in observations} == set(Instrument)
