"""Threshold-crossing alerts."""

from econ_gauge.alerts.engine import CrossingAlertEngine, evaluate_crossings
from econ_gauge.alerts.monitor import AlertMonitor, LoggingNotifier
from econ_gauge.alerts.rules import InMemoryRuleStore, load_rules, rules_from_settings

__all__ = [
    "AlertMonitor",
    "CrossingAlertEngine",
    "InMemoryRuleStore",
    "LoggingNotifier",
    "evaluate_crossings",
    "load_rules",
    "rules_from_settings",
]
