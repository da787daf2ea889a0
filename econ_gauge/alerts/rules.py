"""Alert rules from the notification-settings document."""

import json
import logging
from pathlib import Path
from typing import Iterable, Mapping

from econ_gauge.config import COUNTRY_SCOPES
from econ_gauge.models import AlertRule, Instrument


logger = logging.getLogger(__name__)


class InMemoryRuleStore:
    """Read-only rule lookup."""

    def __init__(self, rules: Iterable[AlertRule] = ()) -> None:
        self._rules = list(rules)

    def get(self, instrument: Instrument, scope: str | None = None) -> AlertRule | None:
        """First rule for the pair, or None."""
        for rule in self._rules:
            if rule.matches(instrument, scope):
                return rule
        return None

    def for_pair(self, instrument: Instrument, scope: str | None = None) -> list[AlertRule]:
        return [rule for rule in self._rules if rule.matches(instrument, scope)]

    def all(self) -> list[AlertRule]:
        return list(self._rules)


def rules_from_settings(payload: Mapping | None) -> list[AlertRule]:
    """
    Build rules from a settings document shaped like::

        {
            "enabled": true,
            "exchangeRate": {"enabled": true, "countries": {"usa": {"enabled": true, "threshold": "1300"}}},
            "interestRate": {"enabled": true, "threshold": "3.0"},
            "cpi": {"enabled": false, "threshold": "2.5"}
        }

    A rule is enabled only if its own switch, its section switch and the
    master switch are all on. Thresholds are kept as entered. Legacy
    ``conditions`` keys are ignored.
    """
    if not isinstance(payload, Mapping):
        return []

    master = bool(payload.get("enabled", False))
    rules = []

    exchange = payload.get("exchangeRate") or {}
    exchange_on = master and bool(exchange.get("enabled", False))
    for country, conf in (exchange.get("countries") or {}).items():
        scope = COUNTRY_SCOPES.get(country)
        if scope is None or not isinstance(conf, Mapping):
            logger.debug(f"Ignoring exchange rate settings for {country!r}")
            continue
        rules.append(
            AlertRule(
                instrument=Instrument.EXCHANGE_RATE,
                threshold=conf.get("threshold"),
                scope=scope,
                enabled=exchange_on and bool(conf.get("enabled", False)),
            )
        )

    for key, instrument in (("interestRate", Instrument.INTEREST_RATE), ("cpi", Instrument.CPI)):
        conf = payload.get(key)
        if not isinstance(conf, Mapping):
            continue
        rules.append(
            AlertRule(
                instrument=instrument,
                threshold=conf.get("threshold"),
                enabled=master and bool(conf.get("enabled", False)),
            )
        )

    return rules


def load_rules(path: Path) -> list[AlertRule]:
    """Read rules from a JSON settings file. Missing or unreadable file gives no rules."""
    if not path.exists():
        logger.info(f"No notification settings at {path}")
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read notification settings {path}: {e}")
        return []

    return rules_from_settings(payload)
