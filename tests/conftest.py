"""Pytest fixtures for testing"""

import pytest
from datetime import date
from econ_gauge.data.cache import InMemoryStateStore, SqliteStateStore, ObservationCache
from econ_gauge.models import AlertRule, Instrument, Observation


@pytest.fixture
def memory_store() -> InMemoryStateStore:
    """Empty in-memory alert state store"""
    return InMemoryStateStore()


@pytest.fixture
def sqlite_store(tmp_path) -> SqliteStateStore:
    """Alert state store on a temporary database"""
    return SqliteStateStore(tmp_path / "state.db")


@pytest.fixture
def observation_cache(tmp_path) -> ObservationCache:
    """Observation cache on a temporary database"""
    return ObservationCache(tmp_path / "observations.db")


@pytest.fixture
def usd_rule() -> AlertRule:
    """USD/KRW alert at 1300"""
    return AlertRule(instrument=Instrument.EXCHANGE_RATE, threshold=1300, scope="USD")


@pytest.fixture
def monthly_cpi() -> list[Observation]:
    """Twelve months of CPI, one reading per month, quarter averages 10/12/15/11"""
    values = [9, 10, 11, 12, 12, 12, 14, 15, 16, 11, 11, 11]
    return [
        Observation(timestamp=date(2023, month, 15), instrument=Instrument.CPI, value=float(v))
        for month, v in zip(range(1, 13), values)
    ]
