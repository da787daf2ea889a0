"""Unit tests for settings"""

import pytest
from econ_gauge.config import Settings, INSTRUMENTS, COUNTRY_SCOPES
from econ_gauge.models import Instrument


def test_settings_paths(tmp_path):
    """Test derived paths live in the data directory"""
    settings = Settings(data_dir=tmp_path / "data")

    assert settings.data_dir.is_dir()
    assert settings.db_path == tmp_path / "data" / "econ_gauge.db"
    assert settings.rules_path.name == "notification_settings.json"


def test_settings_from_environment(tmp_path, monkeypatch):
    """Test environment overrides"""
    monkeypatch.setenv("ECON_GAUGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ECON_GAUGE_AXIS_SECTIONS", "4")
    monkeypatch.setenv("ECON_GAUGE_LOG_LEVEL", "debug")

    settings = Settings()
    settings.validate()

    assert settings.data_dir == tmp_path
    assert settings.axis_sections == 4
    assert settings.log_level == "DEBUG"


def test_settings_validation(tmp_path):
    """Test bad values are rejected"""
    with pytest.raises(ValueError):
        Settings(data_dir=tmp_path, axis_sections="many").validate()
    with pytest.raises(ValueError):
        Settings(data_dir=tmp_path, log_level="LOUD").validate()


def test_instrument_catalogue():
    """Test every instrument is described and country keys map to scopes"""
    assert set(INSTRUMENTS) == {i.value for i in Instrument}
    assert set(COUNTRY_SCOPES.values()) == set(INSTRUMENTS["exchange_rate"]["scopes"])
