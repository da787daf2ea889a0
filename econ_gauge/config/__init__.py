"""Configuration."""

from econ_gauge.config.settings import Settings, INSTRUMENTS, COUNTRY_SCOPES

__all__ = ["Settings", "INSTRUMENTS", "COUNTRY_SCOPES"]
