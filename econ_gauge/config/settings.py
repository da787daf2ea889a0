"""Configuration settings for the gauge core."""

from dataclasses import dataclass, field
from pathlib import Path
import logging
import os

from dotenv import load_dotenv


load_dotenv()


# Instruments tracked by the dashboard and the scopes each one carries
INSTRUMENTS: dict[str, dict] = {
    "exchange_rate": {
        "title": "Exchange Rate (KRW)",
        "unit": "KRW",
        "scopes": {
            "USD": "US Dollar",
            "JPY": "Japanese Yen (100)",
            "EUR": "Euro",
            "CNY": "Chinese Yuan",
        },
    },
    "interest_rate": {
        "title": "Bank of Korea Base Rate",
        "unit": "%",
        "scopes": {},
    },
    "cpi": {
        "title": "Consumer Price Index (YoY)",
        "unit": "%",
        "scopes": {},
    },
}

# Settings-document country keys -> exchange rate scope
COUNTRY_SCOPES: dict[str, str] = {
    "usa": "USD",
    "japan": "JPY",
    "europe": "EUR",
    "china": "CNY",
}


@dataclass
class Settings:
    """Application settings."""

    data_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv(
                "ECON_GAUGE_DATA_DIR",
                str(Path(__file__).parent.parent.parent / "cache"),
            )
        )
    )
    axis_sections: int = field(
        default_factory=lambda: os.getenv("ECON_GAUGE_AXIS_SECTIONS", "5")
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("ECON_GAUGE_LOG_LEVEL", "INFO")
    )
    db_path: Path = field(init=False)
    rules_path: Path = field(init=False)

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.data_dir / "econ_gauge.db"
        self.rules_path = self.data_dir / "notification_settings.json"

    def validate(self) -> None:
        """Validate settings and normalise types."""
        try:
            self.axis_sections = int(self.axis_sections)
        except (TypeError, ValueError):
            raise ValueError(
                f"ECON_GAUGE_AXIS_SECTIONS must be an integer, got {self.axis_sections!r}"
            )

        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.log_level = level

    def configure_logging(self) -> None:
        """Set up root logging for entry points."""
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s - %(levelname)s - %(message)s",
        )
