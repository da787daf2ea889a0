"""Data parsing, loading and storage."""

from .cache import (
    AlertStateStore,
    InMemoryStateStore,
    ObservationCache,
    SqliteStateStore,
    StateStoreError,
)
from .parsing import parse_number, parse_date

__all__ = [
    "AlertStateStore",
    "InMemoryStateStore",
    "ObservationCache",
    "SqliteStateStore",
    "StateStoreError",
    "parse_number",
    "parse_date",
]
