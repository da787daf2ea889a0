"""SQLite storage for observations and alert baselines."""

import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Protocol

import pandas as pd

from econ_gauge.models import AlertState, Instrument, Observation


class StateStoreError(Exception):
    """Alert state could not be read or written."""


class AlertStateStore(Protocol):
    """Key-value store for the last observed value per (instrument, scope)."""

    def get(self, instrument: Instrument, scope: str | None) -> AlertState | None:
        ...

    def set(self, instrument: Instrument, scope: str | None, value: float) -> None:
        ...


def _scope_key(scope: str | None) -> str:
    # SQLite treats NULLs as distinct in primary keys; "" and None are the
    # same unscoped pair everywhere, so both stores fold them together
    return scope or ""


class InMemoryStateStore:
    """Dict-backed state store."""

    def __init__(self) -> None:
        self._states: dict[tuple[Instrument, str | None], AlertState] = {}

    def get(self, instrument: Instrument, scope: str | None) -> AlertState | None:
        return self._states.get((instrument, scope or None))

    def set(self, instrument: Instrument, scope: str | None, value: float) -> None:
        scope = scope or None
        self._states[(instrument, scope)] = AlertState(
            instrument=instrument, scope=scope, last_observed_value=value
        )

    def all(self) -> list[AlertState]:
        return list(self._states.values())


class _SqliteStore:
    """Shared connection handling."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        raise NotImplementedError


class SqliteStateStore(_SqliteStore):
    """SQLite-backed alert baselines, one row per (instrument, scope)."""

    def _init_db(self) -> None:
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS alert_state (
                    instrument TEXT NOT NULL,
                    scope TEXT NOT NULL,
                    last_value REAL NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (instrument, scope)
                )
            """)

    def get(self, instrument: Instrument, scope: str | None) -> AlertState | None:
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT last_value FROM alert_state WHERE instrument = ? AND scope = ?",
                    (instrument.value, _scope_key(scope)),
                ).fetchone()
        except sqlite3.Error as e:
            raise StateStoreError(f"Could not read state for {instrument.value}/{scope}: {e}") from e

        if row is None:
            return None
        return AlertState(
            instrument=instrument, scope=scope or None, last_observed_value=row["last_value"]
        )

    def set(self, instrument: Instrument, scope: str | None, value: float) -> None:
        try:
            with self._get_connection() as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO alert_state (instrument, scope, last_value, updated_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (instrument.value, _scope_key(scope), float(value), datetime.now().isoformat()),
                )
        except sqlite3.Error as e:
            raise StateStoreError(f"Could not write state for {instrument.value}/{scope}: {e}") from e

    def all(self) -> list[AlertState]:
        """All stored baselines, ordered by instrument and scope."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT instrument, scope, last_value FROM alert_state ORDER BY instrument, scope"
            ).fetchall()

        return [
            AlertState(
                instrument=Instrument(row["instrument"]),
                scope=row["scope"] or None,
                last_observed_value=row["last_value"],
            )
            for row in rows
        ]


class ObservationCache(_SqliteStore):
    """SQLite cache of observations handed over by the data layer."""

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS observations (
                    instrument TEXT NOT NULL,
                    scope TEXT NOT NULL,
                    date TEXT NOT NULL,
                    value REAL NOT NULL,
                    fetched_at TEXT NOT NULL,
                    PRIMARY KEY (instrument, scope, date)
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_obs_instrument_date
                ON observations(instrument, scope, date)
            """)

    def store_observations(
        self, observations: Iterable[Observation], fetched_at: datetime
    ) -> int:
        """
        Store observations, replacing any existing value for the same date.

        Returns:
            Number of rows inserted/updated
        """
        fetched_str = fetched_at.isoformat()
        rows = [
            (
                obs.instrument.value,
                _scope_key(obs.scope),
                obs.timestamp.isoformat(),
                float(obs.value),
                fetched_str,
            )
            for obs in observations
        ]
        if not rows:
            return 0

        with self._get_connection() as conn:
            conn.executemany(
                """
                INSERT OR REPLACE INTO observations (instrument, scope, date, value, fetched_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                rows,
            )
        return len(rows)

    def get_series(
        self,
        instrument: Instrument,
        scope: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> pd.DataFrame:
        """
        Retrieve cached data for a series.

        Returns:
            DataFrame with DatetimeIndex and 'value' column
        """
        query = "SELECT date, value FROM observations WHERE instrument = ? AND scope = ?"
        params: list = [instrument.value, _scope_key(scope)]

        if start_date:
            query += " AND date >= ?"
            params.append(start_date.isoformat())
        if end_date:
            query += " AND date <= ?"
            params.append(end_date.isoformat())

        query += " ORDER BY date"

        with self._get_connection() as conn:
            df = pd.read_sql_query(query, conn, params=params)

        if df.empty:
            return pd.DataFrame(columns=["value"])

        df["date"] = pd.to_datetime(df["date"])
        df.set_index("date", inplace=True)
        return df

    def get_cache_status(self) -> dict[str, dict]:
        """Get status of cached data for each (instrument, scope)."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT
                    instrument,
                    scope,
                    COUNT(*) as observation_count,
                    MIN(date) as first_date,
                    MAX(date) as last_date,
                    MAX(fetched_at) as last_fetched
                FROM observations
                GROUP BY instrument, scope
            """).fetchall()

        return {
            f"{row['instrument']}/{row['scope']}" if row["scope"] else row["instrument"]: {
                "observation_count": row["observation_count"],
                "first_date": row["first_date"],
                "last_date": row["last_date"],
                "last_fetched": row["last_fetched"],
            }
            for row in rows
        }
