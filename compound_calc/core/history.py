"""Calculation history kept as one JSON list in an embedded SQLite key/value table."""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from compound_calc.errors import PersistenceError
from compound_calc.models import CalculationRecord, RecordParams, RecordResult

logger = logging.getLogger(__name__)

HISTORY_KEY = "compound-calculator-history"
DEFAULT_LIMIT = 1000

_records_adapter = TypeAdapter(List[CalculationRecord])


class HistoryStore:
    """
    Append-only, most-recent-first list of CalculationRecord.

    Every write replaces the whole list (read, prepend, truncate, write back),
    so concurrent writers resolve as last-writer-wins.
    """

    def __init__(self, db_path: Union[str, Path], limit: int = DEFAULT_LIMIT):
        self.db_path = Path(db_path)
        self.limit = limit

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.execute(
            """
            create table if not exists kv_store (
                key text primary key,
                value text not null
            )
            """
        )
        return conn

    def _get(self, key: str) -> Optional[str]:
        try:
            conn = self._connect()
        except (sqlite3.Error, OSError) as exc:
            logger.error("Could not open history store at %s: %s", self.db_path, exc)
            raise PersistenceError(f"could not open history store: {exc}") from exc
        try:
            row = conn.execute("select value from kv_store where key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(f"could not read history: {exc}") from exc
        finally:
            conn.close()
        return row[0] if row else None

    def _set(self, key: str, value: Optional[str]) -> None:
        try:
            conn = self._connect()
        except (sqlite3.Error, OSError) as exc:
            logger.error("Could not open history store at %s: %s", self.db_path, exc)
            raise PersistenceError(f"could not open history store: {exc}") from exc
        try:
            if value is None:
                conn.execute("delete from kv_store where key = ?", (key,))
            else:
                conn.execute(
                    "insert or replace into kv_store (key, value) values (?, ?)",
                    (key, value),
                )
            conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(f"could not write history: {exc}") from exc
        finally:
            conn.close()

    def read_all(self) -> List[CalculationRecord]:
        raw = self._get(HISTORY_KEY)
        if raw is None:
            return []
        try:
            return _records_adapter.validate_json(raw)
        except ValidationError as exc:
            logger.error("Stored history at %s is corrupt: %s", self.db_path, exc)
            raise PersistenceError("stored history is corrupt") from exc

    def append(self, params: RecordParams, result: RecordResult) -> CalculationRecord:
        """Prepend a new record with a fresh id and timestamp and persist the list."""
        record = CalculationRecord(
            id=uuid.uuid4().hex,
            timestamp=datetime.now(timezone.utc),
            params=params,
            result=result,
        )
        history = self.read_all()
        history.insert(0, record)
        history = history[: self.limit]
        self._set(HISTORY_KEY, json.dumps([item.model_dump(mode="json") for item in history]))
        logger.debug("Saved history record %s (%d stored)", record.id, len(history))
        return record

    def get(self, record_id: str) -> Optional[CalculationRecord]:
        for record in self.read_all():
            if record.id == record_id:
                return record
        return None

    def clear(self) -> None:
        self._set(HISTORY_KEY, None)
        logger.info("History cleared")
