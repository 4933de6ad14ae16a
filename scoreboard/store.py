"""Score persistence.

Two stores share one contract: ``insert`` appends an immutable record and
``top`` returns the highest values first, earlier records first on ties.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from contextlib import closing
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Protocol

from .errors import StorageUnavailable

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

SCHEMA = """
CREATE TABLE IF NOT EXISTS scores(
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    value INTEGER NOT NULL,
    created_at TEXT NOT NULL
);
"""
INDEX = "CREATE INDEX IF NOT EXISTS ix_scores_ranking ON scores(value DESC, created_at, id);"


@dataclass(frozen=True)
class ScoreRecord:
    id: int
    value: int
    created_at: datetime

    def ranking_key(self):
        return (-self.value, self.created_at, self.id)


class ScoreStore(Protocol):
    def insert(self, value: int) -> ScoreRecord: ...

    def top(self, n: int) -> List[ScoreRecord]: ...

    def count(self) -> int: ...


def _now():
    return datetime.now(timezone.utc)


def _check_limit(n):
    if n < 1:
        raise ValueError(f"top-N limit must be positive, got {n}")


class MemoryScoreStore:
    def __init__(self):
        self._records: List[ScoreRecord] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def insert(self, value: int) -> ScoreRecord:
        with self._lock:
            rec = ScoreRecord(id=self._next_id, value=int(value), created_at=_now())
            self._next_id += 1
            self._records.append(rec)
        return rec

    def top(self, n: int) -> List[ScoreRecord]:
        _check_limit(n)
        with self._lock:
            records = list(self._records)
        return sorted(records, key=ScoreRecord.ranking_key)[:n]

    def count(self) -> int:
        with self._lock:
            return len(self._records)


class SqliteScoreStore:
    """SQLite-backed store; every operation uses its own connection."""

    def __init__(self, path: str, timeout: float = 5.0):
        if path == MEMORY:
            raise ValueError("SqliteScoreStore needs a file path, use MemoryScoreStore for ':memory:'")
        self.path = path
        self.timeout = timeout
        parent = os.path.dirname(os.path.abspath(path))
        try:
            os.makedirs(parent, exist_ok=True)
            with closing(self._connect()) as conn, conn:
                conn.execute(SCHEMA)
                conn.execute(INDEX)
        except (sqlite3.Error, OSError) as e:
            raise StorageUnavailable(f"cannot initialise score database at {path}: {e}") from e
        logger.info("Score database ready at %s", path)

    def _connect(self):
        return sqlite3.connect(self.path, timeout=self.timeout)

    def insert(self, value: int) -> ScoreRecord:
        created_at = _now()
        try:
            with closing(self._connect()) as conn, conn:
                cur = conn.execute(
                    "INSERT INTO scores(value, created_at) VALUES(?, ?)",
                    (int(value), created_at.isoformat(timespec="microseconds")),
                )
                sid = cur.lastrowid
        except OverflowError as e:
            raise StorageUnavailable(f"value {value} does not fit the score column") from e
        except (sqlite3.Error, OSError) as e:
            raise StorageUnavailable(f"insert failed: {e}") from e
        return ScoreRecord(id=sid, value=int(value), created_at=created_at)

    def top(self, n: int) -> List[ScoreRecord]:
        _check_limit(n)
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    "SELECT id, value, created_at FROM scores ORDER BY value DESC, created_at ASC, id ASC LIMIT ?",
                    (n,),
                ).fetchall()
        except (sqlite3.Error, OSError) as e:
            raise StorageUnavailable(f"top-{n} query failed: {e}") from e
        return [ScoreRecord(id=r[0], value=r[1], created_at=datetime.fromisoformat(r[2])) for r in rows]

    def count(self) -> int:
        try:
            with closing(self._connect()) as conn:
                return conn.execute("SELECT COUNT(*) FROM scores").fetchone()[0]
        except (sqlite3.Error, OSError) as e:
            raise StorageUnavailable(f"count failed: {e}") from e


def open_store(settings):
    if settings.db_path == MEMORY:
        logger.warning("DB_PATH is ':memory:', scores will not survive a restart")
        return MemoryScoreStore()
    return SqliteScoreStore(settings.db_path, timeout=settings.db_timeout)
