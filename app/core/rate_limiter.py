from __future__ import annotations

import os
import sqlite3
import threading
import time
from functools import lru_cache
from typing import Protocol

from app.core.config import settings


class RateLimiter(Protocol):
    def allow(self, key: str) -> bool: ...


class SqliteRateLimiter:
    """Sliding-window request quota per client key, stored in sqlite."""

    def __init__(self, db_path: str, *, limit: int, window_seconds: int = 60, route_key: str = "recommendations"):
        self._db_path = db_path
        self._limit = limit
        self._window_seconds = window_seconds
        self._route_key = route_key
        self._conn: sqlite3.Connection | None = None
        self._conn_lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        with self._conn_lock:
            if self._conn is not None:
                return self._conn

            directory = os.path.dirname(self._db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS rate_limit_events (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    client_key TEXT NOT NULL,
                    route_key TEXT NOT NULL,
                    created_at REAL NOT NULL
                );
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_rate_limit_lookup
                ON rate_limit_events (client_key, route_key, created_at);
                """
            )
            self._conn = conn
            return conn

    def allow(self, key: str) -> bool:
        now = time.time()
        cutoff = now - self._window_seconds
        conn = self._get_connection()

        with self._conn_lock:
            cursor = conn.cursor()
            cursor.execute("BEGIN IMMEDIATE")
            try:
                cursor.execute("DELETE FROM rate_limit_events WHERE created_at < ?", (cutoff,))
                cursor.execute(
                    """
                    SELECT COUNT(1)
                    FROM rate_limit_events
                    WHERE client_key = ? AND route_key = ? AND created_at >= ?
                    """,
                    (key, self._route_key, cutoff),
                )
                count = int(cursor.fetchone()[0] or 0)
                if count >= self._limit:
                    conn.rollback()
                    return False

                cursor.execute(
                    """
                    INSERT INTO rate_limit_events (client_key, route_key, created_at)
                    VALUES (?, ?, ?)
                    """,
                    (key, self._route_key, now),
                )
                conn.commit()
                return True
            except Exception:
                conn.rollback()
                raise

    def clear(self) -> None:
        conn = self._get_connection()
        with self._conn_lock:
            conn.execute("DELETE FROM rate_limit_events")


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiter:
    return SqliteRateLimiter(
        settings.rate_limit_db_path,
        limit=settings.recommendations_rate_limit,
        window_seconds=settings.recommendations_rate_window_s,
    )
