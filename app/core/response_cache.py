from __future__ import annotations

import hashlib
import json
import os
import sqlite3
import threading
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Protocol

from app.core.config import settings


class ResponseCache(Protocol):
    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def cache_key_for(payload: dict[str, Any]) -> str:
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class SqliteResponseCache:
    """TTL cache of serialized responses, stored in sqlite."""

    def __init__(self, db_path: str):
        self._db_path = db_path
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
                CREATE TABLE IF NOT EXISTS response_cache_entries (
                    cache_key TEXT PRIMARY KEY,
                    payload_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    expires_at TEXT NOT NULL
                );
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_response_cache_expiry
                ON response_cache_entries (expires_at);
                """
            )
            self._conn = conn
            return conn

    def purge_expired(self) -> int:
        conn = self._get_connection()
        now_iso = _utc_now().isoformat()
        with self._conn_lock:
            cur = conn.execute("DELETE FROM response_cache_entries WHERE expires_at <= ?", (now_iso,))
            return int(cur.rowcount or 0)

    def get(self, key: str) -> dict[str, Any] | None:
        conn = self._get_connection()
        now_iso = _utc_now().isoformat()
        with self._conn_lock:
            cur = conn.execute(
                """
                SELECT payload_json
                FROM response_cache_entries
                WHERE cache_key = ? AND expires_at > ?
                """,
                (key, now_iso),
            )
            row = cur.fetchone()

        if not row:
            return None
        return json.loads(row[0]) if row[0] else None

    def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        conn = self._get_connection()
        created_at = _utc_now()
        expires_at = created_at + timedelta(seconds=max(1, int(ttl_seconds)))
        payload_json = json.dumps(value, ensure_ascii=False)

        with self._conn_lock:
            conn.execute(
                """
                INSERT OR REPLACE INTO response_cache_entries (
                    cache_key, payload_json, created_at, expires_at
                ) VALUES (?, ?, ?, ?)
                """,
                (key, payload_json, created_at.isoformat(), expires_at.isoformat()),
            )


@lru_cache(maxsize=1)
def get_response_cache() -> ResponseCache:
    return SqliteResponseCache(settings.response_cache_db_path)
