"""SQLite-backed token store keyed by branch."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import List, Optional

from meeting_broker.models.token import TokenRecord


class SQLiteTokenStore:
    """One row per branch in a ``tokens`` table, written with an upsert."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tokens (
                    branch TEXT PRIMARY KEY,
                    access_token TEXT NOT NULL,
                    refresh_token TEXT NOT NULL,
                    expires_at INTEGER NOT NULL
                )
                """
            )

    def upsert(self, record: TokenRecord) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO tokens (branch, access_token, refresh_token, expires_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(branch) DO UPDATE SET
                    access_token = excluded.access_token,
                    refresh_token = excluded.refresh_token,
                    expires_at = excluded.expires_at
                """,
                (
                    record.branch,
                    record.access_token,
                    record.refresh_token,
                    record.expires_at,
                ),
            )

    def get(self, branch: str) -> Optional[TokenRecord]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT branch, access_token, refresh_token, expires_at "
                "FROM tokens WHERE branch = ?",
                (branch,),
            ).fetchone()
        if not row:
            return None
        return TokenRecord(**dict(row))

    def list_branches(self) -> List[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT branch FROM tokens ORDER BY branch").fetchall()
        return [row["branch"] for row in rows]


__all__ = ["SQLiteTokenStore"]
