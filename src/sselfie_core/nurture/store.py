"""Pending stage-transition persistence backed by SQLite.

Transitions land here with ``processed = 0`` and wait for whoever sends
the follow-up to call :meth:`TransitionStore.mark_processed`.
"""

from __future__ import annotations

import json
import sqlite3
import threading
from datetime import datetime, timedelta, timezone
from typing import Any

_CREATE_SQL = """\
CREATE TABLE IF NOT EXISTS nurture_transitions (
    id                TEXT PRIMARY KEY,
    subscriber_id     TEXT NOT NULL,
    transition_type   TEXT NOT NULL,
    old_stage         TEXT NOT NULL,
    new_stage         TEXT NOT NULL,
    score             INTEGER NOT NULL,
    email             TEXT NOT NULL DEFAULT '',
    triggering_event  TEXT NOT NULL DEFAULT '',
    action            TEXT NOT NULL DEFAULT '',
    created_at        TEXT NOT NULL,
    payload           TEXT,
    processed         INTEGER NOT NULL DEFAULT 0,
    processed_at      TEXT
);
CREATE INDEX IF NOT EXISTS idx_nurture_transitions_subscriber
    ON nurture_transitions(subscriber_id);
CREATE INDEX IF NOT EXISTS idx_nurture_transitions_created_at
    ON nurture_transitions(created_at);
CREATE INDEX IF NOT EXISTS idx_nurture_transitions_processed
    ON nurture_transitions(processed);
"""


class TransitionStore:
    """Thread-safe transition persistence sharing an existing SQLite connection.

    Parameters
    ----------
    conn:
        An open ``sqlite3.Connection``.  Rows come back as dicts either way,
        but ``row_factory = sqlite3.Row`` is recommended.
    lock:
        Optional ``threading.RLock``.  One is created automatically if not
        supplied.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        lock: threading.RLock | None = None,
    ) -> None:
        self._conn = conn
        self._lock = lock if lock is not None else threading.RLock()
        with self._lock:
            self._conn.executescript(_CREATE_SQL)

    def _rows_to_dicts(self, cursor: sqlite3.Cursor) -> list[dict[str, Any]]:
        columns = [d[0] for d in cursor.description]
        out = []
        for row in cursor.fetchall():
            record = dict(zip(columns, row))
            if record.get("payload"):
                record["payload"] = json.loads(record["payload"])
            out.append(record)
        return out

    def save(self, transition: dict[str, Any]) -> None:
        """Persist a transition record.  Ignores duplicates by id."""
        payload = transition.get("payload")
        with self._lock:
            self._conn.execute(
                """INSERT OR IGNORE INTO nurture_transitions
                   (id, subscriber_id, transition_type, old_stage, new_stage,
                    score, email, triggering_event, action, created_at,
                    payload, processed, processed_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0, NULL)""",
                (
                    transition["id"],
                    transition["subscriber_id"],
                    transition["transition_type"],
                    transition["old_stage"],
                    transition["new_stage"],
                    transition["score"],
                    transition.get("email", ""),
                    transition.get("triggering_event", ""),
                    transition.get("action", ""),
                    transition["created_at"],
                    json.dumps(payload) if payload else None,
                ),
            )
            self._conn.commit()

    def has_pending(self, subscriber_id: str, transition_type: str) -> bool:
        """True if this subscriber already has an unprocessed transition of this type."""
        with self._lock:
            row = self._conn.execute(
                """SELECT 1 FROM nurture_transitions
                   WHERE subscriber_id = ? AND transition_type = ? AND processed = 0
                   LIMIT 1""",
                (subscriber_id, transition_type),
            ).fetchone()
            return row is not None

    def save_if_absent(self, transition: dict[str, Any]) -> bool:
        """Save unless the subscriber already has a pending transition of this type.

        The check and the insert run under one lock hold.  Returns True if
        the transition was saved.
        """
        with self._lock:
            if self.has_pending(transition["subscriber_id"], transition["transition_type"]):
                return False
            self.save(transition)
            return True

    def get_pending(
        self,
        *,
        limit: int = 50,
        transition_type: str = "",
    ) -> list[dict[str, Any]]:
        """Return unprocessed transitions, newest first."""
        with self._lock:
            if transition_type:
                cursor = self._conn.execute(
                    """SELECT * FROM nurture_transitions
                       WHERE processed = 0 AND transition_type = ?
                       ORDER BY created_at DESC LIMIT ?""",
                    (transition_type, limit),
                )
            else:
                cursor = self._conn.execute(
                    """SELECT * FROM nurture_transitions
                       WHERE processed = 0
                       ORDER BY created_at DESC LIMIT ?""",
                    (limit,),
                )
            return self._rows_to_dicts(cursor)

    def get_all(
        self,
        *,
        limit: int = 50,
        days: int = 30,
        transition_type: str = "",
    ) -> list[dict[str, Any]]:
        """Return recent transitions regardless of processing status."""
        since = (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()
        with self._lock:
            if transition_type:
                cursor = self._conn.execute(
                    """SELECT * FROM nurture_transitions
                       WHERE created_at > ? AND transition_type = ?
                       ORDER BY created_at DESC LIMIT ?""",
                    (since, transition_type, limit),
                )
            else:
                cursor = self._conn.execute(
                    """SELECT * FROM nurture_transitions
                       WHERE created_at > ?
                       ORDER BY created_at DESC LIMIT ?""",
                    (since, limit),
                )
            return self._rows_to_dicts(cursor)

    def mark_processed(self, transition_id: str) -> bool:
        """Mark a transition as handled.  Returns True if a row was updated."""
        now_iso = datetime.now(timezone.utc).isoformat()
        with self._lock:
            cursor = self._conn.execute(
                """UPDATE nurture_transitions
                   SET processed = 1, processed_at = ?
                   WHERE id = ? AND processed = 0""",
                (now_iso, transition_id),
            )
            self._conn.commit()
            return cursor.rowcount > 0

    def reset(self) -> None:
        """Clear all transition records.  Intended for tests."""
        with self._lock:
            self._conn.execute("DELETE FROM nurture_transitions")
            self._conn.commit()
