"""Persistence layer for live pick submissions and season intake config."""

from __future__ import annotations

import json
import sqlite3
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Mapping, Optional

from draftpool.models import PickSubmission


class PickStore:
    """Simple SQLite-backed store keyed by (season, player name)."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(self.db_path)
            except sqlite3.OperationalError:
                fallback_dir = Path(tempfile.gettempdir()) / "draftpool-runtime"
                fallback_dir.mkdir(parents=True, exist_ok=True)
                fallback = fallback_dir / "draftpool.sqlite"
                conn = sqlite3.connect(fallback)
                self.db_path = fallback
                self._create_schema(conn)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS submissions (
                season_id TEXT NOT NULL,
                name TEXT NOT NULL,
                picks_json TEXT NOT NULL,
                alternates_json TEXT NOT NULL,
                submitted_at TEXT NOT NULL,
                PRIMARY KEY (season_id, name)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS season_configs (
                season_id TEXT PRIMARY KEY,
                config_json TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    def save_submission(
        self,
        season_id: str,
        submission: PickSubmission,
        *,
        submitted_at: Optional[datetime] = None,
    ) -> PickSubmission:
        """Store a submission, replacing any earlier one under the same name."""

        submitted_at = submitted_at or submission.submitted_at or datetime.now(timezone.utc)
        with self._connect() as conn:
            # Delete first so a re-submission moves to the end of the list.
            conn.execute(
                "DELETE FROM submissions WHERE season_id = ? AND name = ?",
                (season_id, submission.name),
            )
            conn.execute(
                """
                INSERT INTO submissions (season_id, name, picks_json, alternates_json, submitted_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    season_id,
                    submission.name,
                    json.dumps(list(submission.picks)),
                    json.dumps(list(submission.alternates)),
                    submitted_at.isoformat(),
                ),
            )
            conn.commit()
        return submission.model_copy(update={"submitted_at": submitted_at})

    def list_submissions(self, season_id: str) -> List[PickSubmission]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT name, picks_json, alternates_json, submitted_at
                FROM submissions WHERE season_id = ? ORDER BY rowid
                """,
                (season_id,),
            ).fetchall()
        return [self._row_to_submission(row) for row in rows]

    def delete_submission(self, season_id: str, name: str) -> int:
        """Remove one player's submission and return how many remain."""

        with self._connect() as conn:
            conn.execute(
                "DELETE FROM submissions WHERE season_id = ? AND name = ?",
                (season_id, name),
            )
            remaining = conn.execute(
                "SELECT COUNT(*) FROM submissions WHERE season_id = ?",
                (season_id,),
            ).fetchone()[0]
            conn.commit()
        return int(remaining)

    def export_submissions(self, season_id: str) -> List[dict[str, Any]]:
        return [
            {"name": item.name, "picks": list(item.picks), "alternates": list(item.alternates)}
            for item in self.list_submissions(season_id)
        ]

    def get_config(self, season_id: str) -> dict[str, Any]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT config_json FROM season_configs WHERE season_id = ?",
                (season_id,),
            ).fetchone()
        if row is None:
            return {}
        return json.loads(row["config_json"])

    def merge_config(self, season_id: str, config: Mapping[str, Any]) -> dict[str, Any]:
        """Shallow-merge ``config`` over the stored config and return the result."""

        merged = {**self.get_config(season_id), **dict(config)}
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO season_configs (season_id, config_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(season_id) DO UPDATE SET
                    config_json = excluded.config_json,
                    updated_at = excluded.updated_at
                """,
                (season_id, json.dumps(merged), now),
            )
            conn.commit()
        return merged

    @staticmethod
    def _row_to_submission(row: sqlite3.Row) -> PickSubmission:
        return PickSubmission(
            name=row["name"],
            picks=json.loads(row["picks_json"]),
            alternates=json.loads(row["alternates_json"]),
            submitted_at=datetime.fromisoformat(row["submitted_at"]),
        )


__all__ = ["PickStore"]
