"""SQLite-backed storage for completed generations."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from verified_resume.errors import StorageError
from verified_resume.models.generation import GenerationRecord

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".verified-resume" / "generations.db"


class GenerationStore:
    """Stores each generation snapshot once, keyed by generation id (WAL mode)."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS generations (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    job_url TEXT,
                    truth_score INTEGER NOT NULL DEFAULT 0,
                    flags_count INTEGER NOT NULL DEFAULT 0,
                    record_json TEXT NOT NULL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_generations_user_created "
                "ON generations (user_id, created_at DESC)"
            )

    def save(self, record: GenerationRecord) -> None:
        """Persist a generation; an existing id is never overwritten.

        Raises StorageError for a duplicate id or any database failure.
        """
        try:
            with self._connect() as conn:
                conn.execute(
                    """INSERT INTO generations
                       (id, user_id, created_at, job_url, truth_score, flags_count, record_json)
                       VALUES (?, ?, ?, ?, ?, ?, ?)""",
                    (
                        record.generation_id,
                        record.user_id,
                        record.created_at.isoformat(),
                        record.job_url,
                        record.truth_score,
                        len(record.flags),
                        record.model_dump_json(),
                    ),
                )
        except sqlite3.IntegrityError as exc:
            raise StorageError(
                f"Generation {record.generation_id!r} already stored"
            ) from exc
        except sqlite3.Error as exc:
            logger.error("Failed to store generation %s: %s", record.generation_id, exc)
            raise StorageError(
                f"Could not store generation {record.generation_id!r}: {exc}"
            ) from exc
        logger.info("Stored generation %s", record.generation_id)

    def get(self, generation_id: str) -> GenerationRecord | None:
        """Return a stored generation, or None."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT record_json FROM generations WHERE id = ?",
                (generation_id,),
            ).fetchone()
        if row is None:
            return None
        return GenerationRecord.model_validate_json(row[0])

    def list_generations(
        self,
        user_id: str = "anonymous",
        limit: int = 50,
        skip: int = 0,
    ) -> list[dict]:
        """Newest-first summaries of a user's generations."""
        with self._connect() as conn:
            rows = conn.execute(
                """SELECT id, created_at, job_url, truth_score, flags_count
                   FROM generations WHERE user_id = ?
                   ORDER BY created_at DESC LIMIT ? OFFSET ?""",
                (user_id, limit, skip),
            ).fetchall()
        return [
            {
                "generation_id": row[0],
                "created_at": row[1],
                "job_url": row[2],
                "truth_score": row[3],
                "flags_count": row[4],
            }
            for row in rows
        ]

    def count(self, user_id: str | None = None) -> int:
        with self._connect() as conn:
            if user_id is not None:
                row = conn.execute(
                    "SELECT COUNT(*) FROM generations WHERE user_id = ?", (user_id,)
                ).fetchone()
            else:
                row = conn.execute("SELECT COUNT(*) FROM generations").fetchone()
        return row[0]
