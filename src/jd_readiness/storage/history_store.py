"""SQLite-backed analysis history.

Each row holds one record as a JSON document. Rows keep their save order;
rows written by older versions are migrated when read, and entries that
cannot be migrated are dropped from the result while still being counted.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
import uuid
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from jd_readiness.builder import build_analysis_entry, check_jd_text
from jd_readiness.models.history import HistoryLoadResult
from jd_readiness.models.record import AnalysisRecord
from jd_readiness.schema.registry import JD_MIN_LENGTH
from jd_readiness.scoring.score_engine import apply_confidence
from jd_readiness.validation.migrator import migrate_old_entry
from jd_readiness.validation.validator import validate

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".jd-readiness" / "history.db"


class HistoryStore:
    """Ordered collection of analysis records with WAL mode."""

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        *,
        jd_min_length: int = JD_MIN_LENGTH,
    ):
        self.db_path = Path(db_path)
        self.jd_min_length = jd_min_length
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS analysis_history (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT UNIQUE,
                    document TEXT NOT NULL,
                    saved_at REAL NOT NULL
                )
            """)

    def save_analysis(
        self,
        analysis_content: Mapping[str, Any] | None,
        company: str = "",
        role: str = "",
        jd_text: str = "",
        company_intel: Mapping[str, Any] | None = None,
    ) -> AnalysisRecord | None:
        """Build, validate and persist a new record.

        Raises ``JobDescriptionTooShortError`` before anything is built when
        the job description is too short. Returns ``None`` and persists
        nothing when the built record fails validation.
        """
        check_jd_text(jd_text, self.jd_min_length)
        record = build_analysis_entry(analysis_content, company, role, jd_text, company_intel)

        result = validate(record, jd_min_length=self.jd_min_length)
        if not result.is_valid:
            logger.warning("Rejected analysis record: %s", "; ".join(result.errors))
            return None

        with self._connect() as conn:
            conn.execute(
                "INSERT INTO analysis_history (id, document, saved_at) VALUES (?, ?, ?)",
                (record["id"], json.dumps(record, ensure_ascii=False), time.time()),
            )
        logger.info("Saved analysis %s (base score %d)", record["id"], record["baseScore"])
        return AnalysisRecord.from_document(record)

    def import_documents(self, documents: Iterable[Any]) -> int:
        """Store raw entries verbatim, as an older version would have written them.

        Nothing is validated here; ``load_history`` decides what survives. An
        entry whose ``id`` already exists replaces the stored document but
        keeps its place in save order. Returns the number of entries written.
        """
        count = 0
        with self._connect() as conn:
            for document in documents:
                record_id, text = _prepare_raw(document)
                conn.execute(
                    """
                    INSERT INTO analysis_history (id, document, saved_at) VALUES (?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        document = excluded.document,
                        saved_at = excluded.saved_at
                    """,
                    (record_id, text, time.time()),
                )
                count += 1
        return count

    def load_history(self) -> HistoryLoadResult:
        """Migrate every stored entry and return the survivors, newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT document FROM analysis_history ORDER BY seq"
            ).fetchall()

        records = []
        for (document,) in rows:
            migrated = migrate_old_entry(document, jd_min_length=self.jd_min_length)
            if migrated is not None:
                records.append(AnalysisRecord.from_document(migrated))

        result = HistoryLoadResult(
            records=list(reversed(records)),
            raw_count=len(rows),
            valid_count=len(records),
        )
        if result.has_data_loss:
            logger.warning(
                "%d of %d history entries could not be loaded",
                result.dropped_count,
                result.raw_count,
            )
        return result

    def get(self, record_id: str) -> AnalysisRecord | None:
        document = self._get_document(record_id)
        if document is None:
            return None
        return AnalysisRecord.from_document(document)

    def update_confidence(
        self,
        record_id: str,
        skill: str,
        level: str,
    ) -> AnalysisRecord | None:
        """Mark one skill and persist the recomputed final score.

        Returns ``None`` when no loadable record has ``record_id``. Entries
        stored in a legacy shape are written back in the current shape.
        """
        document = self._get_document(record_id)
        if document is None:
            return None

        updated = apply_confidence(document, skill, level)
        result = validate(updated, jd_min_length=self.jd_min_length)
        if not result.is_valid:
            logger.warning("Rejected update to %s: %s", record_id, "; ".join(result.errors))
            return None

        with self._connect() as conn:
            conn.execute(
                "UPDATE analysis_history SET document = ?, saved_at = ? WHERE id = ?",
                (json.dumps(updated, ensure_ascii=False), time.time(), record_id),
            )
        logger.debug(
            "Marked %s as %s on %s; final score %d",
            skill, level, record_id, updated["finalScore"],
        )
        return AnalysisRecord.from_document(updated)

    def delete(self, record_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM analysis_history WHERE id = ?", (record_id,)
            )
            return cursor.rowcount > 0

    def clear(self) -> int:
        """Delete every entry. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM analysis_history")
            return cursor.rowcount

    def export_documents(self) -> list[dict[str, Any]]:
        """Return every loadable record as a current-shape document, in save order."""
        history = self.load_history()
        return [record.to_document() for record in reversed(history.records)]

    def stats(self) -> dict:
        history = self.load_history()
        scores = [record.final_score for record in history.records]
        return {
            "total": history.raw_count,
            "valid": history.valid_count,
            "dropped": history.dropped_count,
            "avg_final_score": round(sum(scores) / len(scores), 1) if scores else None,
        }

    def _get_document(self, record_id: str) -> dict[str, Any] | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT document FROM analysis_history WHERE id = ?", (record_id,)
            ).fetchone()
        if row is None:
            return None
        return migrate_old_entry(row[0], jd_min_length=self.jd_min_length)


def _prepare_raw(document: Any) -> tuple[str | None, str]:
    """Return the lookup id and stored text for one imported entry.

    Object entries without an id get one so that the id stays stable across
    loads; entries that are not objects are stored as they are and will be
    dropped when the history is loaded.
    """
    if isinstance(document, str):
        try:
            parsed = json.loads(document)
        except json.JSONDecodeError:
            return None, document
        if not isinstance(parsed, dict):
            return None, document
        document = parsed

    if isinstance(document, dict):
        record_id = document.get("id")
        if not isinstance(record_id, str) or not record_id:
            record_id = uuid.uuid4().hex
            document = {**document, "id": record_id}
        return record_id, json.dumps(document, ensure_ascii=False, default=str)
    return None, json.dumps(document, ensure_ascii=False, default=str)
