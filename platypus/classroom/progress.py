"""
ProgressStore - Persist learner progress in ~/.platypus/progress.db.

Stores one progress document per (user, course):
- Section progress (0.0-1.0)
- Opaque per-step scores

Progress is stored separately from course content so that content can be
updated without losing progress. Documents may therefore reference
sections or steps the current content no longer defines.
"""

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from platypus.config import DEFAULT_PROGRESS_DB
from platypus.schemas import ProgressDocument, SectionProgress


class ProgressStore:
    """
    Read and update progress documents in SQLite.

    Each method opens its own connection, so one store can be shared
    between request threads.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize progress store.

        Args:
            db_path: Path to progress.db (default: ~/.platypus/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS course_progress (
                    user_id TEXT NOT NULL,
                    course_id TEXT NOT NULL,
                    sections JSON NOT NULL DEFAULT '{}',
                    updated_at TEXT,
                    PRIMARY KEY (user_id, course_id)
                );

                CREATE INDEX IF NOT EXISTS idx_course_progress_user
                ON course_progress(user_id);
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> ProgressDocument:
        return ProgressDocument(
            user_id=row["user_id"],
            course_id=row["course_id"],
            sections=json.loads(row["sections"] or "{}"),
        )

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def lookup_progress(self, user_id: str, course_id: str) -> Optional[ProgressDocument]:
        """Get a user's progress in one course, or None if never started."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT user_id, course_id, sections
                   FROM course_progress
                   WHERE user_id = ? AND course_id = ?""",
                (user_id, course_id)
            )
            row = cursor.fetchone()
            return self._row_to_document(row) if row else None
        finally:
            conn.close()

    def find_all_progress(self, user_id: str) -> list[ProgressDocument]:
        """Get every progress document of a user, ordered by course id."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT user_id, course_id, sections
                   FROM course_progress
                   WHERE user_id = ?
                   ORDER BY course_id""",
                (user_id,)
            )
            return [self._row_to_document(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def save(self, document: ProgressDocument):
        """Insert or replace a whole progress document."""
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            sections = json.dumps(document.model_dump(mode="json")["sections"])
            conn.execute(
                """INSERT INTO course_progress (user_id, course_id, sections, updated_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(user_id, course_id) DO UPDATE SET
                     sections = excluded.sections,
                     updated_at = excluded.updated_at""",
                (document.user_id, document.course_id, sections, now)
            )
            conn.commit()
        finally:
            conn.close()

    def record_step(
        self,
        user_id: str,
        course_id: str,
        section_id: str,
        step_id: str,
        scores: Any,
        progress: Optional[float] = None,
    ) -> ProgressDocument:
        """
        Store scores for one step, creating the document on first use.

        Args:
            user_id: Learner id
            course_id: Course the step belongs to
            section_id: Section the step belongs to
            step_id: Step id
            scores: Opaque scores, stored as given
            progress: New section progress (0.0-1.0); unchanged if None

        Returns:
            The updated progress document
        """
        conn = self._get_connection()
        try:
            conn.execute("BEGIN IMMEDIATE")
            row = conn.execute(
                """SELECT user_id, course_id, sections
                   FROM course_progress
                   WHERE user_id = ? AND course_id = ?""",
                (user_id, course_id)
            ).fetchone()
            document = (
                self._row_to_document(row) if row
                else ProgressDocument(user_id=user_id, course_id=course_id)
            )

            section = document.sections.get(section_id) or SectionProgress()
            section.steps[step_id] = scores
            if progress is not None:
                section = SectionProgress(progress=progress, steps=section.steps)
            document.sections[section_id] = section

            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO course_progress (user_id, course_id, sections, updated_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(user_id, course_id) DO UPDATE SET
                     sections = excluded.sections,
                     updated_at = excluded.updated_at""",
                (user_id, course_id, json.dumps(document.model_dump(mode="json")["sections"]), now)
            )
            conn.commit()
            return document
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
