"""
AnalyticsTracker - Best-effort course activity tracking.

Records one row per (user, course, day) with a view count. Writes run on a
background worker and are never awaited by page rendering; a failed write
is logged and otherwise ignored.
"""

import logging
import sqlite3
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import date
from pathlib import Path
from typing import Optional

from platypus.config import DEFAULT_PROGRESS_DB

logger = logging.getLogger(__name__)


class AnalyticsTracker:
    """Schedule activity writes without blocking the caller."""

    def __init__(self, db_path: Optional[Path] = None, max_workers: int = 1):
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="platypus-analytics",
        )
        self._ensure_database()

    def _ensure_database(self):
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS course_analytics (
                    user_id TEXT NOT NULL,
                    course_id TEXT NOT NULL,
                    day TEXT NOT NULL,
                    views INTEGER NOT NULL DEFAULT 0,
                    PRIMARY KEY (user_id, course_id, day)
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _write(self, user_id: str, course_id: str, day: str):
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.execute(
                """INSERT INTO course_analytics (user_id, course_id, day, views)
                   VALUES (?, ?, ?, 1)
                   ON CONFLICT(user_id, course_id, day) DO UPDATE SET
                     views = views + 1""",
                (user_id, course_id, day)
            )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _log_failure(future: Future):
        error = future.exception()
        if error is not None:
            logger.warning(f"Analytics write failed: {error}")

    def track(self, user_id: str, course_id: str, day: Optional[date] = None) -> Optional[Future]:
        """
        Schedule a course view for a user.

        Returns the pending future, or None if the write could not be
        scheduled. Callers are not expected to wait on it.
        """
        day_str = (day or date.today()).isoformat()
        try:
            future = self._executor.submit(self._write, user_id, course_id, day_str)
        except RuntimeError as e:
            logger.warning(f"Analytics not scheduled: {e}")
            return None
        future.add_done_callback(self._log_failure)
        return future

    def get_views(self, user_id: str) -> dict[str, int]:
        """Total views per course for a user."""
        conn = sqlite3.connect(str(self.db_path))
        try:
            cursor = conn.execute(
                """SELECT course_id, SUM(views) FROM course_analytics
                   WHERE user_id = ? GROUP BY course_id""",
                (user_id,)
            )
            return {row[0]: row[1] for row in cursor.fetchall()}
        finally:
            conn.close()

    def close(self, wait: bool = True):
        """Stop the background worker."""
        self._executor.shutdown(wait=wait)
