"""
ContentStore - Load course definitions from the content directory.

Provides read-only access to:
- Courses per locale (content/<course_id>/data_<locale>.json)
- Content shapes for account-wide progress merging
- The list of available course ids

Raw JSON is validated into Course models here, so nothing downstream
handles untyped content.
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from platypus.schemas import DEFAULT_LOCALE, ContentShape, Course, TableOfContents

logger = logging.getLogger(__name__)

COURSE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")
LOCALE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]+)*$")


class ContentError(Exception):
    """Raised when stored course content is unusable."""
    pass


class CourseValidationError(ContentError):
    """Raised when a course file does not match the Course schema."""
    pass


class ContentStore:
    """
    Load course content from JSON files.

    Files are read on every call, so each request gets its own Course
    objects and content updates on disk are picked up without a restart.
    """

    def __init__(
        self,
        content_dir: str | Path,
        toc: Optional[TableOfContents] = None,
        default_locale: str = DEFAULT_LOCALE,
    ):
        """
        Initialize store with the content directory.

        Args:
            content_dir: Directory with one sub-directory per course
            toc: Table of contents used to attach chapter/path metadata
            default_locale: Locale used when a translation is missing
        """
        self.content_dir = Path(content_dir)
        if not self.content_dir.exists():
            raise FileNotFoundError(f"Content directory not found: {content_dir}")
        self.toc = toc or TableOfContents()
        self.default_locale = default_locale

    def _course_path(self, course_id: str, locale: str) -> Path:
        return self.content_dir / course_id / f"data_{locale}.json"

    def _read_course(self, path: Path, locale: str) -> Course:
        with open(path, "r", encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise CourseValidationError(f"{path}: {e}") from e
        if not isinstance(raw, dict):
            raise CourseValidationError(f"{path}: top-level must be an object, got {type(raw).__name__}")

        course_id = raw.get("id")
        toc_entry = self.toc.get_course(course_id) if isinstance(course_id, str) else None
        try:
            return Course(**{"locale": locale, **raw, "toc": toc_entry})
        except ValidationError as e:
            raise CourseValidationError(f"{path}: {e}") from e

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    def get_course(self, course_id: str, locale: Optional[str] = None) -> Optional[Course]:
        """
        Get a course in the requested locale.

        Falls back to the default locale when no translation exists.
        Returns None if the course does not exist at all.

        Raises:
            CourseValidationError: If the course file is malformed
        """
        if not COURSE_ID_PATTERN.match(course_id or ""):
            return None

        candidates = []
        if locale and LOCALE_PATTERN.match(locale):
            candidates.append(locale)
        if self.default_locale not in candidates:
            candidates.append(self.default_locale)

        for candidate in candidates:
            path = self._course_path(course_id, candidate)
            if path.exists():
                course = self._read_course(path, candidate)
                if course.id != course_id:
                    raise CourseValidationError(
                        f"{path}: declares id {course.id!r}, expected {course_id!r}"
                    )
                if candidate != locale:
                    logger.debug(f"Course {course_id}: no {locale!r} translation, using {candidate!r}")
                return course

        return None

    def load_content_shape(self, course_id: str) -> Optional[ContentShape]:
        """Get the authoritative section/step structure of a course."""
        course = self.get_course(course_id, self.default_locale)
        return course.shape() if course else None

    def list_course_ids(self) -> list[str]:
        """List ids of every course with default-locale content."""
        return sorted(
            p.name for p in self.content_dir.iterdir()
            if p.is_dir() and self._course_path(p.name, self.default_locale).exists()
        )
