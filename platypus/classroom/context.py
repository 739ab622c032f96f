"""
Page contexts - Assemble everything a course or account page needs.

Combines ContentStore (content), ProgressStore (user state) and the
read-only Lookups into plain serializable contexts:
- CourseContext: one section of a course with navigation, glossary and
  the viewer's progress
- AccountContext: progress across every course the user has started

A progress store failure degrades to "no progress"; it never blocks the
course page.
"""

import json
import logging
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from platypus.config import DEFAULT_BASE_PATH, DEFAULT_TEXTBOOK_HOME
from platypus.schemas import (
    Course,
    GlossaryTerm,
    NavigationContext,
    ProgressDocument,
    RenderableProgress,
    Section,
)
from platypus.utils import Lookups

from .analytics import AnalyticsTracker
from .glossary import aggregate, glossary_payload
from .loader import ContentStore
from .merger import merge_account, merge_section, section_progress_payload
from .navigator import build_navigation, is_learning_path
from .progress import ProgressStore

logger = logging.getLogger(__name__)


class CourseContext(BaseModel):
    """Everything needed to render one course section."""
    course: Course
    section: Section
    locale: str
    base_path: str
    learning_path: bool
    navigation: NavigationContext
    glossary: dict[str, GlossaryTerm]
    progress: RenderableProgress
    progress_payload: dict[str, Any]
    glossary_payload: dict[str, Any]
    notations: dict[str, Any] = {}
    universal_notations: dict[str, Any] = {}
    translations: dict[str, str] = {}
    site_config: dict[str, Any] = {}
    textbook_home: str = DEFAULT_TEXTBOOK_HOME


class AccountContext(BaseModel):
    """Account dashboard data."""
    user_id: str
    locale: str
    progress: dict[str, dict[str, dict[str, Any]]]
    translations: dict[str, str] = {}
    site_config: dict[str, Any] = {}


def _safe_lookup(progress_store: ProgressStore, user_id: str, course_id: str) -> Optional[ProgressDocument]:
    try:
        return progress_store.lookup_progress(user_id, course_id)
    except (sqlite3.Error, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Progress lookup failed for {user_id}/{course_id}: {e}")
        return None


def build_course_context(
    content: ContentStore,
    progress_store: ProgressStore,
    lookups: Lookups,
    course_id: str,
    section_id: str,
    locale: Optional[str] = None,
    user_id: Optional[str] = None,
    base_path: str = DEFAULT_BASE_PATH,
    analytics: Optional[AnalyticsTracker] = None,
) -> Optional[CourseContext]:
    """
    Build the context for a course section page.

    Course content and the viewer's progress are fetched concurrently.

    Args:
        content: Content store
        progress_store: Progress store
        lookups: Read-only lookup tables
        course_id: Requested course
        section_id: Requested section
        locale: Requested locale (falls back to the default locale)
        user_id: Viewer, or None for anonymous visitors
        base_path: Mount point for section URLs (/course, /summer-school)
        analytics: Optional tracker notified of the view

    Returns:
        CourseContext, or None if the course or section doesn't exist
    """
    with ThreadPoolExecutor(max_workers=2) as pool:
        course_future = pool.submit(content.get_course, course_id, locale)
        progress_future = (
            pool.submit(_safe_lookup, progress_store, user_id, course_id)
            if user_id else None
        )
        course = course_future.result()
        document = progress_future.result() if progress_future else None

    if course is None:
        return None
    section = course.get_section(section_id)
    if section is None:
        return None

    lang = course.locale
    glossary = aggregate(course, lookups.glossary_for(lang))
    progress = merge_section(document, course, section)

    if user_id and analytics is not None:
        analytics.track(user_id, course.id)

    return CourseContext(
        course=course,
        section=section,
        locale=lang,
        base_path=base_path,
        learning_path=is_learning_path(course),
        navigation=build_navigation(course, section, base_path),
        glossary=glossary,
        progress=progress,
        progress_payload=section_progress_payload(course, section, progress),
        glossary_payload=glossary_payload(glossary),
        notations=lookups.notations_for(lang),
        universal_notations=lookups.universal_notations_for(lang),
        translations=lookups.translations_for(lang),
        site_config=lookups.site_config,
        textbook_home=lookups.site_config.get("textbook_home", DEFAULT_TEXTBOOK_HOME),
    )


def build_account_context(
    content: ContentStore,
    progress_store: ProgressStore,
    lookups: Lookups,
    user_id: str,
    locale: Optional[str] = None,
) -> AccountContext:
    """Build the account dashboard context with progress in every course."""
    lang = locale or content.default_locale
    documents = progress_store.find_all_progress(user_id)

    return AccountContext(
        user_id=user_id,
        locale=lang,
        progress=merge_account(documents, content.load_content_shape),
        translations=lookups.translations_for(lang),
        site_config=lookups.site_config,
    )
