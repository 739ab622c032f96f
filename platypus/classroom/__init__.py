"""
Platypus Classroom - Runtime components for serving textbook courses.

This module provides:
- ContentStore: Load course content per locale
- ProgressStore: Persist learner progress
- Navigator functions: Section sequencing and sidebar index
- Glossary aggregation and progress merging
- Page contexts for course and account pages
"""

from .loader import (
    ContentStore,
    ContentError,
    CourseValidationError,
)

from .progress import ProgressStore

from .navigator import (
    CourseKind,
    classify,
    is_learning_path,
    find_next,
    find_prev,
    subsection_index,
    build_navigation,
    build_section_graph,
    find_broken_links,
    section_url,
    first_section_url,
)

from .glossary import aggregate, glossary_payload

from .merger import merge_section, merge_account, section_progress_payload

from .analytics import AnalyticsTracker

from .context import (
    CourseContext,
    AccountContext,
    build_course_context,
    build_account_context,
)

__all__ = [
    # Loader
    "ContentStore",
    "ContentError",
    "CourseValidationError",
    # Progress
    "ProgressStore",
    # Navigator
    "CourseKind",
    "classify",
    "is_learning_path",
    "find_next",
    "find_prev",
    "subsection_index",
    "build_navigation",
    "build_section_graph",
    "find_broken_links",
    "section_url",
    "first_section_url",
    # Glossary
    "aggregate",
    "glossary_payload",
    # Merger
    "merge_section",
    "merge_account",
    "section_progress_payload",
    # Analytics
    "AnalyticsTracker",
    # Contexts
    "CourseContext",
    "AccountContext",
    "build_course_context",
    "build_account_context",
]
