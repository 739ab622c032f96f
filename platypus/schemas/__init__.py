"""
Platypus Schemas - Pydantic models for the textbook platform.

This module exports all schema classes for:
- Course: courses, sections, content shapes, glossary terms
- TOC: chapter grouping and learning-path metadata
- Progress: stored progress documents and merged progress
- Navigation: section links and navigation context
"""

# Course schemas
from .course import (
    DEFAULT_LOCALE,
    GlossaryTerm,
    Section,
    SectionShape,
    ContentShape,
    Course,
)

# TOC schemas
from .toc import (
    CourseType,
    TocChapter,
    TocCourse,
    TableOfContents,
)

# Progress schemas
from .progress import (
    SectionProgress,
    ProgressDocument,
    RenderableProgress,
)

# Navigation schemas
from .navigation import (
    SectionLink,
    NavigationContext,
)

__all__ = [
    # Course
    'DEFAULT_LOCALE',
    'GlossaryTerm',
    'Section',
    'SectionShape',
    'ContentShape',
    'Course',
    # TOC
    'CourseType',
    'TocChapter',
    'TocCourse',
    'TableOfContents',
    # Progress
    'SectionProgress',
    'ProgressDocument',
    'RenderableProgress',
    # Navigation
    'SectionLink',
    'NavigationContext',
]
