"""
Glossary aggregation - one term table per course for inline tooltips.

Each section lists the glossary term ids it uses. A term is defined by
the section itself (`definitions`) or by the shared per-locale glossary.
The first definition found in course order wins.
"""

import logging
from typing import Any, Mapping, Optional

from platypus.schemas import Course, GlossaryTerm

logger = logging.getLogger(__name__)


def aggregate(
    course: Course,
    terms: Optional[Mapping[str, GlossaryTerm]] = None,
) -> dict[str, GlossaryTerm]:
    """
    Collect the glossary terms referenced anywhere in a course.

    Args:
        course: Course whose sections reference terms
        terms: Shared glossary for the course locale (term id -> term)

    Returns:
        Term id -> definition, sorted by term id. Terms without any
        definition are left out.
    """
    terms = terms or {}
    glossary: dict[str, GlossaryTerm] = {}

    for section in course.sections:
        for term_id in section.glossary:
            definition = section.definitions.get(term_id) or terms.get(term_id)
            if definition is None:
                logger.debug(f"Course {course.id}: no definition for glossary term {term_id!r}")
                continue
            existing = glossary.get(term_id)
            if existing is None:
                glossary[term_id] = definition
            elif existing != definition:
                logger.debug(
                    f"Course {course.id}: conflicting definitions for {term_id!r}, "
                    f"keeping the first one"
                )

    return {term_id: glossary[term_id] for term_id in sorted(glossary)}


def glossary_payload(glossary: Mapping[str, GlossaryTerm]) -> dict[str, dict[str, Any]]:
    """Plain-dict form of an aggregated glossary for JSON output."""
    return {term_id: term.model_dump() for term_id, term in glossary.items()}
