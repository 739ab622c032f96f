"""
Progress merging - combine stored progress with the current course content.

Stored progress is sparse and may be stale: content changes over time
while progress documents keep whatever ids they were written with. The
content definition decides which sections and steps appear in the result:
- declared steps without stored scores appear as None
- stored entries the content no longer declares are dropped

Section progress is a fraction between 0.0 and 1.0. Step scores are
passed through unchanged.
"""

import logging
from typing import Any, Callable, Iterable, Optional

from platypus.schemas import (
    ContentShape,
    Course,
    ProgressDocument,
    RenderableProgress,
    Section,
    SectionProgress,
    SectionShape,
)

logger = logging.getLogger(__name__)

ShapeLoader = Callable[[str], Optional[ContentShape]]


def _merge_steps(stored: Optional[SectionProgress], section: Section | SectionShape) -> RenderableProgress:
    if stored is None:
        return RenderableProgress(
            progress=0.0,
            steps={step_id: None for step_id in section.steps},
        )

    stale = set(stored.steps) - set(section.steps)
    if stale:
        logger.debug(f"Dropping stale steps {sorted(stale)} of section {section.id}")

    return RenderableProgress(
        progress=stored.progress,
        steps={step_id: stored.steps.get(step_id) for step_id in section.steps},
    )


def merge_section(
    document: Optional[ProgressDocument],
    course: Course,
    section: Section | SectionShape,
) -> RenderableProgress:
    """
    Merge stored progress for one section into its full step list.

    Args:
        document: The user's progress document for the course, if any
        course: Course the section belongs to
        section: Section whose declared steps define the result

    Returns:
        RenderableProgress with one entry per declared step
    """
    stored = None
    if document is not None and document.course_id == course.id:
        stored = document.get_section(section.id)
    return _merge_steps(stored, section)


def section_progress_payload(
    course: Course,
    section: Section,
    merged: RenderableProgress,
) -> dict[str, dict[str, Any]]:
    """Nest merged section progress as {course_id: {section_id: progress}}."""
    return {course.id: {section.id: merged.model_dump(mode="json")}}


def merge_account(
    documents: Iterable[ProgressDocument],
    load_shape: ShapeLoader,
) -> dict[str, dict[str, dict[str, Any]]]:
    """
    Merge every progress document of a user for the account dashboard.

    Only sections the stored document mentions are included. Courses whose
    content can no longer be found and sections the content no longer
    defines are skipped.

    Args:
        documents: The user's progress documents
        load_shape: Returns the content shape of a course id, or None

    Returns:
        course id -> section id -> {"progress": float, "steps": {step id: scores}}
    """
    result: dict[str, dict[str, dict[str, Any]]] = {}

    for document in documents:
        shape = load_shape(document.course_id)
        if shape is None:
            logger.warning(f"No content for course {document.course_id}, skipping its progress")
            continue

        sections: dict[str, dict[str, Any]] = {}
        for section_id in document.sections:
            section = shape.get_section(section_id)
            if section is None:
                logger.debug(f"Dropping stale section {document.course_id}/{section_id}")
                continue
            merged = _merge_steps(document.get_section(section_id), section)
            sections[section_id] = merged.model_dump(mode="json")

        result[document.course_id] = sections

    return result
