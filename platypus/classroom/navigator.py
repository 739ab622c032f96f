"""
Navigator - Section sequencing and sidebar index for a course.

Provides:
- Course classification (linear course vs learning path)
- Next/previous section navigation
- Sidebar subsection index grouped by TOC chapter
- Navigation context with base-path-aware URLs

Linear courses follow the course's section order. Learning paths follow
the declared successor lists (TOC `paths`, or `next` on each section);
when several successors are declared, the first valid one is used.
Everything here is pure: an unknown section gives None/empty results.
"""

import logging
from enum import Enum
from typing import Optional, Union

import networkx as nx

from platypus.config import DEFAULT_BASE_PATH
from platypus.schemas import (
    Course,
    CourseType,
    NavigationContext,
    Section,
    SectionLink,
)

logger = logging.getLogger(__name__)

SectionRef = Union[Section, str]


class CourseKind(str, Enum):
    LINEAR = "linear"
    LEARNING_PATH = "learning_path"


# -----------------------------------------------------------------------------
# Declared structure
# -----------------------------------------------------------------------------

def declared_successors(course: Course) -> dict[str, list[str]]:
    """
    Successor lists declared for the course, keyed by section id.

    TOC paths take precedence over `next` on the section itself. Sections
    that declare nothing are absent from the result.
    """
    toc_paths = course.toc.paths if course.toc else {}
    declared = {}
    for section in course.sections:
        if section.id in toc_paths:
            declared[section.id] = list(toc_paths[section.id])
        elif section.next is not None:
            declared[section.id] = list(section.next)
    return declared


def classify(course: Course) -> CourseKind:
    """Classify a course as linear or learning path."""
    if course.toc and (course.toc.type == CourseType.LEARNING_PATH or course.toc.paths):
        return CourseKind.LEARNING_PATH
    for successors in declared_successors(course).values():
        if len(successors) != 1:
            return CourseKind.LEARNING_PATH
    return CourseKind.LINEAR


def is_learning_path(course: Course) -> bool:
    return classify(course) == CourseKind.LEARNING_PATH


def build_section_graph(course: Course) -> nx.DiGraph:
    """
    Build the learning-path graph of a course.

    Nodes are section ids (with their position in the course). Successor
    ids that don't name a section of this course are left out.
    """
    graph = nx.DiGraph()
    for idx, section in enumerate(course.sections):
        graph.add_node(section.id, index=idx)

    for source, successors in declared_successors(course).items():
        for target in successors:
            if target not in graph or target == source:
                logger.debug(f"Course {course.id}: ignoring successor {target!r} of {source!r}")
                continue
            graph.add_edge(source, target)
    return graph


def find_broken_links(course: Course) -> list[tuple[str, str]]:
    """
    List (section id, target id) pairs that point at unknown sections.

    Covers declared successors and TOC chapter entries.
    """
    known = {s.id for s in course.sections}
    broken = []
    for source, successors in declared_successors(course).items():
        broken.extend((source, target) for target in successors if target not in known)
    if course.toc:
        for chapter in course.toc.chapters:
            broken.extend((chapter.id, sid) for sid in chapter.sections if sid not in known)
    return broken


# -----------------------------------------------------------------------------
# Navigation
# -----------------------------------------------------------------------------

def _resolve(course: Course, section: SectionRef) -> Optional[Section]:
    section_id = section.id if isinstance(section, Section) else section
    return course.get_section(section_id)


def find_next(course: Course, section: SectionRef) -> Optional[Section]:
    """Get the section that follows `section`, or None."""
    current = _resolve(course, section)
    if current is None:
        return None

    if classify(course) == CourseKind.LINEAR:
        idx = course.section_index(current.id)
        if idx + 1 >= len(course.sections):
            return None
        return course.sections[idx + 1]

    graph = build_section_graph(course)
    next_id = next(iter(graph.successors(current.id)), None)
    return course.get_section(next_id) if next_id else None


def find_prev(course: Course, section: SectionRef) -> Optional[Section]:
    """Get the section that precedes `section`, or None."""
    current = _resolve(course, section)
    if current is None:
        return None

    if classify(course) == CourseKind.LINEAR:
        idx = course.section_index(current.id)
        if idx <= 0:
            return None
        return course.sections[idx - 1]

    graph = build_section_graph(course)
    predecessors = list(graph.predecessors(current.id))
    if not predecessors:
        return None
    prev_id = min(predecessors, key=lambda sid: graph.nodes[sid]["index"])
    return course.get_section(prev_id)


# -----------------------------------------------------------------------------
# Sidebar index
# -----------------------------------------------------------------------------

def section_url(course: Course, section: Section, base_path: str = DEFAULT_BASE_PATH) -> str:
    """URL of a section under a mount point such as /course or /summer-school."""
    return f"{base_path.rstrip('/')}/{course.id}/{section.id}"


def first_section_url(course: Course, base_path: str = DEFAULT_BASE_PATH) -> str:
    """URL to redirect to when no section is given."""
    return section_url(course, course.sections[0], base_path)


def section_link(course: Course, section: Section, base_path: str = DEFAULT_BASE_PATH) -> SectionLink:
    return SectionLink(
        id=section.id,
        title=section.title,
        url=section_url(course, section, base_path),
    )


def chapter_groups(course: Course) -> list[list[str]]:
    """Section ids grouped by TOC chapter; one group if the TOC has none."""
    if course.toc and course.toc.chapters:
        return [list(chapter.sections) for chapter in course.toc.chapters]
    return [[s.id for s in course.sections]]


def subsection_index(
    course: Course,
    section: SectionRef,
    base_path: str = DEFAULT_BASE_PATH,
) -> list[SectionLink]:
    """
    Get the sidebar index for the chapter containing `section`.

    Returns sections in TOC order. Empty if the section is unknown or not
    listed in any chapter.
    """
    current = _resolve(course, section)
    if current is None:
        return []

    for group in chapter_groups(course):
        if current.id in group:
            links = []
            for section_id in group:
                member = course.get_section(section_id)
                if member is not None:
                    links.append(section_link(course, member, base_path))
            return links
    return []


def build_navigation(
    course: Course,
    section: SectionRef,
    base_path: str = DEFAULT_BASE_PATH,
) -> NavigationContext:
    """Combine next/previous section and sidebar index for one page."""
    next_section = find_next(course, section)
    prev_section = find_prev(course, section)

    return NavigationContext(
        next_section=section_link(course, next_section, base_path) if next_section else None,
        prev_section=section_link(course, prev_section, base_path) if prev_section else None,
        subsections=subsection_index(course, section, base_path),
    )
