"""
Course content schemas for Platypus.

Defines Pydantic models for course content including:
- Sections with ordered steps and glossary references
- Courses (locale-specific, ordered sections)
- Content shapes used for account-wide progress merging
- Glossary term definitions
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional

from .toc import TocCourse

DEFAULT_LOCALE = "en"


# -----------------------------------------------------------------------------
# Glossary
# -----------------------------------------------------------------------------

class GlossaryTerm(BaseModel):
    """A defined term shown as an inline tooltip."""
    title: str
    text: str


# -----------------------------------------------------------------------------
# Sections
# -----------------------------------------------------------------------------

def _ensure_unique(values: list[str], label: str) -> list[str]:
    """Shared uniqueness check for id lists."""
    seen: set[str] = set()
    for value in values:
        if value in seen:
            raise ValueError(f"Duplicate {label} id: {value!r}")
        seen.add(value)
    return values


class Section(BaseModel):
    """A navigable unit of a course containing ordered steps."""
    id: str = Field(..., min_length=1)
    title: str = ""
    url: str = ""
    steps: list[str] = []            # step ids, in reading order
    glossary: list[str] = []         # referenced glossary term ids
    definitions: dict[str, GlossaryTerm] = {}  # section-local term definitions
    next: Optional[list[str]] = None  # declared successors (learning paths only)

    @field_validator('steps')
    @classmethod
    def steps_unique(cls, v):
        return _ensure_unique(v, "step")


class SectionShape(BaseModel):
    """Section id and step ids, without content."""
    id: str
    steps: list[str] = []


class ContentShape(BaseModel):
    """Authoritative section/step structure of a course."""
    course_id: str
    sections: list[SectionShape]

    def get_section(self, section_id: str) -> Optional[SectionShape]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None


# -----------------------------------------------------------------------------
# Course
# -----------------------------------------------------------------------------

class Course(BaseModel):
    """
    A locale-specific course definition.

    Section order is the authoritative reading order. The optional `toc`
    entry carries chapter grouping and branching metadata for learning paths.
    """
    id: str = Field(..., min_length=1)
    locale: str = DEFAULT_LOCALE
    title: str = ""
    sections: list[Section] = Field(..., min_length=1)
    toc: Optional[TocCourse] = None

    @field_validator('locale', mode='before')
    @classmethod
    def default_locale(cls, v):
        return v or DEFAULT_LOCALE

    @field_validator('sections')
    @classmethod
    def section_ids_unique(cls, v):
        _ensure_unique([s.id for s in v], "section")
        return v

    @model_validator(mode='after')
    def toc_matches_course(self):
        if self.toc is not None and self.toc.id != self.id:
            raise ValueError(f"TOC entry {self.toc.id!r} does not belong to course {self.id!r}")
        return self

    def get_section(self, section_id: str) -> Optional[Section]:
        """Get a section by id, or None if the course does not define it."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def section_index(self, section_id: str) -> Optional[int]:
        for idx, section in enumerate(self.sections):
            if section.id == section_id:
                return idx
        return None

    def shape(self) -> ContentShape:
        """Strip the course down to its section/step structure."""
        return ContentShape(
            course_id=self.id,
            sections=[SectionShape(id=s.id, steps=list(s.steps)) for s in self.sections],
        )
