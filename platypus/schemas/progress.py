"""
Progress schemas for Platypus.

Defines Pydantic models for learner progress including:
- Stored per-course progress documents (sparse)
- Render-ready merged progress
"""

from pydantic import BaseModel, Field
from typing import Any, Optional


class SectionProgress(BaseModel):
    """Stored progress for one section. Step scores are opaque."""
    progress: float = Field(default=0.0, ge=0.0, le=1.0)  # fraction completed
    steps: dict[str, Any] = {}  # step id -> scores


class ProgressDocument(BaseModel):
    """
    One user's progress in one course.

    Sparse: a section or step missing here has not been attempted yet.
    """
    user_id: str
    course_id: str
    sections: dict[str, SectionProgress] = {}

    def get_section(self, section_id: str) -> Optional[SectionProgress]:
        return self.sections.get(section_id)


class RenderableProgress(BaseModel):
    """Full-shape section progress: every declared step has an entry."""
    progress: float = 0.0
    steps: dict[str, Optional[Any]] = {}  # None means not attempted
