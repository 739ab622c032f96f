"""
Table-of-contents schemas for Platypus.

The TOC (toc.yaml) groups a course's sections into chapters and, for
learning paths, declares which sections may follow which.
"""

from enum import Enum

from pydantic import BaseModel
from typing import Optional


class CourseType(str, Enum):
    COURSE = "course"
    LEARNING_PATH = "learning-path"


class TocChapter(BaseModel):
    """A sidebar group of sections."""
    id: str
    title: str = ""
    sections: list[str] = []  # section ids, in sidebar order


class TocCourse(BaseModel):
    id: str
    title: str = ""
    type: CourseType = CourseType.COURSE
    chapters: list[TocChapter] = []
    paths: dict[str, list[str]] = {}  # section id -> declared successor ids


class TableOfContents(BaseModel):
    courses: list[TocCourse] = []

    def get_course(self, course_id: str) -> Optional[TocCourse]:
        for course in self.courses:
            if course.id == course_id:
                return course
        return None
