"""
Navigation schemas for Platypus.

Request-scoped, serializable results of section graph resolution.
"""

from pydantic import BaseModel
from typing import Optional


class SectionLink(BaseModel):
    id: str
    title: str
    url: str


class NavigationContext(BaseModel):
    next_section: Optional[SectionLink] = None
    prev_section: Optional[SectionLink] = None
    subsections: list[SectionLink] = []
