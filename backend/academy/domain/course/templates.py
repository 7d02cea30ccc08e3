"""Built-in course templates offered by the course builder."""
from __future__ import annotations
from typing import Dict, Optional

from academy.domain.course.models import ContentKind, CourseTemplate, TemplateEntry

V, R, Q = ContentKind.VIDEO, ContentKind.READING, ContentKind.QUIZ

COURSE_TEMPLATES: tuple = (
    CourseTemplate(
        id="basic-video",
        name="Basic Video Course",
        description="Simple course with intro video and quiz",
        icon="📹",
        content=(
            TemplateEntry(V, "Introduction", "Course introduction video"),
            TemplateEntry(R, "Course Materials", "Additional reading materials and resources"),
            TemplateEntry(Q, "Knowledge Check", "Test understanding of key concepts"),
        ),
    ),
    CourseTemplate(
        id="comprehensive",
        name="Comprehensive Course",
        description="Full course with multiple modules",
        icon="📚",
        content=(
            TemplateEntry(V, "Course Overview", "Welcome and course objectives"),
            TemplateEntry(R, "Module 1: Fundamentals", "Core concepts and principles"),
            TemplateEntry(V, "Module 1 Demo", "Practical demonstration"),
            TemplateEntry(Q, "Module 1 Quiz", "Test Module 1 knowledge"),
            TemplateEntry(R, "Module 2: Advanced Topics", "Advanced concepts and techniques"),
            TemplateEntry(V, "Module 2 Demo", "Advanced demonstration"),
            TemplateEntry(Q, "Final Assessment", "Comprehensive final quiz"),
        ),
    ),
    CourseTemplate(
        id="quick-tutorial",
        name="Quick Tutorial",
        description="Short tutorial with practice",
        icon="⚡",
        content=(
            TemplateEntry(V, "Tutorial Video", "Step-by-step tutorial"),
            TemplateEntry(R, "Practice Exercise", "Hands-on practice instructions"),
        ),
    ),
)

_BY_ID: Dict[str, CourseTemplate] = {t.id: t for t in COURSE_TEMPLATES}


def get_template(template_id: str) -> Optional[CourseTemplate]:
    return _BY_ID.get(template_id)
