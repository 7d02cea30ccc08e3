"""Badge domain models — pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from academy.domain.course.models import CourseStatus

DEFAULT_ICON = "🏆"

# Gradient tokens the badge card knows how to render
BADGE_COLORS = {
    "blue": "from-blue-500 to-blue-600",
    "emerald": "from-emerald-500 to-emerald-600",
    "purple": "from-purple-500 to-purple-600",
    "orange": "from-orange-500 to-orange-600",
    "red": "from-red-500 to-red-600",
}
DEFAULT_COLOR = BADGE_COLORS["blue"]


@dataclass
class BadgeDraft:
    title: str = ""
    description: str = ""
    icon: str = DEFAULT_ICON
    color: str = DEFAULT_COLOR
    course_ids: List[str] = field(default_factory=list)


@dataclass
class Badge:
    id: str
    key: str
    title: str
    description: str
    icon: str
    color: str
    status: CourseStatus
    created_by: str
    created_at: str
    course_ids: List[str] = field(default_factory=list)
    students_earned: int = 0

    @property
    def is_published(self) -> bool:
        return self.status is CourseStatus.PUBLISHED
