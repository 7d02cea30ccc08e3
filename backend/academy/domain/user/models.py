"""User domain models — pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from academy.domain.access.policy import Role


@dataclass
class User:
    id: str
    email: str
    display_name: str
    role: Role
    created_at: str
    password_hash: str = ""


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller, resolved by the auth layer and handed to the dashboard."""
    id: str
    email: str
    role: Role
    display_name: str = ""


@dataclass
class UserProgress:
    id: str
    user_id: str
    course_id: str
    completed_lesson_ids: List[str] = field(default_factory=list)
    is_course_completed: bool = False
    last_updated: str = ""


@dataclass
class UserBadge:
    id: str
    user_id: str
    badge_id: str
    awarded_at: str


@dataclass
class ProgressSummary:
    courses_completed: int = 0
    courses_in_progress: int = 0
    badges_earned: int = 0
    total_progress: int = 0  # percent
